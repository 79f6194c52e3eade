"""Exercise library definitions."""

from dataclasses import dataclass, field
from enum import Enum


class ExerciseCategory(str, Enum):
    """Broad exercise categories shown in the library."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    CORE = "core"
    MOBILITY = "mobility"
    PLYOMETRIC = "plyometric"


class MuscleGroup(str, Enum):
    """Major muscle groups."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    ABS = "abs"
    OBLIQUES = "obliques"
    LOWER_BACK = "lower_back"
    TRAPS = "traps"
    LATS = "lats"
    FULL_BODY = "full_body"


class EquipmentType(str, Enum):
    """Equipment types for exercises."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    KETTLEBELL = "kettlebell"
    CABLE = "cable"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    BANDS = "bands"
    PULL_UP_BAR = "pull_up_bar"
    BENCH = "bench"
    ROWER = "rower"
    BIKE = "bike"
    JUMP_ROPE = "jump_rope"


@dataclass
class Exercise:
    """An entry in the exercise library."""

    name: str
    category: ExerciseCategory
    muscle_group: MuscleGroup
    equipment: list[EquipmentType] = field(default_factory=list)
    secondary_muscle: MuscleGroup | None = None
    description: str = ""
    image_url: str | None = None
    aliases: list[str] = field(default_factory=list)
    id: int | None = None

    @property
    def equipment_display(self) -> str:
        """Equipment list for display, or "No equipment"."""
        if not self.equipment:
            return "No equipment"
        return ", ".join(eq.value.replace("_", " ") for eq in self.equipment)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "muscle_group": self.muscle_group.value,
            "secondary_muscle": self.secondary_muscle.value if self.secondary_muscle else None,
            "equipment": [eq.value for eq in self.equipment],
            "description": self.description,
            "image_url": self.image_url,
            "aliases": self.aliases,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Exercise":
        """Create from dictionary."""
        secondary = data.get("secondary_muscle")
        return cls(
            id=id if id is not None else data.get("id"),
            name=data["name"],
            category=ExerciseCategory(data.get("category", "strength")),
            muscle_group=MuscleGroup(data["muscle_group"]),
            secondary_muscle=MuscleGroup(secondary) if secondary else None,
            equipment=[EquipmentType(eq) for eq in data.get("equipment", [])],
            description=data.get("description", ""),
            image_url=data.get("image_url"),
            aliases=data.get("aliases", []),
        )
