"""fitfeed: a social feed for sharing workouts."""

__version__ = "0.1.0"
