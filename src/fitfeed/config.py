"""
Configuration constants for fitfeed.
Centralized settings for pagination, uploads, sessions and data paths.
"""

import os
from pathlib import Path

# =============================================================================
# FEED
# =============================================================================

# Workouts per feed page (a page covers cursor .. cursor + PAGE_SIZE - 1)
PAGE_SIZE = 25

# Workouts shown in the "recent" list on a profile page
RECENT_WORKOUTS_LIMIT = 5

# =============================================================================
# WORKOUTS
# =============================================================================

DEFAULT_DURATION_MINUTES = 30
MIN_DURATION_MINUTES = 1
MAX_DURATION_MINUTES = 999

MAX_TITLE_LENGTH = 120
MAX_COMMENT_LENGTH = 500
MAX_BIO_LENGTH = 280

# =============================================================================
# UPLOADS
# =============================================================================

MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024
ALLOWED_CONTENT_PREFIX = "image/"

AVATARS_BUCKET = "avatars"
IMAGES_BUCKET = "images"
BUCKETS = (AVATARS_BUCKET, IMAGES_BUCKET)

# =============================================================================
# AUTH
# =============================================================================

SESSION_COOKIE = "fitfeed_session"
SESSION_TTL_DAYS = 7
MIN_PASSWORD_LENGTH = 6
PASSWORD_HASH_ITERATIONS = 240_000

# =============================================================================
# PATHS
# =============================================================================

# Default data directory (repo_root/data); FITFEED_DATA_DIR overrides it
DATA_DIR = Path(__file__).parent.parent.parent / "data"
DATA_DIR_ENV = "FITFEED_DATA_DIR"


def get_data_dir(data_dir: Path | None = None) -> Path:
    """Resolve and create the data directory."""
    if data_dir is None:
        env_dir = os.environ.get(DATA_DIR_ENV)
        data_dir = Path(env_dir) if env_dir else DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_storage_dir(data_dir: Path | None = None) -> Path:
    """Get the root directory for file storage buckets."""
    return get_data_dir(data_dir) / "storage"
