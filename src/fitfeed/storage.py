"""Local file storage for uploaded avatars and workout images."""

import logging
from pathlib import Path, PurePosixPath

from .config import ALLOWED_CONTENT_PREFIX, BUCKETS, MAX_ATTACHMENT_BYTES, get_storage_dir
from .errors import ConflictError, NotFoundError, ValidationError
from .models.workout import Attachment

logger = logging.getLogger(__name__)


def validate_image(upload: Attachment) -> None:
    """Reject uploads that are empty, too large, or not images."""
    if upload.size == 0:
        raise ValidationError("Please select an image file")
    if upload.size > MAX_ATTACHMENT_BYTES:
        limit_mb = MAX_ATTACHMENT_BYTES // (1024 * 1024)
        raise ValidationError(f"File too large. Please select an image under {limit_mb}MB")
    if not (upload.content_type or "").startswith(ALLOWED_CONTENT_PREFIX):
        raise ValidationError("Invalid file type. Please select an image file")


class LocalStorage:
    """Bucketed file store rooted at a directory.

    Stored paths are bucket-relative POSIX paths such as ``"<workout id>"``;
    callers keep those in the database and turn them into URLs with
    ``public_url``.
    """

    def __init__(self, root: Path | None = None):
        self.root = root or get_storage_dir()
        for bucket in BUCKETS:
            (self.root / bucket).mkdir(parents=True, exist_ok=True)

    def _resolve(self, bucket: str, path: str) -> Path:
        if bucket not in BUCKETS:
            raise NotFoundError(f"Unknown bucket '{bucket}'")
        relative = PurePosixPath(path)
        if not relative.parts or relative.is_absolute() or ".." in relative.parts:
            raise ValidationError(f"Invalid storage path '{path}'")
        return self.root / bucket / Path(*relative.parts)

    def upload(self, bucket: str, path: str, content: bytes, upsert: bool = False) -> str:
        """Write a file into a bucket.

        Args:
            bucket: Bucket name ("avatars" or "images")
            path: Bucket-relative path
            content: File bytes
            upsert: Overwrite an existing file instead of failing

        Returns:
            The stored path
        """
        target = self._resolve(bucket, path)
        if target.exists() and not upsert:
            raise ConflictError(f"'{path}' already exists in {bucket}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.info("Stored %d bytes at %s/%s", len(content), bucket, path)
        return path

    def read(self, bucket: str, path: str) -> bytes:
        """Read a stored file."""
        return self.file_path(bucket, path).read_bytes()

    def file_path(self, bucket: str, path: str) -> Path:
        """Filesystem location of a stored file."""
        target = self._resolve(bucket, path)
        if not target.is_file():
            raise NotFoundError(f"'{path}' not found in {bucket}")
        return target

    def exists(self, bucket: str, path: str) -> bool:
        return self._resolve(bucket, path).is_file()

    def remove(self, bucket: str, path: str) -> bool:
        """Delete a stored file; returns False if it was not there."""
        target = self._resolve(bucket, path)
        if not target.is_file():
            return False
        target.unlink()
        logger.info("Removed %s/%s", bucket, path)
        return True

    @staticmethod
    def public_url(bucket: str, path: str | None) -> str | None:
        """URL the web app serves a stored file from."""
        if not path:
            return None
        return f"/media/{bucket}/{path}"
