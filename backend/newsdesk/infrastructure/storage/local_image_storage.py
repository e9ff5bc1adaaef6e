"""Local filesystem storage for uploaded article images.

Storage layout:
    <upload_dir>/images/<stem>_<YYYYMMDD_HHmmss>_<token>.<ext>

Stored images are served from ``/uploads/images/...``.
"""

import logging
import mimetypes
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from newsdesk.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif", ".webp"})
ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
PUBLIC_PREFIX = "/uploads"


@dataclass
class StoredImage:
    """Result of storing a single image on disk."""

    stored_path: str
    filename: str
    url: str
    file_size: int
    mime_type: str


def _datetime_stamp() -> str:
    """Return a UTC datetime stamp suitable for filenames: YYYYMMDD_HHmmss."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "image"


class LocalImageStorage:
    """Infrastructure adapter for local image storage."""

    def __init__(self, upload_dir: str, max_size_mb: int = 5):
        self._upload_dir = Path(upload_dir)
        self._max_bytes = max_size_mb * 1024 * 1024
        self._upload_dir.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._upload_dir

    def validate(self, filename: str, content_type: str | None, size: int) -> str:
        """Check extension, MIME type and size; return the MIME type to record."""
        suffix = Path(filename).suffix.lower()
        mime_type = content_type or mimetypes.guess_type(filename)[0] or ""
        if suffix not in ALLOWED_EXTENSIONS or mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError("Only image files are allowed")
        if size > self._max_bytes:
            raise ValidationError(
                f"Image exceeds the {self._max_bytes // (1024 * 1024)} MB limit"
            )
        return mime_type

    async def store_image(
        self, content: bytes, filename: str, content_type: str | None = None
    ) -> StoredImage:
        """Validate and store an image in ``<upload_dir>/images/``.

        The filename is augmented with a UTC datetime stamp and a random token
        so uploads never overwrite each other: ``<stem>_<YYYYMMDD_HHmmss>_<token>.<ext>``.
        """
        mime_type = self.validate(filename, content_type, len(content))

        images_dir = self._upload_dir / "images"
        images_dir.mkdir(parents=True, exist_ok=True)

        stem = Path(filename).stem
        suffix = Path(filename).suffix.lower()
        stamped_name = f"{_sanitise(stem)}_{_datetime_stamp()}_{uuid4().hex[:8]}{suffix}"

        dest_path = images_dir / stamped_name
        dest_path.write_bytes(content)

        logger.info("Stored image: %s (%d bytes)", dest_path, len(content))

        return StoredImage(
            stored_path=str(dest_path),
            filename=stamped_name,
            url=f"{PUBLIC_PREFIX}/images/{stamped_name}",
            file_size=len(content),
            mime_type=mime_type,
        )
