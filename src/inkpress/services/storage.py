"""Public media storage for avatars and featured images."""
from __future__ import annotations

import logging
import uuid
from functools import lru_cache
from pathlib import Path

from inkpress.core.settings import settings
from inkpress.services.errors import StorageError

logger = logging.getLogger(__name__)

MEDIA_KINDS = frozenset({"avatar", "featured"})
ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg"})


class MediaStorage:
    """Stores uploaded blobs on disk under a publicly served directory.

    Files land in ``<root>/<kind>/<uuid><ext>`` and are reachable at
    ``<base_url>/<kind>/<uuid><ext>``.
    """

    def __init__(self, root: str | Path, base_url: str, max_bytes: int) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes

    def save(self, kind: str, filename: str | None, data: bytes) -> str:
        """Store ``data`` and return its public URL.

        Args:
            kind: Bucket the file belongs to (``avatar`` or ``featured``).
            filename: Original client filename, used only for its extension.
            data: File contents.

        Returns:
            Public URL of the stored file.

        Raises:
            StorageError: On unknown kind, non-image extension, empty or
                oversized payload.
        """
        if kind not in MEDIA_KINDS:
            raise StorageError(f"Unknown media kind: {kind}")

        ext = Path(filename or "").suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise StorageError(f"Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}")
        if not data:
            raise StorageError("File is empty")
        if len(data) > self.max_bytes:
            raise StorageError(f"File too large (max {self.max_bytes // (1024 * 1024)} MB)")

        name = f"{uuid.uuid4().hex}{ext}"
        target_dir = self.root / kind
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / name).write_bytes(data)

        logger.info("Stored %s upload %s (%d bytes)", kind, name, len(data))
        return f"{self.base_url}/{kind}/{name}"


@lru_cache(maxsize=1)
def get_storage() -> MediaStorage:
    """Return the storage configured from settings."""
    return MediaStorage(settings.media_root, settings.media_url, settings.max_upload_bytes)
