"""Media upload handling."""

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

_logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class MediaStorage(Protocol):
    """Object storage for uploaded files."""

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store bytes at `path` and return their public URL."""


@dataclass
class MediaService:
    """Stores uploads under timestamped, sanitized names."""

    storage: MediaStorage
    max_bytes: int = 10 * 1024 * 1024

    def upload(
        self, filename: str, content: bytes, content_type: str
    ) -> dict[str, object]:
        if not content:
            raise ValueError("Upload body is empty")
        if len(content) > self.max_bytes:
            raise ValueError(f"Upload exceeds {self.max_bytes} bytes")
        safe_name = _UNSAFE_FILENAME_CHARS.sub("_", filename) or "upload"
        stamp = datetime.now(tz=UTC).strftime("%Y%m%d%H%M%S%f")
        path = f"{stamp}-{safe_name}"
        url = self.storage.upload(path, content, content_type)
        _logger.info("Uploaded media %s (%s bytes)", path, len(content))
        return {
            "filename": path,
            "originalName": filename,
            "mimeType": content_type,
            "size": len(content),
            "url": url,
        }
