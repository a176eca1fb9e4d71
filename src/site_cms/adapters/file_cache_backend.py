"""Filesystem-backed cache storage."""

import logging
from dataclasses import dataclass
from pathlib import Path

from site_cms.services.cache import CacheBackend

_logger = logging.getLogger(__name__)

_SUFFIX = ".json"


@dataclass
class FileCacheBackend(CacheBackend):
    """Stores one JSON file per cache key inside `directory`."""

    directory: Path

    def __post_init__(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError:
            _logger.warning("Unable to create cache directory %s", self.directory)

    def read(self, name: str) -> str | None:
        """Return the file contents, or None if the file does not exist."""
        try:
            return self._path(name).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, name: str, payload: str) -> None:
        """Write the record, creating the directory if it was removed."""
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(name).write_text(payload, encoding="utf-8")

    def remove(self, name: str) -> None:
        self._path(name).unlink(missing_ok=True)

    def names(self) -> list[str]:
        if not self.directory.exists():
            return []
        return sorted(
            path.name[: -len(_SUFFIX)]
            for path in self.directory.iterdir()
            if path.is_file() and path.name.endswith(_SUFFIX)
        )

    def size(self, name: str) -> int:
        return self._path(name).stat().st_size

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}{_SUFFIX}"
