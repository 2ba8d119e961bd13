# ABOUTME: Durable backends for the cache manager, one serialized document per cache key
# ABOUTME: JSON files on disk for the server, an in-memory dict for tests

import os
from pathlib import Path
from typing import Protocol

from crewbase.utils.logging import get_logger


class CacheStorage(Protocol):
    """Whole-document storage addressed by file name."""

    def read(self, name: str) -> str | None:
        """Return the stored document, or None when nothing is stored under ``name``."""
        ...

    def write(self, name: str, payload: str) -> None:
        """Replace the document stored under ``name``."""
        ...

    def delete(self, name: str) -> None:
        """Remove the document stored under ``name``; missing documents are ignored."""
        ...


class JsonFileStorage:
    """Stores each cache key as a pretty-printed JSON file inside ``directory``."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)
        self.logger = get_logger(__name__)

    def _path(self, name: str) -> Path:
        return self.directory / name

    def read(self, name: str) -> str | None:
        path = self._path(name)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, name: str, payload: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(name)
        tmp_path = path.with_name(f".{path.name}.tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, path)
        self.logger.debug("Wrote cache file", path=str(path), size=len(payload))

    def delete(self, name: str) -> None:
        path = self._path(name)
        path.unlink(missing_ok=True)
        self.logger.debug("Deleted cache file", path=str(path))


class MemoryStorage:
    """Dict-backed storage with the same contract as JsonFileStorage."""

    def __init__(self, documents: dict[str, str] | None = None):
        self.documents: dict[str, str] = dict(documents or {})

    def read(self, name: str) -> str | None:
        return self.documents.get(name)

    def write(self, name: str, payload: str) -> None:
        self.documents[name] = payload

    def delete(self, name: str) -> None:
        self.documents.pop(name, None)
