"""
Durable key-value storage for session state.

Values are opaque strings; callers serialize to JSON themselves and always
write the whole document. A write replaces the previous value atomically
(temp file + rename), so a store is never observed half-written.
"""

import os
import logging
import tempfile
from pathlib import Path
from typing import Optional

from ..errors import StorageCorruptedError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface for string key-value persistence"""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """In-process storage, lost when the process exits"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """
    One JSON file per key inside a directory.

    Survives process restarts. Concurrent writers to the same directory are
    not coordinated: the last rename wins.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        safe_key = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return self.directory / f"{safe_key}.json"

    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under ``key``.

        Raises:
            StorageCorruptedError: if the file is not valid UTF-8
        """
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StorageCorruptedError(key, f"not valid UTF-8 ({e.reason})") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{path.stem}-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug(f"Wrote {len(value)} bytes to {path}")

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
