"""
Module: assets.persistence

Purpose:
    Key-value backends an AssetStore snapshot can be written to.
    The store only needs get/set/delete of a serialized string; the
    durability of the medium is the backend's business.

Key Classes:
    - KeyValueBackend: Protocol implemented by every backend
    - MemoryBackend: Dict-backed backend (tests, ephemeral sessions)
    - JsonFileBackend: One file per key, guarded by portalocker

Key Functions:
    - locked_file(): Context manager for locked file access

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - assets.store.AssetStore: save() / load()
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator, Optional, Protocol, runtime_checkable

import portalocker

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@runtime_checkable
class KeyValueBackend(Protocol):
    """Minimal persistence medium for serialized snapshots."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if absent."""

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    def delete(self, key: str) -> None:
        """Remove a value; absent keys are ignored."""


class MemoryBackend:
    """In-process backend; values live as long as the instance."""

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._values


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'r',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator:
    """
    Context manager for cross-platform locked file access.

    Args:
        path: Path to file.
        mode: File open mode ('r', 'w', 'a', etc.).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.

    Example:
        >>> with locked_file(path, 'w') as f:
        ...     f.write('data')
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


class JsonFileBackend:
    """
    Stores each key as ``<directory>/<key>.json``.

    Reads take a shared lock and writes an exclusive one, so two
    processes sharing a directory never observe a half-written snapshot.

    Example:
        >>> backend = JsonFileBackend(Path("~/.card_press").expanduser())
        >>> backend.set("card-press-images", "{}")
        >>> backend.get("card-press-images")
        '{}'
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        safe_key = _UNSAFE_KEY_CHARS.sub("_", key) or "_"
        return self.directory / f"{safe_key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        with locked_file(path, 'r', portalocker.LOCK_SH) as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        # 'a' then truncate under the lock; 'w' would truncate before locking
        with locked_file(path, 'a', portalocker.LOCK_EX) as f:
            f.seek(0)
            f.truncate()
            f.write(value)
        logger.debug(f"Wrote {len(value)} chars to {path.name}")

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
