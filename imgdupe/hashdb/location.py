"""
Where the hash cache for a scan root lives.

HashStore never decides this itself; callers pick a CacheLocation and ask it
for the cache path of a given root.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from ..config import DEFAULT_CACHE_FILENAME


class CacheLocation:
    """Maps a scan root to the path of its cache file."""

    def path_for(self, root: str | Path) -> Path:
        raise NotImplementedError


class InDirectoryLocation(CacheLocation):
    """Keep the cache file inside the scanned directory (the default)."""

    def __init__(self, filename: str = DEFAULT_CACHE_FILENAME):
        self.filename = filename

    def path_for(self, root: str | Path) -> Path:
        return Path(root) / self.filename

    def __repr__(self) -> str:
        return f"InDirectoryLocation({self.filename!r})"


class CacheDirectoryLocation(CacheLocation):
    """
    Keep one cache file per scan root in a dedicated directory.

    The file name is derived from the resolved root path, so the same root
    always maps to the same file.
    """

    def __init__(self, cache_dir: str | Path):
        self.cache_dir = Path(cache_dir).expanduser()

    def path_for(self, root: str | Path) -> Path:
        key = hashlib.sha1(str(Path(root).resolve()).encode('utf-8')).hexdigest()[:16]
        return self.cache_dir / f"{key}.db"

    def __repr__(self) -> str:
        return f"CacheDirectoryLocation({str(self.cache_dir)!r})"


class FixedLocation(CacheLocation):
    """Use one explicit cache file regardless of the root."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def path_for(self, root: str | Path) -> Path:
        return self.path

    def __repr__(self) -> str:
        return f"FixedLocation({str(self.path)!r})"


__all__ = [
    'CacheLocation',
    'InDirectoryLocation',
    'CacheDirectoryLocation',
    'FixedLocation',
]
