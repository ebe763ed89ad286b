"""
Data models for imgdupe.

Contains dataclasses for file identities, cache entries, similar pairs and
scan bookkeeping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TYPE_CHECKING
import os

import imagehash

from .errors import DecodeError

if TYPE_CHECKING:
    from .hashdb.store import HashStore


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


@dataclass(frozen=True)
class FileIdentity:
    """
    Identifies one image file under a scanned root.

    Attributes:
        path: POSIX-style path relative to the scanned root
        mtime_ns: Last modification time in nanoseconds (from os.stat)
        size: File size in bytes
    """
    path: str
    mtime_ns: int
    size: int

    @classmethod
    def from_stat(cls, path: str, stat: os.stat_result) -> 'FileIdentity':
        """Build an identity from a relative path and its stat result."""
        return cls(path=path, mtime_ns=stat.st_mtime_ns, size=stat.st_size)

    @property
    def signature(self) -> tuple[int, int]:
        """Modification signature used to detect changed files."""
        return self.mtime_ns, self.size

    @property
    def filename(self) -> str:
        """Return just the filename portion of the path."""
        return os.path.basename(self.path)

    def resolve(self, root: str | Path) -> Path:
        """Return the real filesystem path under ``root``."""
        return Path(root) / self.path


def _require_int(data: dict, key: str) -> int:
    """Return data[key] if it is an integer; floats and strings are rejected."""
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class CacheEntry:
    """A file identity paired with its perceptual hash."""
    identity: FileIdentity
    hash: imagehash.ImageHash

    @property
    def path(self) -> str:
        return self.identity.path

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (path is the outer key)."""
        return {
            'hash': str(self.hash),
            'mtime_ns': self.identity.mtime_ns,
            'size': self.identity.size,
        }

    @classmethod
    def from_dict(cls, path: str, data: dict) -> 'CacheEntry':
        """Create CacheEntry from a serialized dictionary."""
        identity = FileIdentity(
            path=path,
            mtime_ns=_require_int(data, 'mtime_ns'),
            size=_require_int(data, 'size'),
        )
        return cls(identity=identity, hash=imagehash.hex_to_hash(data['hash']))


@dataclass(frozen=True)
class SimilarPair:
    """
    An unordered pair of similar images.

    The two paths are stored in sorted order, so SimilarPair('b', 'a', d)
    equals SimilarPair('a', 'b', d).

    Attributes:
        first: Lexicographically smaller relative path
        second: Lexicographically larger relative path
        distance: Hamming distance between the two hashes
    """
    first: str
    second: str
    distance: int

    def __post_init__(self):
        if self.first == self.second:
            raise ValueError(f"A pair needs two distinct files, got {self.first!r} twice")
        if self.distance < 0:
            raise ValueError(f"Distance must be non-negative, got {self.distance}")
        if self.second < self.first:
            first, second = self.second, self.first
            object.__setattr__(self, 'first', first)
            object.__setattr__(self, 'second', second)

    @property
    def sort_key(self) -> tuple[int, str, str]:
        return self.distance, self.first, self.second

    def resolve(self, root: str | Path) -> tuple[Path, Path]:
        """Return both real filesystem paths under ``root``."""
        root = Path(root)
        return root / self.first, root / self.second

    def to_dict(self) -> dict:
        return {
            'first': self.first,
            'second': self.second,
            'distance': self.distance,
        }


@dataclass(frozen=True)
class HashOutcome:
    """Result of hashing one file on a worker thread."""
    identity: FileIdentity
    hash: Optional[imagehash.ImageHash] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.hash is not None


@dataclass
class ScanStats:
    """Statistics about cache usage during a scan."""
    total_files: int = 0
    reused: int = 0
    vanished: int = 0
    stale: int = 0
    hashed: int = 0
    failed: int = 0

    @property
    def hit_rate(self) -> float:
        """Return cache hit rate as percentage."""
        if self.total_files == 0:
            return 0.0
        return (self.reused / self.total_files) * 100


@dataclass
class ScanResult:
    """
    Everything a scan produced.

    Attributes:
        root: Resolved scan root
        store: The reconciled HashStore (read-only from here on)
        stats: Counters for this run
        failures: Files skipped because they could not be decoded
        cache_path: Where the store was written, None if it was not
    """
    root: Path
    store: HashStore
    stats: ScanStats = field(default_factory=ScanStats)
    failures: list[DecodeError] = field(default_factory=list)
    cache_path: Optional[Path] = None


__all__ = [
    'format_size',
    'FileIdentity',
    'CacheEntry',
    'SimilarPair',
    'HashOutcome',
    'ScanStats',
    'ScanResult',
]
