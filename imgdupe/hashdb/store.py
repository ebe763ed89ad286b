"""
In-memory hash store backed by a persisted cache file.

HashStore maps a file's relative path to its CacheEntry. A path appears at
most once. The store is loaded at the start of a run, reconciled against the
files on disk, filled with new hashes, saved once and then only read.

The store holds no lock: all mutation happens on the thread that owns it
(the scanner collects worker results and inserts them one at a time).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional

import imagehash

from ..errors import CacheLoadError
from ..models import CacheEntry, FileIdentity
from .codec import decode_entries, encode_entries
from .writer import atomic_write

logger = logging.getLogger(__name__)


@dataclass
class ReconcileReport:
    """What the last reconciliation changed."""
    vanished: list[str] = field(default_factory=list)
    stale: list[str] = field(default_factory=list)
    pending: set[FileIdentity] = field(default_factory=set)


class HashStore:
    """
    Mapping of relative path -> CacheEntry.

    Usage:
        store = HashStore.load(cache_path)
        pending = store.reconcile(find_image_files(root))
        for identity in pending:
            store.insert(identity, hash_image_file(identity.resolve(root)))
        store.save(cache_path)
    """

    def __init__(self, entries: Optional[Iterable[CacheEntry]] = None):
        self._entries: dict[str, CacheEntry] = {}
        self.last_reconcile: Optional[ReconcileReport] = None
        for entry in entries or ():
            self._entries[entry.path] = entry

    # Persistence

    @classmethod
    def load(cls, source: str | Path) -> 'HashStore':
        """
        Load a store from a cache file.

        A missing file yields an empty store. An unreadable or malformed
        file is logged and also yields an empty store, since every hash can
        be recomputed.
        """
        source = Path(source)
        try:
            payload = source.read_bytes()
        except FileNotFoundError:
            logger.info(f"No hash cache at {source}, creating new database")
            return cls()
        except OSError as e:
            logger.warning(str(CacheLoadError(source, str(e))))
            return cls()

        try:
            entries = decode_entries(payload, source)
        except CacheLoadError as e:
            logger.warning(f"{e} - starting with an empty cache")
            return cls()

        logger.info(f"Read {len(entries):,} cached hashes from {source}")
        return cls(entries)

    def to_bytes(self) -> bytes:
        """Serialize the store to the cache file payload."""
        return encode_entries(self.entries())

    @classmethod
    def from_bytes(cls, payload: bytes) -> 'HashStore':
        """
        Build a store from a cache payload.

        Raises:
            CacheLoadError: If the payload cannot be decoded
        """
        return cls(decode_entries(payload))

    def save(self, destination: str | Path) -> None:
        """
        Write the store to ``destination`` atomically.

        Raises:
            CacheWriteError: If the file could not be written
        """
        atomic_write(destination, self.to_bytes())

    # Mutation

    def reconcile(self, identities_on_disk: Iterable[FileIdentity]) -> set[FileIdentity]:
        """
        Bring the store in line with the files currently on disk.

        Removes entries whose file is gone or whose modification signature
        changed, and returns the identities that still need hashing (new
        files and changed files).

        Args:
            identities_on_disk: Every image file found under the root

        Returns:
            Set of FileIdentity objects to hash
        """
        on_disk = {identity.path: identity for identity in identities_on_disk}
        report = ReconcileReport()

        for path in sorted(self._entries):
            current = on_disk.get(path)
            if current is None:
                report.vanished.append(path)
                del self._entries[path]
            elif current.signature != self._entries[path].identity.signature:
                report.stale.append(path)
                del self._entries[path]

        report.pending = {
            identity for path, identity in on_disk.items()
            if path not in self._entries
        }

        if report.vanished:
            logger.debug(f"Evicted {len(report.vanished):,} entries for missing files")
        if report.stale:
            logger.debug(f"Evicted {len(report.stale):,} entries for modified files")

        self.last_reconcile = report
        return set(report.pending)

    def insert(self, identity: FileIdentity, image_hash: imagehash.ImageHash) -> None:
        """Add or overwrite the entry for ``identity.path``."""
        self._entries[identity.path] = CacheEntry(identity=identity, hash=image_hash)

    def remove(self, path: str) -> bool:
        """Remove the entry for ``path``. Returns True if one was removed."""
        return self._entries.pop(path, None) is not None

    # Read access

    def get(self, path: str) -> Optional[CacheEntry]:
        return self._entries.get(path)

    def paths(self) -> list[str]:
        """Relative paths of all entries, sorted."""
        return sorted(self._entries)

    def entries(self) -> list[CacheEntry]:
        """All entries, sorted by path."""
        return [self._entries[path] for path in sorted(self._entries)]

    def dump_text(self) -> str:
        """One '<hex hash>\\t<path>' line per entry."""
        return ''.join(f"{entry.hash}\t{entry.path}\n" for entry in self.entries())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[CacheEntry]:
        return iter(self.entries())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashStore):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"HashStore({len(self._entries)} entries)"


__all__ = ['HashStore', 'ReconcileReport']
