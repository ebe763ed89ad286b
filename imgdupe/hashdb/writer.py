"""
Crash-safe persistence of the hash cache.

The payload is written to a temporary file next to the destination, flushed
to disk, then moved over the destination with os.replace. A crash at any
point leaves either the old cache or the new one, never a partial file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import CacheWriteError
from ..models import format_size
from .location import CacheLocation, InDirectoryLocation

if TYPE_CHECKING:
    from .store import HashStore

logger = logging.getLogger(__name__)


def _ensure_directory(path: Path):
    """Ensure the directory for the cache file exists."""
    parent = path.parent
    if parent and parent != path:
        parent.mkdir(parents=True, exist_ok=True)


def atomic_write(destination: str | Path, payload: bytes) -> None:
    """
    Atomically replace ``destination`` with ``payload``.

    Raises:
        CacheWriteError: If any step fails; the previous file is untouched
    """
    destination = Path(destination)
    temp_path = None
    try:
        _ensure_directory(destination)
        fd, temp_name = tempfile.mkstemp(
            dir=destination.parent,
            prefix=f"{destination.name}.",
            suffix=".tmp",
        )
        temp_path = Path(temp_name)
        with os.fdopen(fd, 'wb') as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())

        # Atomic rename to final location
        os.replace(temp_path, destination)
        temp_path = None
    except OSError as e:
        raise CacheWriteError(destination, str(e)) from e
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink()
            except OSError as e:
                logger.debug(f"Could not remove temporary file {temp_path}: {e}")


class CacheWriter:
    """
    Persists a reconciled HashStore to its cache location.

    Usage:
        writer = CacheWriter(InDirectoryLocation())
        writer.write(store, root)
    """

    def __init__(self, location: CacheLocation | None = None):
        self.location = location or InDirectoryLocation()

    def write(self, store: HashStore, root: str | Path) -> Path:
        """
        Save ``store`` as the cache for ``root``.

        Returns:
            Path of the written cache file

        Raises:
            CacheWriteError: If the cache could not be written
        """
        destination = self.location.path_for(root)
        logger.info(f"Dumping hash cache ({len(store):,} entries) to {destination}")
        store.save(destination)
        logger.debug(f"Wrote {format_size(destination.stat().st_size)} to {destination}")
        return destination


__all__ = ['atomic_write', 'CacheWriter']
