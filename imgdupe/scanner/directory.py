"""
End-to-end directory scan.

DirectoryScanner ties the pieces together: enumerate the root, load the
cache, reconcile, hash pending files in parallel, then persist.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Callable

from ..hashdb import CacheLocation, CacheWriter, HashStore, InDirectoryLocation
from ..models import ScanResult, ScanStats
from .file_discovery import find_image_files, validate_root
from .parallel import hash_files_parallel

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """
    Scans one directory and keeps its hash cache up to date.

    Usage:
        scanner = DirectoryScanner('/photos', max_workers=8)
        result = scanner.scan()
        pairs = find_similar_pairs(result.store)
    """

    def __init__(
        self,
        root: str | Path,
        location: Optional[CacheLocation] = None,
        recursive: bool = False,
        max_workers: Optional[int] = None,
        show_progress: bool = False,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ):
        """
        Args:
            root: Directory to scan
            location: Where the cache file lives (default: inside root)
            recursive: Scan subdirectories too
            max_workers: Hashing threads (default: number of CPUs)
            show_progress: Show a tqdm progress bar while hashing
            progress_callback: Optional callback(current, total) while hashing
        """
        self.root = Path(root)
        self.location = location or InDirectoryLocation()
        self.recursive = recursive
        self.max_workers = max_workers
        self.show_progress = show_progress
        self.progress_callback = progress_callback

    def scan(self, rebuild: bool = False, update: bool = True, dump: bool = True) -> ScanResult:
        """
        Run the scan.

        Args:
            rebuild: Ignore any existing cache and hash everything
            update: Reconcile against the directory; False uses the cache as-is
            dump: Save the store when done

        Returns:
            ScanResult with the reconciled store

        Raises:
            DirectoryAccessError: If the root cannot be read (before any hashing)
            CacheWriteError: If the cache could not be saved
        """
        root = validate_root(self.root)
        stats = ScanStats()

        # Enumerate first so an unreadable root fails before anything else
        identities = find_image_files(root, recursive=self.recursive) if update else []

        cache_path = self.location.path_for(root)
        logger.info(f"Hash cache is {cache_path}")
        if rebuild:
            logger.info("Rebuilding hash cache from scratch")
            store = HashStore()
        else:
            store = HashStore.load(cache_path)

        result = ScanResult(root=root, store=store, stats=stats)

        if update:
            stats.total_files = len(identities)
            pending = store.reconcile(identities)
            report = store.last_reconcile
            stats.vanished = len(report.vanished)
            stats.stale = len(report.stale)
            stats.reused = stats.total_files - len(pending)

            logger.info(
                f"Found {stats.total_files:,} images in {root}: "
                f"{stats.reused:,} cached, {len(pending):,} to hash "
                f"({stats.vanished:,} removed, {stats.stale:,} changed)"
            )

            ordered = sorted(pending, key=lambda identity: identity.path)
            for outcome in hash_files_parallel(
                root,
                ordered,
                max_workers=self.max_workers,
                progress_callback=self.progress_callback,
                show_progress=self.show_progress,
            ):
                if outcome.ok:
                    store.insert(outcome.identity, outcome.hash)
                    stats.hashed += 1
                else:
                    logger.warning(str(outcome.error))
                    result.failures.append(outcome.error)
                    stats.failed += 1

            if stats.failed:
                logger.warning(f"Skipped {stats.failed:,} files that could not be decoded")

        if dump:
            result.cache_path = CacheWriter(self.location).write(store, root)

        return result


__all__ = ['DirectoryScanner']
