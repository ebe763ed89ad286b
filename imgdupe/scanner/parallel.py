"""
Parallel processing module for the scanner package.

Hashes many files on a thread pool. Workers never touch shared state: each
returns a HashOutcome and the calling thread collects them.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Callable, Any, Iterable, Iterator

from ..config import DEFAULT_WORKERS
from ..errors import DecodeError
from ..models import FileIdentity, HashOutcome
from .dependencies import HAS_TQDM, _tqdm_class
from .hashing import hash_image_file


def _hash_one(root: Path, identity: FileIdentity) -> HashOutcome:
    """Worker body: hash one file, capturing a decode failure as a value."""
    try:
        return HashOutcome(identity=identity, hash=hash_image_file(identity.resolve(root)))
    except DecodeError as e:
        return HashOutcome(identity=identity, error=e)


def hash_files_parallel(
    root: str | Path,
    identities: Iterable[FileIdentity],
    max_workers: Optional[int] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = False,
) -> Iterator[HashOutcome]:
    """
    Hash image files in parallel.

    Outcomes are yielded to the caller in completion order, so the caller
    is the only thread that ever sees them.

    Args:
        root: Scan root that identity paths are relative to
        identities: Files to hash
        max_workers: Number of worker threads (default: number of CPUs)
        progress_callback: Optional callback(current, total) for progress updates
        show_progress: Whether to show tqdm progress bar

    Yields:
        One HashOutcome per identity, in completion order
    """
    root = Path(root)
    pending = list(identities)
    if not pending:
        return

    total = len(pending)
    workers = max_workers or DEFAULT_WORKERS

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(total=total, desc="Hashing images", unit="img", ncols=80)

    # Throttle progress callbacks (every 100 files or 1 second)
    last_callback_time = time.time()
    callback_batch_size = 100
    callback_interval = 1.0

    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = [executor.submit(_hash_one, root, identity) for identity in pending]

        for i, future in enumerate(as_completed(futures)):
            yield future.result()

            if pbar is not None:
                pbar.update(1)

            if progress_callback:
                current_time = time.time()
                should_callback = (
                    (i + 1) % callback_batch_size == 0 or
                    current_time - last_callback_time >= callback_interval or
                    i == total - 1  # Always callback on last item
                )
                if should_callback:
                    progress_callback(i + 1, total)
                    last_callback_time = current_time
    finally:
        # A consumer that stops early drops the files still queued
        executor.shutdown(wait=True, cancel_futures=True)
        if pbar is not None:
            pbar.close()


__all__ = ['hash_files_parallel']
