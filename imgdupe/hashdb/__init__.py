"""
Persistent hash cache for imgdupe.

Stores each image's perceptual hash together with the file's modification
signature (mtime + size), so re-scans only hash new or changed files.

Public API:
- HashStore: In-memory store with load/reconcile/insert/save
- CacheWriter: Saves a store to its configured location
- CacheLocation and implementations: Where a root's cache file lives
"""

from __future__ import annotations

from .location import (
    CacheLocation,
    InDirectoryLocation,
    CacheDirectoryLocation,
    FixedLocation,
)
from .store import HashStore, ReconcileReport
from .writer import CacheWriter, atomic_write


__all__ = [
    'HashStore',
    'ReconcileReport',
    'CacheWriter',
    'atomic_write',
    'CacheLocation',
    'InDirectoryLocation',
    'CacheDirectoryLocation',
    'FixedLocation',
]
