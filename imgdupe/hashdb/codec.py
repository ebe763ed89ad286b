"""
On-disk format of the hash cache.

The cache is a zlib-compressed UTF-8 JSON document:

    {"format": "imgdupe-hashdb", "version": 1, "hash_size": 8,
     "entries": {"<relative path>": {"hash": "<hex>", "mtime_ns": 0, "size": 0}}}

Anything that does not decode to exactly this layout, including a document
written by a different format version or hash size, raises CacheLoadError so
the caller can discard it and rebuild.
"""

from __future__ import annotations

import json
import zlib
from pathlib import Path
from typing import Iterable

from ..config import CACHE_FORMAT_TAG, CACHE_FORMAT_VERSION, HASH_SIZE
from ..errors import CacheLoadError
from ..models import CacheEntry


def encode_entries(entries: Iterable[CacheEntry]) -> bytes:
    """
    Serialize cache entries to the compressed cache payload.

    Keys are sorted so identical stores always produce identical bytes.
    """
    document = {
        'format': CACHE_FORMAT_TAG,
        'version': CACHE_FORMAT_VERSION,
        'hash_size': HASH_SIZE,
        'entries': {entry.path: entry.to_dict() for entry in entries},
    }
    raw = json.dumps(document, sort_keys=True, separators=(',', ':')).encode('utf-8')
    return zlib.compress(raw)


def decode_entries(payload: bytes, source: str | Path = '<memory>') -> list[CacheEntry]:
    """
    Parse a compressed cache payload.

    Args:
        payload: Bytes previously produced by encode_entries
        source: Where the payload came from (for error messages)

    Returns:
        List of CacheEntry objects

    Raises:
        CacheLoadError: If the payload is corrupt or of an incompatible version
    """
    try:
        document = json.loads(zlib.decompress(payload).decode('utf-8'))
    except (zlib.error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CacheLoadError(source, f"Corrupt cache data: {e}") from e

    if not isinstance(document, dict) or document.get('format') != CACHE_FORMAT_TAG:
        raise CacheLoadError(source, "Not an imgdupe hash cache")

    version = document.get('version')
    if version != CACHE_FORMAT_VERSION:
        raise CacheLoadError(
            source,
            f"Unsupported cache version {version!r} (expected {CACHE_FORMAT_VERSION})"
        )

    hash_size = document.get('hash_size')
    if hash_size != HASH_SIZE:
        raise CacheLoadError(
            source,
            f"Cache was built with hash size {hash_size!r} (expected {HASH_SIZE})"
        )

    raw_entries = document.get('entries')
    if not isinstance(raw_entries, dict):
        raise CacheLoadError(source, "Missing entries table")

    entries = []
    for path, data in raw_entries.items():
        try:
            entry = CacheEntry.from_dict(path, data)
        except (KeyError, TypeError, ValueError) as e:
            raise CacheLoadError(source, f"Malformed entry for {path!r}: {e}") from e
        if entry.hash.hash.size != HASH_SIZE * HASH_SIZE:
            raise CacheLoadError(source, f"Hash of wrong width for {path!r}")
        entries.append(entry)

    return entries


__all__ = ['encode_entries', 'decode_entries']
