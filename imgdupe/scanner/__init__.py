"""
Scanner package for imgdupe.

Discovers images, hashes them in parallel and keeps the hash cache in sync
with the directory.

Public API:
- find_image_files: Discover image files and their identities
- decode_image: Decode an image file (raises DecodeError)
- compute_perceptual_hash: Perceptual hash of a decoded image
- hash_image_file: Decode + hash one file
- hamming_distance: Bit difference between two hashes
- hash_files_parallel: Hash many files on a thread pool
- DirectoryScanner: Full load/reconcile/hash/save cycle for a directory
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

# Import public functions from submodules
from .file_discovery import find_image_files, supported_extensions, validate_root
from .hashing import (
    decode_image,
    compute_perceptual_hash,
    hash_image_file,
    hamming_distance,
)
from .parallel import hash_files_parallel
from .directory import DirectoryScanner

# Import dependencies for has_heif_support function
from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


# Public API exports
__all__ = [
    # File discovery
    'find_image_files',
    'supported_extensions',
    'validate_root',
    # Hashing functions
    'decode_image',
    'compute_perceptual_hash',
    'hash_image_file',
    'hamming_distance',
    # Parallel hashing and orchestration
    'hash_files_parallel',
    'DirectoryScanner',
    # Feature detection
    'has_heif_support',
]
