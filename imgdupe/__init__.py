"""
imgdupe
=======
Find visually similar images in a directory.

Features:
- 64-bit perceptual (gradient) hash per image
- Hash cache kept next to the images and reused across runs
- Incremental re-scans: only new or modified files are hashed
- Parallel hashing on a thread pool
- Deterministic list of similar pairs for review
"""

__version__ = "1.0.0"

from .errors import (
    ImgDupeError,
    DecodeError,
    CacheLoadError,
    CacheWriteError,
    DirectoryAccessError,
)
from .models import FileIdentity, CacheEntry, SimilarPair, ScanStats, ScanResult
from .config import IMAGE_EXTENSIONS, SIMILARITY_THRESHOLD, HASH_SIZE
from .hashdb import (
    HashStore,
    CacheWriter,
    CacheLocation,
    InDirectoryLocation,
    CacheDirectoryLocation,
    FixedLocation,
)
from .scanner import (
    DirectoryScanner,
    find_image_files,
    compute_perceptual_hash,
    hash_image_file,
    hamming_distance,
)
from .grouping import find_similar_pairs

__all__ = [
    "ImgDupeError",
    "DecodeError",
    "CacheLoadError",
    "CacheWriteError",
    "DirectoryAccessError",
    "FileIdentity",
    "CacheEntry",
    "SimilarPair",
    "ScanStats",
    "ScanResult",
    "IMAGE_EXTENSIONS",
    "SIMILARITY_THRESHOLD",
    "HASH_SIZE",
    "HashStore",
    "CacheWriter",
    "CacheLocation",
    "InDirectoryLocation",
    "CacheDirectoryLocation",
    "FixedLocation",
    "DirectoryScanner",
    "find_image_files",
    "compute_perceptual_hash",
    "hash_image_file",
    "hamming_distance",
    "find_similar_pairs",
]
