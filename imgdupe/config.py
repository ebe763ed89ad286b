"""
Configuration constants for imgdupe.

This module contains all fixed settings including:
- Supported image extensions
- Perceptual hash parameters and the similarity threshold
- Hash cache file naming and format version
"""

import os

# Image extensions scanned for (matched case-insensitively)
IMAGE_EXTENSIONS = {
    '.bmp', '.gif', '.jpg', '.jpeg', '.png', '.webp', '.tif', '.tiff',
}

# Only scanned when pillow-heif is installed
HEIF_EXTENSIONS = {'.heic', '.heif'}

# Perceptual hash parameters
# Images are resized and blurred before hashing so re-encodes and small
# resizes collapse onto the same low-frequency content.
HASH_PREPROCESS_SIZE = (256, 256)
HASH_BLUR_RADIUS = 3
HASH_SIZE = 8  # 8x8 gradient hash -> 64 bits

# Maximum Hamming distance (inclusive) for two images to be reported as similar.
# Range 0-64 for 64-bit hashes.
SIMILARITY_THRESHOLD = 9

# Hash cache file written into the scanned directory by default
DEFAULT_CACHE_FILENAME = '.image_hash.db'

# On-disk cache format - increment CACHE_FORMAT_VERSION when changing layout
CACHE_FORMAT_TAG = 'imgdupe-hashdb'
CACHE_FORMAT_VERSION = 1

# Default number of hashing workers
DEFAULT_WORKERS = os.cpu_count() or 4

# Environment overrides recognized by the CLI layer
WORKERS_ENV_VAR = 'IMGDUPE_WORKERS'
CACHE_DIR_ENV_VAR = 'IMGDUPE_CACHE_DIR'
CONFIG_DIR_ENV_VAR = 'IMGDUPE_CONFIG_DIR'
MAX_PIXELS_ENV_VAR = 'IMGDUPE_MAX_PIXELS'

# PIL decompression bomb limit
MAX_IMAGE_PIXELS = 500_000_000
