"""
Third-party imports for the scanner package.

Pillow and imagehash are required. pillow-heif adds HEIC/HEIF decoding and
tqdm adds progress bars; both are picked up when installed.
"""

from __future__ import annotations

import warnings
import logging
from typing import Optional, Any

from ..config import MAX_IMAGE_PIXELS

_logger = logging.getLogger(__name__)

try:
    from PIL import Image, ImageFilter
    import imagehash
except ImportError:
    raise ImportError(
        "imgdupe needs Pillow and imagehash.\n"
        "Install with: pip install Pillow imagehash"
    )


def _register_heif() -> bool:
    """Teach Pillow to open HEIC/HEIF files if pillow-heif is available."""
    try:
        from pillow_heif import register_heif_opener
    except ImportError:
        _logger.debug("pillow-heif not installed - .heic/.heif files are not scanned")
        return False
    register_heif_opener()
    _logger.debug("HEIC/HEIF decoding enabled via pillow-heif")
    return True


def _find_tqdm() -> Optional[Any]:
    try:
        from tqdm import tqdm
    except ImportError:
        return None
    return tqdm


# Must run before any HEIC file is opened
HAS_HEIF_SUPPORT = _register_heif()

_tqdm_class: Optional[Any] = _find_tqdm()
HAS_TQDM = _tqdm_class is not None


def set_max_image_pixels(limit: Optional[int]) -> None:
    """
    Set Pillow's decompression bomb limit.

    Pillow warns above the limit and refuses images over twice the limit;
    None disables the check.
    """
    Image.MAX_IMAGE_PIXELS = limit


# Pillow's ~89MP default rejects large scans and panoramas
set_max_image_pixels(MAX_IMAGE_PIXELS)
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)


__all__ = [
    'Image',
    'ImageFilter',
    'imagehash',
    'HAS_HEIF_SUPPORT',
    'HAS_TQDM',
    '_tqdm_class',
    '_logger',
    'set_max_image_pixels',
]
