"""
Hashing module for the scanner package.

Turns image files into 64-bit perceptual hashes. The hash is a gradient
(difference) hash computed on a normalized, blurred copy of the image, so
re-encoded or rescaled copies of the same picture land within a few bits of
each other.

All functions here are pure and safe to call from worker threads.
"""

from __future__ import annotations

from pathlib import Path

from ..config import HASH_BLUR_RADIUS, HASH_PREPROCESS_SIZE, HASH_SIZE
from ..errors import DecodeError
from .dependencies import Image, ImageFilter, imagehash, _logger


def decode_image(filepath: str | Path) -> Image.Image:
    """
    Decode an image file into a fully loaded RGB or grayscale image.

    Args:
        filepath: Path to the image

    Returns:
        Loaded PIL image in mode 'RGB' or 'L'

    Raises:
        DecodeError: If the file cannot be opened or decoded
    """
    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated/corrupt images early
            img.load()
            if img.mode in ('RGB', 'L'):
                return img.copy()
            return img.convert('RGB')
    except Image.UnidentifiedImageError as e:
        raise DecodeError(filepath, f"Not a valid image file: {e}") from e
    except Exception as e:
        raise DecodeError(filepath, f"Failed to decode image: {e}") from e


def compute_perceptual_hash(img: Image.Image) -> imagehash.ImageHash:
    """
    Calculate the perceptual hash of a decoded image.

    Resizes to a fixed grid with nearest-neighbour sampling, applies a
    Gaussian blur, then takes the 8x8 difference hash.

    Args:
        img: Decoded image

    Returns:
        64-bit ImageHash
    """
    normalized = img.resize(HASH_PREPROCESS_SIZE, Image.Resampling.NEAREST)
    normalized = normalized.filter(ImageFilter.GaussianBlur(HASH_BLUR_RADIUS))
    return imagehash.dhash(normalized, hash_size=HASH_SIZE)


def hash_image_file(filepath: str | Path) -> imagehash.ImageHash:
    """
    Decode an image file and return its perceptual hash.

    Raises:
        DecodeError: If the file cannot be decoded or hashed
    """
    img = decode_image(filepath)
    try:
        return compute_perceptual_hash(img)
    except Exception as e:
        _logger.debug(f"Perceptual hash calculation failed for {filepath}: {e}")
        raise DecodeError(filepath, f"Failed to hash image: {e}") from e
    finally:
        img.close()


def hamming_distance(a: imagehash.ImageHash, b: imagehash.ImageHash) -> int:
    """Number of differing bits between two hashes of equal size."""
    return int(a - b)


__all__ = [
    'decode_image',
    'compute_perceptual_hash',
    'hash_image_file',
    'hamming_distance',
]
