"""
Pytest configuration and shared fixtures for test suite.
"""

import os
import pytest
import tempfile
import shutil
from pathlib import Path

import imagehash
import numpy as np
from PIL import Image


def make_pattern(seed: int, size: int = 128, blocks: int = 8) -> Image.Image:
    """
    Build a blocky random RGB pattern.

    Different seeds give images that are far apart in hash space; the same
    seed always gives the same pixels.
    """
    rng = np.random.default_rng(seed)
    grid = rng.integers(0, 256, (blocks, blocks, 3), dtype=np.uint8)
    return Image.fromarray(grid, 'RGB').resize((size, size), Image.Resampling.NEAREST)


def save_pattern(path: Path, seed: int, size: int = 128, fmt: str = 'PNG', **kwargs) -> Path:
    """Save make_pattern(seed) to ``path`` and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    make_pattern(seed, size=size).save(path, fmt, **kwargs)
    return path


def bump_mtime(path: Path, seconds: int = 10) -> None:
    """Move a file's mtime forward so its signature is guaranteed to change."""
    stat = os.stat(path)
    new_ns = stat.st_mtime_ns + seconds * 1_000_000_000
    os.utime(path, ns=(new_ns, new_ns))


def bits_hash(bits: str) -> imagehash.ImageHash:
    """Build a small square ImageHash from a bit string such as '0001'."""
    side = int(len(bits) ** 0.5)
    assert side * side == len(bits)
    array = np.array([c == '1' for c in bits], dtype=bool).reshape(side, side)
    return imagehash.ImageHash(array)


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the real ~/.imgdupe config and env overrides."""
    from imgdupe.user_config import get_user_config

    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("IMGDUPE_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("IMGDUPE_WORKERS", raising=False)
    monkeypatch.delenv("IMGDUPE_CACHE_DIR", raising=False)
    monkeypatch.delenv("IMGDUPE_MAX_PIXELS", raising=False)
    get_user_config().reload()
    yield config_dir
    get_user_config().reload()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - original.png: a blocky pattern
        - reencoded.jpg: the same pattern as JPEG (near duplicate)
        - large.png: the same pattern at twice the size (near duplicate)
        - other.png, third.png: unrelated patterns
        - corrupted.png: not an image despite the extension
        - notes.txt: not an image extension
    """
    images = {}
    images['original'] = save_pattern(temp_dir / "original.png", seed=1)
    images['reencoded'] = save_pattern(temp_dir / "reencoded.jpg", seed=1, fmt='JPEG', quality=90)
    images['large'] = save_pattern(temp_dir / "large.png", seed=1, size=256)
    images['other'] = save_pattern(temp_dir / "other.png", seed=2)
    images['third'] = save_pattern(temp_dir / "third.png", seed=3)

    corrupted = temp_dir / "corrupted.png"
    corrupted.write_bytes(b"not an image at all")
    images['corrupted'] = corrupted

    notes = temp_dir / "notes.txt"
    notes.write_text("not an image")
    images['notes'] = notes

    return images


@pytest.fixture
def photo_dir(temp_dir):
    """A directory holding ten distinct images, img00.png .. img09.png."""
    for i in range(10):
        save_pattern(temp_dir / f"img{i:02d}.png", seed=100 + i)
    return temp_dir
