"""
Unit tests for data models (FileIdentity, CacheEntry, SimilarPair, ScanStats).
"""

import os
import pytest
from pathlib import Path

import imagehash

from imgdupe.models import (
    FileIdentity,
    CacheEntry,
    SimilarPair,
    ScanStats,
    format_size,
)


class TestFormatSize:
    """Test the format_size utility function."""

    def test_bytes(self):
        assert format_size(500) == "500.0 B"

    def test_kilobytes(self):
        assert format_size(2048) == "2.0 KB"

    def test_megabytes(self):
        assert format_size(5242880) == "5.0 MB"

    def test_zero(self):
        assert format_size(0) == "0.0 B"


class TestFileIdentity:
    """Test FileIdentity data class."""

    def test_signature(self):
        identity = FileIdentity(path="a/b.jpg", mtime_ns=123, size=456)
        assert identity.signature == (123, 456)

    def test_filename_property(self):
        identity = FileIdentity(path="holiday/beach.jpg", mtime_ns=0, size=0)
        assert identity.filename == "beach.jpg"

    def test_from_stat(self, temp_dir):
        path = temp_dir / "file.png"
        path.write_bytes(b"12345")
        stat = os.stat(path)

        identity = FileIdentity.from_stat("file.png", stat)
        assert identity.path == "file.png"
        assert identity.size == 5
        assert identity.mtime_ns == stat.st_mtime_ns

    def test_resolve(self):
        identity = FileIdentity(path="sub/x.png", mtime_ns=0, size=0)
        assert identity.resolve("/photos") == Path("/photos/sub/x.png")

    def test_hashable_and_equal(self):
        a = FileIdentity(path="x.png", mtime_ns=1, size=2)
        b = FileIdentity(path="x.png", mtime_ns=1, size=2)
        c = FileIdentity(path="x.png", mtime_ns=9, size=2)
        assert a == b
        assert a != c
        assert len({a, b, c}) == 2


class TestCacheEntry:
    """Test CacheEntry serialization."""

    def test_to_dict(self):
        identity = FileIdentity(path="x.png", mtime_ns=10, size=20)
        entry = CacheEntry(identity=identity, hash=imagehash.hex_to_hash("00ff00ff00ff00ff"))

        data = entry.to_dict()
        assert data == {'hash': "00ff00ff00ff00ff", 'mtime_ns': 10, 'size': 20}

    def test_from_dict(self):
        entry = CacheEntry.from_dict(
            "dir/x.png",
            {'hash': "8000000000000001", 'mtime_ns': 10, 'size': 20},
        )
        assert entry.path == "dir/x.png"
        assert entry.identity.signature == (10, 20)
        assert str(entry.hash) == "8000000000000001"

    def test_from_dict_missing_field(self):
        with pytest.raises(KeyError):
            CacheEntry.from_dict("x.png", {'hash': "00", 'size': 1})

    @pytest.mark.parametrize("field,value", [
        ('mtime_ns', 1.5),
        ('mtime_ns', "10"),
        ('size', 20.0),
        ('size', True),
    ])
    def test_from_dict_rejects_non_integer_signature(self, field, value):
        data = {'hash': "00ff00ff00ff00ff", 'mtime_ns': 10, 'size': 20}
        data[field] = value
        with pytest.raises(ValueError):
            CacheEntry.from_dict("x.png", data)


class TestSimilarPair:
    """Test SimilarPair ordering and validation."""

    def test_paths_are_sorted(self):
        pair = SimilarPair("b.jpg", "a.jpg", 3)
        assert pair.first == "a.jpg"
        assert pair.second == "b.jpg"

    def test_unordered_equality(self):
        assert SimilarPair("a.jpg", "b.jpg", 3) == SimilarPair("b.jpg", "a.jpg", 3)
        assert len({SimilarPair("a.jpg", "b.jpg", 3), SimilarPair("b.jpg", "a.jpg", 3)}) == 1

    def test_same_file_rejected(self):
        with pytest.raises(ValueError):
            SimilarPair("a.jpg", "a.jpg", 0)

    def test_negative_distance_rejected(self):
        with pytest.raises(ValueError):
            SimilarPair("a.jpg", "b.jpg", -1)

    def test_sort_key(self):
        pairs = [
            SimilarPair("c", "d", 2),
            SimilarPair("b", "a", 2),
            SimilarPair("x", "y", 0),
        ]
        pairs.sort(key=lambda p: p.sort_key)
        assert [(p.first, p.second) for p in pairs] == [("x", "y"), ("a", "b"), ("c", "d")]

    def test_resolve(self):
        pair = SimilarPair("a.jpg", "sub/b.jpg", 1)
        assert pair.resolve("/root") == (Path("/root/a.jpg"), Path("/root/sub/b.jpg"))

    def test_to_dict(self):
        pair = SimilarPair("a.jpg", "b.jpg", 4)
        assert pair.to_dict() == {'first': "a.jpg", 'second': "b.jpg", 'distance': 4}


class TestScanStats:
    """Test ScanStats dataclass."""

    def test_hit_rate_calculation(self):
        stats = ScanStats(total_files=100, reused=75)
        assert stats.hit_rate == 75.0

    def test_hit_rate_no_files(self):
        assert ScanStats().hit_rate == 0.0
