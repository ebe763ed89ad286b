"""
Unit tests for similarity grouping.
"""

import itertools
import pytest

import imagehash
import numpy as np

from imgdupe.config import SIMILARITY_THRESHOLD
from imgdupe.grouping import find_similar_pairs
from imgdupe.hashdb import HashStore
from imgdupe.models import FileIdentity, SimilarPair
from imgdupe.scanner import DirectoryScanner
from conftest import bits_hash


def store_from(hashes: dict) -> HashStore:
    store = HashStore()
    for path, image_hash in hashes.items():
        store.insert(FileIdentity(path=path, mtime_ns=0, size=0), image_hash)
    return store


def random_store(count: int, seed: int = 0) -> HashStore:
    rng = np.random.default_rng(seed)
    hashes = {}
    for i in range(count):
        bits = rng.random((8, 8)) < 0.5
        hashes[f"img{i:03d}.png"] = imagehash.ImageHash(bits)
    return store_from(hashes)


class TestFindSimilarPairs:
    """Test find_similar_pairs function."""

    def test_toy_scenario(self):
        """a=0000, b=0001, c=1111 with T=1 gives only (a, b)."""
        store = store_from({
            "a.jpg": bits_hash("0000"),
            "b.jpg": bits_hash("0001"),
            "c.jpg": bits_hash("1111"),
        })
        assert find_similar_pairs(store, threshold=1) == [SimilarPair("a.jpg", "b.jpg", 1)]

    def test_toy_scenario_wider_threshold(self):
        store = store_from({
            "a.jpg": bits_hash("0000"),
            "b.jpg": bits_hash("0001"),
            "c.jpg": bits_hash("1111"),
        })
        pairs = find_similar_pairs(store, threshold=3)
        assert pairs == [SimilarPair("a.jpg", "b.jpg", 1), SimilarPair("b.jpg", "c.jpg", 3)]

    def test_empty_store(self):
        assert find_similar_pairs(HashStore()) == []

    def test_single_entry(self):
        assert find_similar_pairs(store_from({"a.jpg": bits_hash("0000")})) == []

    def test_identical_hashes_distance_zero(self):
        store = store_from({"x.png": bits_hash("1010"), "y.png": bits_hash("1010")})
        assert find_similar_pairs(store, threshold=0) == [SimilarPair("x.png", "y.png", 0)]

    def test_threshold_is_inclusive(self):
        store = store_from({"a": bits_hash("0000"), "b": bits_hash("0011")})
        assert len(find_similar_pairs(store, threshold=2)) == 1
        assert find_similar_pairs(store, threshold=1) == []

    def test_no_duplicate_pairs(self):
        store = random_store(40, seed=1)
        pairs = find_similar_pairs(store, threshold=30)
        keys = [(p.first, p.second) for p in pairs]
        assert len(keys) == len(set(keys))
        assert all(p.first < p.second for p in pairs)

    def test_matches_brute_force(self):
        """Every pair within the threshold is present, every pair above it is absent."""
        store = random_store(30, seed=2)
        threshold = 26
        entries = {e.path: e.hash for e in store.entries()}

        expected = set()
        for a, b in itertools.combinations(sorted(entries), 2):
            distance = entries[a] - entries[b]
            if distance <= threshold:
                expected.add(SimilarPair(a, b, distance))

        pairs = find_similar_pairs(store, threshold=threshold)
        assert set(pairs) == expected
        assert all(p.distance <= threshold for p in pairs)

    def test_distance_symmetric(self):
        store = random_store(10, seed=3)
        entries = {e.path: e.hash for e in store.entries()}
        for pair in find_similar_pairs(store, threshold=64):
            assert pair.distance == entries[pair.first] - entries[pair.second]
            assert pair.distance == entries[pair.second] - entries[pair.first]

    def test_deterministic_order(self):
        pairs = find_similar_pairs(random_store(25, seed=4), threshold=28)
        again = find_similar_pairs(random_store(25, seed=4), threshold=28)

        assert pairs == again
        assert pairs == sorted(pairs, key=lambda p: (p.distance, p.first, p.second))

    def test_all_pairs_at_max_threshold(self):
        store = random_store(6, seed=5)
        assert len(find_similar_pairs(store, threshold=64)) == 15

    def test_mixed_hash_sizes_rejected(self):
        store = store_from({"a": bits_hash("0000"), "b": bits_hash("000000000")})
        with pytest.raises(ValueError):
            find_similar_pairs(store)

    def test_progress_callback(self):
        calls = []
        find_similar_pairs(random_store(5), progress_callback=lambda cur, tot: calls.append((cur, tot)))
        assert calls[-1] == (4, 4)


class TestEndToEnd:
    """Scan a directory and group the result."""

    def test_near_duplicates_paired(self, sample_images, temp_dir):
        result = DirectoryScanner(temp_dir).scan()
        pairs = find_similar_pairs(result.store)

        paired = {(p.first, p.second) for p in pairs}
        assert ("original.png", "reencoded.jpg") in paired
        assert ("large.png", "original.png") in paired
        assert ("large.png", "reencoded.jpg") in paired

        # Unrelated patterns and the unreadable file take part in no pair
        for pair in pairs:
            assert "other.png" not in (pair.first, pair.second)
            assert "third.png" not in (pair.first, pair.second)
            assert "corrupted.png" not in (pair.first, pair.second)
            assert pair.distance <= SIMILARITY_THRESHOLD

    def test_distinct_images_no_pairs(self, photo_dir):
        result = DirectoryScanner(photo_dir).scan()
        assert find_similar_pairs(result.store) == []
