"""
Similarity grouping for imgdupe.

Finds every unordered pair of cached images whose perceptual hashes are
within the similarity threshold.
"""

from __future__ import annotations

import logging
from typing import Optional, Callable

import numpy as np

from .config import SIMILARITY_THRESHOLD
from .hashdb import HashStore
from .models import SimilarPair

logger = logging.getLogger(__name__)


def find_similar_pairs(
    store: HashStore,
    threshold: int = SIMILARITY_THRESHOLD,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> list[SimilarPair]:
    """
    Find perceptually similar image pairs.

    Brute-force O(n^2): entries are ordered by path and each one is compared
    against every later entry, so each unordered pair is visited once.

    Args:
        store: Reconciled hash store
        threshold: Maximum Hamming distance (inclusive) for a match
        progress_callback: Optional callback(current, total) per compared row

    Returns:
        SimilarPair list sorted by (distance, first path, second path)

    Raises:
        ValueError: If the store holds hashes of different widths
    """
    entries = store.entries()
    if len(entries) < 2:
        return []

    paths = [entry.path for entry in entries]
    bits = [entry.hash.hash.flatten() for entry in entries]
    widths = {len(row) for row in bits}
    if len(widths) != 1:
        raise ValueError(f"Cannot compare hashes of different sizes: {sorted(widths)}")

    # One row of bits per image
    matrix = np.vstack(bits).astype(bool)
    n = len(paths)

    pairs: list[SimilarPair] = []
    for i in range(n - 1):
        # Hamming distance from image i to every later image
        distances = np.count_nonzero(matrix[i + 1:] != matrix[i], axis=1)
        for offset in np.flatnonzero(distances <= threshold):
            j = i + 1 + int(offset)
            pairs.append(SimilarPair(paths[i], paths[j], int(distances[offset])))

        if progress_callback:
            progress_callback(i + 1, n - 1)

    pairs.sort(key=lambda pair: pair.sort_key)
    logger.info(
        f"Found {len(pairs):,} similar pairs among {n:,} images "
        f"({n * (n - 1) // 2:,} comparisons, threshold {threshold})"
    )
    return pairs


__all__ = ['find_similar_pairs']
