"""
Report formatting and display for the CLI interface.

Similar pairs go to stdout, one tab-separated line each, so the output can be
piped into whatever decides which file to keep. Summaries go to the log.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO, Optional

from ..models import ScanResult, SimilarPair


def format_pair(pair: SimilarPair, root: str | Path) -> str:
    """Format one pair as '<distance>\\t<path>\\t<path>' with real paths."""
    first, second = pair.resolve(root)
    return f"{pair.distance}\t{first}\t{second}"


def print_similar_pairs(
    pairs: list[SimilarPair],
    root: str | Path,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Print similar pairs in the order given.

    Args:
        pairs: Pairs from find_similar_pairs
        root: Scan root the pair paths are relative to
        stream: Output stream (default: stdout)
    """
    stream = stream or sys.stdout
    for pair in pairs:
        print(format_pair(pair, root), file=stream)


def print_hashes(result: ScanResult, stream: Optional[TextIO] = None) -> None:
    """Print every cached hash with its path."""
    stream = stream or sys.stdout
    stream.write(result.store.dump_text())


def log_scan_summary(result: ScanResult, pairs: list[SimilarPair], logger: logging.Logger) -> None:
    """Log a short summary of the scan and the comparison."""
    stats = result.stats
    logger.info(
        f"Cache: {stats.reused:,} reused, {stats.hashed:,} hashed, "
        f"{stats.failed:,} failed ({stats.hit_rate:.1f}% hit rate)"
    )
    for error in result.failures:
        logger.debug(f"  skipped: {error.path}")

    if not pairs:
        logger.info("No similar images found.")
    else:
        logger.info(f"{len(pairs):,} similar pairs")


__all__ = [
    'format_pair',
    'print_similar_pairs',
    'print_hashes',
    'log_scan_summary',
]
