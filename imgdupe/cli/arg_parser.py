"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
imgdupe command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .. import __version__
from ..config import DEFAULT_CACHE_FILENAME, SIMILARITY_THRESHOLD, WORKERS_ENV_VAR


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='imgdupe',
        description='Find visually similar images in a directory',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s /path/to/photos
      Hash new images, update the cache and list similar pairs

  %(prog)s /path/to/photos -R
      Include subdirectories

  %(prog)s /path/to/photos --no-update
      List pairs from the existing cache without touching the directory

Similar pairs are printed one per line as "<distance>\\t<path>\\t<path>".
Images with a hash distance of at most {SIMILARITY_THRESHOLD} bits are reported.

Environment:
  {WORKERS_ENV_VAR}    Number of hashing threads (default: number of CPUs)
        """
    )

    # Positional argument
    parser.add_argument(
        'directory',
        type=Path,
        help='Directory to scan for images'
    )

    parser.add_argument(
        '-D', '--db',
        type=Path,
        default=None,
        help=f'Location of hash cache file. Default: <DIRECTORY>/{DEFAULT_CACHE_FILENAME}'
    )

    parser.add_argument(
        '-R', '--recursive',
        action='store_true',
        help='Scan subdirectories recursively'
    )

    # Cache control (rebuild and no-update are mutually exclusive)
    update_group = parser.add_mutually_exclusive_group()
    update_group.add_argument(
        '-b', '--rebuild',
        action='store_true',
        help='Ignore the existing cache and hash every image again'
    )
    update_group.add_argument(
        '-u', '--no-update',
        action='store_true',
        help='Read the cache only; do not scan the directory'
    )

    parser.add_argument(
        '-d', '--no-dump',
        action='store_true',
        help='Do not write the hash cache back to disk'
    )

    # Output options
    parser.add_argument(
        '--print-hashes',
        action='store_true',
        help='Print every cached hash and path instead of similar pairs'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '-R'])
        >>> args.directory
        PosixPath('/path/to/photos')
        >>> args.recursive
        True
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
