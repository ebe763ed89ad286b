"""
CLI workflow orchestration for imgdupe.

Provides the CLIOrchestrator class that runs the whole command-line workflow:
argument parsing, configuration, scan, comparison and report.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import CacheWriteError, DirectoryAccessError
from ..grouping import find_similar_pairs
from ..hashdb import (
    CacheDirectoryLocation,
    CacheLocation,
    FixedLocation,
    InDirectoryLocation,
)
from ..models import ScanResult
from ..scanner import DirectoryScanner
from ..scanner.dependencies import set_max_image_pixels
from ..user_config import get_user_config
from .arg_parser import parse_arguments
from .reporting import log_scan_summary, print_hashes, print_similar_pairs


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Usage:
        exit_code = CLIOrchestrator(['/photos', '-R']).run()
    """

    def __init__(self, argv: Optional[list[str]] = None):
        """
        Args:
            argv: Argument list (default: sys.argv)
        """
        self.argv = argv
        self.logger = logging.getLogger(__name__)
        self.args = None
        self.workers: Optional[int] = None
        self.result: Optional[ScanResult] = None
        self.pairs = []

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error)

        Workflow phases:
        1. Setup & argument parsing
        2. Configuration
        3. Scan (reconcile + hash + dump)
        4. Comparison & report
        """
        self._setup_phase()
        location = self._configure_phase()

        exit_code = self._scan_phase(location)
        if exit_code != 0:
            return exit_code

        self._report_phase()
        return 0

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

    def _configure_phase(self) -> CacheLocation:
        """
        Phase 2: Resolve runtime options from arguments and user config.

        Returns:
            The cache location to use
        """
        config = get_user_config()
        self.workers = config.workers
        set_max_image_pixels(config.max_image_pixels)

        if self.args.db is not None:
            return FixedLocation(self.args.db)
        if config.cache_dir is not None:
            return CacheDirectoryLocation(config.cache_dir)
        return InDirectoryLocation()

    def _scan_phase(self, location: CacheLocation) -> int:
        """
        Phase 3: Bring the hash cache up to date.

        Returns:
            0 for success, 1 for a fatal directory or cache error
        """
        scanner = DirectoryScanner(
            self.args.directory,
            location=location,
            recursive=self.args.recursive,
            max_workers=self.workers,
            show_progress=not self.args.no_progress,
        )

        if not self.args.no_update:
            self.logger.info(
                f"Hashing images in {self.args.directory} with {self.workers} workers..."
            )

        try:
            self.result = scanner.scan(
                rebuild=self.args.rebuild,
                update=not self.args.no_update,
                dump=not self.args.no_dump,
            )
        except (DirectoryAccessError, CacheWriteError) as e:
            self.logger.error(str(e))
            return 1

        return 0

    def _report_phase(self) -> None:
        """Phase 4: Compare hashes and print the result."""
        if self.args.print_hashes:
            print_hashes(self.result)
            return

        self.logger.info("Finding similar images...")
        self.pairs = find_similar_pairs(self.result.store)
        log_scan_summary(self.result, self.pairs, self.logger)
        print_similar_pairs(self.pairs, self.result.root)


__all__ = ['CLIOrchestrator', 'setup_logging']
