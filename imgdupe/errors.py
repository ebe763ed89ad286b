"""
Exception hierarchy for imgdupe.

Per-file errors (DecodeError) are recovered by the scanner; cache load errors
are recovered by HashStore.load. Directory and cache write errors are fatal
for the run and propagate to the caller.
"""

from __future__ import annotations

from pathlib import Path


class ImgDupeError(Exception):
    """Base class for all imgdupe errors."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(self._format())

    def _format(self) -> str:
        return f"{self.path}: {self.reason}"


class DecodeError(ImgDupeError):
    """An image file could not be decoded or hashed."""

    def _format(self) -> str:
        return f"Could not read {self.path}: {self.reason}"


class CacheLoadError(ImgDupeError):
    """The persisted hash cache is unreadable, malformed or incompatible."""

    def _format(self) -> str:
        return f"Could not decode hash cache {self.path}: {self.reason}"


class CacheWriteError(ImgDupeError):
    """The hash cache could not be written."""

    def _format(self) -> str:
        return f"Could not write hash cache {self.path}: {self.reason}"


class DirectoryAccessError(ImgDupeError):
    """The scan root is missing, not a directory or not readable."""

    def _format(self) -> str:
        return f"Cannot scan directory {self.path}: {self.reason}"


__all__ = [
    'ImgDupeError',
    'DecodeError',
    'CacheLoadError',
    'CacheWriteError',
    'DirectoryAccessError',
]
