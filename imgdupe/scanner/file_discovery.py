"""
File discovery module for the scanner package.

Enumerates image files under a scan root and records each file's identity
(relative path + modification signature).
"""

from __future__ import annotations

import os
from pathlib import Path

from ..config import IMAGE_EXTENSIONS, HEIF_EXTENSIONS
from ..errors import DirectoryAccessError
from ..models import FileIdentity
from .dependencies import HAS_HEIF_SUPPORT, _logger


def supported_extensions() -> set[str]:
    """Extensions scanned for, depending on installed decoders."""
    if HAS_HEIF_SUPPORT:
        return IMAGE_EXTENSIONS | HEIF_EXTENSIONS
    return set(IMAGE_EXTENSIONS)


def validate_root(root_path: str | Path) -> Path:
    """
    Check that the scan root exists and can be listed.

    Returns:
        The resolved root path

    Raises:
        DirectoryAccessError: If the root is missing, not a directory or unreadable
    """
    root = Path(root_path)
    if not root.exists():
        raise DirectoryAccessError(root, "Directory not found")
    if not root.is_dir():
        raise DirectoryAccessError(root, "Not a directory")
    if not os.access(root, os.R_OK | os.X_OK):
        raise DirectoryAccessError(root, "Permission denied")
    return root.resolve()


def find_image_files(root_path: str | Path, recursive: bool = False) -> list[FileIdentity]:
    """
    Find all image files in the given directory.

    Args:
        root_path: Directory path to search for images
        recursive: If True, search subdirectories recursively

    Returns:
        List of FileIdentity objects sorted by relative path

    Raises:
        DirectoryAccessError: If the root itself cannot be read

    Notes:
        - Extensions are matched case-insensitively
        - Files that disappear or cannot be stat'ed mid-scan are skipped
        - Symlinks to an already listed file are skipped (first path in sorted order wins)
    """
    root = validate_root(root_path)
    extensions = supported_extensions()

    # Choose iterator based on recursive flag
    iterator = root.rglob('*') if recursive else root.glob('*')

    candidates: dict[str, Path] = {}
    try:
        for filepath in iterator:
            if filepath.suffix.lower() in extensions:
                candidates[filepath.relative_to(root).as_posix()] = filepath
    except OSError as e:
        raise DirectoryAccessError(root, str(e)) from e

    identities = []
    seen = set()  # Resolved targets, so a file and its symlinks are listed once
    for rel_path in sorted(candidates):
        filepath = candidates[rel_path]
        try:
            if not filepath.is_file():
                continue
            resolved = filepath.resolve()
            stat = filepath.stat()
        except (OSError, RuntimeError) as e:
            _logger.debug(f"Skipping {filepath}: {e}")
            continue

        if resolved in seen:
            _logger.debug(f"Skipping {rel_path}: same file as an earlier path")
            continue
        seen.add(resolved)
        identities.append(FileIdentity.from_stat(rel_path, stat))

    return identities


__all__ = ['find_image_files', 'supported_extensions', 'validate_root']
