"""
Path helpers shared by the scanner, sandbox and document reader.

Provides stable path identifiers, canonicalization with error translation,
root containment checks and modification-time conversion.
"""

import hashlib
import os
from pathlib import Path

from envkeeper.core.errors import FileSystemError


def hash_path(path: str | os.PathLike) -> str:
    """
    Return a stable identifier for a path.

    The identifier is the lowercase hex SHA-256 digest of the path string.
    Undecodable bytes in POSIX paths are kept through surrogateescape so two
    distinct paths never collapse to the same identifier.

    Args:
        path: Absolute path to identify.

    Returns:
        64 character hex digest.
    """
    raw = os.fspath(path).encode("utf-8", errors="surrogateescape")
    return hashlib.sha256(raw).hexdigest()


def canonicalize(path: str | os.PathLike) -> Path:
    """
    Resolve a path to its absolute, symlink-free form.

    Raises:
        FileSystemError: If the path does not exist or cannot be resolved.
    """
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        # symlink loops raise RuntimeError before Python 3.13
        raise FileSystemError(str(e)) from e


def is_within_root(path: Path, root: Path) -> bool:
    """Check if a canonical path is the root or one of its descendants."""
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


def modified_millis(stat_result: os.stat_result) -> int:
    """Convert a stat mtime to milliseconds since the epoch, 0 if unavailable."""
    mtime_ns = getattr(stat_result, "st_mtime_ns", None)
    if mtime_ns is None or mtime_ns < 0:
        return 0
    return mtime_ns // 1_000_000


def folder_display_name(folder: Path) -> str:
    """Return a folder's base name, falling back to the full path for roots."""
    return folder.name or str(folder)
