"""
PathSandbox module for envkeeper.

Restricts file access to the inventory of the most recent completed scan.
A candidate path is allowed only when it:
- Resolves (symlinks and relative segments included) inside the scanned root
- Is one of the files that scan discovered

Root, allow-list and cancellation flag form one unit of shared state. The
root and allow-list are always read and replaced together under one lock.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Iterable, Optional

from envkeeper.core.errors import InvalidRootPathError, PathNotAllowedError
from envkeeper.core.path_utils import canonicalize, is_within_root

logger = logging.getLogger(__name__)


class PathSandbox:
    """
    Allow-list of files a caller may read or write.

    One instance is owned by the long-lived service and shared by every
    operation; it is safe to use from multiple threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._root: Optional[Path] = None
        self._allowed: frozenset[Path] = frozenset()
        self._cancel = threading.Event()

    def install(self, root: Path, allowed_paths: Iterable[Path]) -> None:
        """
        Replace the root and allow-list in one critical section.

        Args:
            root: Canonical root of the completed scan
            allowed_paths: Canonical paths of every file the scan returned
        """
        allowed = frozenset(allowed_paths)
        with self._lock:
            self._root = root
            self._allowed = allowed
        logger.debug(f"Sandbox installed for {root} with {len(allowed)} allowed files")

    def check(self, candidate: str | os.PathLike) -> Path:
        """
        Check that a path may be accessed.

        Args:
            candidate: Path as supplied by the caller

        Returns:
            The canonical path of the allowed file

        Raises:
            InvalidRootPathError: If no scan has established a root yet
            FileSystemError: If the candidate cannot be resolved
            PathNotAllowedError: If the candidate is outside the root or was
                not discovered by the last scan
        """
        root, allowed = self._snapshot()
        if root is None:
            raise InvalidRootPathError("No root has been scanned")

        resolved = canonicalize(candidate)

        if not is_within_root(resolved, root):
            logger.debug(f"Rejected path outside root {root}: {candidate}")
            raise PathNotAllowedError(f"Path not allowed: {candidate}")

        if resolved not in allowed:
            logger.debug(f"Rejected path missing from scan inventory: {candidate}")
            raise PathNotAllowedError(f"Path not allowed: {candidate}")

        return resolved

    def _snapshot(self) -> tuple[Optional[Path], frozenset[Path]]:
        with self._lock:
            return self._root, self._allowed

    @property
    def root(self) -> Optional[Path]:
        """Return the root of the last completed scan, or None."""
        return self._snapshot()[0]

    @property
    def allowed_paths(self) -> frozenset[Path]:
        """Return the current allow-list."""
        return self._snapshot()[1]

    def request_cancel(self) -> None:
        """Ask a running scan to stop. Fire-and-forget."""
        self._cancel.set()

    def clear_cancel(self) -> None:
        """Reset the cancellation flag before a new scan."""
        self._cancel.clear()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel.is_set()
