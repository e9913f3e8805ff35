"""
Abstract interfaces for file scanning operations.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from .models import ScanOutcome


class FileScannerInterface(ABC):
    """
    Abstract interface for .env discovery.

    Implementations walk a directory tree and return a complete snapshot or
    raise; they never return partial results.
    """

    @abstractmethod
    def scan(
        self,
        root_path: str | Path,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> ScanOutcome:
        """
        Recursively scan a directory for .env files.

        Args:
            root_path: Root directory to scan
            should_cancel: Polled before each entry; returning True aborts the scan

        Returns:
            ScanOutcome with the grouped result and the allow-list

        Raises:
            InvalidRootPathError: If the root cannot be resolved
            ScanCanceledError: If should_cancel returned True
            FileSystemError: On any I/O error while walking
        """
        pass

    @abstractmethod
    def set_ignored_dirs(self, names: set[str]) -> None:
        """
        Set the directory names pruned during traversal.

        Args:
            names: Exact directory names (case-sensitive)
        """
        pass
