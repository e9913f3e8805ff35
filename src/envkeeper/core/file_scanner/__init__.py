"""
FileScanner module for envkeeper.

Provides recursive .env discovery with directory pruning, cooperative
cancellation and deterministic grouping by containing folder.
"""

from .interfaces import FileScannerInterface
from .models import (
    DEFAULT_IGNORED_DIRS,
    ENV_FILE_PATTERN,
    FileReference,
    ProjectGroup,
    ScanOutcome,
    ScanResult,
    is_env_file_name,
)
from .scanner import EnvFileScanner

__all__ = [
    # Main classes
    "EnvFileScanner",
    "FileScannerInterface",
    # Models
    "FileReference",
    "ProjectGroup",
    "ScanOutcome",
    "ScanResult",
    # Naming
    "ENV_FILE_PATTERN",
    "is_env_file_name",
    # Constants
    "DEFAULT_IGNORED_DIRS",
]
