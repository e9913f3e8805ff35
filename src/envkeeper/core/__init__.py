"""
Core Layer - Scanning, path sandboxing, line parsing and atomic writes.
"""

from envkeeper.core.atomic_writer import AtomicWriter, WriteResult
from envkeeper.core.config import (
    DisplayConfig,
    EnvKeeperConfig,
    LoggingConfig,
    ScannerConfig,
    WriterConfig,
    load_config,
)
from envkeeper.core.env_parser import (
    Blank,
    Comment,
    EnvLine,
    Kv,
    KvChange,
    Unknown,
    lines_to_raw,
    parse_env_lines,
)
from envkeeper.core.errors import (
    EnvKeeperError,
    FileSystemError,
    InvalidRootPathError,
    PathNotAllowedError,
    ScanCanceledError,
)
from envkeeper.core.file_scanner import (
    DEFAULT_IGNORED_DIRS,
    EnvFileScanner,
    FileReference,
    FileScannerInterface,
    ProjectGroup,
    ScanOutcome,
    ScanResult,
)
from envkeeper.core.path_sandbox import PathSandbox
from envkeeper.core.path_utils import hash_path

__all__ = [
    # Config
    "EnvKeeperConfig",
    "ScannerConfig",
    "WriterConfig",
    "DisplayConfig",
    "LoggingConfig",
    "load_config",
    # Errors
    "EnvKeeperError",
    "InvalidRootPathError",
    "PathNotAllowedError",
    "ScanCanceledError",
    "FileSystemError",
    # FileScanner
    "FileScannerInterface",
    "EnvFileScanner",
    "FileReference",
    "ProjectGroup",
    "ScanOutcome",
    "ScanResult",
    "DEFAULT_IGNORED_DIRS",
    "hash_path",
    # Sandbox
    "PathSandbox",
    # Parser
    "EnvLine",
    "Blank",
    "Comment",
    "Kv",
    "Unknown",
    "KvChange",
    "parse_env_lines",
    "lines_to_raw",
    # Writer
    "AtomicWriter",
    "WriteResult",
]
