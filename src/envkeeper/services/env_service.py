"""
Env service - the operation surface for scanning, reading and writing .env files.

Every read and write passes through the PathSandbox before the filesystem is
touched. A scan replaces the sandbox only after it completes; a canceled or
failed scan leaves the previous root and allow-list in place.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from envkeeper.core.atomic_writer import AtomicWriter, WriteResult
from envkeeper.core.env_parser import EnvLine, parse_env_lines
from envkeeper.core.errors import FileSystemError
from envkeeper.core.file_scanner import (
    EnvFileScanner,
    FileReference,
    FileScannerInterface,
    ScanResult,
)
from envkeeper.core.path_sandbox import PathSandbox
from envkeeper.core.path_utils import hash_path, modified_millis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteOptions:
    """Options for write_document."""

    create_backup: bool = False


@dataclass(frozen=True)
class EnvDocument:
    """A discovered file and its classified lines."""

    file: FileReference
    lines: tuple[EnvLine, ...]

    def to_dict(self) -> dict:
        return {
            "file": self.file.to_dict(),
            "lines": [line.to_dict() for line in self.lines],
        }


class EnvService:
    """
    Service for discovering, reading and rewriting .env files.

    Holds the PathSandbox shared by all operations. Methods are synchronous
    and may be called concurrently from different threads.
    """

    def __init__(
        self,
        scanner: Optional[FileScannerInterface] = None,
        writer: Optional[AtomicWriter] = None,
        sandbox: Optional[PathSandbox] = None,
    ):
        """
        Initialize the EnvService.

        Args:
            scanner: Scanner used by scan(). If None, uses EnvFileScanner defaults.
            writer: Writer used by write_document(). If None, uses AtomicWriter defaults.
            sandbox: Shared sandbox state. If None, a fresh empty sandbox is created.
        """
        self._scanner = scanner or EnvFileScanner()
        self._writer = writer or AtomicWriter()
        self._sandbox = sandbox or PathSandbox()

    @property
    def sandbox(self) -> PathSandbox:
        return self._sandbox

    def scan(self, root_path: str | Path) -> ScanResult:
        """
        Scan a root for .env files and make them the new allow-list.

        Args:
            root_path: Directory to scan

        Returns:
            ScanResult grouped by containing folder

        Raises:
            InvalidRootPathError: If the root does not exist or is not a directory
            ScanCanceledError: If cancel_scan() was called while scanning
            FileSystemError: On any I/O error while walking
        """
        self._sandbox.clear_cancel()
        outcome = self._scanner.scan(
            root_path, should_cancel=lambda: self._sandbox.cancel_requested
        )
        self._sandbox.install(outcome.root, outcome.allowed_paths)
        return outcome.result

    def cancel_scan(self) -> None:
        """Ask a running scan to stop."""
        logger.debug("Scan cancellation requested")
        self._sandbox.request_cancel()

    def read_document(self, path: str | Path) -> EnvDocument:
        """
        Read and classify an allowed .env file.

        Args:
            path: Path to a file discovered by the last scan

        Returns:
            EnvDocument with file metadata and lines

        Raises:
            InvalidRootPathError: If no scan has completed yet
            PathNotAllowedError: If the path is not in the current allow-list
            FileSystemError: If the file cannot be read or decoded
        """
        resolved = self._sandbox.check(path)

        try:
            text = resolved.read_bytes().decode("utf-8")
            file_stat = resolved.stat()
        except (OSError, UnicodeDecodeError) as e:
            raise FileSystemError(str(e)) from e

        file = FileReference(
            id=hash_path(resolved),
            absolute_path=str(resolved),
            file_name=resolved.name,
            folder_path=str(resolved.parent),
            size=file_stat.st_size,
            modified_at=modified_millis(file_stat),
        )
        return EnvDocument(file=file, lines=tuple(parse_env_lines(text)))

    def write_document(
        self,
        path: str | Path,
        content: str,
        options: Optional[WriteOptions] = None,
    ) -> WriteResult:
        """
        Atomically replace an allowed .env file's content.

        Args:
            path: Path to a file discovered by the last scan
            content: Full new content
            options: Write options (backup). Defaults to no backup.

        Returns:
            WriteResult with the backup path, if any

        Raises:
            InvalidRootPathError: If no scan has completed yet
            PathNotAllowedError: If the path is not in the current allow-list
            FileSystemError: If the backup, write or rename fails
        """
        options = options or WriteOptions()
        resolved = self._sandbox.check(path)
        return self._writer.write(resolved, content, create_backup=options.create_backup)
