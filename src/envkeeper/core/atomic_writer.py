"""
Atomic file replacement with optional timestamped backups.

Sequence:
1. Copy the current file to ``.<name>.backup-<YYYYMMDDHHMMSS>`` (optional)
2. Write the new content to ``.<name>.tmp-<YYYYMMDDHHMMSS>-<hex>``, flush, fsync
3. os.replace the temp file over the target

The rename is the only commit point. A failure before it leaves the target
untouched and the temp file is removed.
"""

import logging
import os
import secrets
import shutil
import threading
import weakref
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from envkeeper.core.errors import FileSystemError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def backup_name(file_name: str, timestamp: str) -> str:
    return f".{file_name}.backup-{timestamp}"


def temp_name(file_name: str, timestamp: str) -> str:
    # Random suffix keeps writes within the same second from sharing a temp file
    return f".{file_name}.tmp-{timestamp}-{secrets.token_hex(4)}"


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of a committed write.

    Attributes:
        path: Target file that was replaced
        backup_path: Backup copy, or None when no backup was requested
        bytes_written: Size of the new content in bytes
    """

    path: Path
    backup_path: Optional[Path]
    bytes_written: int


class AtomicWriter:
    """
    Replaces file content without ever exposing a half-written file.

    Thread-safe: writes to the same path are serialized by a per-path lock.
    Writes to different paths run independently.
    """

    def __init__(
        self,
        preserve_mode: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the AtomicWriter.

        Args:
            preserve_mode: Copy the target's permission bits onto the new file
            clock: Source of the current local time for artifact names.
                   If None, uses datetime.now.
        """
        self._preserve_mode = preserve_mode
        self._clock = clock or datetime.now
        # Entries disappear once no write holds the lock
        self._locks: weakref.WeakValueDictionary[Path, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    def _lock_for(self, path: Path) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(path)
            if lock is None:
                lock = threading.Lock()
                self._locks[path] = lock
            return lock

    def write(self, path: Path, content: str, create_backup: bool = False) -> WriteResult:
        """
        Atomically replace a file's content.

        Args:
            path: Target file (already checked against the sandbox)
            content: New content, written as UTF-8 without newline translation
            create_backup: Copy the current file aside first

        Returns:
            WriteResult describing the commit

        Raises:
            FileSystemError: If the backup, write, flush or rename fails
        """
        path = Path(path)
        data = content.encode("utf-8")

        with self._lock_for(path):
            timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
            backup_path = self._create_backup(path, timestamp) if create_backup else None
            self._replace(path, data, timestamp)

        logger.info(f"Wrote {len(data)} bytes to {path}")
        return WriteResult(path=path, backup_path=backup_path, bytes_written=len(data))

    def _create_backup(self, path: Path, timestamp: str) -> Path:
        """Copy the target next to itself, never overwriting an earlier backup."""
        candidate = path.with_name(backup_name(path.name, timestamp))
        counter = 1
        while candidate.exists():
            candidate = path.with_name(f"{backup_name(path.name, timestamp)}-{counter}")
            counter += 1

        try:
            shutil.copy2(path, candidate)
        except OSError as e:
            raise FileSystemError.from_os_error(e) from e

        logger.debug(f"Backed up {path} to {candidate}")
        return candidate

    def _replace(self, path: Path, data: bytes, timestamp: str) -> None:
        temp_path = path.with_name(temp_name(path.name, timestamp))
        try:
            with open(temp_path, "xb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())

            if self._preserve_mode and path.exists():
                shutil.copymode(path, temp_path)

            os.replace(temp_path, path)
        except OSError as e:
            self._discard(temp_path)
            raise FileSystemError.from_os_error(e) from e

    @staticmethod
    def _discard(temp_path: Path) -> None:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to remove temp file {temp_path}: {e}")
