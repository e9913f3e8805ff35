"""
EnvFileScanner implementation for recursive .env discovery.
"""

import logging
import stat
from pathlib import Path
from typing import Callable, Iterable, Optional

from envkeeper.core.errors import FileSystemError, InvalidRootPathError, ScanCanceledError
from envkeeper.core.path_utils import (
    canonicalize,
    folder_display_name,
    hash_path,
    modified_millis,
)

from .interfaces import FileScannerInterface
from .models import (
    DEFAULT_IGNORED_DIRS,
    FileReference,
    ProjectGroup,
    ScanOutcome,
    ScanResult,
    is_env_file_name,
)

logger = logging.getLogger(__name__)


def _never_cancel() -> bool:
    return False


class EnvFileScanner(FileScannerInterface):
    """
    Concrete implementation of FileScannerInterface.

    Provides depth-first directory scanning with:
    - Pruning of noise directories by exact name before descent
    - .env naming convention filtering
    - Symlinks never followed (neither directories nor files)
    - Cooperative cancellation checked before every entry
    - All-or-nothing results: any I/O error aborts the scan
    """

    def __init__(self, ignored_dirs: Optional[Iterable[str]] = None):
        """
        Initialize the EnvFileScanner.

        Args:
            ignored_dirs: Directory names to prune. If None, uses DEFAULT_IGNORED_DIRS.
        """
        self._ignored_dirs: frozenset[str] = (
            frozenset(ignored_dirs) if ignored_dirs is not None else DEFAULT_IGNORED_DIRS
        )

    @property
    def ignored_dirs(self) -> frozenset[str]:
        return self._ignored_dirs

    def set_ignored_dirs(self, names: set[str]) -> None:
        """Set the directory names pruned during traversal."""
        self._ignored_dirs = frozenset(names)

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
        """
        try:
            root = Path(root_path).resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise InvalidRootPathError(f"Invalid root path: {root_path}") from e

        if not root.is_dir():
            raise InvalidRootPathError(f"Root path is not a directory: {root_path}")

        cancel = should_cancel or _never_cancel
        folders: dict[Path, list[FileReference]] = {}
        allowed: set[Path] = set()

        self._walk(root, folders, allowed, cancel)

        result = ScanResult(root_path=str(root), groups=self._build_groups(folders))
        logger.info(
            f"Scanned {root}: {result.file_count} env files in {len(result.groups)} folders"
        )
        return ScanOutcome(root=root, result=result, allowed_paths=frozenset(allowed))

    def _walk(
        self,
        root: Path,
        folders: dict[Path, list[FileReference]],
        allowed: set[Path],
        cancel: Callable[[], bool],
    ) -> None:
        """
        Walk the tree under root with an explicit stack of directories.

        Args:
            root: Canonical root directory
            folders: Discovered files keyed by containing folder
            allowed: Canonical paths of discovered files
            cancel: Cancellation predicate
        """
        pending = [root]
        while pending:
            current_path = pending.pop()
            if cancel():
                raise ScanCanceledError()

            try:
                entries = sorted(current_path.iterdir(), key=lambda p: p.name)
            except OSError as e:
                raise FileSystemError.from_os_error(e) from e

            subdirs: list[Path] = []
            for entry in entries:
                if cancel():
                    logger.debug(f"Scan canceled at {entry}")
                    raise ScanCanceledError()

                try:
                    entry_stat = entry.lstat()
                except OSError as e:
                    raise FileSystemError.from_os_error(e) from e

                mode = entry_stat.st_mode
                if stat.S_ISDIR(mode):
                    if entry.name in self._ignored_dirs:
                        logger.debug(f"Pruning ignored directory: {entry}")
                        continue
                    subdirs.append(entry)
                elif stat.S_ISREG(mode):
                    if not is_env_file_name(entry.name):
                        continue
                    folders.setdefault(current_path, []).append(
                        self._file_reference(entry, current_path, entry_stat)
                    )
                    allowed.add(canonicalize(entry))
                else:
                    logger.debug(f"Skipping non-regular entry: {entry}")

            # Reversed so subdirectories are visited in name order
            pending.extend(reversed(subdirs))

    @staticmethod
    def _file_reference(path: Path, folder: Path, entry_stat) -> FileReference:
        return FileReference(
            id=hash_path(path),
            absolute_path=str(path),
            file_name=path.name,
            folder_path=str(folder),
            size=entry_stat.st_size,
            modified_at=modified_millis(entry_stat),
        )

    @staticmethod
    def _build_groups(folders: dict[Path, list[FileReference]]) -> tuple[ProjectGroup, ...]:
        """Sort files per folder, then folders by display name."""
        groups = [
            ProjectGroup(
                id=hash_path(folder),
                name=folder_display_name(folder),
                folder_path=str(folder),
                env_files=tuple(sorted(files, key=lambda f: f.file_name)),
            )
            for folder, files in folders.items()
        ]
        groups.sort(key=lambda g: (g.name, g.folder_path))
        return tuple(groups)
