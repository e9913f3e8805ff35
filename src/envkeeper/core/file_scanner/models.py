"""
Data models and constants for the file scanner module.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

# Directory names pruned before descent (exact, case-sensitive match)
DEFAULT_IGNORED_DIRS: frozenset[str] = frozenset([
    # JavaScript/Node
    "node_modules",
    ".next",
    ".turbo",
    # VCS
    ".git",
    # Build outputs
    "dist",
    "build",
    "target",
    # Tool caches
    ".cache",
])

# ".env" or ".env.<suffix>" with a non-empty suffix
ENV_FILE_PATTERN = re.compile(r"^\.env(\..+)?$")


def is_env_file_name(name: str) -> bool:
    """Check if a base name follows the .env naming convention."""
    return ENV_FILE_PATTERN.match(name) is not None


@dataclass(frozen=True)
class FileReference:
    """
    One discovered .env file.

    Attributes:
        id: SHA-256 hex digest of the absolute path
        absolute_path: Absolute path to the file
        file_name: Base name of the file
        folder_path: Absolute path of the containing folder
        size: File size in bytes
        modified_at: Modification time in milliseconds since the epoch, 0 if unavailable
    """

    id: str
    absolute_path: str
    file_name: str
    folder_path: str
    size: int
    modified_at: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "absolutePath": self.absolute_path,
            "fileName": self.file_name,
            "folderPath": self.folder_path,
            "size": self.size,
            "modifiedAt": self.modified_at,
        }


@dataclass(frozen=True)
class ProjectGroup:
    """
    A folder and the .env files directly inside it.

    Attributes:
        id: SHA-256 hex digest of the folder path
        name: Folder base name, or the full path when it has none
        folder_path: Absolute folder path
        env_files: Files sorted by file name
    """

    id: str
    name: str
    folder_path: str
    env_files: tuple[FileReference, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "rootPath": self.folder_path,
            "envFiles": [f.to_dict() for f in self.env_files],
        }


@dataclass(frozen=True)
class ScanResult:
    """Snapshot of one completed scan: the canonical root and its groups."""

    root_path: str
    groups: tuple[ProjectGroup, ...]

    @property
    def file_count(self) -> int:
        return sum(len(group.env_files) for group in self.groups)

    def to_dict(self) -> dict:
        return {
            "rootPath": self.root_path,
            "groups": [g.to_dict() for g in self.groups],
        }


@dataclass(frozen=True)
class ScanOutcome:
    """
    Everything a completed scan produced.

    The allow-list travels next to the result so the caller can install both
    into a sandbox in one step.
    """

    root: Path
    result: ScanResult
    allowed_paths: frozenset[Path] = field(default_factory=frozenset)
