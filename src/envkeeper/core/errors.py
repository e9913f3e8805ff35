"""Exception types for envkeeper operations."""


class EnvKeeperError(Exception):
    """Base exception for all envkeeper errors.

    Subclasses set ``kind`` to the stable name callers can branch on when
    errors are marshalled across a process or UI boundary.
    """

    kind = "EnvKeeperError"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.kind, "message": str(self)}


class InvalidRootPathError(EnvKeeperError):
    """Root does not exist or cannot be resolved, or no scan has established one."""

    kind = "InvalidRootPath"

    def __init__(self, message: str = "Invalid root path"):
        super().__init__(message)


class PathNotAllowedError(EnvKeeperError):
    """Path resolves outside the scanned root or was not part of the last scan."""

    kind = "PathNotAllowed"

    def __init__(self, message: str = "Path not allowed"):
        super().__init__(message)


class ScanCanceledError(EnvKeeperError):
    """A scan was stopped through the cancellation flag."""

    kind = "ScanCanceled"

    def __init__(self, message: str = "Scan canceled"):
        super().__init__(message)


class FileSystemError(EnvKeeperError):
    """Underlying filesystem failure.

    ``detail`` is an opaque diagnostic string taken from the originating
    OSError, not a typed sub-taxonomy.
    """

    kind = "IoError"

    def __init__(self, detail: str):
        super().__init__(f"IO error: {detail}")
        self.detail = detail

    @classmethod
    def from_os_error(cls, error: OSError) -> "FileSystemError":
        return cls(str(error))
