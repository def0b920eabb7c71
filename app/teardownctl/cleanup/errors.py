"""Error taxonomy for the directory teardown step.

Every fatal condition carries the offending path so the caller can log
and diagnose it. Nothing here is retried internally.
"""

from enum import Enum


class TeardownError(Exception):
    """Base exception for teardown step failures."""


class EnumerationError(TeardownError):
    """Raised when the mount table cannot be read."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"failed to list mounts from {source}: {reason}")


class UnmountError(TeardownError):
    """Raised when both the normal and the lazy unmount of a path failed."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        msg = f"failed unmount {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class EraseError(TeardownError):
    """Raised when a runtime directory could not be deleted."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message)


class RemovalOperation(str, Enum):
    """Kind of filesystem operation that failed during recursive removal.

    Attributes:
        UNLINK: Removing a file or directory entry (unlink, rmdir, remove).
        SCAN: Opening or listing a directory.
        STAT: Looking up metadata of an entry.
        OTHER: Any other operation.
    """

    UNLINK = "unlink"
    SCAN = "scan"
    STAT = "stat"
    OTHER = "other"


class RemovalError(OSError):
    """A recursive removal failure tagged with its operation and exact path.

    Attributes:
        operation: Which kind of operation failed.
        path: The exact path the operation failed on.
    """

    def __init__(self, operation: RemovalOperation, path: str, cause: OSError) -> None:
        super().__init__(cause.errno, cause.strerror or str(cause), path)
        self.operation = operation
        self.path = path

    def __str__(self) -> str:
        return f"{self.operation.value} {self.path}: {self.strerror}"
