"""Mount table access and unmount capability.

This module defines the Mounter interface consumed by the teardown step
and the system implementation backed by the kernel mount table and the
umount binary.
"""

import logging
import re
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from teardownctl.cleanup.errors import EnumerationError
from teardownctl.cleanup.models import MountRecord
from teardownctl.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

PROC_MOUNTS = "/proc/mounts"

# The kernel escapes space, tab, newline and backslash as \ooo.
_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


@dataclass(frozen=True, slots=True)
class UnmountResult:
    """Result of a single unmount attempt.

    Attributes:
        path: Mount point that was operated on.
        success: Whether the mount point was released.
        error: Error message if the attempt failed, None otherwise.
        lazy: Whether this was a lazy (detached) unmount.
    """

    path: str
    success: bool
    error: str | None = None
    lazy: bool = False


class Mounter(ABC):
    """Abstract base class for mount table access.

    A mounter lists the currently active mount points and releases them.
    The list order is the order the OS reports mounts in, which on Linux
    follows mount chronology (oldest first).

    Example:
        >>> mounter = SystemMounter()
        >>> for record in reversed(mounter.list()):
        ...     result = mounter.unmount(record.path)
        ...     if not result.success:
        ...         mounter.unmount_lazy(record.path)
    """

    @abstractmethod
    def list(self) -> list[MountRecord]:
        """Return the active mount points, oldest first.

        Raises:
            EnumerationError: If the mount table cannot be read.
        """

    @abstractmethod
    def unmount(self, path: str) -> UnmountResult:
        """Unmount a mount point. May fail if the mount is busy."""

    @abstractmethod
    def unmount_lazy(self, path: str) -> UnmountResult:
        """Detach a mount point, deferring release until it is no longer busy."""

    def is_available(self) -> bool:
        """Check if the unmount capability can be used on this system."""
        return True


def unescape_mount_field(field: str) -> str:
    """Decode the octal escapes the kernel uses in mount table fields.

    Args:
        field: Raw field from /proc/mounts (e.g. "/mnt/my\\040disk").

    Returns:
        Decoded field (e.g. "/mnt/my disk").
    """
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), field)


def parse_mounts(content: str, source: str = PROC_MOUNTS) -> list[MountRecord]:
    """Parse mount table content in /proc/mounts format.

    Args:
        content: Full text of the mount table.
        source: Name of the table, used in log messages.

    Returns:
        MountRecords in the order they appear in the table.
    """
    records: list[MountRecord] = []
    for line in content.splitlines():
        line = line.strip()
        if not line:
            continue

        parts = line.split()
        if len(parts) != 6:
            logger.warning("Skipping malformed %s line: %s", source, line)
            continue

        device, path, fstype, options = parts[:4]
        records.append(
            MountRecord(
                path=unescape_mount_field(path),
                device=unescape_mount_field(device),
                fstype=fstype,
                options=options,
            )
        )
    return records


class SystemMounter(Mounter):
    """Mounter backed by the kernel mount table and the umount binary.

    Attributes:
        mounts_file: Path of the mount table to read.
    """

    def __init__(self, mounts_file: str = PROC_MOUNTS) -> None:
        """Initialize the SystemMounter.

        Args:
            mounts_file: Mount table to read, /proc/mounts by default.
        """
        self._mounts_file = mounts_file

    @property
    def mounts_file(self) -> str:
        """Path of the mount table this mounter reads."""
        return self._mounts_file

    def is_available(self) -> bool:
        """Check if the umount binary is available."""
        return command_exists("umount")

    def list(self) -> list[MountRecord]:
        """Read and parse the mount table.

        Returns:
            MountRecords in the order the kernel lists them.

        Raises:
            EnumerationError: If the mount table cannot be read.
        """
        try:
            content = Path(self._mounts_file).read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise EnumerationError(self._mounts_file, str(e)) from e

        return parse_mounts(content, source=self._mounts_file)

    def unmount(self, path: str) -> UnmountResult:
        """Unmount a mount point with umount."""
        return self._run_umount(path, lazy=False)

    def unmount_lazy(self, path: str) -> UnmountResult:
        """Detach a mount point with umount -l."""
        return self._run_umount(path, lazy=True)

    def _run_umount(self, path: str, *, lazy: bool) -> UnmountResult:
        """Run umount for a single path.

        No timeout is applied; bounding the wait is up to the caller.

        Args:
            path: Mount point to release.
            lazy: If True, pass -l to detach the mount.

        Returns:
            UnmountResult describing the outcome.
        """
        args = ["umount", "-l", path] if lazy else ["umount", path]

        try:
            result = run_command(args, timeout=None)
        except (OSError, subprocess.SubprocessError) as e:
            return UnmountResult(path=path, success=False, error=str(e), lazy=lazy)

        if not result.success:
            return UnmountResult(path=path, success=False, error=result.error_message, lazy=lazy)

        return UnmountResult(path=path, success=True, lazy=lazy)
