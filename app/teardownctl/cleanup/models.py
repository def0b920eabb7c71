"""Data models for the directory teardown step.

This module defines the transient structures computed during a single
teardown run: mount table entries, the directories being torn down,
and the ownership classification of each mount.
"""

import os
from dataclasses import dataclass
from enum import Enum


class OwnershipDecision(str, Enum):
    """How a mount point relates to the runtime's managed directories.

    Attributes:
        DATA_DIR_ROOT: The mount is the data directory itself. It is not
            unmounted, only its contents are removed.
        OWNED: The mount lives under the kubelet or data directory and
            must be unmounted before deletion.
        UNRELATED: The mount is outside the managed subtrees.
    """

    DATA_DIR_ROOT = "data_dir_root"
    OWNED = "owned"
    UNRELATED = "unrelated"


@dataclass(frozen=True, slots=True)
class MountRecord:
    """A single active mount point as listed by the mount table.

    Attributes:
        path: Absolute mount point path.
        device: Mounted device or filesystem source.
        fstype: Filesystem type (e.g. ext4, overlay, tmpfs).
        options: Comma-separated mount options.
    """

    path: str
    device: str = "none"
    fstype: str = "none"
    options: str = ""

    def __post_init__(self) -> None:
        """Validate mount record data after initialization."""
        if not self.path:
            msg = "Mount path cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class TeardownTarget:
    """Directories removed by the teardown step.

    Attributes:
        data_dir: Runtime data directory (may itself be a mounted volume).
        run_dir: Runtime run directory for sockets and pid files.
        kubelet_dir: Kubelet subdirectory whose mounts must be released.
    """

    data_dir: str
    run_dir: str
    kubelet_dir: str

    def __post_init__(self) -> None:
        """Validate that every directory is an absolute path."""
        for name in ("data_dir", "run_dir", "kubelet_dir"):
            value = getattr(self, name)
            if not value or not os.path.isabs(value):
                msg = f"{name} must be an absolute path, got {value!r}"
                raise ValueError(msg)

    @classmethod
    def from_dirs(
        cls,
        data_dir: str,
        run_dir: str,
        kubelet_dir: str | None = None,
    ) -> "TeardownTarget":
        """Create a target, defaulting the kubelet directory to <data_dir>/kubelet."""
        if kubelet_dir is None:
            kubelet_dir = os.path.join(data_dir, "kubelet")
        return cls(data_dir=data_dir, run_dir=run_dir, kubelet_dir=kubelet_dir)
