"""Node teardown cleanup steps.

This module provides the mount-aware directory teardown: mount table
access, ownership classification, unmounting, and removal of the
runtime's data and run directories.
"""

from teardownctl.cleanup.base import Step
from teardownctl.cleanup.directories import DirectoriesStep
from teardownctl.cleanup.eraser import erase, is_mountpoint_unlink_error
from teardownctl.cleanup.errors import (
    EnumerationError,
    EraseError,
    RemovalError,
    RemovalOperation,
    TeardownError,
    UnmountError,
)
from teardownctl.cleanup.models import MountRecord, OwnershipDecision, TeardownTarget
from teardownctl.cleanup.mounter import Mounter, SystemMounter, UnmountResult
from teardownctl.cleanup.ownership import classify, is_under_path
from teardownctl.cleanup.remover import FilesystemRemover
from teardownctl.cleanup.unmount import unmount_all

__all__ = [
    "DirectoriesStep",
    "EnumerationError",
    "EraseError",
    "FilesystemRemover",
    "MountRecord",
    "Mounter",
    "OwnershipDecision",
    "RemovalError",
    "RemovalOperation",
    "Step",
    "SystemMounter",
    "TeardownError",
    "TeardownTarget",
    "UnmountError",
    "UnmountResult",
    "classify",
    "erase",
    "is_mountpoint_unlink_error",
    "is_under_path",
    "unmount_all",
]
