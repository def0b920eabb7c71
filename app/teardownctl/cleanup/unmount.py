"""Unmounting of runtime-owned mount points.

Mounts are released newest first so nested and bind mounts are detached
before their parents. A failed unmount falls back to a lazy unmount; if
that fails too the whole teardown is aborted before anything is deleted.

If a bind mount under the data directory is shared (MS_SHARED), the
unmount propagates to its peers, which may live outside the data
directory. Whoever made the mount shared asked for that behaviour.
"""

import logging
from collections.abc import Sequence

from teardownctl.cleanup.errors import UnmountError
from teardownctl.cleanup.models import MountRecord, OwnershipDecision, TeardownTarget
from teardownctl.cleanup.mounter import Mounter
from teardownctl.cleanup.ownership import classify

logger = logging.getLogger(__name__)


def unmount_all(
    records: Sequence[MountRecord],
    target: TeardownTarget,
    mounter: Mounter,
) -> bool:
    """Unmount every mount point owned by the runtime.

    The data directory itself is never unmounted: the runtime did not
    mount it, so it is only flagged and its contents are removed later.

    Args:
        records: Mount table entries, oldest first.
        target: Directories being torn down.
        mounter: Capability used to release mounts.

    Returns:
        True if the data directory is itself a mount point.

    Raises:
        UnmountError: If both the normal and lazy unmount of an owned
            mount failed.
    """
    data_dir_mounted = False

    for record in reversed(records):
        decision = classify(record, target)

        if decision == OwnershipDecision.DATA_DIR_ROOT:
            data_dir_mounted = True
            continue

        if decision != OwnershipDecision.OWNED:
            continue

        logger.debug("%s is mounted, attempting to unmount", record.path)
        result = mounter.unmount(record.path)
        if result.success:
            continue

        logger.warning("Unmount of %s failed (%s), lazy unmounting", record.path, result.error)
        lazy_result = mounter.unmount_lazy(record.path)
        if not lazy_result.success:
            raise UnmountError(record.path, lazy_result.error)

    return data_dir_mounted
