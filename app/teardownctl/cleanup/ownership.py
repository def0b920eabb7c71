"""Ownership classification of mount points.

Decides which mount points belong to the runtime's managed subtrees.
Containment is a relative-path test rather than a string-prefix match,
so /var/lib/k0s2 is never treated as living under /var/lib/k0s.
"""

import os

from teardownctl.cleanup.models import MountRecord, OwnershipDecision, TeardownTarget


def is_under_path(path: str, base: str) -> bool:
    """Check if a path is equal to or below a base directory.

    Pure path arithmetic, the filesystem is never consulted.

    Args:
        path: Path to test.
        base: Candidate ancestor directory.

    Returns:
        True if path is base itself or one of its descendants.
    """
    try:
        rel = os.path.relpath(path, base)
    except ValueError:
        return False
    if rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return False
    return not os.path.isabs(rel)


def classify(record: MountRecord, target: TeardownTarget) -> OwnershipDecision:
    """Classify a mount point against the teardown target.

    Args:
        record: Mount table entry to classify.
        target: Directories being torn down.

    Returns:
        DATA_DIR_ROOT if the mount is the data directory itself,
        OWNED if it lives under the kubelet or data directory,
        UNRELATED otherwise.
    """
    path = os.path.normpath(record.path)
    data_dir = os.path.normpath(target.data_dir)

    if path == data_dir:
        return OwnershipDecision.DATA_DIR_ROOT

    if is_under_path(path, target.kubelet_dir) or is_under_path(path, data_dir):
        return OwnershipDecision.OWNED

    return OwnershipDecision.UNRELATED
