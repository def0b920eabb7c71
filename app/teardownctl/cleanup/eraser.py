"""Deletion of the runtime's data and run directories."""

import logging
import os

from teardownctl.cleanup.errors import EraseError, RemovalError, RemovalOperation
from teardownctl.cleanup.models import TeardownTarget
from teardownctl.cleanup.remover import FilesystemRemover

logger = logging.getLogger(__name__)


def is_mountpoint_unlink_error(error: BaseException, directory: str) -> bool:
    """Check if a removal failed only because the directory is a mount point.

    Removing the contents of a mounted directory succeeds, but the final
    unlink of the directory itself cannot. That failure is reported for
    exactly the directory's own path; the same operation failing on any
    subpath is a real error.

    Args:
        error: Failure raised by the remover.
        directory: Directory that was being removed.

    Returns:
        True if the error is an unlink failure on directory itself.
    """
    if not isinstance(error, RemovalError):
        return False
    if error.operation != RemovalOperation.UNLINK:
        return False
    return os.path.normpath(error.path) == os.path.normpath(directory)


def erase(target: TeardownTarget, data_dir_mounted: bool, remover: FilesystemRemover) -> None:
    """Delete the data directory, then the run directory.

    Args:
        target: Directories being torn down.
        data_dir_mounted: Whether the data directory is itself a mount point.
        remover: Capability used for recursive removal.

    Raises:
        EraseError: If either directory could not be deleted, except for
            the mounted data directory root refusing to be unlinked.
    """
    if data_dir_mounted:
        logger.debug("Removing the contents of mounted data directory %s", target.data_dir)
    else:
        logger.debug("Removing generated data directory %s", target.data_dir)

    try:
        remover.remove_all(target.data_dir)
    except OSError as e:
        if not data_dir_mounted:
            msg = f"failed to delete generated data directory: {e}"
            raise EraseError(target.data_dir, msg) from e
        if not is_mountpoint_unlink_error(e, target.data_dir):
            msg = f"failed to delete contents of mounted data directory: {e}"
            raise EraseError(target.data_dir, msg) from e
        logger.info("Kept mount point %s, its contents were removed", target.data_dir)

    logger.debug("Removing generated run directory %s", target.run_dir)
    try:
        remover.remove_all(target.run_dir)
    except OSError as e:
        msg = f"failed to delete {target.run_dir}: {e}"
        raise EraseError(target.run_dir, msg) from e
