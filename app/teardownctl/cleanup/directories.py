"""Directory teardown step.

Releases every mount the runtime left under its kubelet and data
directories, then deletes the data and run directories.
"""

import logging

from teardownctl.cleanup.base import Step
from teardownctl.cleanup.eraser import erase
from teardownctl.cleanup.models import TeardownTarget
from teardownctl.cleanup.mounter import Mounter, SystemMounter
from teardownctl.cleanup.remover import FilesystemRemover
from teardownctl.cleanup.unmount import unmount_all

logger = logging.getLogger(__name__)


class DirectoriesStep(Step):
    """Removes kubelet mounts and deletes the generated data and run directories.

    Nothing is deleted unless every owned mount was released first, so
    persistent volumes still mounted by the workload are never touched.

    Attributes:
        target: Directories being torn down.
    """

    def __init__(
        self,
        target: TeardownTarget,
        mounter: Mounter | None = None,
        remover: FilesystemRemover | None = None,
    ) -> None:
        """Initialize the step.

        Args:
            target: Directories being torn down.
            mounter: Mount capability. Defaults to the system mount table.
            remover: Removal capability. Defaults to FilesystemRemover.
        """
        self._target = target
        self._mounter = mounter if mounter is not None else SystemMounter()
        self._remover = remover if remover is not None else FilesystemRemover()

    @property
    def name(self) -> str:
        """Return the step name."""
        return "remove directories step"

    @property
    def target(self) -> TeardownTarget:
        """Directories being torn down."""
        return self._target

    def run(self) -> None:
        """Unmount owned mounts, then delete the data and run directories.

        Raises:
            EnumerationError: If the mount table cannot be read.
            UnmountError: If an owned mount could not be released.
            EraseError: If a directory could not be deleted.
        """
        logger.info("Running %s", self.name)

        records = self._mounter.list()
        data_dir_mounted = unmount_all(records, self._target, self._mounter)
        erase(self._target, data_dir_mounted, self._remover)

        logger.info("Finished %s", self.name)
