"""Recursive directory removal with structured failures.

Wraps shutil.rmtree so every failure is reported as a RemovalError that
names the failing operation and the exact path, instead of a bare
OSError whose origin has to be guessed from its message.
"""

import logging
import os
import shutil
from collections.abc import Callable
from typing import Any

from teardownctl.cleanup.errors import RemovalError, RemovalOperation

logger = logging.getLogger(__name__)

_OPERATIONS: dict[str, RemovalOperation] = {
    "unlink": RemovalOperation.UNLINK,
    "remove": RemovalOperation.UNLINK,
    "rmdir": RemovalOperation.UNLINK,
    "open": RemovalOperation.SCAN,
    "close": RemovalOperation.SCAN,
    "scandir": RemovalOperation.SCAN,
    "listdir": RemovalOperation.SCAN,
    "lstat": RemovalOperation.STAT,
    "stat": RemovalOperation.STAT,
    "fstat": RemovalOperation.STAT,
    "islink": RemovalOperation.STAT,
}


def operation_for(func: Callable[..., Any]) -> RemovalOperation:
    """Map the function that failed inside rmtree to a removal operation."""
    return _OPERATIONS.get(getattr(func, "__name__", ""), RemovalOperation.OTHER)


class FilesystemRemover:
    """Recursively removes directory trees.

    Removal keeps going past individual failures so that as much as
    possible is deleted, then reports the first failure. A path that does
    not exist is not an error.
    """

    def remove_all(self, path: str) -> None:
        """Remove a path and everything below it.

        Args:
            path: Absolute path of the file or directory to remove.

        Raises:
            RemovalError: For the first entry that could not be removed.
        """
        if not os.path.lexists(path):
            logger.debug("%s does not exist, nothing to remove", path)
            return

        if not os.path.isdir(path) or os.path.islink(path):
            try:
                os.unlink(path)
            except FileNotFoundError:
                return
            except OSError as e:
                raise RemovalError(RemovalOperation.UNLINK, path, e) from e
            return

        failures: list[RemovalError] = []

        def on_error(func: Callable[..., Any], failed_path: str, exc: BaseException) -> None:
            if not isinstance(exc, OSError):
                raise exc
            error = self.tag_error(func, failed_path, exc)
            if error is not None:
                failures.append(error)

        shutil.rmtree(path, onexc=on_error)

        if failures:
            first = failures[0]
            if len(failures) > 1:
                logger.debug("%d entries under %s could not be removed", len(failures), path)
            raise first

    @staticmethod
    def tag_error(
        func: Callable[..., Any],
        failed_path: str,
        exc: OSError,
    ) -> RemovalError | None:
        """Convert an rmtree failure into a RemovalError.

        Entries that vanished while removing are not failures.

        Args:
            func: The os function that raised.
            failed_path: The exact path the function failed on.
            exc: The raised error.

        Returns:
            The tagged RemovalError, or None if the failure is ignorable.
        """
        if isinstance(exc, FileNotFoundError):
            return None
        error = RemovalError(operation_for(func), failed_path, exc)
        error.__cause__ = exc
        return error
