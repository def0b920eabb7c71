"""Abstract base class for cleanup steps.

This module defines the Step interface through which a cleanup
orchestrator invokes a unit of node teardown.
"""

from abc import ABC, abstractmethod


class Step(ABC):
    """Abstract base class for all cleanup steps.

    A step has a static name used for logging and ordering, and a run
    method that performs the teardown and raises on failure.

    Example:
        >>> step = DirectoriesStep(target)
        >>> try:
        ...     step.run()
        ... except TeardownError as e:
        ...     print(f"{step.name} failed: {e}")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the step name.

        Returns:
            Static identifier of this step.
        """

    @abstractmethod
    def run(self) -> None:
        """Execute the step.

        Raises:
            TeardownError: If the step could not complete.
        """
