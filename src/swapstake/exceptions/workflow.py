from typing import Any

from swapstake.exceptions.base import SwapStakeError


class WorkflowError(SwapStakeError):
    """
    Exception raised by the workflow orchestrator.
    """


class WorkflowCancelled(WorkflowError):
    """
    Raised when cancellation was requested before the next transaction was submitted.
    """

    def __init__(self, step: str) -> None:
        self.step = step
        super().__init__(message=f"Workflow cancelled before step '{step}'.")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.step,)
