from .orchestrator import (
    SwapStakeWorkflow,
    WorkflowConfig,
    WorkflowFailure,
    WorkflowResult,
    WorkflowState,
    WorkflowStep,
    WorkflowSuccess,
)

__all__ = (
    "SwapStakeWorkflow",
    "WorkflowConfig",
    "WorkflowFailure",
    "WorkflowResult",
    "WorkflowState",
    "WorkflowStep",
    "WorkflowSuccess",
)
