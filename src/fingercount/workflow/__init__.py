"""Analysis workflow: states, intents and the state machine."""

from fingercount.workflow.intents import Analyze, Intent, Reset, Retry, Upload
from fingercount.workflow.machine import WorkflowStateMachine
from fingercount.workflow.state import (
    EmptyState,
    ErrorState,
    LoadingState,
    ReadyState,
    SuccessState,
    WorkflowSnapshot,
    WorkflowState,
    WorkflowStatus,
)

__all__ = [
    "Analyze",
    "EmptyState",
    "ErrorState",
    "Intent",
    "LoadingState",
    "ReadyState",
    "Reset",
    "Retry",
    "SuccessState",
    "Upload",
    "WorkflowSnapshot",
    "WorkflowState",
    "WorkflowStateMachine",
    "WorkflowStatus",
]
