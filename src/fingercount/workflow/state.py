"""Workflow states and the snapshot handed to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fingercount.analysis.types import AnalysisResult
from fingercount.images.types import ImageAsset


class WorkflowStatus(str, Enum):
    """Discriminator for the active state."""

    EMPTY = "empty"
    READY = "ready"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class EmptyState:
    """No image selected."""

    kind: WorkflowStatus = WorkflowStatus.EMPTY


@dataclass(frozen=True, slots=True)
class ReadyState:
    """An image is selected and can be analyzed."""

    kind: WorkflowStatus = WorkflowStatus.READY


@dataclass(frozen=True, slots=True)
class LoadingState:
    """An analysis request is in flight."""

    kind: WorkflowStatus = WorkflowStatus.LOADING


@dataclass(frozen=True, slots=True)
class SuccessState:
    result: AnalysisResult
    kind: WorkflowStatus = WorkflowStatus.SUCCESS


@dataclass(frozen=True, slots=True)
class ErrorState:
    message: str
    kind: WorkflowStatus = WorkflowStatus.ERROR


WorkflowState = EmptyState | ReadyState | LoadingState | SuccessState | ErrorState


@dataclass(frozen=True, slots=True)
class WorkflowSnapshot:
    """Immutable view of the workflow at one point in time."""

    state: WorkflowState
    image: ImageAsset | None = None
    generation: int = 0

    @property
    def status(self) -> WorkflowStatus:
        return self.state.kind

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def can_analyze(self) -> bool:
        return self.image is not None and self.status != WorkflowStatus.LOADING

    @property
    def can_retry(self) -> bool:
        return self.image is not None and self.status == WorkflowStatus.ERROR

    @property
    def result_text(self) -> str | None:
        if isinstance(self.state, SuccessState):
            return self.state.result.text
        return None

    @property
    def error_message(self) -> str | None:
        if isinstance(self.state, ErrorState):
            return self.state.message
        return None
