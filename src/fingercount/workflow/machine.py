"""Workflow state machine.

Owns the current image asset and workflow state. Every mutation goes
through ``dispatch``; the mutating sections never span an ``await``, so on a
single event loop they apply atomically. The only suspension points are
encoding the selected file and the model call.

Each analysis and reset bumps a generation counter, and so does every upload
when it lands. An analysis result is applied only if its generation is still
current, so a late response from a superseded request can never overwrite
newer state. Uploads carry their own token, bumped by each upload and by
reset, so starting an analysis never discards a file that is still encoding.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from fingercount.analysis.client import AnalysisClient
from fingercount.errors import AnalysisError, ImageEncodingError, WorkflowBusyError
from fingercount.images.encoder import encode_file
from fingercount.images.types import ImageAsset, SelectedFile
from fingercount.workflow.intents import Analyze, Intent, Reset, Retry, Upload
from fingercount.workflow.state import (
    EmptyState,
    ErrorState,
    LoadingState,
    ReadyState,
    SuccessState,
    WorkflowSnapshot,
    WorkflowState,
)

logger = logging.getLogger(__name__)

Listener = Callable[[WorkflowSnapshot], None]
Encoder = Callable[[SelectedFile | None], Awaitable[ImageAsset | None]]


class WorkflowStateMachine:
    """Single source of truth for what the user currently sees."""

    def __init__(
        self,
        client: AnalysisClient,
        *,
        encoder: Encoder = encode_file,
    ) -> None:
        self._client = client
        self._encode = encoder
        self._state: WorkflowState = EmptyState()
        self._image: ImageAsset | None = None
        self._generation = 0
        self._upload_token = 0
        self._listeners: list[Listener] = []
        self._tasks: set[asyncio.Task[WorkflowSnapshot]] = set()

    @property
    def snapshot(self) -> WorkflowSnapshot:
        return WorkflowSnapshot(
            state=self._state, image=self._image, generation=self._generation
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for every new snapshot.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def dispatch(self, intent: Intent) -> WorkflowSnapshot:
        """Apply ``intent`` and return the resulting snapshot.

        Raises:
            WorkflowBusyError: If ``Analyze`` or ``Retry`` arrives while an
                analysis is in flight.
        """
        if isinstance(intent, Upload):
            return await self._upload(intent.file)
        if isinstance(intent, Analyze):
            return await self._analyze()
        if isinstance(intent, Retry):
            return await self._retry()
        if isinstance(intent, Reset):
            return self._reset()
        raise TypeError(f"Unknown intent: {intent!r}")

    def start(self, intent: Intent) -> asyncio.Task[WorkflowSnapshot]:
        """Dispatch ``intent`` in the background and return its task."""
        task = asyncio.create_task(self.dispatch(intent))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait for every background dispatch to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # -- transitions --------------------------------------------------------

    async def _upload(self, file: SelectedFile | None) -> WorkflowSnapshot:
        if file is None:
            logger.debug("upload_cancelled")
            return self.snapshot

        token = self._next_upload_token()
        try:
            asset = await self._encode(file)
        except ImageEncodingError as e:
            if self._upload_superseded(token):
                return self.snapshot
            self._next_generation()
            # Keep any previous image so retry still has something to send.
            self._set_state(ErrorState(message=str(e)))
            return self.snapshot

        if asset is None or self._upload_superseded(token):
            return self.snapshot

        # A landed upload supersedes any analysis of the previous image.
        self._next_generation()
        self._image = asset
        self._set_state(ReadyState())
        return self.snapshot

    async def _analyze(self) -> WorkflowSnapshot:
        if self._image is None:
            logger.warning("analyze_ignored", extra={"reason": "no_image"})
            return self.snapshot
        self._ensure_idle("analyze")
        return await self._run_analysis()

    async def _retry(self) -> WorkflowSnapshot:
        if self._image is None:
            logger.warning("retry_ignored", extra={"reason": "no_image"})
            return self.snapshot
        self._ensure_idle("retry")
        if not isinstance(self._state, ErrorState):
            logger.warning(
                "retry_ignored",
                extra={"reason": "not_in_error", "status": self._state.kind.value},
            )
            return self.snapshot
        return await self._run_analysis()

    def _reset(self) -> WorkflowSnapshot:
        self._next_generation()
        self._next_upload_token()
        self._image = None
        self._set_state(EmptyState())
        return self.snapshot

    async def _run_analysis(self) -> WorkflowSnapshot:
        image = self._image
        generation = self._next_generation()
        # Replacing the state drops any previous result or error.
        self._set_state(LoadingState())

        try:
            result = await self._client.analyze(image)
        except AnalysisError as e:
            if not self._is_stale(generation, "analysis"):
                self._set_state(ErrorState(message=e.message))
            return self.snapshot

        if not self._is_stale(generation, "analysis"):
            self._set_state(SuccessState(result=result))
        return self.snapshot

    # -- helpers ------------------------------------------------------------

    def _ensure_idle(self, intent: str) -> None:
        if isinstance(self._state, LoadingState):
            logger.warning("intent_refused", extra={"intent": intent, "reason": "busy"})
            raise WorkflowBusyError("An analysis is already in progress.")

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _next_upload_token(self) -> int:
        self._upload_token += 1
        return self._upload_token

    def _upload_superseded(self, token: int) -> bool:
        if token == self._upload_token:
            return False
        logger.debug(
            "stale_completion_dropped",
            extra={
                "operation": "upload",
                "upload_token": token,
                "current_upload_token": self._upload_token,
            },
        )
        return True

    def _is_stale(self, generation: int, operation: str) -> bool:
        if generation == self._generation:
            return False
        logger.debug(
            "stale_completion_dropped",
            extra={
                "operation": operation,
                "generation": generation,
                "current_generation": self._generation,
            },
        )
        return True

    def _set_state(self, state: WorkflowState) -> None:
        previous = self._state
        self._state = state
        logger.info(
            "workflow_transition",
            extra={
                "from": previous.kind.value,
                "to": state.kind.value,
                "generation": self._generation,
            },
        )
        snapshot = self.snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("workflow_listener_failed")
