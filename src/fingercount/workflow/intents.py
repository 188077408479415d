"""User intents dispatched into the workflow."""

from __future__ import annotations

from dataclasses import dataclass

from fingercount.images.types import SelectedFile


@dataclass(frozen=True, slots=True)
class Upload:
    """Select a new file. ``file`` is None when the picker was cancelled."""

    file: SelectedFile | None


@dataclass(frozen=True, slots=True)
class Analyze:
    pass


@dataclass(frozen=True, slots=True)
class Retry:
    pass


@dataclass(frozen=True, slots=True)
class Reset:
    pass


Intent = Upload | Analyze | Retry | Reset
