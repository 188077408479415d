"""Renders workflow snapshots to the terminal."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from fingercount.workflow.state import WorkflowSnapshot, WorkflowStatus


def _image_summary(snapshot: WorkflowSnapshot) -> str:
    if snapshot.image is None:
        return ""
    return f"{snapshot.image.mime_type}, {snapshot.image.size_bytes:,} bytes"


class SnapshotRenderer:
    """Workflow listener that draws each snapshot it receives."""

    def __init__(self, console: Console, *, show_hints: bool = True) -> None:
        self._console = console
        self._show_hints = show_hints

    def __call__(self, snapshot: WorkflowSnapshot) -> None:
        self.render(snapshot)

    def render(self, snapshot: WorkflowSnapshot) -> None:
        status = snapshot.status
        if status == WorkflowStatus.EMPTY:
            self._console.print("[dim]No image selected.[/dim]")
            self._hint("upload <path>")
        elif status == WorkflowStatus.READY:
            self._console.print(
                Panel(
                    "AI will analyze the image to identify and count fingers, "
                    "even in unusual configurations.\n\n"
                    f"[dim]{_image_summary(snapshot)}[/dim]",
                    title="Ready to count?",
                    border_style="blue",
                )
            )
            self._hint("analyze")
        elif status == WorkflowStatus.LOADING:
            self._console.print("[blue]Gemini is thinking...[/blue]")
        elif status == WorkflowStatus.SUCCESS:
            self._console.print(
                Panel(
                    Text(snapshot.result_text or ""),
                    title="AI Analysis Result",
                    border_style="green",
                )
            )
            self._hint("reset")
        elif status == WorkflowStatus.ERROR:
            self._console.print(
                Panel(
                    Text(snapshot.error_message or ""),
                    title="Analysis Failed",
                    border_style="red",
                )
            )
            if snapshot.can_retry:
                self._hint("retry")

    def _hint(self, command: str) -> None:
        if self._show_hints:
            self._console.print(f"[dim]Next: {command}[/dim]")
