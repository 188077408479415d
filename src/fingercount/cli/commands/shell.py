"""Interactive analysis session."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from fingercount.cli.console import console, dim, error, warning
from fingercount.config import AppConfig

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "[bold]Commands[/bold]\n"
    "  upload <path>  select an image (empty path cancels)\n"
    "  analyze        count the fingers in the selected image\n"
    "  retry          repeat a failed analysis\n"
    "  reset          discard the image and any result\n"
    "  status         show the current state\n"
    "  quit           leave the session"
)


def register(app: typer.Typer) -> None:
    """Register the shell command."""

    @app.command()
    def shell(
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Show debug logging"),
        ] = False,
    ) -> None:
        """Start an interactive session: upload, analyze, retry, reset."""
        from pydantic import ValidationError

        from fingercount.cli.runtime import load_runtime_config

        try:
            config = load_runtime_config(config_path, verbose=verbose)
        except (FileNotFoundError, ValidationError, ValueError) as e:
            error(f"Error loading config: {e}")
            raise typer.Exit(1) from None

        try:
            asyncio.run(_run_shell(config))
        except KeyboardInterrupt:
            console.print("\n[dim]Goodbye![/dim]")


async def _run_shell(config: AppConfig) -> None:
    from rich.panel import Panel

    from fingercount.cli.render import SnapshotRenderer
    from fingercount.cli.runtime import create_workflow
    from fingercount.images import LocalFile
    from fingercount.workflow import Analyze, Reset, Retry, Upload, WorkflowStatus

    machine = create_workflow(config)
    renderer = SnapshotRenderer(console)
    machine.subscribe(renderer)

    console.print(Panel(HELP_TEXT, title="Finger Count", border_style="blue"))

    while True:
        # Read input off the loop so an in-flight analysis keeps running.
        try:
            line = await asyncio.to_thread(console.input, "[bold cyan]>[/bold cyan] ")
        except EOFError:
            break
        command, _, argument = line.strip().partition(" ")
        command = command.lower()
        argument = argument.strip()

        if not command:
            continue
        if command in ("quit", "exit"):
            break
        if command == "help":
            console.print(HELP_TEXT)
        elif command == "status":
            renderer.render(machine.snapshot)
        elif command == "upload":
            file = LocalFile(Path(argument)) if argument else None
            if file is None:
                dim("No file selected.")
            await machine.dispatch(Upload(file))
        elif command in ("analyze", "retry"):
            snapshot = machine.snapshot
            if snapshot.status == WorkflowStatus.LOADING:
                warning("An analysis is already in progress.")
            elif not snapshot.has_image:
                warning("Upload an image first.")
            elif command == "retry" and not snapshot.can_retry:
                warning("Nothing to retry.")
            else:
                machine.start(Analyze() if command == "analyze" else Retry())
        elif command == "reset":
            await machine.dispatch(Reset())
        else:
            error(f"Unknown command: {command}")
            dim("Type 'help' for the list of commands.")

    if machine.snapshot.status == WorkflowStatus.LOADING:
        dim("Waiting for the analysis in progress...")
    # Let a started analysis finish and render before leaving.
    await machine.wait_idle()
    console.print("[dim]Goodbye![/dim]")
