"""One-shot analysis of a single image."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from fingercount.cli.console import console, error
from fingercount.config import AppConfig


def register(app: typer.Typer) -> None:
    """Register the analyze command."""

    @app.command()
    def analyze(
        image: Annotated[
            Path,
            typer.Argument(
                help="Image of a hand to analyze",
                exists=True,
                dir_okay=False,
                readable=True,
            ),
        ],
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
        """Count the fingers in IMAGE and describe the hand.

        Exits with status 1 if the analysis fails.
        """
        from pydantic import ValidationError

        from fingercount.cli.runtime import load_runtime_config

        try:
            config = load_runtime_config(config_path, verbose=verbose)
        except (FileNotFoundError, ValidationError, ValueError) as e:
            error(f"Error loading config: {e}")
            raise typer.Exit(1) from None

        ok = asyncio.run(_run_analysis(config, image))
        if not ok:
            raise typer.Exit(1)


async def _run_analysis(config: AppConfig, image: Path) -> bool:
    from fingercount.cli.render import SnapshotRenderer
    from fingercount.cli.runtime import create_workflow
    from fingercount.images import LocalFile
    from fingercount.workflow import Analyze, Upload, WorkflowStatus

    machine = create_workflow(config)
    machine.subscribe(SnapshotRenderer(console, show_hints=False))

    snapshot = await machine.dispatch(Upload(LocalFile(image)))
    if snapshot.status != WorkflowStatus.READY:
        return False
    snapshot = await machine.dispatch(Analyze())
    return snapshot.status == WorkflowStatus.SUCCESS
