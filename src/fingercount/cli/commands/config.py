"""Configuration management commands."""

from pathlib import Path
from typing import Annotated

import click
import typer

from fingercount.cli.console import console, error, success


def register(app: typer.Typer) -> None:
    """Register the config command."""

    @app.command()
    def config(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: show, validate"),
        ] = None,
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to config file (default: $FINGERCOUNT_HOME/config.toml)",
            ),
        ] = None,
    ) -> None:
        """Manage configuration."""
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        from pydantic import ValidationError
        from rich.syntax import Syntax

        from fingercount.analysis.thinking import resolve_thinking
        from fingercount.cli.console import create_table
        from fingercount.config import load_config
        from fingercount.config.paths import get_config_path

        expanded_path = path.expanduser() if path else get_config_path()

        if action == "show":
            if not expanded_path.exists():
                error(f"Config file not found: {expanded_path}")
                console.print("Built-in defaults are used when no file exists")
                raise typer.Exit(1)

            content = expanded_path.read_text()
            syntax = Syntax(content, "toml", theme="monokai", line_numbers=True)
            console.print(f"[bold]Config file: {expanded_path}[/bold]\n")
            console.print(syntax)

        elif action == "validate":
            if not expanded_path.exists():
                error(f"Config file not found: {expanded_path}")
                raise typer.Exit(1)

            try:
                config_obj = load_config(expanded_path)
            except ValidationError as e:
                error("Configuration validation failed:")
                console.print()
                for err in e.errors():
                    loc = ".".join(str(x) for x in err["loc"])
                    console.print(f"  [yellow]{loc}[/yellow]: {err['msg']}")
                raise typer.Exit(1) from None
            except Exception as e:
                error(f"Error loading config: {e}")
                raise typer.Exit(1) from None

            table = create_table(
                "Configuration Summary",
                [("Setting", "cyan"), ("Value", "green")],
            )
            analysis = config_obj.analysis
            has_key = config_obj.resolve_api_key() is not None
            table.add_row(
                "Gemini API key",
                "configured" if has_key else "[yellow]missing[/yellow]",
            )
            table.add_row("Model", analysis.model)
            budget = resolve_thinking(analysis.thinking)
            if budget.dynamic:
                thinking = "dynamic"
            elif not budget.enabled:
                thinking = "off"
            else:
                thinking = f"{budget.tokens} tokens"
            table.add_row("Thinking budget", thinking)
            table.add_row(
                "Request timeout",
                f"{analysis.request_timeout_seconds}s"
                if analysis.request_timeout_seconds
                else "none",
            )
            table.add_row("Log level", config_obj.logging.level or "default")

            success("Configuration is valid!")
            console.print()
            console.print(table)

        else:
            error(f"Unknown action: {action}")
            console.print("Valid actions: show, validate")
            raise typer.Exit(1)
