"""Main CLI application."""

import typer

from fingercount.cli.commands import analyze, config, shell

app = typer.Typer(
    name="fingercount",
    help="Finger Count - count fingers in hand photos with Gemini",
    no_args_is_help=True,
)

analyze.register(app)
shell.register(app)
config.register(app)


if __name__ == "__main__":
    app()
