"""CLI command modules."""

from fingercount.cli.commands import analyze, config, shell

__all__ = [
    "analyze",
    "config",
    "shell",
]
