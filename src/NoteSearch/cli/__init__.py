"""CLI package for NoteSearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from NoteSearch.cli.runner import CommandRunner
from NoteSearch.cli.ui import cli


def main() -> None:
    """Run NoteSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
