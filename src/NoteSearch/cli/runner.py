"""Command runner for coordinating CLI execution.

Manages logging configuration, storage lifecycle, and error handling for
command execution.
"""

from __future__ import annotations

from collections.abc import Callable

import click

from NoteSearch.cli.commands import Command
from NoteSearch.config import AppConfig
from NoteSearch.storage import create_storage
from NoteSearch.storage.notes import NoteStore
from NoteSearch.utils.log import configure_logging, log


class CommandRunner:
    """Runs one CLI command with logging and resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(self, action: str, build: Callable[[], Command]) -> None:
        """Run a command that does not touch the database.

        Args:
            action: The CLI command name (e.g., 'parse').
            build: Factory creating the command.

        Raises:
            click.Abort: When the command fails.
        """
        self._configure_logging(action)
        try:
            output = build().execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e
        click.echo(output, nl=False)

    def run_with_store(self, action: str, build: Callable[[NoteStore], Command]) -> None:
        """Run a command against the configured note database.

        The database connection is closed when the command finishes, whether
        or not it succeeded.

        Args:
            action: The CLI command name (e.g., 'search').
            build: Factory creating the command from the opened store.

        Raises:
            click.Abort: When the command fails.
        """
        self._configure_logging(action)
        try:
            db_manager, store = create_storage(self.config)
            with db_manager:
                output = build(store).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e
        click.echo(output, nl=False)

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
