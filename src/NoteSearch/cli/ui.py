"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to the runner.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from NoteSearch.cli.commands import ExplainCommand, ImportCommand, ParseCommand, SearchCommand
from NoteSearch.cli.runner import CommandRunner
from NoteSearch.config import DEFAULT_CONFIG_PATH, load_config
from NoteSearch.services import create_search_service

_format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default=None,
    help="Output format; defaults to output.format from the config.",
)


@click.group(help="NoteSearch: parse search strings and search stored notes.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    ctx.obj = load_config(config_path)


@cli.command("parse")
@click.argument("query")
@_format_option
@click.pass_context
def parse_cmd(ctx: click.Context, query: str, output_format: str | None) -> None:
    """Print the normalized condition tree of QUERY."""
    cfg = ctx.obj
    fmt = (output_format or cfg.output.format).lower()
    CommandRunner(cfg).run(
        ctx.command.name,
        lambda: ParseCommand(service=create_search_service(cfg), query=query, output_format=fmt),
    )


@cli.command("explain")
@click.argument("query")
@_format_option
@click.pass_context
def explain_cmd(ctx: click.Context, query: str, output_format: str | None) -> None:
    """Print the SQL filter and bound parameters QUERY compiles to."""
    cfg = ctx.obj
    fmt = (output_format or cfg.output.format).lower()
    CommandRunner(cfg).run(
        ctx.command.name,
        lambda: ExplainCommand(service=create_search_service(cfg), query=query, output_format=fmt),
    )


@cli.command("search")
@click.argument("query")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum number of notes.")
@_format_option
@click.pass_context
def search_cmd(ctx: click.Context, query: str, limit: int | None, output_format: str | None) -> None:
    """Search stored notes with QUERY.

    All other parameters are read from the YAML config passed to the root command.
    """
    cfg = ctx.obj
    fmt = (output_format or cfg.output.format).lower()
    CommandRunner(cfg).run_with_store(
        ctx.command.name,
        lambda store: SearchCommand(
            service=create_search_service(cfg, store),
            query=query,
            limit=limit,
            output_format=fmt,
        ),
    )


@cli.command("import")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.pass_context
def import_cmd(ctx: click.Context, path: Path) -> None:
    """Import notes from a JSON file at PATH."""
    CommandRunner(ctx.obj).run_with_store(
        ctx.command.name,
        lambda store: ImportCommand(store=store, path=path),
    )
