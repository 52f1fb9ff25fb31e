"""CLI entry point for giadd. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from giadd.config import Config, load_config
from giadd.git import GitError, StatusParseError, git_add, git_status
from giadd.tui import (
    DEFAULT_SELECTOR_KEYBINDINGS,
    Cancelled,
    Result,
    TerminalError,
    select,
)

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130

_ACTION_LABELS = {
    "moveUp": "move up",
    "moveDown": "move down",
    "toggleSelect": "toggle selection",
    "confirm": "confirm",
    "cancel": "quit without applying",
    "forceQuit": "abort (exit 130)",
}


def _keys_epilog() -> str:
    lines = ["\b", "Default keys (override them in ~/.giadd/config.json):"]
    for action, keys in DEFAULT_SELECTOR_KEYBINDINGS.items():
        key_list = keys if isinstance(keys, list) else [keys]
        lines.append(f"  {'/'.join(key_list):<12} {_ACTION_LABELS[action]}")
    return "\n".join(lines)


def _setup_logging(level: str, log_file: str | None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=log_file,
    )


def _fail(message: str, code: int = 1) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def _run_selector(config: Config, lines: list[str]) -> Result:
    try:
        keybindings = config.selector_keybindings()
        keybindings.sequences()
    except ValueError as e:
        _fail(f"invalid keybindings: {e}")
    try:
        return select(lines, keybindings=keybindings, max_visible=config.max_visible)
    except TerminalError as e:
        _fail(str(e))


@click.group(invoke_without_command=True, epilog=_keys_epilog())
@click.option(
    "--max-visible",
    type=click.IntRange(min=1),
    default=None,
    help="Show at most this many lines at once",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    show_default=True,
    help="Logging verbosity",
)
@click.option("--log-file", default=None, help="Write log records to this file")
@click.pass_context
def main(ctx, max_visible, log_level, log_file):
    """Interactively choose files from `git status` and stage them."""
    _setup_logging(log_level, log_file)

    config = load_config()
    if max_visible is not None:
        config.max_visible = max_visible
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        ctx.invoke(add)


@main.command(epilog=_keys_epilog())
@click.pass_obj
def add(config: Config):
    """Select changed files and `git add` them."""
    try:
        files = git_status()
    except (GitError, StatusParseError) as e:
        _fail(str(e))

    if not files:
        click.echo("Nothing to stage.")
        return

    result = _run_selector(config, [f.display() for f in files])

    if isinstance(result, Cancelled):
        if result.forced:
            sys.exit(EXIT_INTERRUPTED)
        click.echo("Exiting without applying.")
        return

    if not result.indices:
        click.echo("Nothing selected.")
        return

    paths = [files[i].path for i in result.indices]
    logger.info("staging %d path(s)", len(paths))
    proc = git_add(paths)
    if proc.stdout:
        click.echo(proc.stdout, nl=False)
    if proc.stderr:
        click.echo(proc.stderr, nl=False, err=True)
    sys.exit(proc.returncode)


@main.command("select", epilog=_keys_epilog())
@click.pass_obj
def select_lines(config: Config):
    """Read lines from stdin and print the chosen ones to stdout.

    Keys are read from the controlling terminal, so stdin may be a pipe.
    Empty lines are skipped; lines holding only whitespace are kept.
    """
    stdin = click.get_text_stream("stdin")
    lines = [line for line in stdin.read().splitlines() if line]
    if not lines:
        return

    result = _run_selector(config, lines)

    if isinstance(result, Cancelled):
        sys.exit(result.exit_code)

    for line in result.selected:
        click.echo(line)
