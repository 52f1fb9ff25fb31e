"""Selector loop: render, read one key in raw mode, transition, repeat."""

from __future__ import annotations

import logging
from typing import Sequence

from giadd.tui.keybindings import SelectorKeybindings
from giadd.tui.keys import KeyDecoder
from giadd.tui.renderer import ViewportRenderer
from giadd.tui.state import (
    Cancelled,
    Continue,
    Result,
    SelectorState,
    apply,
    resize,
)
from giadd.tui.terminal import SessionInterrupted, Terminal, TerminalSession

logger = logging.getLogger(__name__)


def viewport_height_for(rows: int, max_visible: int | None = None) -> int:
    """Rows available to the list: one row stays free below it."""
    height = rows - 1
    if max_visible is not None:
        height = min(height, max_visible)
    return max(1, height)


def _check_lines(lines: Sequence[str]) -> None:
    if not lines:
        raise ValueError("select() needs at least one line")
    for line in lines:
        if "\n" in line or "\r" in line:
            raise ValueError(f"line contains a line break: {line!r}")

def run(
    terminal: Terminal,
    lines: Sequence[str],
    decoder: KeyDecoder,
    max_visible: int | None = None,
) -> Result:
    """Drive a selection session on an already-acquired *terminal*.

    The terminal is left cooked and the painted region erased whatever the
    outcome.  A :class:`SessionInterrupted` raised by a signal handler ends
    the session as a forced cancel.
    """
    _check_lines(lines)

    renderer = ViewportRenderer(terminal)
    try:
        state = SelectorState.from_lines(
            lines, viewport_height_for(terminal.rows, max_visible)
        )
        renderer.begin()
        while True:
            state = resize(state, viewport_height_for(terminal.rows, max_visible))
            renderer.render(state)

            terminal.enter_raw()
            try:
                command = decoder.read_command(terminal)
            finally:
                terminal.restore()

            state, outcome = apply(state, command)
            if not isinstance(outcome, Continue):
                logger.debug("session ended with %r", outcome)
                return outcome
    except SessionInterrupted as e:
        logger.debug("session interrupted by signal %d", e.signum)
        return Cancelled(forced=True)
    finally:
        try:
            terminal.restore()
        finally:
            renderer.finish()


def select(
    lines: Sequence[str],
    keybindings: SelectorKeybindings | None = None,
    max_visible: int | None = None,
    terminal: Terminal | None = None,
) -> Result:
    """Let the user pick a subset of *lines* interactively.

    Returns :class:`~giadd.tui.state.Finished` with the chosen lines in their
    original order, or :class:`~giadd.tui.state.Cancelled`.

    When no *terminal* is given, a :class:`TerminalSession` on the
    controlling terminal is opened for the duration of the call; failure to
    open it raises :class:`~giadd.tui.terminal.TerminalError`.  A signal that
    lands outside the loop itself (while the session is being set up or torn
    down) still ends in a forced cancel.
    """
    _check_lines(lines)
    decoder = (keybindings or SelectorKeybindings()).decoder()

    try:
        if terminal is not None:
            return run(terminal, lines, decoder, max_visible)

        with TerminalSession() as session:
            return run(session, lines, decoder, max_visible)
    except SessionInterrupted as e:
        logger.debug("session interrupted by signal %d outside the loop", e.signum)
        return Cancelled(forced=True)
