"""Selector state machine: items, selection, cursor and scroll window.

The transition function :func:`apply` is pure.  It never mutates the state it
is given and performs no I/O, so the loop that drives it can be synchronous,
asyncio-based or scripted in tests without changes here.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Union

from giadd.tui.keys import Command


@dataclass(frozen=True)
class Item:
    text: str
    selected: bool = False


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Continue:
    """The session goes on."""


@dataclass(frozen=True)
class Finished:
    """The user confirmed; carries the selected texts in original order."""

    selected: tuple[str, ...] = ()
    indices: tuple[int, ...] = ()

    @property
    def exit_code(self) -> int:
        return 0


@dataclass(frozen=True)
class Cancelled:
    """The user left without confirming.

    ``forced`` is set for a force-quit or an interrupt, which callers report
    with exit status 130 instead of a normal exit.
    """

    forced: bool = False

    @property
    def selected(self) -> tuple[str, ...]:
        return ()

    @property
    def exit_code(self) -> int:
        return 130 if self.forced else 0


Outcome = Union[Continue, Finished, Cancelled]
Result = Union[Finished, Cancelled]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectorState:
    items: tuple[Item, ...]
    cursor: int = 0
    viewport_top: int = 0
    viewport_height: int = 1

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], viewport_height: int = 1
    ) -> SelectorState:
        return cls(
            items=tuple(Item(line) for line in lines),
            viewport_height=max(1, viewport_height),
        )

    @property
    def max_viewport_top(self) -> int:
        return max(0, len(self.items) - self.viewport_height)

    @property
    def visible_range(self) -> range:
        end = min(self.viewport_top + self.viewport_height, len(self.items))
        return range(self.viewport_top, end)

    def visible_items(self) -> list[tuple[int, Item]]:
        return [(i, self.items[i]) for i in self.visible_range]

    def selected_indices(self) -> tuple[int, ...]:
        return tuple(i for i, item in enumerate(self.items) if item.selected)

    def selected_texts(self) -> tuple[str, ...]:
        return tuple(item.text for item in self.items if item.selected)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def _toggle(state: SelectorState) -> SelectorState:
    if not state.items:
        return state
    items = list(state.items)
    current = items[state.cursor]
    items[state.cursor] = replace(current, selected=not current.selected)
    return replace(state, items=tuple(items))


def _move_down(state: SelectorState) -> SelectorState:
    count = len(state.items)
    if count == 0:
        return state
    cursor = (state.cursor + 1) % count
    top = state.viewport_top
    if cursor < top:
        # Wrapped from the last item to the first
        top = 0
    elif cursor >= top + state.viewport_height:
        top += 1
    return replace(state, cursor=cursor, viewport_top=top)


def _move_up(state: SelectorState) -> SelectorState:
    count = len(state.items)
    if count == 0:
        return state
    top = state.viewport_top
    if state.cursor == 0:
        cursor = count - 1
        top = state.max_viewport_top
    else:
        cursor = state.cursor - 1
        if cursor < top:
            top -= 1
    return replace(state, cursor=cursor, viewport_top=top)


def apply(state: SelectorState, command: Command) -> tuple[SelectorState, Outcome]:
    """Apply *command* to *state*, returning the next state and the outcome."""
    if command is Command.MOVE_UP:
        return _move_up(state), Continue()
    if command is Command.MOVE_DOWN:
        return _move_down(state), Continue()
    if command is Command.TOGGLE_SELECT:
        return _toggle(state), Continue()
    if command is Command.CONFIRM:
        return state, Finished(
            selected=state.selected_texts(),
            indices=state.selected_indices(),
        )
    if command is Command.CANCEL:
        return state, Cancelled(forced=False)
    if command is Command.FORCE_QUIT:
        return state, Cancelled(forced=True)
    return state, Continue()


def resize(state: SelectorState, viewport_height: int) -> SelectorState:
    """Fit *state* to a new viewport height, keeping the cursor visible."""
    height = max(1, viewport_height)
    if height == state.viewport_height:
        return state
    top = state.viewport_top
    if state.cursor >= top + height:
        top = state.cursor - height + 1
    top = min(top, max(0, len(state.items) - height))
    top = max(0, min(top, state.cursor))
    return replace(state, viewport_height=height, viewport_top=top)
