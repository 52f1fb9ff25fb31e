"""Viewport renderer: paints the visible slice of the selector in place.

The renderer remembers a single integer, the number of lines it painted on
the previous cycle.  Each cycle erases exactly that many lines, bottom-up,
and then paints the new slice, leaving the cursor on the line below it.
Nothing is queried from the terminal, so the repaint never depends on
scrollback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from giadd.tui.state import Item, SelectorState

if TYPE_CHECKING:
    from giadd.tui.terminal import Terminal

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_CURSOR_UP_ONE = "\x1b[1A"
_ERASE_LINE = "\x1b[2K"

CURSOR_MARK = ">"
SELECTED_MARK = "*"


def format_line(item: Item, is_cursor: bool) -> str:
    """Render one item with its cursor and selection prefix.

    >>> format_line(Item("?? wow", selected=True), is_cursor=False)
    '  [*] ?? wow'
    """
    cursor = CURSOR_MARK if is_cursor else " "
    mark = SELECTED_MARK if item.selected else " "
    return f"{cursor} [{mark}] {item.text}"


def format_lines(state: SelectorState) -> list[str]:
    """Return the display lines for the current viewport."""
    return [
        format_line(item, index == state.cursor)
        for index, item in state.visible_items()
    ]


def erase_sequence(count: int) -> str:
    """Escape sequence erasing the *count* lines above the cursor.

    Leaves the cursor at column 0 of the topmost erased line.
    """
    if count <= 0:
        return "\r"
    return (_CURSOR_UP_ONE + _ERASE_LINE) * count + "\r"


class ViewportRenderer:
    """Repaints the selector region of a :class:`Terminal` in place."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self._lines_rendered: int = 0
        self._started: bool = False

    @property
    def lines_rendered(self) -> int:
        """Number of lines painted by the most recent cycle."""
        return self._lines_rendered

    def begin(self) -> None:
        """Prepare the terminal: one item per row, no visible cursor."""
        if self._started:
            return
        self._started = True
        self.terminal.hide_cursor()
        self.terminal.disable_wrap()

    def render(self, state: SelectorState) -> None:
        lines = format_lines(state)
        out: list[str] = [erase_sequence(self._lines_rendered)]
        for line in lines:
            out.append(line)
            out.append("\r\n")
        self.terminal.write("".join(out))
        self._lines_rendered = len(lines)

    def clear(self) -> None:
        """Erase the painted region, returning the cursor to where it began."""
        if self._lines_rendered:
            self.terminal.write(erase_sequence(self._lines_rendered))
        self._lines_rendered = 0

    def finish(self) -> None:
        """Final erase, then give the terminal its wrapping and cursor back."""
        self.clear()
        if self._started:
            self.terminal.enable_wrap()
            self.terminal.show_cursor()
            self._started = False
