"""giadd.tui: interactive multi-select line picker for the terminal."""

# Keyboard input
from giadd.tui.keybindings import (
    DEFAULT_SELECTOR_KEYBINDINGS,
    SelectorAction,
    SelectorKeybindings,
    SelectorKeybindingsConfig,
)
from giadd.tui.keys import Command, KeyDecoder, KeyId, key_sequences

# Rendering
from giadd.tui.renderer import ViewportRenderer, format_line, format_lines

# Selector
from giadd.tui.selector import run, select, viewport_height_for
from giadd.tui.state import (
    Cancelled,
    Continue,
    Finished,
    Item,
    Outcome,
    Result,
    SelectorState,
    apply,
    resize,
)

# Terminal
from giadd.tui.terminal import (
    SessionInterrupted,
    Terminal,
    TerminalError,
    TerminalSession,
)

__all__ = [
    # Keyboard input
    "DEFAULT_SELECTOR_KEYBINDINGS",
    "SelectorAction",
    "SelectorKeybindings",
    "SelectorKeybindingsConfig",
    "Command",
    "KeyDecoder",
    "KeyId",
    "key_sequences",
    # Rendering
    "ViewportRenderer",
    "format_line",
    "format_lines",
    # Selector
    "run",
    "select",
    "viewport_height_for",
    "Cancelled",
    "Continue",
    "Finished",
    "Item",
    "Outcome",
    "Result",
    "SelectorState",
    "apply",
    "resize",
    # Terminal
    "SessionInterrupted",
    "Terminal",
    "TerminalError",
    "TerminalSession",
]
