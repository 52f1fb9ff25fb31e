"""Keyboard input decoding for the line selector.

Resolves key identifiers such as ``"up"``, ``"space"`` or ``"ctrl+c"`` into
the raw byte sequences a terminal sends in raw mode, and decodes fixed-size
input windows into logical selector commands.
"""

from __future__ import annotations

import enum
import logging
from typing import Mapping, Protocol

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class Command(str, enum.Enum):
    """Logical commands understood by the selector state machine."""

    MOVE_UP = "moveUp"
    MOVE_DOWN = "moveDown"
    TOGGLE_SELECT = "toggleSelect"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    FORCE_QUIT = "forceQuit"
    UNRECOGNIZED = "unrecognized"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Named keys -> byte sequences sent in raw mode.  Cursor keys are listed in
# both normal (CSI) and application (SS3) cursor mode.
NAMED_KEY_SEQUENCES: dict[str, tuple[bytes, ...]] = {
    "escape": (b"\x1b",),
    "esc": (b"\x1b",),
    "enter": (b"\r", b"\n"),
    "tab": (b"\t",),
    "space": (b" ",),
    "backspace": (b"\x7f", b"\x08"),
    "up": (b"\x1b[A", b"\x1bOA"),
    "down": (b"\x1b[B", b"\x1bOB"),
    "right": (b"\x1b[C", b"\x1bOC"),
    "left": (b"\x1b[D", b"\x1bOD"),
    "home": (b"\x1b[H", b"\x1bOH", b"\x1b[1~"),
    "end": (b"\x1b[F", b"\x1bOF", b"\x1b[4~"),
    "pageUp": (b"\x1b[5~",),
    "pageDown": (b"\x1b[6~",),
}


# ---------------------------------------------------------------------------
# Raw control character helper
# ---------------------------------------------------------------------------


def raw_ctrl_char(key: str) -> str | None:
    """Return the control character for a key, or ``None`` if not applicable.

    For example, ``raw_ctrl_char("c")`` returns ``"\\x03"``.
    """
    if len(key) != 1:
        return None
    code = ord(key.lower())
    if ord("a") <= code <= ord("z"):
        return chr(code & 0x1F)
    ctrl_map: dict[str, str] = {
        "[": chr(27),
        "\\": chr(28),
        "]": chr(29),
        "^": chr(30),
        "_": chr(31),
        "@": chr(0),
        "?": chr(127),
    }
    return ctrl_map.get(key)


# ---------------------------------------------------------------------------
# Key ID resolution
# ---------------------------------------------------------------------------


def key_sequences(key_id: KeyId) -> tuple[bytes, ...]:
    """Return the byte sequences a terminal sends for *key_id*.

    Supports named keys (``"up"``, ``"enter"``), single printable characters
    (``"j"``, ``"?"``) and ``ctrl+<char>`` combinations.

    Raises ``ValueError`` for identifiers that cannot be typed in raw mode.
    """
    key_id = key_id.strip()
    lowered = key_id.lower()

    if lowered.startswith("ctrl+"):
        ctrl = raw_ctrl_char(lowered[len("ctrl+"):])
        if ctrl is None:
            raise ValueError(f"Unsupported key: {key_id!r}")
        return (ctrl.encode("ascii"),)

    if len(key_id) == 1:
        return (key_id.encode("utf-8"),)

    for name, sequences in NAMED_KEY_SEQUENCES.items():
        if name.lower() == lowered:
            return sequences

    raise ValueError(f"Unsupported key: {key_id!r}")


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


class ByteSource(Protocol):
    def read(self, size: int) -> bytes: ...


class KeyDecoder:
    """Maps fixed-size input windows to :class:`Command` values.

    A window is accepted only when it exactly equals a bound sequence.  Any
    other content, such as an unbound escape sequence or several keystrokes
    delivered in one read, decodes to ``Command.UNRECOGNIZED``.
    """

    def __init__(self, sequences: Mapping[bytes, Command]) -> None:
        if not sequences:
            raise ValueError("KeyDecoder needs at least one key sequence")
        self._sequences = dict(sequences)
        self._window = max(len(seq) for seq in self._sequences)

    @property
    def window(self) -> int:
        """Number of bytes requested per read."""
        return self._window

    def decode(self, chunk: bytes) -> Command:
        return self._sequences.get(chunk, Command.UNRECOGNIZED)

    def read_command(self, source: ByteSource) -> Command:
        """Block on *source* for one input window and decode it.

        End of input decodes to ``Command.FORCE_QUIT``.
        """
        chunk = source.read(self._window)
        if not chunk:
            logger.debug("input closed, forcing quit")
            return Command.FORCE_QUIT
        command = self.decode(chunk)
        logger.debug("decoded %r as %s", chunk, command.value)
        return command
