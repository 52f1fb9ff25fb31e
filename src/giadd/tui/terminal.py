"""Terminal session for raw-mode interaction with the controlling terminal.

Provides a ``Terminal`` protocol and a concrete ``TerminalSession`` that owns
the terminal device, toggles raw mode around each key read, and guarantees
the captured attributes are restored on every exit path, including
termination signals.
"""

from __future__ import annotations

import logging
import os
import signal
import termios
import tty
from types import FrameType
from typing import Protocol

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_DISABLE_WRAP = "\x1b[?7l"
_ENABLE_WRAP = "\x1b[?7h"

_TTY_PATH = "/dev/tty"

_HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)


class TerminalError(Exception):
    """Terminal attributes could not be read or applied."""


class SessionInterrupted(Exception):
    """A termination signal arrived while the session was active."""

    def __init__(self, signum: int) -> None:
        super().__init__(f"interrupted by signal {signum}")
        self.signum = signum


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface the selector loop drives."""

    @property
    def rows(self) -> int: ...

    def enter_raw(self) -> None: ...

    def restore(self) -> None: ...

    def read(self, size: int) -> bytes: ...

    def write(self, data: str) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def disable_wrap(self) -> None: ...

    def enable_wrap(self) -> None: ...


# ---------------------------------------------------------------------------
# TerminalSession implementation
# ---------------------------------------------------------------------------


class TerminalSession:
    """Concrete terminal backed by the controlling terminal device.

    The original attributes are captured once at construction.  Use it as a
    context manager: entering installs signal handlers that restore the
    terminal before the signal is turned into :class:`SessionInterrupted`;
    leaving restores the terminal, reinstates the previous handlers and
    closes the device.
    """

    def __init__(self, path: str = _TTY_PATH, fd: int | None = None) -> None:
        self._owns_fd = fd is None
        try:
            self._fd: int = (
                os.open(path, os.O_RDWR | os.O_NOCTTY) if fd is None else fd
            )
        except OSError as e:
            raise TerminalError(f"cannot open {path}: {e.strerror}") from e

        try:
            self._original: list = termios.tcgetattr(self._fd)
        except termios.error as e:
            self._close()
            raise TerminalError(f"cannot read terminal attributes: {e}") from e

        self._raw = False
        self._closed = False
        self._prev_handlers: dict[int, object] = {}

    # -- properties ---------------------------------------------------------

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(self._fd).lines
        except OSError:
            return 24

    # -- raw mode -----------------------------------------------------------

    def enter_raw(self) -> None:
        """Disable canonical processing and echo (no-op if already raw)."""
        if self._raw:
            return
        try:
            tty.setraw(self._fd, termios.TCSANOW)
        except termios.error as e:
            raise TerminalError(f"cannot enter raw mode: {e}") from e
        self._raw = True

    def restore(self) -> None:
        """Reapply the attributes captured at construction.

        Safe to call any number of times, including after the device has
        been closed.
        """
        if self._closed:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._original)
        except termios.error as e:
            raise TerminalError(f"cannot restore terminal attributes: {e}") from e
        self._raw = False

    # -- I/O ----------------------------------------------------------------

    def read(self, size: int) -> bytes:
        """Block until at least one byte is available, return up to *size*."""
        return os.read(self._fd, size)

    def write(self, data: str) -> None:
        """Write *data* to the terminal device, bypassing stdout."""
        payload = data.encode("utf-8", errors="replace")
        while payload:
            written = os.write(self._fd, payload)
            payload = payload[written:]

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    def disable_wrap(self) -> None:
        self.write(_DISABLE_WRAP)

    def enable_wrap(self) -> None:
        self.write(_ENABLE_WRAP)

    # -- lifecycle ----------------------------------------------------------

    def __enter__(self) -> TerminalSession:
        for signum in _HANDLED_SIGNALS:
            self._prev_handlers[signum] = signal.getsignal(signum)
            signal.signal(signum, self._on_signal)
        logger.debug("terminal session started on fd %d", self._fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.restore()
        finally:
            for signum, handler in self._prev_handlers.items():
                signal.signal(signum, handler)
            self._prev_handlers.clear()
            self._close()
            logger.debug("terminal session closed")

    def _close(self) -> None:
        if self._owns_fd and not getattr(self, "_closed", False):
            os.close(self._fd)
        self._closed = True

    # -- private: signals ---------------------------------------------------

    def _on_signal(self, signum: int, frame: FrameType | None) -> None:
        """Restore the terminal, then unwind the loop through its cleanup."""
        self.restore()
        raise SessionInterrupted(signum)
