"""Terminal, signal and stdin access for the client."""

from __future__ import annotations

import fcntl
import os
import selectors
import signal
import struct
import sys
import termios
import threading
import tty
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, BinaryIO

from paneplex.theme import Palette, default_palette

DEFAULT_STDIN_POLL_TIMEOUT_MS = 10

MOUSE_ENABLE = "\x1b[?1000h\x1b[?1002h\x1b[?1015h\x1b[?1006h"
MOUSE_DISABLE = "\x1b[?1006l\x1b[?1015l\x1b[?1002l\x1b[?1000l"

_READ_SIZE = 64 * 1024
_WINSIZE_FORMAT = "HHHH"
_QUIT_SIGNALS = frozenset({signal.SIGTERM, signal.SIGINT, signal.SIGQUIT, signal.SIGHUP})
_HANDLED_SIGNALS = _QUIT_SIGNALS | {signal.SIGWINCH}


@dataclass(frozen=True)
class TerminalSize:
    """The size of a terminal in character cells, placed at x and y."""

    rows: int = 0
    cols: int = 0
    x: int = 0
    y: int = 0


def get_terminal_size_using_fd(fd: int) -> TerminalSize:
    """The size of the terminal behind fd; zero rows and columns if it is not one."""
    buf = struct.pack(_WINSIZE_FORMAT, 0, 0, 0, 0)
    try:
        buf = fcntl.ioctl(fd, termios.TIOCGWINSZ, buf)
    except OSError:
        pass
    rows, cols, _, _ = struct.unpack(_WINSIZE_FORMAT, buf)
    return TerminalSize(rows=rows, cols=cols)


class StdinPoller:
    """Checks without blocking for long whether a file descriptor has input."""

    def __init__(self, fd: int = 0, timeout_ms: int = DEFAULT_STDIN_POLL_TIMEOUT_MS) -> None:
        self._selector = selectors.DefaultSelector()
        self._selector.register(fd, selectors.EVENT_READ)
        self._timeout = timeout_ms / 1000

    def ready(self) -> bool:
        """Wait up to the timeout and report whether input is readable."""
        events = self._selector.select(self._timeout)
        return any(mask & selectors.EVENT_READ for _, mask in events)

    def close(self) -> None:
        self._selector.close()

    def __enter__(self) -> StdinPoller:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ClientOsInputOutput:
    """The operating-system features the client needs: terminal modes, I/O and signals."""

    def __init__(
        self,
        orig_termios: list[Any],
        stdin_fd: int = 0,
        stdout: BinaryIO | None = None,
    ) -> None:
        self._orig_termios = [list(x) if isinstance(x, list) else x for x in orig_termios]
        self._stdin_fd = stdin_fd
        self._stdout = stdout
        self._lock = threading.Lock()
        self._mouse_enabled = False

    @property
    def orig_termios(self) -> list[Any]:
        """The terminal attributes to restore when leaving raw mode."""
        return self._orig_termios

    @property
    def mouse_enabled(self) -> bool:
        with self._lock:
            return self._mouse_enabled

    def get_terminal_size_using_fd(self, fd: int) -> TerminalSize:
        return get_terminal_size_using_fd(fd)

    def set_raw_mode(self, fd: int) -> None:
        """Put the terminal behind fd into raw mode."""
        tty.setraw(fd, termios.TCSANOW)

    def unset_raw_mode(self, fd: int) -> None:
        """Restore the terminal behind fd to the attributes it started with."""
        with self._lock:
            attrs = [list(x) if isinstance(x, list) else x for x in self._orig_termios]
        termios.tcsetattr(fd, termios.TCSANOW, attrs)

    def read_from_stdin(self) -> bytes:
        """Whatever input is available, waiting for at least one byte."""
        return os.read(self._stdin_fd, _READ_SIZE)

    def get_stdout_writer(self) -> BinaryIO:
        return self._stdout if self._stdout is not None else sys.stdout.buffer

    def _write(self, text: str) -> None:
        writer = self.get_stdout_writer()
        writer.write(text.encode())
        writer.flush()

    def handle_signals(
        self, sigwinch_cb: Callable[[], None], quit_cb: Callable[[], None]
    ) -> None:
        """Call sigwinch_cb on each resize; call quit_cb and return on a quit signal.

        The signals are blocked in the calling thread while waiting; other threads
        should block them too so that they are delivered here.
        """
        old_mask = signal.pthread_sigmask(signal.SIG_BLOCK, _HANDLED_SIGNALS)
        try:
            while True:
                received = signal.sigwait(_HANDLED_SIGNALS)
                if received == signal.SIGWINCH:
                    sigwinch_cb()
                elif received in _QUIT_SIGNALS:
                    quit_cb()
                    break
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, old_mask)

    def load_palette(self) -> Palette:
        return default_palette()

    def enable_mouse(self) -> None:
        """Turn on mouse reporting once."""
        with self._lock:
            if self._mouse_enabled:
                return
            self._mouse_enabled = True
        self._write(MOUSE_ENABLE)

    def disable_mouse(self) -> None:
        """Turn off mouse reporting if it is on."""
        with self._lock:
            if not self._mouse_enabled:
                return
            self._mouse_enabled = False
        self._write(MOUSE_DISABLE)

    def start_action_repeater(self, action: Any, send: Callable[[Any], None]) -> None:
        """Send action over and over until stdin becomes readable."""
        with StdinPoller(self._stdin_fd) as poller:
            while not poller.ready():
                send(action)


def get_client_os_input() -> ClientOsInputOutput:
    """Client OS access for the controlling terminal on stdin.

    Raises termios.error when stdin is not a terminal.
    """
    return ClientOsInputOutput(termios.tcgetattr(0))