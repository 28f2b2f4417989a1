import fcntl
import io
import os
import pty
import signal
import struct
import termios
from unittest import mock

import pytest

from paneplex import client_os
from paneplex.client_os import (
    ClientOsInputOutput,
    StdinPoller,
    TerminalSize,
    get_client_os_input,
    get_terminal_size_using_fd,
)
from paneplex.input_handler import Action, ActionKind, Position
from paneplex.theme import default_palette


@pytest.fixture
def pty_pair():
    master, slave = pty.openpty()
    yield master, slave
    os.close(master)
    os.close(slave)


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    os.close(read_fd)
    os.close(write_fd)


def test_terminal_size_of_pty(pty_pair):
    _, slave = pty_pair
    fcntl.ioctl(slave, termios.TIOCSWINSZ, struct.pack("HHHH", 24, 120, 0, 0))
    size = get_terminal_size_using_fd(slave)
    assert size == TerminalSize(rows=24, cols=120)
    osio = ClientOsInputOutput(termios.tcgetattr(slave))
    assert osio.get_terminal_size_using_fd(slave) == size


def test_terminal_size_of_non_terminal_is_empty(pipe):
    read_fd, _ = pipe
    size = get_terminal_size_using_fd(read_fd)
    assert (size.rows, size.cols) == (0, 0)


def test_raw_mode_round_trip(pty_pair):
    _, slave = pty_pair
    orig = termios.tcgetattr(slave)
    osio = ClientOsInputOutput(orig)
    osio.set_raw_mode(slave)
    raw = termios.tcgetattr(slave)
    assert raw[3] & termios.ECHO == 0
    assert raw[3] & termios.ICANON == 0
    osio.unset_raw_mode(slave)
    restored = termios.tcgetattr(slave)
    assert restored[3] == orig[3]
    assert restored[0] == orig[0]


def test_read_from_stdin(pipe):
    read_fd, write_fd = pipe
    os.write(write_fd, b"hello")
    osio = ClientOsInputOutput([], stdin_fd=read_fd)
    assert osio.read_from_stdin() == b"hello"


def test_mouse_enable_and_disable_write_once():
    out = io.BytesIO()
    osio = ClientOsInputOutput([], stdout=out)
    osio.enable_mouse()
    osio.enable_mouse()
    assert out.getvalue() == client_os.MOUSE_ENABLE.encode()
    assert b"\x1b[?1000h" in out.getvalue()
    assert osio.mouse_enabled
    osio.disable_mouse()
    osio.disable_mouse()
    assert out.getvalue() == (client_os.MOUSE_ENABLE + client_os.MOUSE_DISABLE).encode()
    assert not osio.mouse_enabled


def test_disable_without_enable_writes_nothing():
    out = io.BytesIO()
    osio = ClientOsInputOutput([], stdout=out)
    osio.disable_mouse()
    assert out.getvalue() == b""


def test_stdout_writer_is_the_given_stream():
    out = io.BytesIO()
    osio = ClientOsInputOutput([], stdout=out)
    assert osio.get_stdout_writer() is out


def test_load_palette_is_default():
    assert ClientOsInputOutput([]).load_palette() == default_palette()


def test_poller_ready_only_with_data(pipe):
    read_fd, write_fd = pipe
    with StdinPoller(read_fd) as poller:
        assert poller.ready() is False
        os.write(write_fd, b"x")
        assert poller.ready() is True


def test_action_repeater_sends_until_input(pipe):
    read_fd, write_fd = pipe
    action = Action(ActionKind.MOUSE_HOLD, Position(1, 2))
    sent = []

    def send(a):
        sent.append(a)
        if len(sent) == 3:
            os.write(write_fd, b"x")

    ClientOsInputOutput([], stdin_fd=read_fd).start_action_repeater(action, send)
    assert sent == [action, action, action]


def test_action_repeater_stops_at_once_when_input_waits(pipe):
    read_fd, write_fd = pipe
    os.write(write_fd, b"x")
    sent = []
    ClientOsInputOutput([], stdin_fd=read_fd).start_action_repeater(
        Action(ActionKind.MOUSE_HOLD, Position(0, 0)), sent.append
    )
    assert sent == []


def test_handle_signals_quits_on_sigterm():
    signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGTERM})
    try:
        os.kill(os.getpid(), signal.SIGTERM)
        calls = []
        ClientOsInputOutput([]).handle_signals(
            lambda: calls.append("winch"), lambda: calls.append("quit")
        )
        assert calls == ["quit"]
    finally:
        signal.pthread_sigmask(signal.SIG_UNBLOCK, {signal.SIGTERM})


def test_get_client_os_input_keeps_original_attributes():
    attrs = [1, 2, 3, 4, 5, 6, [b"\x00"] * 32]
    with mock.patch("termios.tcgetattr", return_value=attrs):
        osio = get_client_os_input()
    assert osio.orig_termios == attrs


def test_get_client_os_input_fails_without_terminal():
    with mock.patch("termios.tcgetattr", side_effect=termios.error(25, "not a tty")):
        with pytest.raises(termios.error):
            get_client_os_input()