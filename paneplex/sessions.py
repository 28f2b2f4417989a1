"""Finding, listing and checking the sessions that are running."""

from __future__ import annotations

import errno
import os
import socket
import stat
from pathlib import Path

SESSION_NAME_ENV = "PANEPLEX_SESSION_NAME"
NO_SESSIONS_MSG = "No active paneplex sessions found."


class SessionError(Exception):
    """A session could not be found, already exists, or the sessions could not be read."""


def _assert_socket(path: Path) -> bool:
    """Whether a server answers on path; a socket nobody listens on is removed."""
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.connect(str(path))
    except ConnectionRefusedError:
        try:
            path.unlink()
        except OSError:
            pass
        return False
    except OSError:
        return True
    finally:
        sock.close()
    return True


def get_sessions(sock_dir: str | os.PathLike[str]) -> list[str]:
    """Names of the live sessions whose sockets are in sock_dir, sorted."""
    directory = Path(sock_dir)
    try:
        names = sorted(entry.name for entry in os.scandir(directory))
    except FileNotFoundError:
        return []
    except OSError as err:
        kind = errno.errorcode.get(err.errno or 0, str(err))
        raise SessionError(f"Error occured: {kind}") from err
    sessions = []
    for name in names:
        path = directory / name
        try:
            is_socket = stat.S_ISSOCK(path.lstat().st_mode)
        except OSError:
            continue
        if is_socket and _assert_socket(path):
            sessions.append(name)
    return sessions


def format_sessions(sessions: list[str], current: str | None) -> str:
    """One session per line, the current one marked."""
    return "\n".join(
        f"{name} (current)" if name == current else name for name in sessions
    )


def _current_session() -> str:
    return os.environ.get(SESSION_NAME_ENV, "")


def list_sessions(sock_dir: str | os.PathLike[str]) -> str:
    """The text listing the live sessions, or saying there are none."""
    sessions = get_sessions(sock_dir)
    if not sessions:
        return NO_SESSIONS_MSG
    return format_sessions(sessions, _current_session())


def get_active_session(sock_dir: str | os.PathLike[str]) -> str:
    """The name of the only live session; an error if there is none or several."""
    sessions = get_sessions(sock_dir)
    if len(sessions) == 1:
        return sessions[0]
    if not sessions:
        raise SessionError(NO_SESSIONS_MSG)
    raise SessionError(
        "Please specify the session name to attach to. The following sessions are active:\n"
        + format_sessions(sessions, _current_session())
    )


def assert_session(sock_dir: str | os.PathLike[str], name: str) -> None:
    """Raise unless a live session of this name exists."""
    if name not in get_sessions(sock_dir):
        raise SessionError(f'No session named "{name}" found.')


def assert_session_ne(sock_dir: str | os.PathLike[str], name: str) -> None:
    """Raise if a live session of this name already exists."""
    if name in get_sessions(sock_dir):
        raise SessionError(
            f'Session with name "{name}" already exists. Use attach command to connect '
            "to it or specify a different name."
        )