"""A flag the input thread waits on while the server carries out a command."""

from __future__ import annotations

import threading


class CommandIsExecuting:
    """Blocks the input thread until the server reports a command as done.

    One instance is shared between the input thread and the thread that hears
    back from the server.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._blocked = False

    @property
    def blocked(self) -> bool:
        """Whether the input thread is currently held back."""
        with self._condition:
            return self._blocked

    def blocking_input_thread(self) -> None:
        """Mark a command as running so the input thread will wait for it."""
        with self._condition:
            self._blocked = True

    def unblock_input_thread(self) -> None:
        """Mark the command as done and wake every waiter."""
        with self._condition:
            self._blocked = False
            self._condition.notify_all()

    def wait_until_input_thread_is_unblocked(self) -> None:
        """Return once no command is running."""
        with self._condition:
            self._condition.wait_for(lambda: not self._blocked)