"""Turns terminal input into actions and sends them to the server."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, NamedTuple, Protocol, Union

from paneplex.command_is_executing import CommandIsExecuting
from paneplex.theme import InputMode

ALT_LEFT_BRACKET = b"\x1b["
BRACKETED_PASTE_START = b"\x1b[200~"
BRACKETED_PASTE_END = b"\x1b[201~"


class KeyKind(enum.Enum):
    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    BACK_TAB = "back_tab"
    DELETE = "delete"
    INSERT = "insert"
    F = "f"
    CHAR = "char"
    ALT = "alt"
    CTRL = "ctrl"
    NULL = "null"
    ESC = "esc"


@dataclass(frozen=True)
class Key:
    """A key press; value holds the character or the function-key number."""

    kind: KeyKind
    value: str | int | None = None

    @classmethod
    def char(cls, c: str) -> Key:
        return cls(KeyKind.CHAR, c)

    @classmethod
    def alt(cls, c: str) -> Key:
        return cls(KeyKind.ALT, c)

    @classmethod
    def ctrl(cls, c: str) -> Key:
        return cls(KeyKind.CTRL, c)

    @classmethod
    def f(cls, number: int) -> Key:
        return cls(KeyKind.F, number)


class MouseButton(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"


class Position(NamedTuple):
    """A zero-based place on the screen."""

    line: int
    column: int


class MouseEventKind(enum.Enum):
    PRESS = "press"
    RELEASE = "release"
    HOLD = "hold"


@dataclass(frozen=True)
class MouseEvent:
    kind: MouseEventKind
    position: Position
    button: MouseButton | None = None

    @classmethod
    def from_terminal(
        cls, kind: MouseEventKind, x: int, y: int, button: MouseButton | None = None
    ) -> MouseEvent:
        """Build from the one-based column and row the terminal reports."""
        return cls(kind, Position(max(y - 1, 0), max(x - 1, 0)), button)


class Direction(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class ActionKind(enum.Enum):
    QUIT = "quit"
    DETACH = "detach"
    WRITE = "write"
    SWITCH_TO_MODE = "switch_to_mode"
    CLOSE_FOCUS = "close_focus"
    NEW_PANE = "new_pane"
    NEW_TAB = "new_tab"
    GO_TO_NEXT_TAB = "go_to_next_tab"
    GO_TO_PREVIOUS_TAB = "go_to_previous_tab"
    CLOSE_TAB = "close_tab"
    GO_TO_TAB = "go_to_tab"
    MOVE_FOCUS = "move_focus"
    MOVE_FOCUS_OR_TAB = "move_focus_or_tab"
    RESIZE = "resize"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    SCROLL_UP_AT = "scroll_up_at"
    SCROLL_DOWN_AT = "scroll_down_at"
    PAGE_SCROLL_UP = "page_scroll_up"
    PAGE_SCROLL_DOWN = "page_scroll_down"
    TOGGLE_FOCUS_FULLSCREEN = "toggle_focus_fullscreen"
    LEFT_CLICK = "left_click"
    MOUSE_RELEASE = "mouse_release"
    MOUSE_HOLD = "mouse_hold"
    NO_OP = "no_op"


@dataclass(frozen=True)
class Action:
    """Something the server should do; payload holds its argument, if any."""

    kind: ActionKind
    payload: Any = None


# Actions after which input waits until the server has finished them.
_BLOCKING_ACTIONS = frozenset(
    {
        ActionKind.CLOSE_FOCUS,
        ActionKind.NEW_PANE,
        ActionKind.NEW_TAB,
        ActionKind.GO_TO_NEXT_TAB,
        ActionKind.GO_TO_PREVIOUS_TAB,
        ActionKind.CLOSE_TAB,
        ActionKind.GO_TO_TAB,
        ActionKind.MOVE_FOCUS_OR_TAB,
    }
)


class ExitReason(enum.Enum):
    NORMAL = "normal"


Event = Union[Key, MouseEvent, bytes]
"""A parsed input event; a bytes value is a sequence that was not recognised."""


def _utf8_char(data: bytes, pos: int) -> tuple[str | None, int]:
    lead = data[pos]
    if lead < 0x80:
        size = 1
    elif 0xC0 <= lead <= 0xDF:
        size = 2
    elif 0xE0 <= lead <= 0xEF:
        size = 3
    elif 0xF0 <= lead <= 0xF7:
        size = 4
    else:
        return None, pos + 1
    try:
        return data[pos : pos + size].decode("utf-8"), pos + size
    except UnicodeDecodeError:
        return None, pos + 1


_CSI_LETTERS = {
    ord("D"): KeyKind.LEFT,
    ord("C"): KeyKind.RIGHT,
    ord("A"): KeyKind.UP,
    ord("B"): KeyKind.DOWN,
    ord("H"): KeyKind.HOME,
    ord("F"): KeyKind.END,
    ord("Z"): KeyKind.BACK_TAB,
}


def _tilde_key(number: int) -> Key | None:
    if number in (1, 7):
        return Key(KeyKind.HOME)
    if number == 2:
        return Key(KeyKind.INSERT)
    if number == 3:
        return Key(KeyKind.DELETE)
    if number in (4, 8):
        return Key(KeyKind.END)
    if number == 5:
        return Key(KeyKind.PAGE_UP)
    if number == 6:
        return Key(KeyKind.PAGE_DOWN)
    if 11 <= number <= 15:
        return Key.f(number - 10)
    if 17 <= number <= 21:
        return Key.f(number - 11)
    if 23 <= number <= 24:
        return Key.f(number - 12)
    return None


def _x10_mouse(cb: int, cx: int, cy: int) -> MouseEvent:
    low = cb & 0b11
    wheel = bool(cb & 0x40)
    if low == 0:
        button = MouseButton.WHEEL_UP if wheel else MouseButton.LEFT
    elif low == 1:
        button = MouseButton.WHEEL_DOWN if wheel else MouseButton.MIDDLE
    elif low == 2:
        button = MouseButton.RIGHT
    else:
        return MouseEvent.from_terminal(MouseEventKind.RELEASE, cx, cy)
    return MouseEvent.from_terminal(MouseEventKind.PRESS, cx, cy, button)


_SGR_BUTTONS = {
    0: MouseButton.LEFT,
    1: MouseButton.MIDDLE,
    2: MouseButton.RIGHT,
    64: MouseButton.WHEEL_UP,
    65: MouseButton.WHEEL_DOWN,
}

_RXVT_BUTTONS = {
    32: MouseButton.LEFT,
    33: MouseButton.MIDDLE,
    34: MouseButton.RIGHT,
    96: MouseButton.WHEEL_UP,
    97: MouseButton.WHEEL_DOWN,
}


def _numbers(text: bytes) -> list[int] | None:
    try:
        return [int(part) for part in text.decode("ascii").split(";")]
    except (UnicodeDecodeError, ValueError):
        return None


def _sgr_mouse(nums: list[int], final: int) -> MouseEvent | None:
    cb, cx, cy = nums
    if cb in _SGR_BUTTONS:
        if final == ord("M"):
            return MouseEvent.from_terminal(MouseEventKind.PRESS, cx, cy, _SGR_BUTTONS[cb])
        return MouseEvent.from_terminal(MouseEventKind.RELEASE, cx, cy)
    if cb == 32:
        return MouseEvent.from_terminal(MouseEventKind.HOLD, cx, cy)
    if cb == 3:
        return MouseEvent.from_terminal(MouseEventKind.RELEASE, cx, cy)
    return None


def _rxvt_mouse(nums: list[int]) -> MouseEvent | None:
    cb, cx, cy = nums
    if cb in _RXVT_BUTTONS:
        return MouseEvent.from_terminal(MouseEventKind.PRESS, cx, cy, _RXVT_BUTTONS[cb])
    if cb == 35:
        return MouseEvent.from_terminal(MouseEventKind.RELEASE, cx, cy)
    if cb == 64:
        return MouseEvent.from_terminal(MouseEventKind.HOLD, cx, cy)
    return None


def _parse_csi(data: bytes, start: int) -> tuple[Event, int]:
    pos = start + 2
    size = len(data)
    if pos >= size:
        return data[start:pos], pos
    code = data[pos]
    if code == ord("["):
        if pos + 1 < size and data[pos + 1] in b"ABCDE":
            return Key.f(data[pos + 1] - ord("A") + 1), pos + 2
        end = min(pos + 2, size)
        return data[start:end], end
    if code in _CSI_LETTERS:
        return Key(_CSI_LETTERS[code]), pos + 1
    if code == ord("M"):
        end = pos + 4
        if end > size or data[pos + 1] < 32:
            end = min(end, size)
            return data[start:end], end
        cb = data[pos + 1] - 32
        cx = max(data[pos + 2] - 32, 0)
        cy = max(data[pos + 3] - 32, 0)
        return _x10_mouse(cb, cx, cy), end
    if code == ord("<"):
        final_pos = next(
            (i for i in range(pos + 1, size) if data[i] in b"mM"),
            None,
        )
        if final_pos is None:
            return data[start:], size
        end = final_pos + 1
        nums = _numbers(data[pos + 1 : final_pos])
        event = _sgr_mouse(nums, data[final_pos]) if nums and len(nums) == 3 else None
        return (event if event is not None else data[start:end]), end
    if ord("0") <= code <= ord("9"):
        final_pos = next((i for i in range(pos, size) if 64 <= data[i] <= 126), None)
        if final_pos is None:
            return data[start:], size
        end = final_pos + 1
        nums = _numbers(data[pos:final_pos])
        final = data[final_pos]
        event: Event | None = None
        if nums is not None:
            if final == ord("M") and len(nums) == 3:
                event = _rxvt_mouse(nums)
            elif final == ord("~") and len(nums) == 1:
                event = _tilde_key(nums[0])
        return (event if event is not None else data[start:end]), end
    return data[start : pos + 1], pos + 1


def _parse_one(data: bytes, pos: int) -> tuple[Event, int]:
    first = data[pos]
    if first == 0x1B:
        if pos + 1 >= len(data):
            return Key(KeyKind.ESC), pos + 1
        second = data[pos + 1]
        if second == ord("O"):
            if pos + 2 < len(data) and data[pos + 2] in b"PQRS":
                return Key.f(data[pos + 2] - ord("P") + 1), pos + 3
            end = min(pos + 3, len(data))
            return data[pos:end], end
        if second == ord("["):
            return _parse_csi(data, pos)
        ch, end = _utf8_char(data, pos + 1)
        if ch is None:
            return data[pos:end], end
        return Key.alt(ch), end
    if first in (0x0A, 0x0D):
        return Key.char("\n"), pos + 1
    if first == 0x09:
        return Key.char("\t"), pos + 1
    if first == 0x7F:
        return Key(KeyKind.BACKSPACE), pos + 1
    if 0x01 <= first <= 0x1A:
        return Key.ctrl(chr(first - 0x01 + ord("a"))), pos + 1
    if 0x1C <= first <= 0x1F:
        return Key.ctrl(chr(first - 0x1C + ord("4"))), pos + 1
    if first == 0:
        return Key(KeyKind.NULL), pos + 1
    ch, end = _utf8_char(data, pos)
    if ch is None:
        return data[pos:end], end
    return Key.char(ch), end


def parse_events(data: bytes) -> Iterator[tuple[Event, bytes]]:
    """Split raw terminal input into events, each with the bytes it came from."""
    data = bytes(data)
    pos = 0
    while pos < len(data):
        event, end = _parse_one(data, pos)
        yield event, data[pos:end]
        pos = end


class ClientOs(Protocol):
    def read_from_stdin(self) -> bytes: ...

    def send_to_server(self, action: Action) -> None: ...

    def enable_mouse(self) -> None: ...

    def start_action_repeater(self, action: Action, send: Callable[[Action], None]) -> None: ...


KeyToActions = Callable[[Key, bytes, InputMode], Iterable[Action]]


class InputHandler:
    """Dispatches actions for the current input mode and keeps track of that mode."""

    def __init__(
        self,
        os_input: ClientOs,
        command_is_executing: CommandIsExecuting,
        key_to_actions: KeyToActions,
        send_client_instruction: Callable[[ExitReason], None],
        mode: InputMode = InputMode.NORMAL,
        disable_mouse_mode: bool = False,
    ) -> None:
        self.os_input = os_input
        self.command_is_executing = command_is_executing
        self.key_to_actions = key_to_actions
        self.send_client_instruction = send_client_instruction
        self.mode = mode
        self.disable_mouse_mode = disable_mouse_mode
        self.should_exit = False
        self.pasting = False

    def handle_input(self) -> None:
        """Read and dispatch input until an action ends the loop."""
        if not self.disable_mouse_mode:
            self.os_input.enable_mouse()
        while not self.should_exit:
            data = self.os_input.read_from_stdin()
            for event, raw_bytes in parse_events(data):
                if isinstance(event, Key):
                    self.handle_key(event, raw_bytes)
                elif isinstance(event, MouseEvent):
                    self.handle_mouse_event(event)
                elif event == ALT_LEFT_BRACKET:
                    self.handle_key(Key.alt("["), raw_bytes)
                elif event == BRACKETED_PASTE_START:
                    self.pasting = True
                elif event == BRACKETED_PASTE_END:
                    self.pasting = False
                else:
                    self.handle_unknown_key(raw_bytes)

    def _writes_through(self) -> bool:
        return self.mode in (InputMode.NORMAL, InputMode.LOCKED)

    def handle_unknown_key(self, raw_bytes: bytes) -> None:
        """Forward an unrecognised sequence to the terminal in modes that take text."""
        if self._writes_through():
            self.dispatch_action(Action(ActionKind.WRITE, bytes(raw_bytes)))

    def handle_key(self, key: Key, raw_bytes: bytes) -> None:
        """Dispatch the actions bound to a key, or write it through while pasting."""
        if self.pasting:
            if self._writes_through():
                self.dispatch_action(Action(ActionKind.WRITE, bytes(raw_bytes)))
            return
        for action in self.key_to_actions(key, bytes(raw_bytes), self.mode):
            if self.dispatch_action(action):
                self.should_exit = True

    def handle_mouse_event(self, mouse_event: MouseEvent) -> None:
        point = mouse_event.position
        if mouse_event.kind is MouseEventKind.PRESS:
            kind = {
                MouseButton.WHEEL_UP: ActionKind.SCROLL_UP_AT,
                MouseButton.WHEEL_DOWN: ActionKind.SCROLL_DOWN_AT,
                MouseButton.LEFT: ActionKind.LEFT_CLICK,
            }.get(mouse_event.button)
            if kind is not None:
                self.dispatch_action(Action(kind, point))
        elif mouse_event.kind is MouseEventKind.RELEASE:
            self.dispatch_action(Action(ActionKind.MOUSE_RELEASE, point))
        else:
            action = Action(ActionKind.MOUSE_HOLD, point)
            self.dispatch_action(action)
            self.os_input.start_action_repeater(action, self.os_input.send_to_server)

    def dispatch_action(self, action: Action) -> bool:
        """Send an action to the server; return True when input should stop."""
        if action.kind in (ActionKind.QUIT, ActionKind.DETACH):
            self.os_input.send_to_server(action)
            self.exit()
            return True
        if action.kind is ActionKind.SWITCH_TO_MODE:
            self.mode = action.payload
            self.os_input.send_to_server(action)
        elif action.kind in _BLOCKING_ACTIONS:
            self.command_is_executing.blocking_input_thread()
            self.os_input.send_to_server(action)
            self.command_is_executing.wait_until_input_thread_is_unblocked()
        else:
            self.os_input.send_to_server(action)
        return False

    def exit(self) -> None:
        """Tell the client to shut down normally."""
        self.send_client_instruction(ExitReason.NORMAL)


def input_loop(
    os_input: ClientOs,
    key_to_actions: KeyToActions,
    disable_mouse_mode: bool,
    command_is_executing: CommandIsExecuting,
    send_client_instruction: Callable[[ExitReason], None],
    default_mode: InputMode,
) -> None:
    """Run an input handler until the user quits or detaches."""
    InputHandler(
        os_input,
        command_is_executing,
        key_to_actions,
        send_client_instruction,
        default_mode,
        disable_mouse_mode,
    ).handle_input()