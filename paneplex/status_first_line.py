"""The first status-bar line: the Ctrl key and the mode shortcuts."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from paneplex.theme import ColoredElements, InputMode, LinePart, ModeInfo, color_elements


class _CtrlKeyAction(enum.Enum):
    LOCK = ("LOCK", "g")
    PANE = ("PANE", "p")
    TAB = ("TAB", "t")
    RESIZE = ("RESIZE", "r")
    SCROLL = ("SCROLL", "s")
    QUIT = ("QUIT", "q")
    SESSION = ("SESSION", "o")

    @property
    def full_text(self) -> str:
        return self.value[0]

    @property
    def letter(self) -> str:
        return self.value[1]


class _CtrlKeyMode(enum.Enum):
    UNSELECTED = enum.auto()
    SELECTED = enum.auto()
    DISABLED = enum.auto()


@dataclass(frozen=True)
class _CtrlKeyShortcut:
    mode: _CtrlKeyMode
    action: _CtrlKeyAction


_ACTION_ORDER = (
    _CtrlKeyAction.LOCK,
    _CtrlKeyAction.PANE,
    _CtrlKeyAction.TAB,
    _CtrlKeyAction.RESIZE,
    _CtrlKeyAction.SCROLL,
    _CtrlKeyAction.SESSION,
    _CtrlKeyAction.QUIT,
)

_SELECTED_ACTION = {
    InputMode.LOCKED: _CtrlKeyAction.LOCK,
    InputMode.RESIZE: _CtrlKeyAction.RESIZE,
    InputMode.PANE: _CtrlKeyAction.PANE,
    InputMode.TAB: _CtrlKeyAction.TAB,
    InputMode.RENAME_TAB: _CtrlKeyAction.TAB,
    InputMode.SCROLL: _CtrlKeyAction.SCROLL,
    InputMode.SESSION: _CtrlKeyAction.SESSION,
}


def _shortcuts_for(mode: InputMode) -> list[_CtrlKeyShortcut]:
    selected = _SELECTED_ACTION.get(mode)
    others = _CtrlKeyMode.DISABLED if mode is InputMode.LOCKED else _CtrlKeyMode.UNSELECTED
    return [
        _CtrlKeyShortcut(_CtrlKeyMode.SELECTED if action is selected else others, action)
        for action in _ACTION_ORDER
    ]


def _mode_shortcut(
    letter: str, text: str, palette: ColoredElements, separator: str, selected: bool
) -> LinePart:
    prefix = "selected" if selected else "unselected"

    def paint(element: str, value: str) -> str:
        return getattr(palette, f"{prefix}_{element}").paint(value)

    part = "".join(
        (
            paint("prefix_separator", separator),
            paint("char_left_separator", " <"),
            paint("char_shortcut", letter),
            paint("char_right_separator", ">"),
            paint("styled_text", f"{text} "),
            paint("suffix_separator", separator),
        )
    )
    # arrows, char separators, the character and the padding
    return LinePart(part=part, length=len(text) + 7)


def _disabled_mode_shortcut(text: str, palette: ColoredElements, separator: str) -> LinePart:
    part = "".join(
        (
            palette.disabled_prefix_separator.paint(separator),
            palette.disabled_styled_text.paint(f"{text} "),
            palette.disabled_suffix_separator.paint(separator),
        )
    )
    return LinePart(part=part, length=len(text) + 3)


def _single_letter_shortcut(
    letter: str, palette: ColoredElements, separator: str, selected: bool
) -> LinePart:
    prefix = "selected" if selected else "unselected"
    text = f" {letter} "
    part = "".join(
        (
            getattr(palette, f"{prefix}_single_letter_prefix_separator").paint(separator),
            getattr(palette, f"{prefix}_single_letter_char_shortcut").paint(text),
            getattr(palette, f"{prefix}_single_letter_suffix_separator").paint(separator),
        )
    )
    return LinePart(part=part, length=len(text) + 4)


def _full_ctrl_key(key: _CtrlKeyShortcut, palette: ColoredElements, separator: str) -> LinePart:
    action = key.action
    if key.mode is _CtrlKeyMode.DISABLED:
        return _disabled_mode_shortcut(
            f" <{action.letter}> {action.full_text}", palette, separator
        )
    return _mode_shortcut(
        action.letter,
        f" {action.full_text}",
        palette,
        separator,
        selected=key.mode is _CtrlKeyMode.SELECTED,
    )


def _single_letter_ctrl_key(
    key: _CtrlKeyShortcut, palette: ColoredElements, separator: str
) -> LinePart:
    letter = key.action.letter
    if key.mode is _CtrlKeyMode.DISABLED:
        return _disabled_mode_shortcut(f" {letter}", palette, separator)
    return _single_letter_shortcut(
        letter, palette, separator, selected=key.mode is _CtrlKeyMode.SELECTED
    )


def _join(parts: Sequence[LinePart]) -> LinePart:
    return LinePart(
        part="".join(p.part for p in parts),
        length=sum(p.length for p in parts),
    )


def _key_indicators(
    max_len: int,
    keys: Sequence[_CtrlKeyShortcut],
    palette: ColoredElements,
    separator: str,
) -> LinePart:
    for render in (_full_ctrl_key, _single_letter_ctrl_key):
        line = _join([render(key, palette, separator) for key in keys])
        if line.length < max_len:
            return line
    return LinePart()


def superkey(palette: ColoredElements, separator: str) -> LinePart:
    """The leading " Ctrl +" indicator."""
    prefix_text = " Ctrl +"
    part = palette.superkey_prefix.paint(prefix_text) + palette.superkey_suffix_separator.paint(
        separator
    )
    return LinePart(part=part, length=len(prefix_text))


def ctrl_keys(help: ModeInfo, max_len: int, separator: str) -> LinePart:
    """The mode shortcuts, shortened or dropped to fit within max_len."""
    elements = color_elements(help.palette)
    return _key_indicators(max_len, _shortcuts_for(help.mode), elements, separator)