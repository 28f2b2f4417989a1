"""The second status-bar line: key hints for the current mode."""

from __future__ import annotations

from collections.abc import Sequence

from paneplex.theme import MORE_MSG, InputMode, LinePart, ModeInfo, Palette, Style

_Piece = tuple[str, Style | None]


def _shortcut(
    is_first_shortcut: bool,
    shortcut: str,
    description: str,
    shortcut_style: Style,
    text_style: Style,
) -> LinePart:
    separator = " " if is_first_shortcut else " / "
    part = "".join(
        (
            text_style.paint(separator),
            text_style.paint("<"),
            shortcut_style.paint(shortcut),
            text_style.paint("> "),
            text_style.bold().paint(description),
        )
    )
    # the angle brackets around the shortcut and the space after it
    length = len(shortcut) + 3 + len(description) + len(separator)
    return LinePart(part=part, length=length)


def _full_length_shortcut(
    is_first_shortcut: bool, letter: str, description: str, palette: Palette
) -> LinePart:
    return _shortcut(
        is_first_shortcut,
        letter,
        description,
        Style(fg=palette.green).bold(),
        Style(fg=palette.white),
    )


def _first_word_shortcut(
    is_first_shortcut: bool, letter: str, description: str, palette: Palette
) -> LinePart:
    first_word = description.split(" ")[0]
    return _full_length_shortcut(is_first_shortcut, letter, first_word, palette)


def _select_pane_shortcut(is_first_shortcut: bool, palette: Palette) -> LinePart:
    return _shortcut(
        is_first_shortcut,
        "ENTER",
        "Select pane",
        Style(fg=palette.orange).bold(),
        Style(fg=palette.white),
    )


def _styled_pieces(pieces: Sequence[_Piece]) -> LinePart:
    return LinePart(
        part="".join(text if st is None else st.paint(text) for text, st in pieces),
        length=sum(len(text) for text, _ in pieces),
    )


def _quicknav(palette: Palette, new_pane_text: str, navigate_text: str) -> LinePart:
    orange = Style(fg=palette.orange).bold()
    green = Style(fg=palette.green).bold()
    return _styled_pieces(
        (
            (" Tip: ", None),
            ("Alt", orange),
            (" + ", None),
            ("n", green),
            (new_pane_text, None),
            ("Alt", orange),
            (" + ", None),
            ("[]", green),
            (" or ", None),
            ("hjkl", green),
            (navigate_text, None),
        )
    )


def _quicknav_full(palette: Palette) -> LinePart:
    return _quicknav(palette, " => open new pane. ", " => navigate between panes.")


def _quicknav_medium(palette: Palette) -> LinePart:
    return _quicknav(palette, " => new pane. ", " => navigate.")


def _quicknav_short(palette: Palette) -> LinePart:
    orange = Style(fg=palette.orange).bold()
    green = Style(fg=palette.green).bold()
    return _styled_pieces(
        (
            (" QuickNav: ", None),
            ("Alt", orange),
            (" + ", None),
            ("n", green),
            ("/", None),
            ("[]", green),
            ("/", None),
            ("hjkl", green),
        )
    )


def _locked_interface_indication(palette: Palette) -> LinePart:
    text = " -- INTERFACE LOCKED -- "
    return LinePart(part=Style(fg=palette.white).bold().paint(text), length=len(text))


def _append(line: LinePart, other: LinePart) -> None:
    line.part += other.part
    line.length += other.length


def _shortcut_list(help: ModeInfo, render_shortcut) -> LinePart:
    line = LinePart()
    for index, (letter, description) in enumerate(help.keybinds):
        _append(line, render_shortcut(index == 0, letter, description, help.palette))
    _append(line, _select_pane_shortcut(not help.keybinds, help.palette))
    return line


def _full_shortcut_list(help: ModeInfo) -> LinePart:
    if help.mode is InputMode.NORMAL:
        return _quicknav_full(help.palette)
    if help.mode is InputMode.LOCKED:
        return _locked_interface_indication(help.palette)
    return _shortcut_list(help, _full_length_shortcut)


def _shortened_shortcut_list(help: ModeInfo) -> LinePart:
    if help.mode is InputMode.NORMAL:
        return _quicknav_medium(help.palette)
    if help.mode is InputMode.LOCKED:
        return _locked_interface_indication(help.palette)
    return _shortcut_list(help, _first_word_shortcut)


def _best_effort_shortcut_list(help: ModeInfo, max_len: int) -> LinePart:
    if help.mode in (InputMode.NORMAL, InputMode.LOCKED):
        line = (
            _quicknav_short(help.palette)
            if help.mode is InputMode.NORMAL
            else _locked_interface_indication(help.palette)
        )
        return line if line.length <= max_len else LinePart()

    line = LinePart()
    for index, (letter, description) in enumerate(help.keybinds):
        shortcut = _first_word_shortcut(index == 0, letter, description, help.palette)
        if line.length + shortcut.length + len(MORE_MSG) > max_len:
            line.part += MORE_MSG
            line.length += len(MORE_MSG)
            break
        _append(line, shortcut)
    select_pane = _select_pane_shortcut(not help.keybinds, help.palette)
    if line.length + select_pane.length <= max_len:
        _append(line, select_pane)
    return line


def keybinds(help: ModeInfo, max_width: int) -> LinePart:
    """The key hints for the mode, in the longest form that fits max_width."""
    full = _full_shortcut_list(help)
    if full.length <= max_width:
        return full
    shortened = _shortened_shortcut_list(help)
    if shortened.length <= max_width:
        return shortened
    return _best_effort_shortcut_list(help, max_width)