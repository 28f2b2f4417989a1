"""The tab line: tab labels with overflow markers and a session prefix."""

from __future__ import annotations

from collections.abc import Sequence

from paneplex.theme import ARROW_SEPARATOR, LinePart, Palette, PluginCapabilities, style

_MANY_TABS = 10000


def _total_length(parts: Sequence[LinePart]) -> int:
    return sum(part.length for part in parts)


def tab_separator(capabilities: PluginCapabilities) -> str:
    """The separator drawn between tabs for the given terminal capabilities."""
    return "" if capabilities.arrow_fonts else ARROW_SEPARATOR


def _tab(text: str, palette: Palette, separator: str, active: bool) -> LinePart:
    colour = palette.green if active else palette.fg
    part = "".join(
        (
            style(palette.cyan, colour).paint(separator),
            style(palette.black, colour).bold().paint(f" {text} "),
            style(colour, palette.cyan).paint(separator),
        )
    )
    # two separators and the padding on both sides
    return LinePart(part=part, length=len(text) + 4)


def active_tab(text: str, palette: Palette, separator: str) -> LinePart:
    """The label of the focused tab."""
    return _tab(text, palette, separator, active=True)


def non_active_tab(text: str, palette: Palette, separator: str) -> LinePart:
    """The label of a tab that is not focused."""
    return _tab(text, palette, separator, active=False)


def tab_style(
    text: str,
    is_active_tab: bool,
    is_sync_panes_active: bool,
    palette: Palette,
    capabilities: PluginCapabilities,
) -> LinePart:
    """Render one tab label, marking tabs whose panes are synchronised."""
    separator = tab_separator(capabilities)
    if is_sync_panes_active:
        text = f"{text} (Sync)"
    if is_active_tab:
        return active_tab(text, palette, separator)
    return non_active_tab(text, palette, separator)


def _populate_tabs(
    before: list[LinePart], after: list[LinePart], to_render: list[LinePart], cols: int
) -> None:
    take_next = True
    while before or after:
        current = _total_length(to_render)
        if current >= cols:
            break
        can_take_next = bool(after) and after[0].length + current <= cols
        can_take_previous = bool(before) and before[-1].length + current <= cols
        if take_next and can_take_next:
            to_render.append(after.pop(0))
            take_next = False
        elif can_take_previous:
            to_render.insert(0, before.pop())
            take_next = True
        elif can_take_next:
            to_render.append(after.pop(0))
            take_next = False
        else:
            break


def _more_message(text: str, length: int, palette: Palette, separator: str) -> LinePart:
    part = "".join(
        (
            style(palette.cyan, palette.orange).paint(separator),
            style(palette.black, palette.orange).bold().paint(text),
            style(palette.orange, palette.cyan).paint(separator),
        )
    )
    return LinePart(part=part, length=length)


def _left_more_message(count: int, palette: Palette, separator: str) -> LinePart:
    if count == 0:
        return LinePart()
    text = f" ← +{count} " if count < _MANY_TABS else " ← +many "
    return _more_message(text, len(text) + 2, palette, separator)


def _right_more_message(count: int, palette: Palette, separator: str) -> LinePart:
    if count == 0:
        return LinePart()
    text = f" +{count} → " if count < _MANY_TABS else " +many → "
    return _more_message(text, len(text) + 1, palette, separator)


def _add_previous_tabs_msg(
    before: list[LinePart],
    to_render: list[LinePart],
    title_bar: list[LinePart],
    cols: int,
    palette: Palette,
    separator: str,
) -> None:
    while (
        to_render
        and _total_length(to_render)
        + _left_more_message(len(before), palette, separator).length
        >= cols
    ):
        before.append(to_render.pop(0))
    title_bar.append(_left_more_message(len(before), palette, separator))


def _add_next_tabs_msg(
    after: list[LinePart],
    title_bar: list[LinePart],
    cols: int,
    palette: Palette,
    separator: str,
) -> None:
    while (
        title_bar
        and _total_length(title_bar)
        + _right_more_message(len(after), palette, separator).length
        >= cols
    ):
        after.insert(0, title_bar.pop())
    title_bar.append(_right_more_message(len(after), palette, separator))


def _tab_line_prefix(session_name: str | None, palette: Palette) -> LinePart:
    text = " Paneplex "
    if session_name is not None:
        text += f"({session_name}) "
    return LinePart(
        part=style(palette.white, palette.cyan).bold().paint(text),
        length=len(text),
    )


def tab_line(
    session_name: str | None,
    all_tabs: Sequence[LinePart],
    active_tab_index: int,
    cols: int,
    palette: Palette,
    capabilities: PluginCapabilities,
) -> list[LinePart]:
    """Choose which tabs fit around the active one and add overflow markers."""
    if not all_tabs:
        raise ValueError("there are no tabs to render")
    if not 0 <= active_tab_index <= len(all_tabs):
        raise IndexError(f"active tab index {active_tab_index} is out of range")

    after = list(all_tabs[active_tab_index:])
    before = list(all_tabs[:active_tab_index])
    active = after.pop(0) if after else before.pop()
    to_render = [active]

    prefix = _tab_line_prefix(session_name, palette)
    available = cols - prefix.length
    if available < 0:
        raise ValueError(f"{cols} columns cannot hold the tab line prefix")

    _populate_tabs(before, after, to_render, available)

    separator = tab_separator(capabilities)
    line: list[LinePart] = []
    if before:
        _add_previous_tabs_msg(before, to_render, line, available, palette, separator)
    line.extend(to_render)
    if after:
        _add_next_tabs_msg(after, line, available, palette, separator)
    line.insert(0, prefix)
    return line