import pytest

from paneplex.tab_line import (
    active_tab,
    non_active_tab,
    tab_line,
    tab_separator,
    tab_style,
)
from paneplex.theme import ARROW_SEPARATOR, LinePart, Palette, PluginCapabilities


def _tabs(count, width=10):
    return [LinePart(part=f"T{i}", length=width) for i in range(count)]


def test_separator_depends_on_arrow_fonts():
    assert tab_separator(PluginCapabilities(arrow_fonts=False)) == ARROW_SEPARATOR
    assert tab_separator(PluginCapabilities(arrow_fonts=True)) == ""


def test_active_tab_contains_padded_text():
    part = active_tab("editor", Palette(), ARROW_SEPARATOR)
    assert " editor " in part.part
    assert part.length == len("editor") + 4


def test_active_and_inactive_tabs_look_different():
    palette = Palette()
    active = active_tab("x", palette, ARROW_SEPARATOR)
    inactive = non_active_tab("x", palette, ARROW_SEPARATOR)
    assert active.length == inactive.length
    assert active.part != inactive.part
    assert palette.green.bg_code() in active.part
    assert palette.green.bg_code() not in inactive.part


def test_tab_style_marks_sync():
    caps = PluginCapabilities()
    synced = tab_style("work", True, True, Palette(), caps)
    plain = tab_style("work", True, False, Palette(), caps)
    assert "(Sync)" in synced.part
    assert "(Sync)" not in plain.part
    assert synced.length == plain.length + len(" (Sync)")


def test_tab_style_chooses_active_rendering():
    palette = Palette()
    caps = PluginCapabilities()
    assert tab_style("a", True, False, palette, caps) == active_tab(
        "a", palette, tab_separator(caps)
    )
    assert tab_style("a", False, False, palette, caps) == non_active_tab(
        "a", palette, tab_separator(caps)
    )


def test_all_tabs_fit():
    tabs = _tabs(3)
    line = tab_line("dev", tabs, 1, 200, Palette(), PluginCapabilities())
    assert "(dev)" in line[0].part
    assert [p.part for p in line[1:]] == ["T0", "T1", "T2"]
    assert sum(p.length for p in line) <= 200


def test_prefix_without_session_name():
    line = tab_line(None, _tabs(1), 0, 100, Palette(), PluginCapabilities())
    assert "(" not in line[0].part
    assert line[1].part == "T0"


def test_overflow_adds_markers_and_keeps_active_tab():
    tabs = _tabs(10)
    cols = 50
    line = tab_line(None, tabs, 5, cols, Palette(), PluginCapabilities())
    parts = [p.part for p in line]
    assert "T5" in parts
    assert "←" in line[1].part
    assert "→" in line[-1].part
    assert sum(p.length for p in line) < cols


def test_overflow_keeps_tab_order():
    line = tab_line(None, _tabs(10), 5, 50, Palette(), PluginCapabilities())
    shown = [int(p.part[1:]) for p in line if p.part.startswith("T")]
    assert shown == sorted(shown)
    assert 5 in shown


def test_active_index_at_end_uses_last_tab():
    tabs = _tabs(3)
    line = tab_line(None, tabs, 3, 200, Palette(), PluginCapabilities())
    assert [p.part for p in line[1:]] == ["T0", "T1", "T2"]


def test_input_list_is_not_modified():
    tabs = _tabs(10)
    copy = list(tabs)
    tab_line(None, tabs, 5, 50, Palette(), PluginCapabilities())
    assert tabs == copy


def test_no_tabs_is_an_error():
    with pytest.raises(ValueError):
        tab_line(None, [], 0, 100, Palette(), PluginCapabilities())


def test_too_narrow_for_prefix_is_an_error():
    with pytest.raises(ValueError):
        tab_line(None, _tabs(2), 0, 3, Palette(), PluginCapabilities())


def test_bad_active_index_is_an_error():
    with pytest.raises(IndexError):
        tab_line(None, _tabs(2), 5, 100, Palette(), PluginCapabilities())