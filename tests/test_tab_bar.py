from paneplex.tab_bar import TabBar, TabInfo
from paneplex.theme import InputMode, ModeInfo, Palette


def _bar(tabs, **mode):
    bar = TabBar()
    bar.update_tabs(tabs)
    bar.update_mode(ModeInfo(**mode))
    return bar


def test_empty_bar_renders_nothing():
    assert TabBar().render(1, 80) == ""


def test_updates_are_stored():
    bar = TabBar()
    tabs = [TabInfo(position=0, name="one", active=True)]
    info = ModeInfo(mode=InputMode.TAB)
    bar.update_tabs(tabs)
    bar.update_mode(info)
    assert bar.tabs == tabs
    assert bar.mode_info is info


def test_render_contains_tab_names_in_order():
    bar = _bar(
        [
            TabInfo(position=0, name="alpha"),
            TabInfo(position=1, name="beta", active=True),
            TabInfo(position=2, name="gamma"),
        ]
    )
    out = bar.render(1, 120)
    assert out.index("alpha") < out.index("beta") < out.index("gamma")
    assert out.endswith("\x1b[0K\n")
    assert Palette().cyan.bg_code() in out


def test_rename_mode_shows_placeholder_for_empty_name():
    tabs = [TabInfo(position=0, name="", active=True)]
    assert "Enter name..." in _bar(tabs, mode=InputMode.RENAME_TAB).render(1, 120)
    assert "Enter name..." not in _bar(tabs, mode=InputMode.NORMAL).render(1, 120)


def test_sync_marker_and_session_name():
    tabs = [TabInfo(position=0, name="main", active=True, is_sync_panes_active=True)]
    out = _bar(tabs, session_name="work").render(1, 120)
    assert "(Sync)" in out
    assert "(work)" in out


def test_narrow_bar_hides_tabs():
    tabs = [TabInfo(position=i, name=f"tab{i}", active=(i == 0)) for i in range(20)]
    out = _bar(tabs).render(1, 60)
    assert "tab0" in out
    assert "tab19" not in out
    assert "→" in out