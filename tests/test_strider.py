from pathlib import Path

import pytest

from paneplex.strider import EntryKind, FsEntry, Strider, pretty_bytes


@pytest.fixture
def tree(tmp_path):
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "one.txt").write_text("1")
    (sub / "two.txt").write_text("22")
    (tmp_path / "a.txt").write_text("hello")
    (tmp_path / ".hidden").write_text("x")
    return tmp_path


def test_pretty_bytes_pinned_values():
    assert pretty_bytes(0) == "0 B"
    assert pretty_bytes(999) == "999 B"
    assert pretty_bytes(1500) == "1.5 kB"


def test_pretty_bytes_units_and_sign():
    assert pretty_bytes(2_500_000).endswith(" MB")
    assert pretty_bytes(-1500) == "-" + pretty_bytes(1500)


def test_entries_sort_directories_first():
    f = FsEntry(EntryKind.FILE, Path("a"), 1)
    d = FsEntry(EntryKind.DIR, Path("z"), 0)
    f2 = FsEntry(EntryKind.FILE, Path("b"), 1)
    assert sorted([f2, f, d]) == [d, f, f2]


@pytest.mark.parametrize("width", [20, 30, 12])
def test_as_line_fills_width(width):
    entry = FsEntry(EntryKind.FILE, Path("/tmp/some_long_file_name.txt"), 1500)
    line = entry.as_line(width)
    assert len(line) == width
    assert line.endswith(pretty_bytes(1500))


def test_as_line_truncates_long_names():
    entry = FsEntry(EntryKind.DIR, Path("/x/abcdefghij"), 3)
    line = entry.as_line(8)
    assert "~ " in line
    assert line.endswith("3")


def test_as_line_too_narrow():
    entry = FsEntry(EntryKind.FILE, Path("/x/name"), 1500)
    with pytest.raises(ValueError):
        entry.as_line(3)


def test_hidden_file():
    assert FsEntry(EntryKind.FILE, Path("/x/.rc"), 0).is_hidden_file()
    assert not FsEntry(EntryKind.FILE, Path("/x/rc"), 0).is_hidden_file()


def test_refresh_lists_directory(tree):
    strider = Strider(tree)
    names = [e.name() for e in strider.files]
    assert names[0] == "sub"
    assert set(names) == {"sub", "a.txt", ".hidden"}
    sub = strider.files[0]
    assert sub.is_dir and sub.size == 2
    a = next(e for e in strider.files if e.name() == "a.txt")
    assert a.size == len("hello")


def test_toggle_hidden_files(tree):
    strider = Strider(tree)
    strider.handle_key(".")
    assert strider.hide_hidden_files
    assert ".hidden" not in [e.name() for e in strider.files]
    strider.handle_key(".")
    assert ".hidden" in [e.name() for e in strider.files]


def test_cursor_movement_is_clamped(tree):
    strider = Strider(tree)
    strider.handle_key("Up")
    assert strider.selected == 0
    for _ in range(10):
        strider.handle_key("j")
    assert strider.selected == len(strider.files) - 1
    strider.handle_key("k")
    assert strider.selected == len(strider.files) - 2


def test_enter_directory_and_go_back(tree):
    strider = Strider(tree)
    assert strider.handle_key("Right") is None
    assert strider.path == tree / "sub"
    assert [e.name() for e in strider.files] == ["one.txt", "two.txt"]
    strider.handle_key("h")
    assert strider.path == tree


def test_open_file_returns_its_path(tree):
    strider = Strider(tree)
    strider.handle_key("l")
    strider.handle_key("Down")
    assert strider.handle_key("\n") == tree / "sub" / "two.txt"


def test_cursor_remembered_per_directory(tree):
    strider = Strider(tree)
    strider.handle_key("j")
    remembered = strider.selected
    strider.path = tree / "sub"
    strider.refresh()
    assert strider.selected == 0
    strider.handle_key("Left")
    assert strider.selected == remembered


def test_render_highlights_selection(tree):
    strider = Strider(tree)
    strider.handle_key("j")
    out = strider.render(5, 40)
    lines = out.split("\n")[:-1]
    assert len(lines) == 5
    selected_entry = strider.files[1]
    assert "\x1b[7m" in lines[1]
    assert selected_entry.as_line(40) in lines[1]
    other_file = strider.files[2]
    assert lines[2] == other_file.as_line(40)
    assert lines[4] == ""


def test_render_scrolls_to_selection(tmp_path):
    for i in range(10):
        (tmp_path / f"f{i}").write_text("")
    strider = Strider(tmp_path)
    for _ in range(9):
        strider.handle_key("Down")
    out = strider.render(3, 30)
    assert strider.files[9].as_line(30) in out
    assert strider.files[0].as_line(30) not in out
    assert strider.scroll > 0