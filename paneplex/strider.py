"""A small file browser pane."""

from __future__ import annotations

import enum
import math
import os
from dataclasses import dataclass, field
from pathlib import Path

from paneplex.theme import Style

_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def _format_number(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return repr(value)


def pretty_bytes(size: float) -> str:
    """A human-readable size in decimal units, such as "1.5 kB"."""
    negative = "-" if size < 0 else ""
    num = abs(float(size))
    if num < 1:
        return f"{negative}{_format_number(num)} B"
    exponent = min(math.floor(math.log(num) / math.log(1000)), len(_UNITS) - 1)
    value = float(f"{num / 1000 ** exponent:.2f}")
    return f"{negative}{_format_number(value)} {_UNITS[exponent]}"


class EntryKind(enum.IntEnum):
    DIR = 0
    FILE = 1


@dataclass(frozen=True, order=True)
class FsEntry:
    """A directory (size is its child count) or a file (size in bytes)."""

    kind: EntryKind
    path: Path
    size: int

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIR

    def name(self) -> str:
        return self.path.name

    def as_line(self, width: int) -> str:
        """The name and size laid out to fill width columns."""
        info = str(self.size) if self.is_dir else pretty_bytes(self.size)
        space = width - len(info)
        name = self.name()
        if space - 1 < len(name):
            if space < 2:
                raise ValueError(f"width {width} is too small for {name!r}")
            return f"{name[: space - 2]}~ {info}"
        return name + " " * (space - len(name)) + info

    def is_hidden_file(self) -> bool:
        return self.name().startswith(".")


def _scan(path: Path) -> FsEntry | None:
    try:
        if path.is_dir() and not path.is_symlink():
            return FsEntry(EntryKind.DIR, path, len(os.listdir(path)))
        return FsEntry(EntryKind.FILE, path, path.lstat().st_size)
    except OSError:
        return None


_UP_KEYS = {"Up", "k"}
_DOWN_KEYS = {"Down", "j"}
_OPEN_KEYS = {"Right", "\n", "l"}
_BACK_KEYS = {"Left", "h"}


@dataclass
class Strider:
    """Browser state: the current directory, its entries and a cursor per directory."""

    path: Path = field(default_factory=lambda: Path("."))
    hide_hidden_files: bool = False
    files: list[FsEntry] = field(default_factory=list, init=False)
    cursor_hist: dict[Path, tuple[int, int]] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.refresh()

    @property
    def selected(self) -> int:
        return self.cursor_hist.get(self.path, (0, 0))[0]

    @selected.setter
    def selected(self, value: int) -> None:
        self.cursor_hist[self.path] = (value, self.scroll)

    @property
    def scroll(self) -> int:
        return self.cursor_hist.get(self.path, (0, 0))[1]

    @scroll.setter
    def scroll(self, value: int) -> None:
        self.cursor_hist[self.path] = (self.selected, value)

    def refresh(self) -> None:
        """Read the current directory again."""
        entries = []
        with os.scandir(self.path) as it:
            for dir_entry in it:
                entry = _scan(self.path / dir_entry.name)
                if entry is None:
                    continue
                if entry.is_hidden_file() and self.hide_hidden_files:
                    continue
                entries.append(entry)
        entries.sort()
        self.files = entries

    def toggle_hidden_files(self) -> None:
        self.hide_hidden_files = not self.hide_hidden_files

    def handle_key(self, key: str) -> Path | None:
        """React to a key press: a character or "Up", "Down", "Left", "Right".

        Returns the path of a file the user chose to open, otherwise None.
        """
        if key in _UP_KEYS:
            self.selected = max(self.selected - 1, 0)
        elif key in _DOWN_KEYS:
            if self.files:
                self.selected = min(len(self.files) - 1, self.selected + 1)
        elif key in _OPEN_KEYS and self.files:
            entry = self.files[self.selected]
            if entry.is_dir:
                self.path = entry.path
                self.refresh()
            else:
                return entry.path
        elif key in _BACK_KEYS:
            self.path = self.path.parent
            self.refresh()
        elif key == ".":
            self.toggle_hidden_files()
            self.refresh()
        return None

    def render(self, rows: int, cols: int) -> str:
        """Return rows lines of the listing, each ending in a newline."""
        lines = []
        for row in range(rows):
            if self.selected < self.scroll:
                self.scroll = self.selected
            if self.selected - self.scroll + 2 > rows:
                self.scroll = self.selected + 2 - rows
            index = self.scroll + row
            if index >= len(self.files):
                lines.append("")
                continue
            entry = self.files[index]
            line_style = Style().dimmed().bold() if entry.is_dir else Style()
            if index == self.selected:
                line_style = line_style.reversed()
            lines.append(line_style.paint(entry.as_line(cols)))
        return "".join(f"{line}\n" for line in lines)