"""The tab bar: one line listing the open tabs."""

from __future__ import annotations

from dataclasses import dataclass, field

from paneplex.tab_line import tab_line, tab_style
from paneplex.theme import InputMode, ModeInfo

_RENAME_PLACEHOLDER = "Enter name..."


@dataclass
class TabInfo:
    """What the tab bar knows about one tab."""

    position: int
    name: str
    active: bool = False
    is_sync_panes_active: bool = False


@dataclass
class TabBar:
    """Keeps the latest tabs and mode information and renders the tab line."""

    tabs: list[TabInfo] = field(default_factory=list)
    mode_info: ModeInfo = field(default_factory=ModeInfo)
    selectable: bool = False
    invisible_borders: bool = True
    fixed_height: int = 1

    def update_mode(self, mode_info: ModeInfo) -> None:
        """Take a new mode update."""
        self.mode_info = mode_info

    def update_tabs(self, tabs: list[TabInfo]) -> None:
        """Take a new list of tabs."""
        self.tabs = list(tabs)

    def render(self, rows: int, cols: int) -> str:
        """Return the tab line ending in a newline, or nothing without tabs."""
        if not self.tabs:
            return ""
        info = self.mode_info
        all_tabs = []
        active_tab_index = 0
        for tab in self.tabs:
            name = tab.name
            if tab.active:
                if info.mode is InputMode.RENAME_TAB and not name:
                    name = _RENAME_PLACEHOLDER
                active_tab_index = tab.position
            all_tabs.append(
                tab_style(
                    name,
                    tab.active,
                    tab.is_sync_panes_active,
                    info.palette,
                    info.capabilities,
                )
            )
        parts = tab_line(
            info.session_name,
            all_tabs,
            active_tab_index,
            cols,
            info.palette,
            info.capabilities,
        )
        line = "".join(part.part for part in parts)
        return f"{line}\x1b[{info.palette.cyan.bg_code()}m\x1b[0K\n"