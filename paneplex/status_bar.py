"""The status bar: the mode shortcuts above and the key hints below."""

from __future__ import annotations

from dataclasses import dataclass, field

from paneplex.status_first_line import ctrl_keys, superkey
from paneplex.status_second_line import keybinds
from paneplex.theme import ARROW_SEPARATOR, ModeInfo, color_elements


@dataclass
class StatusBar:
    """Keeps the latest mode information and renders the two status lines."""

    mode_info: ModeInfo = field(default_factory=ModeInfo)
    selectable: bool = False
    invisible_borders: bool = True
    fixed_height: int = 2

    def update(self, mode_info: ModeInfo) -> None:
        """Take a new mode update."""
        self.mode_info = mode_info

    def render(self, rows: int, cols: int) -> str:
        """Return both lines, each ending in a newline."""
        info = self.mode_info
        separator = "" if info.capabilities.arrow_fonts else ARROW_SEPARATOR

        elements = color_elements(info.palette)
        super_key = superkey(elements, separator)
        mode_keys = ctrl_keys(info, cols - super_key.length, separator)

        first_line = f"{super_key}{mode_keys}"
        second_line = keybinds(info, cols)

        # fill the rest of the first line with the background colour,
        # clear the rest of the second line after a style reset
        background = f"\x1b[{info.palette.cyan.bg_code()}m"
        return f"{first_line}{background}\x1b[0K\n\x1b[m{second_line}\x1b[0K\n"