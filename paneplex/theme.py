"""Colours, text styles and the shared pieces of the status lines."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace

ARROW_SEPARATOR = "\ue0b0"
MORE_MSG = " ... "

_RESET = "\x1b[0m"


@dataclass(frozen=True)
class PaletteColor:
    """A terminal colour: either a 24-bit RGB triple or a 256-colour index."""

    rgb: tuple[int, int, int] | None = None
    eight_bit: int | None = None

    def __post_init__(self) -> None:
        if (self.rgb is None) == (self.eight_bit is None):
            raise ValueError("a palette colour is either RGB or eight-bit, not both or neither")
        if self.rgb is not None:
            if len(self.rgb) != 3:
                raise ValueError("an RGB colour has exactly three components")
            values = tuple(self.rgb)
        else:
            values = (self.eight_bit,)
        if any(not isinstance(v, int) or not 0 <= v <= 255 for v in values):
            raise ValueError("colour components must be integers from 0 to 255")

    def _code(self, base: int) -> str:
        if self.rgb is not None:
            r, g, b = self.rgb
            return f"{base};2;{r};{g};{b}"
        return f"{base};5;{self.eight_bit}"

    def fg_code(self) -> str:
        """SGR parameters selecting this colour as the foreground."""
        return self._code(38)

    def bg_code(self) -> str:
        """SGR parameters selecting this colour as the background."""
        return self._code(48)


class PaletteSource(enum.Enum):
    DEFAULT = "default"
    XRESOURCES = "xresources"


def _fixed(index: int) -> PaletteColor:
    return PaletteColor(eight_bit=index)


@dataclass(frozen=True)
class Palette:
    """The colours the plugins draw with."""

    source: PaletteSource = PaletteSource.DEFAULT
    fg: PaletteColor = _fixed(245)
    bg: PaletteColor = _fixed(238)
    black: PaletteColor = _fixed(16)
    red: PaletteColor = _fixed(124)
    green: PaletteColor = _fixed(154)
    yellow: PaletteColor = _fixed(226)
    blue: PaletteColor = _fixed(45)
    magenta: PaletteColor = _fixed(201)
    cyan: PaletteColor = _fixed(51)
    white: PaletteColor = _fixed(255)
    orange: PaletteColor = _fixed(166)


def default_palette() -> Palette:
    """The palette used when no theme is configured."""
    return Palette()


class InputMode(enum.Enum):
    NORMAL = "normal"
    LOCKED = "locked"
    RESIZE = "resize"
    PANE = "pane"
    TAB = "tab"
    SCROLL = "scroll"
    RENAME_TAB = "rename_tab"
    SESSION = "session"


@dataclass(frozen=True)
class PluginCapabilities:
    """What the terminal can display; without arrow fonts a plain separator is drawn."""

    arrow_fonts: bool = False


@dataclass
class ModeInfo:
    """The current input mode together with its key bindings and look."""

    mode: InputMode = InputMode.NORMAL
    keybinds: list[tuple[str, str]] = field(default_factory=list)
    palette: Palette = field(default_factory=Palette)
    capabilities: PluginCapabilities = field(default_factory=PluginCapabilities)
    session_name: str | None = None


@dataclass(frozen=True)
class Style:
    """Colours and attributes applied to a piece of text."""

    fg: PaletteColor | None = None
    bg: PaletteColor | None = None
    is_bold: bool = False
    is_dimmed: bool = False
    is_reversed: bool = False

    def bold(self) -> Style:
        return replace(self, is_bold=True)

    def dimmed(self) -> Style:
        return replace(self, is_dimmed=True)

    def reversed(self) -> Style:
        return replace(self, is_reversed=True)

    def _params(self) -> list[str]:
        params = []
        if self.is_bold:
            params.append("1")
        if self.is_dimmed:
            params.append("2")
        if self.is_reversed:
            params.append("7")
        if self.fg is not None:
            params.append(self.fg.fg_code())
        if self.bg is not None:
            params.append(self.bg.bg_code())
        return params

    def paint(self, text: str) -> str:
        """Wrap text in the escape sequences for this style."""
        params = self._params()
        if not params:
            return text
        return f"\x1b[{';'.join(params)}m{text}{_RESET}"


def style(fg: PaletteColor | None, bg: PaletteColor | None) -> Style:
    """A style with the given foreground and background."""
    return Style(fg=fg, bg=bg)


@dataclass
class LinePart:
    """Rendered text together with its width on screen."""

    part: str = ""
    length: int = 0

    def __str__(self) -> str:
        return self.part


@dataclass(frozen=True)
class ColoredElements:
    # selected mode
    selected_prefix_separator: Style
    selected_char_left_separator: Style
    selected_char_shortcut: Style
    selected_char_right_separator: Style
    selected_styled_text: Style
    selected_suffix_separator: Style
    # unselected mode
    unselected_prefix_separator: Style
    unselected_char_left_separator: Style
    unselected_char_shortcut: Style
    unselected_char_right_separator: Style
    unselected_styled_text: Style
    unselected_suffix_separator: Style
    # disabled mode
    disabled_prefix_separator: Style
    disabled_styled_text: Style
    disabled_suffix_separator: Style
    # selected single letter
    selected_single_letter_prefix_separator: Style
    selected_single_letter_char_shortcut: Style
    selected_single_letter_suffix_separator: Style
    # unselected single letter
    unselected_single_letter_prefix_separator: Style
    unselected_single_letter_char_shortcut: Style
    unselected_single_letter_suffix_separator: Style
    # superkey
    superkey_prefix: Style
    superkey_suffix_separator: Style


def color_elements(palette: Palette) -> ColoredElements:
    """Pick the styles of the status-bar elements for a palette."""
    p = palette
    if p.source is PaletteSource.XRESOURCES:
        return ColoredElements(
            selected_prefix_separator=style(p.cyan, p.green),
            selected_char_left_separator=style(p.fg, p.green).bold(),
            selected_char_shortcut=style(p.red, p.green).bold(),
            selected_char_right_separator=style(p.fg, p.green).bold(),
            selected_styled_text=style(p.cyan, p.green).bold(),
            selected_suffix_separator=style(p.green, p.cyan).bold(),
            unselected_prefix_separator=style(p.cyan, p.fg),
            unselected_char_left_separator=style(p.cyan, p.fg).bold(),
            unselected_char_shortcut=style(p.red, p.fg).bold(),
            unselected_char_right_separator=style(p.cyan, p.fg).bold(),
            unselected_styled_text=style(p.cyan, p.fg).bold(),
            unselected_suffix_separator=style(p.fg, p.cyan),
            disabled_prefix_separator=style(p.cyan, p.fg),
            disabled_styled_text=style(p.cyan, p.fg).dimmed(),
            disabled_suffix_separator=style(p.fg, p.cyan),
            selected_single_letter_prefix_separator=style(p.fg, p.green),
            selected_single_letter_char_shortcut=style(p.red, p.green).bold(),
            selected_single_letter_suffix_separator=style(p.green, p.fg),
            unselected_single_letter_prefix_separator=style(p.fg, p.cyan),
            unselected_single_letter_char_shortcut=style(p.red, p.fg).bold(),
            unselected_single_letter_suffix_separator=style(p.fg, p.cyan),
            superkey_prefix=style(p.cyan, p.fg).bold(),
            superkey_suffix_separator=style(p.fg, p.cyan),
        )
    # The default theme uses cyan as a stand-in for a gray background.
    return ColoredElements(
        selected_prefix_separator=style(p.cyan, p.green),
        selected_char_left_separator=style(p.black, p.green).bold(),
        selected_char_shortcut=style(p.red, p.green).bold(),
        selected_char_right_separator=style(p.black, p.green).bold(),
        selected_styled_text=style(p.black, p.green).bold(),
        selected_suffix_separator=style(p.green, p.cyan).bold(),
        unselected_prefix_separator=style(p.cyan, p.fg),
        unselected_char_left_separator=style(p.black, p.fg).bold(),
        unselected_char_shortcut=style(p.red, p.fg).bold(),
        unselected_char_right_separator=style(p.black, p.fg).bold(),
        unselected_styled_text=style(p.black, p.fg).bold(),
        unselected_suffix_separator=style(p.fg, p.cyan),
        disabled_prefix_separator=style(p.cyan, p.fg),
        disabled_styled_text=style(p.cyan, p.fg).dimmed(),
        disabled_suffix_separator=style(p.fg, p.cyan),
        selected_single_letter_prefix_separator=style(p.cyan, p.green),
        selected_single_letter_char_shortcut=style(p.red, p.green).bold(),
        selected_single_letter_suffix_separator=style(p.green, p.cyan),
        unselected_single_letter_prefix_separator=style(p.cyan, p.fg),
        unselected_single_letter_char_shortcut=style(p.red, p.fg).bold(),
        unselected_single_letter_suffix_separator=style(p.fg, p.cyan),
        superkey_prefix=style(p.white, p.cyan).bold(),
        superkey_suffix_separator=style(p.cyan, p.cyan),
    )