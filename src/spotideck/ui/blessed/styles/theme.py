"""Color theme built from the [colors] config section."""

from dataclasses import dataclass
from typing import Callable

from blessed import Terminal

from spotideck.core.config import ColorsConfig

Style = Callable[[str], str]


def plain(text: str) -> str:
    return text


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert "#RRGGBB" to an (r, g, b) tuple."""
    value = hex_color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def make_style(term: Terminal, hex_color: str, bold: bool = False) -> Style:
    """
    Build a function that wraps text in a 24-bit color (downconverted by
    blessed on terminals with fewer colors).

    Args:
        term: blessed Terminal instance
        hex_color: Color as "#RRGGBB"
        bold: Also apply bold

    Returns:
        Callable taking plain text and returning styled text
    """
    if not term.does_styling:
        return plain

    prefix = term.color_rgb(*hex_to_rgb(hex_color))
    if bold:
        prefix = term.bold + prefix
    normal = term.normal

    def style(text: str) -> str:
        return f"{prefix}{text}{normal}"

    return style


@dataclass(frozen=True)
class Palette:
    """Text styles for each themed element."""

    header: Style = plain
    border: Style = plain
    track_playing: Style = plain
    track_paused: Style = plain
    artist: Style = plain
    progress_bar: Style = plain
    status: Style = plain
    error: Style = plain

    @classmethod
    def from_config(cls, term: Terminal, colors: ColorsConfig) -> "Palette":
        return cls(
            header=make_style(term, colors.header, bold=True),
            border=make_style(term, colors.header),
            track_playing=make_style(term, colors.track_playing, bold=True),
            track_paused=make_style(term, colors.track_paused),
            artist=make_style(term, colors.artist),
            progress_bar=make_style(term, colors.progress_bar),
            status=make_style(term, colors.status),
            error=make_style(term, colors.error, bold=True),
        )
