"""Header plus rounded-border container shared by every screen."""

from dataclasses import dataclass

from ..styles.formatting import display_width
from ..styles.theme import Palette, Style

# Rows outside the container interior: header, top border, bottom border
FRAME_ROWS = 3


@dataclass(frozen=True)
class BodyLine:
    """One line inside the container.

    segments are (plain text, style) pairs drawn left to right starting at
    offset cells from the inner left edge.
    """

    segments: tuple[tuple[str, Style], ...] = ()
    offset: int = 0

    @property
    def width(self) -> int:
        return sum(display_width(text) for text, _ in self.segments)


BLANK = BodyLine()


def clip(text: str, max_width: int) -> str:
    """Cut text at a cell boundary so it fits in max_width cells."""
    if display_width(text) <= max_width:
        return text
    result = ""
    for char in text:
        if display_width(result + char) > max_width:
            break
        result += char
    return result


def render_body_line(line: BodyLine, inner_width: int) -> str:
    """
    Render a body line padded (or clipped) to exactly inner_width cells.

    Args:
        line: Line to draw
        inner_width: Cells between the left and right border

    Returns:
        Styled text occupying inner_width cells
    """
    offset = min(line.offset, inner_width)
    parts = [" " * offset]
    used = offset
    for text, style in line.segments:
        text = clip(text, inner_width - used)
        if text:
            parts.append(style(text))
            used += display_width(text)
    parts.append(" " * (inner_width - used))
    return "".join(parts)


def render_frame(
    palette: Palette, width: int, height: int, title: str, body: list[BodyLine]
) -> list[str]:
    """
    Render a full screen: header line, then a bordered box filling the rest.

    Args:
        palette: Color styles
        width: Terminal width
        height: Terminal height
        title: Header text
        body: Lines inside the box, top to bottom

    Returns:
        One styled string per screen row
    """
    inner_width = max(0, width - 2)
    inner_height = max(len(body), height - FRAME_ROWS)
    border = palette.border

    lines = [palette.header(clip(title, width))]
    lines.append(border("╭" + "─" * inner_width + "╮"))
    for i in range(inner_height):
        line = body[i] if i < len(body) else BLANK
        lines.append(border("│") + render_body_line(line, inner_width) + border("│"))
    lines.append(border("╰" + "─" * inner_width + "╯"))
    return lines
