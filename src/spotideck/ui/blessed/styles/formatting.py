"""Formatting helper functions."""

from wcwidth import wcswidth


def format_time(ms: int) -> str:
    """
    Format milliseconds as M:SS.

    Args:
        ms: Time in milliseconds

    Returns:
        Formatted time string, minutes unpadded ("3:05", "12:00")
    """
    total_seconds = max(0, ms) // 1000
    minutes = total_seconds // 60
    secs = total_seconds % 60
    return f"{minutes}:{secs:02d}"


def display_width(text: str) -> int:
    """
    Number of terminal cells text occupies.

    Wide glyphs (🔍, CJK) count as two cells. Falls back to the character
    count when the text contains non-printable characters.
    """
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def truncate(text: str, max_width: int) -> str:
    """Cut text to at most max_width cells, ending in "…" when shortened."""
    if max_width <= 0:
        return ""
    if display_width(text) <= max_width:
        return text

    result = ""
    for char in text:
        if display_width(result + char) > max_width - 1:
            break
        result += char
    return result + "…"


def center_offset(outer_width: int, inner_width: int) -> int:
    """Left offset that centers inner_width cells within outer_width."""
    return max(0, (outer_width - inner_width) // 2)
