"""Text-driven note sizing.

A note's box is derived from its text alone: one ``LINE_HEIGHT`` per line
and one ``CHAR_WIDTH`` per character of the longest line, plus ``PADDING``
on each axis. The result never drops below ``MIN_WIDTH`` x ``MIN_HEIGHT``,
so even an empty note stays visible and clickable.
"""

from typing import List, Tuple

CHAR_WIDTH = 8
LINE_HEIGHT = 18
PADDING = 16
MIN_WIDTH = 80
MIN_HEIGHT = 40


def split_lines(text: str) -> List[str]:
    """Split text into display lines. Empty text is a single empty line."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def measure(text: str) -> Tuple[int, int]:
    """Return the (width, height) a note showing ``text`` occupies."""
    lines = split_lines(text)
    longest = max(len(line) for line in lines)
    width = max(MIN_WIDTH, CHAR_WIDTH * longest + PADDING)
    height = max(MIN_HEIGHT, LINE_HEIGHT * len(lines) + PADDING)
    return width, height
