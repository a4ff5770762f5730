"""Topmost-first hit testing.

Notes are kept oldest-first, which is also the paint order, so the note
drawn on top is the last one in the sequence. Selection, dragging and
deletion must all resolve overlaps through ``find_topmost_at``.
"""

from typing import Optional, Sequence

from placenotes.model import Note


def find_topmost_at(notes: Sequence[Note], x: int, y: int) -> Optional[Note]:
    """Find the most recently created note containing world point (x, y)."""
    # Check in reverse order (top-most first)
    for note in reversed(notes):
        if note.contains_point(x, y):
            return note
    return None
