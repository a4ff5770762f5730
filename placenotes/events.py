"""Events consumed by the interaction reducer.

Pointer coordinates are integer screen pixels as delivered by the host;
the reducer converts them to world space itself.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class PointerDown:
    x: int
    y: int


@dataclass(frozen=True)
class PointerMove:
    x: int
    y: int


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class ToggleMode:
    pass


@dataclass(frozen=True)
class PreparePlacement:
    """Stage ``text`` to be placed by the next pointer-down."""
    text: str


@dataclass(frozen=True)
class EditText:
    """The note-text input changed."""
    text: str


@dataclass(frozen=True)
class CopySelectedText:
    pass


@dataclass(frozen=True)
class ImportJson:
    """The document textarea changed."""
    text: str


Event = Union[
    PointerDown,
    PointerMove,
    PointerUp,
    ToggleMode,
    PreparePlacement,
    EditText,
    CopySelectedText,
    ImportJson,
]

TOUCH_KINDS = ("start", "move", "end", "cancel")


def touch_event(kind: str, points: Sequence[Tuple[float, float]]) -> Optional[Event]:
    """Map a touch event onto the pointer events it stands for.

    ``points`` are the active touches, primary first. Start and move need at
    least one point; end and cancel always release. Returns None when there
    is nothing to dispatch.
    """
    if kind not in TOUCH_KINDS:
        raise ValueError(f"Unknown touch event kind: {kind!r}")
    if kind in ("end", "cancel"):
        return PointerUp()
    if not points:
        return None
    x, y = points[0]
    if kind == "start":
        return PointerDown(int(x), int(y))
    return PointerMove(int(x), int(y))
