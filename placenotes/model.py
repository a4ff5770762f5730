"""Workspace model for PlaceNotes.

Everything here is immutable: operations take a ``Workspace`` and return a
new one. Lookups by note id never raise; an unknown id leaves the workspace
as it was.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple, Union

from placenotes.metrics import measure


class Mode(Enum):
    """What a pointer-down on a note does."""
    MOVE = "MoveMode"
    DELETION = "DeletionMode"

    def toggled(self) -> "Mode":
        return Mode.DELETION if self is Mode.MOVE else Mode.MOVE


@dataclass(frozen=True)
class Note:
    """A text note placed in world space."""
    id: int
    x: int
    y: int
    width: int
    height: int
    text: str = ""

    def contains_point(self, px: int, py: int) -> bool:
        """Check if a point is inside this note (edges included)."""
        return (self.x <= px <= self.x + self.width and
                self.y <= py <= self.y + self.height)


@dataclass(frozen=True)
class Camera:
    """Pan offset: screen = world + camera."""
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class DraggingNote:
    """A note follows the pointer; its stored position changes on release."""
    note_id: int
    offset_x: int
    offset_y: int
    live_x: int
    live_y: int


@dataclass(frozen=True)
class DraggingCamera:
    """The camera follows the pointer. The anchor is in screen space."""
    anchor_x: int
    anchor_y: int


DragState = Union[DraggingNote, DraggingCamera]


@dataclass(frozen=True)
class Workspace:
    """One snapshot of the whole canvas.

    ``drag`` and ``pending_placement`` are transient and never serialized.
    """
    notes: Tuple[Note, ...] = ()
    next_id: int = 0
    camera: Camera = field(default_factory=Camera)
    mode: Mode = Mode.MOVE
    input_text: str = ""
    selected_id: Optional[int] = None
    drag: Optional[DragState] = None
    pending_placement: Optional[str] = None

    def get_note(self, note_id: Optional[int]) -> Optional[Note]:
        """Return the note with ``note_id``, or None."""
        if note_id is None:
            return None
        for note in self.notes:
            if note.id == note_id:
                return note
        return None

    @property
    def selected_note(self) -> Optional[Note]:
        return self.get_note(self.selected_id)

    def to_screen(self, x: int, y: int) -> Tuple[int, int]:
        """Translate a world point to screen space."""
        return x + self.camera.x, y + self.camera.y

    def to_world(self, x: int, y: int) -> Tuple[int, int]:
        """Translate a screen point to world space."""
        return x - self.camera.x, y - self.camera.y


def create_note(workspace: Workspace, text: str, x: int, y: int) -> Tuple[Workspace, int]:
    """Place a new note centred on world point (x, y) and select it."""
    note_id = workspace.next_id
    width, height = measure(text)
    note = Note(
        id=note_id,
        x=x - width // 2,
        y=y - height // 2,
        width=width,
        height=height,
        text=text,
    )
    return replace(
        workspace,
        notes=workspace.notes + (note,),
        next_id=note_id + 1,
        selected_id=note_id,
    ), note_id


def _map_note(workspace: Workspace, note_id: int, fn) -> Workspace:
    if workspace.get_note(note_id) is None:
        return workspace
    notes = tuple(fn(n) if n.id == note_id else n for n in workspace.notes)
    return replace(workspace, notes=notes)


def set_note_text(workspace: Workspace, note_id: int, text: str) -> Workspace:
    """Replace a note's text and resize it to fit."""
    def _retext(note: Note) -> Note:
        width, height = measure(text)
        return replace(note, text=text, width=width, height=height)
    return _map_note(workspace, note_id, _retext)


def move_note(workspace: Workspace, note_id: int, x: int, y: int) -> Workspace:
    """Set a note's world origin."""
    return _map_note(workspace, note_id, lambda n: replace(n, x=x, y=y))


def delete_note(workspace: Workspace, note_id: int) -> Workspace:
    """Remove a note. Its id is never handed out again."""
    if workspace.get_note(note_id) is None:
        return workspace
    return replace(workspace, notes=tuple(n for n in workspace.notes if n.id != note_id))


def pan_camera(workspace: Workspace, dx: int, dy: int) -> Workspace:
    camera = workspace.camera
    return replace(workspace, camera=Camera(camera.x + dx, camera.y + dy))
