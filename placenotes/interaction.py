"""Pointer and intent handling for the canvas.

``update`` is the whole state machine: it takes the current workspace and
one event and returns the next workspace. Drag state lives on the workspace
as a ``DraggingNote``, a ``DraggingCamera`` or None.

A note drag only updates ``live_x``/``live_y`` while the pointer moves; the
note list is rewritten once, on release.
"""

import logging
from dataclasses import replace

from placenotes import document
from placenotes.events import (
    CopySelectedText,
    EditText,
    Event,
    ImportJson,
    PointerDown,
    PointerMove,
    PointerUp,
    PreparePlacement,
    ToggleMode,
)
from placenotes.hittest import find_topmost_at
from placenotes.model import (
    DraggingCamera,
    DraggingNote,
    Mode,
    Workspace,
    create_note,
    delete_note,
    move_note,
    pan_camera,
    set_note_text,
)

log = logging.getLogger(__name__)


def _pointer_down(ws: Workspace, event: PointerDown) -> Workspace:
    wx, wy = ws.to_world(event.x, event.y)

    if ws.pending_placement is not None:
        text = ws.pending_placement
        ws, _ = create_note(ws, text, wx, wy)
        return replace(ws, pending_placement=None, input_text=text, drag=None)

    hit = find_topmost_at(ws.notes, wx, wy)

    if ws.mode is Mode.DELETION:
        if hit is None:
            return ws
        return delete_note(ws, hit.id)

    if hit is None:
        return replace(ws, drag=DraggingCamera(event.x, event.y))

    drag = DraggingNote(
        note_id=hit.id,
        offset_x=wx - hit.x,
        offset_y=wy - hit.y,
        live_x=wx,
        live_y=wy,
    )
    return replace(ws, drag=drag, selected_id=hit.id, input_text=hit.text)


def _pointer_move(ws: Workspace, event: PointerMove) -> Workspace:
    drag = ws.drag
    if isinstance(drag, DraggingNote):
        wx, wy = ws.to_world(event.x, event.y)
        return replace(ws, drag=replace(drag, live_x=wx, live_y=wy))
    if isinstance(drag, DraggingCamera):
        ws = pan_camera(ws, event.x - drag.anchor_x, event.y - drag.anchor_y)
        return replace(ws, drag=DraggingCamera(event.x, event.y))
    return ws


def _pointer_up(ws: Workspace) -> Workspace:
    drag = ws.drag
    if isinstance(drag, DraggingNote):
        if ws.get_note(drag.note_id) is None:
            log.debug("Dropped drag of missing note %d", drag.note_id)
        ws = move_note(ws, drag.note_id,
                       drag.live_x - drag.offset_x,
                       drag.live_y - drag.offset_y)
    if drag is None:
        return ws
    return replace(ws, drag=None)


def _edit_text(ws: Workspace, text: str) -> Workspace:
    if ws.selected_id is not None:
        ws = set_note_text(ws, ws.selected_id, text)
    return replace(ws, input_text=text)


def _copy_selected_text(ws: Workspace) -> Workspace:
    note = ws.selected_note
    if note is None:
        return ws
    return replace(ws, input_text=note.text)


def _import_json(ws: Workspace, text: str) -> Workspace:
    imported = document.try_decode(text)
    if imported is None:
        return ws
    return imported


def update(ws: Workspace, event: Event) -> Workspace:
    """Apply one event to a workspace snapshot and return the next one."""
    if isinstance(event, PointerDown):
        return _pointer_down(ws, event)
    if isinstance(event, PointerMove):
        return _pointer_move(ws, event)
    if isinstance(event, PointerUp):
        return _pointer_up(ws)
    if isinstance(event, ToggleMode):
        # Mode switches end any drag
        return replace(ws, mode=ws.mode.toggled(), drag=None)
    if isinstance(event, PreparePlacement):
        return replace(ws, pending_placement=event.text)
    if isinstance(event, EditText):
        return _edit_text(ws, event.text)
    if isinstance(event, CopySelectedText):
        return _copy_selected_text(ws)
    if isinstance(event, ImportJson):
        return _import_json(ws, event.text)
    raise TypeError(f"Unsupported event: {event!r}")
