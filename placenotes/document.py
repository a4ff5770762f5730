"""Canonical JSON document for a workspace.

The document is what the live textarea shows and what gets saved to disk::

    {
      "placeNotes": [{"id", "x", "y", "width", "height", "text"}, ...],
      "nextPlaceNoteId": int,
      "cameraX": int,
      "cameraY": int,
      "mode": "MoveMode" | "DeletionMode",
      "inputText": str,
      "selectedPlaceNoteId": int | null
    }

Decoding is all-or-nothing: any missing or mistyped field raises
``DocumentError`` and nothing is applied. Drag state and pending placement
are never written and always come back empty.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from placenotes.metrics import MIN_HEIGHT, MIN_WIDTH
from placenotes.model import Camera, Mode, Note, Workspace

log = logging.getLogger(__name__)

NOTE_FIELDS = ("id", "x", "y", "width", "height", "text")


class DocumentError(ValueError):
    """The text is not a valid workspace document."""


def to_dict(workspace: Workspace) -> Dict[str, Any]:
    """Return the persistent fields of a workspace as plain JSON data."""
    return {
        "placeNotes": [
            {
                "id": note.id,
                "x": note.x,
                "y": note.y,
                "width": note.width,
                "height": note.height,
                "text": note.text,
            }
            for note in workspace.notes
        ],
        "nextPlaceNoteId": workspace.next_id,
        "cameraX": workspace.camera.x,
        "cameraY": workspace.camera.y,
        "mode": workspace.mode.value,
        "inputText": workspace.input_text,
        "selectedPlaceNoteId": workspace.selected_id,
    }


def encode(workspace: Workspace) -> str:
    """Serialize a workspace. Equal workspaces give identical text."""
    return json.dumps(to_dict(workspace), indent=2, ensure_ascii=False)


def _require(data: Dict[str, Any], key: str, where: str = "document") -> Any:
    if key not in data:
        raise DocumentError(f"{where}: missing field '{key}'")
    return data[key]


def _int(data: Dict[str, Any], key: str, where: str = "document") -> int:
    value = _require(data, key, where)
    # bool is an int subclass; true/false are not coordinates
    if isinstance(value, bool) or not isinstance(value, int):
        raise DocumentError(f"{where}: field '{key}' must be an integer")
    return value


def _str(data: Dict[str, Any], key: str, where: str = "document") -> str:
    value = _require(data, key, where)
    if not isinstance(value, str):
        raise DocumentError(f"{where}: field '{key}' must be a string")
    # JSON escapes can smuggle in lone surrogates that cannot be saved
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise DocumentError(f"{where}: field '{key}' is not valid Unicode text") from None
    return value


def _note_from_dict(data: Any, index: int) -> Note:
    where = f"placeNotes[{index}]"
    if not isinstance(data, dict):
        raise DocumentError(f"{where}: expected an object")
    return Note(
        id=_int(data, "id", where),
        x=_int(data, "x", where),
        y=_int(data, "y", where),
        width=max(MIN_WIDTH, _int(data, "width", where)),
        height=max(MIN_HEIGHT, _int(data, "height", where)),
        text=_str(data, "text", where),
    )


def from_dict(data: Any) -> Workspace:
    """Build a workspace from parsed JSON data, validating every field."""
    if not isinstance(data, dict):
        raise DocumentError("document: expected a JSON object")

    raw_notes = _require(data, "placeNotes")
    if not isinstance(raw_notes, list):
        raise DocumentError("document: field 'placeNotes' must be a list")
    notes = tuple(_note_from_dict(item, i) for i, item in enumerate(raw_notes))
    seen = set()
    for i, note in enumerate(notes):
        if note.id in seen:
            raise DocumentError(f"placeNotes[{i}]: duplicate id {note.id}")
        seen.add(note.id)

    next_id = _int(data, "nextPlaceNoteId")
    camera = Camera(_int(data, "cameraX"), _int(data, "cameraY"))

    mode_name = _str(data, "mode")
    try:
        mode = Mode(mode_name)
    except ValueError:
        raise DocumentError(f"document: unknown mode '{mode_name}'") from None

    input_text = _str(data, "inputText")

    selected_id = data.get("selectedPlaceNoteId")
    if selected_id is not None and (isinstance(selected_id, bool) or not isinstance(selected_id, int)):
        raise DocumentError("document: field 'selectedPlaceNoteId' must be an integer or null")

    # Ids are never reused, even when the counter was edited by hand
    if notes:
        next_id = max(next_id, max(note.id for note in notes) + 1)

    return Workspace(
        notes=notes,
        next_id=next_id,
        camera=camera,
        mode=mode,
        input_text=input_text,
        selected_id=selected_id,
    )


def decode(text: str) -> Workspace:
    """Parse document text into a workspace or raise ``DocumentError``."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
    except RecursionError as exc:
        raise DocumentError("invalid JSON: nested too deeply") from exc
    return from_dict(data)


def try_decode(text: str) -> Optional[Workspace]:
    """Like ``decode`` but returns None for an invalid document."""
    try:
        return decode(text)
    except DocumentError as exc:
        log.debug("Ignoring invalid document: %s", exc)
        return None


def read_document(path: Union[str, Path]) -> Workspace:
    """Load a workspace from a document file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentError(f"not UTF-8 text: {exc.reason}") from exc
    return decode(text)


def write_document(path: Union[str, Path], workspace: Workspace) -> None:
    """Write a workspace to a document file in canonical form."""
    Path(path).write_text(encode(workspace) + "\n", encoding="utf-8")
