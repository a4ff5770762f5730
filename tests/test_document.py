import copy
import json
from dataclasses import replace

import pytest

from placenotes.document import (
    DocumentError,
    decode,
    encode,
    from_dict,
    read_document,
    to_dict,
    try_decode,
    write_document,
)
from placenotes.metrics import MIN_HEIGHT, MIN_WIDTH
from placenotes.model import DraggingCamera, DraggingNote, Workspace

REQUIRED_KEYS = ["placeNotes", "nextPlaceNoteId", "cameraX", "cameraY", "mode", "inputText"]


def test_round_trip(sample_workspace) -> None:
    assert decode(encode(sample_workspace)) == sample_workspace


def test_round_trip_of_empty_workspace() -> None:
    assert decode(encode(Workspace())) == Workspace()


def test_transient_fields_are_dropped(sample_workspace) -> None:
    busy = replace(sample_workspace, drag=DraggingNote(2, 1, 1, 5, 5), pending_placement="later")
    text = encode(busy)

    assert "later" not in text
    assert text == encode(sample_workspace)
    assert decode(text) == sample_workspace

    panning = replace(sample_workspace, drag=DraggingCamera(0, 0))
    assert decode(encode(panning)).drag is None


def test_decode_of_encode_is_idempotent(sample_workspace) -> None:
    once = decode(encode(sample_workspace))
    twice = decode(encode(once))
    assert once == twice
    assert encode(once) == encode(twice)


def test_encoding_is_deterministic(sample_workspace) -> None:
    assert encode(sample_workspace) == encode(copy.deepcopy(sample_workspace))


def test_document_layout(sample_workspace) -> None:
    data = json.loads(encode(sample_workspace))
    assert set(data) == set(REQUIRED_KEYS) | {"selectedPlaceNoteId"}
    assert data["mode"] == "DeletionMode"
    assert data["cameraX"] == -15
    assert data["selectedPlaceNoteId"] == 2
    assert data["placeNotes"][1] == {
        "id": 2, "x": -50, "y": 300, "width": 80, "height": 70, "text": "two\nlines\nhere",
    }


def test_non_ascii_text_is_kept_readable(sample_workspace) -> None:
    assert "héllo ✓" in encode(sample_workspace)


def test_selected_id_defaults_to_none(sample_workspace) -> None:
    data = to_dict(sample_workspace)
    del data["selectedPlaceNoteId"]
    assert from_dict(data).selected_id is None


@pytest.mark.parametrize("key", REQUIRED_KEYS)
def test_missing_required_field_fails(sample_workspace, key) -> None:
    data = to_dict(sample_workspace)
    del data[key]
    with pytest.raises(DocumentError):
        from_dict(data)


@pytest.mark.parametrize("key", ["id", "x", "y", "width", "height", "text"])
def test_missing_note_field_fails(sample_workspace, key) -> None:
    data = to_dict(sample_workspace)
    del data["placeNotes"][0][key]
    with pytest.raises(DocumentError):
        from_dict(data)


@pytest.mark.parametrize(
    "field, value",
    [
        ("x", "10"),
        ("y", 1.5),
        ("id", True),
        ("width", None),
        ("text", 5),
    ],
)
def test_mistyped_note_field_fails(sample_workspace, field, value) -> None:
    data = to_dict(sample_workspace)
    data["placeNotes"][0][field] = value
    with pytest.raises(DocumentError):
        from_dict(data)


@pytest.mark.parametrize(
    "key, value",
    [
        ("placeNotes", {}),
        ("nextPlaceNoteId", "4"),
        ("cameraX", 0.5),
        ("mode", "ZoomMode"),
        ("inputText", None),
        ("selectedPlaceNoteId", "2"),
        ("selectedPlaceNoteId", False),
    ],
)
def test_mistyped_top_level_field_fails(sample_workspace, key, value) -> None:
    data = to_dict(sample_workspace)
    data[key] = value
    with pytest.raises(DocumentError):
        from_dict(data)


def test_note_entries_must_be_objects(sample_workspace) -> None:
    data = to_dict(sample_workspace)
    data["placeNotes"].append([1, 2, 3])
    with pytest.raises(DocumentError, match=r"placeNotes\[3\]"):
        from_dict(data)


@pytest.mark.parametrize("text", ["{not json", "", "[]", "null", "42", '"text"', "[" * 100000])
def test_malformed_documents_fail(text) -> None:
    with pytest.raises(DocumentError):
        decode(text)
    assert try_decode(text) is None


def test_sizes_are_clamped_to_minimums(sample_workspace) -> None:
    data = to_dict(sample_workspace)
    data["placeNotes"][0]["width"] = 0
    data["placeNotes"][0]["height"] = -30
    note = from_dict(data).notes[0]
    assert (note.width, note.height) == (MIN_WIDTH, MIN_HEIGHT)


def test_next_id_is_raised_above_existing_ids(sample_workspace) -> None:
    data = to_dict(sample_workspace)
    data["nextPlaceNoteId"] = 1
    assert from_dict(data).next_id == 4


def test_file_round_trip(tmp_path, sample_workspace) -> None:
    path = tmp_path / "workspace.json"
    write_document(path, sample_workspace)
    assert read_document(path) == sample_workspace


def test_non_utf8_file_is_a_document_error(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(DocumentError):
        read_document(path)


@pytest.mark.parametrize("path", [("inputText",), ("placeNotes", 0, "text")])
def test_lone_surrogate_text_is_rejected(sample_workspace, path) -> None:
    data = to_dict(sample_workspace)
    target = data
    for key in path[:-1]:
        target = target[key]
    target[path[-1]] = "\ud800"
    # Stays as a \ud800 escape on the wire
    text = json.dumps(data)

    with pytest.raises(DocumentError, match="not valid Unicode"):
        decode(text)
    assert try_decode(text) is None


def test_duplicate_note_ids_are_rejected(sample_workspace) -> None:
    data = to_dict(sample_workspace)
    data["placeNotes"][2]["id"] = data["placeNotes"][0]["id"]
    with pytest.raises(DocumentError, match=r"placeNotes\[2\]: duplicate id 0"):
        from_dict(data)
