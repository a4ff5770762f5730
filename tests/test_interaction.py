from dataclasses import replace

from placenotes import document
from placenotes.events import (
    CopySelectedText,
    EditText,
    ImportJson,
    PointerDown,
    PointerMove,
    PointerUp,
    PreparePlacement,
    ToggleMode,
)
from placenotes.interaction import update
from placenotes.metrics import measure
from placenotes.model import (
    Camera,
    DraggingCamera,
    DraggingNote,
    Mode,
    Note,
    Workspace,
)


def _run(ws: Workspace, *events) -> Workspace:
    for event in events:
        ws = update(ws, event)
    return ws


def _big_note_at_origin() -> Workspace:
    return Workspace(notes=(Note(id=0, x=0, y=0, width=200, height=200, text="big"),), next_id=1)


def test_place_then_delete_end_to_end() -> None:
    ws = _run(Workspace(), PreparePlacement("A"), PointerDown(100, 60))

    assert len(ws.notes) == 1
    note = ws.notes[0]
    assert note.id == 0
    assert (note.width, note.height) == measure("A")
    assert ws.pending_placement is None
    assert ws.input_text == "A"
    assert ws.selected_id == 0
    assert ws.drag is None

    ws = _run(ws, ToggleMode(), PointerDown(100, 60))
    assert ws.notes == ()
    assert ws.next_id == 1
    assert document.to_dict(ws)["nextPlaceNoteId"] == 1


def test_drag_commits_only_on_release() -> None:
    ws = _run(_big_note_at_origin(), PointerDown(100, 100))
    assert ws.drag == DraggingNote(note_id=0, offset_x=100, offset_y=100, live_x=100, live_y=100)
    assert ws.selected_id == 0
    assert ws.input_text == "big"

    ws = update(ws, PointerMove(150, 130))
    assert (ws.notes[0].x, ws.notes[0].y) == (0, 0)
    assert ws.drag.live_x == 150 and ws.drag.live_y == 130

    ws = update(ws, PointerUp())
    assert (ws.notes[0].x, ws.notes[0].y) == (50, 30)
    assert ws.drag is None


def test_pointer_move_during_note_drag_keeps_note_list() -> None:
    ws = _run(_big_note_at_origin(), PointerDown(10, 10))
    moved = update(ws, PointerMove(400, 400))
    assert moved.notes is ws.notes


def test_note_drag_respects_camera_offset() -> None:
    ws = Workspace(
        notes=(Note(id=0, x=0, y=0, width=80, height=40, text="n"),),
        next_id=1,
        camera=Camera(10, 20),
    )
    ws = _run(ws, PointerDown(50, 40), PointerMove(60, 50), PointerUp())
    assert (ws.notes[0].x, ws.notes[0].y) == (10, 10)
    assert ws.camera == Camera(10, 20)


def test_pan_on_empty_space() -> None:
    ws = update(Workspace(), PointerDown(500, 500))
    assert ws.drag == DraggingCamera(500, 500)

    ws = update(ws, PointerMove(510, 495))
    assert ws.camera == Camera(10, -5)
    assert ws.drag == DraggingCamera(510, 495)

    ws = update(ws, PointerMove(520, 500))
    assert ws.camera == Camera(20, 0)

    ws = update(ws, PointerUp())
    assert ws.drag is None
    assert ws.camera == Camera(20, 0)


def test_click_uses_world_coordinates() -> None:
    ws = Workspace(
        notes=(Note(id=0, x=0, y=0, width=80, height=40, text="n"),),
        next_id=1,
        camera=Camera(10, 20),
    )
    assert isinstance(update(ws, PointerDown(15, 25)).drag, DraggingNote)
    assert isinstance(update(ws, PointerDown(5, 5)).drag, DraggingCamera)


def test_placement_lands_in_world_space() -> None:
    ws = Workspace(camera=Camera(100, 50))
    ws = _run(ws, PreparePlacement("hi"), PointerDown(100, 50))
    note = ws.notes[0]
    assert note.contains_point(0, 0)
    assert note.x == -(note.width // 2)


def test_pending_placement_beats_drag_and_delete() -> None:
    ws = _run(_big_note_at_origin(), PreparePlacement("new"), PointerDown(100, 100))
    assert [n.id for n in ws.notes] == [0, 1]
    assert ws.drag is None
    assert ws.selected_id == 1

    ws = _run(ws, ToggleMode(), PreparePlacement("another"), PointerDown(100, 100))
    assert [n.id for n in ws.notes] == [0, 1, 2]
    assert ws.mode is Mode.DELETION


def test_placement_is_cleared_after_one_use() -> None:
    ws = _run(Workspace(), PreparePlacement("once"), PointerDown(0, 0), PointerUp(),
              PointerDown(500, 500))
    assert len(ws.notes) == 1
    assert isinstance(ws.drag, DraggingCamera)


def test_delete_removes_topmost_only() -> None:
    ws = Workspace(
        notes=(
            Note(id=0, x=0, y=0, width=100, height=100, text="A"),
            Note(id=1, x=50, y=50, width=100, height=100, text="B"),
        ),
        next_id=2,
        mode=Mode.DELETION,
    )
    ws = update(ws, PointerDown(75, 75))
    assert [n.id for n in ws.notes] == [0]


def test_delete_miss_is_no_op() -> None:
    ws = replace(_big_note_at_origin(), mode=Mode.DELETION)
    assert update(ws, PointerDown(1000, 1000)) == ws


def test_deletion_mode_never_drags() -> None:
    ws = replace(_big_note_at_origin(), mode=Mode.DELETION)
    ws = update(ws, PointerDown(1000, 1000))
    assert ws.drag is None


def test_drag_selects_topmost_note() -> None:
    ws = Workspace(
        notes=(
            Note(id=0, x=0, y=0, width=100, height=100, text="A"),
            Note(id=1, x=50, y=50, width=100, height=100, text="B"),
        ),
        next_id=2,
    )
    ws = update(ws, PointerDown(75, 75))
    assert ws.selected_id == 1
    assert ws.drag.note_id == 1


def test_toggle_mode_clears_active_drag() -> None:
    ws = _run(_big_note_at_origin(), PointerDown(100, 100), PointerMove(300, 300), ToggleMode())
    assert ws.drag is None
    assert ws.mode is Mode.DELETION

    ws = update(ws, PointerUp())
    assert (ws.notes[0].x, ws.notes[0].y) == (0, 0)


def test_pointer_up_and_move_when_idle_are_no_ops() -> None:
    ws = _big_note_at_origin()
    assert update(ws, PointerUp()) is ws
    assert update(ws, PointerMove(20, 20)) is ws


def test_release_after_note_vanished() -> None:
    ws = replace(_big_note_at_origin(), drag=DraggingNote(7, 0, 0, 50, 50))
    ws = update(ws, PointerUp())
    assert ws.drag is None
    assert (ws.notes[0].x, ws.notes[0].y) == (0, 0)


def test_edit_text_updates_selected_note_and_input() -> None:
    ws = _run(Workspace(), PreparePlacement(""), PointerDown(0, 0))
    text = "now this note\nhas two lines"
    ws = update(ws, EditText(text))

    assert ws.input_text == text
    assert ws.notes[0].text == text
    assert (ws.notes[0].width, ws.notes[0].height) == measure(text)


def test_edit_text_without_selection_only_updates_input() -> None:
    ws = _big_note_at_origin()
    ws = update(ws, EditText("typing ahead"))
    assert ws.input_text == "typing ahead"
    assert ws.notes[0].text == "big"


def test_edit_text_with_stale_selection() -> None:
    ws = replace(_big_note_at_origin(), selected_id=9)
    ws = update(ws, EditText("x"))
    assert ws.input_text == "x"
    assert ws.notes[0].text == "big"


def test_copy_selected_text() -> None:
    ws = replace(_big_note_at_origin(), selected_id=0, input_text="other")
    assert update(ws, CopySelectedText()).input_text == "big"


def test_copy_without_live_selection_keeps_input() -> None:
    ws = replace(_big_note_at_origin(), input_text="keep")
    assert update(ws, CopySelectedText()).input_text == "keep"

    stale = replace(ws, selected_id=5)
    assert update(stale, CopySelectedText()).input_text == "keep"


def test_import_json_replaces_workspace(sample_workspace) -> None:
    ws = _run(Workspace(), PointerDown(0, 0))
    imported = update(ws, ImportJson(document.encode(sample_workspace)))
    assert imported == sample_workspace
    assert imported.drag is None


def test_malformed_import_keeps_workspace() -> None:
    ws = _run(_big_note_at_origin(), ToggleMode())
    ws = replace(ws, camera=Camera(3, 4))
    result = update(ws, ImportJson("{not json"))
    assert result.notes == ws.notes
    assert result.camera == ws.camera
    assert result.mode == ws.mode
