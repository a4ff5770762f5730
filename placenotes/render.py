"""Cairo drawing for PlaceNotes workspaces.

Used both by the on-screen canvas and by PNG export. Notes are painted in
insertion order so the newest note ends up on top, matching hit-testing.
"""

import math
from pathlib import Path
from typing import Union

import cairo

from placenotes.metrics import LINE_HEIGHT, PADDING, split_lines
from placenotes.model import DraggingNote, Mode, Note, Workspace

COLORS = {
    'bg_primary': (0.961, 0.953, 0.925),      # #f5f3ec
    'grid_dots': (0.82, 0.80, 0.76),
    'note_fill': (1.0, 0.925, 0.6),           # #ffec99
    'note_border': (0.78, 0.67, 0.25),
    'note_selected': (0.204, 0.396, 0.886),   # #3465e2
    'deletion_tint': (0.878, 0.227, 0.227),   # #e03a3a
    'text_primary': (0.13, 0.13, 0.13),
}

FONT_FACE = "Monospace"
FONT_SIZE = 13
NOTE_RADIUS = 4


def draw_rounded_rect(cr, x: float, y: float, w: float, h: float, radius: float):
    """Draw a rounded rectangle path."""
    cr.new_path()
    cr.arc(x + w - radius, y + radius, radius, -math.pi / 2, 0)
    cr.arc(x + w - radius, y + h - radius, radius, 0, math.pi / 2)
    cr.arc(x + radius, y + h - radius, radius, math.pi / 2, math.pi)
    cr.arc(x + radius, y + radius, radius, math.pi, 3 * math.pi / 2)
    cr.close_path()


def draw_grid(cr, width: float, height: float, camera_x: int, camera_y: int, grid_size: int):
    """Draw dot grid pattern that scrolls with the camera."""
    if grid_size <= 0:
        return
    cr.save()
    cr.set_source_rgb(*COLORS['grid_dots'])

    x = camera_x % grid_size
    while x < width:
        y = camera_y % grid_size
        while y < height:
            cr.arc(x, y, 1.2, 0, 2 * math.pi)
            cr.fill()
            y += grid_size
        x += grid_size

    cr.restore()


def draw_note(cr, note: Note, x: float, y: float, selected: bool = False,
              deletion_mode: bool = False):
    """Draw a single note with its top-left corner at (x, y)."""
    w, h = note.width, note.height

    cr.save()
    draw_rounded_rect(cr, x, y, w, h, NOTE_RADIUS)
    cr.set_source_rgb(*COLORS['note_fill'])
    cr.fill_preserve()

    if deletion_mode:
        border = COLORS['deletion_tint']
    elif selected:
        border = COLORS['note_selected']
    else:
        border = COLORS['note_border']
    cr.set_source_rgb(*border)
    cr.set_line_width(2 if selected else 1)
    cr.stroke()

    cr.set_source_rgb(*COLORS['text_primary'])
    cr.select_font_face(FONT_FACE, cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_NORMAL)
    cr.set_font_size(FONT_SIZE)

    baseline = y + PADDING / 2 + FONT_SIZE
    for line in split_lines(note.text):
        cr.move_to(x + PADDING / 2, baseline)
        cr.show_text(line)
        baseline += LINE_HEIGHT

    cr.restore()


def draw_workspace(cr, workspace: Workspace, width: float, height: float,
                   show_grid: bool = True, grid_size: int = 30):
    """Paint the visible part of a workspace in screen space."""
    cr.save()
    cr.set_source_rgb(*COLORS['bg_primary'])
    cr.paint()

    if show_grid:
        draw_grid(cr, width, height, workspace.camera.x, workspace.camera.y, grid_size)

    drag = workspace.drag
    deletion_mode = workspace.mode is Mode.DELETION

    cr.translate(workspace.camera.x, workspace.camera.y)
    for note in workspace.notes:
        x, y = note.x, note.y
        if isinstance(drag, DraggingNote) and drag.note_id == note.id:
            # Preview where the note will land on release
            x = drag.live_x - drag.offset_x
            y = drag.live_y - drag.offset_y
        draw_note(cr, note, x, y,
                  selected=note.id == workspace.selected_id,
                  deletion_mode=deletion_mode)
    cr.restore()


def export_png(workspace: Workspace, filepath: Union[str, Path],
               scale: float = 2.0, padding: int = 40) -> bool:
    """Render every note to a PNG sized to fit them.

    Returns False if there is nothing to export.
    """
    notes = workspace.notes
    if not notes:
        return False

    min_x = min(n.x for n in notes)
    max_x = max(n.x + n.width for n in notes)
    min_y = min(n.y for n in notes)
    max_y = max(n.y + n.height for n in notes)

    width = int((max_x - min_x + padding * 2) * scale)
    height = int((max_y - min_y + padding * 2) * scale)

    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    cr = cairo.Context(surface)
    cr.scale(scale, scale)

    cr.set_source_rgb(*COLORS['bg_primary'])
    cr.paint()

    cr.translate(-min_x + padding, -min_y + padding)
    for note in notes:
        draw_note(cr, note, note.x, note.y)

    surface.write_to_png(str(filepath))
    return True
