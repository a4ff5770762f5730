"""Canvas widget that renders a workspace and feeds it pointer events."""

import logging
from typing import Optional

import gi

gi.require_version("Gtk", "4.0")
from gi.repository import Gtk

from placenotes import render
from placenotes.config import Settings
from placenotes.events import PointerDown, PointerMove, PointerUp
from placenotes.model import Mode
from placenotes.session import Session

log = logging.getLogger(__name__)


class NotesCanvas(Gtk.DrawingArea):
    """Custom canvas widget for the note workspace.

    The widget owns no model state of its own: every press, motion and
    release becomes an event dispatched to the session, and drawing reads
    the session's current snapshot.
    """

    def __init__(self, session: Session, settings: Optional[Settings] = None):
        super().__init__()

        self.session = session
        self.settings = settings or Settings()

        # Screen position where the current gesture started
        self._drag_start_x = 0.0
        self._drag_start_y = 0.0

        # Setup widget
        self.set_draw_func(self._on_draw)
        self.set_focusable(True)
        self.set_hexpand(True)
        self.set_vexpand(True)

        self._setup_event_controllers()

        self._unsubscribe = session.subscribe(self._on_session_changed)
        self._update_cursor()

    def _setup_event_controllers(self):
        """Setup pointer and touch controllers."""
        # GestureDrag handles both the left mouse button and touch
        drag_ctrl = Gtk.GestureDrag()
        drag_ctrl.set_button(1)
        drag_ctrl.connect("drag-begin", self._on_drag_begin)
        drag_ctrl.connect("drag-update", self._on_drag_update)
        drag_ctrl.connect("drag-end", self._on_drag_end)
        drag_ctrl.connect("cancel", self._on_drag_cancel)
        self.add_controller(drag_ctrl)

    def detach(self):
        """Stop listening to the session."""
        self._unsubscribe()

    def _on_session_changed(self, session: Session):
        self._update_cursor()
        self.queue_draw()

    def _update_cursor(self):
        workspace = self.session.workspace
        if workspace.pending_placement is not None:
            self.set_cursor_from_name("crosshair")
        elif workspace.mode is Mode.DELETION:
            self.set_cursor_from_name("not-allowed")
        elif workspace.drag is not None:
            self.set_cursor_from_name("grabbing")
        else:
            self.set_cursor_from_name("default")

    def _on_draw(self, area, cr, width, height):
        """Main drawing function."""
        render.draw_workspace(
            cr,
            self.session.workspace,
            width,
            height,
            show_grid=self.settings.show_grid,
            grid_size=self.settings.grid_size,
        )

    def _on_drag_begin(self, gesture, start_x, start_y):
        """Pointer or touch went down."""
        # Keep the sequence away from scrolling and drag-and-drop handlers
        gesture.set_state(Gtk.EventSequenceState.CLAIMED)
        self.grab_focus()

        self._drag_start_x = start_x
        self._drag_start_y = start_y
        self.session.dispatch(PointerDown(round(start_x), round(start_y)))

    def _on_drag_update(self, gesture, offset_x, offset_y):
        """Pointer or primary touch moved while down."""
        x = round(self._drag_start_x + offset_x)
        y = round(self._drag_start_y + offset_y)
        self.session.dispatch(PointerMove(x, y))

    def _on_drag_end(self, gesture, offset_x, offset_y):
        """Pointer released or touch lifted, wherever it ended."""
        self.session.dispatch(PointerUp())

    def _on_drag_cancel(self, gesture, sequence):
        log.debug("Drag gesture cancelled")
        self.session.dispatch(PointerUp())
