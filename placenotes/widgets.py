"""Custom widgets for the PlaceNotes application."""

from typing import Optional

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Gtk, Gdk

from placenotes.session import Session


class DocumentPanel(Gtk.Box):
    """Right sidebar showing the workspace document as editable JSON.

    Edits are imported on every keystroke; a document that does not parse
    leaves the workspace alone and the text stays as typed.
    """

    def __init__(self, session: Session):
        super().__init__(orientation=Gtk.Orientation.VERTICAL)
        self.session = session

        self.set_size_request(380, -1)

        # Header
        header = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        header.set_margin_start(16)
        header.set_margin_end(16)
        header.set_margin_top(12)
        header.set_margin_bottom(12)

        title = Gtk.Label(label="DOCUMENT")
        title.set_hexpand(True)
        title.set_halign(Gtk.Align.START)
        title.add_css_class("heading")
        header.append(title)

        self.append(header)
        self.append(Gtk.Separator(orientation=Gtk.Orientation.HORIZONTAL))

        # Text editor
        scrolled = Gtk.ScrolledWindow()
        scrolled.set_vexpand(True)
        scrolled.set_policy(Gtk.PolicyType.AUTOMATIC, Gtk.PolicyType.AUTOMATIC)

        self.text_view = Gtk.TextView()
        self.text_view.set_wrap_mode(Gtk.WrapMode.NONE)
        self.text_view.set_left_margin(16)
        self.text_view.set_right_margin(16)
        self.text_view.set_top_margin(16)
        self.text_view.set_bottom_margin(16)
        self.text_view.set_monospace(True)

        self.text_buffer = self.text_view.get_buffer()
        self.text_buffer.set_text(session.text)
        self._shown_revision = session.text_revision
        self.text_buffer.connect("changed", self._on_text_changed)

        scrolled.set_child(self.text_view)
        self.append(scrolled)

        # Validity indicator
        self.status_label = Gtk.Label(label="")
        self.status_label.set_halign(Gtk.Align.END)
        self.status_label.set_margin_start(16)
        self.status_label.set_margin_end(16)
        self.status_label.set_margin_top(8)
        self.status_label.set_margin_bottom(8)
        self.status_label.add_css_class("dim-label")
        self.append(self.status_label)

        session.subscribe(self._on_session_changed)

    def _buffer_text(self) -> str:
        start = self.text_buffer.get_start_iter()
        end = self.text_buffer.get_end_iter()
        return self.text_buffer.get_text(start, end, True)

    def _on_text_changed(self, buffer):
        """Import the document as typed."""
        self.session.import_text(self._buffer_text())

    def _on_session_changed(self, session: Session):
        # Drag moves leave the text alone
        if session.text_revision == self._shown_revision:
            return
        self._shown_revision = session.text_revision

        if session.text != self._buffer_text():
            # Block handler while setting text
            self.text_buffer.handler_block_by_func(self._on_text_changed)
            self.text_buffer.set_text(session.text)
            self.text_buffer.handler_unblock_by_func(self._on_text_changed)

        if session.is_text_valid:
            self.status_label.set_label("")
            self.status_label.set_tooltip_text(None)
        else:
            self.status_label.set_label("Invalid document")
            self.status_label.set_tooltip_text(session.last_error)


class ShortcutsDialog(Gtk.Window):
    """Keyboard shortcuts reference."""

    SHORTCUTS = {
        "Canvas": [
            ("Toggle Move / Delete mode", "Ctrl+D"),
            ("Place note from text field", "Ctrl+Return"),
            ("Copy selected note's text", "Ctrl+Shift+C"),
        ],
        "Workspace": [
            ("Open document", "Ctrl+O"),
            ("Save document as", "Ctrl+Shift+S"),
            ("Export PNG", "Ctrl+E"),
            ("Toggle document panel", "Ctrl+J"),
        ],
        "General": [
            ("Keyboard shortcuts", "Ctrl+/"),
            ("Quit", "Ctrl+Q"),
        ],
    }

    def __init__(self, parent: Optional[Gtk.Window]):
        super().__init__()

        self.set_transient_for(parent)
        self.set_modal(True)
        self.set_default_size(420, 420)
        self.set_title("Keyboard Shortcuts")

        scrolled = Gtk.ScrolledWindow()
        scrolled.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)

        box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=24)
        box.set_margin_start(24)
        box.set_margin_end(24)
        box.set_margin_top(24)
        box.set_margin_bottom(24)

        for section, shortcuts in self.SHORTCUTS.items():
            section_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=8)

            title = Gtk.Label(label=section.upper())
            title.set_halign(Gtk.Align.START)
            title.add_css_class("heading")
            section_box.append(title)

            for action, keys in shortcuts:
                row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=12)

                action_label = Gtk.Label(label=action)
                action_label.set_halign(Gtk.Align.START)
                action_label.set_hexpand(True)
                row.append(action_label)

                keys_label = Gtk.Label(label=keys)
                keys_label.set_halign(Gtk.Align.END)
                keys_label.add_css_class("dim-label")
                row.append(keys_label)

                section_box.append(row)

            box.append(section_box)

        scrolled.set_child(box)
        self.set_child(scrolled)

        # Close on Escape
        key_ctrl = Gtk.EventControllerKey()
        key_ctrl.connect("key-pressed", self._on_key_pressed)
        self.add_controller(key_ctrl)

    def _on_key_pressed(self, controller, keyval, keycode, state):
        if keyval == Gdk.KEY_Escape:
            self.close()
            return True
        return False
