"""Main PlaceNotes application."""

import logging
import sys
from typing import Optional

import gi
gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
gi.require_version("Gdk", "4.0")
from gi.repository import Gtk, Gio, GLib, Adw

from placenotes import __version__, __app_id__, render
from placenotes.canvas import NotesCanvas
from placenotes.config import (
    Settings,
    get_data_dir,
    get_workspace_path,
    load_settings,
    save_settings,
)
from placenotes.document import DocumentError
from placenotes.events import CopySelectedText, EditText, PreparePlacement, ToggleMode
from placenotes.model import Mode
from placenotes.session import Session
from placenotes.widgets import DocumentPanel, ShortcutsDialog

log = logging.getLogger(__name__)


def _json_filters() -> Gio.ListStore:
    filter_json = Gtk.FileFilter()
    filter_json.set_name("PlaceNotes documents")
    filter_json.add_pattern("*.json")

    filters = Gio.ListStore.new(Gtk.FileFilter)
    filters.append(filter_json)
    return filters


class PlaceNotesWindow(Adw.ApplicationWindow):
    """Main application window."""

    def __init__(self, app: Adw.Application, session: Session, settings: Settings):
        super().__init__(application=app)
        self.session = session
        self.settings = settings

        # Window setup
        self.set_title("PlaceNotes")
        self.set_default_size(settings.window_width, settings.window_height)

        # Build UI
        self._build_ui()

        # Setup keyboard shortcuts
        self._setup_shortcuts()

        session.subscribe(self._on_session_changed)
        self._on_session_changed(session)

    def _build_ui(self):
        """Build the main UI layout."""
        main_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)

        header = self._build_header()
        main_box.append(header)

        self.main_paned = Gtk.Paned(orientation=Gtk.Orientation.HORIZONTAL)
        self.main_paned.set_vexpand(True)

        # Canvas
        self.canvas = NotesCanvas(self.session, self.settings)
        canvas_frame = Gtk.Frame()
        canvas_frame.set_child(self.canvas)
        self.main_paned.set_start_child(canvas_frame)
        self.main_paned.set_shrink_start_child(False)

        # Document panel
        self.document_panel = DocumentPanel(self.session)
        self.document_revealer = Gtk.Revealer()
        self.document_revealer.set_transition_type(Gtk.RevealerTransitionType.SLIDE_LEFT)
        self.document_revealer.set_reveal_child(True)
        self.document_revealer.set_child(self.document_panel)

        self.main_paned.set_end_child(self.document_revealer)
        self.main_paned.set_shrink_end_child(False)
        self.main_paned.set_resize_end_child(False)

        # Wrap in toast overlay for in-app notifications
        self.toast_overlay = Adw.ToastOverlay()
        self.toast_overlay.set_child(self.main_paned)
        main_box.append(self.toast_overlay)

        self.set_content(main_box)

    def _build_header(self) -> Adw.HeaderBar:
        """Build the header bar."""
        header = Adw.HeaderBar()

        # Menu button
        menu_btn = Gtk.MenuButton()
        menu_btn.set_icon_name("open-menu-symbolic")
        menu_btn.set_tooltip_text("Menu")

        menu = Gio.Menu()

        file_section = Gio.Menu()
        file_section.append("Open Document...", "win.open")
        file_section.append("Save Document As...", "win.save-as")
        file_section.append("Export as PNG...", "win.export-png")
        menu.append_section(None, file_section)

        view_section = Gio.Menu()
        view_section.append("Toggle Document Panel", "win.toggle-document")
        menu.append_section(None, view_section)

        help_section = Gio.Menu()
        help_section.append("Keyboard Shortcuts", "win.show-shortcuts")
        help_section.append("About PlaceNotes", "win.show-about")
        menu.append_section(None, help_section)

        popover = Gtk.PopoverMenu()
        popover.set_menu_model(menu)
        menu_btn.set_popover(popover)
        header.pack_start(menu_btn)

        # Mode toggle
        self.mode_btn = Gtk.ToggleButton(label="Move")
        self.mode_btn.set_tooltip_text("Toggle Move / Delete mode (Ctrl+D)")
        self.mode_btn.connect("toggled", self._on_mode_toggled)
        header.pack_start(self.mode_btn)

        # Note text
        self.text_entry = Gtk.Entry()
        self.text_entry.set_placeholder_text("Note text")
        self.text_entry.set_width_chars(30)
        self.text_entry.connect("changed", self._on_entry_changed)
        self.text_entry.connect("activate", lambda e: self._prepare_placement())
        header.set_title_widget(self.text_entry)

        copy_btn = Gtk.Button()
        copy_btn.set_icon_name("edit-copy-symbolic")
        copy_btn.set_tooltip_text("Copy text from selected note (Ctrl+Shift+C)")
        copy_btn.connect("clicked", lambda b: self._copy_selected())
        header.pack_end(copy_btn)

        place_btn = Gtk.Button(label="Place")
        place_btn.add_css_class("suggested-action")
        place_btn.set_tooltip_text("Click on the canvas to place this text (Ctrl+Return)")
        place_btn.connect("clicked", lambda b: self._prepare_placement())
        header.pack_end(place_btn)

        return header

    def _setup_shortcuts(self):
        """Setup keyboard shortcuts."""
        actions = [
            ("toggle-mode", self._toggle_mode, "<Control>d"),
            ("place", self._prepare_placement, "<Control>Return"),
            ("copy-selected", self._copy_selected, "<Control><Shift>c"),
            ("open", self._open_document, "<Control>o"),
            ("save-as", self._save_document_as, "<Control><Shift>s"),
            ("export-png", self._export_png, "<Control>e"),
            ("toggle-document", self._toggle_document, "<Control>j"),
            ("show-shortcuts", self._show_shortcuts, "<Control>slash"),
            ("show-about", self._show_about, None),
            ("quit", lambda: self.close(), "<Control>q"),
        ]

        for name, callback, accel in actions:
            action = Gio.SimpleAction.new(name, None)
            action.connect("activate", lambda a, p, cb=callback: cb())
            self.add_action(action)

            if accel:
                self.get_application().set_accels_for_action(f"win.{name}", [accel])

    # ==================== Session sync ====================

    def _on_session_changed(self, session: Session):
        workspace = session.workspace

        if self.text_entry.get_text() != workspace.input_text:
            self.text_entry.handler_block_by_func(self._on_entry_changed)
            self.text_entry.set_text(workspace.input_text)
            self.text_entry.handler_unblock_by_func(self._on_entry_changed)

        deleting = workspace.mode is Mode.DELETION
        if self.mode_btn.get_active() != deleting:
            self.mode_btn.handler_block_by_func(self._on_mode_toggled)
            self.mode_btn.set_active(deleting)
            self.mode_btn.handler_unblock_by_func(self._on_mode_toggled)
        self.mode_btn.set_label("Delete" if deleting else "Move")
        if deleting:
            self.mode_btn.add_css_class("destructive-action")
        else:
            self.mode_btn.remove_css_class("destructive-action")

    def _on_entry_changed(self, entry):
        self.session.dispatch(EditText(entry.get_text()))

    def _on_mode_toggled(self, button):
        self.session.dispatch(ToggleMode())

    def _toggle_mode(self):
        self.session.dispatch(ToggleMode())

    def _prepare_placement(self):
        self.session.dispatch(PreparePlacement(self.text_entry.get_text()))

    def _copy_selected(self):
        self.session.dispatch(CopySelectedText())

    def _toggle_document(self):
        revealed = self.document_revealer.get_reveal_child()
        self.document_revealer.set_reveal_child(not revealed)

    # ==================== Documents ====================

    def _open_document(self):
        dialog = Gtk.FileDialog()
        dialog.set_title("Open Document")
        dialog.set_filters(_json_filters())
        dialog.open(self, None, self._on_open_response)

    def _on_open_response(self, dialog, result):
        try:
            file = dialog.open_finish(result)
        except GLib.Error:
            return  # User cancelled
        filepath = file.get_path() if file else None
        if not filepath:
            self._show_toast("Open failed: selected location is not a local file")
            return
        try:
            self.session.load_file(filepath)
        except (OSError, DocumentError) as exc:
            log.warning("Could not open %s: %s", filepath, exc)
            self._show_toast(f"Open failed: {exc}")
            return
        self._show_toast(f"Opened {filepath}")

    def _save_document_as(self):
        dialog = Gtk.FileDialog()
        dialog.set_title("Save Document As")
        dialog.set_initial_name("workspace.json")
        dialog.set_filters(_json_filters())
        dialog.save(self, None, self._on_save_response)

    def _on_save_response(self, dialog, result):
        try:
            file = dialog.save_finish(result)
        except GLib.Error:
            return  # User cancelled
        filepath = file.get_path() if file else None
        if not filepath:
            self._show_toast("Save failed: selected location is not a local file")
            return
        try:
            self.session.save_file(filepath)
        except OSError as exc:
            log.warning("Could not save %s: %s", filepath, exc)
            self._show_toast(f"Save failed: {exc}")
            return
        self._show_toast(f"Saved to {filepath}")

    def _export_png(self):
        """Export the workspace as PNG."""
        if not self.session.workspace.notes:
            self._show_toast("Nothing to export")
            return

        dialog = Gtk.FileDialog()
        dialog.set_title("Export as PNG")
        dialog.set_initial_name("workspace.png")
        dialog.set_initial_folder(Gio.File.new_for_path(str(get_data_dir())))

        filter_png = Gtk.FileFilter()
        filter_png.set_name("PNG Images")
        filter_png.add_mime_type("image/png")

        filters = Gio.ListStore.new(Gtk.FileFilter)
        filters.append(filter_png)
        dialog.set_filters(filters)

        dialog.save(self, None, self._on_export_png_response)

    def _on_export_png_response(self, dialog, result):
        """Handle PNG export dialog response."""
        try:
            file = dialog.save_finish(result)
        except GLib.Error:
            return  # User cancelled
        filepath = file.get_path() if file else None
        if not filepath:
            self._show_toast("Export failed: selected location is not a local file")
            return
        try:
            exported = render.export_png(self.session.workspace, filepath)
        except OSError as exc:
            log.warning("PNG export to %s failed: %s", filepath, exc)
            exported = False
        self._show_toast(f"Exported to {filepath}" if exported else "Export failed")

    # ==================== Dialogs ====================

    def _show_shortcuts(self):
        dialog = ShortcutsDialog(self)
        dialog.present()

    def _show_about(self):
        """Show about dialog."""
        about = Adw.AboutWindow(
            transient_for=self,
            application_name="PlaceNotes",
            application_icon="accessories-text-editor",
            developer_name="PlaceNotes Project",
            version=__version__,
            license_type=Gtk.License.MIT_X11,
            comments="Sticky notes on an endless canvas",
        )
        about.present()

    def _show_toast(self, message: str):
        """Show a toast notification."""
        toast = Adw.Toast(title=message)
        toast.set_timeout(3)
        self.toast_overlay.add_toast(toast)


class PlaceNotesApp(Adw.Application):
    """Main application class."""

    def __init__(self):
        super().__init__(
            application_id=__app_id__,
            flags=Gio.ApplicationFlags.DEFAULT_FLAGS
        )
        self.settings = Settings()
        self.session: Optional[Session] = None
        self.window: Optional[PlaceNotesWindow] = None

    def do_startup(self):
        """Initialize application."""
        Adw.Application.do_startup(self)

        self.settings = load_settings()
        self.session = Session()

        if self.settings.restore_last_workspace:
            path = get_workspace_path()
            if path.exists():
                try:
                    self.session.load_file(path)
                except (OSError, DocumentError) as exc:
                    log.warning("Could not restore workspace from %s: %s", path, exc)

    def do_activate(self):
        """Activate application."""
        if not self.window:
            self.window = PlaceNotesWindow(self, self.session, self.settings)

        self.window.present()

    def do_shutdown(self):
        """Shutdown application."""
        if self.session and self.settings.restore_last_workspace:
            try:
                self.session.save_file(get_workspace_path())
            except OSError as exc:
                log.warning("Could not save workspace: %s", exc)

        if self.window:
            width, height = self.window.get_default_size()
            self.settings.window_width = width
            self.settings.window_height = height
        try:
            save_settings(self.settings)
        except OSError as exc:
            log.warning("Could not save settings: %s", exc)

        Adw.Application.do_shutdown(self)


def main() -> int:
    """Application entry point."""
    app = PlaceNotesApp()
    return app.run(sys.argv)


if __name__ == "__main__":
    sys.exit(main())
