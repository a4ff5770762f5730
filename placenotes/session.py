"""Host-side owner of the running workspace.

The reducer in ``placenotes.interaction`` is pure; something has to hold
the current snapshot between events. ``Session`` does that for the GTK app
and the command-line tools, and also keeps the raw document text so a
half-typed edit in the textarea survives until it parses.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from placenotes import document
from placenotes.events import Event, ImportJson
from placenotes.interaction import update
from placenotes.model import Workspace

log = logging.getLogger(__name__)


def _persisted_changed(old: Workspace, new: Workspace) -> bool:
    """Whether anything that ends up in the document differs.

    The reducer reuses the notes tuple and camera when it leaves them alone,
    so identity is enough for those.
    """
    return (new.notes is not old.notes
            or new.camera is not old.camera
            or new.mode is not old.mode
            or new.input_text != old.input_text
            or new.selected_id != old.selected_id
            or new.next_id != old.next_id)


class Session:
    """Holds one workspace snapshot and its document text."""

    def __init__(self, workspace: Optional[Workspace] = None):
        self.workspace = workspace or Workspace()
        self.text = document.encode(self.workspace)
        self.last_error: Optional[str] = None
        # Bumped whenever the document text is replaced
        self.text_revision = 0

        # Callbacks
        self._listeners: List[Callable[["Session"], None]] = []

    @property
    def is_text_valid(self) -> bool:
        """Whether the document text currently parses."""
        return self.last_error is None

    def subscribe(self, listener: Callable[["Session"], None]) -> Callable[[], None]:
        """Call ``listener`` after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify_changed(self):
        for listener in list(self._listeners):
            listener(self)

    def _set_text(self, text: str):
        self.text = text
        self.text_revision += 1

    def dispatch(self, event: Event) -> Workspace:
        """Apply an event; re-encode the document text if persisted fields changed."""
        if isinstance(event, ImportJson):
            self.import_text(event.text)
            return self.workspace

        old = self.workspace
        new = update(old, event)
        if new is old:
            return old

        self.workspace = new
        if _persisted_changed(old, new):
            self._set_text(document.encode(new))
            self.last_error = None
        self._notify_changed()
        return new

    def import_text(self, text: str) -> bool:
        """Take edited document text; apply it if it parses.

        The text is kept verbatim either way so the user can keep editing.
        """
        self._set_text(text)
        try:
            imported = document.decode(text)
        except document.DocumentError as exc:
            log.debug("Document edit not applied: %s", exc)
            self.last_error = str(exc)
            self._notify_changed()
            return False

        self.workspace = imported
        self.last_error = None
        self._notify_changed()
        return True

    def replace_workspace(self, workspace: Workspace):
        """Swap in a whole workspace and regenerate the document text."""
        self.workspace = workspace
        self._set_text(document.encode(workspace))
        self.last_error = None
        self._notify_changed()

    def load_file(self, path: Union[str, Path]):
        """Replace the workspace with a document file's contents.

        Raises ``OSError`` or ``DocumentError``; the session is untouched then.
        """
        workspace = document.read_document(path)
        log.info("Loaded workspace from %s (%d notes)", path, len(workspace.notes))
        self.replace_workspace(workspace)

    def save_file(self, path: Union[str, Path]):
        """Write the current workspace to ``path`` in canonical form."""
        document.write_document(path, self.workspace)
        log.info("Saved workspace to %s", path)
