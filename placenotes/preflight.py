"""Environment and dependency preflight checks.

Run before any GTK import so a missing binding produces a readable message
instead of a traceback. Set PLACENOTES_SKIP_PREFLIGHT=1 to bypass.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PreflightResult:
    ok: bool
    message: str


def _has_display() -> bool:
    if sys.platform != "linux":
        return True
    return bool(os.environ.get("WAYLAND_DISPLAY") or os.environ.get("DISPLAY"))


def _check_python_deps() -> Optional[str]:
    """Return an error message if required deps are missing."""
    try:
        import cairo  # type: ignore[import-not-found]  # noqa: F401
    except ImportError as exc:
        return (
            "Missing Python dependency 'pycairo'. "
            "Install it with pip (pycairo) and ensure cairo is available. "
            f"Underlying error: {exc}"
        )

    try:
        import gi  # type: ignore[import-not-found]

        gi.require_version("Gtk", "4.0")
        gi.require_version("Adw", "1")
        gi.require_version("Gdk", "4.0")
        from gi.repository import Gtk, Adw, Gdk  # type: ignore[import-not-found]  # noqa: F401
    except (ImportError, ValueError) as exc:
        return (
            "Missing GTK 4 / libadwaita bindings. Install PyGObject plus the "
            "gtk4 and libadwaita system packages for your distribution. "
            f"Underlying error: {exc}"
        )

    return None


def run_preflight(
    *,
    require_display: bool = True,
    check_deps: bool = True,
) -> PreflightResult:
    """Run checks and return a structured result."""
    if os.environ.get("PLACENOTES_SKIP_PREFLIGHT") == "1":
        return PreflightResult(True, "Preflight skipped via PLACENOTES_SKIP_PREFLIGHT=1")

    if require_display and not _has_display():
        return PreflightResult(
            False,
            "PlaceNotes needs a graphical session, but neither WAYLAND_DISPLAY "
            "nor DISPLAY is set. Set PLACENOTES_SKIP_PREFLIGHT=1 to bypass.",
        )

    if check_deps:
        dep_error = _check_python_deps()
        if dep_error:
            return PreflightResult(False, dep_error)

    return PreflightResult(True, "Preflight OK")


def run_preflight_or_die(
    *,
    require_display: bool = True,
    check_deps: bool = True,
) -> None:
    result = run_preflight(
        require_display=require_display,
        check_deps=check_deps,
    )
    if result.ok:
        return

    sys.stderr.write("\nPlaceNotes preflight check failed:\n")
    sys.stderr.write(result.message)
    sys.stderr.write("\n\n")
    sys.stderr.write(
        "Suggested setup:\n"
        "  Fedora: sudo dnf install gtk4 libadwaita python3-gobject cairo-devel\n"
        "  Debian/Ubuntu: sudo apt install gir1.2-gtk-4.0 gir1.2-adw-1 python3-gi libcairo2-dev\n"
        "  pip install -e .\n\n"
    )
    raise SystemExit(1)
