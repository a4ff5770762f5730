"""PlaceNotes launcher.

Provides a stable entry point that configures logging and runs preflight
checks before importing GTK-related modules.
"""

from __future__ import annotations

import logging
import os


def configure_logging() -> None:
    """Configure the root logger from PLACENOTES_LOG_LEVEL (default WARNING)."""
    level_name = (os.environ.get("PLACENOTES_LOG_LEVEL") or "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    configure_logging()

    from placenotes.preflight import run_preflight_or_die

    run_preflight_or_die(require_display=True, check_deps=True)

    from placenotes.app import main as app_main

    return int(app_main())


if __name__ == "__main__":
    raise SystemExit(main())
