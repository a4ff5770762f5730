"""User settings and data locations for PlaceNotes."""

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)


def get_data_dir() -> Path:
    """Get the application data directory.

    ``PLACENOTES_DATA_DIR`` overrides the default location.
    """
    override = os.environ.get("PLACENOTES_DATA_DIR")
    if override:
        data_dir = Path(override).expanduser()
    else:
        data_dir = Path.home() / ".local" / "share" / "placenotes"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_settings_path() -> Path:
    return get_data_dir() / "settings.json"


def get_workspace_path() -> Path:
    """Where the last open workspace is kept between runs."""
    return get_data_dir() / "workspace.json"


@dataclass
class Settings:
    """Application preferences."""
    show_grid: bool = True
    grid_size: int = 30
    restore_last_workspace: bool = True
    window_width: int = 1280
    window_height: int = 800

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, data: Optional[str]) -> "Settings":
        if not data:
            return cls()
        try:
            d = json.loads(data)
            # Filter to only known fields to handle schema evolution
            known = {f.name for f in cls.__dataclass_fields__.values()}
            return cls(**{k: v for k, v in d.items() if k in known})
        except (json.JSONDecodeError, TypeError, AttributeError):
            return cls()


def load_settings(path: Optional[Path] = None) -> Settings:
    """Read settings, falling back to defaults if the file is absent or broken."""
    path = path or get_settings_path()
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Settings()
    except OSError as exc:
        log.warning("Could not read settings from %s: %s", path, exc)
        return Settings()
    return Settings.from_json(raw)


def save_settings(settings: Settings, path: Optional[Path] = None):
    path = path or get_settings_path()
    path.write_text(settings.to_json() + "\n", encoding="utf-8")
