import os
import sys

import pytest

# Allow running the suite from a plain checkout
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from placenotes.model import Camera, Mode, Note, Workspace  # noqa: E402


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    path = tmp_path / "data"
    monkeypatch.setenv("PLACENOTES_DATA_DIR", str(path))
    return path


@pytest.fixture
def sample_workspace() -> Workspace:
    return Workspace(
        notes=(
            Note(id=0, x=10, y=20, width=80, height=40, text="first"),
            Note(id=2, x=-50, y=300, width=80, height=70, text="two\nlines\nhere"),
            Note(id=3, x=0, y=0, width=80, height=40, text="héllo ✓"),
        ),
        next_id=4,
        camera=Camera(-15, 40),
        mode=Mode.DELETION,
        input_text="draft",
        selected_id=2,
    )
