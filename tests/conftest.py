from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection
# without an editable install.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


ENV_VARS = (
    "KEYVALUES_DIR",
    "KEYVALUES_FILE_NAME",
    "KEYVALUES_ATOMIC_SAVE",
    "KEYVALUES_PRETTIFY",
    "KEYVALUES_NUM_SPACES",
)


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """
    A not-yet-existing directory under tmp_path, so tests also cover directory creation.
    """
    return tmp_path / "data"


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """
    Clear KEYVALUES_* variables; anything set during the test (dotenv included) is undone afterwards.
    """
    for name in ENV_VARS:
        # setenv first so monkeypatch records the original state and restores it.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
