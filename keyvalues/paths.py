from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .options import KeyValuesOptions

DEFAULT_DIR_NAME = "localdb"
DEFAULT_FILE_NAME = "keyvalues.json"


def default_dir() -> Path:
    # Relative to the working directory of the calling process.
    return (Path.cwd() / DEFAULT_DIR_NAME).resolve()


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_file_path(options: "KeyValuesOptions") -> Path:
    """
    Default path locator: `<dir>/<file_name>`.

    Blank values (after stripping) fall back to `default_dir()` and
    DEFAULT_FILE_NAME. Does not touch the disk.
    """
    raw_dir = (options.dir or "").strip()
    directory = Path(raw_dir) if raw_dir else default_dir()
    file_name = options.file_name.strip() or DEFAULT_FILE_NAME
    return directory / file_name
