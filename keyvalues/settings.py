from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .options import KeyValuesOptions
from .paths import DEFAULT_FILE_NAME


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Location
    dir: str | None
    file_name: str

    # Write behavior
    atomic_save: bool
    prettify: bool
    num_spaces: int

    def to_options(self) -> KeyValuesOptions:
        return KeyValuesOptions(
            atomic_save=self.atomic_save,
            dir=self.dir,
            file_name=self.file_name,
            prettify=self.prettify,
            num_spaces=max(self.num_spaces, 0),
        )


def get_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    if env_file is not None:
        # Real environment variables win over the file.
        load_dotenv(env_file, override=False)

    dir_ = os.getenv("KEYVALUES_DIR") or None
    file_name = os.getenv("KEYVALUES_FILE_NAME", DEFAULT_FILE_NAME)

    return Settings(
        dir=dir_,
        file_name=file_name,
        atomic_save=_env_bool("KEYVALUES_ATOMIC_SAVE", True),
        prettify=_env_bool("KEYVALUES_PRETTIFY", False),
        num_spaces=_env_int("KEYVALUES_NUM_SPACES", 2),
    )
