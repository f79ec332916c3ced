from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .paths import DEFAULT_FILE_NAME


class KeyValuesOptions(BaseModel):
    """
    Storage configuration. Immutable; build a new one to change anything.

      atomic_save  temp file + rename instead of truncate-and-write
      dir          directory holding the file (None or blank: ./localdb)
      file_name    name of the JSON file
      prettify     indent the JSON output
      num_spaces   indent width used when prettify is on
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    atomic_save: bool = True
    dir: str | None = None
    file_name: str = DEFAULT_FILE_NAME
    prettify: bool = False
    num_spaces: int = Field(default=2, ge=0)

    @field_validator("dir", mode="before")
    @classmethod
    def _coerce_dir(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value

    def merged(self, overrides: dict[str, Any]) -> "KeyValuesOptions":
        """Return a validated copy with `overrides` applied on top."""
        if not overrides:
            return self
        return KeyValuesOptions.model_validate({**self.model_dump(), **overrides})


DEFAULT_OPTIONS = KeyValuesOptions()
