from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol


class KeyValueDocumentStore(Protocol):
    """
    A single JSON document persisted as a whole, with blocking and
    non-blocking access.
    """

    @property
    def path(self) -> Path:
        ...

    def load(self) -> Any:
        """Load and return the full document, creating an empty one if absent."""
        ...

    def save(self, doc: Any) -> None:
        """Persist the full document."""
        ...

    async def aload(self) -> Any:
        ...

    async def asave(self, doc: Any) -> None:
        ...
