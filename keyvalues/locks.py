from __future__ import annotations

import os
import threading
from pathlib import Path


class PathLockRegistry:
    """
    Hands out one lock per absolute file path.

    Held around a single read or write of that file, never across a whole
    load-mutate-save cycle.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        key = os.path.abspath(path)
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


GLOBAL_PATH_LOCKS = PathLockRegistry()
