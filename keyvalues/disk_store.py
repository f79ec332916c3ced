from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from .interfaces import KeyValueDocumentStore
from .json_store import atomic_write_bytes, encode_document, parse_document, read_text, write_bytes
from .locks import GLOBAL_PATH_LOCKS
from .options import DEFAULT_OPTIONS, KeyValuesOptions
from .paths import ensure_dir

logger = logging.getLogger(__name__)


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - A missing directory or file is created (the file holding {}); any other
      OS error propagates.
    - Malformed content raises json.JSONDecodeError.
    - Writes atomically unless `options.atomic_save` is off. The document is
      encoded before the file is touched, so a failed save leaves it intact.

    The a* variants run each file system call in a worker thread, so they
    suspend only at I/O boundaries.
    """

    def __init__(self, path: Path, options: KeyValuesOptions = DEFAULT_OPTIONS):
        self._path = Path(path)
        self._options = options

    @property
    def path(self) -> Path:
        return self._path

    @property
    def options(self) -> KeyValuesOptions:
        return self._options

    def _encode(self, doc: Any) -> bytes:
        return encode_document(doc, prettify=self._options.prettify, num_spaces=self._options.num_spaces)

    def _read(self) -> str:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            return read_text(self._path)

    def _write(self, data: bytes) -> None:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            if self._options.atomic_save:
                atomic_write_bytes(self._path, data)
            else:
                write_bytes(self._path, data)
        logger.debug("KV SAVE: wrote %d bytes to %s (atomic=%s)", len(data), self._path, self._options.atomic_save)

    def _file_missing(self) -> bool:
        try:
            self._path.stat()
        except FileNotFoundError:
            return True
        return False

    # Blocking

    def load(self) -> Any:
        ensure_dir(self._path.parent)
        if self._file_missing():
            self.save({})
            logger.debug("KV LOAD: created empty document at %s", self._path)
        return parse_document(self._read())

    def save(self, doc: Any) -> None:
        data = self._encode(doc)
        ensure_dir(self._path.parent)
        self._write(data)

    # Non-blocking

    async def aload(self) -> Any:
        await asyncio.to_thread(ensure_dir, self._path.parent)
        if await asyncio.to_thread(self._file_missing):
            await self.asave({})
            logger.debug("KV LOAD: created empty document at %s", self._path)
        raw = await asyncio.to_thread(self._read)
        return parse_document(raw)

    async def asave(self, doc: Any) -> None:
        data = self._encode(doc)
        await asyncio.to_thread(ensure_dir, self._path.parent)
        await asyncio.to_thread(self._write, data)
