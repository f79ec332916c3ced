from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Mapping

from . import key_path as kp
from .disk_store import DiskJsonDocumentStore
from .interfaces import KeyValueDocumentStore
from .key_path import KeyPath
from .options import DEFAULT_OPTIONS, KeyValuesOptions
from .paths import resolve_file_path
from .settings import get_settings

logger = logging.getLogger(__name__)

PathLocator = Callable[[KeyValuesOptions], Path]


class KeyValuesError(RuntimeError):
    """Raised by `get`/`aget` when the document cannot be loaded."""


def _get_error(exc: BaseException) -> KeyValuesError:
    detail = str(exc)
    return KeyValuesError(f"Failed to get value: {detail}" if detail else "Failed to get value: Unknown error")


def _is_root(key_path: KeyPath) -> bool:
    return not kp.parse_key_path(key_path)


class KeyValues:
    """
    Key-value storage backed by a single JSON file.

    Every call loads the whole document from disk, reads or mutates it, and
    writes it back when it changed. Nothing is cached between calls.

    Example:

        kv = KeyValues(file_name="config.json", prettify=True)
        kv.set("color.name", "sapphire")
        kv.get("color.name")          # "sapphire"
        kv.get()                      # {"color": {"name": "sapphire"}}
        await kv.ahas("color.hue")    # False
        kv.unset("color.name")        # True

    Each blocking method has an `a`-prefixed coroutine with the same semantics.
    """

    def __init__(
        self,
        options: KeyValuesOptions | Mapping[str, Any] | None = None,
        *,
        locator: PathLocator = resolve_file_path,
        **overrides: Any,
    ):
        if options is None:
            base = DEFAULT_OPTIONS
        elif isinstance(options, KeyValuesOptions):
            base = options
        else:
            base = DEFAULT_OPTIONS.merged(dict(options))
        self._locator = locator
        self._configure(base.merged(overrides))

    @classmethod
    def from_env(cls, env_file: str | os.PathLike[str] | None = None, **overrides: Any) -> "KeyValues":
        """Build options from KEYVALUES_* environment variables (optionally seeded from a dotenv file)."""
        return cls(get_settings(env_file).to_options(), **overrides)

    def _configure(self, options: KeyValuesOptions) -> None:
        self._options = options
        self._store: KeyValueDocumentStore = DiskJsonDocumentStore(self._locator(options), options)

    @property
    def options(self) -> KeyValuesOptions:
        return self._options

    def file_path(self) -> Path:
        return self._store.path

    def reset_config(self) -> None:
        self._configure(DEFAULT_OPTIONS)

    # Blocking

    def has(self, key_path: KeyPath) -> bool:
        return kp.has(self._store.load(), key_path)

    def get(self, key_path: KeyPath = None, default: Any = None) -> Any:
        """
        Return the value at `key_path`, or the whole document when no path is given.

        `default` is returned when the path does not resolve. Load and parse
        failures are raised as KeyValuesError.
        """
        try:
            doc = self._store.load()
        except Exception as e:
            logger.warning("KV GET: failed to load %s: %r", self._store.path, e)
            raise _get_error(e) from e
        return self._pick(doc, key_path, default)

    def set(self, key_path: KeyPath, value: Any) -> None:
        doc = kp.write(self._store.load(), key_path, value)
        self._store.save(doc)

    def replace(self, document: Mapping[str, Any]) -> None:
        """Overwrite the whole document without reading the current one."""
        self._store.save(document)

    def unset(self, key_path: KeyPath = None) -> bool:
        """
        Remove the value at `key_path`, or everything when no path is given.

        Returns whether anything was removed; the file is only rewritten then.
        """
        doc = self._store.load()
        if _is_root(key_path):
            if doc == {}:
                return False
            self._store.save({})
            return True
        if not kp.remove(doc, key_path):
            return False
        self._store.save(doc)
        return True

    # Non-blocking

    async def ahas(self, key_path: KeyPath) -> bool:
        return kp.has(await self._store.aload(), key_path)

    async def aget(self, key_path: KeyPath = None, default: Any = None) -> Any:
        try:
            doc = await self._store.aload()
        except Exception as e:
            logger.warning("KV GET: failed to load %s: %r", self._store.path, e)
            raise _get_error(e) from e
        return self._pick(doc, key_path, default)

    async def aset(self, key_path: KeyPath, value: Any) -> None:
        doc = kp.write(await self._store.aload(), key_path, value)
        await self._store.asave(doc)

    async def areplace(self, document: Mapping[str, Any]) -> None:
        await self._store.asave(document)

    async def aunset(self, key_path: KeyPath = None) -> bool:
        doc = await self._store.aload()
        if _is_root(key_path):
            if doc == {}:
                return False
            await self._store.asave({})
            return True
        if not kp.remove(doc, key_path):
            return False
        await self._store.asave(doc)
        return True

    @staticmethod
    def _pick(doc: Any, key_path: KeyPath, default: Any) -> Any:
        if _is_root(key_path):
            return doc
        value = kp.read(doc, key_path)
        return default if value is kp.MISSING else value

    def __repr__(self) -> str:
        return f"KeyValues(path={str(self._store.path)!r})"
