from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# os.umask can only be read by setting it; do that once, before any threads write.
_UMASK = os.umask(0)
os.umask(_UMASK)


def parse_document(raw: str) -> Any:
    """
    Parse JSON text read from disk.

    Empty (or whitespace-only) text is an empty document. Malformed JSON raises
    json.JSONDecodeError; it is never coerced to {}.
    """
    if not raw.strip():
        return {}
    return json.loads(raw)


def serialize_document(doc: Any, *, prettify: bool = False, num_spaces: int = 2) -> str:
    if prettify and num_spaces > 0:
        return json.dumps(doc, indent=num_spaces, ensure_ascii=False, allow_nan=False)
    return json.dumps(doc, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def encode_document(doc: Any, *, prettify: bool = False, num_spaces: int = 2) -> bytes:
    """
    Serialize and UTF-8 encode in one step.

    Every serialization or encoding error (unsupported types, NaN, lone
    surrogates) is raised here, before any file is opened for writing.
    """
    return serialize_document(doc, prettify=prettify, num_spaces=num_spaces).encode("utf-8")


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_bytes(path: Path, data: bytes) -> None:
    """Truncate and write in place. Not atomic."""
    with path.open("wb") as f:
        f.write(data)


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """
    Atomically write to disk by writing to a temp file then replacing.

    The temp file lives next to the target so os.replace stays on one file
    system. A failure at any point leaves the previous target untouched.
    An existing target keeps its permission bits; a new one gets the
    umask-derived mode a plain open() would give it.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        try:
            mode = stat.S_IMODE(path.stat().st_mode)
        except FileNotFoundError:
            mode = 0o666 & ~_UMASK
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        logger.debug("KV ATOMIC WRITE: failed, removing temp file %s", tmp_path)
        tmp_path.unlink(missing_ok=True)
        raise
