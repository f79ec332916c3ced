from __future__ import annotations

import re
from typing import Any, Mapping, MutableMapping, Sequence, Union

KeyPath = Union[str, Sequence[Union[str, int]], None]

_INDEX_RE = re.compile(r"0|[1-9][0-9]*")
_PROP_NAME_RE = re.compile(
    r"""[^.\[\]]+|\[(?:([^"'][^\[]*)|(["'])((?:(?!\2)[^\\]|\\.)*?)\2)\]|(?=(?:\.|\[\])(?:\.|\[\]|$))"""
)
_ESCAPE_CHAR_RE = re.compile(r"\\(\\)?")


class _Missing:
    """
    Returned by `read` when a key path does not resolve.

    Distinct from None, which is a stored JSON null.
    """

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def is_index(segment: str) -> bool:
    return _INDEX_RE.fullmatch(segment) is not None


def _split_path_string(key_path: str) -> list[str]:
    segments: list[str] = []
    if key_path.startswith("."):
        segments.append("")
    for match in _PROP_NAME_RE.finditer(key_path):
        bracket_key, quote, quoted_key = match.group(1), match.group(2), match.group(3)
        if quote:
            segments.append(_ESCAPE_CHAR_RE.sub(r"\1", quoted_key))
        elif bracket_key is not None:
            segments.append(bracket_key)
        else:
            segments.append(match.group(0))
    return segments


def parse_key_path(key_path: KeyPath, doc: Any = None) -> list[str]:
    """
    Normalize a key path into a list of segments.

    Strings are split on dots and bracket indexes (`a.b[0]`, `a["x.y"]`) unless
    `doc` already holds the whole string as a literal key. Sequences are taken
    segment by segment without splitting. None, "" and [] denote the root.
    """
    if key_path is None:
        return []
    if isinstance(key_path, str):
        if key_path == "":
            return []
        if isinstance(doc, Mapping) and key_path in doc:
            return [key_path]
        if "." not in key_path and "[" not in key_path:
            return [key_path]
        return _split_path_string(key_path)
    return [str(seg) for seg in key_path]


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment, MISSING)
    if isinstance(node, list):
        if is_index(segment) and int(segment) < len(node):
            return node[int(segment)]
    return MISSING


def read(doc: Any, key_path: KeyPath) -> Any:
    node = doc
    for segment in parse_key_path(key_path, doc):
        node = _child(node, segment)
        if node is MISSING:
            return MISSING
    return node


def has(doc: Any, key_path: KeyPath) -> bool:
    """Explicit nulls count as present; the root always exists."""
    return read(doc, key_path) is not MISSING


def _new_container(next_segment: str) -> Any:
    # Decision table: an index-looking next segment creates a list, anything else a dict.
    return [] if is_index(next_segment) else {}


def _assign(container: Any, segment: str, value: Any) -> bool:
    if isinstance(container, MutableMapping):
        container[segment] = value
        return True
    if isinstance(container, list) and is_index(segment):
        index = int(segment)
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value
        return True
    # Non-index segment on a list: a JSON array cannot hold it, so the write is
    # dropped and read-after-write yields MISSING for that path.
    return False


def write(doc: Any, key_path: KeyPath, value: Any) -> Any:
    """
    Set `value` at `key_path`, creating missing intermediate containers.

    Mutates `doc` in place and returns it. With an empty path a mapping value
    replaces the whole document and is returned instead.
    """
    segments = parse_key_path(key_path, doc)
    if not segments:
        return value if isinstance(value, Mapping) else doc

    node = doc
    for i, segment in enumerate(segments[:-1]):
        child = _child(node, segment)
        if not isinstance(child, (dict, list)):
            child = _new_container(segments[i + 1])
            if not _assign(node, segment, child):
                return doc
        node = child
    _assign(node, segments[-1], value)
    return doc


def remove(doc: Any, key_path: KeyPath) -> bool:
    segments = parse_key_path(key_path, doc)
    if not segments:
        return False

    parent = read(doc, segments[:-1])
    last = segments[-1]
    if isinstance(parent, MutableMapping):
        if last not in parent:
            return False
        del parent[last]
        return True
    if isinstance(parent, list) and is_index(last) and int(last) < len(parent):
        del parent[int(last)]
        return True
    return False
