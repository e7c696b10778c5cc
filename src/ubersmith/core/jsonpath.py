"""
Dotted-path lookup over decoded JSON values.

A path such as `tags.1.tag` walks a JSON value one segment at a time:
- on an object, the segment is a field name,
- on an array, the segment is a base-10 index,
- on anything else, the walk stops and yields None.

`member_source` pulls the exact text of one top-level member out of a JSON document,
so a payload can be kept as it arrived and re-parsed later.

Lookups are permissive by contract. They never raise for a shape mismatch:
- a missing field or an out-of-range index yields None,
- an index segment that is not a base-10 integer is read as 0.
"""

from __future__ import annotations

import json
import re
from json.decoder import scanstring
from typing import Any, Mapping, Union

# What `json.loads` produces.
JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]

_INDEX_RE = re.compile(r"[+-]?[0-9]+")
_WS_RE = re.compile(r"[ \t\n\r]*")
_DECODER = json.JSONDecoder()


def split_path(path: str) -> list[str]:
    """Split a dotted path into segments (an empty path is one empty segment)."""
    return path.split(".")


def to_index(segment: str) -> int:
    """Parse an array index segment; anything that is not a base-10 integer reads as 0."""
    if not _INDEX_RE.fullmatch(segment):
        return 0
    return int(segment)


def step(current: Any, segment: str) -> JsonValue:
    """Resolve one segment against `current`."""
    if isinstance(current, Mapping):
        return current.get(segment)
    if isinstance(current, list):
        index = to_index(segment)
        if 0 <= index < len(current):
            return current[index]
        return None
    return None


def lookup(tree: Any, path: str) -> JsonValue:
    """Return the value addressed by `path` inside `tree`, or None.

    The first segment is always a field of the top-level object; a top-level array or
    scalar therefore never matches.
    """
    segments = split_path(path)
    if not isinstance(tree, Mapping):
        return None

    current: JsonValue = tree.get(segments[0])
    for segment in segments[1:]:
        if current is None:
            return None
        current = step(current, segment)
    return current


def member_source(text: str, name: str) -> str | None:
    """Return the exact source text of member `name` of the top-level JSON object in `text`.

    Numbers and whitespace are kept as written (`1e400` stays `1e400`). Returns None when
    `text` is not an object or has no such member; the last duplicate wins.

    Raises:
        json.JSONDecodeError: If `text` is not valid JSON.
    """
    idx = _WS_RE.match(text, 0).end()
    if not text.startswith("{", idx):
        return None
    idx = _WS_RE.match(text, idx + 1).end()
    if text.startswith("}", idx):
        return None

    found = None
    while True:
        if not text.startswith('"', idx):
            raise json.JSONDecodeError("Expecting property name enclosed in double quotes", text, idx)
        key, idx = scanstring(text, idx + 1)
        idx = _WS_RE.match(text, idx).end()
        if not text.startswith(":", idx):
            raise json.JSONDecodeError("Expecting ':' delimiter", text, idx)
        start = _WS_RE.match(text, idx + 1).end()
        _, end = _DECODER.raw_decode(text, start)
        if key == name:
            found = text[start:end]
        idx = _WS_RE.match(text, end).end()
        if text.startswith(",", idx):
            idx = _WS_RE.match(text, idx + 1).end()
            continue
        if text.startswith("}", idx):
            return found
        raise json.JSONDecodeError("Expecting ',' delimiter", text, idx)
