"""DataKey path algebra.

A data key is the string a rendered component carries in its ``data-key``
attribute so that client code can find the matching value in the JSON payload
shipped alongside the HTML.  Keys are built by appending segments to an
optional prefix:

- ``Field("name")`` appends ``.name`` (or just ``name`` at the root)
- ``Index(3)`` appends ``[3]`` with no separator

Example::

    from websummary.datakey import Field, Index, join_all

    join_all(None, Field("grid"), Field("grid_data"), Index(2))
    # 'grid.grid_data[2]'

No escaping is performed.  Field names are expected to be plain identifiers;
guaranteeing that is the caller's responsibility.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

__all__ = [
    "Field",
    "Index",
    "Segment",
    "join",
    "join_all",
    "parse",
    "resolve",
    "to_json_pointer",
]


@dataclass(frozen=True, slots=True)
class Field:
    """A named member of a JSON object."""

    name: str


@dataclass(frozen=True, slots=True)
class Index:
    """A position in a JSON array."""

    index: int


Segment = Field | Index

_SEGMENT_RE = re.compile(r"\.?([^.\[\]]+)|\[(\d+)\]")


def join(prefix: str | None, segment: Segment) -> str:
    """Append one segment to an optional key prefix.

    Args:
        prefix:  The key of the parent value, or ``None`` at the root.
        segment: The ``Field`` or ``Index`` leading from parent to child.

    Returns:
        The child key.
    """
    if isinstance(segment, Index):
        return f"{prefix or ''}[{segment.index}]"
    if prefix is None:
        return segment.name
    return f"{prefix}.{segment.name}"


def join_all(prefix: str | None, *segments: Segment) -> str | None:
    """Fold ``join`` over several segments, left to right."""
    key = prefix
    for segment in segments:
        key = join(key, segment)
    return key


def parse(path: str) -> list[Segment]:
    """Split a data key back into its segments.

    Raises:
        ValueError: If ``path`` is not a well-formed data key.
    """
    segments: list[Segment] = []
    pos = 0
    while pos < len(path):
        match = _SEGMENT_RE.match(path, pos)
        # A leading "." is only valid between segments.
        if match is None or (pos == 0 and path.startswith(".")):
            msg = f"Malformed data key {path!r} at offset {pos}"
            raise ValueError(msg)
        name, index = match.groups()
        if name is not None:
            if pos > 0 and not match.group(0).startswith("."):
                msg = f"Malformed data key {path!r} at offset {pos}"
                raise ValueError(msg)
            segments.append(Field(name))
        else:
            segments.append(Index(int(index)))
        pos = match.end()
    return segments


def to_json_pointer(path: str | None) -> str:
    """Convert a data key into the equivalent RFC 6901 JSON Pointer.

    The root (``None`` or ``""``) maps to ``""``; ``"a.b[0]"`` maps to
    ``"/a/b/0"``.
    """
    if not path:
        return ""
    parts: list[str] = []
    for segment in parse(path):
        if isinstance(segment, Index):
            parts.append(str(segment.index))
        else:
            parts.append(segment.name.replace("~", "~0").replace("/", "~1"))
    return "/" + "/".join(parts)


def resolve(document: Any, path: str | None) -> Any:
    """Return the value a data key points to inside a JSON document.

    Args:
        document: A JSON value (dicts, lists and scalars).
        path:     The data key to follow.  ``None`` or ``""`` returns the
                  document itself.

    Returns:
        The addressed JSON value.

    Raises:
        KeyError:   A field segment names a missing object member.
        IndexError: An index segment is out of range.
        TypeError:  A segment does not match the shape of the value it is
                    applied to (e.g. an index into an object).
    """
    if not path:
        return document
    value = document
    walked: str | None = None
    for segment in parse(path):
        if isinstance(segment, Field):
            if not isinstance(value, dict):
                msg = f"{walked or '<root>'} is not an object, cannot read {segment.name!r}"
                raise TypeError(msg)
            if segment.name not in value:
                msg = f"{walked or '<root>'} has no field {segment.name!r}"
                raise KeyError(msg)
            value = value[segment.name]
        else:
            if not isinstance(value, list):
                msg = f"{walked or '<root>'} is not an array, cannot index [{segment.index}]"
                raise TypeError(msg)
            if segment.index >= len(value):
                msg = (
                    f"{walked or '<root>'} has {len(value)} elements, "
                    f"index [{segment.index}] is out of range"
                )
                raise IndexError(msg)
            value = value[segment.index]
        walked = join(walked, segment)
    return value
