"""JSON serialization of summary trees.

``to_json`` converts a summary object graph into plain JSON values (dicts,
lists, str, int, float, bool, None).  Together with ``template`` rendering it
forms the two independent traversals whose paths must agree: every data key a
component renders must resolve against the output of ``to_json``.

Dispatch order:

1. ``None`` and enums (enums serialize as their value; checked before ``str``
   because ``StrEnum`` members are strings)
2. JSON scalars
3. numpy scalars and arrays (``.item()`` / ``.tolist()``)
4. objects defining their own ``to_json()``
5. dataclass instances, honouring the field metadata written by ``json_field``
6. mappings, sequences and sets

Dataclass field metadata:

- ``rename``:       JSON member name used instead of the attribute name
- ``skip``:         never serialized (and never rendered)
- ``skip_if_none``: omitted when the value is ``None``
- ``flatten``:      the field's JSON object is merged into the parent object
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

import numpy as np

__all__ = [
    "JsonValue",
    "field_json_name",
    "is_flattened",
    "is_skipped",
    "json_equal",
    "json_field",
    "to_json",
]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

RENAME = "websummary.rename"
SKIP = "websummary.skip"
SKIP_IF_NONE = "websummary.skip_if_none"
FLATTEN = "websummary.flatten"


def json_field(
    *,
    rename: str | None = None,
    skip: bool = False,
    skip_if_none: bool = False,
    flatten: bool = False,
    metadata: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> Any:
    """``dataclasses.field`` with websummary serialization metadata attached.

    Extra keyword arguments (``default``, ``default_factory``, ``repr`` ...)
    are forwarded to ``dataclasses.field``.  ``metadata`` is merged, which lets
    layout helpers such as ``html_field`` stack their own keys on top.
    """
    merged: dict[str, Any] = dict(metadata or {})
    if rename is not None:
        merged[RENAME] = rename
    if skip:
        merged[SKIP] = True
    if skip_if_none:
        merged[SKIP_IF_NONE] = True
    if flatten:
        merged[FLATTEN] = True
    return dataclasses.field(metadata=merged, **kwargs)


def field_json_name(f: dataclasses.Field[Any]) -> str:
    """Return the JSON member name of a dataclass field."""
    return str(f.metadata.get(RENAME, f.name))


def is_skipped(f: dataclasses.Field[Any]) -> bool:
    """True when the field never appears in the JSON output."""
    return bool(f.metadata.get(SKIP, False))


def is_flattened(f: dataclasses.Field[Any]) -> bool:
    """True when the field's JSON object is merged into its parent."""
    return bool(f.metadata.get(FLATTEN, False))


def to_json(value: Any) -> JsonValue:
    """Convert ``value`` into a JSON-compatible Python value.

    Raises:
        TypeError: If ``value`` (or anything nested in it) has no JSON form,
            or a flattened field does not serialize to an object.
    """
    if value is None:
        return None

    if isinstance(value, Enum):
        return to_json(value.value)

    if isinstance(value, (str, bool, int, float)):
        return value

    if isinstance(value, np.generic):
        return value.item()  # type: ignore[no-any-return]

    if isinstance(value, np.ndarray):
        return value.tolist()  # type: ignore[no-any-return]

    if isinstance(value, type):
        msg = f"Class {value.__name__} is not JSON serializable"
        raise TypeError(msg)

    method = getattr(value, "to_json", None)
    if callable(method):
        return method()  # type: ignore[no-any-return]

    if dataclasses.is_dataclass(value):
        return _dataclass_to_json(value)

    if isinstance(value, Mapping):
        return {str(k): to_json(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]

    if isinstance(value, (set, frozenset)):
        # Sets have no order of their own; sort for a deterministic payload.
        items = [to_json(v) for v in value]
        return sorted(items, key=lambda item: json.dumps(item, sort_keys=True))

    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def _dataclass_to_json(obj: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in dataclasses.fields(obj):
        if is_skipped(f):
            continue
        raw = getattr(obj, f.name)
        if raw is None and f.metadata.get(SKIP_IF_NONE, False):
            continue
        encoded = to_json(raw)
        if is_flattened(f):
            if not isinstance(encoded, dict):
                msg = (
                    f"Field {type(obj).__name__}.{f.name} is flattened but "
                    f"serializes to {type(encoded).__name__}, not an object"
                )
                raise TypeError(msg)
            out.update(encoded)
        else:
            out[field_json_name(f)] = encoded
    return out


def json_equal(a: Any, b: Any) -> bool:
    """Strict structural equality of two JSON values.

    Unlike ``==``, JSON types must match exactly: ``True`` does not equal
    ``1`` and ``1`` does not equal ``1.0``.
    """
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(json_equal(a[k], b[k]) for k in a)
    if isinstance(a, list):
        return len(a) == len(b) and all(
            json_equal(x, y) for x, y in zip(a, b, strict=True)
        )
    return bool(a == b)
