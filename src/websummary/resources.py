"""SharedResources: a deduplicating side table for large JSON values.

Embedded images are typically the bulk of a summary's JSON payload, and the
same image is often shown more than once (e.g. in two tabs).  Before the
document is serialized, every resource-bearing component moves its blobs into
the document's ``SharedResources`` and keeps only a short reference string::

    store = SharedResources()
    ref = store.insert("data:image/png;base64,iVBORw0...")   # "_resources_000"
    store.insert("data:image/png;base64,iVBORw0...")         # "_resources_000" again
    store.to_json()                                          # {"000": "data:image/png;..."}

The client resolves a reference by stripping ``RESOURCE_PREFIX`` and looking
the remaining id up in the side table.

Lookup is a linear scan with strict structural equality.  That is quadratic in
the number of distinct blobs per document, which is fine for the tens of
images a summary carries; a hash index would have to preserve the exact-match
semantics the client relies on.

A store belongs to exactly one document.  It is filled by a single sequential
``extract_resources`` pass and must not be shared across documents.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from websummary.protocols import SharedResourceUser
from websummary.serialize import JsonValue, is_skipped, json_equal, to_json

__all__ = ["RESOURCE_PREFIX", "SharedResources", "extract_resources"]

logger = logging.getLogger(__name__)

RESOURCE_PREFIX = "_resources_"


class SharedResources:
    """Ordered side table of unique JSON values addressed by zero-padded ids.

    Ids are allocated sequentially as ``f"{n:03d}"``: ``"000"``, ``"001"``,
    ... ``"999"``, ``"1000"``.  The width is a minimum, not a limit.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[str, JsonValue]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, reference: object) -> bool:
        if not isinstance(reference, str) or not self.is_reference(reference):
            return False
        resource_id = reference.removeprefix(RESOURCE_PREFIX)
        return any(existing_id == resource_id for existing_id, _ in self._entries)

    @staticmethod
    def is_reference(value: object) -> bool:
        """True if ``value`` looks like a reference returned by ``insert``."""
        return isinstance(value, str) and value.startswith(RESOURCE_PREFIX)

    def insert(self, value: Any) -> str:
        """Store ``value`` once and return its reference string.

        Values that are structurally equal to an existing entry reuse that
        entry's id.  Insertion never fails for JSON-serializable values.

        Args:
            value: Any value ``to_json`` accepts.

        Returns:
            ``RESOURCE_PREFIX`` followed by the entry id, e.g. ``"_resources_007"``.
        """
        encoded = to_json(value)
        for resource_id, existing in self._entries:
            if json_equal(existing, encoded):
                logger.debug("Reusing shared resource %s", resource_id)
                return RESOURCE_PREFIX + resource_id
        resource_id = f"{len(self._entries):03d}"
        self._entries.append((resource_id, encoded))
        logger.debug("Allocated shared resource %s", resource_id)
        return RESOURCE_PREFIX + resource_id

    def get(self, reference: str) -> JsonValue:
        """Return the value stored under ``reference``.

        Raises:
            KeyError: If the reference is unknown to this store.
        """
        resource_id = reference.removeprefix(RESOURCE_PREFIX)
        for existing_id, value in self._entries:
            if existing_id == resource_id:
                return value
        raise KeyError(reference)

    def to_json(self) -> dict[str, JsonValue]:
        """The side table as shipped to the client: ``{id: value}``."""
        return dict(self._entries)


def extract_resources(node: Any, store: SharedResources) -> None:
    """Walk a summary tree once and move every blob into ``store``.

    Objects implementing ``add_to_shared_resource`` handle their own fields
    (and are responsible for recursing into children they own).  Everything
    else is traversed structurally: dataclass fields that are serialized,
    mapping values, and sequence items.
    """
    if node is None or isinstance(node, (str, bytes, int, float, bool, Enum, type)):
        return
    if isinstance(node, SharedResourceUser):
        node.add_to_shared_resource(store)
        return
    if dataclasses.is_dataclass(node):
        for f in dataclasses.fields(node):
            if not is_skipped(f):
                extract_resources(getattr(node, f.name), store)
    elif isinstance(node, Mapping):
        for value in node.values():
            extract_resources(value, store)
    elif isinstance(node, (list, tuple, set, frozenset)):
        for item in node:
            extract_resources(item, store)
