"""Static composition: named fields laid out in rows and columns.

A composite renders each of its fields in a column div and groups fields that
share a row label into one row div.  Rows appear in the order their label is
first seen; a field without a label gets a row of its own (its label defaults
to the field name).

There are two ways to build one.  The runtime builder::

    content = (
        Composite()
        .field("num_cells", HeroMetric("Number of cells", "3,487"), row="1")
        .field("umis_per_cell", HeroMetric("Median UMIs per cell", "867"), row="1")
        .field("valid_bc_read_frac", HeroMetric("Valid barcodes", "93.6%"))
    )

and the dataclass decorator, which reads the same information from field
metadata::

    @html_template
    @dataclass
    class Content:
        num_cells: HeroMetric = html_field(row="1")
        umis_per_cell: HeroMetric = html_field(row="1")
        valid_bc_read_frac: HeroMetric = html_field()

Both render::

    <div class="row">
    <div class="col">
    <div data-key="num_cells" data-component="Metric"></div>
    </div>
    <div class="col">
    <div data-key="umis_per_cell" data-component="Metric"></div>
    </div>
    </div>
    <div class="row">
    <div class="col">
    <div data-key="valid_bc_read_frac" data-component="Metric"></div>
    </div>
    </div>

Field keys are ``struct_key.field``; the decorator uses the field's JSON name
(``rename`` metadata) so that keys always match the serialized document.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from cachetools import LRUCache, cached

from websummary import datakey
from websummary.components.metrics import Title, TitleWithHelp
from websummary.render import render
from websummary.resources import SharedResources, extract_resources
from websummary.serialize import (
    JsonValue,
    field_json_name,
    is_flattened,
    is_skipped,
    json_field,
    to_json,
)

__all__ = [
    "Composite",
    "CompositeField",
    "WithTitle",
    "composite_of",
    "group_rows",
    "html_field",
    "html_template",
    "title_from_doc",
]

ROW = "websummary.row"
DOC = "websummary.doc"

T = TypeVar("T")


def html_field(
    *,
    row: str | None = None,
    doc: str | None = None,
    metadata: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> Any:
    """Dataclass field carrying a row label and documentation text.

    Serialization options (``rename``, ``skip``, ``flatten`` ...) and
    ``dataclasses.field`` arguments are forwarded to ``json_field``.
    """
    merged: dict[str, Any] = dict(metadata or {})
    if row is not None:
        merged[ROW] = row
    if doc is not None:
        merged[DOC] = doc
    return json_field(metadata=merged, **kwargs)


@cached(cache=LRUCache(maxsize=1024))
def title_from_doc(name: str, doc: str | None) -> Title:
    """Derive a field title from its documentation text.

    Blank lines are dropped and the rest trimmed.  The first remaining line
    is the title, the others (newline-joined) become the collapsible help.
    Without documentation the title is the field name itself.
    """
    lines = [line.strip() for line in (doc or "").splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return TitleWithHelp.from_text(name)
    return TitleWithHelp(title=lines[0], help="\n".join(lines[1:]))


def group_rows(
    items: Iterable[T], row_of: Callable[[T], str]
) -> list[tuple[str, list[T]]]:
    """Group items by row label, in first-occurrence order of the label."""
    members: dict[str, list[T]] = {}
    for item in items:
        members.setdefault(row_of(item), []).append(item)
    return list(members.items())


@dataclass(frozen=True, slots=True)
class CompositeField:
    """One field of a composite.

    Attributes:
        name:    Key segment and JSON member name.
        node:    The field's value.
        row:     Row label; fields sharing a label share a row.
        doc:     Documentation text the field's title derives from.
        flatten: Merge the value's JSON object into the composite and reuse
                 the composite's own key for it.
    """

    name: str
    node: Any
    row: str
    doc: str | None = None
    flatten: bool = False

    @property
    def title(self) -> Title:
        return title_from_doc(self.name, self.doc)


class Composite:
    """Fixed set of named fields rendered as a row/column grid."""

    def __init__(self) -> None:
        self._fields: list[CompositeField] = []

    def field(
        self,
        name: str,
        node: Any,
        row: str | None = None,
        doc: str | None = None,
        *,
        flatten: bool = False,
    ) -> Composite:
        """Append a field; returns ``self`` for chaining.

        Raises:
            ValueError: If ``name`` is already used by another field.
        """
        if not flatten and any(f.name == name for f in self._fields):
            msg = f"Duplicate composite field {name!r}"
            raise ValueError(msg)
        self._fields.append(
            CompositeField(name, node, row if row is not None else name, doc, flatten)
        )
        return self

    @property
    def fields(self) -> tuple[CompositeField, ...]:
        return tuple(self._fields)

    def rows(self) -> list[tuple[str, list[CompositeField]]]:
        return group_rows(self._fields, lambda f: f.row)

    def titles(self) -> dict[str, Title]:
        return {f.name: f.title for f in self._fields}

    def template(self, data_key: str | None) -> str:
        parts: list[str] = []
        for _, members in self.rows():
            parts.append('<div class="row">\n')
            for f in members:
                key = data_key if f.flatten else datakey.join(data_key, datakey.Field(f.name))
                parts.append(f'<div class="col">\n{render(f.node, key)}\n</div>\n')
            parts.append("</div>\n")
        return "".join(parts)

    def to_json(self) -> JsonValue:
        out: dict[str, Any] = {}
        for f in self._fields:
            encoded = to_json(f.node)
            if f.flatten:
                if not isinstance(encoded, dict):
                    msg = f"Flattened field {f.name!r} must serialize to an object"
                    raise TypeError(msg)
                out.update(encoded)
            else:
                out[f.name] = encoded
        return out

    def add_to_shared_resource(self, store: SharedResources) -> None:
        for f in self._fields:
            extract_resources(f.node, store)


@dataclass(frozen=True, slots=True)
class _PlannedField:
    attr: str
    name: str
    row: str
    doc: str | None
    flatten: bool


@cached(cache=LRUCache(maxsize=256))
def _field_plan(cls: type) -> tuple[_PlannedField, ...]:
    plan = []
    for f in dataclasses.fields(cls):
        if is_skipped(f):
            continue
        name = field_json_name(f)
        plan.append(
            _PlannedField(
                attr=f.name,
                name=name,
                row=str(f.metadata.get(ROW, name)),
                doc=f.metadata.get(DOC),
                flatten=is_flattened(f),
            )
        )
    return tuple(plan)


def composite_of(obj: Any) -> Composite:
    """Build the ``Composite`` a decorated dataclass instance renders as."""
    composite = Composite()
    for planned in _field_plan(type(obj)):
        composite.field(
            planned.name,
            getattr(obj, planned.attr),
            row=planned.row,
            doc=planned.doc,
            flatten=planned.flatten,
        )
    return composite


def html_template(cls: type[T]) -> type[T]:
    """Give a dataclass a ``template`` method laying its fields out in rows.

    Raises:
        TypeError: If ``cls`` is not a dataclass.
    """
    if not dataclasses.is_dataclass(cls):
        msg = f"html_template requires a dataclass, got {cls.__name__}"
        raise TypeError(msg)

    def template(self: Any, data_key: str | None = None) -> str:
        return composite_of(self).template(data_key)

    template.__doc__ = f"Render {cls.__name__} as rows of its fields."
    cls.template = template  # type: ignore[attr-defined]
    return cls


@html_template
@dataclass(slots=True)
class WithTitle:
    """An element shown below its own title."""

    title: Title
    inner: Any
