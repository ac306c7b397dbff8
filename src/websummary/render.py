"""Rendering dispatch and the generic layout wrappers.

``render(node, data_key)`` is the single entry point used by every container
to render its children.  It accepts anything that can appear in a summary
tree:

- ``None``: an absent optional value, renders to ``""``
- ``str``: escaped text; ``int``/``float``/``bool``: their ``str()``
- ``list``/``tuple``: a homogeneous list; item ``i`` gets key ``key[i]`` and
  is wrapped in a row div and a column div
- any ``HtmlTemplate``: delegated to ``node.template(data_key)``

Optional values keep the key unchanged: absence is orthogonal to addressing.
"""

from __future__ import annotations

import html
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from websummary.datakey import Index, join
from websummary.protocols import HtmlTemplate
from websummary.serialize import JsonValue, to_json

__all__ = [
    "Card",
    "Column",
    "DivWrapper",
    "HtmlFragment",
    "Row",
    "render",
    "render_list",
]


def render(node: Any, data_key: str | None = None) -> str:
    """Render any summary tree node into an HTML fragment.

    Args:
        node:     The node to render.
        data_key: Key under which ``to_json(node)`` is reachable in the
                  document JSON; ``None`` at the root.

    Returns:
        The HTML fragment.

    Raises:
        TypeError: If ``node`` is not renderable.
        MissingDataKeyError: If a hydratable component is reached without a key.
    """
    if node is None:
        return ""
    if isinstance(node, str):
        return html.escape(node)
    if isinstance(node, (bool, int, float)):
        return str(node)
    if isinstance(node, HtmlTemplate):
        return node.template(data_key)
    if isinstance(node, (list, tuple)):
        return render_list(node, data_key)
    msg = f"Object of type {type(node).__name__} cannot be rendered as HTML"
    raise TypeError(msg)


def render_list(items: Sequence[Any], data_key: str | None) -> str:
    """Render a homogeneous list, one row/column pair per item."""
    return "\n".join(
        DivWrapper.row(DivWrapper.col(item)).template(join(data_key, Index(i)))
        for i, item in enumerate(items)
    )


@dataclass(frozen=True, slots=True)
class HtmlFragment:
    """Raw HTML that is emitted verbatim and ignores its data key.

    Fragments have no JSON of their own and serialize as ``null``.
    """

    html: str

    def template(self, data_key: str | None) -> str:
        return self.html

    def to_json(self) -> JsonValue:
        return None


@dataclass(slots=True)
class DivWrapper:
    """Wrap a child in a ``<div>`` with the given CSS class.

    The wrapper is transparent to serialization and addressing: it serializes
    as its child and passes its own key through unchanged.
    """

    inner: Any
    css_class: str

    @classmethod
    def row(cls, inner: Any) -> DivWrapper:
        return cls(inner, "row")

    @classmethod
    def col(cls, inner: Any) -> DivWrapper:
        return cls(inner, "col")

    def template(self, data_key: str | None) -> str:
        return f'<div class="{self.css_class}">\n{render(self.inner, data_key)}\n</div>'

    def to_json(self) -> JsonValue:
        return to_json(self.inner)


@dataclass(slots=True)
class Card:
    """A card with a raised border around a single child."""

    inner: Any

    def template(self, data_key: str | None) -> str:
        return DivWrapper(self.inner, "summary_card").template(data_key)

    def to_json(self) -> JsonValue:
        return to_json(self.inner)


@dataclass(slots=True)
class Row:
    """Children laid out side by side in a single row.

    Serializes as a JSON array; child ``i`` is keyed ``key[i]``.
    """

    children: list[Any]

    def template(self, data_key: str | None) -> str:
        cols = "\n".join(
            DivWrapper.col(child).template(join(data_key, Index(i)))
            for i, child in enumerate(self.children)
        )
        return f'<div class="row">\n{cols}\n</div>'

    def to_json(self) -> JsonValue:
        return [to_json(child) for child in self.children]


@dataclass(slots=True)
class Column:
    """Children stacked vertically, one row each.

    This is the same layout a plain list gets; the class exists so that a
    stacked group can be nested inside other containers explicitly.
    """

    children: list[Any]

    def template(self, data_key: str | None) -> str:
        return render_list(self.children, data_key)

    def to_json(self) -> JsonValue:
        return [to_json(child) for child in self.children]
