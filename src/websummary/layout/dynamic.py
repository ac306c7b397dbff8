"""Dynamic collections: grids, tabs and selectors grown one item at a time.

Items of unrelated types are pushed incrementally, so when an item is pushed
its final data key is not known yet.  Each collection therefore renders the
item immediately with a sentinel key and keeps only the HTML fragment; when
the collection itself is rendered, every occurrence of the sentinel in the
fragment is replaced with the item's real key::

    grid = DynGrid(MaxCols(2))
    grid.push(HeroMetric("Number of cells", "3,487"))
    grid.push(RawImage(encoded))
    grid.push(HeroMetric("Median UMIs per cell", "867"))

    render(grid, "metrics")
    # row 1: metrics.grid_data[0], metrics.grid_data[1]
    # row 2: metrics.grid_data[2]

The pushed values are retained as well.  Resource extraction rewrites their
blobs in place and re-serializes the backing JSON array; the stored HTML never
changes because it does not depend on the blob contents.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any, ClassVar

from websummary import datakey
from websummary.components.catalog import component_name, react_component
from websummary.render import DivWrapper, HtmlFragment, render
from websummary.resources import SharedResources, extract_resources
from websummary.serialize import JsonValue, json_field, to_json

__all__ = [
    "DYN_GRID_MARKER",
    "SELECTOR_MARKER",
    "TAB_MARKER",
    "ButtonGroupType",
    "ButtonSelector",
    "ButtonSelectorProps",
    "DropdownAlign",
    "DropdownSelector",
    "DropdownSelectorProps",
    "DynGrid",
    "Grid",
    "GridLayout",
    "MaxCols",
    "MaxColsNonResponsive",
    "Tabs",
]

logger = logging.getLogger(__name__)

DYN_GRID_MARKER = "__AUbkUE__DYN_GRID__WhcSw=__"
TAB_MARKER = "__AUbkUE__TAB__WhcSw=__"
SELECTOR_MARKER = "__AUbkUE__SELECTOR__WhcSw=__"


# ---------------------------------------------------------------------------
# Grid layouts
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MaxCols:
    """Bootstrap grid with at most ``n`` columns per row."""

    n: int

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int):
            msg = f"MaxCols expects an int, got {type(self.n).__name__}"
            raise TypeError(msg)

    @property
    def col_class(self) -> str:
        return {2: "col-sm-6", 3: "col-sm-4", 4: "col-sm-3", 6: "col-sm-2"}.get(
            self.n, "col"
        )


@dataclass(frozen=True, slots=True)
class MaxColsNonResponsive:
    """HTML table with at most ``n`` cells per row; never reflows."""

    n: int

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int):
            msg = f"MaxColsNonResponsive expects an int, got {type(self.n).__name__}"
            raise TypeError(msg)


GridLayout = MaxCols | MaxColsNonResponsive


def _chunks(items: Sequence[str], n: int) -> Iterator[list[tuple[int, str]]]:
    # n <= 0 yields nothing
    if n <= 0:
        return
    indexed = list(enumerate(items))
    for start in range(0, len(indexed), n):
        yield indexed[start : start + n]


# ---------------------------------------------------------------------------
# Shared marker/patch machinery
# ---------------------------------------------------------------------------


class _DynamicCollection:
    """Values, labels and marker-keyed fragments of a dynamic collection."""

    _marker: ClassVar[str]

    def __init__(self) -> None:
        self._values: list[Any] = []
        self._labels: list[str | None] = []
        self._fragments: list[str] = []
        self._data: list[JsonValue] = []

    def __len__(self) -> int:
        return len(self._values)

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(self._values)

    @property
    def labels(self) -> tuple[str | None, ...]:
        return tuple(self._labels)

    def _append(self, label: str | None, value: Any) -> None:
        self._data.append(to_json(value))
        self._fragments.append(render(value, self._marker))
        self._values.append(value)
        self._labels.append(label)
        logger.debug(
            "Pushed %s into %s at index %d",
            type(value).__name__,
            type(self).__name__,
            len(self._values) - 1,
        )

    def _patched(self, i: int, key: str) -> str:
        return self._fragments[i].replace(self._marker, key)

    def add_to_shared_resource(self, store: SharedResources) -> None:
        for value in self._values:
            extract_resources(value, store)
        self._data = [to_json(value) for value in self._values]


# ---------------------------------------------------------------------------
# Grids
# ---------------------------------------------------------------------------


class DynGrid(_DynamicCollection):
    """A grid holding elements of any renderable type.

    Serializes as ``{"grid_data": [...]}``; element ``i`` is keyed
    ``key.grid_data[i]``.
    """

    _marker = DYN_GRID_MARKER

    def __init__(self, layout: GridLayout) -> None:
        super().__init__()
        self.layout = layout

    @classmethod
    def with_elements(cls, elements: Iterable[Any], layout: GridLayout) -> DynGrid:
        grid = cls(layout)
        for element in elements:
            grid.push(element)
        return grid

    def push(self, *args: Any) -> DynGrid:
        """Append an element: ``push(value)`` or ``push(label, value)``.

        The label is kept for callers (``labels``) and is not rendered.
        """
        if len(args) == 1:
            label, value = None, args[0]
        elif len(args) == 2:
            label, value = args
        else:
            msg = f"push() takes a value or a label and a value, got {len(args)} arguments"
            raise TypeError(msg)
        self._append(label, value)
        return self

    def template(self, data_key: str | None) -> str:
        base = datakey.join(data_key, datakey.Field("grid_data"))
        chunks = _chunks(self._fragments, self.layout.n)
        if isinstance(self.layout, MaxColsNonResponsive):
            return self._table(base, list(chunks))
        col_class = self.layout.col_class
        return "\n".join(
            DivWrapper.row(
                HtmlFragment(
                    "\n".join(
                        DivWrapper(
                            HtmlFragment(self._patched(i, datakey.join(base, datakey.Index(i)))),
                            col_class,
                        ).template(None)
                        for i, _ in chunk
                    )
                )
            ).template(None)
            for chunk in chunks
        )

    def _table(self, base: str, chunks: list[list[tuple[int, str]]]) -> str:
        if not chunks:
            return ""
        rows = "\n".join(
            "<tr>\n"
            + "\n".join(
                f"<td>\n{self._patched(i, datakey.join(base, datakey.Index(i)))}\n</td>"
                for i, _ in chunk
            )
            + "\n</tr>"
            for chunk in chunks
        )
        return f"<table>\n<tbody>\n{rows}\n</tbody>\n</table>"

    def to_json(self) -> JsonValue:
        return {"grid_data": list(self._data)}


class Grid(DynGrid):
    """A ``DynGrid`` whose elements all share one type.

    The element type is given up front or fixed by the first push.
    """

    def __init__(self, layout: GridLayout, element_type: type | None = None) -> None:
        super().__init__(layout)
        self.element_type = element_type

    @classmethod
    def with_elements(
        cls,
        elements: Iterable[Any],
        layout: GridLayout,
        element_type: type | None = None,
    ) -> Grid:
        grid = cls(layout, element_type)
        for element in elements:
            grid.push(element)
        return grid

    def push(self, *args: Any) -> Grid:
        """Append an element of the grid's type.

        Raises:
            TypeError: If the element is not an instance of ``element_type``.
        """
        if args:
            value = args[-1]
            if self.element_type is not None and not isinstance(value, self.element_type):
                msg = (
                    f"Grid of {self.element_type.__name__} "
                    f"cannot hold {type(value).__name__}"
                )
                raise TypeError(msg)
        super().push(*args)
        if self.element_type is None:
            self.element_type = type(self._values[-1])
        return self


# ---------------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------------


class Tabs(_DynamicCollection):
    """Mutually exclusive panels, one per pushed element; ``tab_0`` is active.

    Serializes as ``{"tab_data": [...]}``; tab ``i`` is keyed
    ``key.tab_data[i]``.
    """

    _marker = TAB_MARKER

    def push(self, title: str, value: Any) -> Tabs:
        self._append(str(title), value)
        return self

    def tab(self, title: str, value: Any) -> Tabs:
        """Chaining alias of ``push``."""
        return self.push(title, value)

    @property
    def titles(self) -> tuple[str, ...]:
        return tuple(label or "" for label in self._labels)

    def template(self, data_key: str | None) -> str:
        base = datakey.join(data_key, datakey.Field("tab_data"))
        inner = "\n".join(
            f'<div class="tab-wrapper" data-event-key="tab_{i}" '
            f'data-title="{html.escape(title)}">\n'
            f"{self._patched(i, datakey.join(base, datakey.Index(i)))}\n</div>"
            for i, title in enumerate(self.titles)
        )
        return (
            '<div class="tabs-wrapper" data-default-active-key="tab_0" '
            f'data-id="main-tabs">\n{inner}\n</div>'
        )

    def to_json(self) -> JsonValue:
        return {"tab_data": list(self._data)}


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


class DropdownAlign(StrEnum):
    LEFT = auto()
    RIGHT = auto()


class ButtonGroupType(StrEnum):
    RADIO = auto()
    CHECKBOX = auto()


@dataclass(frozen=True, slots=True)
class DropdownSelectorProps:
    label: str | None = json_field(skip_if_none=True, default=None)
    align: DropdownAlign = DropdownAlign.LEFT


@dataclass(frozen=True, slots=True)
class ButtonSelectorProps:
    group_type: ButtonGroupType = ButtonGroupType.RADIO


class _Selector(_DynamicCollection):
    """Named options, one of which the client shows at a time.

    Serializes as ``{"props": {...}, "options": [{"name", "component"}]}``;
    option ``i`` is keyed ``key.options[i].component`` and the selector's own
    props ``key.props``.
    """

    _marker = SELECTOR_MARKER
    _wrapper_class: ClassVar[str]
    props: Any

    def push(self, name: str, value: Any) -> _Selector:
        self._append(str(name), value)
        return self

    def option(self, name: str, value: Any) -> _Selector:
        """Chaining alias of ``push``."""
        return self.push(name, value)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(label or "" for label in self._labels)

    def template(self, data_key: str | None) -> str:
        base = datakey.join(data_key, datakey.Field("options"))
        inner = "\n".join(
            f'<div class="{self._wrapper_class}" name="{html.escape(name)}">'
            + self._patched(
                i, datakey.join_all(base, datakey.Index(i), datakey.Field("component"))
            )
            + "</div>"
            for i, name in enumerate(self.names)
        )
        props_key = datakey.join(data_key, datakey.Field("props"))
        return (
            f'<div data-key="{props_key}" '
            f'data-component="{component_name(type(self))}">{inner}</div>'
        )

    def to_json(self) -> JsonValue:
        return {
            "props": to_json(self.props),
            "options": [
                {"name": name, "component": data}
                for name, data in zip(self.names, self._data, strict=True)
            ],
        }


@react_component("DropdownSelector")
class DropdownSelector(_Selector):
    """Dropdown menu toggling between options."""

    _wrapper_class = "dropdown-wrapper"

    def __init__(
        self, label: str | None = None, align: DropdownAlign = DropdownAlign.LEFT
    ) -> None:
        super().__init__()
        self.props = DropdownSelectorProps(label=label, align=align)


@react_component("ButtonSelector")
class ButtonSelector(_Selector):
    """Button group toggling between options."""

    _wrapper_class = "button-selector-wrapper"

    def __init__(self, group_type: ButtonGroupType = ButtonGroupType.RADIO) -> None:
        super().__init__()
        self.props = ButtonSelectorProps(group_type=group_type)
