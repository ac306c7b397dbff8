"""Layout containers: static composites and dynamic collections."""

from __future__ import annotations

from websummary.layout.dynamic import (
    DYN_GRID_MARKER,
    SELECTOR_MARKER,
    TAB_MARKER,
    ButtonGroupType,
    ButtonSelector,
    ButtonSelectorProps,
    DropdownAlign,
    DropdownSelector,
    DropdownSelectorProps,
    DynGrid,
    Grid,
    GridLayout,
    MaxCols,
    MaxColsNonResponsive,
    Tabs,
)
from websummary.layout.static import (
    Composite,
    CompositeField,
    WithTitle,
    composite_of,
    group_rows,
    html_field,
    html_template,
    title_from_doc,
)

__all__ = [
    "DYN_GRID_MARKER",
    "SELECTOR_MARKER",
    "TAB_MARKER",
    "ButtonGroupType",
    "ButtonSelector",
    "ButtonSelectorProps",
    "Composite",
    "CompositeField",
    "DropdownAlign",
    "DropdownSelector",
    "DropdownSelectorProps",
    "DynGrid",
    "Grid",
    "GridLayout",
    "MaxCols",
    "MaxColsNonResponsive",
    "Tabs",
    "WithTitle",
    "composite_of",
    "group_rows",
    "html_field",
    "html_template",
    "title_from_doc",
]
