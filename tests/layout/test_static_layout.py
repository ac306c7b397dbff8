"""Tests for row/column composition of named fields."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from websummary.components import HeroMetric, RawImage, TitleWithHelp
from websummary.layout import (
    Composite,
    WithTitle,
    composite_of,
    group_rows,
    html_field,
    html_template,
    title_from_doc,
)
from websummary.resources import SharedResources, extract_resources
from websummary.serialize import to_json

PNG = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAgAAAAIAQMAAAD+wSzI"


@html_template
@dataclass
class WebSummaryContent:
    num_cells: HeroMetric = html_field(row="1")
    umis_per_cell: HeroMetric = html_field(row="1")
    valid_bc_read_frac: HeroMetric = html_field()


@html_template
@dataclass
class LeftContent:
    num_cells: HeroMetric = html_field(row="1")
    umis_per_cell: HeroMetric = html_field(row="1")


@html_template
@dataclass
class FullContent:
    left: LeftContent = html_field(row="1")
    valid_bc_read_frac: HeroMetric = html_field(row="1")


@html_template
@dataclass
class Extras:
    reads: HeroMetric
    image: RawImage


@html_template
@dataclass
class KeyedContent:
    num_cells: HeroMetric = html_field(rename="cells")
    notes: str = html_field(skip=True, default="internal")
    extras: Extras | None = html_field(flatten=True, skip_if_none=True, default=None)


def _metrics() -> tuple[HeroMetric, HeroMetric, HeroMetric]:
    return (
        HeroMetric("Number of cells", "3,487"),
        HeroMetric("Median UMIs per cell", "867"),
        HeroMetric("Valid barcodes", "93.6%"),
    )


SIMPLE_TEMPLATE = """\
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
"""

NESTED_TEMPLATE = """\
<div class="row">
<div class="col">
<div class="row">
<div class="col">
<div data-key="left.num_cells" data-component="Metric"></div>
</div>
<div class="col">
<div data-key="left.umis_per_cell" data-component="Metric"></div>
</div>
</div>

</div>
<div class="col">
<div data-key="valid_bc_read_frac" data-component="Metric"></div>
</div>
</div>
"""


class TestHtmlTemplate:
    """Dataclasses decorated with ``html_template``."""

    def test_rows_group_by_label(self) -> None:
        assert WebSummaryContent(*_metrics()).template(None) == SIMPLE_TEMPLATE

    def test_nested_struct_keys_are_prefixed(self) -> None:
        cells, umis, valid = _metrics()
        content = FullContent(left=LeftContent(cells, umis), valid_bc_read_frac=valid)
        assert content.template(None) == NESTED_TEMPLATE

    def test_keys_follow_json_names(self) -> None:
        content = KeyedContent(num_cells=HeroMetric("Number of cells", "3,487"))
        rendered = content.template("page")
        assert 'data-key="page.cells"' in rendered
        assert "notes" not in rendered
        assert to_json(content) == {
            "cells": {"name": "Number of cells", "metric": "3,487", "threshold": None}
        }

    def test_flattened_field_reuses_parent_key(self) -> None:
        content = KeyedContent(
            num_cells=HeroMetric("Number of cells", "3,487"),
            extras=Extras(HeroMetric("Reads", "1M"), RawImage(PNG)),
        )
        rendered = content.template(None)
        assert 'data-key="cells"' in rendered
        assert 'data-key="image"' in rendered
        assert set(to_json(content)) == {"cells", "reads", "image"}  # type: ignore[arg-type]

    def test_requires_a_dataclass(self) -> None:
        with pytest.raises(TypeError, match="requires a dataclass"):
            html_template(int)

    def test_resources_are_extracted_through_fields(self) -> None:
        extras = Extras(HeroMetric("Reads", "1M"), RawImage(PNG))
        store = SharedResources()
        extract_resources(extras, store)
        assert extras.image.encoded_image == "_resources_000"


class TestComposite:
    """The runtime builder renders exactly like the decorator."""

    def test_builder_matches_decorator(self) -> None:
        cells, umis, valid = _metrics()
        composite = (
            Composite()
            .field("num_cells", cells, row="1")
            .field("umis_per_cell", umis, row="1")
            .field("valid_bc_read_frac", valid)
        )
        assert composite.template(None) == SIMPLE_TEMPLATE
        assert composite.to_json() == to_json(WebSummaryContent(cells, umis, valid))

    def test_composite_of_decorated_instance(self) -> None:
        composite = composite_of(WebSummaryContent(*_metrics()))
        assert [f.name for f in composite.fields] == [
            "num_cells",
            "umis_per_cell",
            "valid_bc_read_frac",
        ]
        assert [label for label, _ in composite.rows()] == ["1", "valid_bc_read_frac"]

    def test_duplicate_field_name(self) -> None:
        composite = Composite().field("a", 1)
        with pytest.raises(ValueError, match="Duplicate composite field 'a'"):
            composite.field("a", 2)

    def test_flattened_field_must_be_an_object(self) -> None:
        composite = Composite().field("values", [1, 2], flatten=True)
        with pytest.raises(TypeError, match="must serialize to an object"):
            composite.to_json()

    def test_titles_from_doc(self) -> None:
        composite = Composite().field("num_cells", 1, doc="Cells\n\nEstimated cells")
        assert composite.titles() == {
            "num_cells": TitleWithHelp(title="Cells", help="Estimated cells")
        }

    def test_nested_composite_shares_resources(self) -> None:
        inner = Composite().field("image", RawImage(PNG))
        outer = Composite().field("first", inner).field("second", RawImage(PNG))
        store = SharedResources()
        extract_resources(outer, store)
        assert to_json(outer) == {
            "first": {
                "image": {
                    "encoded_image": "_resources_000",
                    "zoom_pan": None,
                    "width": None,
                    "height": None,
                    "style": {},
                }
            },
            "second": {
                "encoded_image": "_resources_000",
                "zoom_pan": None,
                "width": None,
                "height": None,
                "style": {},
            },
        }
        assert len(store) == 1


class TestTitleFromDoc:
    def test_without_doc_uses_field_name(self) -> None:
        assert title_from_doc("num_cells", None) == TitleWithHelp(title="num_cells")

    def test_blank_lines_are_dropped(self) -> None:
        doc = "\n   Estimated cells  \n\n  First line of help\n\n  Second line\n"
        assert title_from_doc("x", doc) == TitleWithHelp(
            title="Estimated cells", help="First line of help\nSecond line"
        )

    def test_only_blank_lines(self) -> None:
        assert title_from_doc("x", "\n  \n") == TitleWithHelp(title="x")


class TestWithTitle:
    def test_template(self) -> None:
        block = WithTitle(TitleWithHelp("Cells"), HeroMetric("Number of cells", "3,487"))
        assert block.template("cells") == (
            '<div class="row">\n'
            '<div class="col">\n'
            '<div data-key="cells.title" data-component="HeaderWithHelp"></div>\n'
            "</div>\n"
            "</div>\n"
            '<div class="row">\n'
            '<div class="col">\n'
            '<div data-key="cells.inner" data-component="Metric"></div>\n'
            "</div>\n"
            "</div>\n"
        )

    def test_json(self) -> None:
        block = WithTitle(TitleWithHelp("Cells"), "text")
        assert to_json(block) == {
            "title": {"title": "Cells", "helpText": ""},
            "inner": "text",
        }


def test_group_rows_keeps_first_occurrence_order() -> None:
    items = [("b", 1), ("a", 2), ("b", 3)]
    assert group_rows(items, lambda item: item[0]) == [
        ("b", [("b", 1), ("b", 3)]),
        ("a", [("a", 2)]),
    ]
