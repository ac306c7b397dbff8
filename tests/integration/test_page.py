"""Tests for the top-level summary document."""

from __future__ import annotations

import io
import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from websummary import (
    Alert,
    AlertLevel,
    Composite,
    DynGrid,
    HeroMetric,
    MaxCols,
    RawImage,
    SinglePageConfig,
    SinglePageHtml,
    WebSummaryBuildFiles,
    WsNavBar,
)
from websummary.scrape_json import scrape_json_from_html

PNG = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAgAAAAIAQMAAAD+wSzI"

BUILD_FILES = WebSummaryBuildFiles(script_js="/* js */", styles_css="/* css */")


def _content() -> Composite:
    return (
        Composite()
        .field("num_cells", HeroMetric("Number of cells", "3,487"))
        .field("left", RawImage(PNG), row="images")
        .field("right", RawImage(PNG), row="images")
    )


class TestTemplate:
    def test_without_nav_bar(self) -> None:
        page = SinglePageHtml(Composite().field("n", HeroMetric("a", "1")))
        assert page.template(None) == (
            "\n"
            '<div class="alert-wrapper"></div>\n'
            '<div class="container"><div class="row">\n'
            '<div class="col">\n'
            '<div data-key="n" data-component="Metric"></div>\n'
            "</div>\n"
            "</div>\n"
            "</div>\n"
        )

    def test_nav_bar_wrappers(self) -> None:
        page = SinglePageHtml(Composite()).with_nav_bar(WsNavBar("p", "i", "d"))
        assert page.template(None).startswith(
            '<div class="navbar-wrapper"></div>\n<div class="namescription-wrapper"></div>\n'
        )

    def test_full_width(self) -> None:
        page = SinglePageHtml(Composite()).full_width()
        assert '<div class="container-fluid">' in page.template(None)
        assert page.config == SinglePageConfig("container-fluid")

    def test_empty_div_class(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            SinglePageConfig("")


class TestJson:
    def test_content_is_flattened_and_resources_shared(self) -> None:
        data = SinglePageHtml(_content()).to_json()
        assert list(data) == ["sample", "num_cells", "left", "right", "alarms", "resources"]  # type: ignore[arg-type]
        assert data["sample"] is None  # type: ignore[index]
        assert data["left"]["encoded_image"] == "_resources_000"  # type: ignore[index]
        assert data["right"]["encoded_image"] == "_resources_000"  # type: ignore[index]
        assert data["resources"] == {"000": PNG}  # type: ignore[index]
        assert data["alarms"] == {"alarms": []}  # type: ignore[index]

    def test_finalize_runs_once(self) -> None:
        page = SinglePageHtml(_content())
        assert not page.finalized
        page.finalize()
        page.finalize()
        assert page.finalized
        assert len(page.resources) == 1

    def test_alerts(self) -> None:
        alert = Alert(AlertLevel.ERROR, "Low mapping", "12%", "Check the reference")
        data = SinglePageHtml(Composite()).with_alerts([alert]).to_json()
        assert data["alarms"]["alarms"][0]["level"] == "ERROR"  # type: ignore[index]

    @pytest.mark.parametrize("key", ["sample", "alarms", "resources"])
    def test_reserved_keys(self, key: str) -> None:
        with pytest.raises(ValueError, match=f"reserved keys: {key}"):
            SinglePageHtml({key: 1}).to_json()

    def test_content_must_be_an_object(self) -> None:
        with pytest.raises(TypeError, match="got str"):
            SinglePageHtml("text").to_json()

    def test_json_str_is_compact(self) -> None:
        text = SinglePageHtml({"a": [1, 2]}).to_json_str()
        assert "\n" not in text
        assert " " not in text
        assert json.loads(text)["a"] == [1, 2]


class TestGenerateHtml:
    def test_round_trip_through_page(self) -> None:
        page = SinglePageHtml(_content())
        out = io.StringIO()
        page.generate_html(out, BUILD_FILES)
        html = out.getvalue()
        assert "/* js */" in html
        assert "/* css */" in html
        assert 'data-key="left"' in html
        assert scrape_json_from_html(html) == page.to_json()

    def test_generate_html_file(self, tmp_path: Path) -> None:
        path = SinglePageHtml(_content()).generate_html_file(tmp_path / "s.html", BUILD_FILES)
        assert path == tmp_path / "s.html"
        assert scrape_json_from_html(path.read_text())["resources"] == {"000": PNG}


def _references(value: Any) -> Iterator[str]:
    if isinstance(value, str) and value.startswith("_resources_"):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from _references(item)
    elif isinstance(value, list):
        for item in value:
            yield from _references(item)


def _assert_references_resolve(data: Any) -> None:
    references = list(_references({k: v for k, v in data.items() if k != "resources"}))
    assert references
    for reference in references:
        assert reference.removeprefix("_resources_") in data["resources"]


class TestIndependentDocuments:
    """Every document owns its resources; building one never touches another."""

    def test_same_content_rendered_twice(self) -> None:
        content = Composite().field("img", RawImage(PNG))
        first = SinglePageHtml(content).to_json()
        second = SinglePageHtml(content).to_json()
        _assert_references_resolve(first)
        _assert_references_resolve(second)
        assert second["resources"] == {"000": PNG}  # type: ignore[index]
        assert content.fields[0].node.encoded_image == PNG

    def test_image_shared_between_documents(self) -> None:
        image = RawImage(PNG)
        first = SinglePageHtml(Composite().field("img", image)).to_json()
        _assert_references_resolve(first)
        grid = DynGrid(MaxCols(2))
        grid.push(HeroMetric("Number of cells", "3,487"))
        grid.push(image)
        data = SinglePageHtml(Composite().field("grid", grid)).to_json()
        _assert_references_resolve(data)
        pushed = data["grid"]["grid_data"][1]  # type: ignore[index]
        assert pushed["encoded_image"] == "_resources_000"  # type: ignore[index]
        assert data["resources"] == {"000": PNG}  # type: ignore[index]

    def test_page_content_is_a_copy(self) -> None:
        content = _content()
        page = SinglePageHtml(content).finalize()
        assert page.content is not content
        assert content.fields[1].node.encoded_image == PNG
        assert page.content.fields[1].node.encoded_image == "_resources_000"
