"""Tests for the component catalog."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

import websummary.form  # noqa: F401  registers the form widgets
import websummary.layout  # noqa: F401  registers the selectors
from websummary.components import (
    BlendedImage,
    HeroMetric,
    RawImage,
    ReactComponent,
    component_catalog,
    component_name,
    react_component,
)
from websummary.errors import MissingDataKeyError


class TestCatalogContents:
    def test_known_names(self) -> None:
        assert component_name(HeroMetric) == "Metric"
        assert component_name(RawImage) == "RawImage"
        assert component_name(BlendedImage) == "ImageRegistViewer"

    def test_catalog_is_read_only(self) -> None:
        catalog = component_catalog()
        with pytest.raises(TypeError):
            catalog[object] = "Nope"  # type: ignore[index]

    def test_catalog_covers_all_leaves(self) -> None:
        names = set(component_catalog().values())
        expected = {
            "Metric",
            "HeaderWithHelp",
            "DynamicHelptext",
            "Table",
            "TableMetric",
            "Plot",
            "VegaLitePlot",
            "RawImage",
            "ImageRegistViewer",
            "BlenderViewerZoomable",
            "ZoomViewer",
            "DropdownSelector",
            "ButtonSelector",
            "InputFeedback",
            "InputElement",
            "SingleSelect",
            "MultiSelect",
            "TextArea",
            "Spreadsheet",
        }
        assert expected <= names

    def test_unregistered_class(self) -> None:
        with pytest.raises(KeyError, match="not a registered component"):
            component_name(int)


class TestRegistration:
    def test_new_leaf_needs_one_registration(self) -> None:
        @react_component("CustomGauge")
        @dataclass
        class Gauge(ReactComponent):
            value: float

        assert Gauge(0.5).template("gauge") == (
            '<div data-key="gauge" data-component="CustomGauge"></div>'
        )

    def test_double_registration_rejected(self) -> None:
        @react_component("Once")
        @dataclass
        class Once(ReactComponent):
            pass

        with pytest.raises(ValueError, match="already registered"):
            react_component("Twice")(Once)

    def test_missing_key_message_names_component(self) -> None:
        with pytest.raises(MissingDataKeyError, match="HeroMetric as a Metric"):
            HeroMetric("a", "b").template(None)
