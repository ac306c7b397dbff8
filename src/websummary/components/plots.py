"""Chart payloads: Plotly figures and Vega-Lite specs."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from websummary.components.catalog import ReactComponent, react_component
from websummary.components.style import Style
from websummary.serialize import json_field, to_json

__all__ = ["DEFAULT_PLOTLY_CONFIG", "PlotlyChart", "VegaLitePlot", "VegaLiteRenderer"]

DEFAULT_PLOTLY_CONFIG: dict[str, Any] = {
    "displayModeBar": True,
    "staticPlot": False,
    "dragmode": "zoom",
    "modeBarButtons": [["toImage"]],
}


@react_component("Plot")
@dataclass(slots=True)
class PlotlyChart(ReactComponent):
    """A Plotly figure: traces in ``data`` plus optional layout and config."""

    data: list[Any] = field(default_factory=list)
    config: Any = json_field(skip_if_none=True, default=None)
    layout: Any = json_field(skip_if_none=True, default=None)
    style: Style | None = json_field(skip_if_none=True, default=None)

    @classmethod
    def with_layout_and_data(cls, layout: Any, data: list[Any]) -> PlotlyChart:
        """Build a chart with the default config from any serializable layout/traces."""
        return cls(
            data=[to_json(trace) for trace in data],
            config=cls.default_config(),
            layout=to_json(layout),
        )

    @classmethod
    def from_json_str(cls, json_str: str) -> PlotlyChart:
        """Parse a serialized Plotly figure.

        Raises:
            ValueError: If ``json_str`` is not valid JSON or not an object.
        """
        raw = json.loads(json_str)
        if not isinstance(raw, dict):
            msg = f"Expected a JSON object for a Plotly chart, got {type(raw).__name__}"
            raise ValueError(msg)
        style = raw.get("style")
        return cls(
            data=list(raw.get("data", [])),
            config=raw.get("config"),
            layout=raw.get("layout"),
            style=Style(style) if style is not None else None,
        )

    @staticmethod
    def default_config() -> dict[str, Any]:
        return copy.deepcopy(DEFAULT_PLOTLY_CONFIG)

    def with_style(self, style: Style) -> PlotlyChart:
        self.style = style
        return self


class VegaLiteRenderer(StrEnum):
    CANVAS = auto()
    SVG = auto()


@react_component("VegaLitePlot")
@dataclass(slots=True)
class VegaLitePlot(ReactComponent):
    """A Vega-Lite specification with optional embed actions."""

    spec: Any
    actions: Any = None
    renderer: VegaLiteRenderer | None = None
