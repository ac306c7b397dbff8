"""Leaf payloads and the component catalog.

Every class here serializes to the JSON a client-side component reads and,
if it is registered with ``react_component``, renders as an empty tagged div
keyed by its data key.
"""

from __future__ import annotations

from websummary.components.catalog import (
    ReactComponent,
    component_catalog,
    component_name,
    react_component,
)
from websummary.components.images import (
    BlendedImage,
    BlendedImageSliderSize,
    BlendedImageZoomable,
    ImageProps,
    ImageZoomPan,
    MinMax,
    NumOrStr,
    RawImage,
    ZoomViewer,
    ZoomViewerSize,
)
from websummary.components.metrics import (
    GenericTable,
    HeroMetric,
    LinkedText,
    TableMetric,
    TableRow,
    TermDesc,
    Threshold,
    Title,
    TitleWithHelp,
    TitleWithTermDesc,
    WsNavBar,
)
from websummary.components.plots import (
    DEFAULT_PLOTLY_CONFIG,
    PlotlyChart,
    VegaLitePlot,
    VegaLiteRenderer,
)
from websummary.components.style import Style

__all__ = [
    "DEFAULT_PLOTLY_CONFIG",
    "BlendedImage",
    "BlendedImageSliderSize",
    "BlendedImageZoomable",
    "GenericTable",
    "HeroMetric",
    "ImageProps",
    "ImageZoomPan",
    "LinkedText",
    "MinMax",
    "NumOrStr",
    "PlotlyChart",
    "RawImage",
    "ReactComponent",
    "Style",
    "TableMetric",
    "TableRow",
    "TermDesc",
    "Threshold",
    "Title",
    "TitleWithHelp",
    "TitleWithTermDesc",
    "VegaLitePlot",
    "VegaLiteRenderer",
    "WsNavBar",
    "ZoomViewer",
    "ZoomViewerSize",
    "component_catalog",
    "component_name",
    "react_component",
]
