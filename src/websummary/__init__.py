"""websummary - render structured report data into a self-hydrating HTML summary."""

from __future__ import annotations

from websummary.api import build_page, render_summary, write_summary
from websummary.components import (
    BlendedImage,
    GenericTable,
    HeroMetric,
    PlotlyChart,
    RawImage,
    TableMetric,
    Threshold,
    TitleWithHelp,
    WsNavBar,
    react_component,
)
from websummary.datakey import Field, Index, join, join_all, resolve
from websummary.errors import (
    MissingDataKeyError,
    ScrapeError,
    TemplateIncludeError,
    WebSummaryError,
)
from websummary.generate_html import TemplateInfo, WebSummaryBuildFiles, generate_html_summary
from websummary.layout import (
    ButtonSelector,
    Composite,
    DropdownSelector,
    DynGrid,
    Grid,
    MaxCols,
    MaxColsNonResponsive,
    Tabs,
    WithTitle,
    html_field,
    html_template,
)
from websummary.page import Alert, AlertLevel, SinglePageConfig, SinglePageHtml
from websummary.protocols import HtmlTemplate, SharedResourceUser
from websummary.render import Card, Column, DivWrapper, HtmlFragment, Row, render
from websummary.resources import RESOURCE_PREFIX, SharedResources, extract_resources
from websummary.result import RenderedSummary
from websummary.scrape_json import scrape_json_from_html
from websummary.serialize import json_field, to_json

__version__: str = "0.1.0"
__all__: list[str] = [
    "RESOURCE_PREFIX",
    "Alert",
    "AlertLevel",
    "BlendedImage",
    "ButtonSelector",
    "Card",
    "Column",
    "Composite",
    "DivWrapper",
    "DropdownSelector",
    "DynGrid",
    "Field",
    "GenericTable",
    "Grid",
    "HeroMetric",
    "HtmlFragment",
    "HtmlTemplate",
    "Index",
    "MaxCols",
    "MaxColsNonResponsive",
    "MissingDataKeyError",
    "PlotlyChart",
    "RawImage",
    "RenderedSummary",
    "Row",
    "ScrapeError",
    "SharedResourceUser",
    "SharedResources",
    "SinglePageConfig",
    "SinglePageHtml",
    "TableMetric",
    "Tabs",
    "TemplateIncludeError",
    "TemplateInfo",
    "Threshold",
    "TitleWithHelp",
    "WebSummaryBuildFiles",
    "WebSummaryError",
    "WithTitle",
    "WsNavBar",
    "build_page",
    "extract_resources",
    "generate_html_summary",
    "html_field",
    "html_template",
    "join",
    "join_all",
    "json_field",
    "react_component",
    "render",
    "render_summary",
    "resolve",
    "scrape_json_from_html",
    "to_json",
    "write_summary",
]
