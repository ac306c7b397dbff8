"""The top-level summary document.

``SinglePageHtml`` owns the content tree, the optional nav bar, the alerts
and the document's ``SharedResources``.  Its JSON is the payload the client
reads; its ``template`` is the HTML that goes into the page shell::

    page = SinglePageHtml(content, nav_bar=WsNavBar("Pipeline", "S1", "Sample"))
    page.finalize()                 # move images into page.resources
    page.template(None)             # summary HTML
    page.to_json()                  # {"sample": ..., **content, "alarms": ..., "resources": ...}

The content must serialize to a JSON object: it is flattened into the top
level so that content keys are root-relative.  The page keeps a deep copy of
the content, so the resource pass never rewrites the caller's tree and the
same content can back any number of documents.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path
from typing import Any, TextIO

from websummary.components.metrics import WsNavBar
from websummary.generate_html import TemplateInfo, WebSummaryBuildFiles, generate_html_summary
from websummary.render import render
from websummary.resources import SharedResources, extract_resources
from websummary.serialize import JsonValue, to_json

__all__ = ["Alert", "AlertLevel", "SinglePageConfig", "SinglePageHtml"]

logger = logging.getLogger(__name__)

RESERVED_KEYS = frozenset({"sample", "alarms", "resources"})


class AlertLevel(StrEnum):
    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"


@dataclass(frozen=True, slots=True)
class Alert:
    """A banner shown at the top of the page."""

    level: AlertLevel
    title: str
    formatted_value: str
    message: str


@dataclass(frozen=True, slots=True)
class SinglePageConfig:
    """Page layout options.

    Attributes:
        div_class: CSS class of the div around the content; ``container``
            keeps a fixed maximum width, ``container-fluid`` spans the page.
    """

    div_class: str = "container"

    def __post_init__(self) -> None:
        if not self.div_class:
            msg = "div_class must not be empty"
            raise ValueError(msg)

    def full_width(self) -> SinglePageConfig:
        return replace(self, div_class="container-fluid")


class SinglePageHtml:
    """A complete summary document."""

    def __init__(
        self,
        content: Any,
        nav_bar: WsNavBar | None = None,
        alerts: Iterable[Alert] = (),
        config: SinglePageConfig | None = None,
    ) -> None:
        self.content = copy.deepcopy(content)
        self.nav_bar = nav_bar
        self.alerts: list[Alert] = list(alerts)
        self.config = config if config is not None else SinglePageConfig()
        self._resources = SharedResources()
        self._finalized = False

    @classmethod
    def from_content(cls, content: Any) -> SinglePageHtml:
        return cls(content)

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def with_nav_bar(self, nav_bar: WsNavBar) -> SinglePageHtml:
        self.nav_bar = nav_bar
        return self

    def with_alerts(self, alerts: Iterable[Alert]) -> SinglePageHtml:
        self.alerts = list(alerts)
        return self

    def full_width(self) -> SinglePageHtml:
        self.config = self.config.full_width()
        return self

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    @property
    def resources(self) -> SharedResources:
        return self._resources

    @property
    def finalized(self) -> bool:
        return self._finalized

    def finalize(self) -> SinglePageHtml:
        """Run the resource extraction pass over the content, exactly once."""
        if not self._finalized:
            extract_resources(self.content, self._resources)
            self._finalized = True
            logger.debug("Finalized page with %d shared resources", len(self._resources))
        return self

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def template(self, data_key: str | None = None) -> str:
        nav = (
            '<div class="navbar-wrapper"></div>\n<div class="namescription-wrapper"></div>'
            if self.nav_bar is not None
            else ""
        )
        return (
            f"{nav}\n"
            '<div class="alert-wrapper"></div>\n'
            f'<div class="{self.config.div_class}">{render(self.content, data_key)}</div>\n'
        )

    def to_json(self) -> JsonValue:
        """The document JSON; finalizes the page first.

        Raises:
            TypeError: If the content does not serialize to an object.
            ValueError: If the content uses a reserved top-level key.
        """
        self.finalize()
        content = to_json(self.content)
        if not isinstance(content, dict):
            msg = f"Page content must serialize to an object, got {type(content).__name__}"
            raise TypeError(msg)
        clashes = sorted(RESERVED_KEYS & content.keys())
        if clashes:
            msg = f"Page content uses reserved keys: {', '.join(clashes)}"
            raise ValueError(msg)
        return {
            "sample": to_json(self.nav_bar),
            **content,
            "alarms": {"alarms": [to_json(alert) for alert in self.alerts]},
            "resources": self._resources.to_json(),
        }

    def to_json_str(self) -> str:
        """The document JSON on a single line."""
        return json.dumps(self.to_json(), separators=(",", ":"))

    def generate_html(
        self,
        writer: TextIO,
        build_files: WebSummaryBuildFiles,
        template_info: TemplateInfo | None = None,
    ) -> None:
        """Write the all-in-one page to ``writer``."""
        json_data = self.to_json_str()
        generate_html_summary(
            json_data,
            self.template(None),
            template_info if template_info is not None else TemplateInfo.default(),
            writer,
            build_files,
        )

    def generate_html_file(
        self,
        path: str | Path,
        build_files: WebSummaryBuildFiles,
        template_info: TemplateInfo | None = None,
    ) -> Path:
        path = Path(path)
        with path.open("w", encoding="utf-8") as writer:
            self.generate_html(writer, build_files, template_info)
        logger.debug("Wrote summary to %s", path)
        return path
