"""Public API functions for websummary.

This module provides the two user-facing entry points: ``render_summary``,
which turns a content tree into HTML plus JSON, and ``write_summary``, which
writes the all-in-one HTML page.  Each call builds a fresh ``SinglePageHtml``
and therefore a fresh ``SharedResources`` store; nothing is shared between
calls.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from websummary.components.metrics import WsNavBar
from websummary.generate_html import TemplateInfo, WebSummaryBuildFiles
from websummary.page import Alert, SinglePageConfig, SinglePageHtml
from websummary.result import RenderedSummary

__all__ = ["build_page", "render_summary", "write_summary"]


def build_page(
    content: Any,
    nav_bar: WsNavBar | None = None,
    alerts: Iterable[Alert] = (),
    full_width: bool = False,
) -> SinglePageHtml:
    """Wrap a content tree in a finalized ``SinglePageHtml``.

    Args:
        content:    The summary content; must serialize to a JSON object.
        nav_bar:    Optional navigation bar and page header.
        alerts:     Banners shown above the content.
        full_width: Span the whole page instead of a fixed-width container.

    Returns:
        The page, with its resource extraction pass already run.
    """
    config = SinglePageConfig()
    if full_width:
        config = config.full_width()
    page = SinglePageHtml(content, nav_bar=nav_bar, alerts=alerts, config=config)
    return page.finalize()


def render_summary(
    content: Any,
    nav_bar: WsNavBar | None = None,
    alerts: Iterable[Alert] = (),
    full_width: bool = False,
) -> RenderedSummary:
    """Render a content tree into its summary HTML and document JSON.

    Args:
        content:    The summary content; must serialize to a JSON object.
        nav_bar:    Optional navigation bar and page header.
        alerts:     Banners shown above the content.
        full_width: Span the whole page instead of a fixed-width container.

    Returns:
        A ``RenderedSummary`` whose ``data`` every ``data-key`` in ``html``
        resolves into.

    Raises:
        MissingDataKeyError: If a component ends up without a data key.
        TypeError: If part of the tree cannot be rendered or serialized.
    """
    page = build_page(content, nav_bar=nav_bar, alerts=alerts, full_width=full_width)
    data = page.to_json()
    return RenderedSummary(html=page.template(None), data=data)  # type: ignore[arg-type]


def write_summary(
    content: Any,
    path: str | Path,
    build_files: WebSummaryBuildFiles,
    nav_bar: WsNavBar | None = None,
    alerts: Iterable[Alert] = (),
    full_width: bool = False,
    template_info: TemplateInfo | None = None,
) -> Path:
    """Write the all-in-one HTML page for a content tree.

    Args:
        content:       The summary content; must serialize to a JSON object.
        path:          Destination file.
        build_files:   Client bundle, stylesheet and page shell.
        nav_bar:       Optional navigation bar and page header.
        alerts:        Banners shown above the content.
        full_width:    Span the whole page instead of a fixed-width container.
        template_info: Where the page shell and includes come from.  Defaults
                       to the shell in ``build_files``.

    Returns:
        The path written.

    Raises:
        TemplateIncludeError: If an include directive cannot be expanded.
        OSError: If the file cannot be written.
    """
    page = build_page(content, nav_bar=nav_bar, alerts=alerts, full_width=full_width)
    return page.generate_html_file(path, build_files, template_info)
