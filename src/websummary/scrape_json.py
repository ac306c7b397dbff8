"""Read the JSON payload back out of a generated summary page."""

from __future__ import annotations

import json
from typing import Any, TextIO

from websummary.errors import ScrapeError

__all__ = ["DATA_PREFIX", "scrape_json_from_html", "scrape_json_str_from_html"]

DATA_PREFIX = "      const data = "


def scrape_json_str_from_html(source: str | TextIO) -> str:
    """Return the serialized JSON from the page's ``const data`` line.

    Raises:
        ScrapeError: If the page has no such line, or more than one.
    """
    text = source if isinstance(source, str) else source.read()
    found = [
        line.removeprefix(DATA_PREFIX)
        for line in text.splitlines()
        if line.startswith(DATA_PREFIX)
    ]
    if len(found) != 1:
        msg = f"Expected exactly one data line in the page, found {len(found)}"
        raise ScrapeError(msg)
    return found[0]


def scrape_json_from_html(source: str | TextIO) -> Any:
    """Return the page's JSON payload, parsed.

    Raises:
        ScrapeError: If the data line is missing, duplicated or not valid JSON.
    """
    raw = scrape_json_str_from_html(source)
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        msg = f"Data line is not valid JSON: {e}"
        raise ScrapeError(msg) from e
