"""Exception hierarchy for websummary.

Only genuine failures are exceptions.  Field validation problems in forms are
values (``Invalid``), never raised.
"""

from __future__ import annotations

__all__ = [
    "MissingDataKeyError",
    "ScrapeError",
    "TemplateIncludeError",
    "WebSummaryError",
]


class WebSummaryError(Exception):
    """Base class for all websummary errors."""


class MissingDataKeyError(WebSummaryError):
    """A hydratable component was rendered without a data key.

    This signals a mistake in how the tree was assembled, not bad data: a
    component without a key can never be located by the client, so callers
    should let it propagate.
    """


class TemplateIncludeError(WebSummaryError):
    """An ``[[ include ... ]]`` directive in the page shell could not be expanded."""


class ScrapeError(WebSummaryError):
    """The JSON payload could not be located in a generated HTML page."""
