"""RenderedSummary: the two outputs of rendering a summary document.

This module provides the result type returned by ``render_summary()``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from websummary.datakey import resolve

__all__ = ["RenderedSummary"]


@dataclass(frozen=True, slots=True)
class RenderedSummary:
    """HTML fragment and document JSON produced from one summary tree.

    Attributes:
        html: The summary HTML, ready for the page shell's ``[[ summary.html ]]``.
        data: The document JSON; every ``data-key`` in ``html`` resolves into it.
    """

    html: str
    data: dict[str, Any]

    def data_json(self) -> str:
        """``data`` serialized on a single line, as embedded in the page."""
        return json.dumps(self.data, separators=(",", ":"))

    def lookup(self, data_key: str | None) -> Any:
        """Resolve a data key against ``data``.

        Raises:
            KeyError, IndexError, TypeError: As ``websummary.datakey.resolve``.
        """
        return resolve(self.data, data_key)
