"""Structural protocols for the websummary rendering engine.

Any object with a conformant ``template`` method can be placed in a summary
tree; no inheritance from a websummary base class is required.

Example::

    from websummary.protocols import HtmlTemplate

    class Banner:
        def template(self, data_key: str | None) -> str:
            return "<h1>Run complete</h1>"

    assert isinstance(Banner(), HtmlTemplate)  # structural conformance, no base class
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from websummary.resources import SharedResources


@runtime_checkable
class HtmlTemplate(Protocol):
    """Structural protocol for anything that renders into an HTML fragment.

    ``template`` receives the data key under which the object's own JSON is
    reachable (``None`` at the document root) and returns the HTML fragment.
    Every data key embedded in the fragment must address the JSON that
    ``websummary.serialize.to_json`` produces for the same object.
    """

    def template(self, data_key: str | None) -> str: ...


@runtime_checkable
class SharedResourceUser(Protocol):
    """Objects that move large payloads into a ``SharedResources`` side table.

    ``add_to_shared_resource`` replaces the object's own blob fields with
    references returned by ``store.insert``.  It is called once, by the
    extraction pass, before the document is serialized.
    """

    def add_to_shared_resource(self, store: SharedResources) -> None: ...
