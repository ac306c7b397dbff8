"""CSS style declarations attached to charts and images."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from websummary.serialize import JsonValue

__all__ = ["Style"]


class Style:
    """An ordered set of CSS ``property: value`` declarations.

    Builder methods return ``self`` so declarations chain::

        Style().width("100%").pixelated()

    Serializes as a plain JSON object.
    """

    __slots__ = ("_declarations",)

    def __init__(
        self,
        declarations: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        self._declarations: dict[str, str] = dict(declarations or {})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Style):
            return NotImplemented
        return self._declarations == other._declarations

    def __repr__(self) -> str:
        return f"Style({self._declarations!r})"

    def __len__(self) -> int:
        return len(self._declarations)

    def is_empty(self) -> bool:
        return not self._declarations

    def set(self, key: str, value: str) -> Style:
        self._declarations[key] = value
        return self

    def width(self, value: str) -> Style:
        return self.set("width", value)

    def height(self, value: str) -> Style:
        return self.set("height", value)

    def pixelated(self) -> Style:
        return self.set("image-rendering", "pixelated")

    def centered(self) -> Style:
        return (
            self.set("display", "block")
            .set("margin-left", "auto")
            .set("margin-right", "auto")
        )

    def to_json(self) -> JsonValue:
        return dict(self._declarations)
