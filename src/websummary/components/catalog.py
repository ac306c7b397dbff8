"""Component catalog: which client-side component hydrates which payload.

Every leaf payload class is registered exactly once with the name of the
React component that renders it::

    @react_component("Metric")
    @dataclass
    class HeroMetric(ReactComponent):
        ...

A registered leaf renders as an empty tagged div that the client fills in::

    <div data-key="num_cells" data-component="Metric"></div>

Adding a new leaf type to the system means adding one registration.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import ClassVar, TypeVar

from websummary.errors import MissingDataKeyError

__all__ = ["ReactComponent", "component_catalog", "component_name", "react_component"]

_CATALOG: dict[type, str] = {}

T = TypeVar("T", bound=type)


def react_component(name: str) -> Callable[[T], T]:
    """Class decorator registering ``cls`` under the component ``name``.

    Raises:
        ValueError: If the class is already registered.
    """

    def register(cls: T) -> T:
        if cls in _CATALOG:
            msg = f"{cls.__name__} is already registered as {_CATALOG[cls]!r}"
            raise ValueError(msg)
        _CATALOG[cls] = name
        cls.__component_name__ = name  # type: ignore[attr-defined]
        return cls

    return register


def component_catalog() -> Mapping[type, str]:
    """Read-only view of every registered leaf class and its component name."""
    return MappingProxyType(_CATALOG)


def component_name(cls: type) -> str:
    """Return the component name registered for ``cls``.

    Raises:
        KeyError: If ``cls`` was never registered.
    """
    try:
        return _CATALOG[cls]
    except KeyError:
        msg = f"{cls.__name__} is not a registered component"
        raise KeyError(msg) from None


class ReactComponent:
    """Mixin giving a registered payload class its leaf ``template``."""

    __slots__ = ()
    __component_name__: ClassVar[str]

    def template(self, data_key: str | None) -> str:
        if not data_key:
            msg = (
                f"data-key is required to render {type(self).__name__} "
                f"as a {component_name(type(self))} component"
            )
            raise MissingDataKeyError(msg)
        return (
            f'<div data-key="{data_key}" '
            f'data-component="{component_name(type(self))}"></div>'
        )
