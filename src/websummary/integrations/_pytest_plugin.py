"""pytest plugin for websummary.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import re
from typing import Any

import pytest

from websummary.datakey import resolve
from websummary.serialize import to_json

DATA_KEY_RE = re.compile(r'data-key="(?P<key>[^"]*)"')


def data_keys(html: str) -> list[str]:
    """Every ``data-key`` attribute value in ``html``, in document order."""
    return [m.group("key") for m in DATA_KEY_RE.finditer(html)]


@pytest.fixture(scope="session")
def assert_data_keys_resolve() -> Any:
    """Fixture that returns a callable data-key resolution asserter.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_grid_keys(assert_data_keys_resolve):
            grid = DynGrid(MaxCols(2)).push(HeroMetric("cells", "3,487"))
            assert_data_keys_resolve(render(grid, "grid"), {"grid": to_json(grid)})

    Returns:
        A callable ``_assert(html, document) -> dict[str, Any]`` that raises
        ``AssertionError`` when a ``data-key`` in ``html`` does not resolve
        into ``document``, and otherwise returns each key's resolved value.
    """

    def _assert(html: str, document: Any) -> dict[str, Any]:
        """Assert that every data key in ``html`` resolves into ``document``.

        Args:
            html:     Rendered HTML fragment.
            document: The JSON document, or any object ``to_json`` accepts.

        Raises:
            AssertionError: On the first key that does not resolve, or when
                the fragment contains no data keys at all.
        """
        data = to_json(document)
        keys = data_keys(html)
        if not keys:
            raise AssertionError(f"No data-key attributes found in:\n{html}")
        resolved: dict[str, Any] = {}
        for key in keys:
            try:
                resolved[key] = resolve(data, key)
            except (KeyError, IndexError, TypeError, ValueError) as e:
                raise AssertionError(
                    f"data-key {key!r} does not resolve: {e}\n  document: {data}"
                ) from e
        return resolved

    return _assert
