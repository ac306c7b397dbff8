"""Integration tests for the websummary pytest plugin.

These tests verify that the assert_data_keys_resolve fixture is
auto-discovered via the pytest11 entry point and behaves correctly.

NOTE: These tests require websummary to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixture.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

from websummary import DynGrid, HeroMetric, MaxCols, render, to_json
from websummary.integrations._pytest_plugin import data_keys


def test_fixture_returns_resolved_values(assert_data_keys_resolve: Any) -> None:
    """Every key in a rendered grid resolves; the fixture returns the values."""
    grid = DynGrid(MaxCols(2)).push(HeroMetric("Number of cells", "3,487"))
    resolved = assert_data_keys_resolve(render(grid, "grid"), {"grid": to_json(grid)})
    assert resolved == {
        "grid.grid_data[0]": {
            "name": "Number of cells",
            "metric": "3,487",
            "threshold": None,
        }
    }


def test_fixture_accepts_unserialized_documents(assert_data_keys_resolve: Any) -> None:
    """The document may be any object ``to_json`` accepts."""
    metric = HeroMetric("Number of cells", "3,487")
    assert_data_keys_resolve(render(metric, "cells"), {"cells": metric})


def test_fixture_fails_on_unresolved_key(assert_data_keys_resolve: Any) -> None:
    """A key that is missing from the document raises AssertionError."""
    grid = DynGrid(MaxCols(2)).push(HeroMetric("Number of cells", "3,487"))
    with pytest.raises(AssertionError, match=r"data-key 'grid.grid_data\[0\]'"):
        assert_data_keys_resolve(render(grid, "grid"), {"other": to_json(grid)})


def test_fixture_fails_on_out_of_range_index(assert_data_keys_resolve: Any) -> None:
    """An index past the end of the array raises AssertionError."""
    html = '<div data-key="items[3]" data-component="Metric"></div>'
    with pytest.raises(AssertionError, match="does not resolve"):
        assert_data_keys_resolve(html, {"items": [1, 2]})


def test_fixture_fails_without_keys(assert_data_keys_resolve: Any) -> None:
    """A fragment with no data keys is almost certainly a test mistake."""
    with pytest.raises(AssertionError, match="No data-key attributes"):
        assert_data_keys_resolve("<p>static</p>", {})


def test_data_keys_in_document_order() -> None:
    html = '<div data-key="b"></div><div data-key="a[0].c"></div>'
    assert data_keys(html) == ["b", "a[0].c"]


def test_plugin_fixture_in_subprocess(tmp_path: Path) -> None:
    """The fixture is usable from a test file that has no conftest."""
    test_file = tmp_path / "test_keys.py"
    test_file.write_text(
        "from websummary import HeroMetric, render\n"
        "\n"
        "def test_keys(assert_data_keys_resolve):\n"
        "    metric = HeroMetric('cells', '1')\n"
        "    assert_data_keys_resolve(render(metric, 'm'), {'m': metric})\n"
    )
    result = subprocess.run(
        [sys.executable, "-m", "pytest", str(test_file), "-q", "-p", "no:cacheprovider"],
        capture_output=True,
        text=True,
        cwd=str(tmp_path),
    )
    assert result.returncode == 0, result.stdout + result.stderr
