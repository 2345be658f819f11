"""Integration tests for the json-unit pytest plugin.

These tests verify that the assert_json_equals fixture is auto-discovered
via the pytest11 entry point and behaves correctly.

NOTE: These tests require json-unit to be installed (even in editable mode
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

from json_unit import Configuration, JsonAssertError, Option


def test_fixture_passes_similar_docs(assert_json_equals: Any) -> None:
    """Key order and JSON text vs Python values do not matter."""
    assert_json_equals('{"b": [1, 2], "a": "x"}', {"a": "x", "b": [1, 2]})


def test_fixture_fails_with_report(assert_json_equals: Any) -> None:
    with pytest.raises(AssertionError, match=r'Different value found in node "id"'):
        assert_json_equals({"id": 1}, {"id": 2})


def test_fixture_raises_json_assert_error(assert_json_equals: Any) -> None:
    with pytest.raises(JsonAssertError) as exc_info:
        assert_json_equals({"a": 1}, {"b": 1})
    assert len(exc_info.value.differences) == 2


def test_fixture_custom_configuration(assert_json_equals: Any) -> None:
    assert_json_equals(
        [1, 2, 3],
        [3, 2, 1],
        configuration=Configuration().with_options(Option.IGNORING_ARRAY_ORDER),
    )


def test_fixture_path(assert_json_equals: Any) -> None:
    config = Configuration().with_options(Option.IGNORING_EXTRA_FIELDS)
    assert_json_equals({"name": "x"}, {"data": {"name": "x", "id": 1}}, config, path="data")


def test_fixture_placeholders(assert_json_equals: Any) -> None:
    assert_json_equals(
        '{"id": "${json-unit.any-number}", "created": "${json-unit.ignore}"}',
        {"id": 5, "created": "2024-01-01"},
    )


def test_fixture_returns_callable(assert_json_equals: Any) -> None:
    """The fixture should return a callable, not None or a direct assertion result."""
    assert callable(assert_json_equals)


def test_plugin_discovery() -> None:
    """Verify assert_json_equals appears in pytest --fixtures output."""
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "--fixtures", "-q"],
        capture_output=True,
        text=True,
        cwd=str(Path(__file__).resolve().parents[2]),
    )
    assert "assert_json_equals" in result.stdout, (
        f"assert_json_equals not found in pytest --fixtures output.\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )
