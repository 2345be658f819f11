"""pytest plugin for json-unit.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_unit.algorithm.config import Configuration
from json_unit.api import JsonAssertError
from json_unit.comparator import JsonComparator


@pytest.fixture(scope="session")
def assert_json_equals() -> Any:
    """Fixture that returns a callable JSON equality asserter.

    The fixture is session-scoped: the returned callable keeps one
    ``JsonComparator`` for the whole session, so expected documents given as
    JSON text are parsed once and then served from its cache.

    Usage in tests::

        def test_response(assert_json_equals):
            assert_json_equals('{"id": "${json-unit.any-number}"}', {"id": 7})

        def test_mismatch(assert_json_equals):
            with pytest.raises(AssertionError, match=r"Different value found"):
                assert_json_equals({"id": 1}, {"id": 2})

    Returns:
        A callable ``_assert(expected, actual, configuration=None, path="") -> None``
        that raises ``AssertionError`` when the documents differ.
    """
    comparator = JsonComparator()

    def _assert(
        expected: Any,
        actual: Any,
        configuration: Configuration | None = None,
        path: str = "",
    ) -> None:
        """Assert that ``actual`` matches ``expected``.

        Args:
            expected:      Expected document (Python value or JSON text).
            actual:        Actual document produced by the code under test.
            configuration: Optional Configuration with options and matchers.
            path:          Node of ``actual`` to compare.

        Raises:
            AssertionError: A ``JsonAssertError`` whose message is the full
                difference report.
        """
        diff = comparator.compare(expected, actual, path, configuration)
        if not diff.similar():
            raise JsonAssertError.from_diff(diff)

    return _assert
