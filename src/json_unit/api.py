"""Public API functions for json-unit.

This module provides the user-facing functions: compare, is_similar and the
assertion helpers.  Each call creates a fresh ``JsonComparator`` to guarantee
zero global state mutation between calls.

Assertion helpers raise ``JsonAssertError``, a plain ``AssertionError``
subclass, so they work under any test runner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from json_unit.algorithm.config import Configuration, Option
from json_unit.comparator import JsonComparator
from json_unit.tree.normalizer import to_normalized_json

if TYPE_CHECKING:
    from json_unit.algorithm.diff import Diff
    from json_unit.result import Difference

__all__ = [
    "JsonAssertError",
    "assert_json_equals",
    "assert_json_not_equals",
    "assert_json_part_equals",
    "compare",
    "is_similar",
]


class JsonAssertError(AssertionError):
    """Raised by the assertion helpers.

    Attributes:
        differences: Located difference records (empty for "is equal" failures).
        expected: Normalized dump of the expected document, set when
            ``REPORTING_DIFFERENCE_AS_NORMALIZED_STRING`` is active.
        actual: Normalized dump of the compared actual node, likewise.
    """

    def __init__(
        self,
        message: str,
        differences: list[Difference] | None = None,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        super().__init__(message)
        self.differences = differences if differences is not None else []
        self.expected = expected
        self.actual = actual

    @classmethod
    def from_diff(cls, diff: Diff) -> JsonAssertError:
        message = diff.differences()
        configuration = diff.configuration
        if Option.REPORTING_DIFFERENCE_AS_NORMALIZED_STRING not in configuration.options:
            return cls(message, diff.difference_list)

        expected = to_normalized_json(diff.expected)
        actual = to_normalized_json(diff.start_path.resolve(diff.actual))
        message = f"{message}Expected:\n{expected}\nActual:\n{actual}\n"
        return cls(message, diff.difference_list, expected, actual)


def compare(
    expected: Any,
    actual: Any,
    configuration: Configuration | None = None,
    path: str = "",
    heading: str | None = None,
) -> Diff:
    """Compare two JSON documents and return the ``Diff``.

    Args:
        expected: Expected document (Node, Python value or JSON text).
        actual: Actual document (Node, Python value or JSON text).
        configuration: Comparison options. Defaults to ``Configuration()``.
        path: Node of ``actual`` to compare; also prefixes reported paths.
        heading: Optional description rendered before the report.

    Returns:
        A ``Diff`` with ``similar()``, ``differences()`` and ``difference_list``.
    """
    comparator = JsonComparator(configuration=configuration)
    return comparator.compare(expected, actual, path, heading=heading)


def is_similar(
    expected: Any,
    actual: Any,
    configuration: Configuration | None = None,
    path: str = "",
) -> bool:
    """Return True if ``actual`` matches ``expected`` under ``configuration``."""
    return compare(expected, actual, configuration, path).similar()


def assert_json_equals(
    expected: Any,
    actual: Any,
    configuration: Configuration | None = None,
    *,
    path: str = "",
    heading: str | None = None,
) -> None:
    """Assert that two JSON documents are similar.

    Raises:
        JsonAssertError: With the full difference report as its message.
    """
    diff = compare(expected, actual, configuration, path, heading)
    if not diff.similar():
        raise JsonAssertError.from_diff(diff)


def assert_json_part_equals(
    expected: Any,
    full_json: Any,
    path: str,
    configuration: Configuration | None = None,
    *,
    heading: str | None = None,
) -> None:
    """Assert that the node at ``path`` inside ``full_json`` matches ``expected``."""
    assert_json_equals(expected, full_json, configuration, path=path, heading=heading)


def assert_json_not_equals(
    expected: Any,
    actual: Any,
    configuration: Configuration | None = None,
    *,
    path: str = "",
    heading: str | None = None,
) -> None:
    """Assert that two JSON documents are NOT similar.

    Raises:
        JsonAssertError: ``"JSON is equal."`` when the documents match.
    """
    diff = compare(expected, actual, configuration, path, heading)
    if diff.similar():
        prefix = f"[{heading}] " if heading else ""
        raise JsonAssertError(f"{prefix}JSON is equal.")
