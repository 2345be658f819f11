"""json-unit - structural comparison of JSON documents for tests."""

from __future__ import annotations

from json_unit.algorithm.config import Configuration, Option
from json_unit.algorithm.diff import Diff
from json_unit.api import (
    JsonAssertError,
    assert_json_equals,
    assert_json_not_equals,
    assert_json_part_equals,
    compare,
    is_similar,
)
from json_unit.comparator import JsonComparator
from json_unit.result import Difference, DifferenceType
from json_unit.tree.path import Path

__version__: str = "0.1.0"
__all__: list[str] = [
    "Configuration",
    "Diff",
    "Difference",
    "DifferenceType",
    "JsonAssertError",
    "JsonComparator",
    "Option",
    "Path",
    "assert_json_equals",
    "assert_json_not_equals",
    "assert_json_part_equals",
    "compare",
    "is_similar",
]
