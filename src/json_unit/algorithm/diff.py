"""Diff: recursive structural comparison of two Node trees.

Walks the expected and actual trees in lock-step and records every mismatch
as a report line (``JsonDifference``) plus one or more located records
(``Difference``).  Nothing is raised for content mismatches; callers decide
what to do with ``similar()`` / ``differences()``.

Dispatch per pair of nodes:

1. Actual paths matching an ignored pattern are skipped with their subtree.
2. Expected strings holding a placeholder are handled first (ignore, any-type,
   named matcher).
3. Differing node types are a value difference; there is no coercion.
4. Otherwise OBJECT, ARRAY, STRING, NUMBER and BOOLEAN have their own rules.
   Arrays compared with ``IGNORING_ARRAY_ORDER`` go through
   ``ComparisonMatrix``.

The comparison runs at most once per Diff instance; results are cached.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import TYPE_CHECKING, Any

from json_unit.algorithm.config import Configuration, Option
from json_unit.algorithm.context import Context
from json_unit.algorithm.matrix import ComparisonMatrix, build_compatibility
from json_unit.algorithm.placeholders import (
    PlaceholderKind,
    compile_pattern,
    parse_placeholder,
)
from json_unit.protocols import DifferenceContext
from json_unit.result import Difference, Differences, DifferenceType, JsonDifference
from json_unit.tree.nodes import Node, NodeType
from json_unit.tree.normalizer import to_compact_json
from json_unit.tree.path import Path

if TYPE_CHECKING:
    from json_unit.algorithm.placeholders import Placeholder

diff_logger = logging.getLogger("json_unit.difference.diff")
values_logger = logging.getLogger("json_unit.difference.values")

__all__ = ["Diff"]

ALTERNATE_IGNORE_PLACEHOLDER = "#{json-unit.ignore}"

DIFFERENT_VALUE = 'Different value found in node "{}", expected: <{}> but was: <{}>.'
DIFFERENT_VALUE_WITH_TOLERANCE = (
    'Different value found in node "{}", expected: <{}> but was: <{}>, '
    "difference is {}, tolerance is {}"
)
DIFFERENT_KEYS = 'Different keys found in node "{}", expected: <{}> but was: <{}>. {} {}'
DIFFERENT_LENGTH = 'Array "{}" has different length, expected: <{}> but was: <{}>.'
INVALID_LENGTH = 'Array "{}" has invalid length, expected: <at least {}> but was: <{}>.'
DIFFERENT_CONTENT = 'Array "{}" has different content, expected: <{}> but was: <{}>. Missing values {}'
DIFFERENT_ELEMENT = (
    "Different value found when comparing expected array element {} to actual element {}."
)
PATTERN_MISMATCH = 'Different value found in node "{}". Pattern "{}" did not match "{}".'
INVALID_PATTERN = 'Invalid pattern "{}" in node "{}": {}.'
MATCHER_NOT_FOUND = 'Matcher "{}" not found.'
MATCHER_MISMATCH = 'Matcher "{}" does not match value {} in node "{}". {}'
MISSING_NODE = 'Missing node in path "{}".'


def _quote(node: Node) -> str:
    return to_compact_json(node)


def _value_list(nodes: list[Node]) -> str:
    return "[" + ", ".join(_quote(node) for node in nodes) + "]"


def _key_list(keys: set[str]) -> str:
    return "[" + ", ".join(sorted(keys)) + "]"


class Diff:
    """Compares an expected and an actual Node tree.

    Example::

        from json_unit.algorithm import Configuration, Diff, Option
        from json_unit.tree import NodeBuilder

        builder = NodeBuilder()
        diff = Diff(builder.build({"test": 1}), builder.build({"test": 2}))
        diff.similar()      # False
        diff.differences()
        # 'JSON documents are different:\\n'
        # 'Different value found in node "test", expected: <1> but was: <2>.\\n'
    """

    def __init__(
        self,
        expected: Node,
        actual: Node,
        start_path: Path | str = "",
        configuration: Configuration | None = None,
        heading: str | None = None,
    ) -> None:
        """Prepare a comparison; nothing is compared until a result is asked for.

        Args:
            expected: Expected document, already positioned at the sub-document
                to compare.
            actual: Actual document root; ``start_path`` is resolved against it.
            start_path: Path of the node in ``actual`` to compare, also used as
                the root of every reported path.
            configuration: Options, tolerance, matchers and overrides.
                Defaults to ``Configuration()``.
            heading: Optional text rendered as ``[heading]`` before the report.
        """
        self._expected_root = expected
        self._actual_root = actual
        self._start_path = start_path if isinstance(start_path, Path) else Path.create(start_path)
        self._configuration = configuration if configuration is not None else Configuration()
        self._heading = heading

        root = self._start_path.full_path
        self._structure_only = self._configuration.has_option(root, Option.COMPARING_ONLY_STRUCTURE)
        self._fail_fast = self._configuration.has_option(root, Option.FAIL_FAST)
        self._ignored_paths = self._configuration.ignored_paths_matcher
        self._differences = Differences()
        self._compared = False
        self._silent = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def similar(self) -> bool:
        self._compare()
        return self._differences.is_empty(structural_only=self._structure_only)

    def differences(self) -> str:
        """Report string; empty when the documents are similar."""
        self._compare()
        return self._differences.format(self._heading, structural_only=self._structure_only)

    @property
    def difference_list(self) -> list[Difference]:
        self._compare()
        return list(self._differences.records)

    @property
    def report_lines(self) -> list[JsonDifference]:
        self._compare()
        return [
            line
            for line in self._differences.lines
            if line.structural or not self._structure_only
        ]

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def expected(self) -> Node:
        return self._expected_root

    @property
    def actual(self) -> Node:
        return self._actual_root

    @property
    def start_path(self) -> Path:
        return self._start_path

    def __str__(self) -> str:
        return self.differences()

    # ------------------------------------------------------------------
    # Top level
    # ------------------------------------------------------------------

    def _compare(self) -> None:
        if self._compared:
            return
        self._compared = True

        actual = self._start_path.resolve(self._actual_root)
        context = Context(
            self._expected_root,
            actual,
            self._start_path,
            self._start_path,
            self._configuration,
        )
        if actual.is_missing():
            self._structure_difference(context, MISSING_NODE.format(self._start_path.full_path))
            self._record(DifferenceType.MISSING, context)
        else:
            self._compare_nodes(context)

        if values_logger.isEnabledFor(logging.DEBUG):
            values_logger.debug(
                "Comparing expected:\n%s\n------------\nwith actual:\n%s\n",
                to_compact_json(self._expected_root),
                to_compact_json(actual),
            )
        if diff_logger.isEnabledFor(logging.DEBUG):
            report = self._differences.format(self._heading, structural_only=self._structure_only)
            if report:
                diff_logger.debug("%s", report)
            else:
                diff_logger.debug("JSON documents are the same")

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def _should_stop(self) -> bool:
        return self._fail_fast and not self._differences.is_empty(structural_only=self._structure_only)

    def _structure_difference(self, context: Context, message: str) -> None:
        self._differences.add_line(JsonDifference(message, context.expected, context.actual, structural=True))

    def _value_difference(self, context: Context, message: str) -> None:
        self._differences.add_line(JsonDifference(message, context.expected, context.actual))

    def _record(self, kind: DifferenceType, context: Context) -> None:
        message = self._differences.lines[-1].message if self._differences.lines else ""
        record = Difference(
            kind=kind,
            expected_path=None if kind is DifferenceType.EXTRA else context.expected_path.full_path,
            actual_path=None if kind is DifferenceType.MISSING else context.actual_path.full_path,
            expected=None if kind is DifferenceType.EXTRA else context.expected.to_python(),
            actual=None if kind is DifferenceType.MISSING else context.actual.to_python(),
            message=message,
        )
        self._differences.add_record(record)

        listener = self._configuration.difference_listener
        if listener is not None and not self._silent:
            listener.diff(
                record,
                DifferenceContext(self._configuration, self._expected_root, self._actual_root),
            )

    def _different_value(self, context: Context, message: str) -> None:
        self._value_difference(context, message)
        self._record(DifferenceType.DIFFERENT, context)

    # ------------------------------------------------------------------
    # Node dispatch
    # ------------------------------------------------------------------

    def _compare_nodes(self, context: Context) -> None:
        if self._should_stop():
            return
        if self._ignored_paths.matches(context.actual_path.full_path):
            return

        expected, actual = context.expected, context.actual
        if expected.node_type is NodeType.STRING and self._apply_placeholder(context):
            return

        if expected.node_type is not actual.node_type:
            self._different_value(
                context,
                DIFFERENT_VALUE.format(context.actual_path, _quote(expected), _quote(actual)),
            )
            return

        node_type = expected.node_type
        if node_type is NodeType.OBJECT:
            self._compare_objects(context)
        elif node_type is NodeType.ARRAY:
            self._compare_arrays(context)
        elif node_type is NodeType.STRING:
            self._compare_strings(context)
        elif node_type is NodeType.NUMBER:
            self._compare_numbers(context)
        elif node_type is NodeType.BOOLEAN:
            self._compare_booleans(context)
        # NULL is always equal to NULL

    # ------------------------------------------------------------------
    # Placeholders
    # ------------------------------------------------------------------

    def _apply_placeholder(self, context: Context) -> bool:
        """Handle a placeholder in the expected string; True when fully handled."""
        text = context.expected.value
        if text in (self._configuration.ignore_placeholder, ALTERNATE_IGNORE_PLACEHOLDER):
            return True

        placeholder = parse_placeholder(text)
        if placeholder is None:
            return False

        kind = placeholder.kind
        if kind is PlaceholderKind.IGNORE_ELEMENT:
            return True
        if kind is PlaceholderKind.ANY:
            requested = placeholder.node_type
            if requested is not None and context.actual.node_type is not requested:
                self._different_value(
                    context,
                    DIFFERENT_VALUE.format(
                        context.actual_path,
                        requested.description,
                        _quote(context.actual),
                    ),
                )
            return True
        if kind is PlaceholderKind.MATCHER:
            self._apply_matcher(context, placeholder)
            return True
        # REGEX is applied by the string comparison; a replaced ignore
        # placeholder is compared as a plain string.
        return False

    def _apply_matcher(self, context: Context, placeholder: Placeholder) -> None:
        matcher: Any = self._configuration.matchers.get(placeholder.name)
        if matcher is None:
            self._structure_difference(context, MATCHER_NOT_FOUND.format(placeholder.name))
            self._record(DifferenceType.DIFFERENT, context)
            return

        if hasattr(matcher, "set_parameter"):
            # registered matchers are shared, parametrize a private copy
            matcher = copy.copy(matcher)
            matcher.set_parameter(placeholder.argument)

        value = context.actual.to_python()
        if not matcher.matches(value):
            self._different_value(
                context,
                MATCHER_MISMATCH.format(
                    placeholder.name,
                    _quote(context.actual),
                    context.actual_path,
                    matcher.describe_mismatch(value),
                ),
            )

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _compare_objects(self, context: Context) -> None:
        configuration = context.configuration
        path = context.actual_path
        expected, actual = context.expected, context.actual

        expected_keys = {name for name, _ in expected.fields()}
        actual_keys = {name for name, _ in actual.fields()}

        if expected_keys != actual_keys:
            missing = expected_keys - actual_keys
            extra = actual_keys - expected_keys

            extra = {
                key
                for key in extra
                if actual.field(key).node_type is not NodeType.NULL
                or not configuration.has_option(
                    path.to_field(key).full_path, Option.TREATING_NULL_AS_ABSENT
                )
            }
            if configuration.has_option(path.full_path, Option.IGNORING_EXTRA_FIELDS):
                extra = set()

            missing = {key for key in missing if not self._is_ignored(path.to_field(key))}
            extra = {key for key in extra if not self._is_ignored(path.to_field(key))}
            missing = {key for key in missing if not self._is_ignore_element(expected.field(key))}

            if missing or extra:
                self._structure_difference(
                    context,
                    DIFFERENT_KEYS.format(
                        path,
                        _key_list(expected_keys),
                        _key_list(actual_keys),
                        self._keys_message("Missing", missing, path),
                        self._keys_message("Extra", extra, path),
                    ),
                )
                for key in sorted(missing):
                    self._record(DifferenceType.MISSING, context.into_field(key))
                for key in sorted(extra):
                    self._record(DifferenceType.EXTRA, context.into_field(key))

        for key in sorted(expected_keys & actual_keys):
            self._compare_nodes(context.into_field(key))

    def _is_ignored(self, path: Path) -> bool:
        return self._ignored_paths.matches(path.full_path)

    @staticmethod
    def _is_ignore_element(node: Node) -> bool:
        if node.node_type is not NodeType.STRING:
            return False
        placeholder = parse_placeholder(node.value)
        return placeholder is not None and placeholder.kind is PlaceholderKind.IGNORE_ELEMENT

    @staticmethod
    def _keys_message(label: str, keys: set[str], path: Path) -> str:
        if not keys:
            return ""
        return f"{label}: " + ",".join(f'"{path.to_field(key)}"' for key in sorted(keys))

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _compare_arrays(self, context: Context) -> None:
        configuration = context.configuration
        path = context.actual_path
        expected_count = context.expected.size()
        actual_count = context.actual.size()
        ignoring_extra_items = configuration.has_option(path.full_path, Option.IGNORING_EXTRA_ARRAY_ITEMS)

        if expected_count != actual_count:
            if not ignoring_extra_items:
                self._structure_difference(
                    context.length(),
                    DIFFERENT_LENGTH.format(path, expected_count, actual_count),
                )
            elif expected_count > actual_count:
                self._structure_difference(
                    context.length(),
                    INVALID_LENGTH.format(path, expected_count, actual_count),
                )

        if configuration.has_option(path.full_path, Option.IGNORING_ARRAY_ORDER):
            self._compare_unordered(context, ignoring_extra_items)
        else:
            self._compare_ordered(context, ignoring_extra_items)

    def _compare_ordered(self, context: Context, ignoring_extra_items: bool) -> None:
        expected_count = context.expected.size()
        actual_count = context.actual.size()

        for index in range(min(expected_count, actual_count)):
            self._compare_nodes(context.into_element(index))

        missing = list(range(actual_count, expected_count))
        extra = [] if ignoring_extra_items else list(range(expected_count, actual_count))
        self._report_content(context, missing, extra, ignoring_extra_items)

    def _compare_unordered(self, context: Context, ignoring_extra_items: bool) -> None:
        expected_count = context.expected.size()
        actual_count = context.actual.size()

        compatible = build_compatibility(
            expected_count,
            actual_count,
            lambda expected_index, actual_index: self._is_similar(
                context.into_element(expected_index, actual_index)
            ),
        )
        matrix = ComparisonMatrix(compatible, context.configuration.array_branch_limit).compare()
        missing = matrix.missing
        extra = [] if ignoring_extra_items else matrix.extra

        if expected_count == actual_count and len(missing) == 1 and len(extra) == 1:
            if self._should_stop():
                return
            pair = context.into_element(missing[0], extra[0])
            self._value_difference(
                context,
                DIFFERENT_ELEMENT.format(pair.expected_path, pair.actual_path),
            )
            self._compare_nodes(pair)
            return

        self._report_content(context, missing, extra, ignoring_extra_items)

    def _report_content(
        self,
        context: Context,
        missing: list[int],
        extra: list[int],
        ignoring_extra_items: bool,
    ) -> None:
        if not missing and not extra:
            return
        if self._should_stop():
            return
        expected_elements = context.expected.elements()
        actual_elements = context.actual.elements()

        message = DIFFERENT_CONTENT.format(
            context.actual_path,
            _quote(context.expected),
            _quote(context.actual),
            _value_list([expected_elements[index] for index in missing]),
        )
        if not ignoring_extra_items:
            message += f", extra values {_value_list([actual_elements[index] for index in extra])}"
        self._value_difference(context, message)

        for index in missing:
            self._record(DifferenceType.MISSING, context.missing_element(index))
        for index in extra:
            self._record(DifferenceType.EXTRA, context.extra_element(index))

    def _is_similar(self, context: Context) -> bool:
        """Side-effect free comparison used to build the compatibility matrix."""
        trial = Diff(
            context.expected,
            context.actual,
            context.actual_path,
            context.configuration,
        )
        trial._silent = True
        trial._fail_fast = True
        trial._compared = True
        trial._compare_nodes(context)
        return trial._differences.is_empty(structural_only=trial._structure_only)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _compare_strings(self, context: Context) -> None:
        path = context.actual_path
        if context.configuration.has_option(path.full_path, Option.IGNORING_VALUES):
            return

        expected_text = context.expected.value
        actual_text = context.actual.value

        placeholder = parse_placeholder(expected_text)
        if placeholder is not None and placeholder.kind is PlaceholderKind.REGEX:
            try:
                pattern = compile_pattern(placeholder.argument)
            except re.error as exc:
                self._different_value(context, INVALID_PATTERN.format(placeholder.argument, path, exc))
                return
            if pattern.fullmatch(actual_text) is None:
                self._different_value(
                    context,
                    PATTERN_MISMATCH.format(path, placeholder.argument, actual_text),
                )
            return

        if expected_text != actual_text:
            self._different_value(
                context,
                DIFFERENT_VALUE.format(path, _quote(context.expected), _quote(context.actual)),
            )

    def _compare_numbers(self, context: Context) -> None:
        configuration = context.configuration
        path = context.actual_path
        if configuration.has_option(path.full_path, Option.IGNORING_VALUES):
            return

        expected_value = context.expected.as_decimal()
        actual_value = context.actual.as_decimal()
        tolerance = configuration.tolerance
        if configuration.number_comparator.compare(expected_value, actual_value, tolerance):
            return

        if tolerance is not None:
            message = DIFFERENT_VALUE_WITH_TOLERANCE.format(
                path,
                expected_value,
                actual_value,
                abs(actual_value - expected_value),
                tolerance,
            )
        else:
            message = DIFFERENT_VALUE.format(path, expected_value, actual_value)
        self._different_value(context, message)

    def _compare_booleans(self, context: Context) -> None:
        path = context.actual_path
        if context.configuration.has_option(path.full_path, Option.IGNORING_VALUES):
            return
        if context.expected.value != context.actual.value:
            self._different_value(
                context,
                DIFFERENT_VALUE.format(path, _quote(context.expected), _quote(context.actual)),
            )
