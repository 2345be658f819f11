"""Configuration, Option and PathOption for the comparison engine.

``Configuration`` is a frozen (immutable) dataclass.  Every ``with_*`` /
``when*`` method returns a new instance, so one configuration can be shared
between independent comparisons.

Option resolution at a path (``has_option``) starts from the global option
set and then applies each path-scoped override whose patterns match, in
registration order; the last matching override wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import StrEnum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING

from json_unit.algorithm.paths import PathMatcher, create_path_matcher

if TYPE_CHECKING:
    from json_unit.protocols import DifferenceListener, NodeMatcher, NumberComparator

DEFAULT_IGNORE_PLACEHOLDER = "${json-unit.ignore}"
DEFAULT_ARRAY_BRANCH_LIMIT = 10_000


class Option(StrEnum):
    """Comparison options.

    - TREATING_NULL_AS_ABSENT:   extra actual fields holding null are ignored.
    - IGNORING_ARRAY_ORDER:      arrays are matched element-by-compatibility.
    - IGNORING_EXTRA_FIELDS:     actual objects may carry additional fields.
    - IGNORING_EXTRA_ARRAY_ITEMS: actual arrays may be longer than expected.
    - IGNORING_VALUES:           only node types are compared for scalars.
    - COMPARING_ONLY_STRUCTURE:  value differences do not make documents differ.
    - FAIL_FAST:                 stop at the first recorded difference.
    - REPORTING_DIFFERENCE_AS_NORMALIZED_STRING: assertion errors carry
      normalized dumps of both documents.
    """

    TREATING_NULL_AS_ABSENT = auto()
    IGNORING_ARRAY_ORDER = auto()
    IGNORING_EXTRA_FIELDS = auto()
    IGNORING_EXTRA_ARRAY_ITEMS = auto()
    IGNORING_VALUES = auto()
    COMPARING_ONLY_STRUCTURE = auto()
    FAIL_FAST = auto()
    REPORTING_DIFFERENCE_AS_NORMALIZED_STRING = auto()


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        # str() keeps 0.01 as Decimal("0.01") instead of its binary expansion
        return Decimal(str(value))
    msg = f"Unsupported tolerance type: {type(value)!r}"
    raise TypeError(msg)


class DefaultNumberComparator:
    """Exact comparison by value and written scale, or ``|e - a| <= tolerance``."""

    def compare(self, expected: Decimal, actual: Decimal, tolerance: Decimal | None) -> bool:
        if tolerance is not None:
            return abs(actual - expected) <= tolerance
        return expected == actual and expected.as_tuple().exponent == actual.as_tuple().exponent


@dataclass(frozen=True, slots=True)
class PathOption:
    """Path-scoped override: set ``options`` to ``included`` under ``paths``."""

    paths: tuple[str, ...]
    options: frozenset[Option]
    included: bool = True

    @property
    def matcher(self) -> PathMatcher:
        return create_path_matcher(self.paths)

    def apply(self, path: str, option: Option, current: bool) -> bool:
        if option in self.options and self.matcher.matches(path):
            return self.included
        return current


@dataclass(frozen=True, slots=True)
class Configuration:
    """Immutable comparison configuration.

    Attributes:
        options: Globally active options.
        tolerance: Allowed absolute difference between numbers, or None for
            exact comparison.
        matchers: Registry of named matchers for ``${json-unit.matches:NAME}``.
        ignore_placeholder: Expected string that ignores the actual node.
            ``#{json-unit.ignore}`` is always accepted as well.
        paths_to_be_ignored: Patterns of actual paths excluded from comparison.
        path_options: Path-scoped overrides in registration order.
        number_comparator: Decides number equality; defaults to
            ``DefaultNumberComparator``.
        difference_listener: Called for every recorded Difference.
        array_branch_limit: Maximum number of branches explored when matching
            an unordered array before falling back to maximum matching.
            None means unbounded.
    """

    options: frozenset[Option] = frozenset()
    tolerance: Decimal | None = None
    # mapping proxies are unhashable, hashing uses the remaining fields
    matchers: Mapping[str, NodeMatcher] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    ignore_placeholder: str = DEFAULT_IGNORE_PLACEHOLDER
    paths_to_be_ignored: tuple[str, ...] = ()
    path_options: tuple[PathOption, ...] = ()
    number_comparator: NumberComparator = field(default_factory=DefaultNumberComparator)
    difference_listener: DifferenceListener | None = None
    array_branch_limit: int | None = DEFAULT_ARRAY_BRANCH_LIMIT

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", frozenset(self.options))
        if self.tolerance is not None:
            tolerance = _to_decimal(self.tolerance)
            if tolerance < 0:
                msg = f"tolerance must be >= 0, got {tolerance}"
                raise ValueError(msg)
            object.__setattr__(self, "tolerance", tolerance)
        if self.array_branch_limit is not None and self.array_branch_limit < 1:
            msg = f"array_branch_limit must be >= 1, got {self.array_branch_limit}"
            raise ValueError(msg)

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def with_options(self, *options: Option) -> Configuration:
        return replace(self, options=self.options | frozenset(options))

    def without_options(self, *options: Option) -> Configuration:
        return replace(self, options=self.options - frozenset(options))

    def with_tolerance(self, tolerance: Decimal | int | float | str | None) -> Configuration:
        return replace(self, tolerance=None if tolerance is None else _to_decimal(tolerance))

    def with_matcher(self, name: str, matcher: NodeMatcher) -> Configuration:
        if not name:
            msg = "matcher name must not be empty"
            raise ValueError(msg)
        return replace(self, matchers=MappingProxyType({**self.matchers, name: matcher}))

    def with_ignore_placeholder(self, placeholder: str) -> Configuration:
        return replace(self, ignore_placeholder=placeholder)

    def when_ignoring_paths(self, *paths: str) -> Configuration:
        return replace(self, paths_to_be_ignored=self.paths_to_be_ignored + paths)

    def when(self, paths: str | Iterable[str], *options: Option, included: bool = True) -> Configuration:
        """Register a path-scoped override.

        Example::

            config = (
                Configuration()
                .with_options(Option.IGNORING_VALUES)
                .when("items[*].price", Option.IGNORING_VALUES, included=False)
            )
        """
        path_tuple = (paths,) if isinstance(paths, str) else tuple(paths)
        override = PathOption(path_tuple, frozenset(options), included)
        return replace(self, path_options=(*self.path_options, override))

    def with_number_comparator(self, comparator: NumberComparator) -> Configuration:
        return replace(self, number_comparator=comparator)

    def with_difference_listener(self, listener: DifferenceListener | None) -> Configuration:
        return replace(self, difference_listener=listener)

    def with_array_branch_limit(self, limit: int | None) -> Configuration:
        return replace(self, array_branch_limit=limit)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_option(self, path: str, option: Option) -> bool:
        """Resolve ``option`` at the rendered ``path``."""
        result = option in self.options
        for path_option in self.path_options:
            result = path_option.apply(path, option, result)
        return result

    @property
    def ignored_paths_matcher(self) -> PathMatcher:
        return create_path_matcher(self.paths_to_be_ignored)
