"""Tests for Configuration, Option, PathOption and DefaultNumberComparator.

Covers:
- Defaults and immutability (FrozenInstanceError on assignment)
- with_* builders return new instances and leave the original untouched
- Tolerance normalisation to Decimal and validation
- has_option: global options and path-scoped overrides, last override wins
- Option has exactly eight StrEnum members
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from json_unit.algorithm.config import (
    DEFAULT_ARRAY_BRANCH_LIMIT,
    DEFAULT_IGNORE_PLACEHOLDER,
    Configuration,
    DefaultNumberComparator,
    Option,
    PathOption,
)


class _Anything:
    def matches(self, value: object) -> bool:
        return True

    def describe_mismatch(self, value: object) -> str:
        return ""


# ---------------------------------------------------------------------------
# Option
# ---------------------------------------------------------------------------


class TestOption:
    def test_has_exactly_eight_members(self) -> None:
        assert len(list(Option)) == 8

    def test_values_are_lowercase_names(self) -> None:
        assert Option.IGNORING_ARRAY_ORDER == "ignoring_array_order"
        assert Option.FAIL_FAST == "fail_fast"


# ---------------------------------------------------------------------------
# Defaults and immutability
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_defaults(self) -> None:
        config = Configuration()
        assert config.options == frozenset()
        assert config.tolerance is None
        assert dict(config.matchers) == {}
        assert config.ignore_placeholder == DEFAULT_IGNORE_PLACEHOLDER == "${json-unit.ignore}"
        assert config.paths_to_be_ignored == ()
        assert config.path_options == ()
        assert isinstance(config.number_comparator, DefaultNumberComparator)
        assert config.difference_listener is None
        assert config.array_branch_limit == DEFAULT_ARRAY_BRANCH_LIMIT

    def test_frozen(self) -> None:
        config = Configuration()
        with pytest.raises(FrozenInstanceError):
            config.tolerance = Decimal(1)  # type: ignore[misc]

    def test_options_given_as_set_become_frozenset(self) -> None:
        config = Configuration(options={Option.FAIL_FAST})  # type: ignore[arg-type]
        assert config.options == frozenset({Option.FAIL_FAST})

    def test_hashable(self) -> None:
        config = Configuration().with_options(Option.FAIL_FAST).when("a", Option.IGNORING_VALUES)
        registry = {config: "fail fast"}
        assert registry[config] == "fail fast"
        assert isinstance(hash(Configuration()), int)

    def test_hashable_with_matchers(self) -> None:
        config = Configuration().with_matcher("positive", _Anything())
        assert hash(config) == hash(config)
        assert {config} == {config}


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


class TestBuilders:
    def test_with_options_returns_new_instance(self) -> None:
        base = Configuration()
        derived = base.with_options(Option.IGNORING_VALUES, Option.FAIL_FAST)
        assert base.options == frozenset()
        assert derived.options == {Option.IGNORING_VALUES, Option.FAIL_FAST}

    def test_without_options(self) -> None:
        config = Configuration().with_options(Option.FAIL_FAST).without_options(Option.FAIL_FAST)
        assert config.options == frozenset()

    def test_with_matcher_does_not_touch_original(self) -> None:
        base = Configuration()
        matcher = object()
        derived = base.with_matcher("m", matcher)  # type: ignore[arg-type]
        assert "m" not in base.matchers
        assert derived.matchers["m"] is matcher

    def test_empty_matcher_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="matcher name"):
            Configuration().with_matcher("", object())  # type: ignore[arg-type]

    def test_ignoring_paths_accumulate(self) -> None:
        config = Configuration().when_ignoring_paths("a").when_ignoring_paths("b", "c")
        assert config.paths_to_be_ignored == ("a", "b", "c")

    def test_when_registers_override(self) -> None:
        config = Configuration().when("a[*]", Option.IGNORING_VALUES, included=False)
        assert config.path_options == (
            PathOption(("a[*]",), frozenset({Option.IGNORING_VALUES}), included=False),
        )

    def test_when_accepts_several_paths(self) -> None:
        config = Configuration().when(["a", "b"], Option.IGNORING_VALUES)
        assert config.path_options[0].paths == ("a", "b")


# ---------------------------------------------------------------------------
# Tolerance
# ---------------------------------------------------------------------------


class TestTolerance:
    @pytest.mark.parametrize(
        ("given", "expected"),
        [
            (0.01, Decimal("0.01")),
            ("0.01", Decimal("0.01")),
            (1, Decimal(1)),
            (Decimal("0.5"), Decimal("0.5")),
        ],
    )
    def test_normalised_to_decimal(self, given: object, expected: Decimal) -> None:
        assert Configuration().with_tolerance(given).tolerance == expected  # type: ignore[arg-type]

    def test_constructor_normalises_too(self) -> None:
        assert Configuration(tolerance=0.1).tolerance == Decimal("0.1")  # type: ignore[arg-type]

    def test_none_clears_tolerance(self) -> None:
        assert Configuration().with_tolerance(1).with_tolerance(None).tolerance is None

    def test_negative_tolerance_rejected(self) -> None:
        with pytest.raises(ValueError, match="tolerance must be >= 0"):
            Configuration().with_tolerance(-1)

    def test_bool_tolerance_rejected(self) -> None:
        with pytest.raises(TypeError):
            Configuration().with_tolerance(True)

    def test_branch_limit_validated(self) -> None:
        with pytest.raises(ValueError, match="array_branch_limit"):
            Configuration().with_array_branch_limit(0)
        assert Configuration().with_array_branch_limit(None).array_branch_limit is None


# ---------------------------------------------------------------------------
# has_option
# ---------------------------------------------------------------------------


class TestHasOption:
    def test_global_option(self) -> None:
        config = Configuration().with_options(Option.IGNORING_VALUES)
        assert config.has_option("any.path", Option.IGNORING_VALUES)
        assert not config.has_option("any.path", Option.FAIL_FAST)

    def test_override_disables_on_path(self) -> None:
        config = (
            Configuration()
            .with_options(Option.IGNORING_VALUES)
            .when("items[*].price", Option.IGNORING_VALUES, included=False)
        )
        assert not config.has_option("items[0].price", Option.IGNORING_VALUES)
        assert not config.has_option("items[12].price", Option.IGNORING_VALUES)
        assert config.has_option("items[0].name", Option.IGNORING_VALUES)
        assert config.has_option("items", Option.IGNORING_VALUES)

    def test_override_enables_on_path(self) -> None:
        config = Configuration().when("a", Option.IGNORING_EXTRA_FIELDS)
        assert config.has_option("a", Option.IGNORING_EXTRA_FIELDS)
        assert not config.has_option("b", Option.IGNORING_EXTRA_FIELDS)

    def test_later_override_wins(self) -> None:
        config = (
            Configuration()
            .when("a", Option.IGNORING_VALUES, included=False)
            .when("a", Option.IGNORING_VALUES)
        )
        assert config.has_option("a", Option.IGNORING_VALUES)

        reversed_config = (
            Configuration()
            .when("a", Option.IGNORING_VALUES)
            .when("a", Option.IGNORING_VALUES, included=False)
        )
        assert not reversed_config.has_option("a", Option.IGNORING_VALUES)

    def test_override_for_other_option_is_ignored(self) -> None:
        config = Configuration().when("a", Option.FAIL_FAST)
        assert not config.has_option("a", Option.IGNORING_VALUES)


# ---------------------------------------------------------------------------
# DefaultNumberComparator
# ---------------------------------------------------------------------------


class TestDefaultNumberComparator:
    def test_equal_numbers(self) -> None:
        assert DefaultNumberComparator().compare(Decimal("1.5"), Decimal("1.5"), None)

    def test_scale_matters_without_tolerance(self) -> None:
        assert not DefaultNumberComparator().compare(Decimal("1"), Decimal("1.0"), None)

    def test_tolerance_is_inclusive(self) -> None:
        comparator = DefaultNumberComparator()
        assert comparator.compare(Decimal("1"), Decimal("1.01"), Decimal("0.01"))
        assert comparator.compare(Decimal("1"), Decimal("0.99"), Decimal("0.01"))
        assert not comparator.compare(Decimal("1"), Decimal("1.0100001"), Decimal("0.01"))

    def test_tolerance_ignores_scale(self) -> None:
        assert DefaultNumberComparator().compare(Decimal("1"), Decimal("1.0"), Decimal("0"))
