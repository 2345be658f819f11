"""Unit tests for the public API functions: compare, is_similar and the assertions."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from json_unit import (
    Configuration,
    Diff,
    DifferenceType,
    JsonAssertError,
    Option,
    assert_json_equals,
    assert_json_not_equals,
    assert_json_part_equals,
    compare,
    is_similar,
)


class TestCompare:
    """Tests for the compare() function."""

    def test_returns_diff(self) -> None:
        diff = compare({"a": 1}, {"a": 1})
        assert isinstance(diff, Diff)
        assert diff.similar()
        assert diff.differences() == ""

    def test_report(self) -> None:
        diff = compare('{"test": 1}', '{"test": 2}')
        assert diff.differences() == (
            "JSON documents are different:\n"
            'Different value found in node "test", expected: <1> but was: <2>.\n'
        )

    def test_configuration_passthrough(self) -> None:
        config = Configuration().with_options(Option.IGNORING_ARRAY_ORDER)
        assert compare([1, 2], [2, 1], config).similar()

    def test_no_global_state_between_calls(self) -> None:
        compare({"a": 1}, {"a": 1, "b": 2}, Configuration().with_options(Option.IGNORING_EXTRA_FIELDS))
        assert not compare({"a": 1}, {"a": 1, "b": 2}).similar()


class TestIsSimilar:
    def test_similar(self) -> None:
        assert is_similar({"a": [1, 2]}, '{"a": [1, 2]}')

    def test_not_similar(self) -> None:
        assert not is_similar({"a": 1}, {"a": 1, "b": 2})

    def test_path(self) -> None:
        assert is_similar({"id": 1}, {"items": [{"id": 1}]}, path="items[0]")

    def test_invalid_json(self) -> None:
        with pytest.raises(ValueError):
            is_similar("{not json", {})

    def test_from_threads(self) -> None:
        def compare_many(seed: int) -> list[bool]:
            results = []
            for i in range(300):
                expected = {"name": f"${{json-unit.regex}}n{seed}-{i}", "items": [{"v": i}]}
                actual = {"name": f"n{seed}-{i}", "items": [{"v": i + 1}]}
                config = Configuration().when(f"items[*].v{seed}", Option.IGNORING_VALUES)
                config = config.when("items[*].v", Option.IGNORING_VALUES)
                results.append(is_similar(expected, actual, config))
            return results

        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(compare_many, range(8)))

        assert all(all(results) and len(results) == 300 for results in outcomes)


class TestAssertJsonEquals:
    def test_passes(self) -> None:
        assert_json_equals('{"id": "${json-unit.any-number}"}', {"id": 7})

    def test_raises_with_report(self) -> None:
        with pytest.raises(JsonAssertError) as exc_info:
            assert_json_equals({"a": 1}, {"a": 2})
        error = exc_info.value
        assert str(error) == (
            "JSON documents are different:\n"
            'Different value found in node "a", expected: <1> but was: <2>.\n'
        )
        assert [d.kind for d in error.differences] == [DifferenceType.DIFFERENT]
        assert error.expected is None
        assert error.actual is None

    def test_is_assertion_error(self) -> None:
        with pytest.raises(AssertionError):
            assert_json_equals([1], [2])

    def test_heading(self) -> None:
        with pytest.raises(JsonAssertError, match=r"^\[Response body\] JSON documents are different:"):
            assert_json_equals(1, 2, heading="Response body")

    def test_normalized_dumps(self) -> None:
        config = Configuration().with_options(Option.REPORTING_DIFFERENCE_AS_NORMALIZED_STRING)
        with pytest.raises(JsonAssertError) as exc_info:
            assert_json_equals({"b": 1, "a": [1]}, {"a": [2], "b": 1}, config)
        error = exc_info.value
        assert error.expected == '{\n  "a": [\n    1\n  ],\n  "b": 1\n}'
        assert error.actual == '{\n  "a": [\n    2\n  ],\n  "b": 1\n}'
        message = str(error)
        assert message.startswith("JSON documents are different:\n")
        assert message.endswith(f"Expected:\n{error.expected}\nActual:\n{error.actual}\n")


class TestAssertJsonPartEquals:
    def test_passes(self) -> None:
        assert_json_part_equals(2, {"a": {"b": 2}}, "a.b")

    def test_reports_full_path(self) -> None:
        with pytest.raises(JsonAssertError, match=r'node "a\.b", expected: <3> but was: <2>'):
            assert_json_part_equals(3, {"a": {"b": 2}}, "a.b")

    def test_missing_path(self) -> None:
        with pytest.raises(JsonAssertError, match=r'Missing node in path "a\.c"\.'):
            assert_json_part_equals(3, {"a": {"b": 2}}, "a.c")

    def test_normalized_actual_is_sub_document(self) -> None:
        config = Configuration().with_options(Option.REPORTING_DIFFERENCE_AS_NORMALIZED_STRING)
        with pytest.raises(JsonAssertError) as exc_info:
            assert_json_part_equals(3, {"a": {"b": 2}}, "a.b", config)
        assert exc_info.value.actual == "2"


class TestAssertJsonNotEquals:
    def test_passes_for_different(self) -> None:
        assert_json_not_equals({"a": 1}, {"a": 2})

    def test_raises_for_equal(self) -> None:
        with pytest.raises(JsonAssertError, match=r"^JSON is equal\.$") as exc_info:
            assert_json_not_equals({"a": 1}, {"a": 1})
        assert exc_info.value.differences == []

    def test_heading(self) -> None:
        with pytest.raises(JsonAssertError, match=r"^\[check\] JSON is equal\.$"):
            assert_json_not_equals(1, 1, heading="check")

    def test_respects_configuration(self) -> None:
        config = Configuration().with_options(Option.IGNORING_VALUES)
        with pytest.raises(JsonAssertError):
            assert_json_not_equals({"a": 1}, {"a": 2}, config)
