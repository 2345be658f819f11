"""Structural extension points for json-unit.

Users can plug in custom adapters, matchers, number comparators and
difference listeners without inheriting from any base class: any object with
conformant methods passes ``isinstance`` checks.

Example::

    from json_unit.protocols import NodeMatcher

    class Positive:
        def matches(self, value: object) -> bool:
            return value > 0

        def describe_mismatch(self, value: object) -> str:
            return f"<{value}> was less than <0>"

    assert isinstance(Positive(), NodeMatcher)  # True, structural conformance
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_unit.algorithm.config import Configuration
    from json_unit.result import Difference
    from json_unit.tree.nodes import Node


@runtime_checkable
class NodeFactory(Protocol):
    """Adapter that turns a source value into a ``Node``.

    ``convert`` must map every supported source value to a Node and must raise
    ``TypeError`` or ``ValueError`` for input it cannot represent.
    """

    def convert(self, source: Any) -> Node: ...


@runtime_checkable
class NodeMatcher(Protocol):
    """Named predicate usable through ``${json-unit.matches:NAME}``.

    ``matches`` receives the raw actual value (dict, list, str, Decimal, bool
    or None).  ``describe_mismatch`` is appended to the difference message when
    the value is rejected.  A matcher that also defines ``set_parameter`` gets
    the text following the placeholder before ``matches`` is called.
    """

    def matches(self, value: Any) -> bool: ...

    def describe_mismatch(self, value: Any) -> str: ...


@runtime_checkable
class NumberComparator(Protocol):
    """Decides whether two numbers are equal under an optional tolerance."""

    def compare(self, expected: Decimal, actual: Decimal, tolerance: Decimal | None) -> bool: ...


@runtime_checkable
class DifferenceListener(Protocol):
    """Receives every ``Difference`` record as soon as it is recorded."""

    def diff(self, difference: Difference, context: DifferenceContext) -> None: ...


class DifferenceContext:
    """What a ``DifferenceListener`` gets next to each record."""

    __slots__ = ("_actual", "_configuration", "_expected")

    def __init__(self, configuration: Configuration, expected: Node, actual: Node) -> None:
        self._configuration = configuration
        self._expected = expected
        self._actual = actual

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def expected_source(self) -> Any:
        """Expected document as plain Python values."""
        return self._expected.to_python()

    @property
    def actual_source(self) -> Any:
        """Actual document as plain Python values."""
        return self._actual.to_python()
