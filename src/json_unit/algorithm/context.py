"""Context: the pair of nodes being compared and where each was read from.

Contexts are rebuilt, never mutated, at every recursion step.  The expected
and actual paths diverge when an unordered array pairs expected element ``i``
with actual element ``j``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from json_unit.tree.nodes import MISSING, Node, NodeType

if TYPE_CHECKING:
    from json_unit.algorithm.config import Configuration
    from json_unit.tree.path import Path


@dataclass(frozen=True, slots=True)
class Context:
    expected: Node
    actual: Node
    expected_path: Path
    actual_path: Path
    configuration: Configuration

    def into_field(self, name: str) -> Context:
        return Context(
            self.expected.field(name),
            self.actual.field(name),
            self.expected_path.to_field(name),
            self.actual_path.to_field(name),
            self.configuration,
        )

    def into_element(self, expected_index: int, actual_index: int | None = None) -> Context:
        """Pair expected element ``expected_index`` with actual ``actual_index``.

        ``actual_index`` defaults to ``expected_index`` (ordered comparison).
        """
        if actual_index is None:
            actual_index = expected_index
        return Context(
            self.expected.element(expected_index),
            self.actual.element(actual_index),
            self.expected_path.to_element(expected_index),
            self.actual_path.to_element(actual_index),
            self.configuration,
        )

    def missing_element(self, index: int) -> Context:
        return Context(
            self.expected.element(index),
            MISSING,
            self.expected_path.to_element(index),
            self.actual_path,
            self.configuration,
        )

    def extra_element(self, index: int) -> Context:
        return Context(
            MISSING,
            self.actual.element(index),
            self.expected_path,
            self.actual_path.to_element(index),
            self.configuration,
        )

    def length(self) -> Context:
        """Same paths, with both arrays replaced by their element counts."""
        return Context(
            Node(NodeType.NUMBER, Decimal(self.expected.size())),
            Node(NodeType.NUMBER, Decimal(self.actual.size())),
            self.expected_path,
            self.actual_path,
            self.configuration,
        )
