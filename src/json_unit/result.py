"""Difference records and the report they render into.

Two kinds of output are produced by a comparison:

- ``Difference`` records: one per located mismatch, tagged MISSING, EXTRA or
  DIFFERENT, for programmatic inspection.
- ``JsonDifference`` report lines: the human-readable messages.  A single
  aggregate line (for example a keys line) may stand for several records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from json_unit.tree.nodes import Node

__all__ = ["Difference", "DifferenceType", "Differences", "JsonDifference"]

REPORT_PREAMBLE = "JSON documents are different:\n"


class DifferenceType(StrEnum):
    MISSING = auto()
    EXTRA = auto()
    DIFFERENT = auto()


@dataclass(frozen=True, slots=True)
class Difference:
    """One located mismatch between expected and actual.

    Attributes:
        kind: MISSING (only in expected), EXTRA (only in actual) or DIFFERENT.
        expected_path: Full path in the expected document; None for EXTRA.
        actual_path: Full path in the actual document; None for MISSING.
        expected: Raw expected value (dict, list, str, Decimal, bool, None);
            None for EXTRA.
        actual: Raw actual value; None for MISSING.
        message: The report line this record belongs to.
    """

    kind: DifferenceType
    expected_path: str | None
    actual_path: str | None
    expected: Any
    actual: Any
    message: str = ""


@dataclass(frozen=True, slots=True)
class JsonDifference:
    """One report line.

    Attributes:
        message: Fully formatted message.
        expected: Expected node the line was raised on.
        actual: Actual node the line was raised on.
        structural: True for key, length, missing-path and matcher-not-found
            lines; False for value and type lines.
    """

    message: str
    expected: Node
    actual: Node
    structural: bool = False

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class Differences:
    """Append-only collector of report lines and records."""

    lines: list[JsonDifference] = field(default_factory=list)
    records: list[Difference] = field(default_factory=list)

    def add_line(self, line: JsonDifference) -> None:
        self.lines.append(line)

    def add_record(self, record: Difference) -> None:
        self.records.append(record)

    def is_empty(self, structural_only: bool = False) -> bool:
        if structural_only:
            return not any(line.structural for line in self.lines)
        return not self.lines

    def format(self, heading: str | None = None, structural_only: bool = False) -> str:
        """Render the report.

        Returns an empty string when nothing is reported.  Otherwise the
        ``"JSON documents are different:"`` preamble is followed by one line
        per difference, optionally preceded by ``"[heading] "``.
        """
        lines = [line for line in self.lines if line.structural or not structural_only]
        if not lines:
            return ""
        parts = [f"[{heading}] " if heading else "", REPORT_PREAMBLE]
        parts.extend(f"{line.message}\n" for line in lines)
        return "".join(parts)
