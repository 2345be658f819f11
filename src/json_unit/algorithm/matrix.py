"""ComparisonMatrix: order-independent matching of two arrays.

Equality between elements is not transitive once placeholders are involved
(``${json-unit.any-number}`` matches both ``1`` and ``2``), so arrays cannot
be sorted and compared.  Instead every (actual, expected) pair is checked once
and the resulting boolean compatibility matrix is resolved here:

1. Interchangeable groups are matched up front: when ``k`` unmatched actual
   rows share exactly the same ``k`` candidate columns, they are paired in
   order.  When the group and its candidates differ in size, the group still
   claims the candidate columns no other row can take.
2. Each remaining actual row is processed in index order.  A row with one
   candidate claims it; a row with no candidates is extra; a row with several
   candidates branches on a private copy of the state and keeps the first
   branch that leaves nothing missing and nothing extra.  When no branch
   succeeds the first candidate is committed.
3. Expected columns never claimed are missing.

Branch exploration is bounded by a shared budget.  Once the budget is spent
the rest of the assignment is completed with a maximum bipartite matching.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from json_unit.algorithm.matcher import maximum_matching

logger = logging.getLogger(__name__)

__all__ = ["ComparisonMatrix", "build_compatibility"]


def build_compatibility(
    expected_count: int,
    actual_count: int,
    is_compatible: Callable[[int, int], bool],
) -> np.ndarray:
    """Check every pair and return a ``(actual_count, expected_count)`` bool matrix.

    ``is_compatible(expected_index, actual_index)`` must be side-effect free.
    """
    compatible = np.zeros((actual_count, expected_count), dtype=bool)
    for actual_index in range(actual_count):
        for expected_index in range(expected_count):
            compatible[actual_index, expected_index] = is_compatible(expected_index, actual_index)
    return compatible


class _BranchBudget:
    __slots__ = ("remaining",)

    def __init__(self, limit: int | None) -> None:
        self.remaining = limit

    @property
    def exhausted(self) -> bool:
        return self.remaining is not None and self.remaining <= 0

    def spend(self) -> None:
        if self.remaining is not None:
            self.remaining -= 1


class ComparisonMatrix:
    """Resolves a compatibility matrix into matches, missing and extra indices.

    Example::

        compatible = np.array([[True, False], [True, True]])  # rows: actual
        matrix = ComparisonMatrix(compatible).compare()
        matrix.matches   # {0: 0, 1: 1}  expected index -> actual index
        matrix.missing   # []
        matrix.extra     # []
    """

    def __init__(self, compatible: np.ndarray, branch_limit: int | None = None) -> None:
        """Initialise from a ``(actual_count, expected_count)`` boolean matrix.

        Args:
            compatible: ``compatible[a, e]`` is True when actual element ``a``
                is similar to expected element ``e``.
            branch_limit: Maximum number of branches explored in total, or
                None for unbounded backtracking.
        """
        self._candidates = np.array(compatible, dtype=bool, copy=True)
        actual_count, expected_count = self._candidates.shape
        self._matches: dict[int, int] = {}
        self._matched_actual = np.zeros(actual_count, dtype=bool)
        self._extra: list[int] = []
        self._compare_from = 0
        self._budget = _BranchBudget(branch_limit)
        self._expected_count = expected_count

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    @property
    def matches(self) -> dict[int, int]:
        """Expected index -> actual index."""
        return dict(self._matches)

    @property
    def missing(self) -> list[int]:
        return [index for index in range(self._expected_count) if index not in self._matches]

    @property
    def extra(self) -> list[int]:
        return sorted(self._extra)

    @property
    def is_matching(self) -> bool:
        return not self._extra and len(self._matches) == self._expected_count

    # ------------------------------------------------------------------
    # Algorithm
    # ------------------------------------------------------------------

    def compare(self) -> ComparisonMatrix:
        """Run the assignment and return the matrix holding the result.

        The returned object may be a branch copy rather than ``self``.
        """
        self._match_interchangeable()
        actual_count = self._candidates.shape[0]

        for actual_index in range(self._compare_from, actual_count):
            if self._matched_actual[actual_index] or actual_index in self._extra:
                continue
            candidates = np.flatnonzero(self._candidates[actual_index])

            if len(candidates) == 1:
                self._record(int(candidates[0]), actual_index)
            elif len(candidates) > 1:
                if self._budget.exhausted:
                    return self._complete_with_maximum_matching(actual_index)
                for candidate in candidates:
                    self._budget.spend()
                    branch = self._copy(actual_index + 1)
                    branch._record(int(candidate), actual_index)
                    result = branch.compare()
                    if result.is_matching:
                        return result
                    if self._budget.exhausted:
                        break
                self._record(int(candidates[0]), actual_index)
            else:
                self._extra.append(actual_index)
        return self

    def _match_interchangeable(self) -> None:
        actual_count = self._candidates.shape[0]
        for actual_index in range(actual_count):
            if self._matched_actual[actual_index]:
                continue
            row = self._candidates[actual_index].copy()
            columns = np.flatnonzero(row)
            if len(columns) == 0:
                continue
            group = [
                other
                for other in range(actual_count)
                if not self._matched_actual[other] and np.array_equal(self._candidates[other], row)
            ]
            if len(group) == len(columns):
                for column, other in zip(columns, group, strict=True):
                    self._record(int(column), other)
            elif len(group) > 1 and len(columns) > 1:
                # columns no row outside the group can take
                outside = [
                    other
                    for other in range(actual_count)
                    if not self._matched_actual[other] and other not in group
                ]
                used_outside = self._candidates[outside].any(axis=0)
                exclusive = [int(column) for column in columns if not used_outside[column]]
                for column, other in zip(exclusive, group, strict=False):
                    self._record(column, other)

    def _record(self, expected_index: int, actual_index: int) -> None:
        self._matches[expected_index] = actual_index
        self._candidates[:, expected_index] = False
        self._candidates[actual_index, :] = False
        self._matched_actual[actual_index] = True

    def _copy(self, compare_from: int) -> ComparisonMatrix:
        branch = ComparisonMatrix.__new__(ComparisonMatrix)
        branch._candidates = self._candidates.copy()
        branch._matches = dict(self._matches)
        branch._matched_actual = self._matched_actual.copy()
        branch._extra = list(self._extra)
        branch._compare_from = compare_from
        branch._budget = self._budget
        branch._expected_count = self._expected_count
        return branch

    def _complete_with_maximum_matching(self, compare_from: int) -> ComparisonMatrix:
        rows = [
            index
            for index in range(compare_from, self._candidates.shape[0])
            if not self._matched_actual[index] and index not in self._extra
        ]
        columns = [index for index in range(self._expected_count) if index not in self._matches]
        logger.debug(
            "Array branch limit reached, matching %d remaining elements by maximum matching",
            len(rows),
        )
        if not rows or not columns:
            self._extra.extend(rows)
            return self
        sub_matrix = self._candidates[np.ix_(rows, columns)]
        row_ind, col_ind = maximum_matching(sub_matrix)
        for row, column in zip(row_ind, col_ind, strict=True):
            self._record(columns[int(column)], rows[int(row)])
        self._extra.extend(index for index in rows if not self._matched_actual[index])
        return self
