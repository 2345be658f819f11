"""Maximum bipartite matching over a boolean compatibility matrix.

Wraps scipy's ``linear_sum_assignment``: compatible cells cost 0 and
incompatible cells cost 1, so a minimum-cost assignment is a matching with
the largest possible number of compatible pairs.  Pairs that landed on an
incompatible cell are filtered out afterwards.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]


def maximum_matching(compatible: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Pair rows with columns so that as many compatible cells as possible are used.

    Args:
        compatible: 2-D boolean matrix of shape ``(m, n)``.  ``True`` at
            ``[i, j]`` means row ``i`` may be paired with column ``j``.

    Returns:
        Tuple ``(row_ind, col_ind)`` of 1-D integer arrays.  Every returned
        pair is compatible; rows and columns appear at most once.  Among
        matchings of maximum size, the one scipy finds first is returned.
    """
    compatible = np.asarray(compatible, dtype=bool)
    if compatible.size == 0 or not compatible.any():
        return np.array([], dtype=int), np.array([], dtype=int)

    cost = np.where(compatible, 0.0, 1.0)
    row_ind, col_ind = linear_sum_assignment(cost)

    keep = compatible[row_ind, col_ind]
    return row_ind[keep], col_ind[keep]
