"""algorithm subpackage: public API for the comparison engine.

Provides the recursive comparator, its configuration and option set, and the
order-independent array matching used when array order is ignored.  Import
from this module (not from sub-modules directly) to stay on the stable public
interface.

Example::

    from json_unit.algorithm import Configuration, Diff, Option
    from json_unit.tree import NodeBuilder

    builder = NodeBuilder()
    config = Configuration().with_options(Option.IGNORING_ARRAY_ORDER)
    diff = Diff(builder.build([1, 2, 3]), builder.build([3, 1, 2]), configuration=config)
    diff.similar()  # True
"""

from __future__ import annotations

from json_unit.algorithm.config import Configuration, DefaultNumberComparator, Option, PathOption
from json_unit.algorithm.diff import Diff
from json_unit.algorithm.matrix import ComparisonMatrix

__all__ = [
    "ComparisonMatrix",
    "Configuration",
    "DefaultNumberComparator",
    "Diff",
    "Option",
    "PathOption",
]
