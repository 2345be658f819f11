"""Node tagged union and NodeType StrEnum for the comparison engine.

A ``Node`` is a read-only view over one value of a parsed JSON document.
Adapters (see ``json_unit.backends``) produce Nodes; the engine only reads
them.  Failed lookups never raise: they return the ``MISSING`` sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum, auto
from typing import Any


class NodeType(StrEnum):
    """Enumeration of the node variants.

    StrEnum values are the lowercased member names (Python 3.11+):
    - OBJECT  -> "object"  : JSON object {}
    - ARRAY   -> "array"   : JSON array []
    - STRING  -> "string"  : JSON string
    - NUMBER  -> "number"  : arbitrary-precision decimal
    - BOOLEAN -> "boolean" : true / false
    - NULL    -> "null"    : JSON null
    - MISSING -> "missing" : result of a failed field or index lookup
    """

    OBJECT = auto()
    ARRAY = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()
    MISSING = auto()

    @property
    def description(self) -> str:
        """Human readable kind used in "expected: <a number>" messages."""
        article = "an" if self in (NodeType.OBJECT, NodeType.ARRAY) else "a"
        return f"{article} {self.value}"


@dataclass(frozen=True, slots=True, eq=False)
class Node:
    """A single value in a JSON tree.

    Attributes:
        node_type: Which variant this node is (see NodeType).
        value:     Payload.  ``dict[str, Node]`` for OBJECT, ``tuple[Node, ...]``
                   for ARRAY, ``str`` for STRING, ``Decimal`` for NUMBER,
                   ``bool`` for BOOLEAN and ``None`` for NULL and MISSING.

    Nodes compare by identity.  The engine dispatches on ``node_type`` and
    never relies on ``==`` between nodes.
    """

    node_type: NodeType
    value: Any = None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def is_missing(self) -> bool:
        return self.node_type is NodeType.MISSING

    def field(self, name: str) -> Node:
        """Return the child stored under ``name`` or ``MISSING``."""
        if self.node_type is NodeType.OBJECT:
            return self.value.get(name, MISSING)
        return MISSING

    def element(self, index: int) -> Node:
        """Return the element at ``index`` or ``MISSING`` when out of range.

        Negative indices are not interpreted here; ``Path.resolve`` maps them
        to ``size + index`` before calling.
        """
        if self.node_type is NodeType.ARRAY and 0 <= index < len(self.value):
            return self.value[index]
        return MISSING

    def fields(self) -> list[tuple[str, Node]]:
        if self.node_type is NodeType.OBJECT:
            return list(self.value.items())
        return []

    def elements(self) -> list[Node]:
        if self.node_type is NodeType.ARRAY:
            return list(self.value)
        return []

    def size(self) -> int:
        if self.node_type in (NodeType.OBJECT, NodeType.ARRAY):
            return len(self.value)
        return 0

    # ------------------------------------------------------------------
    # Scalar access
    # ------------------------------------------------------------------

    def as_text(self) -> str:
        if self.node_type is NodeType.STRING:
            return self.value
        from json_unit.tree.normalizer import to_compact_json

        return to_compact_json(self)

    def as_decimal(self) -> Decimal:
        if self.node_type is not NodeType.NUMBER:
            msg = f"Node of type {self.node_type} has no decimal value"
            raise TypeError(msg)
        return self.value

    def as_boolean(self) -> bool:
        if self.node_type is not NodeType.BOOLEAN:
            msg = f"Node of type {self.node_type} has no boolean value"
            raise TypeError(msg)
        return self.value

    def is_integral(self) -> bool:
        """True for numbers written without a fractional part (``1``, ``1E+2``)."""
        if self.node_type is not NodeType.NUMBER:
            return False
        exponent = self.value.as_tuple().exponent
        return isinstance(exponent, int) and exponent >= 0

    def to_python(self) -> Any:
        """Return the raw value: dict, list, str, Decimal, bool or None."""
        if self.node_type is NodeType.OBJECT:
            return {name: child.to_python() for name, child in self.value.items()}
        if self.node_type is NodeType.ARRAY:
            return [child.to_python() for child in self.value]
        return self.value

    def __repr__(self) -> str:
        if self.node_type is NodeType.MISSING:
            return "Node(MISSING)"
        from json_unit.tree.normalizer import to_compact_json

        return f"Node({self.node_type}, {to_compact_json(self)})"


MISSING = Node(NodeType.MISSING)
