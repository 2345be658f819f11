"""NodeBuilder: converts Python JSON values into typed Node trees.

Uses recursive dispatch over the values produced by ``json.loads`` (or built
by hand in tests): dicts, lists, strings, numbers, booleans and None.

Numbers become ``Decimal`` so that precision and the written form survive:
``1`` and ``1.0`` stay distinguishable, which the engine relies on for strict
numeric comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from json_unit.tree.nodes import Node, NodeType

# Type alias for valid JSON values
JsonValue = (
    dict[str, Any] | list[Any] | tuple[Any, ...] | str | int | float | Decimal | bool | None
)

_NULL = Node(NodeType.NULL)
_TRUE = Node(NodeType.BOOLEAN, True)
_FALSE = Node(NodeType.BOOLEAN, False)


@dataclass
class NodeBuilder:
    """Converts any valid JSON value into a Node tree.

    The dispatch order is critical: bool MUST be checked before int because
    bool is a subclass of int in Python (isinstance(True, int) is True).

    Floats are converted through ``repr`` so that ``1.0`` becomes
    ``Decimal("1.0")`` rather than the binary expansion of the float.

    Example::
        builder = NodeBuilder()
        node = builder.build({"price": 1.5})
        # node: OBJECT {"price": NUMBER Decimal("1.5")}
    """

    def build(self, value: JsonValue) -> Node:
        """Convert a JSON value to a Node.

        Args:
            value: dict, list, tuple, str, int, float, Decimal, bool or None.
                An existing ``Node`` is returned unchanged.

        Returns:
            The root Node of the converted tree.

        Raises:
            TypeError: If value (or any nested value) is not a JSON type.
        """
        if isinstance(value, Node):
            return value

        # CRITICAL: bool MUST be checked before int
        if isinstance(value, bool):
            return _TRUE if value else _FALSE

        if value is None:
            return _NULL

        if isinstance(value, str):
            return Node(NodeType.STRING, value)

        if isinstance(value, dict):
            return self._build_object(value)

        if isinstance(value, (list, tuple)):
            return Node(NodeType.ARRAY, tuple(self.build(item) for item in value))

        if isinstance(value, Decimal):
            return Node(NodeType.NUMBER, value)

        if isinstance(value, int):
            return Node(NodeType.NUMBER, Decimal(value))

        if isinstance(value, float):
            return Node(NodeType.NUMBER, Decimal(repr(value)))

        raise TypeError(f"Unsupported JSON value type: {type(value)!r}")

    def _build_object(self, obj: dict[Any, Any]) -> Node:
        fields: dict[str, Node] = {}
        for key, val in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"Unsupported JSON object key type: {type(key)!r}")
            fields[key] = self.build(val)
        return Node(NodeType.OBJECT, MappingProxyType(fields))
