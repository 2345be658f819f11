"""JSON rendering of Node trees.

Two renderings are used:

- ``to_compact_json`` produces the value text embedded in difference messages
  (``{"test":3}``, ``[1,2,3]``, ``"abc"``).  Object fields keep document order.
- ``to_normalized_json`` produces a stable dump with sorted keys and two-space
  indentation, used when differences are reported as normalized strings.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from json_unit.tree.nodes import NodeType

if TYPE_CHECKING:
    from json_unit.tree.nodes import Node


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _scalar(node: Node) -> str:
    node_type = node.node_type
    if node_type is NodeType.STRING:
        return _quote(node.value)
    if node_type is NodeType.NUMBER:
        return str(node.value)
    if node_type is NodeType.BOOLEAN:
        return "true" if node.value else "false"
    if node_type is NodeType.NULL:
        return "null"
    # MISSING renders as nothing; callers decide how to present absence
    return ""


def to_compact_json(node: Node) -> str:
    """Render ``node`` as compact JSON without whitespace."""
    if node.node_type is NodeType.OBJECT:
        inner = ",".join(f"{_quote(name)}:{to_compact_json(child)}" for name, child in node.fields())
        return "{" + inner + "}"
    if node.node_type is NodeType.ARRAY:
        return "[" + ",".join(to_compact_json(child) for child in node.elements()) + "]"
    return _scalar(node)


def to_normalized_json(node: Node, indent: int = 2) -> str:
    """Render ``node`` with sorted keys and indentation.

    Two documents that are equal up to key order render identically, which
    makes the output suitable for side-by-side diff views.
    """
    lines: list[str] = []
    _write_normalized(node, 0, indent, lines, prefix="")
    return "\n".join(lines)


def _write_normalized(node: Node, level: int, indent: int, lines: list[str], prefix: str) -> None:
    pad = " " * (indent * level)
    node_type = node.node_type

    if node_type is NodeType.OBJECT and node.size() > 0:
        lines.append(f"{pad}{prefix}{{")
        names = sorted(name for name, _ in node.fields())
        for position, name in enumerate(names):
            _write_normalized(node.field(name), level + 1, indent, lines, prefix=f"{_quote(name)}: ")
            if position < len(names) - 1:
                lines[-1] += ","
        lines.append(f"{pad}}}")
        return

    if node_type is NodeType.ARRAY and node.size() > 0:
        lines.append(f"{pad}{prefix}[")
        elements = node.elements()
        for position, child in enumerate(elements):
            _write_normalized(child, level + 1, indent, lines, prefix="")
            if position < len(elements) - 1:
                lines[-1] += ","
        lines.append(f"{pad}]")
        return

    lines.append(f"{pad}{prefix}{to_compact_json(node)}")
