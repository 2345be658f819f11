"""NativeBackend: Node adapter for Python JSON values and JSON text.

Python values (dicts, lists, strings, numbers, booleans, None) are converted
by ``NodeBuilder``.  ``str`` and ``bytes`` sources are JSON text and are
parsed with the standard ``json`` module, keeping every fractional number as
a ``Decimal`` so that ``1.0`` and ``1`` stay distinct.

This backend satisfies the ``NodeFactory`` Protocol structurally without
inheriting from it.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from json_unit.tree.builder import NodeBuilder
from json_unit.tree.nodes import Node

# Module-level singleton, NodeBuilder is stateless
_builder = NodeBuilder()


def _reject_constant(name: str) -> Any:
    msg = f"Unsupported JSON constant: {name}"
    raise ValueError(msg)


class NativeBackend:
    """Converts Python JSON values and JSON text into Nodes.

    Example::

        backend = NativeBackend()
        backend.convert('{"price": 1.50}').field("price").as_decimal()
        # Decimal('1.50')
    """

    def convert(self, source: Any) -> Node:
        """Convert ``source`` to a Node.

        Args:
            source: A ``Node`` (returned unchanged), JSON text as ``str``,
                ``bytes`` or ``bytearray``, or a Python JSON value.

        Returns:
            The root Node.

        Raises:
            ValueError: If JSON text cannot be parsed.
            TypeError: If a Python value is not a JSON type.
        """
        if isinstance(source, Node):
            return source
        if isinstance(source, (bytes, bytearray)):
            source = bytes(source).decode("utf-8")
        if isinstance(source, str):
            return _builder.build(self.parse(source))
        return _builder.build(source)

    @staticmethod
    def parse(text: str) -> Any:
        """Parse JSON text into Python values with ``Decimal`` fractions."""
        try:
            return json.loads(text, parse_float=Decimal, parse_constant=_reject_constant)
        except json.JSONDecodeError as exc:
            msg = f"Can not parse JSON value: {exc}"
            raise ValueError(msg) from exc
