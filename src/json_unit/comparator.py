"""JsonComparator: orchestrator that wires a NodeFactory + NodeCache + Diff.

This is the wiring layer between the engine and the public API.  It turns
whatever the caller supplies (Nodes, Python values, JSON text) into Nodes
through a backend, then runs a ``Diff`` on them.

Architecture:
- Conversion goes through a ``NodeCache`` so repeated JSON text (typically
  the expected document) is parsed once per comparator.
- ``compare()`` returns the ``Diff`` itself; it is evaluated lazily and
  memoizes its result.
- The expected document is compared as given.  ``path`` selects the node of
  the actual document to compare and prefixes every reported path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from json_unit.algorithm.config import Configuration
from json_unit.algorithm.diff import Diff
from json_unit.backends import NativeBackend
from json_unit.cache import NodeCache
from json_unit.tree.path import Path

if TYPE_CHECKING:
    from json_unit.protocols import NodeFactory
    from json_unit.tree.nodes import Node

__all__ = ["JsonComparator"]


class JsonComparator:
    """Converts inputs to Nodes and compares them.

    Two separate ``JsonComparator`` instances never share cache state.

    Example::

        from json_unit.comparator import JsonComparator

        cmp = JsonComparator()
        diff = cmp.compare('{"test": 1}', {"test": 2})
        diff.similar()       # False
        print(diff)          # JSON documents are different: ...
    """

    def __init__(
        self,
        backend: NodeFactory | None = None,
        configuration: Configuration | None = None,
        max_cache_size: int = 256,
    ) -> None:
        """Initialise the comparator.

        Args:
            backend: A NodeFactory-conformant object.  Defaults to
                ``NativeBackend()`` when None.
            configuration: Default configuration for ``compare()`` calls.
                Defaults to ``Configuration()``.
            max_cache_size: Capacity of the converted-document LRU cache.
        """
        self._backend = NodeCache(
            backend if backend is not None else NativeBackend(),
            max_size=max_cache_size,
        )
        self._configuration = configuration if configuration is not None else Configuration()

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def convert(self, source: Any) -> Node:
        return self._backend.convert(source)

    def compare(
        self,
        expected: Any,
        actual: Any,
        path: Path | str = "",
        configuration: Configuration | None = None,
        heading: str | None = None,
    ) -> Diff:
        """Compare two documents.

        Args:
            expected: Expected document (Node, Python value or JSON text).
            actual: Actual document (Node, Python value or JSON text).
            path: Node of ``actual`` to compare against ``expected``.
            configuration: Overrides the comparator's default configuration.
            heading: Optional description rendered before the report.

        Returns:
            A ``Diff``; call ``similar()`` or ``differences()`` on it.

        Raises:
            ValueError: If JSON text cannot be parsed.
            TypeError: If a Python value is not a JSON type.
        """
        return Diff(
            self.convert(expected),
            self.convert(actual),
            path,
            configuration if configuration is not None else self._configuration,
            heading,
        )
