"""NodeCache: LRU-backed caching proxy for any NodeFactory.

Wraps any NodeFactory-conformant object and caches the Nodes it produces for
JSON text sources.  Test suites tend to compare against the same expected
document many times; with the cache that text is parsed once.  Nodes are
immutable, so a cached Node can be handed out any number of times.

Only ``str`` and ``bytes`` sources are cached.  Python values are mutable and
unhashable, so they are always converted afresh.  LRU eviction is silent.

Example::

    from json_unit.backends import NativeBackend
    from json_unit.cache import NodeCache

    cache = NodeCache(NativeBackend(), max_size=256)
    first = cache.convert('{"a": 1}')
    second = cache.convert('{"a": 1}')   # served from memory
    assert first is second
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cachetools import LRUCache

if TYPE_CHECKING:
    from json_unit.protocols import NodeFactory
    from json_unit.tree.nodes import Node


class NodeCache:
    """LRU-backed caching proxy around any NodeFactory.

    Satisfies the ``NodeFactory`` Protocol structurally.  Each instance holds
    its own ``LRUCache``; two instances never share entries.

    Args:
        backend: Any object with a ``convert(source) -> Node`` method.
        max_size: Maximum number of converted documents kept in memory.
            Defaults to 256.
    """

    def __init__(self, backend: NodeFactory, max_size: int = 256) -> None:
        self._backend: Any = backend
        self._cache: LRUCache[str | bytes, Node] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # NodeFactory Protocol surface
    # ------------------------------------------------------------------

    def convert(self, source: Any) -> Node:
        """Return the Node for ``source``, parsing JSON text at most once."""
        if not isinstance(source, (str, bytes)):
            return self._backend.convert(source)
        node = self._cache.get(source)
        if node is None:
            node = self._backend.convert(source)
            self._cache[source] = node
        return node
