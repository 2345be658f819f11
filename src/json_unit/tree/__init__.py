"""Tree subpackage: the Node value model and path addressing.

Re-exports the public API for the tree module:
- Node: read-only view over one JSON value
- NodeType: StrEnum of the node variants (OBJECT, ARRAY, STRING, ...)
- MISSING: sentinel returned by failed lookups
- NodeBuilder: converts Python JSON values into Node trees
- Path: dotted/bracketed address of a node
"""

from json_unit.tree.builder import NodeBuilder
from json_unit.tree.nodes import MISSING, Node, NodeType
from json_unit.tree.path import Path

__all__ = ["MISSING", "Node", "NodeBuilder", "NodeType", "Path"]
