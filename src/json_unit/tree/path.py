"""Path: immutable address of a node inside a JSON tree.

Textual grammar::

    path   := step ( "." step )*
    step   := name? ( "[" "-"? digits "]" )*

A literal dot inside a field name is written ``\\.``.  A negative index ``k``
counts from the end of the array (``size + k``).  An optional ``prefix`` is the
rendered path of the sub-document the comparison started from.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from json_unit.tree.nodes import MISSING, Node, NodeType

# Split on dots that are not escaped with a backslash
_STEP_SEPARATOR = re.compile(r"(?<!\\)\.")
# Trailing "[n]" of a step, applied repeatedly for "name[0][1]"
_INDEX_SUFFIX = re.compile(r"^(.*)\[(-?\d+)]$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class Path:
    """A dotted/bracketed route from a document root to a node.

    Attributes:
        relative: Steps below the comparison root, e.g. ``"items[0].price"``.
        prefix:   Rendered path of the comparison root itself; empty for the
                  document root.
    """

    relative: str = ""
    prefix: str = ""

    @classmethod
    def create(cls, path: str, prefix: str = "") -> Path:
        return cls(path, prefix)

    # ------------------------------------------------------------------
    # Construction of child paths
    # ------------------------------------------------------------------

    def to_field(self, name: str) -> Path:
        if not self.relative:
            return Path(name, self.prefix)
        return Path(f"{self.relative}.{name}", self.prefix)

    def to_element(self, index: int) -> Path:
        return Path(f"{self.relative}[{index}]", self.prefix)

    def to(self, step: str) -> Path:
        """Append ``step``; a step starting with ``[`` is taken verbatim."""
        if step.startswith("["):
            return Path(self.relative + step, self.prefix)
        return self.to_field(step)

    def as_prefix(self) -> Path:
        """Freeze the current full path as the prefix of a fresh root."""
        return Path("", self.full_path)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def full_path(self) -> str:
        if not self.prefix:
            return self.relative
        if not self.relative:
            return self.prefix
        if self.relative.startswith("["):
            return self.prefix + self.relative
        return f"{self.prefix}.{self.relative}"

    def __str__(self) -> str:
        return self.full_path

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def resolve(self, root: Node) -> Node:
        """Walk the relative part of this path from ``root``.

        Returns ``MISSING`` for any absent field or out-of-range index; never
        raises for an unresolvable path.
        """
        if not self.relative:
            return root
        node = root
        for raw_step in _STEP_SEPARATOR.split(self.relative):
            name, indices = _split_step(raw_step.replace("\\.", "."))
            if name:
                node = node.field(name)
            for index in indices:
                node = _element(node, index)
            if node.is_missing():
                return MISSING
        return node


def _split_step(step: str) -> tuple[str, list[int]]:
    indices: list[int] = []
    match = _INDEX_SUFFIX.match(step)
    while match is not None:
        indices.append(int(match.group(2)))
        step = match.group(1)
        match = _INDEX_SUFFIX.match(step)
    indices.reverse()
    return step, indices


def _element(node: Node, index: int) -> Node:
    if node.node_type is not NodeType.ARRAY:
        return MISSING
    if index < 0:
        index += node.size()
    return node.element(index)
