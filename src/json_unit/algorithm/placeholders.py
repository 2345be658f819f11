"""Placeholder grammar recognised inside expected string values.

    ${json-unit.ignore}            ignore the actual node
    ${json-unit.ignore-element}    ignore the node, and allow it to be absent
    ${json-unit.any-number}        any number (also any-boolean, any-string)
    ${json-unit.regex}PATTERN      actual text must fully match PATTERN
    ${json-unit.matches:NAME}PARAM apply the named matcher, passing PARAM

``#`` may be used instead of ``$`` in every placeholder.
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from enum import StrEnum, auto

from cachetools import LRUCache, cached

from json_unit.tree.nodes import NodeType

_PLACEHOLDER = re.compile(
    r"[$#]\{json-unit\.(?P<kind>[a-z-]+)(?::(?P<name>[^}]*))?\}(?P<rest>.*)",
    re.DOTALL,
)

_ANY_TYPES = {
    "any-number": NodeType.NUMBER,
    "any-boolean": NodeType.BOOLEAN,
    "any-string": NodeType.STRING,
}


class PlaceholderKind(StrEnum):
    IGNORE = auto()
    IGNORE_ELEMENT = auto()
    ANY = auto()
    REGEX = auto()
    MATCHER = auto()


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Parsed placeholder.

    Attributes:
        kind:      Which placeholder this is.
        node_type: Requested type for ANY placeholders.
        name:      Matcher name for MATCHER placeholders.
        argument:  Regex pattern for REGEX, matcher parameter for MATCHER.
    """

    kind: PlaceholderKind
    node_type: NodeType | None = None
    name: str = ""
    argument: str = ""


@cached(cache=LRUCache(maxsize=2048), lock=threading.Lock())
def parse_placeholder(text: str) -> Placeholder | None:
    """Return the placeholder encoded in ``text``, or None for a plain string."""
    match = _PLACEHOLDER.fullmatch(text)
    if match is None:
        return None
    kind, name, rest = match.group("kind"), match.group("name"), match.group("rest")

    if kind == "matches":
        if name is None:
            return None
        return Placeholder(PlaceholderKind.MATCHER, name=name, argument=rest)
    if name is not None:
        return None
    if kind == "regex":
        return Placeholder(PlaceholderKind.REGEX, argument=rest)
    if rest:
        return None
    if kind == "ignore":
        return Placeholder(PlaceholderKind.IGNORE)
    if kind == "ignore-element":
        return Placeholder(PlaceholderKind.IGNORE_ELEMENT)
    if kind in _ANY_TYPES:
        return Placeholder(PlaceholderKind.ANY, node_type=_ANY_TYPES[kind])
    return None


@cached(cache=LRUCache(maxsize=256), lock=threading.Lock())
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a regex placeholder pattern; ``re.error`` propagates."""
    return re.compile(pattern)
