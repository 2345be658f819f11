"""PathMatcher family: exact and ``[*]`` wildcard path patterns.

Patterns are matched against full rendered paths such as
``items[3].price``.  ``[*]`` stands for any concrete array index at that
position; every other character is literal (``*`` or ``\\d`` outside
brackets have no special meaning).
"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable
from dataclasses import dataclass

from cachetools import LRUCache, cached

_WILDCARD = "[*]"


class PathMatcher:
    """Base matcher; the bare instance matches nothing."""

    __slots__ = ()

    def matches(self, path: str) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class ExactPathMatcher(PathMatcher):
    path: str

    def matches(self, path: str) -> bool:
        return path == self.path


@dataclass(frozen=True, slots=True)
class ArrayWildcardMatcher(PathMatcher):
    """Matches ``array[*].next`` against ``array[1].next``."""

    pattern: re.Pattern[str]

    @classmethod
    def from_path(cls, path: str) -> ArrayWildcardMatcher:
        regex = r"\[\d+\]".join(re.escape(part) for part in path.split(_WILDCARD))
        return cls(re.compile(regex))

    def matches(self, path: str) -> bool:
        return self.pattern.fullmatch(path) is not None


@dataclass(frozen=True, slots=True)
class AggregatePathMatcher(PathMatcher):
    matchers: tuple[PathMatcher, ...]

    def matches(self, path: str) -> bool:
        return any(matcher.matches(path) for matcher in self.matchers)


EMPTY_MATCHER = PathMatcher()


@cached(cache=LRUCache(maxsize=1024), lock=threading.Lock())
def _create_single(path: str) -> PathMatcher:
    if _WILDCARD in path:
        return ArrayWildcardMatcher.from_path(path)
    return ExactPathMatcher(path)


def create_path_matcher(paths: str | Iterable[str]) -> PathMatcher:
    """Build a matcher for one pattern or any of several patterns.

    Compiled single-pattern matchers are cached process-wide, so rebuilding
    a Configuration per comparison does not recompile its patterns.
    """
    if isinstance(paths, str):
        return _create_single(paths)
    matchers = tuple(_create_single(path) for path in paths)
    if not matchers:
        return EMPTY_MATCHER
    if len(matchers) == 1:
        return matchers[0]
    return AggregatePathMatcher(matchers)
