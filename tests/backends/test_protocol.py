"""Tests for structural Protocol conformance.

Verifies that:
- User-defined classes with the right methods satisfy each Protocol.
- Classes with missing or misnamed methods do not.
- Shipped implementations conform without inheriting from the Protocols.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from json_unit.algorithm.config import DefaultNumberComparator
from json_unit.backends import NativeBackend
from json_unit.cache import NodeCache
from json_unit.protocols import (
    DifferenceListener,
    NodeFactory,
    NodeMatcher,
    NumberComparator,
)
from json_unit.tree.builder import NodeBuilder
from json_unit.tree.nodes import Node


class _UserFactory:
    """Minimal user-defined adapter conforming to NodeFactory."""

    def convert(self, source: Any) -> Node:
        return NodeBuilder().build(source)


class _UserMatcher:
    def matches(self, value: Any) -> bool:
        return value is not None

    def describe_mismatch(self, value: Any) -> str:
        return "was null"


class _MatchOnly:
    """Has ``matches`` but no ``describe_mismatch``."""

    def matches(self, value: Any) -> bool:
        return True


class _WrongNameFactory:
    def build(self, source: Any) -> Node:
        return NodeBuilder().build(source)


class _Listener:
    def diff(self, difference: Any, context: Any) -> None:
        pass


# ---------------------------------------------------------------------------
# Positive conformance tests
# ---------------------------------------------------------------------------


def test_user_factory_passes_isinstance():
    assert isinstance(_UserFactory(), NodeFactory) is True


def test_user_factory_produces_nodes():
    assert _UserFactory().convert([1, 2]).size() == 2


def test_native_backend_satisfies_protocol():
    assert isinstance(NativeBackend(), NodeFactory) is True


def test_node_cache_satisfies_protocol():
    assert isinstance(NodeCache(NativeBackend()), NodeFactory) is True


def test_protocol_does_not_require_inheritance():
    assert NodeFactory not in type(NativeBackend()).__mro__


def test_user_matcher_passes_isinstance():
    assert isinstance(_UserMatcher(), NodeMatcher) is True


def test_default_number_comparator_satisfies_protocol():
    comparator = DefaultNumberComparator()
    assert isinstance(comparator, NumberComparator) is True
    assert comparator.compare(Decimal(1), Decimal(1), None)


def test_listener_passes_isinstance():
    assert isinstance(_Listener(), DifferenceListener) is True


# ---------------------------------------------------------------------------
# Negative conformance tests
# ---------------------------------------------------------------------------


def test_class_with_wrong_method_name_fails_isinstance():
    assert isinstance(_WrongNameFactory(), NodeFactory) is False


def test_matcher_without_describe_mismatch_fails_isinstance():
    assert isinstance(_MatchOnly(), NodeMatcher) is False


def test_plain_object_fails_every_protocol():
    obj = object()
    for protocol in (NodeFactory, NodeMatcher, NumberComparator, DifferenceListener):
        assert isinstance(obj, protocol) is False
