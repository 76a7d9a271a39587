# tests/unit/graph/test_transition_linker.py — v1
"""Tests for graph/transition_linker.py."""

from __future__ import annotations

import pytest

from alpsgraph.core.errors import DanglingTransitionTargetError
from alpsgraph.core.models import (
    DescriptorRef,
    IdempotentDescriptor,
    SafeDescriptor,
    SemanticDescriptor,
    StateLink,
    TransitionEdge,
    UnsafeDescriptor,
)
from alpsgraph.graph.transition_linker import link_states, link_transitions


def _index(*descriptors):
    return {d.id: d for d in descriptors}


def _refs(*ids):
    return tuple(DescriptorRef(id=i) for i in ids)


class TestLinkTransitions:
    def test_single_edge(self):
        descriptors = _index(
            SemanticDescriptor(id="home"),
            SafeDescriptor(id="listItems", rt="#home"),
        )
        assert link_transitions(descriptors) == frozenset(
            {TransitionEdge(source="listItems", target="home", kind="safe")}
        )

    def test_all_kinds(self):
        descriptors = _index(
            SemanticDescriptor(id="item"),
            SafeDescriptor(id="goItem", rt="#item"),
            UnsafeDescriptor(id="doCreate", rt="#item"),
            IdempotentDescriptor(id="doUpdate", rt="item"),
        )
        assert {e.as_tuple() for e in link_transitions(descriptors)} == {
            ("goItem", "item", "safe"),
            ("doCreate", "item", "unsafe"),
            ("doUpdate", "item", "idempotent"),
        }

    def test_remote_rt_uses_id_part(self):
        descriptors = _index(
            SemanticDescriptor(id="author"),
            SafeDescriptor(id="goAuthor", rt="people.json#author"),
        )
        assert link_transitions(descriptors) == frozenset(
            {TransitionEdge(source="goAuthor", target="author", kind="safe")}
        )

    def test_empty_rt_no_edge(self):
        descriptors = _index(UnsafeDescriptor(id="doLogout"))
        assert link_transitions(descriptors) == frozenset()

    def test_dangling(self):
        descriptors = _index(SafeDescriptor(id="goGhost", rt="#ghost"))
        with pytest.raises(DanglingTransitionTargetError, match="ghost"):
            link_transitions(descriptors)

    def test_target_must_be_semantic(self):
        descriptors = _index(
            SafeDescriptor(id="goA", rt="#goB"),
            SafeDescriptor(id="goB", rt="#goA"),
        )
        with pytest.raises(DanglingTransitionTargetError, match="not a semantic"):
            link_transitions(descriptors)

    def test_input_not_modified(self):
        descriptors = _index(SemanticDescriptor(id="home"), SafeDescriptor(id="go", rt="#home"))
        before = dict(descriptors)
        link_transitions(descriptors)
        assert descriptors == before


class TestLinkStates:
    def test_nested_transitions(self):
        descriptors = _index(
            SemanticDescriptor(id="List", descriptor=_refs("goItem", "Item")),
            SemanticDescriptor(id="Item", descriptor=_refs("goList", "doDelete")),
            SafeDescriptor(id="goItem", rt="#Item"),
            SafeDescriptor(id="goList", rt="#List"),
            UnsafeDescriptor(id="doDelete", rt="#List"),
        )
        assert link_states(descriptors) == [
            StateLink(source="Item", target="List", transition="doDelete", kind="unsafe"),
            StateLink(source="Item", target="List", transition="goList", kind="safe"),
            StateLink(source="List", target="Item", transition="goItem", kind="safe"),
        ]

    def test_transition_children_ignored(self):
        descriptors = _index(
            SemanticDescriptor(id="home"),
            UnsafeDescriptor(id="doPost", rt="#home", descriptor=_refs("goHome")),
            SafeDescriptor(id="goHome", rt="#home"),
        )
        assert link_states(descriptors) == []

    def test_transition_without_rt_skipped(self):
        descriptors = _index(
            SemanticDescriptor(id="home", descriptor=_refs("doLogout")),
            UnsafeDescriptor(id="doLogout"),
        )
        assert link_states(descriptors) == []

    def test_duplicate_refs_collapse(self):
        descriptors = _index(
            SemanticDescriptor(id="home", descriptor=_refs("goHome", "goHome")),
            SafeDescriptor(id="goHome", rt="#home"),
        )
        assert len(link_states(descriptors)) == 1
