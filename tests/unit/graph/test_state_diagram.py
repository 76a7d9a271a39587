# tests/unit/graph/test_state_diagram.py — v1
"""Tests for graph/state_diagram.py — NetworkX views of a profile graph."""

from __future__ import annotations

import pytest

from alpsgraph.core.errors import GraphNotReadyError
from alpsgraph.extraction.document_loader import InMemoryDocumentLoader
from alpsgraph.graph.builder import ProfileGraph, build_graph
from alpsgraph.graph.state_diagram import state_diagram, to_networkx, transitions_from_networkx

SHOP = [
    {"id": "Cart", "tag": "checkout", "descriptor": [{"href": "#goProduct"}, {"href": "#doCheckout"}]},
    {"id": "Product", "title": "Product page", "descriptor": [{"href": "#doAddToCart"}]},
    {"id": "goProduct", "type": "safe", "rt": "#Product", "title": "Show product"},
    {"id": "doAddToCart", "type": "unsafe", "rt": "#Cart"},
    {"id": "doCheckout", "type": "idempotent", "rt": "#Cart"},
]


@pytest.fixture
def shop(alps, settings):
    return build_graph(
        "shop.json", loader=InMemoryDocumentLoader({"shop.json": alps(SHOP, title="Shop")}), settings=settings
    )


class TestToNetworkx:
    def test_nodes_and_attrs(self, shop):
        g = to_networkx(shop)
        assert set(g.nodes) == {"Cart", "Product", "goProduct", "doAddToCart", "doCheckout"}
        assert g.nodes["Cart"]["tags"] == ["checkout"]
        assert g.nodes["Product"]["title"] == "Product page"
        assert g.nodes["goProduct"]["type"] == "safe"
        assert g.graph["title"] == "Shop"

    def test_edges_keyed_by_kind(self, shop):
        g = to_networkx(shop)
        assert g.has_edge("goProduct", "Product", key="safe")
        assert g.has_edge("doCheckout", "Cart", key="idempotent")
        assert g.number_of_edges() == 3

    def test_round_trip(self, shop):
        assert transitions_from_networkx(to_networkx(shop)) == shop.transitions()

    def test_round_trip_independent_of_document_order(self, alps, settings, shop):
        reversed_graph = build_graph(
            "shop.json",
            loader=InMemoryDocumentLoader({"shop.json": alps(list(reversed(SHOP)))}),
            settings=settings,
        )
        assert transitions_from_networkx(to_networkx(reversed_graph)) == transitions_from_networkx(
            to_networkx(shop)
        )


class TestStateDiagram:
    def test_semantic_nodes_only(self, shop):
        g = state_diagram(shop)
        assert set(g.nodes) == {"Cart", "Product"}

    def test_edges_labelled_by_transition(self, shop):
        g = state_diagram(shop)
        assert g.edges["Cart", "Product", "goProduct"]["label"] == "Show product"
        assert g.edges["Product", "Cart", "doAddToCart"]["label"] == "doAddToCart"
        assert g.edges["Cart", "Cart", "doCheckout"]["kind"] == "idempotent"

    def test_requires_finalized_graph(self, alps, settings):
        graph = ProfileGraph(
            "shop.json", loader=InMemoryDocumentLoader({"shop.json": alps(SHOP)}), settings=settings
        )
        with pytest.raises(GraphNotReadyError):
            state_diagram(graph)
