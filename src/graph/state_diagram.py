# src/graph/state_diagram.py — v1
"""NetworkX views of a finalized profile graph.

Two views are offered to diagram renderers:
  - ``to_networkx``: every descriptor as a node, one edge per transition
    edge (transition -> reached state), keyed by kind;
  - ``state_diagram``: semantic descriptors only, one edge per state link
    keyed by the transition id.
"""

from __future__ import annotations

from typing import Any

import networkx as nx

from alpsgraph.core.models import Descriptor, TransitionEdge
from alpsgraph.graph.builder import ProfileGraph


def _node_attrs(descriptor: Descriptor) -> dict[str, Any]:
    return {
        "type": descriptor.type,
        "title": descriptor.title or "",
        "doc": descriptor.doc or "",
        "tags": list(descriptor.tags),
    }


def to_networkx(graph: ProfileGraph) -> nx.MultiDiGraph:
    """Descriptor graph with ``rt`` edges from transitions to states."""
    g = nx.MultiDiGraph(profile=graph.file_id, title=graph.title)
    for descriptor in graph.descriptors():
        g.add_node(descriptor.id, **_node_attrs(descriptor))
    for edge in sorted(graph.transitions(), key=TransitionEdge.as_tuple):
        g.add_edge(edge.source, edge.target, key=edge.kind, kind=edge.kind)
    return g


def state_diagram(graph: ProfileGraph) -> nx.MultiDiGraph:
    """Application state diagram: states connected by the transitions they offer."""
    g = nx.MultiDiGraph(profile=graph.file_id, title=graph.title)
    for descriptor in graph.descriptors():
        if descriptor.type == "semantic":
            g.add_node(descriptor.id, **_node_attrs(descriptor))
    for link in graph.state_links():
        transition = graph.lookup(link.transition)
        g.add_edge(
            link.source,
            link.target,
            key=link.transition,
            transition=link.transition,
            kind=link.kind,
            label=transition.title or link.transition,
        )
    return g


def transitions_from_networkx(g: nx.MultiDiGraph) -> frozenset[TransitionEdge]:
    """Rebuild transition edges from a graph produced by ``to_networkx``."""
    return frozenset(
        TransitionEdge(source=u, target=v, kind=data["kind"])
        for u, v, data in g.edges(data=True)
    )
