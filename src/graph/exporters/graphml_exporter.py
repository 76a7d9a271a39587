# src/graph/exporters/graphml_exporter.py — v1
"""GraphML graph exporter for diagram tools (yEd, Gephi, draw.io importers)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import networkx as nx

from alpsgraph.graph.base_graph_exporter import BaseGraphExporter


def _scalar(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class GraphMLExporter(BaseGraphExporter):
    """Export graph to GraphML format."""

    @property
    def format_name(self) -> str:
        return "graphml"

    @property
    def file_extension(self) -> str:
        return ".graphml"

    def export(self, graph: nx.Graph, output_path: str | Path) -> str:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # GraphML only stores scalar attributes; tag lists become space-separated
        g = graph.copy()
        for _, data in g.nodes(data=True):
            for k, v in list(data.items()):
                data[k] = _scalar(v)
        for *_, data in g.edges(data=True):
            for k, v in list(data.items()):
                data[k] = _scalar(v)

        nx.write_graphml(g, str(path))
        return str(path)
