# src/graph/exporter_factory.py — v1
"""Factory for graph exporter instantiation.

JSON exporter is always included regardless of configuration.
"""

from __future__ import annotations

import importlib
from pathlib import Path

import networkx as nx

from alpsgraph.config.settings import Settings
from alpsgraph.graph.base_graph_exporter import BaseGraphExporter

_EXPORTERS: dict[str, str] = {
    "json": "alpsgraph.graph.exporters.json_exporter.JsonExporter",
    "graphml": "alpsgraph.graph.exporters.graphml_exporter.GraphMLExporter",
}


def create_exporters(settings: Settings | None = None) -> list[BaseGraphExporter]:
    """Create all configured graph exporters (JSON always included).

    Returns:
        List of exporter instances.
    """
    formats: set[str] = {"json"}  # Always present

    if settings is not None:
        formats.update(settings.graph_export_formats_list)

    exporters: list[BaseGraphExporter] = []
    for fmt in sorted(formats):
        fqcn = _EXPORTERS.get(fmt)
        if fqcn is None:
            continue
        module_path, class_name = fqcn.rsplit(".", 1)
        mod = importlib.import_module(module_path)
        cls = getattr(mod, class_name)
        exporters.append(cls())

    return exporters


def export_all(
    graph: nx.Graph,
    output_dir: str | Path,
    stem: str,
    settings: Settings | None = None,
) -> list[str]:
    """Write ``graph`` once per configured format; return the paths written."""
    return [
        exporter.export(graph, exporter.output_path_for(output_dir, stem))
        for exporter in create_exporters(settings)
    ]
