# tests/unit/graph/test_exporters.py — v1
"""Tests for graph exporters and exporter_factory.py."""

from __future__ import annotations

import json
from pathlib import Path

import networkx as nx
import pytest

from alpsgraph.config.settings import Settings
from alpsgraph.graph.base_graph_exporter import BaseGraphExporter
from alpsgraph.graph.exporter_factory import create_exporters, export_all
from alpsgraph.graph.exporters.graphml_exporter import GraphMLExporter
from alpsgraph.graph.exporters.json_exporter import JsonExporter


@pytest.fixture
def diagram() -> nx.MultiDiGraph:
    g = nx.MultiDiGraph(title="Blog")
    g.add_node("Blog", type="semantic", title="Blog", doc="", tags=["collection", "posting"])
    g.add_node("BlogPosting", type="semantic", title="", doc="", tags=[])
    g.add_edge("Blog", "BlogPosting", key="goBlogPosting", kind="safe", label="goBlogPosting")
    return g


class TestBaseGraphExporter:
    def test_abstract(self):
        with pytest.raises(TypeError):
            BaseGraphExporter()  # type: ignore[abstract]

    def test_output_path_for(self, tmp_path):
        assert JsonExporter().output_path_for(tmp_path, "blog") == tmp_path / "blog.json"
        assert GraphMLExporter().output_path_for(str(tmp_path), "blog") == tmp_path / "blog.graphml"


class TestJsonExporter:
    def test_node_link_format(self, diagram, tmp_path):
        path = JsonExporter().export(diagram, tmp_path / "out" / "blog.json")
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        assert {n["id"] for n in data["nodes"]} == {"Blog", "BlogPosting"}
        assert data["edges"][0]["key"] == "goBlogPosting"
        assert data["multigraph"] is True

    def test_round_trip(self, diagram, tmp_path):
        path = JsonExporter().export(diagram, tmp_path / "blog.json")
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        restored = nx.node_link_graph(data, edges="edges")
        assert set(restored.edges(keys=True)) == set(diagram.edges(keys=True))


class TestGraphMLExporter:
    def test_lists_flattened(self, diagram, tmp_path):
        path = GraphMLExporter().export(diagram, tmp_path / "blog.graphml")
        restored = nx.read_graphml(path)
        assert restored.nodes["Blog"]["tags"] == "collection posting"
        assert diagram.nodes["Blog"]["tags"] == ["collection", "posting"]


class TestExporterFactory:
    def test_json_only_by_default(self):
        assert [e.format_name for e in create_exporters()] == ["json"]

    def test_configured_formats(self):
        settings = Settings(_env_file=None, graph_export_formats="graphml")
        assert [e.format_name for e in create_exporters(settings)] == ["graphml", "json"]

    def test_export_all(self, diagram, tmp_path):
        settings = Settings(_env_file=None, graph_export_formats="json,graphml")
        paths = export_all(diagram, tmp_path, "blog", settings)
        assert sorted(Path(p).name for p in paths) == ["blog.graphml", "blog.json"]
        assert all(Path(p).is_file() for p in paths)
