# src/graph/base_graph_exporter.py — v1
"""Abstract graph export interface for networkx views of a profile graph."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import networkx as nx


class BaseGraphExporter(ABC):
    """Unified interface for graph serialization formats."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Export format identifier (e.g., 'json', 'graphml')."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Output file extension (e.g., '.json', '.graphml')."""

    @abstractmethod
    def export(self, graph: nx.Graph, output_path: str | Path) -> str:
        """Write graph to ``output_path``, return the path written."""

    def output_path_for(self, output_dir: str | Path, stem: str) -> Path:
        """``<output_dir>/<stem><file_extension>``."""
        return Path(output_dir) / f"{stem}{self.file_extension}"
