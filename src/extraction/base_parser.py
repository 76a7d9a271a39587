# src/extraction/base_parser.py — v1
"""Abstract parser interface for profile document formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from alpsgraph.core.errors import InvalidDocumentError
from alpsgraph.core.models import ProfileDocument


class BaseProfileParser(ABC):
    """Unified interface for ALPS profile parsers."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """File extensions this parser handles (e.g., ['.json'])."""

    @abstractmethod
    def parse(self, content: bytes | str | Path, source: str = "<memory>") -> ProfileDocument:
        """Parse a profile document into its metadata and root descriptors."""

    def _read_content(self, content: bytes | str | Path) -> str:
        if isinstance(content, Path):
            return content.read_text(encoding=self.encoding)
        if isinstance(content, bytes):
            return content.decode(self.encoding)
        return content

    @staticmethod
    def _build_document(
        source: str,
        *,
        schema_uri: Any,
        title: Any,
        doc: Any,
        links: Any,
        descriptors: Any,
    ) -> ProfileDocument:
        if isinstance(doc, dict):
            doc = doc.get("value")
        if isinstance(links, dict):
            links = [links]
        try:
            return ProfileDocument(
                schema_uri=schema_uri or "",
                title=title or "",
                doc=doc or "",
                links=links or [],
                descriptors=descriptors or [],
            )
        except ValidationError as exc:
            raise InvalidDocumentError(f"Invalid profile {source}: {exc}") from exc
