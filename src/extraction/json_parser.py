# src/extraction/json_parser.py — v1
"""ALPS-JSON parser.

Expected shape::

    {"$schema": "...", "alps": {"title": "...", "doc": {"value": "..."},
                                "link": [...], "descriptor": [...]}}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from alpsgraph.core.errors import InvalidDocumentError
from alpsgraph.core.models import ProfileDocument
from alpsgraph.extraction.base_parser import BaseProfileParser


class JsonProfileParser(BaseProfileParser):
    """Parser for ALPS-JSON profiles (.json)."""

    @property
    def supported_extensions(self) -> list[str]:
        return [".json"]

    def parse(self, content: bytes | str | Path, source: str = "<memory>") -> ProfileDocument:
        """Decode JSON text and convert it to a ProfileDocument."""
        text = self._read_content(content)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidDocumentError(f"Invalid JSON in {source}: {exc}") from exc
        return self.parse_data(data, source=source)

    def parse_data(self, data: Any, source: str = "<memory>") -> ProfileDocument:
        """Convert already-decoded ALPS-JSON data to a ProfileDocument."""
        if not isinstance(data, dict) or not isinstance(data.get("alps"), dict):
            raise InvalidDocumentError(f"Missing 'alps' object in {source}")
        alps = data["alps"]
        return self._build_document(
            source,
            schema_uri=data.get("$schema"),
            title=alps.get("title"),
            doc=alps.get("doc"),
            links=alps.get("link"),
            descriptors=alps.get("descriptor"),
        )
