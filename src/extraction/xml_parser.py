# src/extraction/xml_parser.py — v1
"""ALPS-XML parser.

Descriptor attributes (id, type, href, rt, def, ref, src, rel, tag, title)
map one to one onto ALPS-JSON keys; ``doc``, ``link`` and nested
``descriptor`` are child elements. Namespaced documents are accepted by
comparing local tag names only.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from alpsgraph.core.errors import InvalidDocumentError
from alpsgraph.core.models import ProfileDocument
from alpsgraph.extraction.base_parser import BaseProfileParser

XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(el: ET.Element, name: str) -> list[ET.Element]:
    return [c for c in el if isinstance(c.tag, str) and _local(c.tag) == name]


def _text(el: ET.Element | None) -> str | None:
    if el is None:
        return None
    return (el.text or "").strip()


def _element_to_dict(el: ET.Element) -> dict[str, Any]:
    data: dict[str, Any] = {_local(k): v for k, v in el.attrib.items()}
    docs = _children(el, "doc")
    if docs:
        data["doc"] = _text(docs[0])
    links = [dict(link.attrib) for link in _children(el, "link")]
    if links:
        data["link"] = links
    nested = [_element_to_dict(child) for child in _children(el, "descriptor")]
    if nested:
        data["descriptor"] = nested
    return data


class XmlProfileParser(BaseProfileParser):
    """Parser for ALPS-XML profiles (.xml)."""

    @property
    def supported_extensions(self) -> list[str]:
        return [".xml"]

    def parse(self, content: bytes | str | Path, source: str = "<memory>") -> ProfileDocument:
        """Parse ALPS-XML text into a ProfileDocument."""
        text = self._read_content(content)
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise InvalidDocumentError(f"Invalid XML in {source}: {exc}") from exc
        if _local(root.tag) != "alps":
            raise InvalidDocumentError(f"Root element of {source} is not <alps>")

        titles = _children(root, "title")
        docs = _children(root, "doc")
        return self._build_document(
            source,
            schema_uri=root.get(f"{{{XSI_NS}}}noNamespaceSchemaLocation"),
            title=_text(titles[0]) if titles else None,
            doc=_text(docs[0]) if docs else None,
            links=[dict(link.attrib) for link in _children(root, "link")],
            descriptors=[_element_to_dict(d) for d in _children(root, "descriptor")],
        )
