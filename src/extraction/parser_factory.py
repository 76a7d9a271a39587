# src/extraction/parser_factory.py — v1
"""Factory: instantiate a profile parser from the document extension."""

from __future__ import annotations

from alpsgraph.extraction.base_parser import BaseProfileParser
from alpsgraph.extraction.json_parser import JsonProfileParser
from alpsgraph.extraction.xml_parser import XmlProfileParser

# Registry maps extension → parser class.
_PARSER_REGISTRY: dict[str, type[BaseProfileParser]] = {}


def _register_defaults() -> None:
    """Register built-in parsers."""
    for cls in [JsonProfileParser, XmlProfileParser]:
        for ext in cls().supported_extensions:
            _PARSER_REGISTRY[ext.lower()] = cls


_register_defaults()


class UnsupportedFormatError(ValueError):
    """Raised when no parser is available for a format."""


def create_parser(extension: str, encoding: str = "utf-8") -> BaseProfileParser:
    """Create a parser for the given file extension.

    Args:
        extension: File extension with or without dot (e.g. ".json", "xml").
        encoding: Text encoding used when the parser is handed bytes or a path.

    Raises:
        UnsupportedFormatError: If no parser is registered.
    """
    ext = extension.lower()
    if not ext.startswith("."):
        ext = f".{ext}"

    cls = _PARSER_REGISTRY.get(ext)
    if cls is None:
        raise UnsupportedFormatError(
            f"No profile parser for format {ext!r}. "
            f"Supported: {', '.join(sorted(_PARSER_REGISTRY))}"
        )
    return cls(encoding=encoding)


def register_parser(extension: str, cls: type[BaseProfileParser]) -> None:
    """Register a custom parser for an extension."""
    ext = extension.lower()
    _PARSER_REGISTRY[ext if ext.startswith(".") else f".{ext}"] = cls


def supported_extensions() -> list[str]:
    """Return list of supported file extensions."""
    return sorted(_PARSER_REGISTRY.keys())
