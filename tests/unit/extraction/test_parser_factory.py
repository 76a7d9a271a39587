# tests/unit/extraction/test_parser_factory.py — v1
"""Tests for extraction/parser_factory.py."""

from __future__ import annotations

import pytest

from alpsgraph.extraction import parser_factory
from alpsgraph.extraction.json_parser import JsonProfileParser
from alpsgraph.extraction.parser_factory import (
    UnsupportedFormatError,
    create_parser,
    register_parser,
    supported_extensions,
)
from alpsgraph.extraction.xml_parser import XmlProfileParser


@pytest.fixture
def isolated_registry(monkeypatch):
    monkeypatch.setattr(parser_factory, "_PARSER_REGISTRY", dict(parser_factory._PARSER_REGISTRY))


class TestCreateParser:
    def test_json(self):
        assert isinstance(create_parser("json"), JsonProfileParser)

    def test_json_with_dot(self):
        assert isinstance(create_parser(".json"), JsonProfileParser)

    def test_xml_uppercase(self):
        assert isinstance(create_parser(".XML"), XmlProfileParser)

    def test_encoding_forwarded(self):
        assert create_parser("json", encoding="latin-1").encoding == "latin-1"

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormatError, match="yaml"):
            create_parser("yaml")

    def test_unsupported_is_value_error(self):
        assert issubclass(UnsupportedFormatError, ValueError)


class TestRegistry:
    def test_supported_extensions_list(self):
        assert supported_extensions() == [".json", ".xml"]

    def test_register_custom(self, isolated_registry):
        register_parser("alps", JsonProfileParser)
        assert ".alps" in supported_extensions()
        assert isinstance(create_parser("alps"), JsonProfileParser)

    def test_registration_isolated(self):
        assert ".alps" not in supported_extensions()
