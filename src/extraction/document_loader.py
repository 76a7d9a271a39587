# src/extraction/document_loader.py — v1
"""Document loaders: map file identities to parsed profile documents.

A loader owns two concerns the graph builder does not: turning a file
segment of an ``href`` into a file identity relative to the referencing
document, and reading plus parsing that document.
"""

from __future__ import annotations

import logging
import posixpath
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Any

from alpsgraph.core.errors import DocumentLoadError
from alpsgraph.core.models import ProfileDocument
from alpsgraph.extraction.json_parser import JsonProfileParser
from alpsgraph.extraction.parser_factory import UnsupportedFormatError, create_parser

logger = logging.getLogger(__name__)

_REMOTE_PREFIXES = ("http://", "https://")


def is_remote(file_id: str) -> bool:
    return file_id.lower().startswith(_REMOTE_PREFIXES)


class DocumentLoader(ABC):
    """Resolve and load profile documents by file identity."""

    def identify(self, file_id: str) -> str:
        """Canonical identity of a top-level file id."""
        return file_id

    @abstractmethod
    def resolve(self, origin: str, target_file: str) -> str:
        """Identity of ``target_file`` as referenced from document ``origin``."""

    @abstractmethod
    def load(self, file_id: str) -> ProfileDocument:
        """Read and parse the document with identity ``file_id``.

        Raises:
            DocumentLoadError: If the document does not exist or cannot be read.
            InvalidDocumentError: If the document is malformed.
        """


class FileDocumentLoader(DocumentLoader):
    """Load local ALPS-JSON / ALPS-XML files; identities are absolute paths."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def identify(self, file_id: str) -> str:
        if is_remote(file_id):
            return file_id
        return str(Path(file_id).expanduser().resolve())

    def resolve(self, origin: str, target_file: str) -> str:
        if is_remote(target_file):
            return target_file
        path = Path(target_file)
        if not path.is_absolute():
            path = Path(origin).parent / path
        return str(path.resolve())

    def load(self, file_id: str) -> ProfileDocument:
        if is_remote(file_id):
            raise DocumentLoadError(f"Remote profiles are not supported: {file_id}")
        path = Path(file_id)
        if not path.is_file():
            raise DocumentLoadError(f"Profile not found: {file_id}")
        try:
            parser = create_parser(path.suffix, encoding=self.encoding)
        except UnsupportedFormatError as exc:
            raise DocumentLoadError(str(exc)) from exc
        try:
            document = parser.parse(path, source=file_id)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Cannot read {file_id}: {exc}") from exc
        logger.debug("Loaded %s: %d root descriptors", file_id, len(document.descriptors))
        return document


class InMemoryDocumentLoader(DocumentLoader):
    """Serve profiles held in memory, keyed by POSIX-style relative names.

    Values may be ProfileDocument instances, decoded ALPS-JSON mappings,
    or raw document text (parsed by the key's extension).
    """

    def __init__(self, documents: Mapping[str, ProfileDocument | Mapping[str, Any] | str]) -> None:
        self._documents = dict(documents)

    def identify(self, file_id: str) -> str:
        return posixpath.normpath(file_id)

    def resolve(self, origin: str, target_file: str) -> str:
        return posixpath.normpath(posixpath.join(posixpath.dirname(origin), target_file))

    def load(self, file_id: str) -> ProfileDocument:
        if file_id not in self._documents:
            raise DocumentLoadError(f"Profile not found: {file_id}")
        value = self._documents[file_id]
        if isinstance(value, ProfileDocument):
            return value
        if isinstance(value, str):
            try:
                parser = create_parser(PurePosixPath(file_id).suffix or ".json")
            except UnsupportedFormatError as exc:
                raise DocumentLoadError(str(exc)) from exc
            return parser.parse(value, source=file_id)
        return JsonProfileParser().parse_data(dict(value), source=file_id)
