# src/graph/reference_registry.py — v2
"""Reference registry: collect pending references and merge their targets.

References are recorded while a document is scanned and resolved once
scanning is complete:
  - bare ``id`` and ``#id`` point into the referencing document itself;
  - ``other.json#id`` scans ``other.json`` (relative to the referencing
    document) and copies the sub-tree of ``id`` into the local
    InstanceStore: the instance, its nested descriptors and its ``rt``
    target, transitively.

Referenced documents are scanned, never fully built. Only references
reachable from the requested id are followed into further documents, each
one extending the (file, id) chain that led to it. A target already on
that chain is a real dependency loop and cannot be finitely merged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from alpsgraph.core.errors import CyclicReferenceError, UnresolvedReferenceError
from alpsgraph.core.models import RawInstance, ReferenceRole
from alpsgraph.extraction.document_loader import DocumentLoader
from alpsgraph.graph.instance_store import InstanceStore

logger = logging.getLogger(__name__)

ResolutionChain = tuple[tuple[str, str], ...]
DocumentScanner = Callable[[str], InstanceStore]


@dataclass(frozen=True)
class PendingReference:
    """A reference found while scanning ``origin``."""

    origin: str
    target: str
    role: ReferenceRole = "href"


def split_specifier(specifier: str) -> tuple[str | None, str]:
    """Split a reference into (file segment or None, descriptor id)."""
    if "#" not in specifier:
        return None, specifier
    file_part, _, descriptor_id = specifier.partition("#")
    return file_part or None, descriptor_id


def instance_references(instance: RawInstance) -> list[tuple[str, ReferenceRole]]:
    """Specifiers ``instance`` depends on: its ``rt`` and its nested descriptors.

    Inline children appear under their bare id, aliases under their href.
    """
    references: list[tuple[str, ReferenceRole]] = []
    if instance.rt:
        references.append((instance.rt, "rt"))
    for child in instance.descriptor:
        if child.id is not None:
            references.append((child.id, "href"))
        elif child.is_reference:
            references.append((child.href or "", "href"))
    return references


class ReferenceRegistry:
    """Pending references of one document build.

    Args:
        loader: Resolves file segments relative to the referencing document.
        scan_document: Scans the referenced file with the given identity and
            returns its raw InstanceStore.
    """

    def __init__(self, loader: DocumentLoader, scan_document: DocumentScanner) -> None:
        self._loader = loader
        self._scan_document = scan_document
        self._pending: dict[tuple[str, str], PendingReference] = {}
        self._stores: dict[str, InstanceStore] = {}
        self._collected: dict[tuple[str, str], list[RawInstance]] = {}

    @property
    def pending(self) -> list[PendingReference]:
        return list(self._pending.values())

    def register(self, origin: str, target: str, role: ReferenceRole = "href") -> None:
        """Record a reference; repeated (origin, target) pairs are kept once.

        An ``href`` registration outranks an earlier ``rt`` one for the same
        pair, since only hrefs must resolve during this stage.
        """
        key = (origin, target)
        existing = self._pending.get(key)
        if existing is None or (existing.role == "rt" and role == "href"):
            self._pending[key] = PendingReference(origin=origin, target=target, role=role)

    def resolve_all(self, store: InstanceStore, chain: ResolutionChain = ()) -> int:
        """Resolve and consume every pending reference.

        Args:
            store: InstanceStore of the document being built; receives merges.
            chain: (file, id) targets the caller is already resolving.

        Returns:
            Number of instances newly merged into ``store``.

        Raises:
            UnresolvedReferenceError: If a target id does not exist.
            CyclicReferenceError: If a target depends on itself across files.
            ConflictingDescriptorError: If a merged id clashes with a local one.
        """
        pending = list(self._pending.values())
        self._pending.clear()

        merged = 0
        for reference in pending:
            merged += self._resolve(reference, store, chain)

        if pending:
            logger.info(
                "Resolved %d references (%d instances merged, %d documents scanned)",
                len(pending),
                merged,
                len(self._stores),
            )
        return merged

    def _resolve(
        self,
        reference: PendingReference,
        store: InstanceStore,
        chain: ResolutionChain,
    ) -> int:
        file_part, descriptor_id = split_specifier(reference.target)
        if not descriptor_id:
            raise UnresolvedReferenceError(
                f"Reference {reference.target!r} in {reference.origin} names no descriptor"
            )

        file_id = (
            reference.origin
            if file_part is None
            else self._loader.resolve(reference.origin, file_part)
        )

        if file_id == reference.origin:
            if descriptor_id in store:
                return 0
            if reference.role == "rt":
                # Checked against the typed graph by the transition linker.
                logger.debug("Deferring local rt %r to linking", reference.target)
                return 0
            raise UnresolvedReferenceError(
                f"Reference {reference.target!r} in {reference.origin}: "
                f"no descriptor {descriptor_id!r}"
            )

        return store.merge(self._collect(file_id, descriptor_id, chain))

    def _store_for(self, file_id: str) -> InstanceStore:
        store = self._stores.get(file_id)
        if store is None:
            logger.debug("Scanning referenced profile %s", file_id)
            store = self._scan_document(file_id)
            self._stores[file_id] = store
        return store

    def _collect(
        self, file_id: str, descriptor_id: str, chain: ResolutionChain
    ) -> list[RawInstance]:
        """Raw sub-tree of ``descriptor_id`` in ``file_id``, following other files."""
        key = (file_id, descriptor_id)
        if key in chain:
            raise CyclicReferenceError(chain + (key,))
        cached = self._collected.get(key)
        if cached is not None:
            return cached

        chain = chain + (key,)
        source = self._store_for(file_id)
        if descriptor_id not in source:
            raise UnresolvedReferenceError(
                f"Reference to {descriptor_id!r}: no such descriptor in {file_id}"
            )

        local: dict[str, RawInstance] = {}
        remote: list[RawInstance] = []
        stack = [descriptor_id]
        while stack:
            current = stack.pop()
            if current in local:
                continue
            instance = source.get(current)
            local[current] = instance
            for specifier, role in instance_references(instance):
                file_part, dependency = split_specifier(specifier)
                dependency_file = (
                    file_id if file_part is None else self._loader.resolve(file_id, file_part)
                )
                if dependency_file != file_id:
                    remote.extend(self._collect(dependency_file, dependency, chain))
                elif dependency in source:
                    stack.append(dependency)
                elif role == "href":
                    raise UnresolvedReferenceError(
                        f"Reference {specifier!r} in {file_id}: no descriptor {dependency!r}"
                    )
                # A missing local rt surfaces as a dangling transition once merged.

        collected = [*local.values(), *remote]
        self._collected[key] = collected
        return collected
