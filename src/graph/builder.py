# src/graph/builder.py — v2
"""Profile graph builder: merged, typed, linked descriptor graph of one profile.

Construction runs five stages in strict sequence:
  1. SCANNING   load the document, flatten descriptors into the InstanceStore
                and register every href / rt reference;
  2. RESOLVING  resolve references, scanning referenced documents as needed;
  3. TYPING     order instances and type them through the descriptor factory;
  4. LINKING    derive transition edges, state links and the tag index;
  5. FINALIZED  read-only; the only state exposing the read API.

Any error aborts the build and leaves the graph unreadable.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from enum import Enum

from alpsgraph.config.settings import Settings, load_settings
from alpsgraph.core.errors import (
    DescriptorNotFoundError,
    GraphNotReadyError,
    InvalidDescriptorError,
)
from alpsgraph.core.models import (
    Descriptor,
    LinkRelation,
    RawInstance,
    StateLink,
    TransitionEdge,
    strip_reference,
)
from alpsgraph.extraction.document_loader import DocumentLoader, FileDocumentLoader
from alpsgraph.graph.descriptor_factory import (
    create_descriptor,
    sort_by_kind,
    sort_for_display,
)
from alpsgraph.graph.instance_store import InstanceStore
from alpsgraph.graph.reference_registry import ReferenceRegistry, instance_references
from alpsgraph.graph.transition_linker import link_states, link_transitions
from alpsgraph.logging.context import build_scope, get_context, profile_context, set_stage

logger = logging.getLogger(__name__)


class GraphState(str, Enum):
    """Construction state of a ProfileGraph."""

    UNINITIALIZED = "uninitialized"
    SCANNING = "scanning"
    RESOLVING = "resolving"
    TYPING = "typing"
    LINKING = "linking"
    FINALIZED = "finalized"


class ProfileGraph:
    """Descriptor graph of one ALPS profile document.

    Owns the InstanceStore, the typed descriptor map, the tag index and the
    transition edges of its document. Instances merged from referenced
    documents are copies taken from scans of those documents.

    Args:
        file_id: Identity of the profile document (a path for file loaders).
        loader: Document loader; defaults to a FileDocumentLoader.
        settings: Settings; defaults to load_settings().
    """

    def __init__(
        self,
        file_id: str,
        *,
        loader: DocumentLoader | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or load_settings()
        self._loader = loader or FileDocumentLoader(encoding=self._settings.profile_encoding)
        self.file_id = self._loader.identify(file_id)
        self._state = GraphState.UNINITIALIZED

        self._store = InstanceStore(conflict_policy=self._settings.conflict_policy)
        self._registry = ReferenceRegistry(self._loader, self._scan_referenced)

        # Profile metadata, available once scanning has started.
        self.schema_uri = ""
        self.title = ""
        self.doc = ""
        self.links: tuple[LinkRelation, ...] = ()

        self._descriptors: dict[str, Descriptor] = {}
        self._tags: dict[str, tuple[str, ...]] = {}
        self._transitions: frozenset[TransitionEdge] = frozenset()
        self._state_links: tuple[StateLink, ...] = ()

    def __repr__(self) -> str:
        return f"ProfileGraph({self.file_id!r}, state={self._state.value})"

    @property
    def state(self) -> GraphState:
        return self._state

    # --- Construction ---

    def construct(self) -> ProfileGraph:
        """Run the construction pipeline once.

        Raises:
            GraphNotReadyError: If construction was already started.
            ConstructionError: On any structural problem in the profile or
                the profiles it references.
            ConflictingDescriptorError: If merged definitions clash.
        """
        if self._state is not GraphState.UNINITIALIZED:
            raise GraphNotReadyError(
                f"Construction of {self.file_id} already started ({self._state.value})"
            )

        with profile_context(self.file_id):
            self._advance(GraphState.SCANNING)
            self._scan()

            self._advance(GraphState.RESOLVING)
            self._registry.resolve_all(self._store)

            self._advance(GraphState.TYPING)
            typed = [create_descriptor(raw) for raw in sort_for_display(self._store.all())]
            self._descriptors = {descriptor.id: descriptor for descriptor in typed}

            self._advance(GraphState.LINKING)
            self._transitions = link_transitions(self._descriptors)
            self._state_links = tuple(link_states(self._descriptors))
            self._tags = build_tag_index(self._descriptors.values())

            self._advance(GraphState.FINALIZED)
            logger.info(
                "Built profile graph %s: %d descriptors (%d semantic), "
                "%d transitions, %d tags",
                self.file_id,
                len(self._descriptors),
                sum(1 for d in self._descriptors.values() if d.type == "semantic"),
                len(self._transitions),
                len(self._tags),
            )
        return self

    def scan(self) -> InstanceStore:
        """Run the scanning stage only and return the raw InstanceStore.

        Referenced documents are read this way: their own references are
        followed by the referencing registry as far as the requested ids
        need, never resolved wholesale.

        Raises:
            GraphNotReadyError: If construction was already started.
        """
        if self._state is not GraphState.UNINITIALIZED:
            raise GraphNotReadyError(
                f"Construction of {self.file_id} already started ({self._state.value})"
            )
        with profile_context(self.file_id):
            self._advance(GraphState.SCANNING)
            self._scan()
        return self._store

    def _advance(self, state: GraphState) -> None:
        self._state = state
        set_stage(state.value)
        logger.debug("%s -> %s", self.file_id, state.value)

    def _scan_referenced(self, file_id: str) -> InstanceStore:
        return ProfileGraph(file_id, loader=self._loader, settings=self._settings).scan()

    def _scan(self) -> None:
        document = self._loader.load(self.file_id)
        self.schema_uri = document.schema_uri
        self.title = document.title
        self.doc = document.doc
        self.links = tuple(document.links)
        self._store_descriptors(document.descriptors)

    def _store_descriptors(self, raw_descriptors: list[RawInstance]) -> None:
        for raw in raw_descriptors:
            if raw.rt:
                self._registry.register(self.file_id, raw.rt, role="rt")

            if raw.id is not None:
                self._store.add(raw)
                self._store_descriptors(raw.descriptor)
                continue

            if raw.is_reference:
                self._registry.register(self.file_id, raw.href, role="href")
                continue

            raise InvalidDescriptorError(
                f"Descriptor in {self.file_id} has neither id nor href: "
                f"{raw.model_dump(by_alias=True, exclude_defaults=True)}"
            )

    # --- Read API ---

    def _require_finalized(self) -> None:
        if self._state is not GraphState.FINALIZED:
            raise GraphNotReadyError(
                f"Profile graph {self.file_id} is not finalized ({self._state.value})"
            )

    def descriptors(self) -> list[Descriptor]:
        """All descriptors in display order (case-insensitive id, then kind)."""
        self._require_finalized()
        return list(self._descriptors.values())

    def lookup(self, descriptor_id: str) -> Descriptor:
        self._require_finalized()
        try:
            return self._descriptors[descriptor_id]
        except KeyError:
            raise DescriptorNotFoundError(descriptor_id) from None

    def tags(self) -> dict[str, tuple[str, ...]]:
        """Tag index: tag -> descriptor ids, keys sorted ascending."""
        self._require_finalized()
        return dict(self._tags)

    def transitions(self) -> frozenset[TransitionEdge]:
        self._require_finalized()
        return self._transitions

    def state_links(self) -> list[StateLink]:
        self._require_finalized()
        return list(self._state_links)

    def children(self, descriptor_id: str) -> list[Descriptor]:
        """Descriptors nested under ``descriptor_id``, in sibling order.

        Alias entries carrying a title show that title instead of the
        referenced descriptor's own.
        """
        parent = self.lookup(descriptor_id)
        nested: list[Descriptor] = []
        for ref in parent.descriptor:
            child = self.lookup(ref.id)
            if ref.is_alias and ref.title is not None:
                child = child.model_copy(update={"title": ref.title})
            nested.append(child)
        return sort_by_kind(nested)

    def export(self, descriptor_id: str) -> list[RawInstance]:
        """Raw instances needed to define ``descriptor_id`` elsewhere.

        Contains the instance itself, its nested descriptors and its rt
        target, transitively.

        Raises:
            DescriptorNotFoundError: If the id is not in this profile.
        """
        self._require_finalized()
        root = self._store.get(descriptor_id)

        collected: dict[str, RawInstance] = {}
        stack = [root]
        while stack:
            instance = stack.pop()
            if instance.id is None or instance.id in collected:
                continue
            collected[instance.id] = instance
            for dependency in _dependencies(instance):
                if dependency in self._store and dependency not in collected:
                    stack.append(self._store.get(dependency))
        return list(collected.values())


def _dependencies(instance: RawInstance) -> list[str]:
    return [strip_reference(specifier) for specifier, _ in instance_references(instance)]


def build_tag_index(descriptors: Iterable[Descriptor]) -> dict[str, tuple[str, ...]]:
    """Map each tag to the ids declaring it (once each), keys sorted."""
    index: dict[str, list[str]] = {}
    for descriptor in descriptors:
        for tag in descriptor.tags:
            ids = index.setdefault(tag, [])
            if descriptor.id not in ids:
                ids.append(descriptor.id)
    return {tag: tuple(index[tag]) for tag in sorted(index)}


def build_graph(
    file_id: str,
    *,
    loader: DocumentLoader | None = None,
    settings: Settings | None = None,
) -> ProfileGraph:
    """Build and finalize the profile graph of ``file_id``.

    Raises:
        ConstructionError: On any structural problem; no graph is returned.
        ConflictingDescriptorError: If merged definitions clash.
    """
    settings = settings or load_settings()
    if get_context().build_id is not None:
        return ProfileGraph(file_id, loader=loader, settings=settings).construct()
    with build_scope(uuid.uuid4().hex[:12]):
        return ProfileGraph(file_id, loader=loader, settings=settings).construct()
