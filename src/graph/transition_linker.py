# src/graph/transition_linker.py — v1
"""Transition linker: derive state-diagram edges from typed descriptors.

Two relations are produced:
  - transition edges: transition descriptor -> semantic descriptor it
    reaches (``rt``), one per (source, target, kind);
  - state links: semantic descriptor offering a transition -> semantic
    descriptor reached, labelled with the transition.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from alpsgraph.core.errors import DanglingTransitionTargetError
from alpsgraph.core.models import (
    Descriptor,
    SemanticDescriptor,
    StateLink,
    TransitionDescriptor,
    TransitionEdge,
)

logger = logging.getLogger(__name__)


def link_transitions(descriptors: Mapping[str, Descriptor]) -> frozenset[TransitionEdge]:
    """Build the deduplicated transition edge set.

    Args:
        descriptors: Typed descriptors keyed by id. Not modified.

    Returns:
        Frozen set of TransitionEdge.

    Raises:
        DanglingTransitionTargetError: If an ``rt`` names no descriptor, or
            names one that is not semantic.
    """
    edges: set[TransitionEdge] = set()

    for descriptor in descriptors.values():
        if not isinstance(descriptor, TransitionDescriptor) or not descriptor.rt:
            continue
        target = descriptors.get(descriptor.target_id)
        if target is None:
            raise DanglingTransitionTargetError(
                f"Transition {descriptor.id!r} has rt {descriptor.rt!r} "
                f"but no descriptor {descriptor.target_id!r} exists"
            )
        if not isinstance(target, SemanticDescriptor):
            raise DanglingTransitionTargetError(
                f"Transition {descriptor.id!r} has rt {descriptor.rt!r} "
                f"which is a {target.type} descriptor, not a semantic one"
            )
        edges.add(
            TransitionEdge(source=descriptor.id, target=target.id, kind=descriptor.type)
        )

    logger.debug("Linked %d transition edges", len(edges))
    return frozenset(edges)


def link_states(descriptors: Mapping[str, Descriptor]) -> list[StateLink]:
    """Build state-to-state links from transitions nested in semantic descriptors.

    Assumes ``link_transitions`` has accepted the same mapping, so every
    ``rt`` is known to reach a semantic descriptor.

    Returns:
        StateLinks sorted by (source, target, transition).
    """
    links: dict[StateLink, None] = {}

    for descriptor in descriptors.values():
        if not isinstance(descriptor, SemanticDescriptor):
            continue
        for ref in descriptor.descriptor:
            child = descriptors.get(ref.id)
            if not isinstance(child, TransitionDescriptor) or not child.rt:
                continue
            link = StateLink(
                source=descriptor.id,
                target=child.target_id,
                transition=child.id,
                kind=child.type,
            )
            links[link] = None

    return sorted(links, key=lambda link: (link.source, link.target, link.transition))
