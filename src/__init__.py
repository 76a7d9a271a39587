# src/__init__.py — v2
"""alpsgraph: merged, typed descriptor graphs of ALPS application profiles."""

from alpsgraph.core.errors import (
    ConflictingDescriptorError,
    ConstructionError,
    CyclicReferenceError,
    DanglingTransitionTargetError,
    DescriptorNotFoundError,
    DocumentLoadError,
    GraphNotReadyError,
    InvalidDescriptorError,
    InvalidDocumentError,
    ProfileError,
    UnknownDescriptorKindError,
    UnresolvedReferenceError,
)
from alpsgraph.core.models import (
    Descriptor,
    IdempotentDescriptor,
    SafeDescriptor,
    SemanticDescriptor,
    StateLink,
    TransitionEdge,
    UnsafeDescriptor,
)
from alpsgraph.graph.builder import GraphState, ProfileGraph, build_graph
from alpsgraph.logging.logger import configure_logging
from alpsgraph.version import __version__

__all__ = [
    "ConflictingDescriptorError",
    "ConstructionError",
    "CyclicReferenceError",
    "DanglingTransitionTargetError",
    "Descriptor",
    "DescriptorNotFoundError",
    "DocumentLoadError",
    "GraphNotReadyError",
    "GraphState",
    "IdempotentDescriptor",
    "InvalidDescriptorError",
    "InvalidDocumentError",
    "ProfileError",
    "ProfileGraph",
    "SafeDescriptor",
    "SemanticDescriptor",
    "StateLink",
    "TransitionEdge",
    "UnknownDescriptorKindError",
    "UnresolvedReferenceError",
    "UnsafeDescriptor",
    "__version__",
    "build_graph",
    "configure_logging",
]
