# src/core/errors.py — v1
"""Error taxonomy shared by loading, resolution, typing and linking.

Structural errors derive from ConstructionError and abort a whole graph
build. ConflictingDescriptorError and DescriptorNotFoundError belong to
the operation that raised them. GraphNotReadyError signals misuse of the
read API by calling code.
"""

from __future__ import annotations


class ProfileError(Exception):
    """Base class for every profile graph error."""


class ConstructionError(ProfileError):
    """Raised when a profile graph cannot be built consistently."""


class DocumentLoadError(ConstructionError):
    """Raised when a profile document cannot be located or read."""


class InvalidDocumentError(ConstructionError):
    """Raised when a profile document is not well-formed."""


class InvalidDescriptorError(ConstructionError):
    """Raised for a descriptor node carrying neither an id nor an href."""


class UnresolvedReferenceError(ConstructionError):
    """Raised when an href or alias target does not exist after loading."""


class CyclicReferenceError(ConstructionError):
    """Raised when a (file, id) target reappears in its own resolution chain."""

    def __init__(self, chain: tuple[tuple[str, str], ...]) -> None:
        self.chain = chain
        path = " -> ".join(f"{file}#{descriptor_id}" for file, descriptor_id in chain)
        super().__init__(f"Cyclic reference: {path}")


class UnknownDescriptorKindError(ConstructionError):
    """Raised when a descriptor's type is not one of the four ALPS kinds."""


class DanglingTransitionTargetError(ConstructionError):
    """Raised when a transition's rt names no semantic descriptor."""


class ConflictingDescriptorError(ProfileError):
    """Raised when one id is merged twice with different content."""


class DescriptorNotFoundError(ProfileError, LookupError):
    """Raised when looking up an id that is not in the store or graph."""


class GraphNotReadyError(ProfileError, RuntimeError):
    """Raised when the read API is used before construction has finished."""
