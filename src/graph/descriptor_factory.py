# src/graph/descriptor_factory.py — v1
"""Descriptor factory: type raw instances as one of the four ALPS kinds.

Also holds the two orderings used whenever kinds are listed together:
  - sibling order: (kind rank, id) so states precede safe, unsafe and
    idempotent transitions;
  - display order: case-insensitive id first, kind rank as tie-break.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol, TypeVar

from alpsgraph.core.errors import InvalidDescriptorError, UnknownDescriptorKindError
from alpsgraph.core.models import (
    KIND_RANK,
    Descriptor,
    DescriptorRef,
    IdempotentDescriptor,
    RawInstance,
    SafeDescriptor,
    SemanticDescriptor,
    UnsafeDescriptor,
    strip_reference,
)

logger = logging.getLogger(__name__)


class _Kinded(Protocol):
    @property
    def id(self) -> str | None: ...

    @property
    def type(self) -> str: ...


K = TypeVar("K", bound=_Kinded)


def kind_rank(kind: str) -> int:
    """Rank of a kind tag; unknown tags sort after every known kind."""
    return KIND_RANK.get(kind, len(KIND_RANK))


def sort_by_kind(items: Iterable[K]) -> list[K]:
    """Sibling order: (kind rank, id), id compared case-sensitively."""
    return sorted(items, key=lambda d: (kind_rank(d.type), d.id or ""))


def sort_for_display(items: Iterable[K]) -> list[K]:
    """Display order: case-insensitive id, then kind rank, then exact id."""
    return sorted(
        items,
        key=lambda d: ((d.id or "").upper(), kind_rank(d.type), d.id or ""),
    )


def _to_ref(child: RawInstance) -> DescriptorRef:
    if child.id is not None:
        return DescriptorRef(id=child.id)
    href = child.href or ""
    return DescriptorRef(id=strip_reference(href), href=href, title=child.title)


def create_descriptor(raw: RawInstance) -> Descriptor:
    """Type a raw instance according to its kind tag.

    Nested descriptors become DescriptorRef entries and are not resolved
    here; resolution has already happened on the raw instances.

    Raises:
        InvalidDescriptorError: If the instance has no id.
        UnknownDescriptorKindError: If the kind tag is not an ALPS kind.
    """
    if raw.id is None:
        raise InvalidDescriptorError(f"Cannot type a descriptor without id: {raw.href!r}")

    shared = {
        "id": raw.id,
        "title": raw.title,
        "doc": raw.doc,
        "def_": raw.def_,
        "ref": raw.ref,
        "src": raw.src,
        "rel": raw.rel,
        "tags": tuple(raw.tags),
        "descriptor": tuple(_to_ref(child) for child in raw.descriptor),
        "links": tuple(raw.links),
    }
    rt = raw.rt or ""

    if raw.type == "semantic":
        if rt:
            logger.debug("Ignoring rt %r on semantic descriptor %r", rt, raw.id)
        return SemanticDescriptor(**shared)
    if raw.type == "safe":
        return SafeDescriptor(**shared, rt=rt)
    if raw.type == "unsafe":
        return UnsafeDescriptor(**shared, rt=rt)
    if raw.type == "idempotent":
        return IdempotentDescriptor(**shared, rt=rt)
    raise UnknownDescriptorKindError(
        f"Descriptor {raw.id!r} has unknown type {raw.type!r} "
        f"(expected one of: {', '.join(KIND_RANK)})"
    )
