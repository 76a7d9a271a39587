# src/core/models.py — v2
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
Raw models mirror the ALPS document shape, typed models are frozen
once the graph has been built.
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

DescriptorKind = Literal["semantic", "safe", "unsafe", "idempotent"]
TransitionKind = Literal["safe", "unsafe", "idempotent"]
ReferenceRole = Literal["href", "rt"]

# Listing order for mixed kinds: states first, then transitions.
KIND_RANK: dict[str, int] = {
    "semantic": 0,
    "safe": 1,
    "unsafe": 2,
    "idempotent": 3,
}

TRANSITION_KINDS: frozenset[str] = frozenset({"safe", "unsafe", "idempotent"})


def strip_reference(specifier: str) -> str:
    """Return the id part of a reference (``home``, ``#home``, ``f.json#home``)."""
    if "#" in specifier:
        return specifier.split("#", 1)[1]
    return specifier


# === RAW DOCUMENT MODELS ===


class LinkRelation(BaseModel):
    """Link relation attached to a profile or a descriptor."""

    model_config = {"frozen": True}

    href: str
    rel: str
    title: str = ""

    @model_validator(mode="before")
    @classmethod
    def _require_href_and_rel(cls, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict) or not data.get("href") or not data.get("rel"):
            raise ValueError(f"Invalid link relation: {data!r}")
        return data


class RawInstance(BaseModel):
    """Untyped descriptor node exactly as declared in a profile document."""

    model_config = {"populate_by_name": True, "extra": "ignore"}

    id: str | None = None
    type: str = "semantic"
    title: str | None = None
    doc: str | None = None
    def_: str | None = Field(default=None, alias="def")
    ref: str | None = None
    src: str | None = None
    rel: str | None = None
    tags: list[str] = Field(default_factory=list, alias="tag")
    descriptor: list[RawInstance] = Field(default_factory=list)
    rt: str | None = None
    href: str | None = None
    links: list[LinkRelation] = Field(default_factory=list, alias="link")

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, v: Any) -> Any:
        return "semantic" if v is None else v

    @field_validator("doc", mode="before")
    @classmethod
    def _flatten_doc(cls, v: Any) -> Any:
        # ALPS allows {"format": "text", "value": "..."}
        if isinstance(v, dict):
            return v.get("value")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return v.split()
        return v

    @field_validator("descriptor", mode="before")
    @classmethod
    def _default_descriptor(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("links", mode="before")
    @classmethod
    def _listify_links(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, dict):
            return [v]
        return v

    @property
    def is_reference(self) -> bool:
        """True for href-only shorthand nodes."""
        return self.id is None and bool(self.href)


RawInstance.model_rebuild()


class ProfileDocument(BaseModel):
    """Parsed profile document: metadata plus the root descriptor list."""

    schema_uri: str = ""
    title: str = ""
    doc: str = ""
    links: list[LinkRelation] = Field(default_factory=list)
    descriptors: list[RawInstance] = Field(default_factory=list)


# === TYPED DESCRIPTORS ===


class DescriptorRef(BaseModel):
    """Nested descriptor entry: an inline id or an alias with optional title."""

    model_config = {"frozen": True}

    id: str
    href: str | None = None
    title: str | None = None

    @property
    def is_alias(self) -> bool:
        return self.href is not None


class BaseDescriptor(BaseModel):
    """Attributes shared by all four descriptor kinds."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: str
    type: DescriptorKind
    title: str | None = None
    doc: str | None = None
    def_: str | None = Field(default=None, alias="def")
    ref: str | None = None
    src: str | None = None
    rel: str | None = None
    tags: tuple[str, ...] = ()
    descriptor: tuple[DescriptorRef, ...] = ()
    links: tuple[LinkRelation, ...] = ()


class SemanticDescriptor(BaseDescriptor):
    """Application state."""

    type: Literal["semantic"] = "semantic"


class TransitionDescriptor(BaseDescriptor):
    """State transition leading to the semantic descriptor named by ``rt``."""

    type: TransitionKind
    rt: str = ""

    @property
    def target_id(self) -> str:
        return strip_reference(self.rt)


class SafeDescriptor(TransitionDescriptor):
    type: Literal["safe"] = "safe"


class UnsafeDescriptor(TransitionDescriptor):
    type: Literal["unsafe"] = "unsafe"


class IdempotentDescriptor(TransitionDescriptor):
    type: Literal["idempotent"] = "idempotent"


Descriptor = Union[
    SemanticDescriptor, SafeDescriptor, UnsafeDescriptor, IdempotentDescriptor
]


# === GRAPH EDGES ===


class TransitionEdge(BaseModel):
    """Directed edge from a transition descriptor to the state it reaches."""

    model_config = {"frozen": True}

    source: str
    target: str
    kind: TransitionKind

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.source, self.target, self.kind)


class StateLink(BaseModel):
    """State-to-state arrow: a semantic descriptor offering a transition."""

    model_config = {"frozen": True}

    source: str
    target: str
    transition: str
    kind: TransitionKind
