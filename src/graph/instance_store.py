# src/graph/instance_store.py — v1
"""Flat id -> RawInstance registry for one profile graph.

Holds every descriptor definition of a document (at any nesting depth)
plus the instances merged in from referenced documents. Ordering is
insertion order; the graph builder normalizes it before typing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Literal

from alpsgraph.core.errors import ConflictingDescriptorError, DescriptorNotFoundError
from alpsgraph.core.models import RawInstance

logger = logging.getLogger(__name__)

ConflictPolicy = Literal["fail", "keep_first"]


class InstanceStore:
    """Mapping of descriptor id to its raw, untyped definition."""

    def __init__(self, conflict_policy: ConflictPolicy = "fail") -> None:
        self._instances: dict[str, RawInstance] = {}
        self._conflict_policy = conflict_policy

    def __contains__(self, descriptor_id: object) -> bool:
        return descriptor_id in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def add(self, instance: RawInstance) -> bool:
        """Store ``instance`` under its id.

        Returns:
            True if the instance was inserted, False if an identical one was
            already present (or a conflicting one was kept under keep_first).

        Raises:
            ValueError: If the instance has no id.
            ConflictingDescriptorError: If the id is already stored with
                different content and the policy is "fail".
        """
        if instance.id is None:
            raise ValueError("Only descriptors with an id can be stored")

        existing = self._instances.get(instance.id)
        if existing is None:
            self._instances[instance.id] = instance
            return True
        if existing == instance:
            return False
        if self._conflict_policy == "keep_first":
            logger.warning("Conflicting definitions of %r, keeping the first", instance.id)
            return False
        raise ConflictingDescriptorError(
            f"Descriptor {instance.id!r} is defined twice with different content"
        )

    def merge(self, instances: Iterable[RawInstance]) -> int:
        """Add several instances; return how many were newly inserted."""
        return sum(1 for instance in instances if self.add(instance))

    def get(self, descriptor_id: str) -> RawInstance:
        try:
            return self._instances[descriptor_id]
        except KeyError:
            raise DescriptorNotFoundError(descriptor_id) from None

    def all(self) -> Iterable[RawInstance]:
        """Restartable view over stored instances in insertion order."""
        return self._instances.values()

    def ids(self) -> list[str]:
        return list(self._instances)
