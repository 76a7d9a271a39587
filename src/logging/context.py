# src/logging/context.py — v1
"""Contextual logging support: attach build_id, profile_file, stage to log records.

Scans of referenced profiles push their own profile file
and stage, and restore the outer values when they finish.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per graph build.
_build_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "build_id", default=None
)
_profile_file: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "profile_file", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    build_id: str | None = None
    profile_file: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        build_id=_build_id.get(),
        profile_file=_profile_file.get(),
        stage=_stage.get(),
    )


@contextmanager
def build_scope(build_id: str) -> Iterator[None]:
    """Tag every record of one top-level build with ``build_id``."""
    token = _build_id.set(build_id)
    try:
        yield
    finally:
        _build_id.reset(token)


def set_stage(stage: str | None) -> None:
    """Set the construction stage of the profile currently being built."""
    _stage.set(stage)


@contextmanager
def profile_context(profile_file: str, stage: str | None = None) -> Iterator[None]:
    """Scope log records to one profile file, restoring the outer one on exit."""
    file_token = _profile_file.set(profile_file)
    stage_token = _stage.set(stage)
    try:
        yield
    finally:
        _stage.reset(stage_token)
        _profile_file.reset(file_token)


def clear_context() -> None:
    """Reset all context variables."""
    _build_id.set(None)
    _profile_file.set(None)
    _stage.set(None)
