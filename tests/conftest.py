# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides ALPS profile builders, an in-memory blog profile, isolated
settings and on-disk profile writers. No network access.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from alpsgraph.config.settings import Settings

ALPS_SCHEMA = "https://alps-io.github.io/schemas/alps.json"


def make_alps(
    descriptors: list[dict[str, Any]],
    title: str = "",
    doc: str | None = None,
    links: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    """Wrap descriptors in an ALPS-JSON document."""
    alps: dict[str, Any] = {"descriptor": descriptors}
    if title:
        alps["title"] = title
    if doc is not None:
        alps["doc"] = {"value": doc}
    if links:
        alps["link"] = links
    return {"$schema": ALPS_SCHEMA, "alps": alps}


# === FIXTURES: Settings ===


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


# === FIXTURES: Sample profiles ===


@pytest.fixture
def alps() -> Callable[..., dict[str, Any]]:
    """ALPS-JSON document builder."""
    return make_alps


@pytest.fixture
def blog_profile() -> dict[str, Any]:
    """Blog profile with nesting, aliases, tags and all transition kinds but idempotent."""
    return make_alps(
        [
            {"id": "articleBody", "def": "https://schema.org/articleBody", "title": "article body"},
            {"id": "dateCreated", "def": "https://schema.org/dateCreated"},
            {
                "id": "BlogPosting",
                "title": "Blog Post",
                "tag": "posting",
                "descriptor": [
                    {"href": "#articleBody"},
                    {"href": "#dateCreated"},
                    {"id": "goBlog", "type": "safe", "rt": "#Blog", "title": "See the blog"},
                ],
            },
            {
                "id": "Blog",
                "title": "Blog",
                "tag": "collection posting",
                "descriptor": [
                    {"href": "#BlogPosting"},
                    {"href": "#goBlogPosting"},
                    {"href": "#doPost", "title": "Publish"},
                ],
            },
            {"id": "goBlogPosting", "type": "safe", "rt": "#BlogPosting", "tag": "posting"},
            {"id": "doPost", "type": "unsafe", "rt": "#Blog", "descriptor": [{"href": "#articleBody"}]},
        ],
        title="ALPS Blog",
        doc="An ALPS profile example for a blog",
        links=[{"rel": "help", "href": "https://example.com/help"}],
    )


# === FIXTURES: Temp dirs ===


@pytest.fixture
def write_profile(tmp_path: Path) -> Callable[..., Path]:
    """Write an ALPS-JSON profile under tmp_path and return its path."""

    def _write(name: str, descriptors: list[dict[str, Any]], **meta: Any) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(make_alps(descriptors, **meta)), encoding="utf-8")
        return path

    return _write
