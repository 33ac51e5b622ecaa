"""Paths and file contents that make up a navbar.

This module is the only place navbar paths are derived from an id.
"""

from __future__ import annotations

import json

import yaml

from navsync.navbar.models import ORDER_FALLBACK, NavbarPaths, OperationKind
from navsync.vcs.models import TreeEntry

METADATA_DIR = "data/navbars"
DOCS_DIR = "docs"


def paths_for(navbar_id: str) -> NavbarPaths:
    return NavbarPaths(
        category=f"{DOCS_DIR}/{navbar_id}/_category_.json",
        intro=f"{DOCS_DIR}/{navbar_id}/intro.md",
        metadata=f"{METADATA_DIR}/{navbar_id}.json",
    )


def _to_json(obj: dict) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False)


def category_json(label: str) -> str:
    return _to_json({
        "label": label,
        "position": ORDER_FALLBACK,
        "link": {"type": "generated-index"},
    })


def intro_markdown(label: str) -> str:
    frontmatter = yaml.safe_dump(
        {"title": f"Introduction to {label}", "sidebar_position": 1},
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    return (
        f"---\n{frontmatter}---\n\n"
        f"# {label}\n\n"
        f"Welcome to {label}! This is the introduction page.\n"
    )


def metadata_json(navbar_id: str, label: str) -> str:
    return _to_json({
        "id": navbar_id,
        "label": label,
        "to": f"/docs/{navbar_id}/intro",
        "type": "docSidebar",
        "sidebarId": navbar_id,
        "position": "left",
        "order": ORDER_FALLBACK,
    })


def build_entries(
    kind: OperationKind, navbar_id: str, label: str | None = None
) -> list[TreeEntry]:
    """Return the ordered tree mutations for creating or deleting a navbar.

    Order is always category descriptor, intro document, metadata descriptor.
    """
    paths = paths_for(navbar_id)
    if kind is OperationKind.delete:
        return [TreeEntry(path=p, content=None) for p in paths.all()]

    if label is None:
        raise ValueError("label is required to create a navbar")
    return [
        TreeEntry(path=paths.category, content=category_json(label)),
        TreeEntry(path=paths.intro, content=intro_markdown(label)),
        TreeEntry(path=paths.metadata, content=metadata_json(navbar_id, label)),
    ]


def commit_message(kind: OperationKind, navbar_id: str, label: str | None = None) -> str:
    if kind is OperationKind.delete:
        return f'feat(docs): delete navbar "{navbar_id}"'
    return f'feat(docs): create navbar "{label}" ({navbar_id})'
