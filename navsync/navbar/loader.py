"""Build-time navbar loader.

Reads the metadata descriptors under ``data/navbars`` of a local site checkout
and turns them into Docusaurus navbar items, spliced between the site's static
entries. The parsing and ordering rules here are shared with the remote
listing in :mod:`navsync.navbar.service`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePosixPath

from pydantic import ValidationError

from navsync.navbar.models import ORDER_FALLBACK, NavbarMetadata
from navsync.navbar.tree_builder import METADATA_DIR

logger = logging.getLogger(__name__)

# Items rendered before the dynamic navbars.
STATIC_LEADING_ITEMS: list[dict] = [
    {"type": "docSidebar", "sidebarId": "tutorialSidebar", "position": "left", "label": "Tutorial"},
    {"to": "/blog", "label": "Blog", "position": "left"},
]

# Items rendered after the dynamic navbars.
STATIC_TRAILING_ITEMS: list[dict] = [
    {"to": "/admin", "label": "Admin", "position": "right"},
    {
        "href": "https://github.com/HongTrieu04/docusaurus-Vercel",
        "label": "GitHub",
        "position": "right",
    },
]


def parse_metadata(raw: str | bytes, source: str) -> NavbarMetadata | None:
    """Parse one metadata descriptor, or return None (with a warning) if malformed.

    A descriptor without an ``id`` takes it from the file name; ``sidebarId``
    defaults to the id and ``order`` to ORDER_FALLBACK.
    """
    try:
        data = json.loads(raw)
    except UnicodeDecodeError as e:
        logger.warning("Skipping %s: not valid UTF-8 (%s)", source, e.reason)
        return None
    except json.JSONDecodeError as e:
        logger.warning("Skipping %s: invalid JSON (%s)", source, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Skipping %s: expected a JSON object", source)
        return None

    data.setdefault("id", PurePosixPath(source).stem)
    data.setdefault("sidebarId", data["id"])
    if data.get("order") is None:
        data["order"] = ORDER_FALLBACK
    try:
        return NavbarMetadata.model_validate(data)
    except ValidationError as e:
        logger.warning("Skipping %s: %d invalid field(s)", source, e.error_count())
        return None


def sort_navbars(navbars: list[NavbarMetadata]) -> list[NavbarMetadata]:
    """Ascending by order; ties broken by id so the result is deterministic."""
    return sorted(navbars, key=lambda n: (n.order, n.id))


def load_navbars(root: str | Path) -> list[NavbarMetadata]:
    """Load every metadata descriptor from a local site checkout."""
    directory = Path(root) / METADATA_DIR
    if not directory.is_dir():
        logger.debug("no navbar metadata directory at %s", directory)
        return []

    navbars = []
    for path in sorted(directory.glob("*.json")):
        try:
            raw = path.read_bytes()
        except OSError as e:
            logger.warning("Skipping %s: %s", path, e)
            continue
        parsed = parse_metadata(raw, str(path))
        if parsed is not None:
            navbars.append(parsed)
    return sort_navbars(navbars)


def to_navbar_item(navbar: NavbarMetadata) -> dict:
    """Convert metadata to a Docusaurus themeConfig.navbar item."""
    item: dict = {"position": navbar.position, "label": navbar.label}
    if navbar.type == "link":
        item["to"] = navbar.to or f"/docs/{navbar.id}/intro"
    elif navbar.type == "doc":
        item["type"] = "doc"
        item["docId"] = f"{navbar.id}/intro"
    else:
        item["type"] = "docSidebar"
        item["sidebarId"] = navbar.sidebar_id or navbar.id
    return item


def build_navbar_items(
    navbars: list[NavbarMetadata],
    leading: list[dict] | None = None,
    trailing: list[dict] | None = None,
) -> list[dict]:
    """Splice dynamic navbars between the static leading and trailing entries."""
    head = STATIC_LEADING_ITEMS if leading is None else leading
    tail = STATIC_TRAILING_ITEMS if trailing is None else trailing
    return [*head, *(to_navbar_item(n) for n in navbars), *tail]
