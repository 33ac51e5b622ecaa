"""Navbar create/delete/list pipeline."""

from navsync.navbar.guard import ConflictGuard
from navsync.navbar.loader import build_navbar_items, load_navbars
from navsync.navbar.models import (
    RESERVED_IDS,
    RESERVED_NAVBARS,
    CommitResult,
    NavbarMetadata,
    OperationKind,
    Presence,
)
from navsync.navbar.publisher import CommitPublisher
from navsync.navbar.resolver import RefResolver
from navsync.navbar.service import NavbarSyncService
from navsync.navbar.tree_builder import build_entries, paths_for

__all__ = [
    "RESERVED_IDS",
    "RESERVED_NAVBARS",
    "CommitPublisher",
    "CommitResult",
    "ConflictGuard",
    "NavbarMetadata",
    "NavbarSyncService",
    "OperationKind",
    "Presence",
    "RefResolver",
    "build_entries",
    "build_navbar_items",
    "load_navbars",
    "paths_for",
]
