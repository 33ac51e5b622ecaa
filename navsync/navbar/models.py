"""Pydantic models for navbars and the commit pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Order assigned to metadata files that omit one; sorts after user-defined entries.
ORDER_FALLBACK = 999

NAVBAR_ID_PATTERN = r"^[a-z0-9-]+$"


class Presence(str, Enum):
    exists = "exists"
    absent = "absent"


class OperationKind(str, Enum):
    create = "create"
    delete = "delete"


class NavbarMetadata(BaseModel):
    """One entry of data/navbars/<id>.json, as consumed by the navbar loader.

    Field names are snake_case in Python and camelCase on disk / on the wire.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    label: str
    to: str | None = None
    type: Literal["docSidebar", "doc", "link"] = "docSidebar"
    sidebar_id: str | None = Field(default=None, alias="sidebarId")
    position: Literal["left", "right"] = "left"
    order: int = ORDER_FALLBACK
    locked: bool = False

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# Built-in entries that are not backed by files and can never be deleted.
RESERVED_NAVBARS: tuple[NavbarMetadata, ...] = (
    NavbarMetadata(
        id="docs", label="Docs", type="docSidebar", position="left", order=1000, locked=True
    ),
    NavbarMetadata(
        id="blog", label="Blog", to="/blog", type="link", position="left", order=1001, locked=True
    ),
)
RESERVED_IDS: frozenset[str] = frozenset(n.id for n in RESERVED_NAVBARS)


class NavbarPaths(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    intro: str
    metadata: str

    def all(self) -> tuple[str, str, str]:
        return (self.category, self.intro, self.metadata)


class CommitResult(BaseModel):
    """Outcome of a create/delete call.

    ``commit_sha`` is None when nothing had to change (deleting an absent navbar).
    """

    navbar_id: str
    commit_sha: str | None = None
    created: bool = True
    attempts: int = Field(default=1, ge=1)
