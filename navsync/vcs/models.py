"""Pydantic models for git objects exchanged with the remote store."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class BaseState(BaseModel):
    """Snapshot of a branch at the start of one operation."""

    model_config = ConfigDict(frozen=True)

    branch: str
    commit_sha: str
    tree_sha: str


class TreeEntry(BaseModel):
    """A single path mutation relative to a base tree.

    ``content=None`` removes the path; any string creates or overwrites it.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    mode: str = "100644"
    kind: Literal["blob"] = "blob"
    content: str | None = None

    @property
    def is_deletion(self) -> bool:
        return self.content is None
