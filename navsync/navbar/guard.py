"""ConflictGuard — existence checks against a base snapshot."""

from __future__ import annotations

import logging

from navsync.navbar.models import Presence
from navsync.navbar.tree_builder import paths_for
from navsync.vcs.base import GitStore
from navsync.vcs.models import BaseState

logger = logging.getLogger(__name__)


class ConflictGuard:
    """Decides whether a navbar is already present at a given commit.

    Only a definite "not found" from the store counts as absent; any other
    failure propagates and aborts the operation.
    """

    def __init__(self, store: GitStore) -> None:
        self.store = store

    async def check(self, base: BaseState, navbar_id: str) -> Presence:
        intro = paths_for(navbar_id).intro
        if await self.store.path_exists(intro, base.commit_sha):
            logger.debug("%s exists at %s", intro, base.commit_sha)
            return Presence.exists
        return Presence.absent

    async def present_paths(self, base: BaseState, paths: list[str]) -> list[str]:
        """Return the subset of paths that exist at base, in input order."""
        present = []
        for path in paths:
            if await self.store.path_exists(path, base.commit_sha):
                present.append(path)
        return present
