"""RefResolver — snapshot the branch tip before mutating it."""

from __future__ import annotations

import logging

from navsync.vcs.base import GitStore
from navsync.vcs.models import BaseState

logger = logging.getLogger(__name__)


class RefResolver:
    def __init__(self, store: GitStore, branch: str | None = None) -> None:
        self.store = store
        self.branch = branch

    async def resolve(self) -> BaseState:
        """Fetch the current tip commit and tree of the configured branch.

        Raises NotFoundError if the repository or branch is missing,
        RemoteError for anything else.
        """
        state = await self.store.get_base_state(self.branch)
        logger.debug(
            "base state: %s commit=%s tree=%s", state.branch, state.commit_sha, state.tree_sha
        )
        return state
