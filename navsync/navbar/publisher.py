"""CommitPublisher — tree, commit, then compare-and-swap the branch ref."""

from __future__ import annotations

import logging

from navsync.vcs.base import GitStore
from navsync.vcs.models import BaseState, TreeEntry

logger = logging.getLogger(__name__)


class CommitPublisher:
    """Publishes a set of tree mutations as one commit on top of a BaseState.

    Trees and commits created before a failed ref update are left
    unreferenced; the host garbage-collects them.
    """

    def __init__(self, store: GitStore) -> None:
        self.store = store

    async def publish(self, base: BaseState, entries: list[TreeEntry], message: str) -> str:
        """Return the sha of the new commit once the branch points at it.

        Raises RefConflictError if the branch no longer points at base.commit_sha.
        """
        if not entries:
            raise ValueError("publish requires at least one tree entry")

        tree_sha = await self.store.create_tree(base.tree_sha, entries)
        logger.debug("created tree %s from %s (%d entries)", tree_sha, base.tree_sha, len(entries))

        commit_sha = await self.store.create_commit(message, tree_sha, base.commit_sha)
        logger.debug("created commit %s (parent %s)", commit_sha, base.commit_sha)

        await self.store.update_ref(base.branch, commit_sha, expected_sha=base.commit_sha)
        logger.info("published %s on %s: %s", commit_sha, base.branch, message)
        return commit_sha
