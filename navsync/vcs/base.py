"""Abstract remote git object/ref store for navsync."""

from abc import ABC, abstractmethod

from navsync.vcs.models import BaseState, TreeEntry


class GitStore(ABC):
    """Object-level access to a remote repository.

    Implementations talk to a hosting API (blobs, trees, commits, refs) and
    never touch a local clone. Failures must be raised as navsync errors
    with a structured kind, never as raw transport exceptions.
    """

    @abstractmethod
    async def get_base_state(self, branch: str | None = None) -> BaseState:
        """Resolve the tip commit and tree of a branch.

        Args:
            branch: Branch name, or None for the repository's default branch.
        """
        ...

    @abstractmethod
    async def path_exists(self, path: str, ref: str) -> bool:
        """Return True if path exists in the tree reachable from ref.

        Only a definite "not found" answer may return False.
        """
        ...

    @abstractmethod
    async def list_files(self, directory: str, ref: str | None = None) -> list[str]:
        """List file paths directly under a directory (empty if it does not exist)."""
        ...

    @abstractmethod
    async def read_file(self, path: str, ref: str | None = None) -> bytes:
        """Fetch the raw content of a file. Decoding is left to the caller."""
        ...

    @abstractmethod
    async def create_tree(self, base_tree_sha: str, entries: list[TreeEntry]) -> str:
        """Create a tree from base_tree_sha with entries applied; return its sha."""
        ...

    @abstractmethod
    async def create_commit(self, message: str, tree_sha: str, parent_sha: str) -> str:
        """Create a commit with a single parent; return its sha."""
        ...

    @abstractmethod
    async def update_ref(self, branch: str, new_sha: str, expected_sha: str) -> None:
        """Move branch to new_sha only if it still points at expected_sha.

        Raises RefConflictError otherwise.
        """
        ...
