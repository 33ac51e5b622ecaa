"""GitHub git data store using PyGithub."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from functools import cached_property
from typing import TypeVar

import requests
from github import Auth, Github, GithubException, InputGitTreeElement, UnknownObjectException
from github.Repository import Repository

from navsync.errors import NavbarError, NotFoundError, RefConflictError, RemoteError
from navsync.vcs.base import GitStore
from navsync.vcs.models import BaseState, TreeEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _describe(e: GithubException) -> str:
    detail = e.data.get("message") if isinstance(e.data, dict) else None
    return f"HTTP {e.status}: {detail}" if detail else f"HTTP {e.status}"


def _is_not_found(e: GithubException) -> bool:
    return isinstance(e, UnknownObjectException) or e.status == 404


class GitHubStore(GitStore):
    """GitStore backed by the GitHub Git data API.

    PyGithub is synchronous, so all blocking calls are wrapped
    with asyncio.to_thread() to avoid blocking the event loop.
    """

    def __init__(
        self,
        repository: str,
        token: str,
        *,
        branch: str | None = None,
        base_url: str = "https://api.github.com",
        timeout: int = 15,
    ) -> None:
        self.repository = repository
        self._token = token
        self._branch = branch
        self._base_url = base_url
        self._timeout = timeout

    @cached_property
    def _client(self) -> Github:
        auth = Auth.Token(self._token)
        return Github(auth=auth, base_url=self._base_url, timeout=self._timeout)

    @cached_property
    def _repo(self) -> Repository:
        return self._client.get_repo(self.repository)

    async def _run(self, operation: str, fn: Callable[[], T]) -> T:
        """Run a blocking PyGithub call and translate its failures."""
        try:
            return await asyncio.to_thread(fn)
        except NavbarError:
            raise
        except GithubException as e:
            if _is_not_found(e):
                raise NotFoundError(
                    f"{operation}: not found in {self.repository}", operation=operation
                ) from e
            raise RemoteError(
                f"GitHub {operation} failed ({_describe(e)})", operation=operation
            ) from e
        except requests.RequestException as e:
            raise RemoteError(
                f"GitHub {operation} failed ({type(e).__name__})", operation=operation
            ) from e

    async def get_base_state(self, branch: str | None = None) -> BaseState:
        def _sync() -> BaseState:
            repo = self._repo
            name = branch or self._branch or repo.default_branch
            ref = repo.get_git_ref(f"heads/{name}")
            commit = repo.get_git_commit(ref.object.sha)
            return BaseState(branch=name, commit_sha=commit.sha, tree_sha=commit.tree.sha)

        state = await self._run("resolve_ref", _sync)
        logger.debug("resolved %s@%s -> %s", self.repository, state.branch, state.commit_sha)
        return state

    async def path_exists(self, path: str, ref: str) -> bool:
        def _sync() -> bool:
            try:
                self._repo.get_contents(path, ref=ref)
            except GithubException as e:
                if _is_not_found(e):
                    return False
                raise
            return True

        return await self._run("check_path", _sync)

    async def list_files(self, directory: str, ref: str | None = None) -> list[str]:
        def _sync() -> list[str]:
            repo = self._repo
            kwargs = {"ref": ref} if ref else {}
            if ref:
                # A missing branch must not read as a missing directory.
                repo.get_branch(ref)
            try:
                contents = repo.get_contents(directory, **kwargs)
            except GithubException as e:
                if _is_not_found(e):
                    return []
                raise
            # get_contents returns a single item for files, list for dirs
            if not isinstance(contents, list):
                return []
            return [c.path for c in contents if c.type == "file"]

        return await self._run("list_files", _sync)

    async def read_file(self, path: str, ref: str | None = None) -> bytes:
        def _sync() -> bytes:
            kwargs = {"ref": ref} if ref else {}
            content = self._repo.get_contents(path, **kwargs)
            if isinstance(content, list):
                raise RemoteError(f"Path '{path}' is a directory, not a file.", operation="read_file")
            return content.decoded_content

        return await self._run("read_file", _sync)

    async def create_tree(self, base_tree_sha: str, entries: list[TreeEntry]) -> str:
        def _sync() -> str:
            repo = self._repo
            base_tree = repo.get_git_tree(base_tree_sha)
            elements = [_to_tree_element(e) for e in entries]
            return repo.create_git_tree(elements, base_tree).sha

        return await self._run("create_tree", _sync)

    async def create_commit(self, message: str, tree_sha: str, parent_sha: str) -> str:
        def _sync() -> str:
            repo = self._repo
            tree = repo.get_git_tree(tree_sha)
            parent = repo.get_git_commit(parent_sha)
            return repo.create_git_commit(message, tree, [parent]).sha

        return await self._run("create_commit", _sync)

    async def update_ref(self, branch: str, new_sha: str, expected_sha: str) -> None:
        def _sync() -> None:
            ref = self._repo.get_git_ref(f"heads/{branch}")
            if ref.object.sha != expected_sha:
                raise RefConflictError(
                    f"Branch '{branch}' moved to {ref.object.sha[:7]} "
                    f"(expected {expected_sha[:7]})",
                    operation="update_ref",
                )
            try:
                # force=False: GitHub rejects anything that is not a fast-forward
                # of the current tip, which covers a concurrent move after the read.
                ref.edit(new_sha, force=False)
            except GithubException as e:
                if e.status == 422:
                    raise RefConflictError(
                        f"Branch '{branch}' update rejected as non-fast-forward",
                        operation="update_ref",
                    ) from e
                raise

        await self._run("update_ref", _sync)
        logger.info("moved %s@%s to %s", self.repository, branch, new_sha)


def _to_tree_element(entry: TreeEntry) -> InputGitTreeElement:
    if entry.is_deletion:
        return InputGitTreeElement(path=entry.path, mode=entry.mode, type=entry.kind, sha=None)
    return InputGitTreeElement(
        path=entry.path, mode=entry.mode, type=entry.kind, content=entry.content
    )
