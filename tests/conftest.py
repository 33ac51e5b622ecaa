"""Shared test fixtures for navsync."""

from __future__ import annotations

import asyncio
import hashlib
from dataclasses import dataclass

import pytest

from navsync.config.models import NavsyncConfig
from navsync.errors import NotFoundError, RefConflictError
from navsync.navbar.service import NavbarSyncService
from navsync.vcs.base import GitStore
from navsync.vcs.models import BaseState, TreeEntry


@dataclass(frozen=True)
class FakeCommit:
    tree: str
    parent: str | None
    message: str


class InMemoryGitStore(GitStore):
    """GitStore that keeps trees, commits and refs in dicts.

    Trees are flat ``path -> content`` maps. Every call yields to the event
    loop once so concurrent operations interleave the way remote calls would.
    """

    def __init__(self, files: dict[str, str] | None = None, branch: str = "main") -> None:
        self.default_branch = branch
        self.trees: dict[str, dict[str, str]] = {}
        self.commits: dict[str, FakeCommit] = {}
        self.refs: dict[str, str] = {}
        self.ref_updates: list[tuple[str, str, str]] = []
        self.read_errors: dict[str, Exception] = {}
        self.exists_error: Exception | None = None
        self.calls: list[str] = []
        root_tree = self._put_tree(dict(files or {}))
        self.refs[branch] = self._put_commit(root_tree, None, "initial commit")

    # -- helpers -----------------------------------------------------------

    def _put_tree(self, files: dict[str, str]) -> str:
        digest = hashlib.sha1(repr(sorted(files.items())).encode()).hexdigest()
        self.trees[digest] = files
        return digest

    def _put_commit(self, tree: str, parent: str | None, message: str) -> str:
        seed = f"{tree}:{parent}:{message}:{len(self.commits)}"
        sha = hashlib.sha1(seed.encode()).hexdigest()
        self.commits[sha] = FakeCommit(tree, parent, message)
        return sha

    def _tree_for(self, ref: str | None) -> dict[str, str]:
        if ref is None:
            ref = self.default_branch
        sha = self.refs.get(ref, ref)
        if sha not in self.commits:
            raise NotFoundError(f"unknown ref {ref}")
        return self.trees[self.commits[sha].tree]

    def files(self, branch: str | None = None) -> dict[str, str]:
        return dict(self._tree_for(branch))

    def head(self, branch: str | None = None) -> str:
        return self.refs[branch or self.default_branch]

    def advance(self, files: dict[str, str | bytes | None], message: str = "external change") -> str:
        """Commit directly to the default branch, as another writer would."""
        tree = self.files()
        for path, content in files.items():
            if content is None:
                tree.pop(path, None)
            else:
                tree[path] = content
        sha = self._put_commit(self._put_tree(tree), self.head(), message)
        self.refs[self.default_branch] = sha
        return sha

    # -- GitStore ----------------------------------------------------------

    async def get_base_state(self, branch: str | None = None) -> BaseState:
        self.calls.append("get_base_state")
        await asyncio.sleep(0)
        name = branch or self.default_branch
        if name not in self.refs:
            raise NotFoundError(f"branch {name} not found", operation="resolve_ref")
        sha = self.refs[name]
        return BaseState(branch=name, commit_sha=sha, tree_sha=self.commits[sha].tree)

    async def path_exists(self, path: str, ref: str) -> bool:
        self.calls.append("path_exists")
        await asyncio.sleep(0)
        if self.exists_error is not None:
            raise self.exists_error
        tree = self._tree_for(ref)
        return path in tree or any(p.startswith(path.rstrip("/") + "/") for p in tree)

    async def list_files(self, directory: str, ref: str | None = None) -> list[str]:
        self.calls.append("list_files")
        await asyncio.sleep(0)
        prefix = directory.rstrip("/") + "/"
        return sorted(
            p for p in self._tree_for(ref)
            if p.startswith(prefix) and "/" not in p[len(prefix):]
        )

    async def read_file(self, path: str, ref: str | None = None) -> bytes:
        self.calls.append("read_file")
        await asyncio.sleep(0)
        if path in self.read_errors:
            raise self.read_errors[path]
        tree = self._tree_for(ref)
        if path not in tree:
            raise NotFoundError(f"{path} not found", operation="read_file")
        content = tree[path]
        return content.encode("utf-8") if isinstance(content, str) else content

    async def create_tree(self, base_tree_sha: str, entries: list[TreeEntry]) -> str:
        self.calls.append("create_tree")
        await asyncio.sleep(0)
        files = dict(self.trees[base_tree_sha])
        for entry in entries:
            if entry.is_deletion:
                files.pop(entry.path, None)
            else:
                files[entry.path] = entry.content
        return self._put_tree(files)

    async def create_commit(self, message: str, tree_sha: str, parent_sha: str) -> str:
        self.calls.append("create_commit")
        await asyncio.sleep(0)
        assert tree_sha in self.trees
        assert parent_sha in self.commits
        return self._put_commit(tree_sha, parent_sha, message)

    async def update_ref(self, branch: str, new_sha: str, expected_sha: str) -> None:
        self.calls.append("update_ref")
        await asyncio.sleep(0)
        current = self.refs.get(branch)
        if current != expected_sha:
            raise RefConflictError(
                f"{branch} is at {current}, expected {expected_sha}", operation="update_ref"
            )
        self.refs[branch] = new_sha
        self.ref_updates.append((branch, expected_sha, new_sha))


SITE_FILES = {
    "docusaurus.config.js": "export default {};\n",
    "docs/intro.md": "# Tutorial\n",
    "data/navbars/api.json": (
        '{"id": "api", "label": "API", "to": "/docs/api/intro", "type": "docSidebar",'
        ' "sidebarId": "api", "position": "left", "order": 10}'
    ),
    "docs/api/_category_.json": '{"label": "API"}',
    "docs/api/intro.md": "# API\n",
}


async def _no_sleep(delay: float) -> None:
    return None


@pytest.fixture
def store():
    return InMemoryGitStore(dict(SITE_FILES))


@pytest.fixture
def empty_store():
    return InMemoryGitStore({"README.md": "# site\n"})


@pytest.fixture
def service(store):
    return NavbarSyncService(store, max_attempts=3, retry_delay=0, sleep=_no_sleep)


@pytest.fixture
def sample_config():
    return NavsyncConfig()


@pytest.fixture
def site_root(tmp_path):
    """A local site checkout with a couple of navbar descriptors."""
    navbars = tmp_path / "data" / "navbars"
    navbars.mkdir(parents=True)
    (navbars / "guides.json").write_text(
        '{"id": "guides", "label": "Guides", "type": "docSidebar", "sidebarId": "guides",'
        ' "position": "left", "order": 5}'
    )
    (navbars / "reference.json").write_text(
        '{"id": "reference", "label": "Reference", "position": "right"}'
    )
    return tmp_path
