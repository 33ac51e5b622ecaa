"""NavbarSyncService — create, delete and list navbars on a remote branch."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from navsync.config.models import NavsyncConfig
from navsync.errors import AlreadyExistsError, ForbiddenError, InvalidNavbarError, RefConflictError
from navsync.navbar.guard import ConflictGuard
from navsync.navbar.loader import parse_metadata, sort_navbars
from navsync.navbar.models import (
    NAVBAR_ID_PATTERN,
    RESERVED_IDS,
    RESERVED_NAVBARS,
    CommitResult,
    NavbarMetadata,
    OperationKind,
    Presence,
)
from navsync.navbar.publisher import CommitPublisher
from navsync.navbar.resolver import RefResolver
from navsync.navbar.tree_builder import METADATA_DIR, build_entries, commit_message
from navsync.vcs import create_store
from navsync.vcs.base import GitStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ID_RE = re.compile(NAVBAR_ID_PATTERN)


def validate_navbar_id(navbar_id: str | None) -> str:
    if navbar_id is None or not navbar_id.strip():
        raise InvalidNavbarError("ID is required", operation="validate")
    if not _ID_RE.fullmatch(navbar_id):
        raise InvalidNavbarError(
            f"Invalid ID '{navbar_id}': use lowercase letters, digits and hyphens only "
            '(e.g. "my-guides")',
            operation="validate",
        )
    return navbar_id


def validate_label(label: str | None) -> str:
    if label is None or not label.strip():
        raise InvalidNavbarError("Label is required", operation="validate")
    return label.strip()


class NavbarSyncService:
    """Orchestrates RefResolver, ConflictGuard, tree building and CommitPublisher.

    Create and delete run as one attempt per base snapshot: resolve, (guard),
    build entries, publish. When the branch moves underneath an attempt the
    whole attempt is repeated against a fresh snapshot, up to max_attempts.
    """

    def __init__(
        self,
        store: GitStore,
        *,
        branch: str | None = None,
        max_attempts: int = 3,
        retry_delay: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.store = store
        self.branch = branch
        self.resolver = RefResolver(store, branch)
        self.guard = ConflictGuard(store)
        self.publisher = CommitPublisher(store)
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: NavsyncConfig, store: GitStore | None = None) -> NavbarSyncService:
        """Build a service from config; raises ConfigurationError if credentials are missing."""
        return cls(
            store if store is not None else create_store(config.github),
            branch=config.github.branch,
            max_attempts=config.publish.max_attempts,
            retry_delay=config.publish.retry_delay,
        )

    async def create(self, navbar_id: str, label: str) -> CommitResult:
        navbar_id = validate_navbar_id(navbar_id)
        label = validate_label(label)
        if navbar_id in RESERVED_IDS:
            raise AlreadyExistsError(f"Navbar '{navbar_id}' is built in", operation="validate")

        async def attempt() -> str:
            base = await self.resolver.resolve()
            if await self.guard.check(base, navbar_id) is Presence.exists:
                raise AlreadyExistsError(
                    f"Navbar '{navbar_id}' already exists", operation="check_conflict"
                )
            entries = build_entries(OperationKind.create, navbar_id, label)
            message = commit_message(OperationKind.create, navbar_id, label)
            return await self.publisher.publish(base, entries, message)

        commit_sha, attempts = await self._with_retry("create", navbar_id, attempt)
        return CommitResult(navbar_id=navbar_id, commit_sha=commit_sha, attempts=attempts)

    async def delete(self, navbar_id: str) -> CommitResult:
        if navbar_id in RESERVED_IDS:
            raise ForbiddenError(
                f"Navbar '{navbar_id}' is built in and cannot be deleted", operation="validate"
            )
        navbar_id = validate_navbar_id(navbar_id)

        async def attempt() -> str | None:
            base = await self.resolver.resolve()
            entries = build_entries(OperationKind.delete, navbar_id)
            present = await self.guard.present_paths(base, [e.path for e in entries])
            if not present:
                logger.info("navbar %s not present on %s; nothing to delete", navbar_id, base.branch)
                return None
            entries = [e for e in entries if e.path in present]
            message = commit_message(OperationKind.delete, navbar_id)
            return await self.publisher.publish(base, entries, message)

        commit_sha, attempts = await self._with_retry("delete", navbar_id, attempt)
        return CommitResult(
            navbar_id=navbar_id,
            commit_sha=commit_sha,
            created=commit_sha is not None,
            attempts=attempts,
        )

    async def list_navbars(self) -> list[NavbarMetadata]:
        """Persisted navbars plus the built-in entries, sorted by order."""
        paths = [
            p for p in await self.store.list_files(METADATA_DIR, ref=self.branch)
            if p.endswith(".json")
        ]
        # Files are independent, so fetch them concurrently.
        contents = await asyncio.gather(
            *(self.store.read_file(p, ref=self.branch) for p in paths)
        )
        navbars = [
            parsed
            for path, raw in zip(paths, contents)
            if (parsed := parse_metadata(raw, path)) is not None
            and parsed.id not in RESERVED_IDS
        ]
        navbars.extend(RESERVED_NAVBARS)
        return sort_navbars(navbars)

    async def _with_retry(
        self, operation: str, navbar_id: str, attempt: Callable[[], Awaitable[T]]
    ) -> tuple[T, int]:
        def _log_retry(state: RetryCallState) -> None:
            logger.warning(
                "%s %s: branch moved during attempt %d, retrying in %.2fs",
                operation, navbar_id, state.attempt_number, state.next_action.sleep,
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.retry_delay),
            retry=retry_if_exception_type(RefConflictError),
            before_sleep=_log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        try:
            async for retry_attempt in retrying:
                with retry_attempt:
                    result = await attempt()
        except RefConflictError:
            logger.warning(
                "%s %s: branch kept moving, giving up after %d attempts",
                operation, navbar_id, self.max_attempts,
            )
            raise
        return result, retry_attempt.retry_state.attempt_number
