"""Remote git stores for navsync."""

import os
from collections.abc import Mapping

from navsync.config.models import GitHubSettings
from navsync.errors import ConfigurationError
from navsync.vcs.base import GitStore
from navsync.vcs.github import GitHubStore
from navsync.vcs.models import BaseState, TreeEntry


def _require_repository(config: GitHubSettings) -> str:
    repository = config.repository or ""
    parts = repository.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ConfigurationError(
            "GitHub repository missing. Set github.repository to 'owner/name' or the "
            f"{config.owner_env} and {config.repo_env} environment variables."
        )
    return repository


def create_store(
    config: GitHubSettings, environ: Mapping[str, str] | None = None
) -> GitStore:
    """Create a GitHub store from config.

    The repository arrives already resolved by load_config(). The token is
    read here, once; the store never reads the environment afterwards.
    """
    env = os.environ if environ is None else environ
    repository = _require_repository(config)
    token = env.get(config.token_env, "")
    if not token:
        raise ConfigurationError(
            f"GitHub token not found. Set the {config.token_env} environment variable."
        )
    return GitHubStore(
        repository,
        token,
        branch=config.branch,
        base_url=config.base_url,
        timeout=config.timeout,
    )


__all__ = [
    "BaseState",
    "GitHubStore",
    "GitStore",
    "TreeEntry",
    "create_store",
]
