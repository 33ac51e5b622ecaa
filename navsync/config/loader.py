"""navsync.yaml loading: file resolution, ${VAR} expansion, repository fallback."""

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import GitHubSettings, NavsyncConfig

CONFIG_FILENAME = "navsync.yaml"

_VAR_RE = re.compile(r"\$\{(\w+)\}")


def config_search_path(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest precedence first."""
    paths = [Path(cli_path)] if cli_path else []
    return paths + [Path(CONFIG_FILENAME), Path.home() / ".navsync" / "config.yaml"]


def load_config(
    cli_path: str | None = None, environ: Mapping[str, str] | None = None
) -> NavsyncConfig:
    """Load the first non-empty file on the search path, or the defaults.

    ``${VAR}`` references are expanded from ``environ`` (the process
    environment by default). A ``github.repository`` that is unset or
    expanded to an incomplete ``owner/name`` is rebuilt from the variables
    named by ``github.owner_env`` and ``github.repo_env``.
    """
    env = os.environ if environ is None else environ
    config = NavsyncConfig()
    for path in config_search_path(cli_path):
        raw = _read_yaml(path)
        if raw is None:
            continue
        try:
            config = NavsyncConfig.model_validate(_expand_env_vars(raw, env))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        break
    github = _resolve_repository(config.github, env)
    if github is config.github:
        return config
    return config.model_copy(update={"github": github})


def _read_yaml(path: Path) -> dict | None:
    if not path.exists():
        return None
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping at the top level")
    return raw


def _is_owner_slash_name(repository: str | None) -> bool:
    parts = (repository or "").split("/")
    return len(parts) == 2 and all(parts)


def _resolve_repository(github: GitHubSettings, environ: Mapping[str, str]) -> GitHubSettings:
    if _is_owner_slash_name(github.repository):
        return github
    owner = environ.get(github.owner_env, "")
    name = environ.get(github.repo_env, "")
    repository = f"{owner}/{name}" if owner and name else None
    if repository == github.repository:
        return github
    return github.model_copy(update={"repository": repository})


def _expand_env_vars(obj: object, environ: Mapping[str, str] | None = None) -> object:
    """Recursively expand ${VAR} references in strings."""
    env = os.environ if environ is None else environ
    if isinstance(obj, str):
        return _VAR_RE.sub(lambda m: env.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v, env) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v, env) for v in obj]
    return obj


# Default YAML template for `navsync config init`
DEFAULT_CONFIG_TEMPLATE = """\
# navsync.yaml

# Target repository (GitHub Git data API)
github:
  repository: "${GITHUB_OWNER}/${GITHUB_REPO}"
  token_env: "GITHUB_TOKEN"
  # branch: "main"             # defaults to the repository's default branch
  base_url: "https://api.github.com"
  timeout: 15

# Commit publishing
publish:
  max_attempts: 3              # retries when the branch moved under us
  retry_delay: 0.5

# HTTP API (`navsync serve`)
server:
  host: "127.0.0.1"
  port: 8000

# Local site checkout used by `navsync render-navbar`
site:
  root: "."

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
