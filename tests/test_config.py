"""Tests for navsync.config — models and YAML loader."""

import pytest
from pydantic import ValidationError

from navsync.config.loader import DEFAULT_CONFIG_TEMPLATE, _expand_env_vars, load_config
from navsync.config.models import (
    GitHubSettings,
    NavsyncConfig,
    PublishSettings,
    ServerSettings,
)


# ── NavsyncConfig defaults ─────────────────────────────────────────


class TestNavsyncConfigDefaults:
    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_log_format(self, sample_config):
        assert sample_config.log_format == "text"

    def test_default_github_settings(self, sample_config):
        assert sample_config.github.repository is None
        assert sample_config.github.token_env == "GITHUB_TOKEN"
        assert sample_config.github.branch is None

    def test_default_publish_settings(self, sample_config):
        assert sample_config.publish.max_attempts == 3
        assert sample_config.publish.retry_delay == 0.5


# ── Individual config model validations ─────────────────────────────


class TestSettingsValidation:
    def test_max_attempts_at_least_one(self):
        with pytest.raises(ValidationError):
            PublishSettings(max_attempts=0)

    def test_timeout_positive(self):
        with pytest.raises(ValidationError):
            GitHubSettings(timeout=0)

    def test_port_range(self):
        with pytest.raises(ValidationError):
            ServerSettings(port=70000)

    def test_log_level_literal(self):
        with pytest.raises(ValidationError):
            NavsyncConfig(log_level="verbose")


# ── _expand_env_vars ───────────────────────────────────────────────


class TestExpandEnvVars:
    def test_expands_nested(self, monkeypatch):
        monkeypatch.setenv("GITHUB_OWNER", "acme")
        monkeypatch.setenv("GITHUB_REPO", "site")
        raw = {"github": {"repository": "${GITHUB_OWNER}/${GITHUB_REPO}"}, "x": ["${GITHUB_OWNER}"]}
        assert _expand_env_vars(raw) == {"github": {"repository": "acme/site"}, "x": ["acme"]}

    def test_missing_var_becomes_empty(self, monkeypatch):
        monkeypatch.delenv("NAVSYNC_UNSET", raising=False)
        assert _expand_env_vars("${NAVSYNC_UNSET}/x") == "/x"

    def test_non_strings_untouched(self):
        assert _expand_env_vars(3) == 3


# ── load_config ────────────────────────────────────────────────────


class TestLoadConfig:
    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("github:\n  repository: acme/site\n  branch: main\n")
        cfg = load_config(str(path))
        assert cfg.github.repository == "acme/site"
        assert cfg.github.branch == "main"

    def test_defaults_without_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
        assert load_config(environ={}) == NavsyncConfig()

    def test_empty_file_falls_through(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
        (tmp_path / "navsync.yaml").write_text("")
        assert load_config(environ={}) == NavsyncConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("github: [unclosed")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(str(path))

    def test_default_template_loads(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GITHUB_OWNER", "acme")
        monkeypatch.setenv("GITHUB_REPO", "site")
        path = tmp_path / "navsync.yaml"
        path.write_text(DEFAULT_CONFIG_TEMPLATE)
        cfg = load_config(str(path))
        assert cfg.github.repository == "acme/site"
        assert cfg.server.port == 8000

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- github\n- publish\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(str(path), environ={})

    def test_explicit_path_wins_over_project_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "navsync.yaml").write_text("server:\n  port: 9000\n")
        custom = tmp_path / "custom.yaml"
        custom.write_text("server:\n  port: 9100\n")
        assert load_config(str(custom), environ={}).server.port == 9100


# ── repository resolution ──────────────────────────────────────────


class TestRepositoryResolution:
    ENV = {"GITHUB_OWNER": "acme", "GITHUB_REPO": "site"}

    def test_unset_repository_built_from_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
        assert load_config(environ=self.ENV).github.repository == "acme/site"

    def test_explicit_repository_kept(self, tmp_path):
        path = tmp_path / "navsync.yaml"
        path.write_text("github:\n  repository: other/docs\n")
        assert load_config(str(path), environ=self.ENV).github.repository == "other/docs"

    def test_template_with_unset_vars_normalised_to_none(self, tmp_path):
        path = tmp_path / "navsync.yaml"
        path.write_text(DEFAULT_CONFIG_TEMPLATE)
        assert load_config(str(path), environ={}).github.repository is None

    def test_half_expanded_template_normalised_to_none(self, tmp_path):
        path = tmp_path / "navsync.yaml"
        path.write_text(DEFAULT_CONFIG_TEMPLATE)
        cfg = load_config(str(path), environ={"GITHUB_OWNER": "acme"})
        assert cfg.github.repository is None

    def test_custom_env_names(self, tmp_path):
        path = tmp_path / "navsync.yaml"
        path.write_text("github:\n  owner_env: DOCS_OWNER\n  repo_env: DOCS_REPO\n")
        cfg = load_config(str(path), environ={"DOCS_OWNER": "acme", "DOCS_REPO": "handbook"})
        assert cfg.github.repository == "acme/handbook"

    def test_expansion_uses_given_environ(self):
        assert _expand_env_vars("${X}-${Y}", {"X": "a"}) == "a-"
