from pydantic import BaseModel, Field
from typing import Literal


class GitHubSettings(BaseModel):
    repository: str | None = Field(
        default=None, description="Target repository in owner/name format"
    )
    token_env: str = "GITHUB_TOKEN"
    owner_env: str = "GITHUB_OWNER"
    repo_env: str = "GITHUB_REPO"
    branch: str | None = None
    base_url: str = "https://api.github.com"
    timeout: int = Field(default=15, gt=0)


class PublishSettings(BaseModel):
    max_attempts: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=0.5, ge=0)


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)


class SiteSettings(BaseModel):
    root: str = "."


class NavsyncConfig(BaseModel):
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    publish: PublishSettings = Field(default_factory=PublishSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
