from .loader import load_config
from .models import (
    GitHubSettings,
    NavsyncConfig,
    PublishSettings,
    ServerSettings,
    SiteSettings,
)

__all__ = [
    "GitHubSettings",
    "NavsyncConfig",
    "PublishSettings",
    "ServerSettings",
    "SiteSettings",
    "load_config",
]
