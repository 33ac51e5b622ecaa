"""navsync - manage Docusaurus navbars in a GitHub repository through the Git data API."""

from navsync.config import NavsyncConfig, load_config
from navsync.navbar import NavbarSyncService
from navsync.vcs import GitHubStore, GitStore, create_store

__version__ = "0.1.0"

__all__ = [
    "GitHubStore",
    "GitStore",
    "NavbarSyncService",
    "NavsyncConfig",
    "create_store",
    "load_config",
]
