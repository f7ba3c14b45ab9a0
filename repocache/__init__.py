"""
repocache: local caches of remote content repositories.

A ``RepoCache`` maps names to remote repositories (git today), persists the
mapping, and keeps a local clone of each one under the cache directory.
``RepoWalker`` then enumerates the files of a cached repository.
"""

__version__ = "0.1.0"

from .cache import CachedRepo, RepoCache
from .git import GitCmd, GitRepo
from .model import LocalRepo, PersistentHandle, RepoRegistry, default_registry
from .walker import RepoWalker, WalkingItem

__all__ = [
    "__version__",
    "CachedRepo",
    "RepoCache",
    "GitCmd",
    "GitRepo",
    "LocalRepo",
    "PersistentHandle",
    "RepoRegistry",
    "default_registry",
    "RepoWalker",
    "WalkingItem",
]
