"""
Git support for repocache.

The git program is always invoked as a subprocess; nothing of git itself is
reimplemented here.
"""

from .client import GitClient, GitCmd, GitWorkTree
from .repo import GitRepo, git_repo_factory

__all__ = [
    "GitClient",
    "GitCmd",
    "GitWorkTree",
    "GitRepo",
    "git_repo_factory",
]
