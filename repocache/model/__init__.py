from .repository import PersistentHandle, RemoteRepo, Repository
from .local import LocalRepo, local_repo_factory
from .registry import RepoFactory, RepoRegistry, default_registry

__all__ = [
    "PersistentHandle",
    "RemoteRepo",
    "Repository",
    "LocalRepo",
    "local_repo_factory",
    "RepoFactory",
    "RepoRegistry",
    "default_registry",
]
