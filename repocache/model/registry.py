"""Registry of factories restoring repositories from persistent handles."""

import logging
from typing import Callable, Dict, Iterator, Optional

from repocache.constants import GIT_REPO_TYPE, LOCAL_REPO_TYPE
from repocache.model.local import local_repo_factory
from repocache.model.repository import PersistentHandle, Repository

logger = logging.getLogger(__name__)

# A factory returns None when the handle is not of its own type and raises
# PersistenceError when the opaque data cannot be decoded.
RepoFactory = Callable[[PersistentHandle], Optional[Repository]]


class RepoRegistry:
    """
    Mapping from repository type tag to the factory restoring that type.

    Registries are plain values: build one at startup and hand it to the
    cache, there is no process-wide registry.
    """

    def __init__(self, factories: Optional[Dict[str, RepoFactory]] = None):
        self._factories: Dict[str, RepoFactory] = dict(factories or {})

    def register(self, type_tag: str, factory: RepoFactory) -> "RepoRegistry":
        self._factories[type_tag] = factory
        return self

    def get(self, type_tag: str) -> Optional[RepoFactory]:
        return self._factories.get(type_tag)

    def __contains__(self, type_tag: str) -> bool:
        return type_tag in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def restore(self, handle: PersistentHandle) -> Optional[Repository]:
        """
        Restore a repository using the factory registered for its type.

        Args:
            handle: Persistent handle to restore

        Returns:
            The repository, or None if no factory is registered for the type

        Raises:
            PersistenceError: If the factory cannot decode the opaque data
        """
        factory = self._factories.get(handle.type)
        if factory is None:
            logger.debug(f"No factory registered for repository type '{handle.type}'")
            return None
        return factory(handle)


def default_registry(git_client=None) -> RepoRegistry:
    """
    Build a registry knowing the git and local repository types.

    Args:
        git_client: Client bound to every restored GitRepo. Defaults to a
            GitCmd running the configured git program.

    Returns:
        A new registry
    """
    # Import here to avoid circular dependency
    from repocache.config import get_git_program
    from repocache.git import GitCmd, git_repo_factory

    if git_client is None:
        git_client = GitCmd(get_git_program())

    return RepoRegistry(
        {
            GIT_REPO_TYPE: lambda handle: git_repo_factory(handle, git_client),
            LOCAL_REPO_TYPE: local_repo_factory,
        }
    )
