"""
Cache of remote repositories.

The cache maps logical names to ``CachedRepo`` entries and persists that
mapping in ``<base_dir>/repos.conf``:

    {"Repos": {"<name>": {"Type": "git", "Opaque": "<json>"}, ...}}

Each cached repository is cloned into ``<base_dir>/repos/<name>``.

Every mutation is saved immediately. If saving fails the in-memory change is
rolled back, so ``add`` and ``remove`` either fully happen or not at all.

The cache assumes a single writer per base directory: concurrent writers
risk lost updates (the last save wins).
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from repocache.cache.cached import CachedRepo
from repocache.cache.store import FileStore
from repocache.constants import CACHE_CONF_FILE, CACHE_REPOS_DIR
from repocache.exceptions import (
    ConfigurationError,
    PersistenceError,
    RepoAlreadyExistsError,
    RepoLoadError,
)
from repocache.model.registry import RepoRegistry, default_registry
from repocache.model.repository import PersistentHandle, RemoteRepo
from repocache.utils import join_path

logger = logging.getLogger(__name__)


def check_repo_name(name: str) -> None:
    """
    Make sure a repository name maps to its own directory under ``repos/``.

    Raises:
        ConfigurationError: If the name is empty, is "." or "..", or contains
            a path separator
    """
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if not name or name in (".", "..") or any(s in name for s in separators):
        raise ConfigurationError(f"Invalid repository name '{name}'")


class CacheConfig(BaseModel):
    """On-disk format of the cache configuration file."""

    model_config = ConfigDict(populate_by_name=True)

    repos: Optional[Dict[str, PersistentHandle]] = Field(None, alias="Repos")


class RepoCache:
    """A cache of multiple remote repositories under one base directory."""

    def __init__(
        self,
        base_dir: Union[str, Path],
        registry: Optional[RepoRegistry] = None,
        store: Optional[FileStore] = None,
    ):
        """
        Args:
            base_dir: Root directory of the cache
            registry: Factories used to restore persisted repositories
                (defaults to the git and local factories)
            store: Store of the cache configuration file
                (defaults to ``<base_dir>/repos.conf``)
        """
        if not base_dir:
            raise ConfigurationError("RepoCache requires a base directory")
        self.base_dir = str(base_dir)
        self.registry = registry if registry is not None else default_registry()
        self.store = (
            store
            if store is not None
            else FileStore(join_path(self.base_dir, CACHE_CONF_FILE))
        )
        self._repos: Dict[str, CachedRepo] = {}

    def local_dir_for(self, name: str) -> str:
        """Directory holding the clone of the repository cached as ``name``."""
        return join_path(self.base_dir, CACHE_REPOS_DIR, name)

    def _cached(self, name: str, remote: RemoteRepo) -> CachedRepo:
        return CachedRepo(name=name, remote=remote, local_dir=self.local_dir_for(name))

    def load(self) -> None:
        """
        Load cached repositories from the file system.

        A missing configuration file is an empty cache. Entries of unknown
        types, and entries which are not remote repositories, are skipped.
        Every entry is attempted before any restore failure is reported,
        whatever a factory raises. Entries with an invalid name fail too.

        Raises:
            PersistenceError: If the configuration file cannot be decoded
            RepoLoadError: If some entries could not be restored; the others
                are loaded nonetheless
        """
        content = self.store.read()
        if content is None:
            logger.debug(f"No cache configuration in {self.base_dir}, starting empty")
            self._repos = {}
            return

        try:
            cfg = CacheConfig.model_validate_json(content)
        except ValidationError as e:
            raise PersistenceError(str(self.store.path), str(e)) from e

        repos: Dict[str, CachedRepo] = {}
        errors: List[Tuple[str, Exception]] = []
        for name, handle in (cfg.repos or {}).items():
            try:
                check_repo_name(name)
                repo = self.registry.restore(handle)
            except Exception as e:
                errors.append((name, e))
                continue
            if repo is None:
                logger.debug(f"Skipping {name}: unknown repository type '{handle.type}'")
                continue
            if not isinstance(repo, RemoteRepo):
                logger.debug(f"Skipping {name}: '{handle.type}' is not a remote type")
                continue
            repos[name] = self._cached(name, repo)

        self._repos = repos
        logger.debug(f"Loaded {len(repos)} repositories from {self.store.path}")
        if errors:
            raise RepoLoadError(errors)

    def save(self) -> None:
        """
        Flush the in-memory cache to the file system.

        Raises:
            OSError: If the configuration file cannot be written
        """
        cfg = CacheConfig(
            repos={name: repo.persist() for name, repo in self._repos.items()}
        )
        encoded = cfg.model_dump_json(by_alias=True)
        with self.store.write() as f:
            f.write(encoded)
        logger.debug(f"Saved {len(self._repos)} repositories to {self.store.path}")

    def add(self, name: str, remote: RemoteRepo) -> CachedRepo:
        """
        Add a remote repository to the cache.

        Args:
            name: Name of the cached repository
            remote: The remote repository

        Returns:
            The new cache entry

        Raises:
            ConfigurationError: If the name is not a plain directory name
            RepoAlreadyExistsError: If the name is taken; the existing entry is
                attached to the error
            OSError: If the cache cannot be saved, in which case the cache is
                left unchanged
        """
        check_repo_name(name)
        existing = self._repos.get(name)
        if existing is not None:
            raise RepoAlreadyExistsError(name, existing)

        cached = self._cached(name, remote)
        self._repos[name] = cached
        try:
            self.save()
        except Exception:
            del self._repos[name]
            raise
        logger.info(f"Added repository {name}")
        return cached

    def remove(self, name: str) -> None:
        """
        Remove a repository from the cache. Unknown names are ignored.

        The local clone is left on disk.

        Raises:
            OSError: If the cache cannot be saved, in which case the entry is
                restored
        """
        removed = self._repos.pop(name, None)
        if removed is None:
            return
        try:
            self.save()
        except Exception:
            self._repos[name] = removed
            raise
        logger.info(f"Removed repository {name}")

    def repo_names(self) -> List[str]:
        """Names of the cached repositories in sorted order."""
        return sorted(self._repos)

    def find(self, name: str) -> Optional[CachedRepo]:
        return self._repos.get(name)
