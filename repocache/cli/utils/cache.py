"""Helpers shared by the commands working on the repository cache"""

import click

from repocache.cache import RepoCache
from repocache.cli.utils.logging import logger
from repocache.config import get_cache_dir, get_git_program
from repocache.exceptions import PersistenceError, RepoLoadError
from repocache.git import GitCmd
from repocache.model import default_registry


def get_git_client(ctx: click.Context):
    """Git client for this invocation, created on first use."""
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)
    if root_ctx.obj.get("GIT_CLIENT") is None:
        root_ctx.obj["GIT_CLIENT"] = GitCmd(get_git_program())
    return root_ctx.obj["GIT_CLIENT"]


def open_cache(ctx: click.Context) -> RepoCache:
    """
    Open and load the repository cache selected on the command line.

    Entries which cannot be restored are reported and left out.
    """
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)
    cache_dir = root_ctx.obj.get("CACHE_DIR") or get_cache_dir()

    cache = RepoCache(cache_dir, registry=default_registry(get_git_client(ctx)))
    try:
        cache.load()
    except RepoLoadError as e:
        for name, err in e.errors:
            logger.warning(f"Ignoring cached repository {name}: {err}")
    except PersistenceError as e:
        raise click.ClickException(str(e))
    return cache


def require_repo(cache: RepoCache, name: str):
    """Find a cached repository or fail the command."""
    cached = cache.find(name)
    if cached is None:
        raise click.ClickException(f"Repository {name} is not in the cache")
    return cached
