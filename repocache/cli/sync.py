"""CLI command syncing cached repositories"""

import sys

import click

from repocache.cli.utils.cache import open_cache, require_repo
from repocache.cli.utils.logging import logger
from repocache.exceptions import GitError


@click.command("sync")
@click.argument("names", nargs=-1)
@click.pass_context
def sync(ctx, names):
    """Clone or update cached repositories.

    All repositories are synced when no NAMES are given. A broken local clone
    is removed and cloned again.
    """
    cache = open_cache(ctx)
    names = list(names) or cache.repo_names()
    repos = [require_repo(cache, name) for name in names]

    if not repos:
        click.echo("No repositories in the cache")
        return

    failed = []
    for cached in repos:
        logger.debug(f"Syncing {cached.name} into {cached.local_dir}")
        try:
            cached.sync()
        except GitError as e:
            click.echo(f"{cached.name}: {e.summary}", err=True)
            if e.stderr.strip():
                click.echo(e.stderr.rstrip(), err=True)
            failed.append(cached.name)
            continue
        click.echo(f"{cached.name}: {cached.base_path()}")

    if failed:
        click.echo(
            f"Failed to sync {len(failed)}/{len(repos)} repositories: "
            + ", ".join(failed),
            err=True,
        )
        sys.exit(1)
