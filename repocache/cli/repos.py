"""CLI commands adding, removing and listing cached repositories"""

import click

from repocache.cli.utils.cache import get_git_client, open_cache
from repocache.exceptions import (
    ConfigurationError,
    GitError,
    InvalidGitURLError,
    RepoAlreadyExistsError,
)
from repocache.git import GitRepo


def _describe(cached) -> str:
    url = getattr(cached.remote, "url", "")
    return f"{cached.name}\t{url}" if url else cached.name


@click.command("add")
@click.argument("name")
@click.argument("url")
@click.option(
    "--sync/--no-sync",
    "sync_now",
    default=False,
    help="Clone the repository right after adding it.",
)
@click.pass_context
def add(ctx, name: str, url: str, sync_now: bool):
    """Add a git repository to the cache under NAME.

    URL may point inside the repository, the remaining part becomes the
    sub-path exposed by the cache.

    Example:

      repocache add docs git@example.com:group/project.git/docs
    """
    cache = open_cache(ctx)

    repo = GitRepo(url=url, client=get_git_client(ctx))
    try:
        repo.detect()
    except InvalidGitURLError as e:
        raise click.ClickException(str(e))

    try:
        cached = cache.add(name, repo)
    except RepoAlreadyExistsError as e:
        raise click.ClickException(f"{e} ({_describe(e.existing)})")
    except ConfigurationError as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.ClickException(f"Failed to save the cache: {e}")

    click.echo(f"Added {name}: {repo.remote} ({repo.protocol})")
    if repo.path:
        click.echo(f"  path: {repo.path}")

    if sync_now:
        try:
            cached.sync()
        except GitError as e:
            click.echo(e.stderr, err=True)
            raise click.ClickException(e.summary)
        click.echo(f"  cloned to {cached.local_dir}")


@click.command("remove")
@click.argument("name")
@click.pass_context
def remove(ctx, name: str):
    """Remove NAME from the cache. The local clone is kept on disk."""
    cache = open_cache(ctx)
    if cache.find(name) is None:
        click.echo(f"{name} is not in the cache")
        return
    try:
        cache.remove(name)
    except OSError as e:
        raise click.ClickException(f"Failed to save the cache: {e}")
    click.echo(f"Removed {name}")


@click.command("list")
@click.option("--paths", is_flag=True, help="Show the local path of each repository.")
@click.pass_context
def list_repos(ctx, paths: bool):
    """List cached repositories."""
    cache = open_cache(ctx)
    for name in cache.repo_names():
        cached = cache.find(name)
        line = _describe(cached)
        if paths:
            line += f"\t{cached.base_path()}"
        click.echo(line)
