"""CLI command listing the content of a cached repository"""

import os

import click

from repocache.cli.utils.cache import open_cache, require_repo
from repocache.utils import join_path
from repocache.walker import RepoWalker, skip_hidden, skip_names


@click.command("walk")
@click.argument("name")
@click.option(
    "--breadth-first",
    is_flag=True,
    help="List a directory fully before entering its subdirectories.",
)
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Include hidden entries (.git is always skipped).",
)
@click.pass_context
def walk(ctx, name: str, breadth_first: bool, show_all: bool):
    """List the files of cached repository NAME.

    The repository must have been synced first.
    """
    cache = open_cache(ctx)
    cached = require_repo(cache, name)
    base_path = cached.base_path()

    def echo_item(item):
        rel = os.path.relpath(join_path(item.path, item.name), base_path)
        click.echo(rel + "/" if item.is_dir else rel)

    walker = RepoWalker(echo_item, breadth_first=breadth_first).use(skip_names(".git"))
    if not show_all:
        walker.use(skip_hidden)

    try:
        walker.visit(name, cached)
    except FileNotFoundError:
        raise click.ClickException(
            f"{base_path} does not exist, run 'repocache sync {name}' first"
        )
