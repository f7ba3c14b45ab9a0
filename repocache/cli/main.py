"""repocache CLI"""

from pathlib import Path

import click

from repocache import __version__
from repocache.cli.repos import add, list_repos, remove
from repocache.cli.sync import sync
from repocache.cli.utils.logging import configure_logging
from repocache.cli.walk import walk


@click.group()
@click.version_option(__version__, prog_name="repocache")
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="REPOCACHE_DIR",
    default=None,
    help="Root directory of the repository cache.",
)
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
@click.pass_context
def cli(ctx, cache_dir, debug):
    """
    Keep local clones of remote repositories.
    """
    ctx.ensure_object(dict)
    ctx.obj["CACHE_DIR"] = cache_dir
    ctx.obj["DEBUG"] = debug
    configure_logging(debug)


cli.add_command(add)
cli.add_command(remove)
cli.add_command(list_repos)
cli.add_command(sync)
cli.add_command(walk)


if __name__ == "__main__":
    cli()
