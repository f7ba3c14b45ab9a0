"""
Walk over every entry of a repository.

Usage:
    def show(item):
        print(os.path.join(item.path, item.name))

    walker = RepoWalker(show).use(skip_names(".git"))
    walker.visit(name, cache.find(name))

Filters run in registration order before the walker function; the first
filter returning False skips the entry and, for a directory, everything
below it. By default subdirectories are entered as soon as they are seen
(depth first); with ``breadth_first`` the subdirectories of a directory are
only entered once that directory has been fully enumerated.

Any error from the file system, a filter or the walker function aborts the
walk and propagates to the caller.
"""

import logging
import os
import stat
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from repocache.model.repository import Repository
from repocache.utils import join_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkingItem:
    """The entry currently being visited."""

    repo_name: str
    repo: Repository
    # Directory containing the entry, rooted at the repository base path
    path: str
    name: str
    # Obtained with lstat
    file_info: os.stat_result

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.file_info.st_mode)


RepoWalkerFn = Callable[[WalkingItem], None]
RepoWalkerFilter = Callable[[WalkingItem], bool]


class RepoWalker:
    """Visits the whole content of a repository."""

    def __init__(
        self,
        walker_fn: RepoWalkerFn,
        path_prefix: str = "",
        filters: Optional[Iterable[RepoWalkerFilter]] = None,
        breadth_first: bool = False,
    ):
        """
        Args:
            walker_fn: Called once for every accepted entry
            path_prefix: Prepended to the paths opened on the file system, but
                not to the paths reported in items
            filters: Filters called before walker_fn
            breadth_first: Visit in breadth first order, otherwise depth first
        """
        self.walker_fn = walker_fn
        self.path_prefix = path_prefix or ""
        self.filters: List[RepoWalkerFilter] = list(filters or [])
        self.breadth_first = breadth_first

    def use(self, *filters: RepoWalkerFilter) -> "RepoWalker":
        """Register filters, returning the walker for chaining."""
        self.filters.extend(filters)
        return self

    def visit(self, name: str, repo: Repository) -> None:
        """Walk over every entry inside the repository."""
        self._visit(repo.base_path(), name, repo)

    def _accepted(self, item: WalkingItem) -> bool:
        for f in self.filters:
            if not f(item):
                return False
        return True

    def _visit(self, base_path: str, name: str, repo: Repository) -> None:
        full_path = self.path_prefix + base_path
        dirs: List[str] = []
        with os.scandir(full_path) as entries:
            for entry in entries:
                item = WalkingItem(
                    repo_name=name,
                    repo=repo,
                    path=base_path,
                    name=entry.name,
                    file_info=entry.stat(follow_symlinks=False),
                )
                if not self._accepted(item):
                    logger.debug(f"Filtered out {join_path(base_path, entry.name)}")
                    continue

                self.walker_fn(item)
                if not item.is_dir:
                    continue
                if self.breadth_first:
                    dirs.append(entry.name)
                else:
                    self._visit(join_path(base_path, entry.name), name, repo)

        for d in dirs:
            self._visit(join_path(base_path, d), name, repo)


def skip_hidden(item: WalkingItem) -> bool:
    """Reject entries whose name starts with a dot."""
    return not item.name.startswith(".")


def skip_names(*names: str) -> RepoWalkerFilter:
    """Build a filter rejecting entries with any of the given names."""
    rejected = frozenset(names)

    def _filter(item: WalkingItem) -> bool:
        return item.name not in rejected

    return _filter


def only_dirs(item: WalkingItem) -> bool:
    return item.is_dir


def only_files(item: WalkingItem) -> bool:
    """Accept regular files and symlinks; directories are pruned."""
    return not item.is_dir
