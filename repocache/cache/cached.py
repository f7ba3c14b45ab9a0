"""Remote repository paired with its local clone."""

from dataclasses import dataclass

from repocache.model.repository import PersistentHandle, RemoteRepo
from repocache.utils import join_path


@dataclass
class CachedRepo:
    """
    A remote repository made locally accessible.

    The clone lives in ``local_dir``; the remote's own sub-path is preserved
    beneath it.
    """

    name: str
    remote: RemoteRepo
    local_dir: str

    def base_path(self) -> str:
        return join_path(self.local_dir, self.remote.base_path())

    def persist(self) -> PersistentHandle:
        return self.remote.persist()

    def sync(self) -> None:
        """Explicitly update the local clone."""
        self.remote.sync(self.local_dir)
