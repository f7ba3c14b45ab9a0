"""Repository protocols and their persistent representation.

A repository is anything reachable through a local base path. Remote
repositories additionally need to be synced into a local directory before
they can be accessed. Every repository can be reduced to a
``PersistentHandle``: a type tag plus an opaque string only the factory
registered under that tag knows how to decode.
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class PersistentHandle(BaseModel):
    """Tagged, opaque serialization of a single repository."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: str = Field("", alias="Type", description="Repository type tag")
    opaque: str = Field(
        "", alias="Opaque", description="Type-specific encoding of the repository"
    )


@runtime_checkable
class Repository(Protocol):
    """A repository which can be accessed using a local path."""

    def base_path(self) -> str:
        """Effective root of the repository content (may be a sub-path)."""
        ...

    def persist(self) -> PersistentHandle:
        """Serialize the repository into a persistent handle."""
        ...


@runtime_checkable
class RemoteRepo(Repository, Protocol):
    """A remote repository which must be synced before direct access."""

    def sync(self, local_dir: str) -> None:
        """Materialize or update the repository content inside ``local_dir``."""
        ...
