"""Local file system based repository"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from repocache.constants import LOCAL_REPO_TYPE
from repocache.exceptions import PersistenceError
from repocache.model.repository import PersistentHandle
from repocache.utils import join_path


class LocalRepo(BaseModel):
    """Repository backed directly by a directory on the local file system."""

    model_config = ConfigDict(populate_by_name=True)

    base_dir: str = Field(..., alias="base", description="Local root directory")
    path: str = Field("", description="Relative path inside the repository")

    def base_path(self) -> str:
        return join_path(self.base_dir, self.path)

    def persist(self) -> PersistentHandle:
        return PersistentHandle(
            type=LOCAL_REPO_TYPE, opaque=self.model_dump_json(by_alias=True)
        )


def local_repo_factory(handle: PersistentHandle) -> Optional[LocalRepo]:
    """Restore a LocalRepo, or return None if the handle is of another type."""
    if handle.type != LOCAL_REPO_TYPE:
        return None
    try:
        return LocalRepo.model_validate_json(handle.opaque)
    except ValidationError as e:
        raise PersistenceError(LOCAL_REPO_TYPE, f"cannot decode local repo: {e}") from e
