"""
Remote git repository.

A ``GitRepo`` is created from a free-form URL. The boundary between the
repository and a sub-path inside it cannot be told from the URL alone, so
``detect()`` probes the remote with ``git ls-remote`` on increasingly long
leading segments of the path until one answers:

    git@example.com:group/project.git/sub/dir
        protocol  = ssh
        remote    = git@example.com:group/project.git
        repo_name = group/project.git
        path      = /sub/dir

Supported URL shapes:

    user@host:repo/path          ssh (scp-like)
    protocol://host/repo/path    explicit protocol
    ./path, ../path, /path       local file
    host/repo/path               tries http://, https:// then file://

Syncing follows a clone-or-pull protocol: an existing working tree is pulled
and verified, and anything unusable (missing, not a git tree, corrupt, or a
failed pull) is wiped and cloned afresh.
"""

import logging
import shutil
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from repocache.constants import GIT_REPO_TYPE
from repocache.exceptions import (
    ConfigurationError,
    GitError,
    InvalidGitURLError,
    PersistenceError,
)
from repocache.git.client import GitClient, GitWorkTree
from repocache.model.repository import PersistentHandle

logger = logging.getLogger(__name__)

# Tried in order when a URL carries no protocol
IMPLICIT_PROTOCOLS = ("http", "https", "file")


class GitRepo(BaseModel):
    """A remote git repository, optionally narrowed to a sub-path."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., description="Full URL as given by the user")

    # The following fields are derived from url by detect()
    protocol: str = Field("", description="Protocol used to talk to the remote")
    repo_name: str = Field(
        "", alias="name", description="Repository name portion of the URL"
    )
    remote: str = Field("", description="Clone URL (protocol + host + repo name)")
    path: str = Field("", description="Sub-path inside the repository")

    _client: Optional[GitClient] = PrivateAttr(default=None)

    def __init__(self, client: Optional[GitClient] = None, **data):
        super().__init__(**data)
        self._client = client

    @property
    def client(self) -> Optional[GitClient]:
        return self._client

    def bind(self, client: GitClient) -> "GitRepo":
        """Attach the git client used for detection and sync."""
        self._client = client
        return self

    def _require_client(self) -> GitClient:
        if self._client is None:
            raise ConfigurationError(f"No git client bound to repository {self.url}")
        return self._client

    def detect(self) -> None:
        """
        Parse the URL and find out the repository behind it.

        Raises:
            ConfigurationError: If the URL is empty or no client is bound
            InvalidGitURLError: If no prefix of the URL is a git repository
        """
        if not self.url:
            raise ConfigurationError("GitRepo requires a URL")
        self._require_client()

        url = self.url
        slash_pos = url.find("/")
        colon_pos = url.find(":")
        at_pos = url.find("@")

        # user@host:repo/path
        if 0 < at_pos < colon_pos and (slash_pos < 0 or colon_pos < slash_pos):
            self._detect_prefixed(url[: colon_pos + 1], url[colon_pos + 1 :])
            self.protocol = "ssh"
            return

        # protocol://host/repo/path
        if 0 < colon_pos < slash_pos and url[colon_pos + 1 :].startswith("//"):
            self._detect_prefixed(url[: colon_pos + 3], url[colon_pos + 3 :])
            self.protocol = url[:colon_pos]
            return

        # ./path, ../path, /path
        if url.startswith(("./", "../", "/")):
            self._detect_prefixed("file://", url)
            self.protocol = "file"
            return

        # host/repo/path
        for protocol in IMPLICIT_PROTOCOLS:
            try:
                self._detect_prefixed(f"{protocol}://", url)
            except InvalidGitURLError:
                continue
            self.protocol = protocol
            return

        raise InvalidGitURLError(url)

    def _detect_prefixed(self, prefix: str, path: str) -> None:
        """Probe ``prefix`` + each leading segment of ``path``, shortest first."""
        client = self._require_client()
        base = ""
        while path:
            pos = path.find("/")
            if pos > 0:
                base += path[:pos]
                path = path[pos:]
            elif pos == 0:
                base += "/"
                path = path[1:]
                continue
            else:
                base += path
                path = ""

            candidate = prefix + base
            try:
                client.execute("ls-remote", candidate)
            except GitError as e:
                logger.debug(f"No git repository at {candidate}: {e.summary}")
                continue

            logger.debug(f"Detected git repository {candidate} (path '{path}')")
            self.repo_name = base
            self.path = path
            self.remote = candidate
            return

        raise InvalidGitURLError(self.url)

    def base_path(self) -> str:
        return self.path

    def persist(self) -> PersistentHandle:
        return PersistentHandle(
            type=GIT_REPO_TYPE, opaque=self.model_dump_json(by_alias=True)
        )

    def sync(self, local_dir: str) -> None:
        """
        Bring the working tree in ``local_dir`` up to date with the remote.

        A usable working tree is pulled and verified. If that fails at any
        step the directory is removed and the remote is cloned again.

        Args:
            local_dir: Directory holding the working tree

        Raises:
            ConfigurationError: If the repository was never detected
            GitError: If the fresh clone fails
        """
        if not self.remote:
            raise ConfigurationError(f"Repository {self.url} has no detected remote")
        work_tree = GitWorkTree(self._require_client(), str(local_dir))

        try:
            work_tree.latest_commit()
            commit = work_tree.pull_and_verify()
            logger.info(f"Updated {self.remote} in {local_dir} to {commit[:7]}")
            return
        except GitError as e:
            logger.warning(
                f"Working tree {local_dir} is unusable ({e.summary}). Re-cloning."
            )

        shutil.rmtree(local_dir, ignore_errors=True)
        logger.info(f"Cloning {self.remote} to {local_dir}")
        work_tree.clone(self.remote)


def git_repo_factory(
    handle: PersistentHandle, client: Optional[GitClient] = None
) -> Optional[GitRepo]:
    """
    Restore a GitRepo from a persistent handle.

    Args:
        handle: Persistent handle produced by GitRepo.persist()
        client: Git client to bind to the restored repository

    Returns:
        The restored repository, or None if the handle is of another type
    """
    if handle.type != GIT_REPO_TYPE:
        return None
    try:
        repo = GitRepo.model_validate_json(handle.opaque)
    except ValidationError as e:
        raise PersistenceError(GIT_REPO_TYPE, f"cannot decode git repo: {e}") from e
    if client is not None:
        repo.bind(client)
    return repo
