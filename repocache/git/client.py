"""
Git client running the external git program.

Two layers are provided:

* ``GitCmd`` executes the git program with the given arguments against the
  current process environment.
* ``GitWorkTree`` binds a client to a working tree and prefixes every command
  with ``-C <work_dir>`` (or ``--work-tree``/``--git-dir`` when a separate git
  directory is used).

Failures are raised as ``GitError`` carrying the captured stderr.
"""

import logging
import subprocess
from typing import Optional, Protocol

from repocache.constants import DEFAULT_GIT_PROGRAM
from repocache.exceptions import ConfigurationError, GitError

logger = logging.getLogger(__name__)


class GitClient(Protocol):
    """Anything able to run a git command and return its stdout."""

    def execute(self, *args: str) -> str:
        """Run git with ``args``, raising GitError on failure."""
        ...


class GitCmd:
    """GitClient implementation invoking the git program as a subprocess."""

    def __init__(self, program: str = DEFAULT_GIT_PROGRAM):
        """
        Args:
            program: Path to the git executable, or a bare name resolved via PATH
        """
        self.program = program or DEFAULT_GIT_PROGRAM

    def execute(self, *args: str) -> str:
        """
        Run the git program and capture its output.

        Args:
            *args: Arguments passed to git

        Returns:
            The stdout of the command

        Raises:
            GitError: If git cannot be started or exits with a nonzero status
        """
        command = [self.program, *args]
        logger.debug(f"Running {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                check=True,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            raise GitError(args, stderr=e.stderr, stdout=e.stdout, cause=e) from e
        except OSError as e:
            raise GitError(args, cause=e) from e
        return result.stdout

    def __repr__(self):
        return f"GitCmd(program={self.program!r})"


class GitWorkTree:
    """Git client bound to a working tree."""

    def __init__(
        self, client: GitClient, work_dir: str, git_dir: Optional[str] = None
    ):
        if client is None:
            raise ConfigurationError("GitWorkTree requires a git client")
        if not work_dir:
            raise ConfigurationError("GitWorkTree requires a working directory")
        self.client = client
        self.work_dir = str(work_dir)
        self.git_dir = str(git_dir) if git_dir else None

    def execute(self, *args: str) -> str:
        if self.git_dir:
            argv = [f"--work-tree={self.work_dir}", f"--git-dir={self.git_dir}"]
        else:
            argv = ["-C", self.work_dir]
        return self.client.execute(*argv, *args)

    def latest_commit(self) -> str:
        """Get the id of the latest commit in the working tree."""
        return self.execute("log", "-1", "--format=%H").strip()

    def pull(self) -> None:
        """Fetch changes from the remote and apply them to the working tree."""
        self.execute("pull")

    def pull_and_verify(self) -> str:
        """Pull, then verify the working tree by reading back the latest commit.

        Returns:
            The commit id after the pull
        """
        self.pull()
        return self.latest_commit()

    def clone(self, remote: str, *args: str) -> None:
        """
        Clone a remote repository into the working directory.

        The working directory does not exist yet, so the command runs through
        the underlying client rather than inside the working tree.

        Args:
            remote: URL of the repository to clone
            *args: Extra options for ``git clone``
        """
        self.client.execute("clone", *args, remote, self.work_dir)
