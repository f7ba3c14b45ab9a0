"""Test doubles and helpers shared by the test suite."""

import shutil
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from repocache.cache import FileStore
from repocache.exceptions import GitError

requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="git program not available"
)

requires_posix = pytest.mark.skipif(
    sys.platform == "win32", reason="needs a POSIX shell"
)

# A directory holding this file is a working tree for FakeGitClient
FAKE_GIT_MARKER = ".fakegit"


def split_work_tree(args) -> Tuple[Optional[str], List[str]]:
    """Separate the working tree options from a git argument vector."""
    argv = list(args)
    if argv[:1] == ["-C"]:
        return argv[1], argv[2:]
    if argv and argv[0].startswith("--work-tree="):
        return argv[0].split("=", 1)[1], argv[2:]
    return None, argv


class FakeGitClient:
    """
    In-memory stand-in for the git program.

    ``ls-remote`` and ``clone`` only succeed for the given remotes. A directory
    is a working tree when it contains FAKE_GIT_MARKER, which holds the number
    of the current commit; every pull adds one commit.
    """

    def __init__(
        self,
        remotes: Iterable[str] = (),
        fail_pull: bool = False,
        fail_clone: bool = False,
    ):
        self.remotes = set(remotes)
        self.fail_pull = fail_pull
        self.fail_clone = fail_clone
        self.calls: List[Tuple[str, ...]] = []

    @property
    def commands(self) -> List[str]:
        return [split_work_tree(call)[1][0] for call in self.calls]

    def _error(self, argv, stderr: str) -> GitError:
        return GitError(argv, stderr=stderr + "\n", cause=RuntimeError("exit status 128"))

    def execute(self, *args: str) -> str:
        self.calls.append(tuple(args))
        work_dir, argv = split_work_tree(args)
        command = argv[0]

        if command == "ls-remote":
            if argv[1] in self.remotes:
                return f"{'0' * 40}\tHEAD\n"
            raise self._error(
                argv, f"fatal: '{argv[1]}' does not appear to be a git repository"
            )

        if command == "clone":
            remote, target = argv[-2], Path(argv[-1])
            if self.fail_clone or remote not in self.remotes:
                raise self._error(argv, f"fatal: repository '{remote}' not found")
            if target.exists() and any(target.iterdir()):
                raise self._error(
                    argv, f"fatal: destination path '{target}' is not empty"
                )
            target.mkdir(parents=True, exist_ok=True)
            (target / FAKE_GIT_MARKER).write_text("1")
            return ""

        marker = Path(work_dir) / FAKE_GIT_MARKER if work_dir else None
        if marker is None or not marker.is_file():
            raise self._error(argv, "fatal: not a git repository: .git")

        if command == "log":
            return f"{int(marker.read_text()):040d}\n"
        if command == "pull":
            if self.fail_pull:
                raise self._error(argv, "fatal: unable to access remote")
            marker.write_text(str(int(marker.read_text()) + 1))
            return "Updating\n"
        raise self._error(argv, f"git: '{command}' is not a git command")


def make_fake_tree(path: Path, commit: int = 1) -> Path:
    """Create a directory FakeGitClient considers a working tree."""
    path.mkdir(parents=True, exist_ok=True)
    (path / FAKE_GIT_MARKER).write_text(str(commit))
    return path


class FailingStore(FileStore):
    """FileStore whose writes fail while ``fail`` is set."""

    def __init__(self, path, fail: bool = True):
        super().__init__(path)
        self.fail = fail

    @contextmanager
    def write(self):
        if self.fail:
            raise OSError("No space left on device")
        with super().write() as f:
            yield f


# Real git repositories, built with GitPython


def make_origin(path: Path, files: Dict[str, str]):
    """Create a git repository at ``path`` with one commit holding ``files``."""
    from git import Repo

    repo = Repo.init(path)
    commit_files(repo, files, "initial commit")
    return repo


def commit_files(repo, files: Dict[str, str], message: str) -> str:
    """Write ``files`` into the repository and commit them."""
    from git import Actor

    root = Path(repo.working_tree_dir)
    for rel_path, content in files.items():
        target = root / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    repo.index.add(list(files))
    actor = Actor("Test User", "test@example.com")
    commit = repo.index.commit(message, author=actor, committer=actor)
    return commit.hexsha
