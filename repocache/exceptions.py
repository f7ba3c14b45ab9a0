"""
Exception classes for repocache.
"""

from typing import List, Optional, Sequence, Tuple


class RepoCacheError(Exception):
    """Base exception for all repocache errors."""

    pass


class ConfigurationError(RepoCacheError):
    """Raised when a required field is missing or invalid."""

    pass


class InvalidGitURLError(RepoCacheError):
    """Raised when no git repository can be detected behind a URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid git url: '{url}'")


class GitError(RepoCacheError):
    """Raised when the git program fails.

    The captured stderr is kept apart from the summary so callers can display
    it separately.
    """

    def __init__(
        self,
        args: Sequence[str],
        stderr: str = "",
        stdout: str = "",
        cause: Optional[BaseException] = None,
    ):
        self.git_args = list(args)
        self.stderr = stderr or ""
        self.stdout = stdout or ""
        self.cause = cause
        command = " ".join(["git", *self.git_args])
        self.summary = f"{command} failed: {cause}" if cause else f"{command} failed"
        message = self.summary
        if self.stderr.strip():
            message += ":\n" + self.stderr.rstrip()
        super().__init__(message)


class RepoAlreadyExistsError(RepoCacheError):
    """Raised when adding a repository under a name already in the cache.

    The entry already registered under that name is available as ``existing``.
    """

    def __init__(self, name: str, existing=None):
        self.name = name
        self.existing = existing
        super().__init__(f"Repository {name} already exists")


class PersistenceError(RepoCacheError):
    """Raised when persisted cache data cannot be read, decoded or encoded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Persistence error for {source}: {reason}")


class RepoLoadError(RepoCacheError):
    """Raised after loading a cache when some entries could not be restored.

    Entries that restored fine are loaded regardless.
    """

    def __init__(self, errors: List[Tuple[str, Exception]]):
        self.errors = errors
        details = "; ".join(f"{name}: {err}" for name, err in errors)
        super().__init__(f"Failed to restore {len(errors)} repositories: {details}")
