import io

import pytest
import logging

from repocache.model import default_registry
from tests.fixtures import FakeGitClient


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("repocache")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream  # Yield the stream to the test function

    # Cleanup after the test
    logger.removeHandler(handler)
    log_stream.close()


# git fixtures


@pytest.fixture
def git_remotes():
    """Remotes the fake git client accepts."""
    return {
        "git@example.com:group/project.git",
        "https://example.com/group/project",
    }


@pytest.fixture
def fake_git(git_remotes) -> FakeGitClient:
    return FakeGitClient(remotes=git_remotes)


@pytest.fixture
def registry(fake_git):
    return default_registry(fake_git)


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"
