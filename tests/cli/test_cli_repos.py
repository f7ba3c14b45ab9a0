"""Tests for the repocache command line."""

import json
import os

import pytest
from click.testing import CliRunner

from repocache import __version__
from repocache.cli.main import cli
from tests.fixtures import FakeGitClient

REMOTE = "https://example.com/group/project"
SSH_REMOTE = "git@example.com:group/project.git"


@pytest.fixture
def run(cache_dir, fake_git):
    """Invoke the CLI against a temporary cache and the fake git client."""
    runner = CliRunner()

    def _run(*args, client=None):
        return runner.invoke(
            cli,
            ["--cache-dir", str(cache_dir), *args],
            obj={"GIT_CLIENT": client or fake_git},
        )

    return _run


@pytest.mark.short
class TestCliRepos:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_add(self, run, cache_dir):
        result = run("add", "project", SSH_REMOTE + "/docs")

        assert result.exit_code == 0, result.output
        assert f"Added project: {SSH_REMOTE} (ssh)" in result.output
        assert "path: /docs" in result.output
        data = json.loads((cache_dir / "repos.conf").read_text())
        assert list(data["Repos"]) == ["project"]

    def test_add_duplicate(self, run):
        run("add", "project", REMOTE)

        result = run("add", "project", SSH_REMOTE)

        assert result.exit_code == 1
        assert "Repository project already exists" in result.output
        assert REMOTE in result.output

    def test_add_invalid_url(self, run, cache_dir):
        result = run("add", "project", "https://example.com/unknown")

        assert result.exit_code == 1
        assert "Invalid git url" in result.output
        assert not (cache_dir / "repos.conf").exists()

    def test_add_invalid_name(self, run, cache_dir):
        result = run("add", "../escape", REMOTE)

        assert result.exit_code == 1
        assert "Invalid repository name '../escape'" in result.output
        assert not (cache_dir / "repos.conf").exists()

    def test_add_and_sync(self, run, cache_dir):
        result = run("add", "--sync", "project", REMOTE)

        assert result.exit_code == 0, result.output
        assert f"cloned to {cache_dir / 'repos' / 'project'}" in result.output

    def test_list_sorted(self, run):
        run("add", "zeta", REMOTE)
        run("add", "alpha", SSH_REMOTE)

        result = run("list")

        assert result.exit_code == 0
        names = [line.split("\t")[0] for line in result.output.splitlines() if "\t" in line]
        assert names == ["alpha", "zeta"]

    def test_list_paths(self, run, cache_dir):
        run("add", "project", SSH_REMOTE + "/docs")

        result = run("list", "--paths")

        expected = os.path.join(str(cache_dir), "repos", "project", "docs")
        assert f"project\t{SSH_REMOTE}/docs\t{expected}" in result.output

    def test_remove(self, run, cache_dir):
        run("add", "project", REMOTE)

        result = run("remove", "project")

        assert result.exit_code == 0
        assert "Removed project" in result.output
        assert json.loads((cache_dir / "repos.conf").read_text()) == {"Repos": {}}

    def test_remove_unknown(self, run):
        result = run("remove", "missing")

        assert result.exit_code == 0
        assert "missing is not in the cache" in result.output

    def test_broken_config(self, run, cache_dir):
        cache_dir.mkdir(parents=True)
        (cache_dir / "repos.conf").write_text("{broken")

        result = run("list")

        assert result.exit_code == 1
        assert "Persistence error" in result.output


@pytest.mark.short
class TestCliSync:
    def test_sync_all(self, run, cache_dir):
        run("add", "one", REMOTE)
        run("add", "two", SSH_REMOTE + "/docs")

        result = run("sync")

        assert result.exit_code == 0, result.output
        assert f"one: {cache_dir / 'repos' / 'one'}" in result.output
        assert f"two: {cache_dir / 'repos' / 'two' / 'docs'}" in result.output

    def test_sync_empty_cache(self, run):
        result = run("sync")

        assert result.exit_code == 0
        assert "No repositories in the cache" in result.output

    def test_sync_unknown_name(self, run):
        result = run("sync", "missing")

        assert result.exit_code == 1
        assert "Repository missing is not in the cache" in result.output

    def test_sync_failure(self, run, git_remotes):
        run("add", "one", REMOTE)
        failing = FakeGitClient(remotes=git_remotes, fail_clone=True)

        result = run("sync", "one", client=failing)

        assert result.exit_code == 1
        assert "not found" in result.output
        assert "Failed to sync 1/1 repositories: one" in result.output


@pytest.mark.short
class TestCliWalk:
    def test_walk_after_sync(self, run, cache_dir):
        run("add", "project", REMOTE)
        run("sync", "project")
        local_dir = cache_dir / "repos" / "project"
        (local_dir / "docs").mkdir()
        (local_dir / "docs" / "index.md").write_text("welcome")
        (local_dir / "README.md").write_text("readme")
        (local_dir / ".git").mkdir()

        result = run("walk", "project")

        assert result.exit_code == 0, result.output
        lines = set(result.output.splitlines())
        assert {"README.md", "docs/", "docs/index.md"} <= lines
        assert ".fakegit" not in lines
        assert ".git/" not in lines

    def test_walk_all_keeps_git_hidden(self, run, cache_dir):
        run("add", "project", REMOTE, "--sync")
        (cache_dir / "repos" / "project" / ".git").mkdir()

        result = run("walk", "--all", "project")

        lines = set(result.output.splitlines())
        assert ".fakegit" in lines
        assert ".git/" not in lines

    def test_walk_before_sync(self, run):
        run("add", "project", REMOTE)

        result = run("walk", "project")

        assert result.exit_code == 1
        assert "run 'repocache sync project' first" in result.output
