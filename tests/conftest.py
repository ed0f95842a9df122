"""Pytest fixtures for git-wtm tests"""
import tempfile
from pathlib import Path
from typing import List, Optional
from unittest.mock import Mock

import pytest
import git

from git_wtm.config import Config
from git_wtm.services.git.repository import GitRepository
from git_wtm.services.paths import PathDeriver
from git_wtm.ui.selector import Selector


class FakeSelector(Selector):
    """Selector that answers from a script instead of asking the user."""

    def __init__(self, choose=None):
        self.choose = choose  # callable(lines) -> str, or a fixed str
        self.calls: List[tuple[List[str], str]] = []

    def select(self, lines: List[str], prompt: str) -> str:
        self.calls.append((lines, prompt))
        if callable(self.choose):
            return self.choose(lines)
        return self.choose or ""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def base_dir(temp_dir):
    """Managed worktree base directory."""
    return temp_dir / "worktrees"


@pytest.fixture
def mock_config(base_dir):
    """Create a configuration dictionary."""
    return {
        'worktree_base_dir': str(base_dir),
        'remote_name': 'origin',
        'editor': 'vim',
        'ai_command': 'claude',
        'picker': 'fzf',
        'github_token': 'test_token_for_testing',
        'max_prs_to_fetch': 100,
        'verbose': False,
        'debug': False,
    }


@pytest.fixture
def config(mock_config):
    """Validated Config object."""
    return Config.from_dict(mock_config)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.git.branch('-M', 'main')

    # Fake GitHub remote; never contacted
    repo.create_remote('origin', 'git@github.com:test/test-repo.git')

    yield repo

    repo.close()


@pytest.fixture
def repository(git_repo, config):
    """GitRepository wrapper around the test repository."""
    return GitRepository(git_repo.working_dir, config)


@pytest.fixture
def paths(repository, config):
    """PathDeriver for the test repository."""
    return PathDeriver(repository, config)


@pytest.fixture
def mock_repository():
    """Create a mock GitRepository."""
    repository = Mock(spec=GitRepository)
    repository.remote_name = "origin"
    repository.remote_url.return_value = "git@github.com:test/test-repo.git"
    repository.toplevel.return_value = "/fake/repo/path"
    repository.tag_exists.return_value = False
    repository.local_branch_exists.return_value = False
    repository.remote_branch_exists.return_value = False
    return repository


@pytest.fixture
def mock_paths(mock_repository, config):
    """PathDeriver backed by the mock repository."""
    return PathDeriver(mock_repository, config)


@pytest.fixture
def fake_selector():
    """Selector that cancels unless a test sets `choose`."""
    return FakeSelector()


@pytest.fixture
def make_worktree(git_repo):
    """Factory creating a linked worktree with a new branch directly through git."""
    def _make(path: Path, branch: str, start: Optional[str] = None) -> Path:
        args = ["add", "-b", branch, str(path)]
        if start:
            args.append(start)
        git_repo.git.worktree(*args)
        return path
    return _make
