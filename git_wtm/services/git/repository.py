"""Git primitives used by git-wtm.

Every mutation of refs, worktrees and the object store is delegated to the git
executable through GitPython. This module translates `GitCommandError` into the
project's own exceptions so that callers never see GitPython types.
"""

import os
import shutil
from typing import Optional, Union, TYPE_CHECKING

import git

from git_wtm.exceptions import (
    DependencyMissingError,
    FetchFailedError,
    GitOperationError,
    NotInRepositoryError,
    RemovalFailedError,
    WorktreeCreationError,
)
from git_wtm.logging_config import get_logger

if TYPE_CHECKING:
    from git_wtm.config import Config

logger = get_logger(__name__)


def describe_git_error(e: git.exc.GitCommandError, command: str) -> str:
    """Build a one-line description of a failed git command."""
    stderr = (e.stderr if hasattr(e, "stderr") and e.stderr else "").strip()
    status = e.status if hasattr(e, "status") else "unknown"

    # GitPython wraps stderr as "\n  stderr: '...'"
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip().strip("'").strip()

    if stderr:
        return f"{command} failed (exit {status}): {stderr}"
    return f"{command} failed with exit code {status}"


class GitRepository:
    """Thin wrapper around the git primitives needed for worktree management."""

    def __init__(self, repo_path: str, config: Union["Config", dict]):
        """Initialize the repository wrapper.

        Args:
            repo_path: Any directory inside the repository (usually the caller's cwd)
            config: Configuration dictionary or Config object
        """
        self.repo_path = repo_path
        self.config = config
        self.remote_name = config.get("remote_name", "origin") or "origin"

    def _get_repo(self) -> git.Repo:
        """Open the repository containing repo_path.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path, search_parent_directories=True)

    def ensure_repository(self) -> None:
        """Make sure git is installed and repo_path is inside a repository.

        Raises:
            DependencyMissingError: git executable not found
            NotInRepositoryError: repo_path is not inside a git repository
        """
        if shutil.which("git") is None:
            raise DependencyMissingError("git", "Install git: https://git-scm.com/downloads")

        try:
            repo = self._get_repo()
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            raise NotInRepositoryError(self.repo_path)
        logger.debug(f"Using repository at {repo.git_dir}")

    def toplevel(self) -> str:
        """Top-level directory of the worktree containing repo_path."""
        repo = self._get_repo()
        try:
            return os.path.abspath(repo.git.rev_parse("--show-toplevel"))
        except git.exc.GitCommandError as e:
            raise GitOperationError("rev-parse", message=describe_git_error(e, "git rev-parse"))

    def remote_url(self) -> Optional[str]:
        """URL of the configured remote, or None when it does not exist."""
        try:
            repo = self._get_repo()
            url = repo.remote(self.remote_name).url
        except (ValueError, git.exc.GitCommandError) as e:
            logger.debug(f"No remote '{self.remote_name}': {e}")
            return None
        return url or None

    def ref_exists(self, ref: str) -> bool:
        """Check whether a fully qualified ref (e.g. refs/tags/v1.0) exists."""
        repo = self._get_repo()
        try:
            repo.git.show_ref("--verify", "--quiet", ref)
            return True
        except git.exc.GitCommandError:
            return False

    def tag_exists(self, name: str) -> bool:
        return self.ref_exists(f"refs/tags/{name}")

    def local_branch_exists(self, name: str) -> bool:
        return self.ref_exists(f"refs/heads/{name}")

    def remote_branch_exists(self, name: str) -> bool:
        return self.ref_exists(f"refs/remotes/{self.remote_name}/{name}")

    def list_worktrees_porcelain(self) -> str:
        """Raw output of `git worktree list --porcelain`."""
        repo = self._get_repo()
        try:
            return repo.git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise GitOperationError("worktree list", message=describe_git_error(e, "git worktree list"))

    def add_worktree(
        self,
        path: str,
        commitish: Optional[str] = None,
        new_branch: Optional[str] = None,
        track: bool = False,
    ) -> None:
        """Create a worktree at path.

        Args:
            path: Directory to create
            commitish: Branch, tag or commit to check out (HEAD when omitted)
            new_branch: Create this branch at commitish and check it out
            track: Set up upstream tracking for new_branch

        Raises:
            WorktreeCreationError: git refused to create the worktree
        """
        args = ["add"]
        if track:
            args.append("--track")
        if new_branch:
            args.extend(["-b", new_branch])
        args.append(path)
        if commitish:
            args.append(commitish)

        repo = self._get_repo()
        try:
            repo.git.worktree(*args)
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error(e, "git worktree add")
            logger.debug(f"Could not create worktree at {path}: {error_msg}")
            raise WorktreeCreationError(path, error_msg)
        logger.info(f"Created worktree at {path}")

    def remove_worktree(self, path: str, force: bool = True) -> None:
        """Remove the worktree at path.

        Raises:
            RemovalFailedError: git refused to remove the worktree
        """
        args = ["remove", path]
        if force:
            args.append("--force")

        repo = self._get_repo()
        try:
            repo.git.worktree(*args)
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error(e, "git worktree remove")
            logger.error(f"Failed to remove worktree at {path}: {error_msg}")
            raise RemovalFailedError(path, error_msg)
        logger.info(f"Removed worktree at {path}")

    def prune_worktrees(self) -> tuple[bool, str]:
        """Prune stale worktree administrative entries.

        Returns:
            Tuple of (success, output). output is git's verbose report on success
            and the error description on failure.
        """
        repo = self._get_repo()
        try:
            output = repo.git.worktree("prune", "--verbose")
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error(e, "git worktree prune")
            logger.warning(f"Failed to prune worktrees: {error_msg}")
            return False, error_msg
        logger.info("Pruned stale worktree metadata")
        return True, output

    def fetch_pull_request(self, number: int, branch: str) -> None:
        """Fetch pull/<number>/head from the remote into a local branch.

        Raises:
            FetchFailedError: the ref could not be fetched (missing PR, no access)
        """
        refspec = f"pull/{number}/head:{branch}"
        repo = self._get_repo()
        try:
            repo.git.fetch(self.remote_name, refspec)
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error(e, "git fetch")
            logger.debug(f"Fetching {refspec} failed: {error_msg}")
            raise FetchFailedError(number, error_msg)
        logger.info(f"Fetched {refspec} from {self.remote_name}")

    def delete_branch(self, name: str, force: bool = True) -> None:
        """Delete a local branch.

        Raises:
            GitOperationError: git refused to delete the branch
        """
        repo = self._get_repo()
        try:
            repo.git.branch("-D" if force else "-d", name)
        except git.exc.GitCommandError as e:
            raise GitOperationError("branch delete", name, describe_git_error(e, "git branch"))
        logger.info(f"Deleted branch {name}")

    def status_porcelain(self, worktree_path: str) -> str:
        """Output of `git status --porcelain` run inside worktree_path.

        Raises:
            GitOperationError: the status query failed
        """
        repo = self._get_repo()
        try:
            return repo.git.execute(["git", "-C", worktree_path, "status", "--porcelain"])
        except git.exc.GitCommandError as e:
            raise GitOperationError("status", worktree_path, describe_git_error(e, "git status"))
