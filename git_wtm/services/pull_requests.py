"""Pull request worktrees"""

import os
import re

from git_wtm.exceptions import GitOperationError, InvalidInputError, WorktreeCreationError
from git_wtm.models.results import PrWorktreeResult
from git_wtm.services.git.repository import GitRepository
from git_wtm.services.paths import PathDeriver, pr_slug
from git_wtm.logging_config import get_logger

logger = get_logger(__name__)

_PR_NUMBER = re.compile(r"^[0-9]+$")
_PR_URL = re.compile(r"/pull/([0-9]+)")


def parse_pr_reference(text: str) -> int:
    """Extract a PR number from `123` or `https://github.com/owner/repo/pull/123`.

    Raises:
        InvalidInputError: empty input or no PR number found
    """
    if not text or not text.strip():
        raise InvalidInputError("PR number or URL cannot be empty")

    value = text.strip()
    if _PR_NUMBER.match(value):
        return int(value)

    match = _PR_URL.search(value)
    if match:
        return int(match.group(1))

    raise InvalidInputError(
        f"Invalid PR number or URL: {value}",
        recovery="Expected: PR number (e.g., 123) or GitHub PR URL",
    )


def parse_pr_selection(line: str) -> int:
    """PR number from a picker line such as `123 - Fix the parser`."""
    token = line.strip().split(" ", 1)[0] if line.strip() else ""
    if not _PR_NUMBER.match(token):
        raise InvalidInputError(f"Could not read a PR number from selection: {line.strip()}")
    return int(token)


class PrReferenceResolver:
    """Creates (or finds) the worktree for a pull request."""

    def __init__(self, repository: GitRepository, paths: PathDeriver):
        self.repository = repository
        self.paths = paths

    def resolve(self, number: int) -> PrWorktreeResult:
        """Fetch pull/<number>/head into branch pr-<number> and create its worktree.

        An existing worktree directory is reported as success without fetching.

        Raises:
            FetchFailedError: the PR ref could not be fetched
            WorktreeCreationError: the worktree could not be created
        """
        branch = pr_slug(number)
        worktree_path = self.paths.pr_path(number)

        if os.path.isdir(worktree_path):
            logger.info(f"PR #{number} worktree already exists at {worktree_path}")
            return PrWorktreeResult(number, worktree_path, branch, created=False)

        os.makedirs(self.paths.worktree_base(), exist_ok=True)

        logger.info(f"Fetching PR #{number} into {branch}")
        self.repository.fetch_pull_request(number, branch)

        try:
            self.repository.add_worktree(worktree_path, commitish=branch)
        except WorktreeCreationError as e:
            self._discard_branch(branch)
            raise WorktreeCreationError(
                worktree_path, f"Failed to create worktree for PR #{number}: {e.detail}"
            )

        return PrWorktreeResult(number, worktree_path, branch, created=True)

    def _discard_branch(self, branch: str) -> None:
        """Delete the fetched branch so that no orphaned ref is left behind."""
        try:
            self.repository.delete_branch(branch, force=True)
        except GitOperationError as e:
            logger.debug(f"Could not delete branch {branch}: {e}")
