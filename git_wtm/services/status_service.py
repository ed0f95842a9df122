"""Per-worktree change status"""
import os
from typing import Union, TYPE_CHECKING

from git_wtm.exceptions import GitOperationError
from git_wtm.models.worktree import ChangeStatus
from git_wtm.services.git.repository import GitRepository
from git_wtm.logging_config import get_logger

if TYPE_CHECKING:
    from git_wtm.config import Config

logger = get_logger(__name__)

# Two-character porcelain prefixes (XY: index status, worktree status).
# Composite states count twice; unstaged edits and deletions count as untracked.
UNTRACKED_PREFIXES = {" M", " D", "??"}
STAGED_PREFIXES = {"M ", "A ", "D ", "R ", "C "}
MODIFIED_AND_STAGED_PREFIXES = {"MM", "AM", "AD", "MD", "DM"}


def classify_porcelain(output: str) -> ChangeStatus:
    """Count changes in `git status --porcelain` output."""
    modified = staged = untracked = 0

    for line in output.split("\n"):
        if not line:
            continue

        prefix = line[:2]
        if prefix in UNTRACKED_PREFIXES:
            untracked += 1
        elif prefix in STAGED_PREFIXES:
            staged += 1
        elif prefix in MODIFIED_AND_STAGED_PREFIXES:
            modified += 1
            staged += 1
        else:
            modified += 1

    return ChangeStatus(modified=modified, staged=staged, untracked=untracked)


class StatusService:
    """Queries the live change state of worktrees."""

    def __init__(self, repository: GitRepository, config: Union['Config', dict]):
        self.repository = repository
        self.config = config

    def get_status(self, worktree_path: str) -> ChangeStatus:
        """Get the change status of a worktree.

        Args:
            worktree_path: Path to the worktree directory

        Returns:
            ChangeStatus; `missing` when the directory is gone, `unknown` when
            git could not report a status
        """
        if not os.path.isdir(worktree_path):
            logger.debug(f"Worktree path {worktree_path} doesn't exist")
            return ChangeStatus.missing_directory()

        try:
            output = self.repository.status_porcelain(worktree_path)
        except GitOperationError as e:
            logger.warning(f"Could not check worktree status for {worktree_path}: {e}")
            return ChangeStatus.unknown_status()

        return classify_porcelain(output)
