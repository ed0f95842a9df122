"""Guarded worktree removal.

A removal request moves through:

    selected -> rejected (primary or current worktree)
             -> confirmation pending (uncommitted changes) -> confirmed -> removed
                                                           -> cancelled
             -> removed (clean worktree)

Nothing is mutated before the confirmation step completes.
"""

import os
from typing import Callable, Optional

from git_wtm.exceptions import RemovalForbiddenError
from git_wtm.models.results import RemovalOutcome, RemovalResult
from git_wtm.models.worktree import ChangeStatus
from git_wtm.services.git.repository import GitRepository
from git_wtm.services.status_service import StatusService
from git_wtm.logging_config import get_logger

logger = get_logger(__name__)

ConfirmCallback = Callable[[str, ChangeStatus], bool]


def _normalize(path: str) -> str:
    return os.path.normcase(os.path.realpath(path))


def is_same_path(a: str, b: str) -> bool:
    return _normalize(a) == _normalize(b)


def is_within(path: str, directory: str) -> bool:
    """True when path is directory itself or lies below it."""
    path = _normalize(path)
    directory = _normalize(directory)
    try:
        return os.path.commonpath([path, directory]) == directory
    except ValueError:
        # Different drives
        return False


class RemovalGuard:
    """Enforces the safety rules around `git worktree remove --force`."""

    def __init__(self, repository: GitRepository, status_service: StatusService, primary_path: str):
        """Initialize the guard.

        Args:
            repository: Git primitives for the current repository
            status_service: Service used to detect uncommitted changes
            primary_path: Path of the primary checkout, which is never removed
        """
        self.repository = repository
        self.status_service = status_service
        self.primary_path = primary_path

    def check(self, path: str, cwd: str) -> None:
        """Reject removal of the primary worktree or of the caller's worktree.

        Raises:
            RemovalForbiddenError: path is protected
        """
        if is_same_path(path, self.primary_path):
            raise RemovalForbiddenError(path, "is primary worktree")

        if is_within(cwd, path):
            raise RemovalForbiddenError(
                path,
                "is current worktree",
                recovery="Please switch to another worktree first.",
            )

    def remove(self, path: str, cwd: str, confirm: ConfirmCallback) -> RemovalResult:
        """Remove the worktree at path after the safety checks.

        Args:
            path: Worktree to remove
            cwd: Caller's working directory
            confirm: Asked when the worktree is not clean; must return True to proceed

        Returns:
            RemovalResult (CANCELLED when confirmation was refused)

        Raises:
            RemovalForbiddenError: path is the primary or the current worktree
            RemovalFailedError: git could not remove the worktree
        """
        self.check(path, cwd)

        status = self.status_service.get_status(path)
        if not status.is_clean:
            logger.debug(f"Worktree {path} is not clean ({status.describe()}), asking for confirmation")
            if not confirm(path, status):
                logger.info(f"Removal of {path} cancelled")
                return RemovalResult(RemovalOutcome.CANCELLED, path)

        self.repository.remove_worktree(path, force=True)
        removed_parent = self._remove_empty_parent(path)
        return RemovalResult(RemovalOutcome.REMOVED, path, removed_parent)

    @staticmethod
    def _remove_empty_parent(path: str) -> Optional[str]:
        """Delete the parent directory of path if it is now empty."""
        parent = os.path.dirname(os.path.abspath(path).rstrip(os.sep))
        try:
            if os.path.isdir(parent) and not os.listdir(parent):
                os.rmdir(parent)
                logger.info(f"Removed empty directory: {parent}")
                return parent
        except OSError as e:
            logger.debug(f"Could not remove directory {parent}: {e}")
        return None
