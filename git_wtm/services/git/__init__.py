"""Git-related services for git-wtm."""

from .repository import GitRepository
from .worktrees import WorktreeService, parse_worktree_porcelain
from .github import GitHubService

__all__ = [
    "GitRepository",
    "WorktreeService",
    "parse_worktree_porcelain",
    "GitHubService",
]
