"""Data models for git-wtm."""

from .worktree import WorktreeRecord, ChangeStatus
from .results import (
    CreationStrategyKind,
    CreationResult,
    PullRequestSummary,
    PrWorktreeResult,
    RemovalOutcome,
    RemovalResult,
    PruneResult,
)

__all__ = [
    "WorktreeRecord",
    "ChangeStatus",
    "CreationStrategyKind",
    "CreationResult",
    "PullRequestSummary",
    "PrWorktreeResult",
    "RemovalOutcome",
    "RemovalResult",
    "PruneResult",
]
