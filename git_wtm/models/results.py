"""Result models returned by worktree operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class CreationStrategyKind(Enum):
    """How a reference was resolved into a worktree."""
    TAG = "tag"
    LOCAL_BRANCH = "local-branch"
    NEW_BRANCH = "new-branch"
    REMOTE_BRANCH = "remote-branch"


class RemovalOutcome(Enum):
    """Final state of a removal request."""
    REMOVED = "removed"
    CANCELLED = "cancelled"


@dataclass
class CreationResult:
    """A worktree created from a user-supplied reference."""
    strategy: CreationStrategyKind
    path: str
    branch: str


@dataclass
class PullRequestSummary:
    """Open pull request as listed by the hosting API."""
    number: int
    title: str

    def selection_line(self) -> str:
        return f"{self.number} - {self.title}"


@dataclass
class PrWorktreeResult:
    """A pull request worktree, freshly created or already present."""
    number: int
    path: str
    branch: str
    created: bool


@dataclass
class RemovalResult:
    """Outcome of a guarded worktree removal."""
    outcome: RemovalOutcome
    path: str
    removed_parent: Optional[str] = None


@dataclass
class PruneResult:
    """Outcome of `git worktree prune` plus the empty-directory sweep."""
    git_succeeded: bool
    git_output: str = ""
    removed_directories: List[str] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        return len(self.removed_directories)
