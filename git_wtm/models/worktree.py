"""Worktree data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WorktreeRecord:
    """One entry of `git worktree list --porcelain`."""

    path: str
    branch: Optional[str]  # None means detached HEAD
    commit: str
    is_bare: bool = False  # Administrative entry without a working directory

    @property
    def display_branch(self) -> str:
        """Branch name for display, 'detached' when HEAD is detached."""
        return self.branch or "detached"

    def __str__(self) -> str:
        """String representation of worktree."""
        marker = " (bare)" if self.is_bare else ""
        return f"{self.display_branch} @ {self.path}{marker}"


@dataclass(frozen=True)
class ChangeStatus:
    """Uncommitted change state of one worktree, computed on demand."""

    missing: bool = False  # Directory absent
    unknown: bool = False  # Status query failed
    modified: int = 0
    staged: int = 0
    untracked: int = 0

    @classmethod
    def missing_directory(cls) -> "ChangeStatus":
        return cls(missing=True)

    @classmethod
    def unknown_status(cls) -> "ChangeStatus":
        return cls(unknown=True)

    @property
    def is_clean(self) -> bool:
        """True only when the directory exists, git answered and nothing changed."""
        if self.missing or self.unknown:
            return False
        return self.modified == 0 and self.staged == 0 and self.untracked == 0

    def describe(self) -> str:
        """Plain-text summary such as 'modified staged untracked(2)'."""
        if self.missing:
            return "missing directory"
        if self.unknown:
            return "unknown"

        parts = []
        if self.modified:
            parts.append("modified")
        if self.staged:
            parts.append("staged")
        if self.untracked:
            parts.append(f"untracked({self.untracked})")
        return " ".join(parts) if parts else "clean"
