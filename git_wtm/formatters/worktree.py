"""Worktree formatting utilities."""

from typing import Optional

from git_wtm.constants import (
    SELECTION_CURRENT_PREFIX,
    SELECTION_OTHER_PREFIX,
    SELECTION_SEPARATOR,
    SYMBOL_CURRENT_WORKTREE,
    SYMBOL_WORKTREE,
)
from git_wtm.models.worktree import WorktreeRecord


def format_selection_line(record: WorktreeRecord, is_current: bool) -> str:
    """
    Format a worktree as one picker line.

    Args:
        record: Worktree to show
        is_current: Whether the caller is inside this worktree

    Returns:
        "<prefix><branch>\\t<path>"; the path after the tab is what gets selected

    Example:
        "[*] main\\t/home/me/src/repo"
    """
    prefix = SELECTION_CURRENT_PREFIX if is_current else SELECTION_OTHER_PREFIX
    return f"{prefix}{record.display_branch}{SELECTION_SEPARATOR}{record.path}"


def path_from_selection_line(line: str) -> Optional[str]:
    """Path part of a picker line, None if the line has no tab."""
    if SELECTION_SEPARATOR not in line:
        return None
    return line.split(SELECTION_SEPARATOR, 1)[1].strip() or None


def format_branch_cell(record: WorktreeRecord, is_current: bool) -> str:
    """Branch column of the list table, with the current worktree highlighted."""
    if is_current:
        return f"[green]{SYMBOL_CURRENT_WORKTREE} {record.display_branch} (current)[/green]"
    return f"{SYMBOL_WORKTREE} {record.display_branch}"
