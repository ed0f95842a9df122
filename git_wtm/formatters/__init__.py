"""Formatting utilities for git-wtm.

- status: Change status formatting
- worktree: Picker lines and list table cells
"""

from .status import format_change_status
from .worktree import (
    format_selection_line,
    path_from_selection_line,
    format_branch_cell,
)

__all__ = [
    "format_change_status",
    "format_selection_line",
    "path_from_selection_line",
    "format_branch_cell",
]
