"""Shared constants for git-wtm."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Columns of the `list` table
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("path", "Path"),
    ColumnDefinition("status", "Status", 24),
]


# Message symbols
SYMBOL_INFO = "ℹ"
SYMBOL_SUCCESS = "✓"
SYMBOL_WARNING = "⚠"
SYMBOL_ERROR = "✗"
SYMBOL_CURRENT_WORKTREE = "📍"
SYMBOL_WORKTREE = "📂"


# Selection list prefixes (fixed width so labels line up)
SELECTION_CURRENT_PREFIX = "[*] "
SELECTION_OTHER_PREFIX = "    "
SELECTION_SEPARATOR = "\t"


# Picker prompts
PROMPT_PATH = "Get worktree path"
PROMPT_OPEN = "Open worktree"
PROMPT_REMOVE = "Remove worktree"
PROMPT_PR = "Select PR"

CONFIRM_REMOVE_PROMPT = "Are you sure you want to remove it? [y/N]: "
AFFIRMATIVE_ANSWERS = {"y", "Y"}


# Rich styles for change status parts
STATUS_STYLES = {
    "missing": "red",
    "unknown": "red",
    "modified": "yellow",
    "staged": "green",
    "untracked": "red",
    "clean": "green",
}
