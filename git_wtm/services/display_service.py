"""Display service for worktree information"""
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_wtm.constants import COLUMNS, SYMBOL_ERROR, SYMBOL_INFO, SYMBOL_SUCCESS, SYMBOL_WARNING
from git_wtm.formatters import format_branch_cell, format_change_status
from git_wtm.models.worktree import ChangeStatus, WorktreeRecord
from git_wtm.logging_config import get_logger

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


class DisplayService:
    """User-facing output: status messages and the worktree table."""

    def __init__(self, verbose: bool = False, debug: bool = False):
        self.verbose = verbose
        self.debug_mode = debug

    def info(self, message: str) -> None:
        console.print(f"[blue]{SYMBOL_INFO}[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        console.print(f"[green]{SYMBOL_SUCCESS}[/green] {escape(message)}")

    def warn(self, message: str) -> None:
        console.print(f"[yellow]{SYMBOL_WARNING}[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        err_console.print(f"[red]{SYMBOL_ERROR}[/red] {escape(message)}")

    def hint(self, message: str) -> None:
        """Follow-up line under an error or success message (commands, advice)."""
        console.print(f"  [cyan]{escape(message)}[/cyan]")

    def plain(self, text: str) -> None:
        """Print text without markup or wrapping (for machine-readable output)."""
        console.print(text, markup=False, highlight=False, soft_wrap=True)

    def display_worktree_table(
            self,
            repository_name: str,
            rows: List[tuple[WorktreeRecord, ChangeStatus, bool]],
        ) -> None:
        """Display the table of worktrees.

        Args:
            repository_name: Repository identity shown above the table
            rows: (record, change status, is_current) per visible worktree
        """
        console.print(f"[blue]Repository: {escape(repository_name)}[/blue]")
        console.print()

        table = Table()
        for col in COLUMNS:
            table.add_column(col.label, min_width=col.width or None)

        for record, status, is_current in rows:
            table.add_row(
                format_branch_cell(record, is_current),
                escape(record.path),
                format_change_status(status),
            )

        console.print(table)
        logger.debug(f"Displayed {len(rows)} worktrees")
