"""Core functionality for git-wtm"""

import os
from typing import Callable, List, Optional, Union

from rich.console import Console
from rich.markup import escape

from git_wtm.config import Config
from git_wtm.constants import (
    AFFIRMATIVE_ANSWERS,
    CONFIRM_REMOVE_PROMPT,
    PROMPT_OPEN,
    PROMPT_PATH,
    PROMPT_PR,
    PROMPT_REMOVE,
)
from git_wtm.exceptions import GitWtmError, InvalidInputError, SelectionCancelledError
from git_wtm.formatters import format_change_status, format_selection_line, path_from_selection_line
from git_wtm.models.results import (
    CreationResult,
    CreationStrategyKind,
    PrWorktreeResult,
    PruneResult,
    RemovalOutcome,
    RemovalResult,
)
from git_wtm.models.worktree import ChangeStatus, WorktreeRecord
from git_wtm.services.creation import CreationResolver
from git_wtm.services.display_service import DisplayService
from git_wtm.services.git import GitHubService, GitRepository, WorktreeService
from git_wtm.services.launcher import run_in_worktree
from git_wtm.services.paths import PathDeriver
from git_wtm.services.prune import PruneSweeper
from git_wtm.services.pull_requests import PrReferenceResolver, parse_pr_reference, parse_pr_selection
from git_wtm.services.removal import RemovalGuard, is_within
from git_wtm.services.status_service import StatusService
from git_wtm.ui.selector import Selector, get_selector
from git_wtm.logging_config import get_logger

console = Console()
logger = get_logger(__name__)

STRATEGY_MESSAGES = {
    CreationStrategyKind.TAG: "Created worktree from tag '{reference}' as branch '{branch}'",
    CreationStrategyKind.LOCAL_BRANCH: "Worktree created successfully",
    CreationStrategyKind.NEW_BRANCH: "Created new branch '{branch}' and worktree",
    CreationStrategyKind.REMOTE_BRANCH: "Created worktree from remote branch '{remote}/{branch}'",
}


class WorktreeManager:
    """Entry point for every git-wtm command."""

    def __init__(
        self,
        cwd: str,
        config: Union[Config, dict],
        selector: Optional[Selector] = None,
        github_service: Optional[GitHubService] = None,
        prompt: Optional[Callable[[str], str]] = None,
    ):
        """Initialize the manager and make sure a repository context exists.

        Args:
            cwd: Caller's working directory
            config: Configuration dict or Config object
            selector: Picker used for interactive choices (from config when omitted)
            github_service: Hosting API client (created on demand when omitted)
            prompt: Reads one line of confirmation input (input() when omitted)
        """
        if isinstance(config, dict):
            config = Config.from_dict(config)

        self.cwd = os.path.abspath(cwd)
        self.config = config
        self.display = DisplayService(verbose=config.verbose, debug=config.debug)
        self.selector = selector or get_selector(config)
        self._github_service = github_service
        self._prompt = prompt or input

        self.repository = GitRepository(self.cwd, config)
        self.repository.ensure_repository()

        self.worktree_service = WorktreeService(self.repository)
        self.paths = PathDeriver(self.repository, config)
        self.status_service = StatusService(self.repository, config)
        self.creation_resolver = CreationResolver(self.repository, self.paths)
        self.pr_resolver = PrReferenceResolver(self.repository, self.paths)
        self.prune_sweeper = PruneSweeper(self.repository, self.paths)

    # ------------------------------------------------------------------
    # add / pr
    # ------------------------------------------------------------------

    def add(self, reference: str, path: Optional[str] = None) -> CreationResult:
        """Create a worktree from a tag or branch name."""
        target = self.creation_resolver.target_path(reference, path) if reference and reference.strip() else None
        if target:
            self.display.info(f"Creating worktree for branch '{reference}' at: {target}")

        # The resolved target goes back in so the ref lookups run once
        result = self.creation_resolver.create(reference, target)

        message = STRATEGY_MESSAGES[result.strategy].format(
            reference=reference, branch=result.branch, remote=self.repository.remote_name
        )
        self.display.success(message)
        self.display.info(f"Worktree location: {result.path}")
        return result

    def pr(self, pr_reference: Optional[str] = None) -> PrWorktreeResult:
        """Create (or find) the worktree for a pull request.

        Without a reference, open pull requests are listed for interactive selection.
        """
        if pr_reference is None:
            number = self.select_pull_request()
        else:
            number = parse_pr_reference(pr_reference)

        path = self.paths.pr_path(number)
        if not os.path.isdir(path):
            self.display.info(f"Creating worktree for PR #{number}...")
            self.display.info(f"Fetching PR #{number} from GitHub...")

        result = self.pr_resolver.resolve(number)

        if result.created:
            self.display.success(f"PR #{number} worktree created at: {result.path}")
        else:
            self.display.success(f"PR #{number} worktree already exists: {result.path}")
        self.display.info("To switch to this worktree, run:")
        self.display.hint(f"cd '{result.path}'")
        return result

    def _get_github_service(self) -> GitHubService:
        if self._github_service is None:
            service = GitHubService(self.config)
            service.setup_github_api(self.repository.remote_url())
            self._github_service = service
        return self._github_service

    def select_pull_request(self) -> int:
        """Pick one open pull request and return its number."""
        self.selector.ensure_available()
        self.display.info("Fetching open PRs...")
        pull_requests = self._get_github_service().list_open_pull_requests()
        if not pull_requests:
            raise GitWtmError("No open PRs found")

        selected = self.selector.select([pr.selection_line() for pr in pull_requests], PROMPT_PR)
        if not selected.strip():
            raise SelectionCancelledError("No PR selected")
        return parse_pr_selection(selected)

    # ------------------------------------------------------------------
    # list / path / external commands
    # ------------------------------------------------------------------

    def is_current_worktree(self, path: str) -> bool:
        return is_within(self.cwd, path)

    def list_worktrees(self) -> List[tuple[WorktreeRecord, ChangeStatus, bool]]:
        """Show all visible worktrees with their live change status."""
        records = self.worktree_service.visible_worktrees()
        if not records:
            self.display.warn("No worktrees found")
            return []

        rows = [
            (record, self.status_service.get_status(record.path), self.is_current_worktree(record.path))
            for record in records
        ]
        self.display.display_worktree_table(self.paths.repository_identity(), rows)
        return rows

    def select_worktree(self, prompt: str) -> str:
        """Pick one worktree and return its path.

        Raises:
            SelectionCancelledError: nothing was selected
            GitWtmError: no worktrees, or the selected directory is gone
        """
        self.selector.ensure_available()
        records = self.worktree_service.visible_worktrees()
        if not records:
            raise GitWtmError("No worktrees available")

        lines = [format_selection_line(record, self.is_current_worktree(record.path)) for record in records]
        selected = self.selector.select(lines, prompt)
        path = path_from_selection_line(selected) if selected else None
        if not path:
            raise SelectionCancelledError("No worktree selected")

        if not os.path.isdir(path):
            raise GitWtmError(f"Worktree directory does not exist: {path}", recovery="git-wtm prune")
        return path

    def get_path(self) -> str:
        """Print the path of a selected worktree on stdout."""
        path = self.select_worktree(PROMPT_PATH)
        self.display.plain(path)
        return path

    def run_external_command(self, command: str) -> int:
        """Run command (with `{}` replaced by the path) inside a selected worktree."""
        if not command or not command.strip():
            raise InvalidInputError("Command is required", recovery="git-wtm tool \"code {}\"")

        path = self.select_worktree(PROMPT_OPEN)
        self.display.info(f"Opening worktree: {path}")
        return run_in_worktree(command, path)

    def edit(self) -> int:
        return self.run_external_command(self.config.editor)

    def ai(self) -> int:
        return self.run_external_command(self.config.ai_command)

    # ------------------------------------------------------------------
    # remove / prune
    # ------------------------------------------------------------------

    def confirm_removal(self, path: str, status: ChangeStatus) -> bool:
        """Ask before removing a worktree that is not clean."""
        self.display.warn("Worktree has uncommitted changes:")
        console.print(f"  Path: [blue]{escape(path)}[/blue]")
        console.print(f"  Status: {format_change_status(status)}")
        console.print()
        try:
            answer = self._prompt(CONFIRM_REMOVE_PROMPT)
        except EOFError:
            # End of input counts as "no"
            console.print()
            return False
        return answer.strip() in AFFIRMATIVE_ANSWERS

    def remove(self) -> Optional[RemovalResult]:
        """Remove a selected worktree.

        Returns:
            RemovalResult, or None when the picker was left without a choice
        """
        try:
            path = self.select_worktree(PROMPT_REMOVE)
        except SelectionCancelledError:
            self.display.info("No worktree selected")
            return None

        guard = RemovalGuard(
            self.repository, self.status_service, self.worktree_service.primary_worktree_path()
        )
        result = guard.remove(path, self.cwd, self.confirm_removal)

        if result.outcome == RemovalOutcome.CANCELLED:
            self.display.info("Operation cancelled")
            return result

        self.display.success(f"Worktree removed successfully: {path}")
        if result.removed_parent:
            self.display.info(f"Removed empty directory: {result.removed_parent}")
        return result

    def prune(self) -> PruneResult:
        """Clean up stale worktree references and empty managed directories."""
        self.display.info("Cleaning up stale worktree references...")
        result = self.prune_sweeper.prune()

        if result.git_output:
            self.display.plain(result.git_output)
        if result.git_succeeded:
            self.display.success("Stale worktree references cleaned up")
        else:
            self.display.warn("No stale worktree references found or cleanup failed")

        self.display.info(f"Checked for empty directories in: {self.paths.worktree_base()}")
        for directory in result.removed_directories:
            self.display.info(f"Removed empty directory: {directory}")
        if result.removed_count == 0:
            self.display.info("No empty directories found")
        else:
            self.display.success(f"Removed {result.removed_count} empty directories")
        return result
