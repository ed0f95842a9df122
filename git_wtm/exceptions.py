"""Custom exceptions for git-wtm"""

from typing import Optional


class GitWtmError(Exception):
    """Base exception for all git-wtm errors.

    Every error carries a human-readable message and, where the user can act on
    it, a recovery hint (usually a literal command) printed below the message.
    """

    def __init__(self, message: str, recovery: Optional[str] = None):
        self.message = message
        self.recovery = recovery
        super().__init__(message)


class InvalidInputError(GitWtmError):
    """Exception raised for empty references or malformed PR references."""
    pass


class AlreadyExistsError(GitWtmError):
    """Exception raised when the target worktree path is already occupied."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Worktree already exists: {path}", recovery=f"cd '{path}'")


class ReferenceNotFoundError(GitWtmError):
    """Exception raised when no tag, local branch or remote branch matches."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Branch '{reference}' not found locally, remotely, or as tag")


class GitOperationError(GitWtmError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None,
                 recovery: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.detail = message

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg, recovery=recovery)


class WorktreeCreationError(GitOperationError):
    """Exception raised when a selected creation strategy fails."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__("worktree add", path, message)


class FetchFailedError(GitOperationError):
    """Exception raised when a pull request ref cannot be fetched."""

    def __init__(self, pr_number: int, message: Optional[str] = None):
        self.pr_number = pr_number
        super().__init__(
            "fetch",
            f"PR #{pr_number}",
            message,
            recovery="Make sure the pull request exists and you have access.",
        )


class RemovalForbiddenError(GitWtmError):
    """Exception raised when removing the primary or the current worktree."""

    def __init__(self, path: str, reason: str, recovery: Optional[str] = None):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot remove {path}: {reason}", recovery=recovery)


class RemovalFailedError(GitOperationError):
    """Exception raised when git refuses to remove a worktree."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(
            "worktree remove",
            path,
            message,
            recovery=f"git worktree remove '{path}' --force",
        )


class DependencyMissingError(GitWtmError):
    """Exception raised when a required external tool is not installed."""

    def __init__(self, tool: str, install_hint: Optional[str] = None):
        self.tool = tool
        super().__init__(f"{tool} is required but not installed", recovery=install_hint)


class NotInRepositoryError(GitWtmError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not in a git repository: {path}")


class SelectionCancelledError(GitWtmError):
    """Exception raised when the user leaves a picker without choosing anything."""
    pass


class GitHubAPIError(GitWtmError):
    """Exception raised for errors in GitHub API operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.detail = message

        error_msg = f"GitHub API operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)
