"""Change status formatting utilities."""

from git_wtm.constants import STATUS_STYLES
from git_wtm.models.worktree import ChangeStatus


def _styled(text: str, key: str) -> str:
    style = STATUS_STYLES.get(key)
    return f"[{style}]{text}[/{style}]" if style else text


def format_change_status(status: ChangeStatus) -> str:
    """
    Format a change status as Rich markup.

    Args:
        status: Change status of a worktree

    Returns:
        Markup such as "[yellow]modified[/yellow] [red]untracked(2)[/red]"
    """
    if status.missing:
        return _styled("missing directory", "missing")
    if status.unknown:
        return _styled("unknown", "unknown")
    if status.is_clean:
        return _styled("clean", "clean")

    parts = []
    if status.modified:
        parts.append(_styled("modified", "modified"))
    if status.staged:
        parts.append(_styled("staged", "staged"))
    if status.untracked:
        parts.append(_styled(f"untracked({status.untracked})", "untracked"))
    return " ".join(parts)
