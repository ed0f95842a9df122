"""Worktree listing for git-wtm."""

import os
from typing import Dict, List, Optional

from git_wtm.models.worktree import WorktreeRecord
from git_wtm.services.git.repository import GitRepository
from git_wtm.logging_config import get_logger

logger = get_logger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"


def _build_record(fields: Dict[str, object]) -> Optional[WorktreeRecord]:
    """Turn accumulated stanza fields into a record; stanzas without a path are dropped."""
    path = fields.get("path")
    if not path:
        return None
    return WorktreeRecord(
        path=str(path),
        branch=fields.get("branch") or None,  # type: ignore[arg-type]
        commit=str(fields.get("HEAD", "")),
        is_bare=bool(fields.get("bare", False)),
    )


def parse_worktree_porcelain(output: str) -> List[WorktreeRecord]:
    """Parse `git worktree list --porcelain` output.

    Format (one stanza per worktree, stanzas separated by a blank line):

        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (absent when detached)
        bare                            (only for the bare administrative entry)

    Args:
        output: Raw porcelain output

    Returns:
        Records in listing order. The last stanza is kept even without a trailing
        blank line.
    """
    records: List[WorktreeRecord] = []
    current: Dict[str, object] = {}

    for raw_line in output.splitlines():
        line = raw_line.rstrip("\r")

        if not line.strip():
            # Empty line marks end of worktree entry
            record = _build_record(current)
            if record:
                records.append(record)
            current = {}
            continue

        if line.startswith("worktree "):
            current["path"] = line.split(" ", 1)[1]
        elif line.startswith("HEAD "):
            current["HEAD"] = line.split(" ", 1)[1].strip()
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1].strip()
            if branch_ref.startswith(BRANCH_REF_PREFIX):
                current["branch"] = branch_ref[len(BRANCH_REF_PREFIX):]
        elif line.strip() == "bare":
            current["bare"] = True
        elif line.strip() == "detached":
            current["branch"] = None
        # locked/prunable annotations are not needed

    # Handle last entry if no trailing blank line
    record = _build_record(current)
    if record:
        records.append(record)

    return records


class WorktreeService:
    """Service for reading the worktrees of a repository."""

    def __init__(self, repository: GitRepository):
        """Initialize the worktree service.

        Args:
            repository: Git primitives for the current repository
        """
        self.repository = repository

    def list_worktrees(self) -> List[WorktreeRecord]:
        """All worktrees, including the bare administrative entry if any."""
        records = parse_worktree_porcelain(self.repository.list_worktrees_porcelain())
        logger.debug(f"Found {len(records)} worktrees")
        for record in records:
            logger.debug(f"  {record}")
        return records

    def visible_worktrees(self) -> List[WorktreeRecord]:
        """Worktrees shown to the user (bare entries excluded)."""
        return [record for record in self.list_worktrees() if not record.is_bare]

    def primary_worktree_path(self) -> str:
        """Path of the primary (original) checkout.

        git lists the main worktree first; for bare repositories there is no
        primary checkout and the top-level directory of the current worktree is
        used instead.
        """
        records = self.list_worktrees()
        if records and not records[0].is_bare:
            return os.path.abspath(records[0].path)
        return self.repository.toplevel()
