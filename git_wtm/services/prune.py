"""Stale worktree cleanup"""

import os
from typing import List

from git_wtm.models.results import PruneResult
from git_wtm.services.git.repository import GitRepository
from git_wtm.services.paths import PathDeriver
from git_wtm.logging_config import get_logger

logger = get_logger(__name__)


def remove_empty_directories(base_dir: str) -> List[str]:
    """Remove every empty directory under base_dir, base_dir included.

    The walk is bottom-up, so a directory that only contained empty
    directories is empty by the time it is visited and is removed too.

    Returns:
        Removed directories in removal order
    """
    removed: List[str] = []
    if not os.path.isdir(base_dir):
        return removed

    for dirpath, _dirnames, _filenames in os.walk(base_dir, topdown=False):
        try:
            if os.listdir(dirpath):
                continue
            os.rmdir(dirpath)
        except OSError as e:
            logger.debug(f"Could not remove directory {dirpath}: {e}")
            continue
        logger.info(f"Removed empty directory: {dirpath}")
        removed.append(dirpath)

    return removed


class PruneSweeper:
    """Runs `git worktree prune` and removes empty managed directories."""

    def __init__(self, repository: GitRepository, paths: PathDeriver):
        self.repository = repository
        self.paths = paths

    def prune(self) -> PruneResult:
        succeeded, output = self.repository.prune_worktrees()
        removed = remove_empty_directories(self.paths.worktree_base())
        logger.debug(f"Removed {len(removed)} empty directories")
        return PruneResult(git_succeeded=succeeded, git_output=output, removed_directories=removed)
