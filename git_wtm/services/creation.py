"""Worktree creation from an ambiguous reference.

A reference typed by the user may name a tag, an existing local branch, a branch
that does not exist yet, or a branch that only exists on the remote. The
strategies below are tried in that order; the first one whose worktree is
created wins.
"""

import os
from typing import List, Optional

from git_wtm.exceptions import (
    AlreadyExistsError,
    InvalidInputError,
    ReferenceNotFoundError,
    WorktreeCreationError,
)
from git_wtm.models.results import CreationResult, CreationStrategyKind
from git_wtm.services.git.repository import GitRepository
from git_wtm.services.paths import PathDeriver
from git_wtm.logging_config import get_logger

logger = get_logger(__name__)

TAG_BRANCH_PREFIX = "tags-"


class CreationStrategy:
    """One way of turning a reference into a worktree.

    `terminal` strategies stop the search when their attempt fails; the
    others let the resolver move on to the next strategy.
    """

    kind: CreationStrategyKind
    terminal = False

    def __init__(self, repository: GitRepository):
        self.repository = repository

    def applies(self, reference: str) -> bool:
        return True

    def branch_for(self, reference: str) -> str:
        """Name of the branch the worktree will have checked out."""
        return reference

    def attempt(self, path: str, reference: str) -> CreationResult:
        raise NotImplementedError


class ByTag(CreationStrategy):
    """Tags are immutable, so a dedicated `tags-<name>` branch is created at the tag."""

    kind = CreationStrategyKind.TAG
    terminal = True

    def applies(self, reference: str) -> bool:
        return self.repository.tag_exists(reference)

    def branch_for(self, reference: str) -> str:
        return f"{TAG_BRANCH_PREFIX}{reference}"

    def attempt(self, path: str, reference: str) -> CreationResult:
        branch = self.branch_for(reference)
        self.repository.add_worktree(path, commitish=f"refs/tags/{reference}", new_branch=branch)
        return CreationResult(self.kind, path, branch)


class ByLocalBranch(CreationStrategy):
    kind = CreationStrategyKind.LOCAL_BRANCH

    def attempt(self, path: str, reference: str) -> CreationResult:
        self.repository.add_worktree(path, commitish=reference)
        return CreationResult(self.kind, path, reference)


class ByNewBranch(CreationStrategy):
    kind = CreationStrategyKind.NEW_BRANCH

    def attempt(self, path: str, reference: str) -> CreationResult:
        self.repository.add_worktree(path, new_branch=reference)
        return CreationResult(self.kind, path, reference)


class ByRemoteBranch(CreationStrategy):
    kind = CreationStrategyKind.REMOTE_BRANCH
    terminal = True

    def applies(self, reference: str) -> bool:
        return self.repository.remote_branch_exists(reference)

    def attempt(self, path: str, reference: str) -> CreationResult:
        remote_ref = f"{self.repository.remote_name}/{reference}"
        self.repository.add_worktree(path, commitish=remote_ref, new_branch=reference, track=True)
        return CreationResult(self.kind, path, reference)


def default_strategies(repository: GitRepository) -> List[CreationStrategy]:
    return [
        ByTag(repository),
        ByLocalBranch(repository),
        ByNewBranch(repository),
        ByRemoteBranch(repository),
    ]


class CreationResolver:
    """Resolves a reference into a worktree using an ordered strategy list."""

    def __init__(
        self,
        repository: GitRepository,
        paths: PathDeriver,
        strategies: Optional[List[CreationStrategy]] = None,
    ):
        self.repository = repository
        self.paths = paths
        self.strategies = strategies if strategies is not None else default_strategies(repository)

    def target_path(self, reference: str, path: Optional[str] = None) -> str:
        """Explicit path made absolute, or the managed path of the branch to be checked out.

        A tag reference lands under its synthesized branch name (`tags-<name>`).
        """
        if path:
            return os.path.abspath(os.path.expanduser(path))
        for strategy in self.strategies:
            if strategy.applies(reference):
                return self.paths.branch_path(strategy.branch_for(reference))
        return self.paths.branch_path(reference)

    def create(self, reference: str, path: Optional[str] = None) -> CreationResult:
        """Create a worktree for reference.

        Args:
            reference: Tag or branch name typed by the user
            path: Explicit worktree directory (defaults to the managed branch path)

        Returns:
            CreationResult describing the strategy used

        Raises:
            InvalidInputError: reference is empty or whitespace
            AlreadyExistsError: the worktree path is taken
            WorktreeCreationError: a tag or remote-branch attempt failed
            ReferenceNotFoundError: no strategy could create the worktree
        """
        if not reference or not reference.strip():
            raise InvalidInputError("Branch name cannot be empty or whitespace")

        worktree_path = self.target_path(reference, path)
        if os.path.exists(worktree_path):
            raise AlreadyExistsError(worktree_path)

        os.makedirs(self.paths.worktree_base(), exist_ok=True)
        logger.info(f"Creating worktree for '{reference}' at {worktree_path}")

        for strategy in self.strategies:
            if not strategy.applies(reference):
                logger.debug(f"Strategy {strategy.kind.value} does not apply to '{reference}'")
                continue

            try:
                result = strategy.attempt(worktree_path, reference)
            except WorktreeCreationError as e:
                if strategy.terminal:
                    raise WorktreeCreationError(
                        worktree_path,
                        f"Failed to create worktree from {strategy.kind.value} '{reference}': {e.detail}",
                    )
                logger.debug(f"Strategy {strategy.kind.value} failed for '{reference}': {e}")
                continue

            logger.info(f"Worktree for '{reference}' created via {result.strategy.value}")
            return result

        raise ReferenceNotFoundError(reference)
