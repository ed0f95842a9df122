"""
git-wtm - Git Worktree Manager with an organized directory structure
"""

from .__version__ import __version__
from .core import WorktreeManager
from .cli.main import main

__all__ = ["WorktreeManager", "main", "__version__"]
