"""Configuration handling for git-wtm"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_WORKTREE_BASE_DIR = "~/.git-worktree"
DEFAULT_EDITOR = "vim"
DEFAULT_AI_COMMAND = "claude"
DEFAULT_PICKER = "fzf"
PICKERS = ["fzf", "builtin"]

# Environment variables recognized by Config.from_env()
ENV_WORKTREE_BASE_DIR = "GIT_WTM_WORKTREE_BASE_DIR"
ENV_EDITOR = "GIT_WTM_EDITOR"
ENV_AI = "GIT_WTM_AI"
ENV_PICKER = "GIT_WTM_PICKER"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"


@dataclass
class Config:
    """Configuration for git-wtm with validation."""

    # Layout
    worktree_base_dir: str = field(default_factory=lambda: os.path.expanduser(DEFAULT_WORKTREE_BASE_DIR))
    remote_name: str = "origin"

    # External programs
    editor: str = DEFAULT_EDITOR
    ai_command: str = DEFAULT_AI_COMMAND
    picker: str = DEFAULT_PICKER  # fzf, builtin

    # GitHub integration (interactive PR selection only)
    github_token: Optional[str] = None
    max_prs_to_fetch: int = 100

    # Output
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_worktree_base_dir()
        self._validate_remote_name()
        self._validate_commands()
        self._validate_picker()
        self._validate_max_prs()

    def _validate_worktree_base_dir(self):
        """Validate worktree_base_dir and normalize it to an absolute path."""
        if not self.worktree_base_dir or not self.worktree_base_dir.strip():
            raise ValueError("worktree_base_dir cannot be empty")
        self.worktree_base_dir = os.path.abspath(os.path.expanduser(self.worktree_base_dir.strip()))

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_commands(self):
        """Validate editor and ai_command are not empty."""
        if not self.editor or not self.editor.strip():
            raise ValueError("editor cannot be empty")
        if not self.ai_command or not self.ai_command.strip():
            raise ValueError("ai_command cannot be empty")

    def _validate_picker(self):
        """Validate picker is one of allowed values."""
        if self.picker not in PICKERS:
            raise ValueError(f"picker must be one of {PICKERS}, got '{self.picker}'")

    def _validate_max_prs(self):
        """Validate max_prs_to_fetch is positive."""
        if self.max_prs_to_fetch <= 0:
            raise ValueError(f"max_prs_to_fetch must be positive, got {self.max_prs_to_fetch}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "worktree_base_dir": self.worktree_base_dir,
            "remote_name": self.remote_name,
            "editor": self.editor,
            "ai_command": self.ai_command,
            "picker": self.picker,
            "github_token": self.github_token,
            "max_prs_to_fetch": self.max_prs_to_fetch,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key for dict-style access."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "worktree_base_dir",
            "remote_name",
            "editor",
            "ai_command",
            "picker",
            "github_token",
            "max_prs_to_fetch",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Config":
        """Create Config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            **overrides: Explicit values (e.g. from CLI flags) that win over the environment

        Returns:
            Validated Config
        """
        env = os.environ if environ is None else environ
        values = {
            "worktree_base_dir": env.get(ENV_WORKTREE_BASE_DIR) or DEFAULT_WORKTREE_BASE_DIR,
            "editor": env.get(ENV_EDITOR) or env.get("EDITOR") or DEFAULT_EDITOR,
            "ai_command": env.get(ENV_AI) or DEFAULT_AI_COMMAND,
            "picker": env.get(ENV_PICKER) or DEFAULT_PICKER,
            "github_token": env.get(ENV_GITHUB_TOKEN) or None,
        }
        values.update(overrides)
        return cls.from_dict(values)
