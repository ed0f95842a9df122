"""Tests for configuration handling"""
import os

import pytest

from git_wtm.config import Config


class TestConfigValidation:
    """Test Config validation."""

    def test_defaults(self):
        """Test default values."""
        config = Config()

        assert config.worktree_base_dir == os.path.expanduser("~/.git-worktree")
        assert config.remote_name == "origin"
        assert config.editor == "vim"
        assert config.ai_command == "claude"
        assert config.picker == "fzf"
        assert config.github_token is None

    def test_base_dir_made_absolute(self, monkeypatch, temp_dir):
        """Test that relative and ~ paths are expanded."""
        monkeypatch.chdir(temp_dir)

        assert Config(worktree_base_dir="trees").worktree_base_dir == str(temp_dir / "trees")
        assert Config(worktree_base_dir="~/trees").worktree_base_dir == os.path.expanduser("~/trees")

    @pytest.mark.parametrize("field_name", ["worktree_base_dir", "remote_name", "editor", "ai_command"])
    def test_empty_values_rejected(self, field_name):
        """Test that required values cannot be empty."""
        with pytest.raises(ValueError, match=field_name):
            Config(**{field_name: "  "})

    def test_invalid_picker(self):
        """Test that unknown pickers are rejected."""
        with pytest.raises(ValueError, match="picker"):
            Config(picker="dmenu")

    def test_invalid_max_prs(self):
        with pytest.raises(ValueError, match="max_prs_to_fetch"):
            Config(max_prs_to_fetch=0)

    def test_from_dict_ignores_unknown_keys(self, mock_config):
        """Test that unknown keys are dropped."""
        mock_config["stale_days"] = 30
        config = Config.from_dict(mock_config)

        assert config.get("stale_days") is None
        assert config.to_dict()["worktree_base_dir"] == mock_config["worktree_base_dir"]


class TestConfigFromEnv:
    """Test configuration from environment variables."""

    def test_empty_environment(self):
        """Test that an empty environment gives the defaults."""
        config = Config.from_env({})

        assert config == Config()

    def test_all_variables(self, temp_dir):
        """Test each recognized variable."""
        config = Config.from_env({
            "GIT_WTM_WORKTREE_BASE_DIR": str(temp_dir),
            "GIT_WTM_EDITOR": "nvim",
            "GIT_WTM_AI": "aider",
            "GIT_WTM_PICKER": "builtin",
            "GITHUB_TOKEN": "secret",
        })

        assert config.worktree_base_dir == str(temp_dir)
        assert config.editor == "nvim"
        assert config.ai_command == "aider"
        assert config.picker == "builtin"
        assert config.github_token == "secret"

    def test_editor_fallback(self):
        """Test that $EDITOR is used when GIT_WTM_EDITOR is unset."""
        assert Config.from_env({"EDITOR": "nano"}).editor == "nano"
        assert Config.from_env({"EDITOR": "nano", "GIT_WTM_EDITOR": "emacs"}).editor == "emacs"

    def test_empty_variable_means_default(self):
        """Test that an empty variable counts as unset."""
        assert Config.from_env({"GIT_WTM_AI": ""}).ai_command == "claude"

    def test_overrides_win(self):
        """Test that explicit overrides beat the environment."""
        config = Config.from_env({"GIT_WTM_EDITOR": "nvim"}, editor="code", debug=True)

        assert config.editor == "code"
        assert config.debug

    def test_invalid_picker_from_env(self):
        with pytest.raises(ValueError):
            Config.from_env({"GIT_WTM_PICKER": "rofi"})
