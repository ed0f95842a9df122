"""Tests for pickers and external command launch"""
import asyncio
from unittest.mock import patch

import pytest

from git_wtm.config import Config
from git_wtm.exceptions import DependencyMissingError
from git_wtm.formatters import path_from_selection_line
from git_wtm.services.launcher import expand_command
from git_wtm.ui.picker import PickerApp, matches
from git_wtm.ui.selector import BuiltinSelector, FzfSelector, get_selector
from git_wtm.ui.widgets import MatchCounter, format_match_count


class TestGetSelector:
    """Test picker selection from configuration."""

    def test_default_is_fzf(self):
        assert isinstance(get_selector(Config()), FzfSelector)

    def test_builtin(self):
        assert isinstance(get_selector(Config(picker="builtin")), BuiltinSelector)


class TestFzfSelector:
    """Test the fzf picker wrapper."""

    @patch("git_wtm.ui.selector.shutil.which", return_value=None)
    def test_missing_fzf(self, mock_which):
        """Test that a missing fzf names the builtin alternative."""
        with pytest.raises(DependencyMissingError) as exc_info:
            FzfSelector().ensure_available()
        assert "GIT_WTM_PICKER=builtin" in exc_info.value.recovery

    @patch("git_wtm.ui.selector.shutil.which", return_value="/usr/bin/fzf")
    @patch("git_wtm.ui.selector.subprocess.run")
    def test_selection(self, mock_run, mock_which):
        mock_run.return_value.returncode = 0
        mock_run.return_value.stdout = "    feature\t/wt/feature\n"

        assert FzfSelector().select(["    main\t/repo", "    feature\t/wt/feature"], "Open worktree") == (
            "    feature\t/wt/feature"
        )
        assert mock_run.call_args.kwargs["input"] == "    main\t/repo\n    feature\t/wt/feature\n"

    @patch("git_wtm.ui.selector.shutil.which", return_value="/usr/bin/fzf")
    @patch("git_wtm.ui.selector.subprocess.run")
    def test_cancelled(self, mock_run, mock_which):
        """Test that Esc in fzf means no selection."""
        mock_run.return_value.returncode = 130
        mock_run.return_value.stdout = ""

        assert FzfSelector().select(["a"], "Open worktree") == ""


class TestMatches:
    """Test the builtin picker's filter."""

    @pytest.mark.parametrize("line,query", [
        ("    feature-login\t/wt/feature-login", "flog"),
        ("[*] main\t/repo", "MAIN"),
        ("12 - Fix parser", "fix par"),
        ("anything", ""),
    ])
    def test_matching(self, line, query):
        assert matches(line, query)

    def test_order_matters(self):
        assert not matches("main", "nm")


class TestSelectionLines:
    """Test reading the path back from a picker line."""

    def test_path_after_tab(self):
        assert path_from_selection_line("[*] main\t/home/me/src/repo") == "/home/me/src/repo"

    def test_path_with_spaces(self):
        assert path_from_selection_line("    x\t/home/me/my repo") == "/home/me/my repo"

    def test_no_tab(self):
        assert path_from_selection_line("garbage") is None


class TestExpandCommand:
    """Test placeholder substitution."""

    def test_placeholder(self):
        assert expand_command("code {}", "/wt/feature") == "code /wt/feature"

    def test_quoted(self):
        assert expand_command("code {}", "/wt/my repo") == "code '/wt/my repo'"

    def test_no_placeholder(self):
        assert expand_command("vim", "/wt/feature") == "vim"


class TestPickerHeader:
    """Test the builtin picker's header counter."""

    @pytest.mark.parametrize("shown,total,expected", [
        (3, 12, "3/12 matches"),
        (1, 1, "1/1 match"),
        (0, 4, "0/4 matches"),
    ])
    def test_format_match_count(self, shown, total, expected):
        assert format_match_count(shown, total) == expected

    def test_counter_follows_filter(self):
        """Test that typing a filter updates the shown/total count."""
        lines = ["    main\t/repo", "    feature-login\t/wt/feature-login", "    fix-parser\t/wt/fix-parser"]

        async def run():
            app = PickerApp(lines, "Open worktree")
            async with app.run_test() as pilot:
                counter = app.query_one(MatchCounter)
                assert (counter.shown, counter.total) == (3, 3)

                await pilot.press("f", "l", "o", "g")
                await pilot.pause()
                assert (counter.shown, counter.total) == (1, 3)
                assert app.title == "Open worktree"

        asyncio.run(run())
