"""Tests for the command-line interface"""
import io
from unittest.mock import patch

import pytest

from git_wtm.cli import main, parse_args
from git_wtm.exceptions import NotInRepositoryError, ReferenceNotFoundError, SelectionCancelledError


class TestParseArgs:
    """Test argument parsing."""

    def test_add_with_path(self):
        args = parse_args(["add", "feature/login", "/tmp/wt"])

        assert args.command == "add"
        assert args.reference == "feature/login"
        assert args.path == "/tmp/wt"

    def test_add_without_path(self):
        assert parse_args(["add", "v1.0.0"]).path is None

    def test_pr_optional_reference(self):
        assert parse_args(["pr"]).pr_reference is None
        assert parse_args(["pr", "123"]).pr_reference == "123"

    @pytest.mark.parametrize("alias,command", [("ls", "list"), ("rm", "remove")])
    def test_aliases(self, alias, command):
        """Test that aliases map to the canonical command."""
        assert parse_args([alias]).command == command

    def test_tool_command(self):
        assert parse_args(["tool", "code {}"]).tool_command == "code {}"

    def test_global_flags(self):
        args = parse_args(["--debug", "-v", "list"])

        assert args.debug
        assert args.verbose

    def test_add_requires_reference(self):
        with pytest.raises(SystemExit):
            parse_args(["add"])

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            parse_args(["frobnicate"])


class TestMain:
    """Test the main entry point."""

    @pytest.fixture(autouse=True)
    def keep_logging(self):
        """Leave the root logger alone while main() runs."""
        with patch("git_wtm.cli.main.setup_logging"):
            yield

    def test_no_command_prints_help(self, capsys):
        """Test that no command prints usage and fails."""
        assert main([]) == 1
        assert "usage: git-wtm" in capsys.readouterr().out

    def test_help(self, capsys):
        assert main(["help"]) == 0
        assert "git-wtm pr 123" in capsys.readouterr().out

    @patch("git_wtm.cli.main.WorktreeManager")
    def test_list_dispatch(self, mock_manager_class):
        """Test that commands reach the manager."""
        assert main(["ls"]) == 0
        mock_manager_class.return_value.list_worktrees.assert_called_once_with()

    @patch("git_wtm.cli.main.WorktreeManager")
    def test_add_dispatch(self, mock_manager_class):
        assert main(["add", "feature", "/tmp/x"]) == 0
        mock_manager_class.return_value.add.assert_called_once_with("feature", "/tmp/x")

    @patch("git_wtm.cli.main.WorktreeManager")
    def test_tool_exit_status(self, mock_manager_class):
        """Test that the external command's status becomes the exit code."""
        mock_manager_class.return_value.run_external_command.return_value = 7

        assert main(["tool", "make test"]) == 7
        mock_manager_class.return_value.run_external_command.assert_called_once_with("make test")

    @patch("git_wtm.cli.main.WorktreeManager")
    def test_error_reported(self, mock_manager_class, capsys):
        """Test that project errors are printed and give exit status 1."""
        mock_manager_class.return_value.add.side_effect = ReferenceNotFoundError("nope")

        assert main(["add", "nope"]) == 1
        assert "Branch 'nope' not found locally, remotely, or as tag" in capsys.readouterr().err

    @patch("git_wtm.cli.main.WorktreeManager")
    def test_outside_repository(self, mock_manager_class, capsys):
        """Test that a manager construction failure is reported."""
        mock_manager_class.side_effect = NotInRepositoryError("/tmp")

        assert main(["list"]) == 1
        assert "Not in a git repository" in capsys.readouterr().err

    @patch("git_wtm.cli.main.WorktreeManager")
    def test_path_cancelled(self, mock_manager_class):
        """Test that leaving the picker on `path` is a failure."""
        mock_manager_class.return_value.get_path.side_effect = SelectionCancelledError("No worktree selected")

        assert main(["path"]) == 1

    @patch("git_wtm.cli.main.WorktreeManager")
    def test_keyboard_interrupt(self, mock_manager_class):
        mock_manager_class.return_value.prune.side_effect = KeyboardInterrupt

        assert main(["prune"]) == 1

    @patch.dict("os.environ", {"GIT_WTM_PICKER": "rofi"})
    @patch("git_wtm.cli.main.WorktreeManager")
    def test_invalid_configuration(self, mock_manager_class, capsys):
        """Test that configuration errors fail before the manager is built."""
        assert main(["list"]) == 1
        mock_manager_class.assert_not_called()
        assert "picker" in capsys.readouterr().err


class TestMainWithRepository:
    """Test main() end to end against a real repository."""

    @pytest.fixture(autouse=True)
    def keep_logging(self):
        with patch("git_wtm.cli.main.setup_logging"):
            yield

    def test_remove_with_closed_stdin(self, git_repo, base_dir, make_worktree, fake_selector, monkeypatch):
        """Test that end of input at the removal prompt cancels and exits 0."""
        path = make_worktree(base_dir / "test-repo" / "dirty", "dirty")
        (path / "wip.txt").write_text("work in progress\n")
        fake_selector.choose = lambda lines: next(line for line in lines if "dirty" in line)
        monkeypatch.chdir(git_repo.working_dir)
        monkeypatch.setenv("GIT_WTM_WORKTREE_BASE_DIR", str(base_dir))
        monkeypatch.setattr("sys.stdin", io.StringIO(""))

        with patch("git_wtm.core.get_selector", return_value=fake_selector):
            assert main(["remove"]) == 0

        assert (path / "wip.txt").exists()
