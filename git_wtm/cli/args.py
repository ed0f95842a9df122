"""Command-line argument parsing for git-wtm."""

import argparse
from typing import List, Optional

from git_wtm.__version__ import __version__

DESCRIPTION = "Git Worktree Manager - organized git worktrees for branches, tags and PRs"

EPILOG = """\
directory structure:
  $GIT_WTM_WORKTREE_BASE_DIR/<repository>/<branch>/
  $GIT_WTM_WORKTREE_BASE_DIR/<repository>/pr-<number>/

examples:
  git-wtm add feature-branch
  git-wtm add v1.0.0                 create worktree from tag (branch tags-v1.0.0)
  git-wtm pr 123
  git-wtm pr https://github.com/owner/repo/pull/123
  git-wtm pr                         interactive PR selection (GitHub API)
  git-wtm list
  cd "$(git-wtm path)"
  git-wtm edit                       open worktree in $GIT_WTM_EDITOR
  git-wtm ai                         open worktree in $GIT_WTM_AI
  git-wtm tool "code {}"             run a command in a worktree ({} is the path)
  git-wtm remove

environment:
  GIT_WTM_WORKTREE_BASE_DIR  base directory for worktrees (default: ~/.git-worktree)
  GIT_WTM_EDITOR             editor command (default: $EDITOR or vim)
  GIT_WTM_AI                 AI assistant command (default: claude)
  GIT_WTM_PICKER             fzf or builtin (default: fzf)
  GITHUB_TOKEN               token for listing pull requests
"""

# Aliases map to the canonical command name
COMMAND_ALIASES = {
    "ls": "list",
    "rm": "remove",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per verb."""
    parser = argparse.ArgumentParser(
        prog="git-wtm",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-wtm {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    add = subparsers.add_parser("add", help="Create a new worktree from branch or tag")
    add.add_argument("reference", help="Branch or tag name")
    add.add_argument("path", nargs="?", help="Custom worktree path (default: managed path)")

    pr = subparsers.add_parser("pr", help="Create a worktree for PR review")
    pr.add_argument(
        "pr_reference",
        nargs="?",
        metavar="number|url",
        help="PR number or URL (interactive selection when omitted)",
    )

    subparsers.add_parser("list", aliases=["ls"], help="List all worktrees")
    subparsers.add_parser("path", help="Get path of a worktree (interactive)")
    subparsers.add_parser("edit", help="Open a worktree in the editor (interactive)")
    subparsers.add_parser("ai", help="Open a worktree in the AI assistant (interactive)")

    tool = subparsers.add_parser(
        "tool", help="Run a custom command in a selected worktree ({} is replaced by its path)"
    )
    tool.add_argument("tool_command", metavar="command", help="Command to run, e.g. \"code {}\"")

    subparsers.add_parser("remove", aliases=["rm"], help="Remove a worktree (interactive)")
    subparsers.add_parser("prune", help="Clean up stale worktrees and empty directories")
    subparsers.add_parser("help", help="Show this help message")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    if args.command:
        args.command = COMMAND_ALIASES.get(args.command, args.command)
    return args
