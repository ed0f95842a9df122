"""Command-line interface for git-wtm"""

import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from git_wtm.cli.args import build_parser, parse_args
from git_wtm.config import Config
from git_wtm.constants import SYMBOL_ERROR
from git_wtm.core import WorktreeManager
from git_wtm.exceptions import GitWtmError
from git_wtm.logging_config import setup_logging

console = Console(stderr=True)


def run_command(manager: WorktreeManager, args) -> int:
    """Dispatch one parsed command to the manager and return the exit code."""
    command = args.command

    if command == "add":
        manager.add(args.reference, args.path)
    elif command == "pr":
        manager.pr(args.pr_reference)
    elif command == "list":
        manager.list_worktrees()
    elif command == "path":
        manager.get_path()
    elif command == "edit":
        return manager.edit()
    elif command == "ai":
        return manager.ai()
    elif command == "tool":
        return manager.run_external_command(args.tool_command)
    elif command == "remove":
        manager.remove()
    elif command == "prune":
        manager.prune()
    else:
        raise GitWtmError(f"Unknown command '{command}'")
    return 0


def report_error(error: GitWtmError) -> None:
    console.print(f"[red]{SYMBOL_ERROR}[/red] {escape(error.message)}")
    if error.recovery:
        console.print(f"  [cyan]{escape(error.recovery)}[/cyan]")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    if parsed_args.command is None:
        build_parser().print_help()
        return 1
    if parsed_args.command == "help":
        build_parser().print_help()
        return 0

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = Config.from_env(verbose=parsed_args.verbose, debug=parsed_args.debug)

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                if key == "github_token" and value:
                    value = "***"
                console.print(f"  {key}: {value}")

        manager = WorktreeManager(os.getcwd(), config)
        return run_command(manager, parsed_args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except GitWtmError as e:
        report_error(e)
        if parsed_args.debug:
            console.print_exception()
        return 1
    except ValueError as e:
        # Invalid configuration
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
