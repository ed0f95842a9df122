"""External command launch in a worktree"""

import shlex
import subprocess

from git_wtm.exceptions import InvalidInputError
from git_wtm.logging_config import get_logger

logger = get_logger(__name__)

PATH_PLACEHOLDER = "{}"


def expand_command(command: str, path: str) -> str:
    """Replace every `{}` in command with the shell-quoted path."""
    return command.replace(PATH_PLACEHOLDER, shlex.quote(path))


def run_in_worktree(command: str, path: str) -> int:
    """Run a user-supplied shell command with path as working directory.

    Returns:
        The command's exit status
    """
    if not command or not command.strip():
        raise InvalidInputError("Command cannot be empty")

    expanded = expand_command(command, path)
    logger.info(f"Running '{expanded}' in {path}")
    completed = subprocess.run(expanded, shell=True, cwd=path)
    return completed.returncode
