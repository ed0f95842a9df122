"""Interactive selection of one line out of many."""

import shutil
import subprocess
from typing import List, Union, TYPE_CHECKING

from git_wtm.exceptions import DependencyMissingError
from git_wtm.logging_config import get_logger

if TYPE_CHECKING:
    from git_wtm.config import Config

logger = get_logger(__name__)

FZF_INSTALL_HINT = (
    "Install fzf: https://github.com/junegunn/fzf#installation "
    "(or set GIT_WTM_PICKER=builtin)"
)


class Selector:
    """Shows lines to the user and returns the chosen one ('' when cancelled)."""

    def ensure_available(self) -> None:
        pass

    def select(self, lines: List[str], prompt: str) -> str:
        raise NotImplementedError


class FzfSelector(Selector):
    """Selection through the external fzf program."""

    def ensure_available(self) -> None:
        if shutil.which("fzf") is None:
            raise DependencyMissingError("fzf", FZF_INSTALL_HINT)

    def select(self, lines: List[str], prompt: str) -> str:
        self.ensure_available()
        completed = subprocess.run(
            ["fzf", f"--prompt={prompt} > ", "--height=15", "--border"],
            input="\n".join(lines) + "\n",
            text=True,
            stdout=subprocess.PIPE,
        )
        if completed.returncode != 0:
            # 1: no match, 130: interrupted with Esc/Ctrl-C
            logger.debug(f"fzf exited with {completed.returncode}")
            return ""
        return completed.stdout.rstrip("\n")


class BuiltinSelector(Selector):
    """Selection through the bundled Textual picker."""

    def select(self, lines: List[str], prompt: str) -> str:
        from git_wtm.ui.picker import PickerApp

        result = PickerApp(lines, prompt).run()
        return result or ""


def get_selector(config: Union["Config", dict]) -> Selector:
    if config.get("picker", "fzf") == "builtin":
        return BuiltinSelector()
    return FzfSelector()
