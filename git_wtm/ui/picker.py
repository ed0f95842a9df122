"""Built-in fuzzy picker for git-wtm using Textual."""

from typing import List

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Input, OptionList
from textual.widgets.option_list import Option

from git_wtm.ui.widgets import PickerHeader


def matches(line: str, query: str) -> bool:
    """Case-insensitive subsequence match, the way fzf matches by default."""
    remaining = iter(line.lower())
    return all(char in remaining for char in query.lower().replace(" ", ""))


class PickerApp(App[str]):
    """Lets the user pick one line; returns it, or '' when cancelled."""

    DEFAULT_CSS = """
    #filter {
        dock: top;
    }

    #choices {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("up", "cursor_up", "Up", show=False),
    ]

    def __init__(self, lines: List[str], prompt: str):
        super().__init__()
        self.lines = lines
        self.prompt = prompt
        self.title = prompt

    def compose(self) -> ComposeResult:
        yield PickerHeader(icon="")
        yield Input(placeholder=f"{self.prompt} >", id="filter")
        yield OptionList(id="choices")
        yield Footer()

    def on_mount(self) -> None:
        self._show(self.lines)
        self.query_one("#filter", Input).focus()

    def _show(self, lines: List[str]) -> None:
        choices = self.query_one("#choices", OptionList)
        choices.clear_options()
        choices.add_options(
            Option(Text(line.replace("\t", "  ")), id=str(index))
            for index, line in enumerate(self.lines)
            if line in lines
        )
        if choices.option_count:
            choices.highlighted = 0
        self.query_one(PickerHeader).update_count(choices.option_count, len(self.lines))

    def on_input_changed(self, event: Input.Changed) -> None:
        query = event.value.strip()
        self._show([line for line in self.lines if matches(line, query)])

    def on_input_submitted(self, event: Input.Submitted) -> None:
        choices = self.query_one("#choices", OptionList)
        if choices.highlighted is None:
            return
        self._pick(choices.get_option_at_index(choices.highlighted))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self._pick(event.option)

    def _pick(self, option: Option) -> None:
        self.exit(self.lines[int(option.id)])

    def action_cursor_down(self) -> None:
        self.query_one("#choices", OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#choices", OptionList).action_cursor_up()

    def action_cancel(self) -> None:
        self.exit("")
