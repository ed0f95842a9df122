"""Header widgets for the git-wtm picker."""

from textual.app import ComposeResult, RenderResult
from textual.events import Click
from textual.reactive import reactive
from textual.widgets import Header
from textual.widgets._header import HeaderIcon, HeaderTitle, HeaderClockSpace
from rich.text import Text


def format_match_count(shown: int, total: int) -> str:
    """Counter text such as '3/12 matches'."""
    noun = "match" if total == 1 else "matches"
    return f"{shown}/{total} {noun}"


class MatchCounter(HeaderClockSpace):
    """Right side of the header: how many choices survive the filter."""

    DEFAULT_CSS = """
    MatchCounter {
        width: auto;
        dock: right;
        padding: 0 1;
        background: $foreground 5%;
        color: $text;
        text-align: center;
    }
    MatchCounter.-empty {
        color: $error;
    }
    """

    shown: reactive[int] = reactive(0)
    total: reactive[int] = reactive(0)

    def render(self) -> RenderResult:
        return Text(format_match_count(self.shown, self.total))

    def watch_shown(self, shown: int) -> None:
        self.set_class(shown == 0, "-empty")


class PickerHeader(Header):
    """One-line header showing the picker prompt and the filter's match count."""

    def compose(self) -> ComposeResult:
        yield HeaderIcon().data_bind(Header.icon)
        yield HeaderTitle()
        yield MatchCounter()

    def update_count(self, shown: int, total: int) -> None:
        counter = self.query_one(MatchCounter)
        counter.total = total
        counter.shown = shown

    def on_click(self, event: Click) -> None:
        # Keep the header one line tall
        event.stop()
