"""Single-line status display."""
from rich.console import RenderableType
from rich.text import Text
from textual.widget import Widget

from music.process_orchestrator import StatusMessage


class StatusBar(Widget):
    """Latest outcome: green when ok, red on error."""

    DEFAULT_CSS = """
    StatusBar {
        width: 100%;
        height: 1;
        padding: 0 1;
    }
    """

    def __init__(self, status: StatusMessage = StatusMessage("", True), **kwargs):
        super().__init__(**kwargs)
        self.status = status
        self.playing = False

    def render(self) -> RenderableType:
        text = Text(self.status.text, style="green" if self.status.ok else "red")
        if self.playing:
            text.append("  ♪", style="bold cyan")
        return text

    def update_status(self, status: StatusMessage, playing: bool = False):
        if status != self.status or playing != self.playing:
            self.status = status
            self.playing = playing
            self.refresh()
