"""Title header for the control panel."""
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.widgets import Static


class HeaderWidget(Vertical):
    """A centered ``=== TITLE ===`` line."""

    DEFAULT_CSS = """
    HeaderWidget {
        width: 100%;
        height: auto;
        align: center top;
    }

    .header-title {
        width: auto;
        height: 1;
        text-align: center;
        color: cyan;
        text-style: bold;
    }
    """

    def __init__(self, title: str, **kwargs):
        super().__init__(**kwargs)
        self.title_text = title

    def compose(self) -> ComposeResult:
        with Center():
            yield Static(f"=== {self.title_text} ===", classes="header-title", markup=False)
