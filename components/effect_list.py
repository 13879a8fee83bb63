"""Effect list: one row per catalog entry, current one highlighted."""
from rich.console import RenderableType
from rich.text import Text
from textual.widget import Widget

from music.effect_catalog import EffectCatalog


class EffectList(Widget):
    """Displays the catalog with a ``>`` marker on the selected effect."""

    DEFAULT_CSS = """
    EffectList {
        width: 100%;
        height: auto;
        border: round $accent;
        border-title-color: $text;
        padding: 0 1;
    }
    """

    def __init__(self, catalog: EffectCatalog, selected: int = 0, **kwargs):
        super().__init__(**kwargs)
        self.catalog = catalog
        self.selected = selected
        self.border_title = "EFFECTS"

    def render(self) -> RenderableType:
        text = Text()
        for i, effect in enumerate(self.catalog):
            if i:
                text.append("\n")
            if i == self.selected:
                text.append(f"> {effect.name.upper()}", style="bold green")
            else:
                text.append(f"  {effect.name.upper()}", style="grey62")
        return text

    def update_selection(self, selected: int):
        if selected != self.selected:
            self.selected = selected
            self.refresh()
