"""Pot panel: description plus a bar and value for each of the four pots."""
from typing import List, Sequence

from rich.console import RenderableType
from rich.text import Text
from textual.widget import Widget

from music.effect_catalog import EffectDefinition

BAR_WIDTH = 20


def render_bar(value: float, width: int = BAR_WIDTH) -> str:
    """Return ``[####----]`` with ``int(value * width)`` filled cells."""
    filled = max(0, min(width, int(value * width)))
    return f"[{'#' * filled}{'-' * (width - filled)}]"


class PotPanel(Widget):
    """Shows the selected effect's pots; the selected pot is highlighted."""

    DEFAULT_CSS = """
    PotPanel {
        width: 100%;
        height: auto;
        border: round $accent;
        padding: 0 1;
    }
    """

    def __init__(self, effect: EffectDefinition, pots: Sequence[float], pot_index: int = 0, **kwargs):
        super().__init__(**kwargs)
        self.effect = effect
        self.pots: List[float] = list(pots)
        self.pot_index = pot_index
        self.border_title = f"POTS - {effect.name.upper()}"

    def render(self) -> RenderableType:
        text = Text(self.effect.description, style="grey62")
        text.append("\n")
        for i, (label, value) in enumerate(zip(self.effect.pots, self.pots)):
            selected = i == self.pot_index
            style = "bold yellow" if selected else "white"
            text.append("\n")
            text.append(f" {label:12}", style=style)
            text.append(render_bar(value), style="green" if selected else "blue")
            text.append(f" {value:.2f}", style=style)
        return text

    def update_pots(self, effect: EffectDefinition, pots: Sequence[float], pot_index: int):
        self.effect = effect
        self.pots = list(pots)
        self.pot_index = pot_index
        self.border_title = f"POTS - {effect.name.upper()}"
        self.refresh()
