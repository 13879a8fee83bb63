"""Current effect / pot cursor."""
from music.effect_catalog import POT_COUNT


class SelectionState:
    """Tracks which effect and which of its pots is selected.

    Both indices wrap around. Changing effect always puts the pot cursor
    back on the first pot. The pot cursor only moves forward.
    """

    def __init__(self, effect_count: int, effect_index: int = 0):
        if effect_count <= 0:
            raise ValueError("effect_count must be positive")
        self.effect_count = effect_count
        self.effect_index = effect_index % effect_count
        self.pot_index = 0

    def next_effect(self):
        self.effect_index = (self.effect_index + 1) % self.effect_count
        self.pot_index = 0

    def prev_effect(self):
        self.effect_index = (self.effect_index - 1 + self.effect_count) % self.effect_count
        self.pot_index = 0

    def next_pot(self):
        self.pot_index = (self.pot_index + 1) % POT_COUNT
