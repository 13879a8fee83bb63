"""Per-effect pot values, clamped to [0.0, 1.0]."""
from typing import List

from music.effect_catalog import EffectCatalog

POT_STEP = 0.05
POT_MIN = 0.0
POT_MAX = 1.0

# Steps are rounded to this many decimals so repeated 0.05 steps land on
# exact grid values (twenty steps from 0.0 give 1.0, not 0.9999...).
POT_PRECISION = 6


class ParameterStore:
    """Holds one mutable pot vector per catalog entry.

    Vectors are seeded from the catalog defaults and only change through
    :meth:`increase`, :meth:`decrease` and :meth:`reset`.
    """

    def __init__(self, catalog: EffectCatalog):
        self.catalog = catalog
        self._values: List[List[float]] = [list(effect.defaults) for effect in catalog]

    def get(self, effect_index: int) -> List[float]:
        """Return the live pot vector for an effect (not a copy)."""
        return self._values[effect_index]

    def increase(self, effect_index: int, pot_index: int, step: float = POT_STEP):
        pots = self._values[effect_index]
        pots[pot_index] = min(POT_MAX, round(pots[pot_index] + step, POT_PRECISION))

    def decrease(self, effect_index: int, pot_index: int, step: float = POT_STEP):
        pots = self._values[effect_index]
        pots[pot_index] = max(POT_MIN, round(pots[pot_index] - step, POT_PRECISION))

    def reset(self, effect_index: int):
        """Restore an effect's pots to its catalog defaults."""
        # Slice assignment keeps references handed out by get() valid.
        self._values[effect_index][:] = self.catalog.get(effect_index).defaults
