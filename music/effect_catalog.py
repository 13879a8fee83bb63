"""Fixed catalog of effects understood by the external ``convert`` tool."""
from typing import Iterator, NamedTuple, Tuple

POT_COUNT = 4


class EffectDefinition(NamedTuple):
    """A single effect: its name, default pot values, pot labels and blurb."""

    name: str
    defaults: Tuple[float, float, float, float]
    pots: Tuple[str, str, str, str]
    description: str


# Order matters: it is the on-screen order and the selection index.
EFFECTS: Tuple[EffectDefinition, ...] = (
    EffectDefinition(
        "flanger",
        (0.6, 0.6, 0.6, 0.6),
        ("Depth", "Rate", "Feedback", "Mix"),
        "Modulated delay - jet-plane swoosh",
    ),
    EffectDefinition(
        "echo",
        (0.3, 0.3, 0.3, 0.3),
        ("Delay", "Feedback", "Mix", "Tone"),
        "Delay loop up to 1.25 seconds",
    ),
    EffectDefinition(
        "fm",
        (0.25, 0.25, 0.5, 0.5),
        ("Mod Depth", "Mod Rate", "Carrier", "Mix"),
        "Frequency modulation synthesis",
    ),
    EffectDefinition(
        "am",
        (0.5, 0.5, 0.5, 0.5),
        ("Depth", "Rate", "Shape", "Mix"),
        "Amplitude modulation",
    ),
    EffectDefinition(
        "phaser",
        (0.3, 0.3, 0.5, 0.5),
        ("Depth", "Rate", "Stages", "Feedback"),
        "All-pass filter sweep",
    ),
    EffectDefinition(
        "discont",
        (0.8, 0.1, 0.2, 0.2),
        ("Pitch", "Rate", "Blend", "Mix"),
        "Pitch shift via crossfade",
    ),
)

EFFECT_NAMES = [effect.name for effect in EFFECTS]


class EffectCatalog:
    """Read-only lookup over the effect definitions."""

    def __init__(self, effects: Tuple[EffectDefinition, ...] = EFFECTS):
        self._effects = tuple(effects)

    def count(self) -> int:
        return len(self._effects)

    def get(self, index: int) -> EffectDefinition:
        if not 0 <= index < len(self._effects):
            raise IndexError(f"effect index {index} out of range")
        return self._effects[index]

    def index_of(self, name: str) -> int:
        """Return the index of the effect called ``name``, or -1 if unknown."""
        for i, effect in enumerate(self._effects):
            if effect.name == name:
                return i
        return -1

    def __iter__(self) -> Iterator[EffectDefinition]:
        return iter(self._effects)
