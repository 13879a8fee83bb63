"""Shared state for one control-panel session."""
from typing import TYPE_CHECKING, List, Optional

from music.effect_catalog import EffectCatalog, EffectDefinition
from music.parameter_store import ParameterStore
from music.process_orchestrator import ProcessOrchestrator, StatusMessage
from music.selection_state import SelectionState

if TYPE_CHECKING:
    from config_manager import ConfigManager


class PanelContext:
    """Selection, pot values and the orchestrator behind the panel.

    Commands mutate this object; the view only reads from it. It is owned by
    the panel widget and lives for the whole session.
    """

    def __init__(self, config: "ConfigManager", catalog: Optional[EffectCatalog] = None):
        self.config = config
        self.catalog = catalog if catalog is not None else EffectCatalog()
        self.params = ParameterStore(self.catalog)

        start = 0
        if config.initial_effect:
            start = max(0, self.catalog.index_of(config.initial_effect))
        self.selection = SelectionState(self.catalog.count(), start)
        self.orchestrator = ProcessOrchestrator(config)

    # ── Read helpers for the view ───────────────────────────────

    @property
    def status(self) -> StatusMessage:
        return self.orchestrator.status

    @status.setter
    def status(self, value: StatusMessage):
        self.orchestrator.status = value

    @property
    def current_effect(self) -> EffectDefinition:
        return self.catalog.get(self.selection.effect_index)

    @property
    def current_pots(self) -> List[float]:
        return self.params.get(self.selection.effect_index)

    # ── Commands ────────────────────────────────────────────────

    def next_effect(self):
        self.selection.next_effect()

    def prev_effect(self):
        self.selection.prev_effect()

    def next_pot(self):
        self.selection.next_pot()

    def increase_pot(self):
        self.params.increase(self.selection.effect_index, self.selection.pot_index)

    def decrease_pot(self):
        self.params.decrease(self.selection.effect_index, self.selection.pot_index)

    def reset_pots(self):
        self.params.reset(self.selection.effect_index)
        self.status = StatusMessage(f"Reset {self.current_effect.name} to defaults", True)

    def stop_audio(self):
        self.orchestrator.stop_playback()
        self.status = StatusMessage("Stopped playback", True)

    def begin_processing(self):
        """Show the in-progress status ahead of :meth:`process_and_play`."""
        self.status = StatusMessage(f"Processing {self.current_effect.name}...", True)

    def process_and_play(self) -> StatusMessage:
        effect = self.current_effect
        return self.orchestrator.process_and_play(effect.name, list(self.current_pots))

    def shutdown(self):
        self.orchestrator.stop_playback()
