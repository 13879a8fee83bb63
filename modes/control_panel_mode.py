"""Control panel mode - effect selection, pot tuning and playback keys."""
import logging

from textual.binding import Binding
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.widgets import Static

from components.effect_list import EffectList
from components.header_widget import HeaderWidget
from components.pot_panel import PotPanel
from components.status_bar import StatusBar
from music.panel_context import PanelContext

logger = logging.getLogger(__name__)

# Redraw period; also the worst-case latency before a finished player shows up.
TICK_SECONDS = 0.1

HELP_TEXT = (
    "Up/Down: effect | Tab: pot | Left/Right: value\n"
    "p: play | s: stop | r: reset | q: quit"
)


class ControlPanelMode(Vertical):
    """Maps keys to panel commands and redraws the panel on every tick.

    Processing runs on the event loop itself: once started, keys are queued
    until transcoding and conversion are done.
    """

    DEFAULT_CSS = """
    ControlPanelMode {
        width: 100%;
        height: 100%;
        padding: 0 1;
    }
    ControlPanelMode:focus {
        border: heavy $accent;
    }
    #controls-help {
        width: 100%;
        height: 2;
        text-align: center;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("up,k", "prev_effect", "Prev effect", show=False),
        Binding("down,j", "next_effect", "Next effect", show=False),
        Binding("tab", "next_pot", "Next pot", show=False, priority=True),
        Binding("left,h", "decrease_pot", "Pot -", show=False),
        Binding("right,l", "increase_pot", "Pot +", show=False),
        Binding("p,P", "process", "Play", show=False),
        Binding("r,R", "reset_pots", "Reset", show=False),
        Binding("s,S", "stop_audio", "Stop", show=False),
        Binding("q,Q", "quit_panel", "Quit", show=False),
    ]

    can_focus = True

    def __init__(self, context: PanelContext, **kwargs):
        super().__init__(**kwargs)
        self.panel_context = context
        self.processing = False

    def compose(self):
        ctx = self.panel_context
        yield HeaderWidget(title="AUDIONOISE TUI")
        yield EffectList(ctx.catalog, ctx.selection.effect_index, id="effect-list")
        yield PotPanel(ctx.current_effect, ctx.current_pots, ctx.selection.pot_index, id="pot-panel")
        yield Static(HELP_TEXT, id="controls-help", markup=False)
        yield StatusBar(ctx.status, id="status-bar")

    def on_mount(self):
        self.focus()
        self.set_interval(TICK_SECONDS, self.refresh_view)

    def refresh_view(self):
        """Push the current selection, pots and status into the widgets."""
        ctx = self.panel_context
        try:
            effect_list = self.query_one("#effect-list", EffectList)
            pot_panel = self.query_one("#pot-panel", PotPanel)
            status_bar = self.query_one("#status-bar", StatusBar)
        except NoMatches:
            # Tick fired while the panel is being torn down.
            return
        effect_list.update_selection(ctx.selection.effect_index)
        pot_panel.update_pots(ctx.current_effect, ctx.current_pots, ctx.selection.pot_index)
        status_bar.update_status(ctx.status, ctx.orchestrator.is_playing())

    # ── Navigation ──────────────────────────────────────────────

    def action_prev_effect(self):
        self.panel_context.prev_effect()
        self.refresh_view()

    def action_next_effect(self):
        self.panel_context.next_effect()
        self.refresh_view()

    def action_next_pot(self):
        self.panel_context.next_pot()
        self.refresh_view()

    def action_decrease_pot(self):
        self.panel_context.decrease_pot()
        self.refresh_view()

    def action_increase_pot(self):
        self.panel_context.increase_pot()
        self.refresh_view()

    def action_reset_pots(self):
        self.panel_context.reset_pots()
        self.refresh_view()

    # ── Processing / playback ───────────────────────────────────

    def action_process(self):
        if self.processing:
            return
        self.processing = True
        self.panel_context.begin_processing()
        self.refresh_view()
        # Let "Processing ..." reach the screen before the loop blocks.
        self.call_after_refresh(self._run_process)

    def _run_process(self):
        try:
            status = self.panel_context.process_and_play()
        finally:
            self.processing = False
        logger.debug("process finished: %s", status.text)
        self.refresh_view()

    def action_stop_audio(self):
        self.panel_context.stop_audio()
        self.refresh_view()

    def action_quit_panel(self):
        self.panel_context.shutdown()
        self.app.exit()
