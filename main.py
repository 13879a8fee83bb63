#!/usr/bin/env python3
"""AudioNoise TUI - Main Entry Point."""
import logging
import sys
from typing import Optional, Sequence

from textual.app import App
from textual.screen import Screen

from config_manager import ConfigManager
from logging_setup import configure_logging
from modes.control_panel_mode import ControlPanelMode
from music.panel_context import PanelContext

logger = logging.getLogger(__name__)


class MainScreen(Screen):
    """Single screen hosting the control panel."""

    CSS = """
    MainScreen {
        layout: vertical;
    }
    """

    def __init__(self, context: PanelContext):
        super().__init__()
        self.panel_context = context

    def compose(self):
        yield ControlPanelMode(self.panel_context, id="control-panel")


class AudioNoiseApp(App):
    """Terminal control panel for the AudioNoise effects."""

    VERSION = "0.1.0"

    def __init__(self, config: ConfigManager):
        super().__init__()
        self.title = f"AudioNoise v{self.VERSION}"
        self.panel_config = config
        self.panel_context = PanelContext(config)
        self.panel_context.orchestrator.check_environment()

    def on_mount(self):
        """Called when app mounts."""
        self.push_screen(MainScreen(self.panel_context))

    def on_unmount(self):
        """Clean up on exit."""
        self.panel_context.shutdown()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    config = ConfigManager.from_args(argv)
    level = configure_logging(config.log_file)
    logger.info("audionoise starting (log level: %s, %r)", logging.getLevelName(level), config)

    app = AudioNoiseApp(config)
    try:
        app.run()
    finally:
        # Terminal setup/teardown errors still propagate, but never leave ffplay behind.
        app.panel_context.shutdown()
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
