"""Transcode -> convert -> playback pipeline around the external tools.

Everything except playback runs synchronously on the caller's thread. The
player is launched detached and tracked so it can be killed on replace, on
an explicit stop and at shutdown.
"""
import logging
import subprocess
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, List, NamedTuple, Optional, Sequence, Tuple

from config_manager import INPUT_RAW, OUTPUT_RAW

if TYPE_CHECKING:
    from config_manager import ConfigManager

logger = logging.getLogger(__name__)

SAMPLE_RATE = "48000"
SAMPLE_FORMAT = "s32le"
CHANNELS = "mono"

# Keep the tail of a tool's stderr for the log; the head is usually banner noise.
_STDERR_TAIL = 500


class OrchestratorState(Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    TRANSCODING = "transcoding"
    CONVERTING = "converting"
    PLAYING = "playing"


class StatusMessage(NamedTuple):
    """Outcome of the latest operation, shown on the status line."""

    text: str
    ok: bool


# ── Failure taxonomy ─────────────────────────────────────────────


class OrchestrationError(Exception):
    """A pipeline step failed; ``str(err)`` is the operator-facing message."""


class EnvironmentMissing(OrchestrationError):
    pass


class InputMissing(OrchestrationError):
    pass


class TranscodeFailed(OrchestrationError):
    pass


class FileIOFailed(OrchestrationError):
    pass


class ConversionFailed(OrchestrationError):
    pass


def format_pots(pots: Sequence[float]) -> List[str]:
    """Format pot values the way the convert tool expects them."""
    return [f"{p:.2f}" for p in pots]


def _stderr_tail(stderr) -> str:
    if not stderr:
        return ""
    text = stderr.decode("utf-8", errors="replace").strip()
    return text[-_STDERR_TAIL:]


class ProcessOrchestrator:
    """Runs the external pipeline and owns the single playback process."""

    def __init__(self, config: "ConfigManager"):
        self.config = config
        self.player: Optional[subprocess.Popen] = None
        self.state = OrchestratorState.IDLE
        self.status = StatusMessage("", True)
        self.last_error: Optional[OrchestrationError] = None
        self.playback_error: Optional[str] = None

    # ── Path resolution ─────────────────────────────────────────

    def resolve(self, filename: str) -> Optional[Path]:
        """Return the first existing ``filename`` in the candidate dirs."""
        for directory in self.config.candidate_dirs():
            path = directory / filename
            if path.exists():
                return path
        return None

    def resolve_environment(self) -> Tuple[Path, Path]:
        """Locate ``convert``; its directory also holds input.raw/output.raw.

        Raises:
            EnvironmentMissing: convert is in neither candidate directory.
        """
        convert_path = self.resolve(self.config.convert_name)
        if convert_path is None:
            raise EnvironmentMissing(
                f"Error: '{self.config.convert_name}' executable not found "
                f"- run 'make {self.config.convert_name}'"
            )
        return convert_path, convert_path.parent

    def check_environment(self) -> StatusMessage:
        """Report start-up readiness without spawning anything."""
        if self.resolve(self.config.convert_name) is None:
            status = StatusMessage(
                f"Warning: '{self.config.convert_name}' not found. "
                f"Run 'make {self.config.convert_name}' first.", False)
        elif self.resolve(INPUT_RAW) is None:
            status = StatusMessage(f"No {INPUT_RAW} found - will try to convert MP3", True)
        else:
            status = StatusMessage("Ready - press 'p' to process, 'q' to quit", True)
        self.status = status
        return status

    # ── Pipeline ────────────────────────────────────────────────

    def process_and_play(self, effect_name: str, pots: Sequence[float]) -> StatusMessage:
        """Render ``effect_name`` with ``pots`` and start playing the result.

        Blocks until transcoding (if needed) and conversion have finished.
        Failures never propagate; they end up in the returned status.
        """
        pots = list(pots)
        self.last_error = None
        try:
            self._run_pipeline(effect_name, pots)
        except OrchestrationError as e:
            logger.warning("process %s failed: %s", effect_name, e)
            self.last_error = e
            self.state = OrchestratorState.PLAYING if self.player else OrchestratorState.IDLE
            self.status = StatusMessage(str(e), False)
            return self.status

        values = ", ".join(format_pots(pots))
        self.status = StatusMessage(f"Playing: {effect_name} [{values}]", True)
        return self.status

    def _run_pipeline(self, effect_name: str, pots: List[float]):
        self.state = OrchestratorState.RESOLVING
        convert_path, root = self.resolve_environment()
        input_path = root / INPUT_RAW
        output_path = root / OUTPUT_RAW

        if not input_path.exists():
            self._transcode_source(input_path)

        # The transcoder may have taken a while; make sure convert is still there.
        if not convert_path.exists():
            raise EnvironmentMissing(
                f"Error: '{self.config.convert_name}' executable not found "
                f"- run 'make {self.config.convert_name}'"
            )

        self.state = OrchestratorState.CONVERTING
        self._convert(convert_path, effect_name, pots, input_path, output_path)

        self.stop_playback()
        self._start_playback(output_path)

    def _transcode_source(self, input_path: Path):
        source = self.resolve(self.config.source_audio)
        if source is None:
            raise InputMissing(f"Error: No {INPUT_RAW} or .mp3 file found")

        self.state = OrchestratorState.TRANSCODING
        cmd = [
            self.config.ffmpeg, "-y", "-v", "fatal", "-i", str(source),
            "-f", SAMPLE_FORMAT, "-ar", SAMPLE_RATE, "-ac", "1", str(input_path),
        ]
        logger.info("transcoding: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, stdin=subprocess.DEVNULL, capture_output=True)
        except OSError as e:
            logger.warning("transcoder launch failed: %s", e)
            raise TranscodeFailed("Error: Failed to convert MP3") from e
        if result.returncode != 0:
            logger.warning("transcoder exited with %s: %s",
                           result.returncode, _stderr_tail(result.stderr))
            raise TranscodeFailed("Error: Failed to convert MP3")

    def _convert(self, convert_path: Path, effect_name: str, pots: List[float],
                 input_path: Path, output_path: Path):
        try:
            src = open(input_path, "rb")
        except OSError as e:
            raise FileIOFailed(f"Error opening input: {e}") from e

        with src:
            try:
                dst = open(output_path, "wb")
            except OSError as e:
                raise FileIOFailed(f"Error creating output: {e}") from e

            with dst:
                cmd = [str(convert_path), effect_name, *format_pots(pots)]
                logger.info("converting: %s", " ".join(cmd))
                try:
                    result = subprocess.run(cmd, stdin=src, stdout=dst, stderr=subprocess.PIPE)
                except OSError as e:
                    logger.warning("convert launch failed: %s", e)
                    raise ConversionFailed("Error: Processing failed") from e

        if result.returncode != 0:
            logger.warning("convert exited with %s: %s",
                           result.returncode, _stderr_tail(result.stderr))
            raise ConversionFailed("Error: Processing failed")

    def _start_playback(self, output_path: Path):
        cmd = [
            self.config.ffplay, "-v", "fatal", "-nodisp", "-autoexit",
            "-f", SAMPLE_FORMAT, "-ar", SAMPLE_RATE,
            "-ch_layout", CHANNELS, "-i", str(output_path),
        ]
        logger.info("starting playback: %s", " ".join(cmd))
        self.playback_error = None
        try:
            self.player = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            # Not fatal: the rendered file is still there.
            logger.warning("playback launch failed: %s", e)
            self.playback_error = str(e)
            self.player = None
            self.state = OrchestratorState.IDLE
            return
        self.state = OrchestratorState.PLAYING

    # ── Playback handle ─────────────────────────────────────────

    def stop_playback(self):
        """Kill the tracked player, if any. Errors are ignored."""
        player = self.player
        self.player = None
        self.state = OrchestratorState.IDLE
        if player is None:
            return
        try:
            player.kill()
            player.poll()
        except OSError as e:
            logger.debug("ignoring error while killing player: %s", e)

    def is_playing(self) -> bool:
        """Return True while the tracked player process is alive."""
        return self.player is not None and self.player.poll() is None
