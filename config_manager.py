"""Runtime configuration.

Settings come from the command line and the environment only. Nothing is
read from or written to disk, so every launch starts from catalog defaults.
"""
import argparse
import os
from pathlib import Path
from typing import Mapping, Optional, Sequence

from music.effect_catalog import EFFECT_NAMES

DEFAULT_SOURCE_AUDIO = "BassForLinus.mp3"
DEFAULT_CONVERT = "convert"
DEFAULT_FFMPEG = "ffmpeg"
DEFAULT_FFPLAY = "ffplay"

INPUT_RAW = "input.raw"
OUTPUT_RAW = "output.raw"


class ConfigManager:
    """Holds the resolved runtime settings for one session."""

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        source_audio: str = DEFAULT_SOURCE_AUDIO,
        convert_name: str = DEFAULT_CONVERT,
        ffmpeg: str = DEFAULT_FFMPEG,
        ffplay: str = DEFAULT_FFPLAY,
        initial_effect: Optional[str] = None,
        log_file: Optional[Path] = None,
    ):
        self.base_dir = Path(base_dir).absolute() if base_dir is not None else Path.cwd()
        self.source_audio = source_audio
        self.convert_name = convert_name
        self.ffmpeg = ffmpeg
        self.ffplay = ffplay
        self.initial_effect = initial_effect
        self.log_file = Path(log_file) if log_file else None

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None,
                  environ: Optional[Mapping[str, str]] = None) -> "ConfigManager":
        """Build a config from command-line arguments, falling back to env vars."""
        if environ is None:
            environ = os.environ
        args = build_parser(environ).parse_args(argv)
        return cls(
            base_dir=Path(args.base_dir),
            source_audio=args.source,
            convert_name=args.convert,
            ffmpeg=args.ffmpeg,
            ffplay=args.ffplay,
            initial_effect=args.effect,
            log_file=Path(args.log_file) if args.log_file else None,
        )

    # ── Candidate locations ──────────────────────────────────────

    def candidate_dirs(self) -> list:
        """Directories searched for tools and data, parent directory first."""
        return [self.base_dir.parent, self.base_dir]

    def __repr__(self):
        return (f"ConfigManager(base_dir={str(self.base_dir)!r}, "
                f"convert={self.convert_name!r}, source={self.source_audio!r})")


def build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
    """Create the argument parser; defaults are taken from ``environ``."""
    ap = argparse.ArgumentParser(
        description="AudioNoise TUI - pick an effect, tune its pots, play the result")
    ap.add_argument("--base-dir", default=environ.get("AUDIONOISE_DIR", "."),
                    help="Directory searched (with its parent) for convert, "
                         "input.raw and the source audio (default: current directory)")
    ap.add_argument("--source", default=environ.get("AUDIONOISE_SOURCE", DEFAULT_SOURCE_AUDIO),
                    help=f"Compressed source audio used to build {INPUT_RAW} "
                         f"(default: {DEFAULT_SOURCE_AUDIO})")
    ap.add_argument("--convert", default=environ.get("AUDIONOISE_CONVERT", DEFAULT_CONVERT),
                    help="File name of the conversion executable")
    ap.add_argument("--ffmpeg", default=environ.get("AUDIONOISE_FFMPEG", DEFAULT_FFMPEG),
                    help="Transcoder command")
    ap.add_argument("--ffplay", default=environ.get("AUDIONOISE_FFPLAY", DEFAULT_FFPLAY),
                    help="Playback command")
    ap.add_argument("--effect", choices=EFFECT_NAMES, default=None,
                    help="Effect selected at start-up")
    ap.add_argument("--log-file", default=environ.get("AUDIONOISE_LOG"),
                    help="Write log records to this file (level from LOG_LEVEL)")
    return ap
