"""Shared fixtures: a throwaway workspace and fakes for the external tools.

Nothing here launches ffmpeg, convert or ffplay; ``subprocess.run`` and
``subprocess.Popen`` are replaced for the duration of a test.
"""
import logging
import subprocess
from pathlib import Path

import pytest

from config_manager import ConfigManager
from music import process_orchestrator


class FakePlayer:
    """Stands in for a detached ffplay process."""

    def __init__(self, tools, cmd):
        self.tools = tools
        self.cmd = cmd
        self.pid = len(tools.players) + 1
        self.returncode = None
        self.kill_error = None

    def kill(self):
        self.tools.events.append(("kill", self.pid))
        if self.kill_error is not None:
            raise self.kill_error
        self.returncode = -9

    def poll(self):
        return self.returncode


class FakeTools:
    """Records every command and answers with configurable exit codes."""

    def __init__(self):
        self.calls = []
        self.events = []
        self.players = []
        self.ffmpeg_exit = 0
        self.convert_exit = 0
        self.ffmpeg_error = None
        self.convert_error = None
        self.player_error = None
        self.on_ffmpeg = None

    def run(self, cmd, stdin=None, stdout=None, stderr=None, capture_output=False, **kwargs):
        self.calls.append(list(cmd))
        name = Path(cmd[0]).name
        if name == "ffmpeg":
            if self.ffmpeg_error is not None:
                raise self.ffmpeg_error
            if self.on_ffmpeg is not None:
                self.on_ffmpeg()
            if self.ffmpeg_exit == 0:
                Path(cmd[-1]).write_bytes(b"\x00" * 16)
            return subprocess.CompletedProcess(cmd, self.ffmpeg_exit, b"", b"ffmpeg noise")
        if self.convert_error is not None:
            raise self.convert_error
        if self.convert_exit == 0 and stdout is not None:
            stdout.write(stdin.read())
        return subprocess.CompletedProcess(cmd, self.convert_exit, None, b"")

    def popen(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        if self.player_error is not None:
            raise self.player_error
        player = FakePlayer(self, cmd)
        self.players.append(player)
        self.events.append(("spawn", player.pid))
        return player

    @property
    def convert_calls(self):
        return [c for c in self.calls if Path(c[0]).name == "convert"]


@pytest.fixture
def workspace(tmp_path):
    """``tmp_path/app`` as the base directory; ``tmp_path`` is its parent."""
    base = tmp_path / "app"
    base.mkdir()
    return base


@pytest.fixture
def config(workspace):
    return ConfigManager(base_dir=workspace)


@pytest.fixture
def ready_workspace(workspace):
    """Base directory holding both the convert tool and input.raw."""
    (workspace / "convert").write_text("#!/bin/sh\ncat\n")
    (workspace / "input.raw").write_bytes(b"\x01\x02\x03\x04" * 8)
    return workspace


@pytest.fixture
def fake_tools(monkeypatch):
    tools = FakeTools()
    monkeypatch.setattr(process_orchestrator.subprocess, "run", tools.run)
    monkeypatch.setattr(process_orchestrator.subprocess, "Popen", tools.popen)
    return tools


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after a logging test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
