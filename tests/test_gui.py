from __future__ import annotations

import threading

import pygame
import pytest

from sweepradar import config, gui
from sweepradar.errors import TransportUnavailable
from sweepradar.protocol import Sample


def _cfg(**kw) -> dict:
    return dict(config._DEFAULT, canvas_size=240, fps=120, settle_ms=0, **kw)


def test_sim_mode_runs_frames_and_shuts_down(monkeypatch) -> None:
    # keep fonts in sweepradar.constants valid for the rest of the session
    monkeypatch.setattr(pygame, "quit", lambda: None)
    pygame.init()
    cfg = _cfg(input_mode="sim", trail_on=False)
    app = gui.RadarGUI(cfg)
    stop = threading.Event()
    threading.Timer(0.5, stop.set).start()
    app.run(stop)

    assert app.scope.last is not None
    assert 0 <= app.scope.current_angle <= 180
    assert not app.reader.alive
    assert cfg["trail_on"] is False


def test_missing_serial_port_is_fatal_at_startup() -> None:
    pygame.init()
    cfg = _cfg(input_mode="serial", serial_port="/dev/does-not-exist-radar")
    with pytest.raises(TransportUnavailable):
        gui.RadarGUI(cfg)


class SilentReader:
    """Opens fine, never delivers a sample."""

    def __init__(self, *_a, **_kw) -> None:
        self.dropped = 0
        self.failed = False

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass


def _silent_app(monkeypatch) -> gui.RadarGUI:
    monkeypatch.setattr(gui, "RadarSerial", SilentReader)
    pygame.init()
    return gui.RadarGUI(_cfg(input_mode="serial"))


def test_stalled_stream_raises_banner_and_next_sample_clears_it(monkeypatch) -> None:
    app = _silent_app(monkeypatch)
    app._watchdog()
    assert app.data_lost is False

    app.t_last_sample -= app.DATA_TIMEOUT_SEC + 0.1
    app._watchdog()
    assert app.data_lost is True
    app._draw()                          # banner path renders

    app.q.put(Sample(90, 120))
    app._ingest()
    assert app.data_lost is False
    assert app.scope.last == Sample(90, 120)


def test_failed_link_raises_banner_before_timeout(monkeypatch) -> None:
    app = _silent_app(monkeypatch)
    app.reader.failed = True
    app._watchdog()
    assert app.data_lost is True
