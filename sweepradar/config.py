"""
sweepradar.config
=================

Tiny helper that loads / saves *radar_config.json* and injects sensible
defaults for any missing keys.
"""

from __future__ import annotations
import json
from pathlib import Path
from sweepradar.constants import CFG_PATH

_DEFAULT = {
    # input selection (display side)
    "input_mode": "serial",           # "serial", "mqtt" or "sim"
    "serial_port": "/dev/ttyUSB0",
    "serial_baud": 115200,

    # MQTT (only used when input_mode == "mqtt" / scan.py --sink mqtt)
    "broker": "127.0.0.1",
    "port": 1883,
    "topic": "sweepradar/telemetry",

    # sweep
    "sweep_step_deg": 1,
    "settle_ms": 15,
    "timeout_ms": 30,
    "max_distance_cm": 400,

    # hardware pins (BCM)
    "trig_pin": 23,
    "echo_pin": 24,
    "servo_pin": 18,

    # visuals
    "canvas_size": 700,
    "fps": 30,
    "trail_duration": 2.0,            # seconds
    "trail_on": True,
    "night": False,
}


def load(path: Path = CFG_PATH) -> dict:
    try:
        with open(path) as fh:
            return {**_DEFAULT, **json.load(fh)}
    except FileNotFoundError:
        save(_DEFAULT, path)
        return dict(_DEFAULT)


def save(cfg: dict, path: Path = CFG_PATH) -> None:
    Path(path).write_text(json.dumps(cfg, indent=2))


def scanner_settings(cfg: dict) -> dict:
    """Keyword arguments for `Scanner(...)` taken from *cfg*."""
    return dict(step_deg=int(cfg["sweep_step_deg"]),
                settle_s=float(cfg["settle_ms"]) / 1000,
                timeout_s=float(cfg["timeout_ms"]) / 1000,
                max_distance_cm=int(cfg["max_distance_cm"]))


def trail_frames(cfg: dict) -> int:
    """Trail retention horizon in frames (never below 2)."""
    return max(2, round(float(cfg["trail_duration"]) * int(cfg["fps"])))
