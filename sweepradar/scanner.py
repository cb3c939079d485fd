"""
sweepradar.scanner
==================

Angle sweep + distance measurement loop.

The servo is stepped back and forth over 0°–180° (a triangle wave) and one
ultrasonic ping is taken at every step after a short settling pause.  Raw
echo times are converted to centimetres and sanitised: no echo, non-positive
or beyond-ceiling readings all become the sentinel 0.

Hardware is reached only through two tiny interfaces so the loop can be run
against fakes (tests) or the simulator (demo mode):

    DistanceSensor.measure(timeout_s) -> round-trip µs | None
    Actuator.move(angle)

Usage
-----
    scanner = Scanner(sensor, servo, settle_s=0.015)
    stop = threading.Event()
    scanner.run(sink.send, stop)        # blocks until stop.set()
"""
from __future__ import annotations

import enum
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Protocol

from sweepradar.protocol import ANGLE_MAX, ANGLE_MIN, DISTANCE_MAX, NO_ECHO, Sample

log = logging.getLogger(__name__)

US_PER_CM = 58.2                  # round-trip µs per cm at ~20 °C


class DistanceSensor(Protocol):
    def measure(self, timeout_s: float) -> Optional[float]:
        """Ping once; round-trip echo time in µs, or None on timeout."""
        ...


class Actuator(Protocol):
    def move(self, angle: int) -> None:
        ...


class Direction(enum.Enum):
    ASCENDING = 1
    DESCENDING = -1


@dataclass
class SweepState:
    angle: int = ANGLE_MIN
    direction: Direction = Direction.ASCENDING


def sanitize_distance(cm: Optional[float], ceiling: int = DISTANCE_MAX) -> int:
    """None, <= 0 or > ceiling → NO_ECHO; anything else as whole centimetres."""
    if cm is None or cm <= 0 or cm > ceiling:
        return NO_ECHO
    return int(cm)


class Scanner:
    def __init__(self, sensor: DistanceSensor, actuator: Actuator,
                 step_deg: int = 1,
                 settle_s: float = 0.015,
                 timeout_s: float = 0.030,
                 max_distance_cm: int = DISTANCE_MAX,
                 sleep: Callable[[float], None] = time.sleep) -> None:
        if not 1 <= step_deg <= ANGLE_MAX:
            raise ValueError(f"step_deg must be in 1..{ANGLE_MAX}, got {step_deg}")
        self.sensor, self.actuator = sensor, actuator
        self.step_deg = step_deg
        self.settle_s = settle_s
        self.timeout_s = timeout_s
        self.max_distance_cm = max_distance_cm
        self._sleep = sleep
        self.state = SweepState()

    # ───────────────────────── one step
    def _advance(self) -> int:
        st = self.state
        angle = st.angle + st.direction.value * self.step_deg
        if angle >= ANGLE_MAX:
            angle, st.direction = ANGLE_MAX, Direction.DESCENDING
        elif angle <= ANGLE_MIN:
            angle, st.direction = ANGLE_MIN, Direction.ASCENDING
        st.angle = angle
        return angle

    def measure(self) -> int:
        echo_us = self.sensor.measure(self.timeout_s)
        cm = None if echo_us is None else echo_us / US_PER_CM
        return sanitize_distance(cm, self.max_distance_cm)

    def step(self) -> Sample:
        """Move one step, let the servo settle, ping once."""
        angle = self._advance()
        self.actuator.move(angle)
        if self.settle_s > 0:
            self._sleep(self.settle_s)
        return Sample(angle, self.measure())

    # ───────────────────────── loops
    def sweep(self, stop: Optional[threading.Event] = None) -> Iterator[Sample]:
        while stop is None or not stop.is_set():
            yield self.step()

    def run(self, emit: Callable[[Sample], None],
            stop: Optional[threading.Event] = None) -> None:
        log.info("sweep started (step %d°, settle %.0f ms, timeout %.0f ms)",
                 self.step_deg, self.settle_s * 1000, self.timeout_s * 1000)
        for sample in self.sweep(stop):
            emit(sample)
        log.info("sweep stopped at %d°", self.state.angle)
