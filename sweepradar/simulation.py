"""
sweepradar.simulation
=====================

Hardware-free stand-ins so the whole pipeline runs on a laptop.

* `SimulatedServo`  – remembers the last commanded angle.
* `SimulatedSensor` – looks up the nearest target in the servo's direction
  and answers with the round-trip echo time, or None (timeout) when the beam
  hits nothing within range.
* `LoopbackFeed`    – runs a Scanner on a thread and pushes every Sample
  through encode → LineAssembler → decode into the display queue, the same
  path real serial bytes take.
"""
from __future__ import annotations

import logging
import queue
import random
import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence

from sweepradar.errors import ParseError
from sweepradar.protocol import DISTANCE_MAX, LineAssembler, decode, encode
from sweepradar.scanner import US_PER_CM, Scanner

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    angle: float                  # bearing of the centre, degrees
    width: float                  # angular half-width, degrees
    distance: float               # cm


DEFAULT_TARGETS = [
    Target(35, 6, 80),
    Target(90, 10, 210),
    Target(140, 4, 330),
    Target(165, 8, 45),
]


class SimulatedServo:
    def __init__(self) -> None:
        self.angle = 0
        self.moves = 0

    def move(self, angle: int) -> None:
        self.angle = angle
        self.moves += 1


class SimulatedSensor:
    def __init__(self, servo: SimulatedServo,
                 targets: Sequence[Target] = DEFAULT_TARGETS,
                 max_range_cm: float = DISTANCE_MAX,
                 noise_cm: float = 0.0,
                 seed: Optional[int] = None) -> None:
        self.servo = servo
        self.targets: List[Target] = list(targets)
        self.max_range_cm = max_range_cm
        self.noise_cm = noise_cm
        self._rng = random.Random(seed)

    def measure(self, timeout_s: float) -> Optional[float]:
        hits = [t.distance for t in self.targets
                if abs(t.angle - self.servo.angle) <= t.width]
        if not hits:
            return None
        cm = min(hits) + (self._rng.gauss(0, self.noise_cm) if self.noise_cm else 0.0)
        echo_us = cm * US_PER_CM
        if cm > self.max_range_cm or echo_us > timeout_s * 1e6:
            return None
        return echo_us


class LoopbackFeed:
    """Scanner thread feeding the display queue through the text protocol."""

    def __init__(self, scanner: Scanner, out_q: queue.Queue) -> None:
        self.scanner = scanner
        self.out_q = out_q
        self.dropped = 0
        self.failed = False
        self._asm = LineAssembler()
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, daemon=True)

    def start(self) -> None:
        log.info("simulated scanner running")
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout=1)

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def _emit(self, sample) -> None:
        for line in self._asm.feed(encode(sample).encode("ascii")):
            try:
                self.out_q.put(decode(line))
            except ParseError as exc:
                self.dropped += 1
                log.debug("dropped line – %s", exc)

    def _loop(self) -> None:
        self.scanner.run(self._emit, self._stop)
