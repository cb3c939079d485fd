"""
sweepradar.renderer
===================

Scope model + drawing.

`RadarScope` is pure state (no window needed): it turns incoming Samples into
screen-space `TrailPoint`s and ages them once per frame.  `draw_scope()`
paints that state onto any pygame Surface.

Orientation: the plotting angle is `angle - 90°`, so 0° points straight up
from the centre and 90° points right.
"""
from __future__ import annotations

import collections
import math
import queue
from dataclasses import dataclass
from typing import Deque, Optional, Tuple

import pygame

from sweepradar import constants as C
from sweepradar.protocol import ANGLE_MAX, ANGLE_MIN, DISTANCE_MAX, Sample

Colour = Tuple[int, int, int]


def polar_to_screen(angle: float, distance: float,
                    centre: Tuple[float, float], size: int) -> Tuple[float, float]:
    r = distance / DISTANCE_MAX * C.RANGE_FRACTION * size
    th = math.radians(angle - 90)
    return centre[0] + math.cos(th) * r, centre[1] + math.sin(th) * r


def distance_colour(distance: float) -> Colour:
    """Red at 0 cm → green at 400 cm (values outside are clamped)."""
    t = min(1.0, max(0.0, distance / DISTANCE_MAX))
    return tuple(int(C.NEAR[c] * (1 - t) + C.FAR[c] * t) for c in range(3))


@dataclass
class TrailPoint:
    x: float
    y: float
    colour: Colour
    age: int = 0                       # frames since plotted


class RadarScope:
    def __init__(self, size: int, horizon_frames: int) -> None:
        self.size = size
        self.centre = (size / 2, size / 2)
        self.horizon = horizon_frames
        self.current_angle = ANGLE_MIN
        self.last: Optional[Sample] = None
        self.trail: Deque[TrailPoint] = collections.deque()

    def on_sample(self, sample: Sample) -> None:
        self.current_angle = sample.angle
        self.last = sample
        x, y = polar_to_screen(sample.angle, sample.distance, self.centre, self.size)
        self.trail.append(TrailPoint(x, y, distance_colour(sample.distance)))

    def ingest(self, q: queue.Queue) -> int:
        """Drain every Sample waiting in *q*; returns how many were taken."""
        n = 0
        while True:
            try:
                self.on_sample(q.get_nowait())
            except queue.Empty:
                return n
            n += 1

    def advance(self) -> None:
        """One frame passed: age everything, forget fully faded points."""
        for p in self.trail:
            p.age += 1
        # points are appended in order, so the oldest sit on the left
        while self.trail and self.trail[0].age >= self.horizon:
            self.trail.popleft()

    def alpha(self, p: TrailPoint) -> int:
        return max(0, int(255 * (1 - p.age / self.horizon)))

    @property
    def max_radius(self) -> float:
        return C.RANGE_FRACTION * self.size


# ───────────────────────── drawing
def _draw_grid(surf: pygame.Surface, scope: RadarScope) -> None:
    cx, cy = scope.centre
    for cm in range(C.RING_STEP_CM, DISTANCE_MAX + 1, C.RING_STEP_CM):
        r = int(cm / DISTANCE_MAX * scope.max_radius)
        pygame.draw.circle(surf, C.DIM, (int(cx), int(cy)), r, 1)
        surf.blit(C.SMALL_FONT.render(f"{cm}cm", True, C.DIM), (cx + 4, cy - r - 16))
    for ang in range(ANGLE_MIN, ANGLE_MAX + 1, C.SPOKE_STEP_DEG):
        end = polar_to_screen(ang, DISTANCE_MAX, scope.centre, scope.size)
        pygame.draw.line(surf, C.DIM, (cx, cy), end)
        lx, ly = polar_to_screen(ang, DISTANCE_MAX * 1.08, scope.centre, scope.size)
        lbl = C.SMALL_FONT.render(f"{ang}°", True, C.DIM)
        surf.blit(lbl, lbl.get_rect(center=(int(lx), int(ly))))


def draw_scope(surf: pygame.Surface, scope: RadarScope, trail_on: bool = True) -> None:
    surf.fill(C.BLACK)
    _draw_grid(surf, scope)

    # live sweep line
    end = polar_to_screen(scope.current_angle, DISTANCE_MAX, scope.centre, scope.size)
    pygame.draw.line(surf, C.GREEN, scope.centre, end, 2)

    points = scope.trail if trail_on else list(scope.trail)[-1:]
    for p in points:
        a = scope.alpha(p)
        if a <= 0:
            continue
        dot = pygame.Surface((2 * C.DOT_R, 2 * C.DOT_R), pygame.SRCALPHA)
        pygame.draw.circle(dot, p.colour + (a,), (C.DOT_R, C.DOT_R), C.DOT_R)
        surf.blit(dot, (int(p.x) - C.DOT_R, int(p.y) - C.DOT_R))
