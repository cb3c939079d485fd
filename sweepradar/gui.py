"""
sweepradar.gui
==============

Sweep-Radar scope window – serial / MQTT / simulated input.

Key features
------------
• Polar grid, live sweep line & colour-coded fading trail
• Fixed frame rate, independent of how fast samples arrive
• TRAIL / NIGHT / FULL-SCREEN toggles (t / n / f, q or Esc quits)
• Flashing red “DATA STREAM LOST” banner when no sample arrives for ≥1 s
  or the input link drops.
"""

from __future__ import annotations
import queue, threading, time, pygame
from typing import Optional, Union

from sweepradar import config, constants as C
from sweepradar.mqtt_client import RadarMQTT
from sweepradar.renderer import RadarScope, distance_colour, draw_scope
from sweepradar.scanner import Scanner
from sweepradar.serial_reader import RadarSerial
from sweepradar.simulation import LoopbackFeed, SimulatedSensor, SimulatedServo


class RadarGUI:
    DATA_TIMEOUT_SEC = 1.0              # gap that triggers DATA-LOSS banner

    # ────────────────────────────────────────────────── INIT
    def __init__(self, cfg: dict) -> None:
        self.cfg = cfg

        # ―― Pygame window
        self.size = int(cfg["canvas_size"])
        self.screen = pygame.display.set_mode((self.size, self.size))
        pygame.display.set_caption("Sweep-Radar")
        self.clock = pygame.time.Clock()
        self.fps = int(cfg["fps"])
        self.canvas = pygame.Surface((self.size, self.size))

        # ―― Toggles
        self.full_screen = False
        self.trail_on   = bool(cfg.get("trail_on", True))
        self.night_mode = bool(cfg.get("night", False))

        # ―― Scope state (render thread only)
        self.scope = RadarScope(self.size, config.trail_frames(cfg))

        # ―― Input mode & reader
        self.input_mode = cfg.get("input_mode", "serial").lower()
        self.q: queue.Queue = queue.Queue()
        self.reader: Union[RadarSerial, RadarMQTT, LoopbackFeed] = self._open_input()

        # ―― Timers & watchdog
        self.flash=True; self.t_flash=time.monotonic()
        self.t_last_sample = time.monotonic()
        self.data_lost = False

    # ───────────────────────────────────────── helper – open data source
    def _open_input(self):
        cfg = self.cfg
        if self.input_mode == "mqtt":
            reader = RadarMQTT(cfg["broker"], cfg["port"], cfg["topic"], self.q)
        elif self.input_mode == "sim":
            servo = SimulatedServo()
            scanner = Scanner(SimulatedSensor(servo, noise_cm=2.0), servo,
                              **config.scanner_settings(cfg))
            reader = LoopbackFeed(scanner, self.q)
        else:
            reader = RadarSerial(cfg["serial_port"], int(cfg["serial_baud"]), self.q)
        reader.start()                   # TransportUnavailable propagates
        return reader

    # ───────────────────────────────────────── sync runtime→cfg
    def _sync_cfg(self):
        self.cfg.update(trail_on=self.trail_on, night=self.night_mode)

    # ───────────────────────────────────────── HUD
    def _draw_hud(self):
        self.canvas.blit(C.FONT.render(C.TITLE, True, C.GREEN), (10, 10))
        mode = C.SMALL_FONT.render(f"{self.input_mode.upper()}  "
                                   f"dropped {self.reader.dropped}", True, C.DIM)
        self.canvas.blit(mode, (10, 34))
        last = self.scope.last
        if last is not None:
            d = last.distance
            txt = f"A={last.angle:3d}°  D=" + (f"{d:3d}cm" if d else " ---")
            surf = C.FONT.render(txt, True, distance_colour(d))
            self.canvas.blit(surf, (10, self.size - surf.get_height() - 10))

    # ───────────────────────────────────────── one frame
    def _ingest(self):
        if self.scope.ingest(self.q):
            self.t_last_sample = time.monotonic()
            self.data_lost = False

    def _watchdog(self):
        silent = time.monotonic() - self.t_last_sample > self.DATA_TIMEOUT_SEC
        if not self.data_lost and (silent or self.reader.failed):
            self.data_lost = True

    def _draw(self):
        draw_scope(self.canvas, self.scope, self.trail_on)
        self._draw_hud()

        self.screen.fill(C.BLACK)
        sw, sh = self.screen.get_size()
        self.screen.blit(self.canvas, ((sw - self.size) // 2, (sh - self.size) // 2))

        # data-loss banner
        if self.data_lost and self.flash:
            alert = C.BIG_FONT.render("DATA STREAM LOST", True, C.RED)
            self.screen.blit(alert, alert.get_rect(center=(sw // 2, sh // 2)))

        if self.night_mode:
            ov = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
            ov.fill(C.NIGHT_TINT); self.screen.blit(ov, (0, 0))
        pygame.display.flip()

    def _handle_events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_q, pygame.K_ESCAPE):
                    return False
                elif e.key == pygame.K_f:
                    pygame.display.toggle_fullscreen()
                    self.full_screen = not self.full_screen
                elif e.key == pygame.K_t:
                    self.trail_on = not self.trail_on; self._sync_cfg()
                elif e.key == pygame.K_n:
                    self.night_mode = not self.night_mode; self._sync_cfg()
        return True

    # ───────────────────────────────────────── MAIN LOOP
    def run(self, stop: Optional[threading.Event] = None):
        running = True
        while running and not (stop and stop.is_set()):
            self.clock.tick(self.fps)
            if time.monotonic() - self.t_flash > 0.5:
                self.flash = not self.flash; self.t_flash = time.monotonic()

            running = self._handle_events()
            self._ingest()

            # ――― STREAM WATCHDOG ―――――――――――――――――――――――――
            self._watchdog()

            self._draw()
            self.scope.advance()

        # graceful shutdown
        self._sync_cfg()
        self.reader.stop()
        pygame.quit()
