"""
sweepradar.serial_reader
========================

Non-blocking telemetry line reader for a local serial port.

Decoded Samples are handed to the display through a `queue.Queue`; the
reader thread never touches display state.  Lines that fail to parse are
dropped (and counted) without disturbing the stream.

Usage
-----
    q = queue.Queue()
    reader = RadarSerial("/dev/ttyUSB0", 115200, q)
    reader.start()     # opens the port (TransportUnavailable) + thread
    reader.stop()      # clean shutdown
"""
from __future__ import annotations

import logging
import queue
import threading

import serial

from sweepradar.errors import ParseError, TransportUnavailable
from sweepradar.protocol import LineAssembler, decode

log = logging.getLogger(__name__)


class RadarSerial:
    def __init__(self, port: str, baud: int, out_q: queue.Queue,
                 serial_factory=serial.Serial):
        self.port, self.baud = port, baud
        self.out_q    = out_q
        self.dropped  = 0                        # lines that did not parse
        self.failed   = False                    # link lost at runtime
        self._open    = serial_factory
        self._ser     = None
        self._asm     = LineAssembler()
        self._stop    = threading.Event()
        self._thread  = threading.Thread(target=self._loop, daemon=True)

    # ───────────────────────── public API
    def start(self) -> None:
        try:
            self._ser = self._open(self.port, self.baud, timeout=0.05)
        except serial.SerialException as exc:
            raise TransportUnavailable(f"cannot open {self.port}: {exc}") from exc
        log.info("listening on %s @ %d baud", self.port, self.baud)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout=1)

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    # ───────────────────────── helpers
    def _handle(self, data: bytes) -> None:
        for line in self._asm.feed(data):
            try:
                self.out_q.put(decode(line))
            except ParseError as exc:
                self.dropped += 1
                log.debug("dropped line – %s", exc)

    # ───────────────────────── background reader thread
    def _loop(self):
        try:
            with self._ser as ser:
                while not self._stop.is_set():
                    data = ser.read(ser.in_waiting or 1)
                    if data:
                        self._handle(data)
        except serial.SerialException as exc:
            # recovery is up to the user (replug + restart)
            self.failed = True
            log.error("serial link %s lost: %s", self.port, exc)
