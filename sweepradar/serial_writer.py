"""
sweepradar.serial_writer
========================

Producer side of the serial link: one encoded telemetry line per Sample.

Usage
-----
    with TelemetrySerial("/dev/ttyAMA0", 115200) as link:
        scanner.run(link.send, stop)
"""
from __future__ import annotations

import logging

import serial

from sweepradar.errors import TransportUnavailable
from sweepradar.protocol import Sample, encode

log = logging.getLogger(__name__)


class TelemetrySerial:
    def __init__(self, port: str, baud: int, serial_factory=serial.Serial):
        self.port, self.baud = port, baud
        self._open = serial_factory
        self._ser = None

    def open(self) -> "TelemetrySerial":
        try:
            self._ser = self._open(self.port, self.baud, timeout=0.05)
        except serial.SerialException as exc:
            raise TransportUnavailable(f"cannot open {self.port}: {exc}") from exc
        log.info("streaming to %s @ %d baud", self.port, self.baud)
        return self

    def send(self, sample: Sample) -> None:
        if self._ser is None:
            raise TransportUnavailable(f"{self.port} is not open")
        try:
            self._ser.write(encode(sample).encode("ascii"))
        except serial.SerialException as exc:
            raise TransportUnavailable(f"write to {self.port} failed: {exc}") from exc

    def close(self) -> None:
        if self._ser is not None:
            self._ser.close()
            self._ser = None

    def __enter__(self):
        return self.open()

    def __exit__(self, *_):
        self.close()
