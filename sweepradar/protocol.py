"""
sweepradar.protocol
===================

Line-oriented telemetry codec.

One Sample per line, two whitespace-free `<label>:<int>` fields:

    A:<angle> D:<distance>\\n

Usage
-----
    line   = encode(Sample(90, 123))        # "A:90 D:123\\n"
    sample = decode(line)                   # Sample(angle=90, distance=123)

    asm = LineAssembler()
    for line in asm.feed(chunk_from_port):  # bytes in, whole lines out
        ...

Nothing here touches I/O or keeps global state.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List

from sweepradar.errors import MalformedFrame, OutOfRange, ParseError

log = logging.getLogger(__name__)

ANGLE_MIN, ANGLE_MAX = 0, 180
DISTANCE_MAX = 400
NO_ECHO = 0                       # sentinel distance

PREFIX = "A:"
_INT = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Sample:
    angle: int                    # degrees, 0–180
    distance: int                 # cm, 0–400, 0 = no echo


# ───────────────────────── encode / decode
def encode(sample: Sample) -> str:
    return f"A:{sample.angle} D:{sample.distance}\n"


def decode(line: str) -> Sample:
    """
    Parse one telemetry line.

    Raises `MalformedFrame` for structural problems and `OutOfRange` for an
    angle outside [0, 180].  Distance is deliberately *not* range-checked:
    odd sensor values should show up on the scope, not vanish here.
    """
    text = line.rstrip()
    if not text.startswith(PREFIX):
        raise MalformedFrame(line, "missing 'A:' prefix")

    tokens = text.split(" ")
    if len(tokens) != 2:
        raise MalformedFrame(line, f"expected 2 fields, got {len(tokens)}")

    values = []
    for tok in tokens:
        parts = tok.split(":")
        if len(parts) != 2 or not _INT.fullmatch(parts[1]):
            raise MalformedFrame(line, f"bad field {tok!r}")
        values.append(int(parts[1]))

    angle, distance = values
    if not ANGLE_MIN <= angle <= ANGLE_MAX:
        raise OutOfRange(line, f"angle {angle} outside [0, 180]")
    return Sample(angle, distance)


def iter_samples(lines: Iterable[str]) -> Iterator[Sample]:
    """Decode *lines* in order, silently skipping the ones that do not parse."""
    for line in lines:
        try:
            yield decode(line)
        except ParseError as exc:
            log.debug("dropped line – %s", exc)


# ───────────────────────── byte stream → lines
class LineAssembler:
    """
    Splits an arbitrary byte stream on newlines.

    Partial lines are kept until the rest arrives.  If the pending tail grows
    past `max_line` bytes without a newline it is thrown away so a stream of
    garbage cannot eat memory; the next newline resynchronises.
    """

    def __init__(self, max_line: int = 128) -> None:
        self.max_line = max_line
        self._buf = bytearray()
        self._skipping = False          # inside an oversized line

    def feed(self, data: bytes) -> List[str]:
        self._buf += data
        out: List[str] = []
        while True:
            idx = self._buf.find(b"\n")
            if idx == -1:
                break
            raw = bytes(self._buf[:idx])
            del self._buf[: idx + 1]
            if self._skipping:          # tail of a discarded line
                self._skipping = False
                continue
            out.append(raw.decode("ascii", errors="replace"))

        if len(self._buf) > self.max_line:
            log.debug("discarding %d bytes without newline", len(self._buf))
            self._buf.clear()
            self._skipping = True
        return out

    @property
    def pending(self) -> int:
        """Bytes buffered while waiting for a newline."""
        return len(self._buf)
