"""
sweepradar.errors
=================

Exception types shared by the protocol, transport and display layers.

A sensor timeout is *not* in here: the Scanner folds it into the sentinel
distance 0 and nothing downstream ever sees it as an error.
"""


class RadarError(Exception):
    """Base class for every error raised by this package."""


class ParseError(RadarError, ValueError):
    """A telemetry line could not be turned into a Sample."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"{reason}: {line!r}")
        self.line, self.reason = line, reason


class MalformedFrame(ParseError):
    """Missing `A:` prefix, wrong token count or non-integer field."""


class OutOfRange(ParseError):
    """Structurally valid line whose angle lies outside [0, 180]."""


class TransportUnavailable(RadarError):
    """The serial port / MQTT broker could not be opened or was lost."""
