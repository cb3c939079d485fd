"""
sweepradar package
==================

Servo-swept ultrasonic radar: scanner, telemetry codec and pygame scope.
"""

__all__ = [
    "constants",
    "config",
    "errors",
    "protocol",
    "scanner",
    "hardware",
    "simulation",
    "serial_reader",
    "serial_writer",
    "mqtt_client",
    "renderer",
    "gui",
]

__version__ = "1.0"
