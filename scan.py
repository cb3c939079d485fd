"""
Entry-point for the sweep head (runs on the Pi, or anywhere with --simulate).

    python scan.py                      # real servo + HC-SR04 → serial
    python scan.py --sink mqtt
    python scan.py --simulate --sink stdout
"""
import argparse
import logging
import sys
import threading

from sweepradar import config
from sweepradar.errors import TransportUnavailable
from sweepradar.mqtt_client import TelemetryMQTT
from sweepradar.protocol import encode
from sweepradar.scanner import Scanner
from sweepradar.serial_writer import TelemetrySerial
from sweepradar.simulation import SimulatedSensor, SimulatedServo

logging.basicConfig(
    level=logging.INFO,
    format='[%(levelname)s] %(name)s: %(message)s',
    stream=sys.stderr
)
log = logging.getLogger("scan")


class StdoutSink:
    def __enter__(self):
        return self

    def __exit__(self, *_):
        sys.stdout.flush()

    def send(self, sample):
        sys.stdout.write(encode(sample))
        sys.stdout.flush()


def build_head(cfg, simulate):
    """Returns (sensor, actuator, cleanup)."""
    if simulate:
        servo = SimulatedServo()
        return SimulatedSensor(servo, noise_cm=2.0), servo, lambda: None

    from sweepradar import hardware         # lazy: needs the Pi GPIO stack
    sensor = hardware.UltrasonicSensor(cfg["trig_pin"], cfg["echo_pin"])
    servo = hardware.ServoActuator(cfg["servo_pin"])

    def cleanup():
        servo.close()
        sensor.close()
    return sensor, servo, cleanup


def build_sink(cfg, kind):
    if kind == "mqtt":
        return TelemetryMQTT(cfg["broker"], cfg["port"], cfg["topic"])
    if kind == "stdout":
        return StdoutSink()
    return TelemetrySerial(cfg["serial_port"], int(cfg["serial_baud"]))


def main():
    parser = argparse.ArgumentParser(description="Sweep-Radar scanner.")
    parser.add_argument("--config", default=str(config.CFG_PATH),
                        help="Path to radar_config.json.")
    parser.add_argument("--simulate", action="store_true",
                        help="Use the simulated servo + sensor.")
    parser.add_argument("--sink", choices=("serial", "mqtt", "stdout"),
                        default="serial", help="Where telemetry lines go.")
    args = parser.parse_args()

    cfg = config.load(args.config)
    sensor, servo, cleanup = build_head(cfg, args.simulate)
    scanner = Scanner(sensor, servo, **config.scanner_settings(cfg))
    stop = threading.Event()
    try:
        with build_sink(cfg, args.sink) as sink:
            scanner.run(sink.send, stop)
    except TransportUnavailable as exc:
        log.error("%s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        stop.set()
        log.info("stopping")
    finally:
        cleanup()

if __name__ == "__main__":
    main()
