"""
sweepradar.mqtt_client
======================

Telemetry over an MQTT broker instead of a serial cable.

Each message payload carries one or more telemetry lines, exactly the bytes
that would have gone down the serial link.

    RadarMQTT      – display side, subscribes and queues decoded Samples
    TelemetryMQTT  – scanner side, publishes one line per Sample
"""
from __future__ import annotations

import logging
import queue
import uuid

import paho.mqtt.client as mqtt

from sweepradar.errors import ParseError, TransportUnavailable
from sweepradar.protocol import Sample, decode, encode

log = logging.getLogger(__name__)


def _client(prefix: str) -> mqtt.Client:
    random_id = f"{prefix}-{uuid.uuid4().hex[:8]}"
    return mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=random_id)


def _connect(cli: mqtt.Client, host: str, port: int) -> None:
    try:
        cli.connect(host, port, 60)
    except OSError as exc:
        raise TransportUnavailable(f"cannot reach broker {host}:{port}: {exc}") from exc
    cli.loop_start()


class RadarMQTT:
    """
    Connects to the broker, parses telemetry lines and puts the Samples on
    `out_q`.  paho's network thread is the only producer.
    """

    def __init__(self, host, port, topic, out_q: queue.Queue):
        self.host, self.port, self.topic = host, port, topic
        self.out_q = out_q
        self.dropped = 0
        self.failed = False

        self.cli = _client("scope")
        self.cli.on_connect = self._on_connect
        self.cli.on_disconnect = self._on_disconnect
        self.cli.on_message = self._on_msg

    def start(self):
        _connect(self.cli, self.host, self.port)
        log.info("subscribed to %s on %s:%d", self.topic, self.host, self.port)

    def stop(self):
        self.cli.loop_stop()
        self.cli.disconnect()

    def _on_connect(self, client, _userdata, _flags, reason_code, _props):
        if reason_code.is_failure:
            self.failed = True
            log.error("broker refused connection: %s", reason_code)
            return
        self.failed = False
        client.subscribe(self.topic)

    def _on_disconnect(self, _client, _userdata, _flags, reason_code, _props):
        if reason_code.is_failure:
            # paho keeps retrying in loop_start(); flag it for the GUI banner
            self.failed = True
            log.error("broker connection lost: %s", reason_code)

    def _on_msg(self, _cli, _userdata, msg):
        self.handle_payload(msg.payload)

    def handle_payload(self, payload: bytes) -> None:
        for line in payload.decode("ascii", errors="replace").splitlines():
            try:
                self.out_q.put(decode(line))
            except ParseError as exc:
                self.dropped += 1
                log.debug("dropped line – %s", exc)


class TelemetryMQTT:
    """Publishes each Sample as one telemetry line."""

    def __init__(self, host, port, topic):
        self.host, self.port, self.topic = host, port, topic
        self.cli = _client("scanner")

    def open(self) -> "TelemetryMQTT":
        _connect(self.cli, self.host, self.port)
        log.info("publishing to %s on %s:%d", self.topic, self.host, self.port)
        return self

    def send(self, sample: Sample) -> None:
        self.cli.publish(self.topic, encode(sample))

    def close(self) -> None:
        self.cli.loop_stop()
        self.cli.disconnect()

    def __enter__(self):
        return self.open()

    def __exit__(self, *_):
        self.close()
