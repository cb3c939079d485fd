from __future__ import annotations

import importlib
import sys
import time
import types
from typing import Optional
from unittest import mock

import pytest


class FakeChip:
    """lgpio stand-in: ECHO follows a script timed from the trigger's falling edge."""

    def __init__(self) -> None:
        self.rise_s: Optional[float] = None      # None = echo never arrives
        self.fall_s: Optional[float] = None      # None = echo never ends
        self.trig = self.echo = None
        self.t_trig = time.perf_counter()
        self.closed = False

    def gpiochip_open(self, chip: int) -> int:
        return 7

    def gpio_claim_output(self, h: int, pin: int) -> None:
        self.trig = pin

    def gpio_claim_input(self, h: int, pin: int) -> None:
        self.echo = pin

    def gpio_write(self, h: int, pin: int, level: int) -> None:
        if pin == self.trig and level == 0:
            self.t_trig = time.perf_counter()

    def gpio_read(self, h: int, pin: int) -> int:
        dt = time.perf_counter() - self.t_trig
        if self.rise_s is None or dt < self.rise_s:
            return 0
        return 1 if self.fall_s is None or dt < self.fall_s else 0

    def gpiochip_close(self, h: int) -> None:
        self.closed = True


@pytest.fixture
def hw(monkeypatch):
    chip = FakeChip()
    lgpio = types.ModuleType("lgpio")
    for name in ("gpiochip_open", "gpio_claim_output", "gpio_claim_input",
                 "gpio_write", "gpio_read", "gpiochip_close"):
        setattr(lgpio, name, getattr(chip, name))
    gpiozero = types.ModuleType("gpiozero")
    gpiozero.AngularServo = mock.Mock()
    gpiozero.Device = mock.Mock()
    pins = types.ModuleType("gpiozero.pins")
    pigpio = types.ModuleType("gpiozero.pins.pigpio")
    pigpio.PiGPIOFactory = mock.Mock()

    monkeypatch.setitem(sys.modules, "lgpio", lgpio)
    monkeypatch.setitem(sys.modules, "gpiozero", gpiozero)
    monkeypatch.setitem(sys.modules, "gpiozero.pins", pins)
    monkeypatch.setitem(sys.modules, "gpiozero.pins.pigpio", pigpio)
    monkeypatch.delitem(sys.modules, "sweepradar.hardware", raising=False)
    module = importlib.import_module("sweepradar.hardware")
    monkeypatch.setattr(module.time, "sleep", lambda _s: None)
    yield module, chip
    sys.modules.pop("sweepradar.hardware", None)


def test_echo_pulse_width_in_microseconds(hw) -> None:
    module, chip = hw
    chip.rise_s, chip.fall_s = 0.001, 0.006
    sensor = module.UltrasonicSensor(23, 24)
    us = sensor.measure(0.030)
    assert us is not None
    assert 3000 < us < 10000


def test_missing_echo_times_out(hw) -> None:
    module, chip = hw
    sensor = module.UltrasonicSensor(23, 24)
    t0 = time.perf_counter()
    assert sensor.measure(0.010) is None
    assert time.perf_counter() - t0 < 0.030


def test_late_echo_that_never_falls_is_bounded_by_one_timeout(hw) -> None:
    module, chip = hw
    chip.rise_s = 0.025
    sensor = module.UltrasonicSensor(23, 24)
    t0 = time.perf_counter()
    assert sensor.measure(0.030) is None
    # both edge waits share the window, so a second 30 ms never starts
    assert time.perf_counter() - t0 < 0.050


def test_sensor_close_releases_chip(hw) -> None:
    module, chip = hw
    module.UltrasonicSensor(23, 24).close()
    assert chip.closed


def test_servo_moves_to_absolute_angle(hw) -> None:
    module, _chip = hw
    servo = module.ServoActuator(18)
    servo.move(135)
    assert servo.servo.angle == 135
    servo.close()
    servo.servo.detach.assert_called_once_with()
