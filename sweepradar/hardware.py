"""
sweepradar.hardware
===================

Raspberry Pi drivers for the real sweep head.

* `UltrasonicSensor` – HC-SR04 style ranger on lgpio.  TRIG high for 10 µs,
  then time the ECHO pulse.  Both edge waits share one window of the caller's
  timeout, so a missing echo costs at most that long.
* `ServoActuator`    – hobby servo through gpiozero's AngularServo on the
  pigpio pin factory (hardware-timed PWM, no jitter).

Requires the `pi` extra and a running `pigpiod`.  ECHO is usually 5 V:
put a divider in front of the Pi pin.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

import lgpio as GPIO
from gpiozero import AngularServo, Device
from gpiozero.pins.pigpio import PiGPIOFactory

log = logging.getLogger(__name__)

TRIGGER_PULSE_S = 0.000010
SERVO_MIN_PW = 0.0006             # seconds, tune per servo
SERVO_MAX_PW = 0.0023


class UltrasonicSensor:
    def __init__(self, trig_pin: int, echo_pin: int, chip: int = 0):
        self.trig, self.echo = trig_pin, echo_pin
        self.h = GPIO.gpiochip_open(chip)
        GPIO.gpio_claim_output(self.h, self.trig)
        GPIO.gpio_claim_input(self.h, self.echo)
        GPIO.gpio_write(self.h, self.trig, 0)
        time.sleep(0.05)                          # let the module settle
        log.info("ultrasonic sensor on TRIG=%d ECHO=%d", trig_pin, echo_pin)

    def close(self) -> None:
        GPIO.gpiochip_close(self.h)

    def measure(self, timeout_s: float) -> Optional[float]:
        GPIO.gpio_write(self.h, self.trig, 1)
        time.sleep(TRIGGER_PULSE_S)
        GPIO.gpio_write(self.h, self.trig, 0)

        # one window for both edges: a missing echo costs at most timeout_s
        deadline = time.perf_counter() + timeout_s
        while GPIO.gpio_read(self.h, self.echo) == 0:
            if time.perf_counter() > deadline:
                return None
        start = time.perf_counter()
        while GPIO.gpio_read(self.h, self.echo) == 1:
            if time.perf_counter() > deadline:
                return None
        return (time.perf_counter() - start) * 1e6


class ServoActuator:
    def __init__(self, pin: int):
        Device.pin_factory = PiGPIOFactory()
        self.servo = AngularServo(pin, min_angle=0, max_angle=180,
                                  min_pulse_width=SERVO_MIN_PW,
                                  max_pulse_width=SERVO_MAX_PW)
        log.info("servo on GPIO%d", pin)

    def move(self, angle: int) -> None:
        self.servo.angle = angle

    def close(self) -> None:
        self.servo.detach()
        self.servo.close()
