"""Tests for the legacy and AccelStepper motor sub-protocols."""

import pytest

from firmatalib import (Encoding, FirmataConfigurationException, FirmataProtocol,
                        StepperDirection, StepperStepSize, StepperType)

F0 = FirmataProtocol.START_SYSEX
F7 = FirmataProtocol.END_SYSEX
ACCEL = FirmataProtocol.ACCELSTEPPER


# legacy STEPPER

def test_stepper_configure_driver(board, stream):
    board.stepper.configure(0, StepperType.DRIVER, 200, 2, 3)
    assert stream.last_write == [F0, FirmataProtocol.STEPPER, 0, 0, 1, 200 & 0x7F, 200 >> 7, 2, 3, F7]


def test_stepper_configure_four_wire(board, stream):
    board.stepper.configure(1, StepperType.FOUR_WIRE, 2048, 8, 9, 10, 11)
    assert stream.last_write == [F0, FirmataProtocol.STEPPER, 0, 1, 4, 0, 16, 8, 9, 10, 11, F7]


def test_stepper_step(board, stream):
    done = []
    board.stepper.step(0, StepperDirection.CW, 10000, 2000, callback=done.append)
    assert stream.last_write == [
        F0, FirmataProtocol.STEPPER, 1, 0, 1,
        10000 & 0x7F, (10000 >> 7) & 0x7F, 0,
        2000 & 0x7F, 2000 >> 7,
        F7,
    ]

    stream.feed([F0, FirmataProtocol.STEPPER, 0, F7])
    assert done == [True]


def test_stepper_step_with_ramps(board, stream):
    board.stepper.step(0, StepperDirection.CCW, 100, 180, accel=20, decel=30)
    assert stream.last_write[-5:] == [20, 0, 30, 0, F7]


# ACCELSTEPPER

def test_accel_configure_driver(board, stream):
    board.accel_stepper.configure(0, type=StepperType.DRIVER, step_pin=5, direction_pin=6,
                                  enable_pin=2, invert_pins=[2])
    assert stream.last_write == [F0, ACCEL, 0, 0, 0x11, 5, 6, 2, 16, F7]


def test_accel_configure_two_wire_inverted(board, stream):
    board.accel_stepper.configure(0, type=StepperType.TWO_WIRE, motor_pin1=5, motor_pin2=6, invert_pins=[5, 6])
    assert stream.last_write == [F0, ACCEL, 0, 0, 0x20, 5, 6, 3, F7]


def test_accel_configure_four_wire(board, stream):
    board.accel_stepper.configure(0, motor_pin1=5, motor_pin2=6, motor_pin3=3, motor_pin4=4)
    assert stream.last_write == [F0, ACCEL, 0, 0, 0x40, 5, 6, 3, 4, 0, F7]


def test_accel_configure_half_step(board, stream):
    board.accel_stepper.configure(0, step_size=StepperStepSize.HALF,
                                  motor_pin1=5, motor_pin2=6, motor_pin3=3, motor_pin4=4)
    assert stream.last_write == [F0, ACCEL, 0, 0, 0x42, 5, 6, 3, 4, 0, F7]


def test_accel_configure_enable_and_invert_all(board, stream):
    board.accel_stepper.configure(0, motor_pin1=5, motor_pin2=6, motor_pin3=3, motor_pin4=4,
                                  enable_pin=2, invert_pins=[2, 3, 4, 5, 6])
    assert stream.last_write == [F0, ACCEL, 0, 0, 0x41, 5, 6, 3, 4, 2, 31, F7]


def test_accel_step(board, stream):
    board.accel_stepper.step(0, 12345)
    assert stream.last_write == [F0, ACCEL, 2, 0, 57, 96, 0, 0, 0, F7]


def test_accel_step_negative(board, stream):
    board.accel_stepper.step(0, -12345)
    assert stream.last_write == [F0, ACCEL, 2, 0, 57, 96, 0, 0, 0x08, F7]


def test_accel_to(board, stream):
    board.accel_stepper.to(0, 2000)
    assert stream.last_write == [F0, ACCEL, 3, 0, 80, 15, 0, 0, 0, F7]


def test_accel_speed_and_acceleration(board, stream):
    board.accel_stepper.speed(0, 123.4)
    assert stream.last_write == [F0, ACCEL, 9, 0, 82, 9, 0, 40, F7]
    board.accel_stepper.acceleration(0, 199.9)
    assert stream.last_write == [F0, ACCEL, 8, 0, 24, 1, 122, 28, F7]


def test_accel_simple_commands(board, stream):
    board.accel_stepper.zero(3)
    assert stream.last_write == [F0, ACCEL, 1, 3, F7]
    board.accel_stepper.enable(3, False)
    assert stream.last_write == [F0, ACCEL, 4, 3, 0, F7]
    board.accel_stepper.enable(3)
    assert stream.last_write == [F0, ACCEL, 4, 3, 1, F7]
    board.accel_stepper.stop(3)
    assert stream.last_write == [F0, ACCEL, 5, 3, F7]


def test_accel_step_done_callback(board, stream):
    positions = []
    board.accel_stepper.step(0, 2000, callback=positions.append)
    stream.feed([F0, ACCEL, 0x0A, 0] + Encoding.encode_32(2000) + [F7])
    assert positions == [2000]


def test_accel_report_position(board, stream):
    positions = []
    board.accel_stepper.report_position(1, positions.append)
    assert stream.last_write == [F0, ACCEL, 6, 1, F7]
    stream.feed([F0, ACCEL, 0x06, 1] + Encoding.encode_32(-300) + [F7])
    assert positions == [-300]


def test_accel_multi_config(board, stream):
    board.accel_stepper.multi_config(0, [0, 1, 2])
    assert stream.last_write == [F0, ACCEL, 0x20, 0, 0, 1, 2, F7]


def test_accel_multi_to(board, stream):
    done = []
    board.accel_stepper.multi_to(1, [2000, -100], lambda: done.append(1))
    assert stream.last_write == [F0, ACCEL, 0x21, 1] + Encoding.encode_32(2000) + Encoding.encode_32(-100) + [F7]
    stream.feed([F0, ACCEL, 0x24, 1, F7])
    assert done == [1]


def test_accel_multi_stop(board, stream):
    board.accel_stepper.multi_stop(5)
    assert stream.last_write == [F0, ACCEL, 0x23, 5, F7]


def test_accel_invalid_group_raises(board, stream):
    with pytest.raises(FirmataConfigurationException):
        board.accel_stepper.multi_stop(-1)
    with pytest.raises(FirmataConfigurationException):
        board.accel_stepper.multi_config(6, [0])
    assert stream.writes == []
