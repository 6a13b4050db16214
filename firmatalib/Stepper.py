from .common import *
from .FirmataProtocol import *

class Stepper:
    """Legacy STEPPER sub-protocol.

    This is the older stepper support found in StandardFirmata-era firmware,
    which moves a motor by a relative number of steps and reports once the
    move finishes. Newer firmware uses `AccelStepper` instead."""

    CONFIG = 0x00
    STEP = 0x01

    def __init__(self, board):
        # these attributes should only be read externally, not written
        self.board = board

    def configure(self, device, type, steps_per_rev, dir_or_motor1_pin, step_or_motor2_pin, motor3_pin=None, motor4_pin=None):
        """Attaches a stepper motor to the board.

        :param device: Device number the firmware will know the motor by
        :type device: int

        :param type: Wiring type, from `StepperType`
        :type type: int

        :param steps_per_rev: Steps per full revolution
        :type steps_per_rev: int

        Driver boards use a direction and a step pin; two and four wire motors
        use their coil pins, and four wire motors need `motor3_pin` and
        `motor4_pin` as well."""

        message = [
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.STEPPER,
            self.CONFIG,
            device,
            type,
            steps_per_rev & 0x7F, (steps_per_rev >> 7) & 0x7F,
            dir_or_motor1_pin,
            step_or_motor2_pin,
        ]

        if type == StepperType.FOUR_WIRE:
            message.append(motor3_pin)
            message.append(motor4_pin)

        message.append(FirmataProtocol.END_SYSEX)
        self.board.write(message)

    def step(self, device, direction, steps, speed, accel=0, decel=0, callback=None):
        """Moves a motor by a number of steps.

        :param direction: Direction, from `StepperDirection`
        :type direction: int

        :param steps: Number of steps (21 bits)
        :type steps: int

        :param speed: Speed in 0.01 rad/sec
        :type speed: int

        :param accel: Acceleration in 0.01 rad/sec^2, or 0 for none
        :type accel: int

        :param decel: Deceleration in 0.01 rad/sec^2, or 0 for none
        :type decel: int

        :param callback: Function called with `True` when the move is done
        :type callback: callable
        """

        message = [
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.STEPPER,
            self.STEP,
            device,
            direction,
            steps & 0x7F, (steps >> 7) & 0x7F, (steps >> 14) & 0x7F,
            speed & 0x7F, (speed >> 7) & 0x7F,
        ]

        if accel > 0 or decel > 0:
            message.extend([
                accel & 0x7F, (accel >> 7) & 0x7F,
                decel & 0x7F, (decel >> 7) & 0x7F,
            ])

        message.append(FirmataProtocol.END_SYSEX)
        self.board.write(message)

        if callback is not None:
            self.board.once("stepper-done-%d" % device, callback)

    def handle_reply(self, packet):
        if len(packet) < 4:
            return
        self.board.emit("stepper-done-%d" % packet[2], True)
