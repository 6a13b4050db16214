from .common import *
from .Encoding import *
from .Exceptions import *
from .FirmataProtocol import *

class AccelStepper:
    """ACCELSTEPPER sub-protocol for ConfigurableFirmata.

    Each motor is addressed by a device number chosen at configuration time.
    Positions travel as 32-bit signed integers and speeds or accelerations as
    custom floats (see `Encoding`). Motors may also be gathered into groups
    which move together so that every motor in the group arrives at the same
    time."""

    CONFIG = 0x00
    ZERO = 0x01
    STEP = 0x02
    TO = 0x03
    ENABLE = 0x04
    STOP = 0x05
    REPORT_POSITION = 0x06
    SET_ACCELERATION = 0x08
    SET_SPEED = 0x09
    MOVE_COMPLETE = 0x0A
    MULTI_CONFIG = 0x20
    MULTI_TO = 0x21
    MULTI_STOP = 0x23
    MULTI_MOVE_COMPLETE = 0x24

    MAX_GROUPS = 6

    def __init__(self, board):
        # these attributes should only be read externally, not written
        self.board = board

    def configure(self, device, type=StepperType.FOUR_WIRE, step_size=StepperStepSize.WHOLE,
            step_pin=None, direction_pin=None, motor_pin1=None, motor_pin2=None,
            motor_pin3=None, motor_pin4=None, enable_pin=None, invert_pins=None):
        """Attaches a motor to the board.

        :param device: Device number the firmware will know the motor by
        :type device: int

        :param type: Wiring type, from `StepperType`
        :type type: int

        :param step_size: Step size, from `StepperStepSize`
        :type step_size: int

        :param invert_pins: Pins whose logic level should be inverted
        :type invert_pins: list

        Driver boards are wired with `step_pin` and `direction_pin`; bare
        motors with `motor_pin1` to `motor_pin4` as their type needs. The
        optional `enable_pin` is honoured for every type."""

        invert_pins = invert_pins or []

        interface = ((type & 0x07) << 4) | ((step_size & 0x07) << 1)
        if enable_pin is not None:
            interface |= 0x01

        message = [
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.ACCELSTEPPER,
            self.CONFIG,
            device,
            interface,
        ]

        # each wiring position has its own bit in the inversion mask
        invert_mask = 0
        positions = [
            (step_pin, 0x01),
            (motor_pin1, 0x01),
            (direction_pin, 0x02),
            (motor_pin2, 0x02),
            (motor_pin3, 0x04),
            (motor_pin4, 0x08),
            (enable_pin, 0x10),
        ]
        for pin, bit in positions:
            if pin is None:
                continue
            message.append(pin)
            if pin in invert_pins:
                invert_mask |= bit

        message.append(invert_mask)
        message.append(FirmataProtocol.END_SYSEX)
        self.board.write(message)

    def zero(self, device):
        """Makes the motor's current position its zero position."""

        self._send(self.ZERO, device)

    def step(self, device, steps, callback=None):
        """Moves a motor by a relative number of steps.

        :param steps: Steps to move, negative for reverse
        :type steps: int

        :param callback: Function called with the final position
        :type callback: callable
        """

        self._send(self.STEP, device, Encoding.encode_32(steps))
        if callback is not None:
            self.board.once("stepper-done-%d" % device, callback)

    def to(self, device, position, callback=None):
        """Moves a motor to an absolute position.

        Arguments are the same as for `step()`."""

        self._send(self.TO, device, Encoding.encode_32(position))
        if callback is not None:
            self.board.once("stepper-done-%d" % device, callback)

    def enable(self, device, enabled=True):
        self._send(self.ENABLE, device, [1 if enabled else 0])

    def stop(self, device):
        self._send(self.STOP, device)

    def report_position(self, device, callback=None):
        """Asks for a motor's current position.

        :param callback: Function called with the position
        :type callback: callable
        """

        self._send(self.REPORT_POSITION, device)
        if callback is not None:
            self.board.once("stepper-position-%d" % device, callback)

    def acceleration(self, device, acceleration):
        """Sets acceleration in steps/sec^2, to two decimal places."""

        self._send(self.SET_ACCELERATION, device, Encoding.encode_custom_float(acceleration))

    def speed(self, device, speed):
        """Sets maximum speed in steps/sec, to two decimal places."""

        self._send(self.SET_SPEED, device, Encoding.encode_custom_float(speed))

    def multi_config(self, group, devices):
        """Gathers motors into a group that moves together.

        :param group: Group number, 0 to 5
        :type group: int

        :param devices: Device numbers of the motors in the group
        :type devices: list
        """

        self._check_group(group)
        self._send(self.MULTI_CONFIG, group, list(devices))

    def multi_to(self, group, positions, callback=None):
        """Moves every motor of a group to an absolute position.

        :param group: Group number, 0 to 5
        :type group: int

        :param positions: One position per motor, in the order the group was
            configured
        :type positions: list

        :param callback: Function called when the whole group has arrived
        :type callback: callable
        """

        self._check_group(group)

        data = []
        for position in positions:
            data.extend(Encoding.encode_32(position))

        self._send(self.MULTI_TO, group, data)
        if callback is not None:
            self.board.once("multi-stepper-done-%d" % group, callback)

    def multi_stop(self, group):
        self._check_group(group)
        self._send(self.MULTI_STOP, group)

    def handle_reply(self, packet):
        """Emits position and completion replies.

        :param packet: Complete ACCELSTEPPER message
        :type packet: FirmataPacket

        `stepper-position-<device>` and `stepper-done-<device>` carry the
        decoded position; `multi-stepper-done-<group>` carries nothing."""

        if len(packet) < 5:
            return

        command = packet[2]
        if command == self.REPORT_POSITION:
            self.board.emit("stepper-position-%d" % packet[3], Encoding.decode_32(packet[4:9]))
        elif command == self.MOVE_COMPLETE:
            self.board.emit("stepper-done-%d" % packet[3], Encoding.decode_32(packet[4:9]))
        elif command == self.MULTI_MOVE_COMPLETE:
            self.board.emit("multi-stepper-done-%d" % packet[3])

    def _check_group(self, group):
        if group < 0 or group >= self.MAX_GROUPS:
            raise FirmataConfigurationException("Invalid multi stepper group %d, must be 0 to %d" % (group, self.MAX_GROUPS - 1))

    def _send(self, command, device, data=None):
        message = [
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.ACCELSTEPPER,
            command,
            device,
        ]
        if data:
            message.extend(data)
        message.append(FirmataProtocol.END_SYSEX)
        self.board.write(message)
