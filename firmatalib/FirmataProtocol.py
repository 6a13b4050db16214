from .common import *
from .FirmataPacket import *

class FirmataProtocol():
    """Firmata wire protocol definition.

    This class holds the command and sub-command byte values of the Firmata
    protocol and the boundary tests the parser uses to find complete messages
    in an incoming byte stream.

    Firmata has two kinds of message. MIDI-style messages are exactly three
    bytes long and are identified by the high nibble of their first (status)
    byte. SysEx messages start with START_SYSEX, carry a sub-command byte and
    7-bit data, and end with END_SYSEX. Framing is decided only by byte
    counting for the first kind and by the END_SYSEX sentinel for the second;
    a status byte arriving inside an unfinished SysEx abandons it."""

    # message command bytes (128-255/0x80-0xFF)
    DIGITAL_MESSAGE = 0x90          # send data for a digital port
    ANALOG_MESSAGE = 0xE0           # send data for an analog pin (or PWM)
    REPORT_ANALOG = 0xC0            # enable analog input by pin
    REPORT_DIGITAL = 0xD0           # enable digital input by port
    PIN_MODE = 0xF4                 # set a pin to INPUT/OUTPUT/PWM/etc
    REPORT_VERSION = 0xF9           # report protocol version
    START_SYSEX = 0xF0              # start a SysEx message
    END_SYSEX = 0xF7                # end a SysEx message
    SYSTEM_RESET = 0xFF             # reset from MIDI

    # extended command set using SysEx (0-127/0x00-0x7F)
    SERIAL_MESSAGE = 0x60           # communicate with serial devices
    ACCELSTEPPER = 0x62             # control an AccelStepper motor
    ANALOG_MAPPING_QUERY = 0x69     # ask for mapping of analog to pin numbers
    ANALOG_MAPPING_RESPONSE = 0x6A  # reply with mapping info
    CAPABILITY_QUERY = 0x6B         # ask for supported modes and resolution of all pins
    CAPABILITY_RESPONSE = 0x6C      # reply with supported modes and resolution
    PIN_STATE_QUERY = 0x6D          # ask for a pin's current mode and value
    PIN_STATE_RESPONSE = 0x6E       # reply with pin's current mode and value
    EXTENDED_ANALOG = 0x6F          # analog write (PWM, Servo, etc) to any pin
    SERVO_CONFIG = 0x70             # set minPulse, maxPulse
    STRING_DATA = 0x71              # a string message with 14-bits per char
    STEPPER = 0x72                  # control a stepper motor
    ONEWIRE_DATA = 0x73             # OneWire read/write/reset/select/search request
    PULSE_OUT = 0x73                # same byte as ONEWIRE_DATA
    PULSE_IN = 0x74                 # pulse in measurement
    PING_READ = 0x75                # ultrasonic ping read
    I2C_REQUEST = 0x76              # send an I2C read/write request
    I2C_REPLY = 0x77                # a reply to an I2C read request
    I2C_CONFIG = 0x78               # config I2C settings such as delay times
    QUERY_FIRMWARE = 0x79           # report name and version of the firmware
    SAMPLING_INTERVAL = 0x7A        # set the poll rate of the main loop

    # I2C request mode byte bits
    I2C_READ_MASK = 0x18            # read/write mode bits
    I2C_END_TX_MASK = 0x40          # keep the transmission open between write and read

    # OneWire sub-commands
    ONEWIRE_SEARCH_REQUEST = 0x40
    ONEWIRE_CONFIG_REQUEST = 0x41
    ONEWIRE_SEARCH_REPLY = 0x42
    ONEWIRE_READ_REPLY = 0x43
    ONEWIRE_SEARCH_ALARMS_REQUEST = 0x44
    ONEWIRE_SEARCH_ALARMS_REPLY = 0x45
    ONEWIRE_RESET_REQUEST_BIT = 0x01
    ONEWIRE_READ_REQUEST_BIT = 0x08
    ONEWIRE_DELAY_REQUEST_BIT = 0x10
    ONEWIRE_WRITE_REQUEST_BIT = 0x20
    ONEWIRE_WITHDATA_REQUEST_BITS = 0x3C

    # serial sub-commands, OR'd with the port id
    SERIAL_CONFIG = 0x10
    SERIAL_WRITE = 0x20
    SERIAL_READ = 0x30
    SERIAL_REPLY = 0x40
    SERIAL_CLOSE = 0x50
    SERIAL_FLUSH = 0x60
    SERIAL_LISTEN = 0x70

    # status bytes that begin a three byte message
    midi_responses = [REPORT_VERSION, ANALOG_MESSAGE, DIGITAL_MESSAGE]
    midi_length = 3

    @classmethod
    def get_status(cls, first_byte) -> int:
        """Maps the first byte of a message to its handler table key.

        :param first_byte: First byte of a message
        :type first_byte: int

        :returns: Status byte with channel/port bits removed (below 0xF0), or
            the byte itself
        :rtype: int
        """

        return first_byte & 0xF0 if first_byte < cls.START_SYSEX else first_byte

    @classmethod
    def test_packet_start(cls, buffer, parser=None):
        """Test whether a message has started.

        :param buffer: Current data buffer, holding one byte
        :type buffer: bytes

        :param parser: Parser requesting the test, if any
        :type parser: FirmataParser

        A message can begin with START_SYSEX or with one of the three MIDI
        status bytes Firmata sends to the host. Anything else (including the
        zero bytes some boards emit while resetting) cannot start a message,
        so IDLE is returned and the parser drops the byte."""

        first = buffer[0]
        if first == cls.START_SYSEX or cls.get_status(first) in cls.midi_responses:
            return ParseStatus.IN_PROGRESS

        return ParseStatus.IDLE

    @classmethod
    def test_packet_complete(cls, buffer, parser=None):
        """Test whether a message has finished.

        :param buffer: Current data buffer, including the newest byte
        :type buffer: bytes

        :param parser: Parser requesting the test, if any
        :type parser: FirmataParser

        MIDI-style messages are complete at exactly three bytes. SysEx
        messages are complete when the newest byte is END_SYSEX. Any other
        byte above 0x7F inside a SysEx cannot be payload, so IDLE is returned
        to abandon the partial message; the parser then offers that byte as
        the start of a new one."""

        if buffer[0] == cls.START_SYSEX:
            last = buffer[-1]
            if len(buffer) > 1 and last == cls.END_SYSEX:
                return ParseStatus.COMPLETE
            if len(buffer) > 1 and last > 0x7F:
                return ParseStatus.IDLE
            return ParseStatus.IN_PROGRESS

        if len(buffer) >= cls.midi_length:
            return ParseStatus.COMPLETE

        return ParseStatus.IN_PROGRESS

    @classmethod
    def get_packet_from_buffer(cls, buffer, parser=None):
        """Generates a packet object from a complete message buffer.

        :param buffer: Complete message, including any SysEx sentinels
        :type buffer: bytes

        :param parser: Parser object to associate with the new packet, if any
        :type parser: FirmataParser

        :returns: Packet wrapping the message
        :rtype: FirmataPacket
        """

        if buffer[0] == cls.START_SYSEX:
            command = buffer[1] if len(buffer) > 2 else None
            return FirmataPacket(type=FirmataPacket.TYPE_SYSEX, command=command, buffer=buffer, parser=parser)

        return FirmataPacket(type=FirmataPacket.TYPE_MIDI, command=cls.get_status(buffer[0]), buffer=buffer, parser=parser)
