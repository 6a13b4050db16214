class ProcessMode:
    SELF = 1
    SUBS = 2
    BOTH = 3

class ParseStatus:
    IDLE = 0
    STARTING = 1
    IN_PROGRESS = 2
    COMPLETE = 3

class HandshakeState:
    IDLE = 0
    AWAITING_VERSION = 1
    AWAITING_FIRMWARE = 2
    AWAITING_CAPABILITIES = 3
    AWAITING_ANALOG_MAPPING = 4
    AWAITING_PIN_STATES = 5
    READY = 6

class Level:
    LOW = 0
    HIGH = 1

class Mode:
    INPUT = 0x00
    OUTPUT = 0x01
    ANALOG = 0x02
    PWM = 0x03
    SERVO = 0x04
    SHIFT = 0x05
    I2C = 0x06
    ONEWIRE = 0x07
    STEPPER = 0x08
    SERIAL = 0x0A
    PULLUP = 0x0B
    IGNORE = 0x7F
    PING_READ = 0x75
    UNKNOWN = 0x10

    @classmethod
    def all(cls):
        return [cls.INPUT, cls.OUTPUT, cls.ANALOG, cls.PWM, cls.SERVO,
                cls.SHIFT, cls.I2C, cls.ONEWIRE, cls.STEPPER, cls.SERIAL,
                cls.PULLUP, cls.IGNORE, cls.PING_READ, cls.UNKNOWN]

class I2CMode:
    WRITE = 0
    READ = 1
    CONTINUOUS_READ = 2
    STOP_READING = 3

class SerialMode:
    CONTINUOUS_READ = 0x00
    STOP_READING = 0x01

class SerialPortId:
    HW_SERIAL0 = 0x00
    HW_SERIAL1 = 0x01
    HW_SERIAL2 = 0x02
    HW_SERIAL3 = 0x03
    SW_SERIAL0 = 0x08
    SW_SERIAL1 = 0x09
    SW_SERIAL2 = 0x0A
    SW_SERIAL3 = 0x0B

    # firmware elects the first software port as its default
    DEFAULT = 0x08

class StepperType:
    DRIVER = 1
    TWO_WIRE = 2
    THREE_WIRE = 3
    FOUR_WIRE = 4

class StepperStepSize:
    WHOLE = 0
    HALF = 1

class StepperDirection:
    CCW = 0
    CW = 1

class dotdict(dict):
    """Provides `dot.notation` access to dictionary attributes

    This class provides convenience access to dictionary data, specifically
    used for the firmware, version, resolution and settings records kept by a
    board so that application code can write `board.firmware.name` instead of
    `board.firmware["name"]`. This implementation comes, as so so many
    wonderful things, from StackOverflow:

    http://stackoverflow.com/questions/2352181/how-to-use-a-dot-to-access-members-of-dictionary
    """

    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__
