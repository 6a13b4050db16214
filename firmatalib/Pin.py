from .common import *
from .Exceptions import *

class Pin:
    """State of a single addressable pin on the board.

    Pins are created when the board learns how many it has, either from a
    capability response or from configuration when capability discovery is
    skipped. Capability responses update existing pin objects in place, so
    references held by the application stay valid after rediscovery."""

    NOT_ANALOG = 127

    # keys accepted in a pin record given as a dict
    FIELDS = (
        "supported_modes", "mode", "value", "state", "report", "analog_channel",
        "analog_resolution", "pwm_resolution", "servo_resolution",
    )

    def __init__(self, supported_modes=None, analog_channel=NOT_ANALOG):
        """Creates a new pin record.

        :param supported_modes: Mode ids this pin supports
        :type supported_modes: list

        :param analog_channel: Analog channel number, or 127 if the pin has no
            analog input
        :type analog_channel: int
        """

        # these attributes are updated from board replies and by the board's
        # own write operations
        self.supported_modes = list(supported_modes) if supported_modes is not None else []
        self.mode = None
        self.value = 0
        self.state = None
        self.report = 1
        self.analog_channel = analog_channel
        self.analog_resolution = None
        self.pwm_resolution = None
        self.servo_resolution = None

    @classmethod
    def from_record(cls, record):
        """Creates a pin from a dict of its attributes.

        :param record: Attribute values keyed by name, any subset of
            `Pin.FIELDS`
        :type record: dict

        :returns: New pin with the given attributes set
        :rtype: Pin

        :raises FirmataConfigurationException: if the record has a key that is
            not a pin attribute
        """

        unknown = [key for key in record if key not in cls.FIELDS]
        if unknown:
            raise FirmataConfigurationException("Unknown pin attribute(s): %s" % ", ".join(sorted(unknown)))

        pin = cls()
        for key, value in record.items():
            setattr(pin, key, list(value) if key == "supported_modes" else value)
        return pin

    def __str__(self):
        return "pin (mode %s, value %s, channel %s)" % (self.mode, self.value, self.analog_channel)

    def supports(self, mode) -> bool:
        return mode in self.supported_modes

    def apply_capabilities(self, capabilities) -> None:
        """Replaces supported modes and resolutions from a capability listing.

        :param capabilities: Pairs of (mode, resolution bits) for this pin
        :type capabilities: list

        Modes the board does not recognise are skipped. Resolutions for modes
        that are not listed are cleared, so applying the same listing twice
        leaves the pin unchanged."""

        known_modes = Mode.all()
        self.supported_modes = [mode for mode, resolution in capabilities if mode in known_modes]

        resolutions = dict(capabilities)
        self.analog_resolution = resolutions.get(Mode.ANALOG)
        self.pwm_resolution = resolutions.get(Mode.PWM)
        self.servo_resolution = resolutions.get(Mode.SERVO)
