from .common import *
from .Encoding import *
from .Exceptions import *
from .FirmataProtocol import *
from .OneWireUtils import *

class OneWire:
    """OneWire bus master requests passed through the board.

    A request is a 16-byte header (device id, bytes to read, correlation id,
    delay) followed by any bytes to write, packed into 7-bit form. Requests
    that read data carry a correlation id which the firmware echoes in its
    reply, and the reply is matched to its callback by that id alone.

    Nothing here times out. If a device never answers, its callback is never
    called and its correlation id stays reserved."""

    HEADER_LENGTH = 16
    MAX_CORRELATION_ID = 0xFFFF

    def __init__(self, board):
        # these attributes should only be read externally, not written
        self.board = board
        self.pending = {}

        # these attributes are intended to be private
        self._last_correlation_id = 0

    def configure(self, pin, parasitic_power=False):
        """Sets up a pin as a OneWire bus.

        :param pin: Pin the bus is attached to
        :type pin: int

        :param parasitic_power: Whether to hold the line high after writes to
            power devices without a supply line
        :type parasitic_power: bool
        """

        self.board.write([
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.ONEWIRE_DATA,
            FirmataProtocol.ONEWIRE_CONFIG_REQUEST,
            pin,
            0x01 if parasitic_power else 0x00,
            FirmataProtocol.END_SYSEX,
        ])

    def search(self, pin, callback):
        """Lists the devices on a bus.

        :param pin: Pin the bus is attached to
        :type pin: int

        :param callback: Function called with a list of 8-byte device ids
        :type callback: callable
        """

        self._search(FirmataProtocol.ONEWIRE_SEARCH_REQUEST, "1-wire-search-reply-%d" % pin, pin, callback)

    def search_alarms(self, pin, callback):
        """Lists the devices on a bus that are in an alarm state.

        Arguments are the same as for `search()`."""

        self._search(FirmataProtocol.ONEWIRE_SEARCH_ALARMS_REQUEST, "1-wire-search-alarms-reply-%d" % pin, pin, callback)

    def reset(self, pin):
        self._send_request(pin, FirmataProtocol.ONEWIRE_RESET_REQUEST_BIT)

    def delay(self, pin, microseconds):
        self._send_request(pin, FirmataProtocol.ONEWIRE_DELAY_REQUEST_BIT, delay=microseconds)

    def write(self, pin, device, data):
        """Selects a device and writes bytes to it.

        :param pin: Pin the bus is attached to
        :type pin: int

        :param device: 8-byte device id
        :type device: list

        :param data: A byte or list of bytes to write
        :type data: list
        """

        self._send_request(pin, FirmataProtocol.ONEWIRE_WRITE_REQUEST_BIT, device=device, data=self._as_list(data))

    def read(self, pin, device, length, callback) -> int:
        """Selects a device and reads bytes from it.

        :param pin: Pin the bus is attached to
        :type pin: int

        :param device: 8-byte device id
        :type device: list

        :param length: Number of bytes to read
        :type length: int

        :param callback: Function called with the list of bytes read
        :type callback: callable

        :returns: Correlation id of the request
        :rtype: int
        """

        correlation_id = self._next_correlation_id()
        self._send_request(pin, FirmataProtocol.ONEWIRE_READ_REQUEST_BIT,
                device=device, length=length, correlation_id=correlation_id)
        self.pending[correlation_id] = callback
        return correlation_id

    def write_and_read(self, pin, device, data, length, callback) -> int:
        """Selects a device, writes bytes to it, then reads its answer.

        :returns: Correlation id of the request
        :rtype: int

        This is the usual way to issue a command to a OneWire device and
        collect the result in a single bus transaction."""

        correlation_id = self._next_correlation_id()
        self._send_request(pin, FirmataProtocol.ONEWIRE_WRITE_REQUEST_BIT | FirmataProtocol.ONEWIRE_READ_REQUEST_BIT,
                device=device, length=length, correlation_id=correlation_id, data=self._as_list(data))
        self.pending[correlation_id] = callback
        return correlation_id

    def handle_reply(self, packet):
        """Dispatches a ONEWIRE_DATA reply by its sub-command.

        :param packet: Complete reply message
        :type packet: FirmataPacket

        Unknown sub-commands are ignored."""

        if len(packet) < 4:
            return

        subcommand = packet[2]
        if subcommand == FirmataProtocol.ONEWIRE_SEARCH_REPLY:
            self.board.emit("1-wire-search-reply-%d" % packet[3], OneWireUtils.read_devices(packet[4:-1]))
        elif subcommand == FirmataProtocol.ONEWIRE_SEARCH_ALARMS_REPLY:
            self.board.emit("1-wire-search-alarms-reply-%d" % packet[3], OneWireUtils.read_devices(packet[4:-1]))
        elif subcommand == FirmataProtocol.ONEWIRE_READ_REPLY:
            self._handle_read_reply(packet)

    def _handle_read_reply(self, packet):
        decoded = Encoding.from_7bit_array(packet[4:-1])
        if len(decoded) < 2:
            raise FirmataProtocolException("OneWire read reply has no correlation id")

        correlation_id = (decoded[1] << 8) | decoded[0]
        data = decoded[2:]

        callback = self.pending.pop(correlation_id, None)
        if callback is not None:
            callback(data)

        self.board.emit("1-wire-read-reply-%d" % correlation_id, data)

    def _search(self, subcommand, event, pin, callback):
        self.board.write([FirmataProtocol.START_SYSEX, FirmataProtocol.ONEWIRE_DATA, subcommand, pin, FirmataProtocol.END_SYSEX])
        self.board.once(event, callback)

    def _next_correlation_id(self) -> int:
        if len(self.pending) >= self.MAX_CORRELATION_ID:
            raise FirmataConfigurationException("Too many OneWire reads awaiting a reply")

        # ids run 1..0xFFFF and skip any still awaiting a reply
        correlation_id = self._last_correlation_id
        while True:
            correlation_id = correlation_id % self.MAX_CORRELATION_ID + 1
            if correlation_id not in self.pending:
                break

        self._last_correlation_id = correlation_id
        return correlation_id

    def _send_request(self, pin, subcommand, device=None, length=None, correlation_id=None, delay=None, data=None):
        header = [0] * self.HEADER_LENGTH

        if device or length or correlation_id or delay or data:
            subcommand |= FirmataProtocol.ONEWIRE_WITHDATA_REQUEST_BITS

        if device:
            if len(device) != OneWireUtils.ROM_LENGTH:
                raise FirmataConfigurationException("OneWire device id must be %d bytes" % OneWireUtils.ROM_LENGTH)
            header[0:8] = list(device)

        if length:
            header[8] = length & 0xFF
            header[9] = (length >> 8) & 0xFF

        if correlation_id:
            header[10] = correlation_id & 0xFF
            header[11] = (correlation_id >> 8) & 0xFF

        if delay:
            header[12] = delay & 0xFF
            header[13] = (delay >> 8) & 0xFF
            header[14] = (delay >> 16) & 0xFF
            header[15] = (delay >> 24) & 0xFF

        if data:
            header.extend(data)

        message = [FirmataProtocol.START_SYSEX, FirmataProtocol.ONEWIRE_DATA, subcommand, pin]
        message.extend(Encoding.to_7bit_array(header))
        message.append(FirmataProtocol.END_SYSEX)
        self.board.write(message)

    @staticmethod
    def _as_list(data):
        if isinstance(data, int):
            return [data]
        return list(data)
