from .common import *
from .Exceptions import *
from .FirmataProtocol import *

class I2C:
    """I2C master requests passed through the board.

    Every request is an I2C_REQUEST SysEx message addressed to one 7-bit
    peripheral address. Replies carry the address and register they answer,
    so subscribers are keyed by address (and register) rather than by any
    request id; a reply for one peripheral never reaches another's
    subscribers.

    The firmware must be told to start its I2C bus before anything else, so
    every request made before `configure()` raises."""

    def __init__(self, board):
        """Creates the I2C interface of a board.

        :param board: Board this interface sends through
        :type board: Board
        """

        # these attributes should only be read externally, not written
        self.board = board
        self.is_configured = False
        self.delay = 0
        self.peripherals = {}

    def configure(self, delay=None, address=None, settings=None):
        """Enables I2C on the board and optionally records peripheral settings.

        :param delay: Microseconds the firmware waits between writing a
            register and reading it back
        :type delay: int

        :param address: Peripheral address the settings apply to, if any
        :type address: int

        :param settings: Extra keys to store for the peripheral; `stop_tx`
            (default `True`) controls whether the bus is released between the
            register write and the read
        :type settings: dict

        :returns: This interface, so calls may be chained
        :rtype: I2C

        Settings for an address are overwritten key by key on every call, so
        the last value given wins. The board-wide delay is always replaced
        and sent to the firmware."""

        self.is_configured = True

        if address is not None:
            peripheral = self._peripheral(address)
            if settings is not None:
                peripheral.update(settings)

        delay = int(delay) if delay else 0
        self.delay = delay
        self._request([
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.I2C_CONFIG,
            delay & 0x7F, (delay >> 7) & 0x7F,
            FirmataProtocol.END_SYSEX,
        ])

        return self

    def write(self, address, register_or_data, data=None):
        """Writes bytes to a peripheral.

        :param address: Peripheral address
        :type address: int

        :param register_or_data: Register number, or a list whose first item
            is the register and whose remaining items are the data
        :type register_or_data: int

        :param data: Bytes to write after the register; a single integer here
            is handled by `write_register()`
        :type data: list

        :returns: This interface, so calls may be chained
        :rtype: I2C
        """

        if data is not None and not isinstance(data, (list, tuple, bytes, bytearray)):
            return self.write_register(address, register_or_data, data)

        if data is None:
            if isinstance(register_or_data, (list, tuple, bytes, bytearray)):
                payload = list(register_or_data)
            else:
                payload = [register_or_data]
        else:
            payload = [register_or_data] + list(data)

        message = [
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.I2C_REQUEST,
            address,
            I2CMode.WRITE << 3,
        ]
        for byte in payload:
            message.append(byte & 0x7F)
            message.append((byte >> 7) & 0x7F)
        message.append(FirmataProtocol.END_SYSEX)

        self._request(message)
        return self

    def write_register(self, address, register, byte):
        """Writes a single byte to one register of a peripheral.

        :returns: This interface, so calls may be chained
        :rtype: I2C
        """

        self._request([
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.I2C_REQUEST,
            address,
            I2CMode.WRITE << 3,
            register & 0x7F, (register >> 7) & 0x7F,
            byte & 0x7F, (byte >> 7) & 0x7F,
            FirmataProtocol.END_SYSEX,
        ])
        return self

    def read(self, address, register, length, callback):
        """Starts continuous reads from a peripheral.

        :param address: Peripheral address
        :type address: int

        :param register: Register to read from, or `None` to read without
            writing a register first
        :type register: int

        :param length: Number of bytes to read each time
        :type length: int

        :param callback: Function called with a list of bytes for every reply
        :type callback: callable

        :returns: This interface, so calls may be chained
        :rtype: I2C

        The firmware keeps sampling until `stop()` is called for the same
        address, and the callback stays subscribed until then."""

        event = self._read(I2CMode.CONTINUOUS_READ, address, register, length)
        self.board.on(event, callback)
        return self

    def read_once(self, address, register, length, callback):
        """Reads from a peripheral once.

        Arguments are the same as for `read()`. The callback is called for
        the first matching reply only."""

        event = self._read(I2CMode.READ, address, register, length)
        self.board.once(event, callback)
        return self

    def stop(self, address):
        """Stops continuous reads from a peripheral.

        :param address: Peripheral address, or `None` to do nothing
        :type address: int

        Every reply subscription for the address is removed as well, whatever
        register it was made for. Like every request it raises before
        `configure()`."""

        if address is None:
            return self

        self._request([
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.I2C_REQUEST,
            address,
            I2CMode.STOP_READING << 3,
            FirmataProtocol.END_SYSEX,
        ])

        prefix = "I2C-reply-%d" % address
        for event in self.board.event_names():
            if event == prefix or event.startswith(prefix + "-"):
                self.board.remove_all_listeners(event)

        return self

    def handle_reply(self, packet):
        """Dispatches an I2C_REPLY message to its subscribers.

        :param packet: Complete reply message
        :type packet: FirmataPacket

        Both `I2C-reply-<address>-<register>` and `I2C-reply-<address>` are
        emitted with the list of data bytes."""

        if len(packet) < 7:
            raise FirmataProtocolException("Truncated I2C reply (%d bytes)" % len(packet))

        address = packet.word(2)
        register = packet.word(4)
        data = [packet.word(i) for i in range(6, len(packet) - 2, 2)]

        self.board.emit("I2C-reply-%d-%d" % (address, register), data)
        self.board.emit("I2C-reply-%d" % address, data)

    def _read(self, mode, address, register, length) -> str:
        message = [
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.I2C_REQUEST,
            address,
            mode << 3,
        ]

        if register is not None:
            message.append(register & 0x7F)
            message.append((register >> 7) & 0x7F)
        else:
            register = 0

        message.append(length & 0x7F)
        message.append((length >> 7) & 0x7F)
        message.append(FirmataProtocol.END_SYSEX)

        self._request(message)
        return "I2C-reply-%d-%d" % (address, register)

    def _peripheral(self, address):
        if address not in self.peripherals:
            self.peripherals[address] = dotdict(stop_tx=True)
        return self.peripherals[address]

    def _request(self, message):
        if not self.is_configured:
            raise FirmataConfigurationException("I2C is not enabled for this board, call i2c.configure() first")

        if message[1] == FirmataProtocol.I2C_REQUEST:
            peripheral = self._peripheral(message[2])

            # READ or CONTINUOUS_READ only; bit 6 set keeps the transmission open
            mode = message[3] & FirmataProtocol.I2C_READ_MASK
            if mode in (I2CMode.READ << 3, I2CMode.CONTINUOUS_READ << 3) and not peripheral.stop_tx:
                message[3] |= FirmataProtocol.I2C_END_TX_MASK

        self.board.write(message)
