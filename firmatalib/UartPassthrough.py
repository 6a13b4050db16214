from .common import *
from .Exceptions import *
from .FirmataProtocol import *

class UartPassthrough:
    """Serial ports on the board, driven through SERIAL_MESSAGE requests.

    Port ids 0-3 are hardware UARTs and ids 8 and above are software serial
    ports. Software ports are bit-banged on ordinary pins, so they need an RX
    and a TX pin when configured, and only one of them can receive at a time
    (see `listen()`).

    Data read from a port arrives as `serial-data-<port>` events carrying a
    list of bytes."""

    DEFAULT_BAUD = 57600
    MAX_PORT_ID = 0x0F

    def __init__(self, board):
        # these attributes should only be read externally, not written
        self.board = board

    def configure(self, port_id=None, baud=DEFAULT_BAUD, rx_pin=None, tx_pin=None):
        """Opens a serial port on the board.

        :param port_id: Port id, from `SerialPortId`
        :type port_id: int

        :param baud: Baud rate
        :type baud: int

        :param rx_pin: Receive pin, required for software ports
        :type rx_pin: int

        :param tx_pin: Transmit pin, required for software ports
        :type tx_pin: int
        """

        if port_id is None:
            raise FirmataConfigurationException("Serial port_id must be specified")
        self._check_port(port_id)

        message = [
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.SERIAL_MESSAGE,
            FirmataProtocol.SERIAL_CONFIG | port_id,
            baud & 0x7F,
            (baud >> 7) & 0x7F,
            (baud >> 14) & 0x7F,
        ]

        if port_id > 7:
            if rx_pin is None or tx_pin is None:
                raise FirmataConfigurationException("Both rx_pin and tx_pin must be specified for software serial port %d" % port_id)
            message.append(rx_pin)
            message.append(tx_pin)

        message.append(FirmataProtocol.END_SYSEX)
        self.board.write(message)

    def write(self, port_id, data):
        """Writes bytes out of a serial port.

        :param port_id: Port id
        :type port_id: int

        :param data: Bytes to send
        :type data: list
        """

        self._check_port(port_id)
        message = [
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.SERIAL_MESSAGE,
            FirmataProtocol.SERIAL_WRITE | port_id,
        ]
        for byte in data:
            message.append(byte & 0x7F)
            message.append((byte >> 7) & 0x7F)
        message.append(FirmataProtocol.END_SYSEX)
        self.board.write(message)

    def read(self, port_id, callback, max_bytes=None):
        """Starts continuous reading from a serial port.

        :param port_id: Port id
        :type port_id: int

        :param callback: Function called with a list of bytes for each reply
        :type callback: callable

        :param max_bytes: Most bytes the firmware sends per reply, or `None`
            for no limit
        :type max_bytes: int

        The callback stays subscribed until `stop()` is called for the port."""

        self._check_port(port_id)
        message = [
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.SERIAL_MESSAGE,
            FirmataProtocol.SERIAL_READ | port_id,
            SerialMode.CONTINUOUS_READ,
        ]

        if max_bytes:
            message.append(max_bytes & 0x7F)
            message.append((max_bytes >> 7) & 0x7F)

        message.append(FirmataProtocol.END_SYSEX)
        self.board.write(message)
        self.board.on("serial-data-%d" % port_id, callback)

    def stop(self, port_id):
        """Stops reading from a serial port and drops its subscribers."""

        self._check_port(port_id)
        self.board.write([
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.SERIAL_MESSAGE,
            FirmataProtocol.SERIAL_READ | port_id,
            SerialMode.STOP_READING,
            FirmataProtocol.END_SYSEX,
        ])
        self.board.remove_all_listeners("serial-data-%d" % port_id)

    def close(self, port_id):
        self._send_mode(FirmataProtocol.SERIAL_CLOSE, port_id)

    def flush(self, port_id):
        self._send_mode(FirmataProtocol.SERIAL_FLUSH, port_id)

    def listen(self, port_id):
        """Makes a software serial port the one that receives data.

        Hardware ports receive independently, so this does nothing for
        them."""

        if port_id < 8:
            return
        self._send_mode(FirmataProtocol.SERIAL_LISTEN, port_id)

    def handle_reply(self, packet):
        """Emits the data carried by a SERIAL_REPLY message.

        :param packet: Complete SERIAL_MESSAGE message
        :type packet: FirmataPacket

        Other SERIAL_MESSAGE sub-commands are ignored."""

        if len(packet) < 4:
            return

        command = packet[2] & 0xF0
        port_id = packet[2] & 0x0F

        if command == FirmataProtocol.SERIAL_REPLY:
            data = [packet.word(i) for i in range(3, len(packet) - 2, 2)]
            self.board.emit("serial-data-%d" % port_id, data)

    def _check_port(self, port_id):
        # the id shares its byte with the sub-command, so it must fit the low nibble
        if port_id < 0 or port_id > self.MAX_PORT_ID:
            raise FirmataConfigurationException("Invalid serial port id %d, must be 0 to %d" % (port_id, self.MAX_PORT_ID))

    def _send_mode(self, mode, port_id):
        self._check_port(port_id)
        self.board.write([
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.SERIAL_MESSAGE,
            mode | port_id,
            FirmataProtocol.END_SYSEX,
        ])
