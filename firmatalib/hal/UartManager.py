import re

import serial.tools.list_ports

from .UartStream import *
from ..Exceptions import *

class UartManager:
    """Serial port discovery helper for Firmata boards.

    Most Firmata hardware shows up as a USB serial device. This class scans
    the ports PySerial reports, keeps the ones that look like a board, and
    builds a ready-to-open `UartStream` for one of them. Nothing is opened or
    monitored here; the resulting stream is handed to a `Board`."""

    ACCEPTABLE_PORT = re.compile(r'usb|acm|^com', re.IGNORECASE)

    def __init__(self, baudrate=UartStream.DEFAULT_BAUDRATE):
        # these attributes may be updated by the application
        self.baudrate = baudrate
        self.port_info_filter = None

    @classmethod
    def is_acceptable_port(cls, port_info) -> bool:
        """Tests whether a port looks like a Firmata board.

        :param port_info: Port record from `serial.tools.list_ports`
        :type port_info: ListPortInfo

        :returns: Whether the device name matches a USB, ACM or COM port
        :rtype: bool
        """

        return cls.ACCEPTABLE_PORT.search(port_info.device) is not None

    def get_acceptable_ports(self) -> list:
        """Gets every connected port that passes the port filter.

        :returns: Port records, in the order PySerial lists them
        :rtype: list

        The application may assign `port_info_filter` to replace the default
        name test with its own."""

        port_filter = self.port_info_filter if self.port_info_filter is not None else self.is_acceptable_port
        return [port_info for port_info in serial.tools.list_ports.comports() if port_filter(port_info)]

    def request_port(self):
        """Picks the first acceptable port.

        :returns: Port record
        :rtype: ListPortInfo

        :raises FirmataHalException: if no connected port is acceptable
        """

        ports = self.get_acceptable_ports()
        if len(ports) == 0:
            raise FirmataHalException("No acceptable serial port found")

        return ports[0]

    def create_stream(self, port_info=None) -> UartStream:
        """Builds an unopened stream for a port.

        :param port_info: Port record, or `None` to use `request_port()`
        :type port_info: ListPortInfo

        :returns: Stream bound to the port at this manager's baud rate
        :rtype: UartStream
        """

        if port_info is None:
            port_info = self.request_port()

        stream = UartStream(port_info.device, baudrate=self.baudrate)
        stream.port_info = port_info
        return stream
