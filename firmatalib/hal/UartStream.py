import logging

import serial

from ..Stream import *

logger = logging.getLogger(__name__)

class UartStream(Stream):
    """Serial stream class providing a bidirectional data stream to a board.

    This class allows reading to and writing from a serial port, using PySerial
    as the low-level driver. Firmata boards conventionally run at 57600 baud."""

    DEFAULT_BAUDRATE = 57600

    def __init__(self, port=None, baudrate=DEFAULT_BAUDRATE, parser=None):
        """Initializes a serial stream instance.

        :param port: Either a device name such as `/dev/ttyACM0` or an
            existing (possibly unopened) `serial.Serial` object
        :type port: str

        :param baudrate: Serial speed used when a device name is given
        :type baudrate: int

        :param parser: Parser which received data is sent to, if any
        :type parser: FirmataParser

        The port is not opened here. Call `open()` directly, or let a `Board`
        do it when the stream is handed over."""

        super().__init__(parser=parser)

        # these attributes may be updated by the application
        self.port_info = None
        if isinstance(port, str):
            self.port = serial.Serial()
            self.port.port = port
            self.port.baudrate = baudrate
        else:
            self.port = port

        # these attributes are intended to be private
        self._port_open = False

    def __str__(self):
        """Generates the string representation of the serial stream.

        :returns: String representation of the stream
        :rtype: str
        """

        if self.port_info is not None:
            return self.port_info.device
        if self.port is not None and self.port.port is not None:
            return self.port.port
        return "unidentified stream"

    def open(self) -> bool:
        """Opens the serial stream.

        :returns: Status of open attempt
        :rtype: bool

        This opens the serial port if it is not already open. A failure is
        reported through the `on_error` callback rather than raised."""

        # don't start if we're already running
        if not self.is_open:
            try:
                if not self.port.is_open:
                    self.port.open()
                    self._port_open = True
                self._on_open()
            except serial.serialutil.SerialException as e:
                logger.warning("Unable to open %s: %s", self, e)
                self._on_error(e)

        return self.is_open

    def close(self) -> bool:
        """Closes the serial stream.

        :returns: Status of close attempt
        :rtype: bool

        This closes the serial port if it is currently open."""

        # don't close if we're not open
        if self.is_open:
            # trigger appropriate closure/disconnection callbacks
            self._cleanup_port_closure()
            return True

        # already closed if we got here
        return False

    def write(self, data) -> int:
        """Writes data to the serial stream.

        :param data: Data buffer to be sent out to the stream
        :type data: bytes

        :returns: Number of bytes written to the stream, or `False` if the
            write failed
        :rtype: int

        The data argument should be a `bytes()` object, or something that can
        be transparently converted to a `bytes()` object such as a list of
        integers. A failed write is reported through the `on_error` callback."""

        data = bytes(data)
        if self.on_tx_data is not None:
            # trigger application callback
            self.on_tx_data(data, self)

        try:
            result = self.port.write(data)
        except serial.serialutil.SerialException as e:
            logger.warning("Write to %s failed: %s", self, e)
            self._on_error(e)
            result = False

        return result

    def process(self, mode=ProcessMode.BOTH, force=False) -> None:
        """Handle any pending events or data waiting to be processed.

        :param mode: Processing mode defining whether to run for this object,
            the attached parser, or both
        :type mode: int

        :param force: Whether to force processing to run regardless of elapsed
            time since last time (if applicable)
        :type force: bool

        This method must be executed inside of a constant event loop. It reads
        everything currently waiting on the port and hands it to the parser."""

        try:
            # check for available data
            if mode in [ProcessMode.SELF, ProcessMode.BOTH] \
                    and self.is_open \
                    and self.port.is_open \
                    and self.port.in_waiting != 0:
                # read all available data
                data = self.port.read(self.port.in_waiting)

                # pass data to internal receive callback
                self._on_rx_data(data)

            # allow associated parser to drain anything queued
            if mode in [ProcessMode.BOTH, ProcessMode.SUBS]:
                if self.parser is not None:
                    self.parser.process()

        except (OSError, serial.serialutil.SerialException) as e:
            # read failed, probably port closed or device removed
            logger.warning("Read from %s failed: %s", self, e)
            self._on_error(e)
            self._cleanup_port_closure()

    def _cleanup_port_closure(self) -> None:
        """Handle a closed port cleanly.

        A serial port may close due to device removal (unexpected) or due to
        stream closure (expected). In either case the stream is marked closed
        here, and in the case of an unexpected closure the disconnection
        callback is triggered as well."""

        # mark data stream publicly closed
        self._on_close()

        # close the port now if necessary (indicates device removal if so)
        if self._port_open:
            try:
                # might fail if the underlying port is already gone
                self.port.close()
            except (OSError, serial.serialutil.SerialException) as e:
                logger.debug("Port %s already gone: %s", self, e)
                self._on_disconnect()
            finally:
                # mark port privately closed
                self._port_open = False
