import collections
import logging

from .Exceptions import *
from .FirmataProtocol import *

logger = logging.getLogger(__name__)

class FirmataParser:
    """Incremental parser for the Firmata byte stream.

    This class reconstructs complete Firmata messages from incoming data that
    may arrive in chunks of any size, from single bytes to thousands at once.
    Each byte is appended to a working buffer and the protocol's boundary
    tests decide after every byte whether a message has started, is still in
    progress, is complete, or must be dropped.

    Exactly one message is held per buffer cycle: once a message completes it
    is handed to the `on_rx_packet` callback and the buffer is cleared before
    the next byte is examined, so several messages in one chunk are handled in
    order without ever splitting the chunk up front."""

    def __init__(self, protocol_class=FirmataProtocol, stream=None, board=None):
        """Creates a new parser instance.

        :param protocol_class: Protocol definition used for boundary tests
        :type protocol_class: FirmataProtocol

        :param stream: Stream feeding this parser, if any
        :type stream: Stream

        :param board: Board that owns this parser, if any
        :type board: Board

        A parser can be used on its own by feeding it bytes and assigning an
        `on_rx_packet` callback, but it is normally created by a `Board`,
        which attaches it to its stream and dispatches every packet."""

        # these attributes may be updated by the application
        self.protocol_class = protocol_class
        self.stream = stream
        self.board = board
        self.on_rx_packet = None
        self.on_rx_error = None

        # these attributes should only be read externally, not written
        self.last_rx_packet = None
        self.rx_deque = collections.deque()

        # reset the parser explicitly
        self.reset()

    def __str__(self):
        """Generates the string representation of the parser.

        This simple implementation includes the string representation of the
        stream if one is attached, or else a generic description."""

        if self.stream is not None:
            return "parser on %s" % self.stream
        else:
            return "parser on unidentified stream"

    def reset(self):
        """Resets the parser to an idle/empty state.

        After a message is parsed, or when a partial message is abandoned,
        this clears the working buffer so the next byte is tested as a
        possible message start."""

        self.rx_buffer = b''
        self.parser_status = ParseStatus.IDLE

    def queue(self, input_data):
        """Add data to the RX queue for later processing.

        :param input_data: Byte buffer to append to the parse queue
        :type input_data: bytes

        Queued data is not parsed until `process()` is called, either by the
        application or by the board's event loop."""

        if isinstance(input_data, (int,)):
            # given a single integer, so convert it to bytes first
            input_data = bytes([input_data])
        elif isinstance(input_data, (list,)):
            # given a list, so convert it to bytes first
            input_data = bytes(input_data)

        # add new data to queue
        self.rx_deque.extend(input_data)

    def parse(self, input_data):
        """Parse one or more bytes of incoming data.

        :param input_data: Data to parse immediately
        :type input_data: bytes

        :returns: The packet completed by the last byte, if any
        :rtype: FirmataPacket

        This accepts a `bytes()` or `bytearray()` object, a list of integers,
        or a single integer, and passes the data one byte at a time to
        `parse_byte()`."""

        if isinstance(input_data, (int,)):
            return self.parse_byte(input_data)
        elif isinstance(input_data, (list,)):
            # given a list, so convert it to bytes first
            input_data = bytes(input_data)

        result = None
        for input_byte_as_int in input_data:
            result = self.parse_byte(input_byte_as_int)

        # send back the last result (useful for parsing complete packets)
        return result

    def parse_byte(self, input_byte_as_int):
        """Parse a byte of data according to the protocol definition.

        :param input_byte_as_int: Single byte to parse
        :type input_byte_as_int: int

        :returns: The packet completed by this byte, if any
        :rtype: FirmataPacket

        While idle, the byte is tested as a message start and dropped if it
        cannot be one. While a message is in progress, the byte is tested for
        completion. If the protocol abandons an unfinished SysEx because a
        status byte arrived, that byte is parsed again as a new start.

        Malformed data never raises from here. If a packet handler raises
        `FirmataProtocolException`, the error goes to the `on_rx_error`
        callback and parsing continues."""

        self.rx_buffer += bytes([input_byte_as_int])

        if self.parser_status == ParseStatus.IDLE:
            # not already in a packet, so run through start boundary test function
            self.parser_status = self.protocol_class.test_packet_start(self.rx_buffer, self)

            if self.parser_status == ParseStatus.IDLE:
                # junk between messages, e.g. line noise while the board resets
                logger.debug("Discarding byte 0x%02X outside of any message", input_byte_as_int)
                self.reset()
                return None

        if self.parser_status == ParseStatus.IN_PROGRESS:
            self.parser_status = self.protocol_class.test_packet_complete(self.rx_buffer, self)

            if self.parser_status == ParseStatus.IDLE:
                logger.debug("Abandoning partial message [ %s ]", ' '.join(["%02X" % b for b in self.rx_buffer[:-1]]))
                self.reset()
                return self.parse_byte(input_byte_as_int)

        if self.parser_status == ParseStatus.COMPLETE:
            # convert the buffer to a packet
            self.last_rx_packet = self.protocol_class.get_packet_from_buffer(self.rx_buffer, self)

            # reset the parser before dispatch so handlers may feed new data
            self.reset()

            try:
                if self.on_rx_packet is not None:
                    # pass packet to receive callback
                    self.on_rx_packet(self.last_rx_packet)
            except FirmataProtocolException as e:
                if self.on_rx_error is not None:
                    self.on_rx_error(e, self.last_rx_packet.buffer, self)
                else:
                    logger.warning("Dropped malformed %s: %s", self.last_rx_packet, e)

            return self.last_rx_packet

        # if we haven't already returned, we have nothing to return
        return None

    def process(self):
        """Parse any data waiting in the RX queue.

        This method should be called from the application's event loop when
        data is delivered through `queue()` rather than `parse()`."""

        while len(self.rx_deque) > 0:
            self.parse_byte(self.rx_deque.popleft())
