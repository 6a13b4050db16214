from .common import *
from .Exceptions import *

class Stream:
    """Base stream class for the transport under a Firmata board.

    A stream moves raw bytes to and from the board and knows nothing about
    message framing. Received chunks go to the attached parser, and lifecycle
    changes (open, close, disconnect, errors) are reported through callbacks
    which the owning `Board` assigns when it is constructed.

    This class should not be used directly, but rather used as a base for child
    classes that use specific low-level communication drivers. As a minimum, a
    child class must implement the `open()`, `close()`, `write()`, and
    `process()` methods."""

    def __init__(self, parser=None):
        """Initializes a stream instance.

        :param parser: Parser object which this stream sends received data
            through, if one exists
        :type parser: FirmataParser

        The parser may be supplied at instantiation, or later if required. A
        board attaches its own parser to the stream it is given."""

        # these attributes may be updated by the application
        self.parser = parser
        self.on_open_stream = None
        self.on_close_stream = None
        self.on_disconnect_stream = None
        self.on_error = None
        self.on_rx_data = None
        self.on_tx_data = None

        # these attributes should only be read externally, not written
        self.is_open = False

    def __str__(self):
        return "unidentified stream"

    def open(self):
        """Opens the stream.

        Since no driver is inherent in the base class, you *must* override this
        method in child classes so that a suitable action occurs. Opening a
        stream driven by nothing at all will generate an exception."""

        # child class must implement
        raise FirmataHalException("Child class has not implemented open() method, cannot use base class stub")

    def close(self):
        """Closes the stream.

        Since no driver is inherent in the base class, you *must* override this
        method in child classes so that a suitable action occurs. Closing a
        stream driven by nothing at all will generate an exception."""

        # child class must implement
        raise FirmataHalException("Child class has not implemented close() method, cannot use base class stub")

    def write(self, data):
        """Sends outgoing data to the stream.

        :param data: Data buffer to be sent out to the stream
        :type data: bytes

        Since no driver is inherent in the base class, you *must* override this
        method in child classes so that a suitable action occurs. Writing data
        to a stream driven by nothing at all will generate an exception."""

        # child class must implement
        raise FirmataHalException("Child class has not implemented write() method, cannot use base class stub")

    def process(self, mode=ProcessMode.BOTH, force=False):
        """Handle any pending events or data waiting to be processed.

        :param mode: Processing mode defining whether to run for this object,
            the attached parser, or both
        :type mode: int

        :param force: Whether to force processing to run regardless of elapsed
            time since last time (if applicable)
        :type force: bool

        Since no driver is inherent in the base class, you *must* override this
        method in child classes so that a suitable action occurs. Processing a
        stream driven by nothing at all will generate an exception."""

        # child class must implement
        raise FirmataHalException("Child class has not implemented process() method, cannot use base class stub")

    def _on_open(self):
        self.is_open = True
        if self.on_open_stream is not None:
            self.on_open_stream(self)

    def _on_close(self):
        self.is_open = False
        if self.on_close_stream is not None:
            self.on_close_stream(self)

    def _on_disconnect(self):
        if self.on_disconnect_stream is not None:
            self.on_disconnect_stream(self)

    def _on_error(self, error):
        if self.on_error is not None:
            self.on_error(error, self)

    def _on_rx_data(self, data):
        """Handles incoming data.

        :param data: Data buffer that has just been received
        :type data: bytes

        When the driver receives any data (one or more bytes), that chunk is
        passed to this method. The application-level data RX callback runs
        first, and unless it returns `False` the chunk is parsed immediately
        by the attached parser."""

        # child class may re-implement
        run_builtin = True
        if self.on_rx_data:
            run_builtin = self.on_rx_data(data, self)

        if run_builtin != False:
            # parse automatically if we have a parser attached
            if self.parser is not None:
                self.parser.parse(data)
