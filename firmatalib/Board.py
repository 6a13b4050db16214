import logging
import time

from .common import *
from .Exceptions import *
from .Emitter import *
from .Encoding import *
from .FirmataProtocol import *
from .FirmataParser import *
from .Pin import *
from .I2C import *
from .OneWire import *
from .UartPassthrough import *
from .Stepper import *
from .AccelStepper import *

logger = logging.getLogger(__name__)

class Board(Emitter):
    """Host-side state and control of one board running Firmata.

    A board wraps a stream (the transport) and a parser. Incoming messages are
    dispatched through two handler tables owned by this instance, one keyed
    by MIDI status byte and one keyed by SysEx sub-command, which update the
    pin model and emit events for the application. Outgoing requests are
    built by the methods here and by the sub-protocol objects hanging off the
    board: `i2c`, `onewire`, `serial`, `stepper` and `accel_stepper`.

    Nothing is dispatched until the board has reported its protocol version
    once. A board that was already running when the host connected may be
    streaming analog or I2C data, and that data is dropped until then.

    The connection handshake runs by itself: version, firmware name, then
    (unless skipped) capabilities, analog mapping and the state of every pin.
    When it finishes, `is_ready` becomes `True`, `ready` is emitted and the
    constructor callback is called with `None`.

    Like the rest of the library, the board is driven by `process()` from
    the application's event loop and holds no threads or locks."""

    MAX_PIN_COUNT = 128
    PORT_COUNT = 16

    DEFAULTS = {
        "report_version_timeout": 5000,
        "sampling_interval": 19,
        "skip_capabilities": False,
        "pin_count": MAX_PIN_COUNT,
        "analog_pins": None,
        "pins": None,
        "baudrate": 57600,
    }

    def __init__(self, stream, options=None, callback=None):
        """Creates a new board instance on a stream.

        :param stream: Transport the board is connected through; it may be
            opened before or after the board is created
        :type stream: Stream

        :param options: Settings merged over `Board.DEFAULTS`
        :type options: dict

        :param callback: Function called with `None` when the handshake
            completes, or with the error if the transport fails before that
        :type callback: callable

        The version and firmware requests go out immediately if the stream is
        already open, or as soon as it opens otherwise."""

        super().__init__()

        if callable(options) and callback is None:
            # allow Board(stream, callback)
            callback = options
            options = None

        # these attributes may be updated by the application
        self.name = "Firmata"
        self.callback = callback
        self.settings = dotdict(self.DEFAULTS)
        self.settings.update(options or {})

        # these attributes should only be read externally, not written
        self.stream = stream
        self.parser = FirmataParser(stream=stream, board=self)
        self.is_ready = False
        self.version_received = False
        self.handshake_state = HandshakeState.IDLE
        self.pins = []
        self.ports = [0] * self.PORT_COUNT
        self.analog_pins = []
        self.version = dotdict()
        self.firmware = dotdict()
        self.resolution = dotdict(ADC=None, PWM=None, DAC=None)

        self.i2c = I2C(self)
        self.onewire = OneWire(self)
        self.serial = UartPassthrough(self)
        self.stepper = Stepper(self)
        self.accel_stepper = AccelStepper(self)

        # these attributes are intended to be private
        self._options = dict(options or {})
        self._midi_handlers = {}
        self._sysex_handlers = {}
        self._queued_ports = set()
        self._version_requested_at = None

        # pin records given as options are checked before anything is sent
        self._configured_pins = None
        if self.settings.pins:
            self._configured_pins = [pin if isinstance(pin, Pin) else Pin.from_record(pin) for pin in self.settings.pins]

        self._install_handlers()

        self.parser.on_rx_packet = self._on_rx_packet
        self.parser.on_rx_error = self._on_rx_error

        self.stream.parser = self.parser
        self.stream.on_open_stream = self._on_open_stream
        self.stream.on_close_stream = self._on_close_stream
        self.stream.on_disconnect_stream = self._on_disconnect_stream
        self.stream.on_error = self._on_stream_error

        # await the reported version
        self.once("reportversion", self._on_version_reply)
        self.handshake_state = HandshakeState.AWAITING_VERSION
        if self.stream.is_open:
            self._request_version()

    def __str__(self):
        return "%s board on %s" % (self.name, self.stream)

    def open(self):
        """Opens the underlying stream.

        `open` and `connect` are emitted once the stream reports that it is
        open."""

        return self.stream.open()

    def close(self):
        return self.stream.close()

    def write(self, data):
        """Sends raw bytes to the board.

        :param data: Complete message(s) to send
        :type data: list
        """

        return self.stream.write(bytes(data))

    def parse(self, data):
        """Feeds received bytes straight to the parser.

        :param data: Bytes received from the board, in any chunking
        :type data: bytes
        """

        return self.parser.parse(data)

    def process(self, mode=ProcessMode.BOTH, force=False):
        """Handle any pending events or data waiting to be processed.

        :param mode: Processing mode defining whether to run for this object,
            the stream and parser below it, or both
        :type mode: int

        :param force: Whether to force processing to run regardless of elapsed
            time since last time (if applicable)
        :type force: bool

        This method must be executed inside of a constant event loop. Besides
        pumping the stream it watches the version request: if no version has
        arrived within `report_version_timeout` milliseconds, the version and
        firmware requests are sent again, as often as it takes."""

        if mode in [ProcessMode.SUBS, ProcessMode.BOTH]:
            self.stream.process(mode=ProcessMode.BOTH, force=force)

        if mode in [ProcessMode.SELF, ProcessMode.BOTH]:
            if not self.version_received and self._version_requested_at is not None:
                t0 = time.time()
                if t0 - self._version_requested_at > self.settings.report_version_timeout / 1000:
                    logger.debug("No version from %s after %d ms, asking again", self.stream, self.settings.report_version_timeout)
                    self._request_version()

    # handler registry

    def register_sysex_handler(self, command, handler):
        """Installs a handler for a SysEx sub-command.

        :param command: Sub-command byte
        :type command: int

        :param handler: Function called with each complete `FirmataPacket`
            whose sub-command matches
        :type handler: callable

        :raises FirmataConfigurationException: if the sub-command already has
            a handler, built-in or not
        """

        if command in self._sysex_handlers:
            raise FirmataConfigurationException("SysEx sub-command 0x%02X already has a handler" % command)

        self._sysex_handlers[command] = handler
        return self

    def clear_sysex_handler(self, command):
        """Removes the handler for a SysEx sub-command, if there is one."""

        self._sysex_handlers.pop(command, None)
        return self

    def sysex_response(self, command, handler):
        """Installs a handler that receives only a SysEx payload.

        :param command: Sub-command byte
        :type command: int

        :param handler: Function called with the list of raw 7-bit bytes
            between the sub-command and END_SYSEX; use `Encoding.decode()` to
            join LSB/MSB pairs
        :type handler: callable
        """

        return self.register_sysex_handler(command, lambda packet: handler(packet.data))

    def sysex_command(self, message):
        """Sends a custom SysEx message.

        :param message: Sub-command byte followed by already 7-bit encoded
            data; START_SYSEX and END_SYSEX are added here
        :type message: list
        """

        if not message:
            raise FirmataConfigurationException("SysEx command cannot be empty")

        self.write([FirmataProtocol.START_SYSEX] + list(message) + [FirmataProtocol.END_SYSEX])
        return self

    # queries

    def report_version(self, callback=None):
        if callback is not None:
            self.once("reportversion", callback)
        self.write([FirmataProtocol.REPORT_VERSION])

    def query_firmware(self, callback=None):
        if callback is not None:
            self.once("queryfirmware", callback)
        self.write([FirmataProtocol.START_SYSEX, FirmataProtocol.QUERY_FIRMWARE, FirmataProtocol.END_SYSEX])

    def query_capabilities(self, callback=None):
        if callback is not None:
            self.once("capability-query", callback)
        self.write([FirmataProtocol.START_SYSEX, FirmataProtocol.CAPABILITY_QUERY, FirmataProtocol.END_SYSEX])

    def query_analog_mapping(self, callback=None):
        if callback is not None:
            self.once("analog-mapping-query", callback)
        self.write([FirmataProtocol.START_SYSEX, FirmataProtocol.ANALOG_MAPPING_QUERY, FirmataProtocol.END_SYSEX])

    def query_pin_state(self, pin, callback=None):
        """Asks for a pin's current mode and state.

        :param pin: Pin number
        :type pin: int

        :param callback: Function called without arguments once the pin
            record has been updated
        :type callback: callable

        For output modes the state is the last value written to the pin. For
        input modes it is the state of the pull-up resistor."""

        if callback is not None:
            self.once("pin-state-%d" % pin, callback)
        self.write([FirmataProtocol.START_SYSEX, FirmataProtocol.PIN_STATE_QUERY, pin, FirmataProtocol.END_SYSEX])

    # pin I/O

    def pin_mode(self, pin, mode):
        """Sets the mode of a pin.

        :param pin: Pin number
        :type pin: int

        :param mode: Mode, from `Mode`
        :type mode: int
        """

        self._get_pin(pin).mode = mode
        self.write([FirmataProtocol.PIN_MODE, pin, mode])

    def digital_write(self, pin, value, enqueue=False):
        """Sets a digital output pin.

        :param pin: Pin number
        :type pin: int

        :param value: `Level.LOW` or `Level.HIGH`
        :type value: int

        :param enqueue: Hold the port update until `flush_digital_ports()`
        :type enqueue: bool

        Only this pin's bit of its port is changed, so outputs written earlier
        in the same port keep their level."""

        port = pin >> 3
        bit = 1 << (pin & 0x07)

        self._get_pin(pin).value = value
        if value:
            self.ports[port] |= bit
        else:
            self.ports[port] &= ~bit

        if enqueue:
            self._queued_ports.add(port)
        else:
            self._write_port(port)

    def flush_digital_ports(self):
        """Sends every port updated by queued `digital_write()` calls.

        Ports go out in ascending order, one DIGITAL_MESSAGE each."""

        for port in sorted(self._queued_ports):
            self._write_port(port)
        self._queued_ports.clear()

    def digital_read(self, pin, callback):
        """Turns on reporting for a pin's port and subscribes to its value.

        :param callback: Function called with 0 or 1 on every port report
        :type callback: callable
        """

        self.report_digital_pin(pin, 1)
        self.on("digital-read-%d" % pin, callback)

    def analog_read(self, pin, callback):
        """Turns on reporting for an analog channel and subscribes to it.

        :param pin: Analog channel number (not the digital pin number)
        :type pin: int

        :param callback: Function called with each reading
        :type callback: callable
        """

        self.report_analog_pin(pin, 1)
        self.on("analog-read-%d" % pin, callback)

    def analog_write(self, pin, value):
        """Writes an analog (PWM, servo, DAC) value to a pin.

        :param pin: Pin number
        :type pin: int

        :param value: Value to write
        :type value: int

        Pins above 15 have no ANALOG_MESSAGE channel, so EXTENDED_ANALOG is
        used for them with as many 7-bit bytes as the value needs."""

        self._get_pin(pin).value = value

        if pin > 15:
            message = [
                FirmataProtocol.START_SYSEX,
                FirmataProtocol.EXTENDED_ANALOG,
                pin,
                value & 0x7F,
                (value >> 7) & 0x7F,
            ]
            if value > 0x00004000:
                message.append((value >> 14) & 0x7F)
            if value > 0x00200000:
                message.append((value >> 21) & 0x7F)
            if value > 0x10000000:
                message.append((value >> 28) & 0x7F)
            message.append(FirmataProtocol.END_SYSEX)
        else:
            message = [FirmataProtocol.ANALOG_MESSAGE | pin, value & 0x7F, (value >> 7) & 0x7F]

        self.write(message)

    pwm_write = analog_write

    def servo_config(self, pin=None, min=None, max=None):
        """Sets the pulse range of a servo pin and puts it in SERVO mode.

        :param pin: Pin number
        :type pin: int

        :param min: Minimum pulse width in microseconds
        :type min: int

        :param max: Maximum pulse width in microseconds
        :type max: int
        """

        if pin is None:
            raise FirmataConfigurationException("servo_config: pin must be specified")
        if min is None:
            raise FirmataConfigurationException("servo_config: min must be specified")
        if max is None:
            raise FirmataConfigurationException("servo_config: max must be specified")

        self._get_pin(pin).mode = Mode.SERVO
        self.write([
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.SERVO_CONFIG,
            pin,
            min & 0x7F, (min >> 7) & 0x7F,
            max & 0x7F, (max >> 7) & 0x7F,
            FirmataProtocol.END_SYSEX,
        ])

    def servo_write(self, pin, value):
        # values below 544 are taken as degrees by the firmware
        self.analog_write(pin, value)

    def report_analog_pin(self, pin, value):
        if value not in (0, 1):
            return

        # the channel shares its byte with REPORT_ANALOG
        if pin < 0 or pin > 15:
            raise FirmataConfigurationException("Invalid analog channel %d, must be 0 to 15" % pin)

        if pin < len(self.analog_pins) and self.analog_pins[pin] < len(self.pins):
            self.pins[self.analog_pins[pin]].report = value
        self.write([FirmataProtocol.REPORT_ANALOG | pin, value])

    def report_digital_pin(self, pin, value):
        if value not in (0, 1):
            return

        self._get_pin(pin).report = value
        self.write([FirmataProtocol.REPORT_DIGITAL | (pin >> 3), value])

    def set_sampling_interval(self, interval):
        """Sets how often the firmware samples its inputs.

        :param interval: Milliseconds between samples, clamped to 10..65535
        :type interval: int
        """

        interval = max(10, min(int(interval), 65535))
        self.settings.sampling_interval = interval
        self.write([
            FirmataProtocol.START_SYSEX,
            FirmataProtocol.SAMPLING_INTERVAL,
            interval & 0x7F,
            (interval >> 7) & 0x7F,
            FirmataProtocol.END_SYSEX,
        ])

    def get_sampling_interval(self):
        return self.settings.sampling_interval

    def send_string(self, string):
        """Sends a text message to the firmware.

        :param string: Text to send; it is NUL terminated and sent as UTF-8
            with each byte split into two 7-bit bytes
        :type string: str
        """

        message = [FirmataProtocol.START_SYSEX, FirmataProtocol.STRING_DATA]
        for byte in (string + "\0").encode("utf-8"):
            message.append(byte & 0x7F)
            message.append((byte >> 7) & 0x7F)
        message.append(FirmataProtocol.END_SYSEX)
        self.write(message)

    def ping_read(self, pin, value, callback, pulse_out=0, timeout=1000000):
        """Triggers an ultrasonic ranger and measures the echo.

        :param pin: Pin the sensor is attached to
        :type pin: int

        :param value: Level of the trigger pulse
        :type value: int

        :param callback: Function called with the echo duration in
            microseconds
        :type callback: callable

        :param pulse_out: Trigger pulse length in microseconds
        :type pulse_out: int

        :param timeout: Longest echo to wait for, in microseconds
        :type timeout: int

        Only firmware with ping support (PingFirmata) lists PING_READ among a
        pin's modes; any other pin raises."""

        if not self._get_pin(pin).supports(Mode.PING_READ):
            raise FirmataConfigurationException("Pin %d does not support PING_READ, please upload PingFirmata to the board" % pin)

        message = [FirmataProtocol.START_SYSEX, FirmataProtocol.PING_READ, pin, value]
        for field in (pulse_out, timeout):
            for shift in (24, 16, 8, 0):
                byte = (field >> shift) & 0xFF
                message.append(byte & 0x7F)
                message.append((byte >> 7) & 0x7F)
        message.append(FirmataProtocol.END_SYSEX)

        self.write(message)
        self.once("ping-read-%d" % pin, callback)

    def reset(self):
        self.write([FirmataProtocol.SYSTEM_RESET])

    # handshake

    def _request_version(self):
        self.report_version()
        self.query_firmware()
        self._version_requested_at = time.time()

    def _on_version_reply(self):
        self.version_received = True
        self._version_requested_at = None
        self.handshake_state = HandshakeState.AWAITING_FIRMWARE
        logger.debug("%s reported version %s.%s", self, self.version.major, self.version.minor)
        self.once("queryfirmware", self._on_firmware_reply)

    def _on_firmware_reply(self):
        logger.debug("%s reported firmware %s", self, self.firmware.name)

        # only send the sampling interval when it was explicitly given
        if "sampling_interval" in self._options:
            self.set_sampling_interval(self._options["sampling_interval"])

        if self.settings.skip_capabilities:
            self._configure_pins()
            self._on_handshake_complete()
        else:
            self.handshake_state = HandshakeState.AWAITING_CAPABILITIES
            self.query_capabilities(self._on_capabilities)

    def _on_capabilities(self):
        self.handshake_state = HandshakeState.AWAITING_ANALOG_MAPPING
        self.query_analog_mapping(self._on_analog_mapping)

    def _on_analog_mapping(self):
        self.handshake_state = HandshakeState.AWAITING_PIN_STATES
        self._query_pin_states(0)

    def _query_pin_states(self, pin):
        # one query at a time, each sent when the previous one is answered
        if pin >= len(self.pins):
            self._on_handshake_complete()
            return

        self.query_pin_state(pin, lambda: self._query_pin_states(pin + 1))

    def _on_handshake_complete(self):
        self.handshake_state = HandshakeState.READY
        self.is_ready = True
        logger.debug("%s is ready with %d pins", self, len(self.pins))

        self.emit("ready")
        if self.callback is not None:
            self.callback(None)

    def _configure_pins(self):
        if self.settings.analog_pins is not None:
            self.analog_pins = list(self.settings.analog_pins)

        if self._configured_pins is not None:
            self.pins = list(self._configured_pins)
            return

        if len(self.pins) == 0:
            pin_count = self.settings.pin_count or self.MAX_PIN_COUNT
            for i in range(pin_count):
                channel = self.analog_pins.index(i) if i in self.analog_pins else Pin.NOT_ANALOG
                self.pins.append(Pin(analog_channel=channel))

    # stream events

    def _on_open_stream(self, stream):
        self.emit("open")
        self.emit("connect")
        if not self.version_received:
            self._request_version()

    def _on_close_stream(self, stream):
        self.emit("close")

    def _on_disconnect_stream(self, stream):
        self.emit("disconnect")

    def _on_stream_error(self, error, stream):
        if not self.is_ready and self.callback is not None:
            self.callback(error)
        elif not self.emit("error", error):
            logger.error("Unhandled error on %s: %s", stream, error)

    # dispatch

    def _on_rx_packet(self, packet):
        if packet.type == FirmataPacket.TYPE_SYSEX:
            if not self.version_received:
                logger.debug("Ignoring %s before version report", packet)
                return
            handler = self._sysex_handlers.get(packet.command)
        else:
            if not self.version_received and packet.command != FirmataProtocol.REPORT_VERSION:
                logger.debug("Ignoring %s before version report", packet)
                return
            self.version_received = True
            handler = self._midi_handlers.get(packet.command)

        if handler is not None:
            handler(packet)

    def _on_rx_error(self, error, buffer, parser):
        logger.warning("Dropped malformed message [ %s ]: %s", " ".join(["%02X" % b for b in buffer]), error)

    def _install_handlers(self):
        self._midi_handlers[FirmataProtocol.REPORT_VERSION] = self._handle_report_version
        self._midi_handlers[FirmataProtocol.ANALOG_MESSAGE] = self._handle_analog_message
        self._midi_handlers[FirmataProtocol.DIGITAL_MESSAGE] = self._handle_digital_message

        self._sysex_handlers[FirmataProtocol.QUERY_FIRMWARE] = self._handle_query_firmware
        self._sysex_handlers[FirmataProtocol.CAPABILITY_RESPONSE] = self._handle_capability_response
        self._sysex_handlers[FirmataProtocol.ANALOG_MAPPING_RESPONSE] = self._handle_analog_mapping_response
        self._sysex_handlers[FirmataProtocol.PIN_STATE_RESPONSE] = self._handle_pin_state_response
        self._sysex_handlers[FirmataProtocol.STRING_DATA] = self._handle_string_data
        self._sysex_handlers[FirmataProtocol.PING_READ] = self._handle_ping_read
        self._sysex_handlers[FirmataProtocol.I2C_REPLY] = self.i2c.handle_reply
        self._sysex_handlers[FirmataProtocol.ONEWIRE_DATA] = self.onewire.handle_reply
        self._sysex_handlers[FirmataProtocol.SERIAL_MESSAGE] = self.serial.handle_reply
        self._sysex_handlers[FirmataProtocol.STEPPER] = self.stepper.handle_reply
        self._sysex_handlers[FirmataProtocol.ACCELSTEPPER] = self.accel_stepper.handle_reply

    def _handle_report_version(self, packet):
        self.version.major = packet[1]
        self.version.minor = packet[2]
        self.emit("reportversion")

    def _handle_analog_message(self, packet):
        channel = packet[0] & 0x0F
        value = packet[1] | (packet[2] << 7)

        if channel < len(self.analog_pins) and self.analog_pins[channel] < len(self.pins):
            self.pins[self.analog_pins[channel]].value = value

        self.emit("analog-read-%d" % channel, value)
        self.emit("analog-read", dotdict(pin=channel, value=value))

    def _handle_digital_message(self, packet):
        port = packet[0] & 0x0F
        port_value = packet[1] | (packet[2] << 7)

        for i in range(8):
            pin_number = 8 * port + i
            if pin_number >= len(self.pins):
                break

            pin = self.pins[pin_number]
            if pin.mode not in (Mode.INPUT, Mode.PULLUP):
                continue

            pin.value = (port_value >> i) & 0x01
            if pin.value:
                self.ports[port] |= 1 << i
            else:
                self.ports[port] &= ~(1 << i)

            self.emit("digital-read-%d" % pin_number, pin.value)
            self.emit("digital-read", dotdict(pin=pin_number, value=pin.value))

    def _handle_query_firmware(self, packet):
        if len(packet) < 5:
            raise FirmataProtocolException("Truncated firmware report (%d bytes)" % len(packet))

        # name characters are LSB/MSB pairs; a dangling LSB stands alone
        name = bytearray()
        for i in range(4, len(packet) - 1, 2):
            msb = packet[i + 1] if i + 1 < len(packet) - 1 else 0
            name.append(((packet[i] & 0x7F) | ((msb & 0x7F) << 7)) & 0xFF)

        self.firmware = dotdict(
            name=name.decode("utf-8", "replace"),
            version=dotdict(major=packet[2], minor=packet[3]),
        )
        self.emit("queryfirmware")

    def _handle_capability_response(self, packet):
        listings = []
        capabilities = []
        i = 2
        end = len(packet) - 1
        while i < end:
            if packet[i] == Pin.NOT_ANALOG:
                # 127 ends one pin's listing
                listings.append(capabilities)
                capabilities = []
                i += 1
            elif i + 1 < end:
                capabilities.append((packet[i], packet[i + 1]))
                i += 2
            else:
                logger.debug("Ignoring dangling capability byte 0x%02X", packet[i])
                break

        # update pins in place so existing references stay valid
        for pin_number, capabilities in enumerate(listings):
            if pin_number < len(self.pins):
                self.pins[pin_number].apply_capabilities(capabilities)
            else:
                pin = Pin()
                pin.apply_capabilities(capabilities)
                self.pins.append(pin)
        del self.pins[len(listings):]

        self.resolution.ADC = None
        self.resolution.PWM = None
        for pin in self.pins:
            if pin.analog_resolution and self.resolution.ADC is None:
                self.resolution.ADC = (1 << pin.analog_resolution) - 1
            if pin.pwm_resolution and self.resolution.PWM is None:
                self.resolution.PWM = (1 << pin.pwm_resolution) - 1

        self.emit("capability-query")

    def _handle_analog_mapping_response(self, packet):
        self.analog_pins = []
        for pin_number, channel in enumerate(packet[2:-1]):
            if pin_number >= len(self.pins):
                break
            self.pins[pin_number].analog_channel = channel
            if channel != Pin.NOT_ANALOG:
                self.analog_pins.append(pin_number)

        self.emit("analog-mapping-query")

    def _handle_pin_state_response(self, packet):
        if len(packet) < 6:
            raise FirmataProtocolException("Truncated pin state response (%d bytes)" % len(packet))

        pin_number = packet[2]
        if pin_number >= len(self.pins):
            logger.debug("Ignoring state of unknown pin %d", pin_number)
            return

        pin = self.pins[pin_number]
        pin.mode = packet[3]
        pin.state = packet[4]
        if len(packet) > 6:
            pin.state |= packet[5] << 7
        if len(packet) > 7:
            pin.state |= packet[6] << 14

        self.emit("pin-state-%d" % pin_number)

    def _handle_string_data(self, packet):
        string = bytes(packet[2:-1]).decode("utf-8", "replace").replace("\0", "")
        self.emit("string", string)

    def _handle_ping_read(self, packet):
        if len(packet) < 13:
            raise FirmataProtocolException("Truncated ping reply (%d bytes)" % len(packet))

        pin = packet.word(2)
        duration = 0
        for i in (4, 6, 8, 10):
            duration = (duration << 8) + packet.word(i)

        self.emit("ping-read-%d" % pin, duration)

    def _get_pin(self, pin) -> Pin:
        if pin < 0 or pin >= len(self.pins):
            raise FirmataConfigurationException("Pin %d does not exist on this board (%d pins known)" % (pin, len(self.pins)))
        return self.pins[pin]

    def _write_port(self, port):
        self.write([
            FirmataProtocol.DIGITAL_MESSAGE | port,
            self.ports[port] & 0x7F,
            (self.ports[port] >> 7) & 0x7F,
        ])
