"""Tests for the stream base class and the serial port layer."""

from types import SimpleNamespace

import pytest
import serial
import serial.tools.list_ports

from firmatalib import Board, FirmataHalException, FirmataProtocol, Stream
from firmatalib.hal import UartManager, UartStream


class FakePort:
    """Stands in for `serial.Serial` with scripted input."""

    def __init__(self, incoming=b'', is_open=False, fail_writes=False, fail_reads=False):
        self.port = "/dev/ttyFAKE0"
        self.is_open = is_open
        self.incoming = bytearray(incoming)
        self.written = bytearray()
        self.fail_writes = fail_writes
        self.fail_reads = fail_reads

    def open(self):
        self.is_open = True

    def close(self):
        self.is_open = False

    @property
    def in_waiting(self):
        if self.fail_reads:
            raise serial.SerialException("device reports readiness to read but returned no data")
        return len(self.incoming)

    def read(self, size):
        data = bytes(self.incoming[:size])
        del self.incoming[:size]
        return data

    def write(self, data):
        if self.fail_writes:
            raise serial.SerialException("write failed")
        self.written.extend(data)
        return len(data)


def port_info(device):
    return SimpleNamespace(device=device, description="", hwid="")


def test_base_stream_methods_raise():
    stream = Stream()
    for method in (stream.open, stream.close, stream.process):
        with pytest.raises(FirmataHalException):
            method()
    with pytest.raises(FirmataHalException):
        stream.write(b'\xF9')


def test_acceptable_port_names():
    assert UartManager.is_acceptable_port(port_info("/dev/ttyUSB0"))
    assert UartManager.is_acceptable_port(port_info("/dev/ttyACM1"))
    assert UartManager.is_acceptable_port(port_info("COM3"))
    assert UartManager.is_acceptable_port(port_info("/dev/cu.usbmodem1411"))
    assert not UartManager.is_acceptable_port(port_info("/dev/ttyS0"))
    assert not UartManager.is_acceptable_port(port_info("/dev/cu.Bluetooth-Incoming-Port"))


def test_request_port(monkeypatch):
    ports = [port_info("/dev/ttyS0"), port_info("/dev/ttyACM0"), port_info("/dev/ttyUSB0")]
    monkeypatch.setattr(serial.tools.list_ports, "comports", lambda: ports)

    manager = UartManager()
    assert [p.device for p in manager.get_acceptable_ports()] == ["/dev/ttyACM0", "/dev/ttyUSB0"]
    assert manager.request_port().device == "/dev/ttyACM0"

    manager.port_info_filter = lambda p: p.device.endswith("S0")
    assert manager.request_port().device == "/dev/ttyS0"


def test_request_port_none_found(monkeypatch):
    monkeypatch.setattr(serial.tools.list_ports, "comports", lambda: [port_info("/dev/ttyS0")])
    with pytest.raises(FirmataHalException):
        UartManager().request_port()


def test_create_stream(monkeypatch):
    monkeypatch.setattr(serial.tools.list_ports, "comports", lambda: [port_info("/dev/ttyACM0")])
    stream = UartManager(baudrate=115200).create_stream()
    assert isinstance(stream, UartStream)
    assert stream.port.port == "/dev/ttyACM0"
    assert stream.port.baudrate == 115200
    assert not stream.is_open
    assert str(stream) == "/dev/ttyACM0"


def test_uart_stream_defaults_to_57600():
    stream = UartStream("/dev/ttyACM0")
    assert stream.port.baudrate == 57600
    assert not stream.port.is_open


def test_board_on_uart_stream_handshake():
    port = FakePort()
    stream = UartStream(port)
    board = Board(stream, {"skip_capabilities": True})
    assert bytes(port.written) == b''

    board.open()
    assert port.is_open
    assert bytes(port.written) == bytes([0xF9, 0xF0, 0x79, 0xF7])

    port.incoming.extend([0xF9, 2, 5, 0xF0, 0x79, 2, 5, 0x41, 0x00, 0xF7])
    board.process()
    assert board.is_ready
    assert board.firmware.name == "A"


def test_uart_stream_write_failure_reported():
    port = FakePort(is_open=True, fail_writes=True)
    stream = UartStream(port)
    errors = []
    stream.on_error = lambda error, s: errors.append(error)
    assert stream.write([0xF9]) is False
    assert len(errors) == 1


def test_uart_stream_read_failure_closes():
    port = FakePort(fail_reads=True)
    stream = UartStream(port)
    events = []
    stream.on_error = lambda error, s: events.append("error")
    stream.on_close_stream = lambda s: events.append("close")
    stream.open()
    stream.process()
    assert events == ["error", "close"]
    assert not stream.is_open
    assert not port.is_open


def test_uart_stream_rx_callback_can_skip_parser():
    port = FakePort(incoming=[0xF9, 2, 5])
    stream = UartStream(port)
    board = Board(stream)
    stream.on_rx_data = lambda data, s: False
    board.open()
    board.process()
    assert not board.version_received


def test_uart_stream_tx_callback():
    port = FakePort(is_open=True)
    stream = UartStream(port)
    sent = []
    stream.on_tx_data = lambda data, s: sent.append(data)
    stream.write([FirmataProtocol.SYSTEM_RESET])
    assert sent == [b'\xFF']
