"""Shared fixtures: a recording in-memory stream and boards built on it."""

import pytest

from firmatalib import Board, FirmataProtocol, Stream


class FakeStream(Stream):
    """Stream that records every write and lets tests inject events."""

    def __init__(self, is_open=True):
        super().__init__()
        self.is_open = is_open
        self.writes = []

    def open(self):
        if not self.is_open:
            self._on_open()
        return True

    def close(self):
        if self.is_open:
            self._on_close()
        return True

    def write(self, data):
        self.writes.append(list(data))
        return len(data)

    def process(self, mode=None, force=False):
        if self.parser is not None:
            self.parser.process()

    def feed(self, data):
        self._on_rx_data(bytes(data))

    def fail(self, error):
        self._on_error(error)

    def disconnect(self):
        self._on_disconnect()

    @property
    def last_write(self):
        return self.writes[-1] if self.writes else None


def firmware_reply(name="Firmata", major=2, minor=5):
    data = [FirmataProtocol.START_SYSEX, FirmataProtocol.QUERY_FIRMWARE, major, minor]
    for byte in name.encode("utf-8"):
        data.extend([byte & 0x7F, (byte >> 7) & 0x7F])
    data.append(FirmataProtocol.END_SYSEX)
    return data


VERSION_REPLY = [FirmataProtocol.REPORT_VERSION, 2, 5]


@pytest.fixture
def stream():
    return FakeStream()


@pytest.fixture
def board(stream):
    """A board that has finished the handshake with 128 generic pins."""
    board = Board(stream, {"skip_capabilities": True})
    stream.feed(VERSION_REPLY)
    stream.feed(firmware_reply())
    stream.writes.clear()
    return board
