"""Tests for OneWire requests, searches and correlated reads."""

import pytest

from firmatalib import Encoding, FirmataConfigurationException, FirmataProtocol

F0 = FirmataProtocol.START_SYSEX
F7 = FirmataProtocol.END_SYSEX

DEVICE = [0x28, 0xDB, 0xEF, 0x21, 0x05, 0x00, 0x00, 0x5D]


def request_header(message):
    """Returns the sub-command, pin and unpacked body of a written request."""
    assert message[0] == F0
    assert message[1] == FirmataProtocol.ONEWIRE_DATA
    assert message[-1] == F7
    return message[2], message[3], Encoding.from_7bit_array(message[4:-1])


def read_reply(pin, correlation_id, data):
    body = [correlation_id & 0xFF, correlation_id >> 8] + list(data)
    return [F0, FirmataProtocol.ONEWIRE_DATA, FirmataProtocol.ONEWIRE_READ_REPLY, pin] + Encoding.to_7bit_array(body) + [F7]


def test_configure(board, stream):
    board.onewire.configure(4)
    assert stream.last_write == [F0, FirmataProtocol.ONEWIRE_DATA, FirmataProtocol.ONEWIRE_CONFIG_REQUEST, 4, 0, F7]
    board.onewire.configure(4, parasitic_power=True)
    assert stream.last_write[4] == 1


def test_search_reply(board, stream):
    found = []
    board.onewire.search(4, found.append)
    assert stream.last_write == [F0, FirmataProtocol.ONEWIRE_DATA, FirmataProtocol.ONEWIRE_SEARCH_REQUEST, 4, F7]

    stream.feed([F0, 0x73, 0x42, 4, 0x28, 0x36, 0x3F, 0x0F, 0x52, 0x00, 0x00, 0x00, 0x5D, 0x00, F7])
    assert len(found) == 1
    assert len(found[0]) == 8
    assert found[0][0] == 0x28

    # searches are one-shot
    stream.feed([F0, 0x73, 0x42, 4, 0x28, 0x36, 0x3F, 0x0F, 0x52, 0x00, 0x00, 0x00, 0x5D, 0x00, F7])
    assert len(found) == 1


def test_search_alarms_reply(board, stream):
    found = []
    board.onewire.search_alarms(4, found.append)
    assert stream.last_write[2] == FirmataProtocol.ONEWIRE_SEARCH_ALARMS_REQUEST
    packed = Encoding.to_7bit_array(DEVICE)
    stream.feed([F0, 0x73, FirmataProtocol.ONEWIRE_SEARCH_ALARMS_REPLY, 4] + packed + [F7])
    assert found == [[DEVICE]]


def test_search_reply_for_other_pin_is_ignored(board, stream):
    found = []
    board.onewire.search(4, found.append)
    stream.feed([F0, 0x73, 0x42, 5] + Encoding.to_7bit_array(DEVICE) + [F7])
    assert found == []


def test_reset(board, stream):
    board.onewire.reset(4)
    assert stream.last_write == [F0, FirmataProtocol.ONEWIRE_DATA, FirmataProtocol.ONEWIRE_RESET_REQUEST_BIT, 4] + Encoding.to_7bit_array([0] * 16) + [F7]


def test_delay(board, stream):
    board.onewire.delay(4, 1000)
    subcommand, pin, header = request_header(stream.last_write)
    assert subcommand == FirmataProtocol.ONEWIRE_DELAY_REQUEST_BIT | FirmataProtocol.ONEWIRE_WITHDATA_REQUEST_BITS
    assert pin == 4
    assert header[12:16] == [0xE8, 0x03, 0x00, 0x00]


def test_write(board, stream):
    board.onewire.write(4, DEVICE, 0x44)
    subcommand, pin, body = request_header(stream.last_write)
    assert subcommand & FirmataProtocol.ONEWIRE_WRITE_REQUEST_BIT
    assert body[0:8] == DEVICE
    assert body[16:] == [0x44]


def test_device_id_must_be_eight_bytes(board, stream):
    with pytest.raises(FirmataConfigurationException):
        board.onewire.write(4, DEVICE[:7], [0x44])
    with pytest.raises(FirmataConfigurationException):
        board.onewire.read(4, DEVICE[:7], 9, lambda data: None)
    assert stream.writes == []
    assert board.onewire.pending == {}


def test_read_matches_reply_by_id(board, stream):
    results = []
    correlation_id = board.onewire.read(4, DEVICE, 9, results.append)

    subcommand, pin, body = request_header(stream.last_write)
    assert subcommand & FirmataProtocol.ONEWIRE_READ_REQUEST_BIT
    assert body[8:10] == [9, 0]
    assert body[10] | (body[11] << 8) == correlation_id

    stream.feed(read_reply(4, correlation_id, [0x50, 0x05]))
    assert results == [[0x50, 0x05]]
    assert correlation_id not in board.onewire.pending


def test_concurrent_reads_get_their_own_data(board, stream):
    first = []
    second = []
    first_id = board.onewire.read(4, DEVICE, 2, first.append)
    second_id = board.onewire.write_and_read(4, DEVICE, [0xBE], 2, second.append)
    assert first_id != second_id

    # replies arrive out of order
    stream.feed(read_reply(4, second_id, [3, 4]))
    stream.feed(read_reply(4, first_id, [1, 2]))
    assert first == [[1, 2]]
    assert second == [[3, 4]]


def test_write_and_read_request(board, stream):
    board.onewire.write_and_read(4, DEVICE, [0xBE], 9, lambda data: None)
    subcommand, pin, body = request_header(stream.last_write)
    assert subcommand == (FirmataProtocol.ONEWIRE_WRITE_REQUEST_BIT
                          | FirmataProtocol.ONEWIRE_READ_REQUEST_BIT
                          | FirmataProtocol.ONEWIRE_WITHDATA_REQUEST_BITS)
    assert body[16:] == [0xBE]


def test_read_reply_event(board, stream):
    correlation_id = board.onewire.read(4, DEVICE, 1, lambda data: None)
    events = []
    board.on("1-wire-read-reply-%d" % correlation_id, events.append)
    stream.feed(read_reply(4, correlation_id, [7]))
    assert events == [[7]]


def test_correlation_ids_skip_pending(board):
    board.onewire._last_correlation_id = 0xFFFE
    board.onewire.pending[1] = lambda data: None
    assert board.onewire.read(4, DEVICE, 1, lambda data: None) == 0xFFFF
    assert board.onewire.read(4, DEVICE, 1, lambda data: None) == 2
