"""Tests for message framing in the stream parser."""

from firmatalib import FirmataPacket, FirmataParser, FirmataProtocol, FirmataProtocolException

from conftest import firmware_reply


def make_parser():
    parser = FirmataParser()
    packets = []
    parser.on_rx_packet = packets.append
    return parser, packets


def test_midi_message_complete_at_three_bytes():
    parser, packets = make_parser()
    parser.parse([0xE3, 0x7F, 0x07])
    assert len(packets) == 1
    assert packets[0].type == FirmataPacket.TYPE_MIDI
    assert packets[0].command == FirmataProtocol.ANALOG_MESSAGE
    assert list(packets[0].buffer) == [0xE3, 0x7F, 0x07]


def test_report_version_keeps_full_status_byte():
    parser, packets = make_parser()
    packet = parser.parse([0xF9, 2, 5])
    assert packet.command == FirmataProtocol.REPORT_VERSION
    assert packets == [packet]


def test_sysex_message_complete_at_end_sysex():
    parser, packets = make_parser()
    parser.parse([0xF0, 0x71, 0x68, 0x00])
    assert packets == []
    parser.parse([0xF7])
    assert len(packets) == 1
    assert packets[0].type == FirmataPacket.TYPE_SYSEX
    assert packets[0].command == FirmataProtocol.STRING_DATA
    assert packets[0].data == [0x68, 0x00]


def test_byte_by_byte_matches_single_chunk():
    reply = firmware_reply("StandardFirmata")

    parser, whole = make_parser()
    parser.parse(bytes(reply))

    parser, split = make_parser()
    for byte in reply:
        parser.parse(byte)

    assert len(whole) == 1
    assert len(split) == 1
    assert split[0].buffer == whole[0].buffer


def test_several_messages_in_one_chunk():
    parser, packets = make_parser()
    parser.parse([0xF9, 2, 5, 0xE0, 0x10, 0x00, 0xF0, 0x79, 2, 5, 0xF7, 0x91, 0x01, 0x00])
    assert [p.command for p in packets] == [
        FirmataProtocol.REPORT_VERSION,
        FirmataProtocol.ANALOG_MESSAGE,
        FirmataProtocol.QUERY_FIRMWARE,
        FirmataProtocol.DIGITAL_MESSAGE,
    ]


def test_noise_between_messages_is_discarded():
    parser, packets = make_parser()
    parser.parse([0x00, 0x00, 0x12, 0x7F, 0xA0, 0xF9, 2, 5])
    assert len(packets) == 1
    assert list(packets[0].buffer) == [0xF9, 2, 5]


def test_zero_never_starts_a_message():
    parser, packets = make_parser()
    parser.parse([0x00])
    assert parser.rx_buffer == b''
    assert packets == []


def test_status_byte_inside_sysex_restarts_buffer():
    parser, packets = make_parser()
    parser.parse([0xF0, 0x6E, 0x03, 0x90, 0x05, 0x00])
    assert len(packets) == 1
    assert list(packets[0].buffer) == [0x90, 0x05, 0x00]


def test_new_sysex_inside_sysex_restarts_buffer():
    parser, packets = make_parser()
    parser.parse([0xF0, 0x6E, 0xF0, 0x71, 0x41, 0x00, 0xF7])
    assert len(packets) == 1
    assert list(packets[0].buffer) == [0xF0, 0x71, 0x41, 0x00, 0xF7]


def test_handler_protocol_error_goes_to_error_callback():
    parser = FirmataParser()
    errors = []

    def handler(packet):
        raise FirmataProtocolException("bad")

    parser.on_rx_packet = handler
    parser.on_rx_error = lambda e, buffer, p: errors.append((str(e), list(buffer)))
    parser.parse([0xF9, 2, 5, 0xF9, 2, 6])

    assert errors == [("bad", [0xF9, 2, 5]), ("bad", [0xF9, 2, 6])]


def test_queue_then_process():
    parser, packets = make_parser()
    parser.queue([0xF9, 2])
    parser.queue(5)
    assert packets == []
    parser.process()
    assert len(packets) == 1


def test_packet_word_and_str():
    parser, packets = make_parser()
    packet = parser.parse([0xF0, 0x77, 0x53, 0x00, 0x32, 0x01, 0xF7])
    assert packet.word(2) == 0x53
    assert packet.word(4) == 0x32 | (1 << 7)
    assert "sysex 77" in str(packet)
