class FirmataPacket():
    """Single complete Firmata message.

    This class represents one message reconstructed by the parser, either a
    three byte MIDI-style message or a SysEx message. The raw buffer is kept
    intact, including the START_SYSEX and END_SYSEX sentinels, since handlers
    index into it by position the same way the protocol documentation
    describes each message."""

    TYPE_MIDI = 0
    TYPE_SYSEX = 1
    TYPE_STR = ["midi", "sysex"]

    def __init__(self, type=TYPE_MIDI, command=None, buffer=None, parser=None):
        """Creates a new packet instance.

        :param type: Packet type
        :type type: int

        :param command: Status byte (MIDI, channel bits removed) or
            sub-command byte (SysEx)
        :type command: int

        :param buffer: Complete message bytes
        :type buffer: bytes

        :param parser: Parser object that produced this packet, if any
        :type parser: FirmataParser
        """

        self.type = type
        self.command = command
        self.buffer = buffer if buffer is not None else b''
        self.parser = parser

    def __getitem__(self, index):
        """Convenience accessor for raw message bytes.

        :param index: Position or slice within the message buffer
        :type index: int
        """

        return self.buffer[index]

    def __len__(self):
        return len(self.buffer)

    def __str__(self):
        """Generates the string representation of the packet.

        This shows the packet type, command byte, raw bytes in hex and the
        stream it came from when that is known."""

        command = "%02X" % self.command if self.command is not None else "??"
        s = "%s %s: [ %s ]" % (self.TYPE_STR[self.type], command, ' '.join(["%02X" % b for b in self.buffer]))
        if self.parser is not None and self.parser.stream is not None:
            s += " via %s" % (self.parser.stream)
        else:
            s += " via unidentified stream"
        return s

    @property
    def board(self):
        """Board that owns the parser which produced this packet."""

        return self.parser.board if self.parser is not None else None

    @property
    def data(self) -> list:
        """SysEx payload between the sub-command byte and END_SYSEX.

        For MIDI-style messages this is the two data bytes."""

        if self.type == self.TYPE_SYSEX:
            return list(self.buffer[2:-1])
        return list(self.buffer[1:])

    def word(self, index) -> int:
        """Joins the 7-bit LSB/MSB pair starting at a buffer position.

        :param index: Position of the LSB within the message buffer
        :type index: int

        :returns: 14-bit value
        :rtype: int
        """

        return (self.buffer[index] & 0x7F) | ((self.buffer[index + 1] & 0x7F) << 7)
