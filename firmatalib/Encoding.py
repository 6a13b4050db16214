import math

from .Exceptions import *

class Encoding:
    """Numeric and byte packing helpers used by Firmata messages.

    Every byte inside a SysEx frame must stay below 0x80, so anything wider
    than seven bits has to be spread over several bytes before it goes out
    and reassembled after it comes back. This class collects the encodings
    used by the core protocol and its sub-protocols:

    * 7-bit packing of arbitrary 8-bit buffers (OneWire payloads)
    * 32-bit signed integers in five bytes (AccelStepper positions)
    * a four-byte decimal floating point format (AccelStepper speed and
      acceleration)
    * LSB/MSB pairs of 7-bit bytes (custom SysEx data)

    All methods are stateless and may be called on the class itself."""

    MAX_SIGNIFICAND = 2 ** 23
    FLOAT_EXPONENT_BIAS = 11

    @classmethod
    def to_7bit_array(cls, data) -> list:
        """Packs 8-bit bytes into a list of 7-bit bytes.

        :param data: Bytes to pack
        :type data: bytes

        :returns: Packed bytes, each below 0x80
        :rtype: list

        Input bits are consumed eight at a time across a rolling seven bit
        window, so every seven input bytes become eight output bytes. A final
        partial output byte carries any leftover bits padded with zeros."""

        shift = 0
        previous = 0
        output = []

        for byte in data:
            if shift == 0:
                output.append(byte & 0x7F)
                shift += 1
                previous = byte >> 7
            else:
                output.append(((byte << shift) & 0x7F) | previous)
                if shift == 6:
                    output.append(byte >> 1)
                    shift = 0
                else:
                    shift += 1
                    previous = byte >> (8 - shift)

        if shift > 0:
            output.append(previous)

        return output

    @classmethod
    def from_7bit_array(cls, encoded) -> list:
        """Unpacks 7-bit bytes produced by `to_7bit_array()`.

        :param encoded: Packed bytes
        :type encoded: list

        :returns: Original 8-bit bytes
        :rtype: list

        The number of decoded bytes is `floor(len(encoded) * 7 / 8)`, which
        discards the zero padding added to the last packed byte."""

        expected_bytes = (len(encoded) * 7) >> 3
        decoded = []

        for i in range(expected_bytes):
            j = i << 3
            pos = j // 7
            shift = j % 7
            following = encoded[pos + 1] if pos + 1 < len(encoded) else 0
            decoded.append((encoded[pos] >> shift) | ((following << (7 - shift)) & 0xFF))

        return decoded

    @classmethod
    def encode_32(cls, value) -> list:
        """Encodes a signed integer into five 7-bit bytes.

        :param value: Integer to encode, magnitude below 2**31
        :type value: int

        :returns: Five encoded bytes, least significant first
        :rtype: list

        The first four bytes carry 28 bits of magnitude, the fifth carries the
        remaining three magnitude bits plus the sign flag (0x08)."""

        magnitude = abs(int(value))
        encoded = [
            magnitude & 0x7F,
            (magnitude >> 7) & 0x7F,
            (magnitude >> 14) & 0x7F,
            (magnitude >> 21) & 0x7F,
            (magnitude >> 28) & 0x07,
        ]

        if value < 0:
            encoded[4] |= 0x08

        return encoded

    @classmethod
    def decode_32(cls, encoded) -> int:
        """Decodes five 7-bit bytes produced by `encode_32()`.

        :param encoded: Five encoded bytes
        :type encoded: list

        :returns: Signed integer
        :rtype: int
        """

        if len(encoded) < 5:
            raise FirmataProtocolException("32-bit value needs 5 bytes, got %d" % len(encoded))

        result = (encoded[0] & 0x7F) \
            | ((encoded[1] & 0x7F) << 7) \
            | ((encoded[2] & 0x7F) << 14) \
            | ((encoded[3] & 0x7F) << 21) \
            | ((encoded[4] & 0x07) << 28)

        if (encoded[4] >> 3) & 0x01:
            result = -result

        return result

    @classmethod
    def encode_custom_float(cls, value) -> list:
        """Encodes a number into the four byte decimal float format.

        :param value: Number to encode
        :type value: float

        :returns: Four encoded bytes
        :rtype: list

        The value is scaled by powers of ten until it is a whole number that
        fits the 23-bit significand. The last byte holds the two highest
        significand bits, a 4-bit decimal exponent biased by 11, and the sign
        bit."""

        if value == 0:
            return [0, 0, 0, 0]

        sign = 1 if value < 0 else 0
        value = abs(value)

        base10 = math.floor(math.log10(value))
        exponent = base10
        value = value / 10 ** base10

        # shift the decimal point right until nothing is left behind it
        while not float(value).is_integer() and value < cls.MAX_SIGNIFICAND:
            exponent -= 1
            value *= 10

        while value > cls.MAX_SIGNIFICAND:
            exponent += 1
            value /= 10

        value = math.trunc(value)
        exponent += cls.FLOAT_EXPONENT_BIAS

        return [
            value & 0x7F,
            (value >> 7) & 0x7F,
            (value >> 14) & 0x7F,
            ((value >> 21) & 0x03) | ((exponent & 0x0F) << 2) | ((sign & 0x01) << 6),
        ]

    @classmethod
    def decode_custom_float(cls, encoded) -> float:
        """Decodes four bytes produced by `encode_custom_float()`.

        :param encoded: Four encoded bytes
        :type encoded: list

        :returns: Decoded number
        :rtype: float
        """

        if len(encoded) < 4:
            raise FirmataProtocolException("Custom float needs 4 bytes, got %d" % len(encoded))

        exponent = ((encoded[3] >> 2) & 0x0F) - cls.FLOAT_EXPONENT_BIAS
        sign = (encoded[3] >> 6) & 0x01

        result = encoded[0] \
            | (encoded[1] << 7) \
            | (encoded[2] << 14) \
            | ((encoded[3] & 0x03) << 21)

        if sign:
            result = -result

        return result * 10 ** exponent

    @classmethod
    def encode(cls, data) -> list:
        """Splits values into LSB/MSB pairs of 7-bit bytes.

        :param data: Values to encode (each up to 14 bits)
        :type data: list

        :returns: Encoded bytes, two per input value
        :rtype: list

        Use this to build the payload of a custom message sent with
        `Board.sysex_command()`."""

        encoded = []
        for value in data:
            encoded.append(value & 0x7F)
            encoded.append((value >> 7) & 0x7F)
        return encoded

    @classmethod
    def decode(cls, data) -> list:
        """Joins LSB/MSB pairs of 7-bit bytes back into values.

        :param data: Encoded bytes, an even number of them
        :type data: list

        :returns: Decoded values
        :rtype: list

        Use this inside handlers registered with `Board.sysex_response()`."""

        if len(data) % 2 != 0:
            raise FirmataProtocolException("Cannot decode an odd number of data bytes (%d)" % len(data))

        return [data[i] | (data[i + 1] << 7) for i in range(0, len(data), 2)]
