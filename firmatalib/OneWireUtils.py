import logging

from .Encoding import *

logger = logging.getLogger(__name__)

class OneWireUtils:
    """Helpers for OneWire device identifiers.

    A OneWire ROM id is eight bytes: a family code, a six byte serial number,
    and a CRC-8 of the first seven bytes."""

    ROM_LENGTH = 8

    @classmethod
    def crc8(cls, data) -> int:
        """Calculates the Dallas/Maxim CRC-8 of a byte sequence.

        :param data: Bytes to check
        :type data: list

        :returns: CRC value
        :rtype: int

        Uses the reflected polynomial 0x8C, feeding each byte least
        significant bit first."""

        crc = 0
        for inbyte in data:
            for n in range(8):
                mix = (crc ^ inbyte) & 0x01
                crc >>= 1
                if mix:
                    crc ^= 0x8C
                inbyte >>= 1
        return crc

    @classmethod
    def read_devices(cls, data) -> list:
        """Extracts device ids from a 7-bit packed search reply.

        :param data: Packed reply payload (without the SysEx header)
        :type data: list

        :returns: List of 8-byte device ids
        :rtype: list

        A trailing group shorter than eight bytes is dropped. A device whose
        CRC does not match is still returned, since the caller decides whether
        to use it, but a warning is logged so wiring problems are visible."""

        decoded = Encoding.from_7bit_array(data)
        devices = []

        for i in range(0, len(decoded), cls.ROM_LENGTH):
            device = decoded[i:i + cls.ROM_LENGTH]
            if len(device) != cls.ROM_LENGTH:
                continue

            if cls.crc8(device[:7]) != device[7]:
                logger.warning("OneWire ROM %s failed CRC check", " ".join("%02X" % b for b in device))

            devices.append(device)

        return devices
