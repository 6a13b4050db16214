# check for local development repo in script path and use it for imports
import os, sys
path_parts = os.path.dirname(os.path.realpath(__file__)).split(os.sep)
if "firmatalib" in path_parts:
    sys.path.insert(0, os.sep.join(path_parts[:-path_parts[::-1].index("firmatalib")]))

import time
import firmatalib

class App():

    def __init__(self):
        # set up protocol parser (handles incoming data only, no board attached)
        self.parser = firmatalib.FirmataParser()
        self.parser.on_rx_packet = self.on_rx_packet
        self.parser.on_rx_error = self.on_rx_error

    def on_rx_packet(self, packet):
        print("[%.03f] RXP: %s" % (time.time(), packet))

    def on_rx_error(self, e, rx_buffer, parser):
        print("[%.03f] ERROR: %s (raw data: [%s] via %s)" % (time.time(), e, ' '.join(["%02X" % b for b in rx_buffer]), parser))

def main():
    app = App()

    # parse() call technique 1: actual bytes() object (REPORT_VERSION 2.5)
    app.parser.parse(b"\xF9\x02\x05")

    # noise from a resetting board is dropped before the next message
    app.parser.parse(b"\x00\x00\x12\xE0\x7F\x07")

    # parse() call technique 2: list of integers (QUERY_FIRMWARE "AB")
    app.parser.parse([0xF0, 0x79, 0x02, 0x05, 0x41, 0x00, 0x42, 0x00, 0xF7])

    # parse() call technique 3: single integers (STRING_DATA "hi")
    [app.parser.parse(x) for x in [0xF0, 0x71, 0x68, 0x00, 0x69, 0x00, 0xF7]]

    # an unfinished SysEx is abandoned when a status byte arrives
    app.parser.parse([0xF0, 0x6E, 0x03, 0x90, 0x05, 0x00])

if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("Ctrl+C detected, terminating script")
        sys.exit(0)
