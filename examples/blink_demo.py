# check for local development repo in script path and use it for imports
import os, sys
path_parts = os.path.dirname(os.path.realpath(__file__)).split(os.sep)
if "firmatalib" in path_parts:
    sys.path.insert(0, os.sep.join(path_parts[:-path_parts[::-1].index("firmatalib")]))

import time
import firmatalib
import firmatalib.hal

LED_PIN = 13
ANALOG_CHANNEL = 0

class App():

    def __init__(self):
        # find the first port that looks like a board
        self.manager = firmatalib.hal.UartManager()
        stream = self.manager.create_stream()

        # set up board (runs the handshake by itself once the port opens)
        self.board = firmatalib.Board(stream, callback=self.on_board_ready)
        self.board.on("open", self.on_open)
        self.board.on("string", self.on_string)
        self.board.on("error", self.on_error)
        self.led = firmatalib.Level.LOW
        self.last_toggle = 0

    def on_open(self):
        print("[%.03f] OPENED: %s" % (time.time(), self.board.stream))

    def on_board_ready(self, error):
        if error is not None:
            print("[%.03f] FAILED: %s" % (time.time(), error))
            return

        print("[%.03f] READY: %s %d.%d, %d pins" % (time.time(), self.board.firmware.name,
                self.board.firmware.version.major, self.board.firmware.version.minor, len(self.board.pins)))
        self.board.pin_mode(LED_PIN, firmatalib.Mode.OUTPUT)
        self.board.analog_read(ANALOG_CHANNEL, self.on_analog_read)

    def on_analog_read(self, value):
        print("[%.03f] A%d: %d" % (time.time(), ANALOG_CHANNEL, value))

    def on_string(self, string):
        print("[%.03f] STRING: %s" % (time.time(), string))

    def on_error(self, error):
        print("[%.03f] ERROR: %s" % (time.time(), error))

    def blink(self):
        if not self.board.is_ready or time.time() - self.last_toggle < 0.5:
            return
        self.led = firmatalib.Level.HIGH if self.led == firmatalib.Level.LOW else firmatalib.Level.LOW
        self.board.digital_write(LED_PIN, self.led)
        self.last_toggle = time.time()

def main():
    app = App()
    app.board.open()

    while True:
        app.board.process()
        app.blink()
        time.sleep(0.01)

if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("Ctrl+C detected, terminating script")
        sys.exit(0)
