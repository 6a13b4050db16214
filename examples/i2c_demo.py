# check for local development repo in script path and use it for imports
import os, sys
path_parts = os.path.dirname(os.path.realpath(__file__)).split(os.sep)
if "firmatalib" in path_parts:
    sys.path.insert(0, os.sep.join(path_parts[:-path_parts[::-1].index("firmatalib")]))

import time
import firmatalib
import firmatalib.hal

# ADXL345 accelerometer
ADXL345 = 0x53
POWER_CTL = 0x2D
DATA_FORMAT = 0x31
DATAX0 = 0x32

class App():

    def __init__(self):
        stream = firmatalib.hal.UartManager().create_stream()
        self.board = firmatalib.Board(stream, callback=self.on_board_ready)

    def on_board_ready(self, error):
        if error is not None:
            print("[%.03f] FAILED: %s" % (time.time(), error))
            return

        self.board.i2c.configure()
        self.board.i2c.write_register(ADXL345, POWER_CTL, 0x08)
        self.board.i2c.write_register(ADXL345, DATA_FORMAT, 0x00)
        self.board.i2c.read(ADXL345, DATAX0, 6, self.on_sample)

    def on_sample(self, data):
        x, y, z = [self._signed(data[i] | (data[i + 1] << 8)) for i in (0, 2, 4)]
        print("[%.03f] X: %6d Y: %6d Z: %6d" % (time.time(), x, y, z))

    @staticmethod
    def _signed(value):
        return value - 0x10000 if value & 0x8000 else value

def main():
    app = App()
    app.board.open()

    try:
        while True:
            app.board.process()
            time.sleep(0.01)
    finally:
        if app.board.is_ready:
            app.board.i2c.stop(ADXL345)

if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("Ctrl+C detected, terminating script")
        sys.exit(0)
