"""
This module provides transport classes for talking to a board. The serial
implementation uses PySerial both for the data stream and for finding ports
that look like a connected board.
"""

# .py files
from .UartStream import *
from .UartManager import *
