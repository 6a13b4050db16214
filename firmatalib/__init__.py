"""
firmatalib is a host-side implementation of the Firmata protocol, used to
control and query the pins and peripherals of a microcontroller running
Firmata firmware over a serial link.

The package is split into the protocol engine (parser, packets, board state
and handshake), the sub-protocols built on SysEx messages (I2C, OneWire,
serial passthrough and stepper motors), encoding helpers, and hardware
abstraction layer (HAL) classes for the transport. See the submodule
documentation for additional detail.

Note that firmatalib requires Python 3.x.
"""

# .py files
from .common import *
from .Exceptions import *

from .Encoding import *
from .OneWireUtils import *
from .Emitter import *
from .Pin import *

from .FirmataPacket import *
from .FirmataProtocol import *
from .FirmataParser import *
from .Stream import *

from .I2C import *
from .OneWire import *
from .UartPassthrough import *
from .Stepper import *
from .AccelStepper import *
from .Board import *

# submodule folders
from . import hal
