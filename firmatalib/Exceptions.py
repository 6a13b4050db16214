"""Firmata Exception Definitions

These derived exception classes provide a way for firmatalib code to raise
unique exceptions to be caught (optionally) by application code.
"""

class FirmataException(Exception):
    """Base exception class for any firmatalib-related exception

    This type may be used to catch firmatalib exceptions generally within an
    application, but should not be raised directly. Rather, extend the class
    into something more specific (as in the FirmataProtocolException) and then
    raise that instead.
    """

    pass

class FirmataHalException(FirmataException):
    """Exception class for any hardware access functions

    firmatalib code raises this type of exception if a base class method is
    not correctly re-implemented in a child class (e.g. `Stream.open` vs.
    `UartStream.open`), or when no usable serial port can be found for a new
    board connection.
    """

    pass

class FirmataProtocolException(FirmataException):
    """Exception class for encoding and decoding functions

    firmatalib code raises this type of exception when a caller hands the
    codec helpers data that cannot be decoded, such as an odd number of bytes
    where 7-bit LSB/MSB pairs are expected. Malformed data arriving from the
    board itself never raises; the parser drops it instead.
    """

    pass

class FirmataConfigurationException(FirmataException):
    """Exception class for invalid requests made by application code

    firmatalib code raises this type of exception synchronously, before any
    byte is sent to the board, when a call is missing a required parameter or
    is made in the wrong state. Examples are a serial configuration without a
    port id, a software serial port with only one of its RX/TX pins, an I2C
    request before I2C has been configured, an out-of-range multi-stepper
    group, or a SysEx handler registration for a command byte that already has
    a handler.
    """

    pass
