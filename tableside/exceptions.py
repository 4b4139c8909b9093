"""Error kinds raised by the booking engine"""


class InvalidArgument(ValueError):
    """Raised when an input to the booking engine is malformed or out of range"""

    pass
