"""
Error types raised by the MagicHome client
"""


class MagicHomeError(Exception):
    """Base class for all client errors"""


class DeviceConnectionError(MagicHomeError, ConnectionError):
    """TCP connect to the controller failed (refused, timeout, DNS)"""


class ValidationError(MagicHomeError, ValueError):
    """An RGB component is outside 0-255"""

    def __init__(self, component: str, value: int):
        super().__init__(f"Invalid {component} value")
        self.component = component
        self.value = value


class DeviceIOError(MagicHomeError, OSError):
    """A frame write or status read did not complete"""


class ProtocolError(MagicHomeError):
    """The controller replied with a malformed status frame"""
