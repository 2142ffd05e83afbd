"""Client for MagicHome network LED controllers."""

__version__ = "1.0.0"

from .exceptions import (
    DeviceConnectionError,
    DeviceIOError,
    MagicHomeError,
    ProtocolError,
    ValidationError,
)
from .led_controller import LEDController
from .protocol import Action, Color, Control, Function, checksum, encode
from .status import Mode, Status, decode_status

__all__ = [
    "Action",
    "Color",
    "Control",
    "DeviceConnectionError",
    "DeviceIOError",
    "Function",
    "LEDController",
    "MagicHomeError",
    "Mode",
    "ProtocolError",
    "Status",
    "ValidationError",
    "checksum",
    "decode_status",
    "encode",
]
