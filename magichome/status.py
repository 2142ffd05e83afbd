"""
Decoding of the controller's 14 byte status reply
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .color_utils import rgb_to_hex
from .exceptions import ProtocolError
from .protocol import STATUS_RESPONSE_SIZE

POWER_ON_BYTE = 35


class Mode(str, Enum):
    STATIC = "static"
    STROBE = "strobe"
    CYCLE = "cycle"
    UNKNOWN = "unknown"


# Mode byte -> (mode, reports speed)
_MODES = {
    97: (Mode.STATIC, False),
    49: (Mode.STROBE, True),
    37: (Mode.CYCLE, True),
}


@dataclass(frozen=True)
class Status:
    """Snapshot of device state"""

    power: bool
    color: Tuple[int, int, int]
    mode: Mode
    speed: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to API-friendly dict"""
        return {
            "power": self.power,
            "color": list(self.color),
            "hex": rgb_to_hex(*self.color),
            "mode": self.mode.value,
            "speed": self.speed,
        }

    def lines(self) -> List[str]:
        """Human readable rendering, one field per line"""
        r, g, b = self.color
        lines = [
            f"Power: {'on' if self.power else 'off'}",
            f"Color: ({r}, {g}, {b})",
            f"Mode: {self.mode.value}",
        ]
        if self.speed is not None:
            lines.append(f"Speed: {self.speed}")
        return lines

    def __str__(self) -> str:
        return "\n".join(self.lines())


def decode_status(buffer: bytes) -> Status:
    """Decode a status reply.

    Bytes 0, 1, 4 and 9-13 are not interpreted. Color comes back in the
    same R, B, G order it is sent in, so offsets 6, 8, 7 give R, G, B.
    An unrecognised mode byte decodes to ``Mode.UNKNOWN`` rather than
    failing.
    """
    if len(buffer) < STATUS_RESPONSE_SIZE:
        raise ProtocolError(
            f"Status reply must be {STATUS_RESPONSE_SIZE} bytes, got {len(buffer)}"
        )

    power = buffer[2] == POWER_ON_BYTE
    color = (buffer[6], buffer[8], buffer[7])

    mode, has_speed = _MODES.get(buffer[3], (Mode.UNKNOWN, False))
    speed = 100 - buffer[5] if has_speed else None

    return Status(power=power, color=color, mode=mode, speed=speed)
