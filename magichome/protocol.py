"""
Frame encoder for the MagicHome LED wire protocol

Frame layout (no length prefix, every field is one byte)::

    Control   b1 b2 b3                    checksum
    Function  0x61 preset speed 0x0F      checksum
    Color     0x31 r b g 0xFF 0x00 0x0F   checksum

The checksum is the 8-bit wraparound sum of every preceding byte.
Color payloads go out as R, B, G; the controller expects green and
blue swapped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Tuple, Union

from .exceptions import ValidationError

DEFAULT_PORT = 5577
STATUS_RESPONSE_SIZE = 14


@dataclass(frozen=True)
class Control:
    """Fixed three byte opcode"""

    b1: int
    b2: int
    b3: int


@dataclass(frozen=True)
class Function:
    """Built-in animation program"""

    preset: int
    speed: int


@dataclass(frozen=True)
class Color:
    """Static RGB color"""

    r: int
    g: int
    b: int


Command = Union[Control, Function, Color]

# Controls
STATUS = Control(0x81, 0x8A, 0x8B)
POWER_ON = Control(0x71, 0x23, 0x0F)
POWER_OFF = Control(0x71, 0x24, 0x0F)

# Presets
CHAOS = Function(49, 5)
AMBIENT = Function(37, 50)
RAINBOW = Function(37, 1)

PALETTE: Dict[str, Tuple[int, int, int]] = {
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "lime": (255, 255, 0),
    "yellow": (255, 110, 0),
    "pink": (255, 0, 170),
    "cyan": (0, 255, 255),
    "purple": (170, 0, 255),
    "orange": (255, 24, 0),
    "white": (255, 255, 255),
}


class Action(str, Enum):
    """Named actions understood by the controller front ends"""

    STATUS = "status"
    ON = "on"
    OFF = "off"
    CHAOS = "chaos"
    RAINBOW = "rainbow"
    AMBIENT = "ambient"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    ORANGE = "orange"
    LIME = "lime"
    PURPLE = "purple"
    PINK = "pink"
    CYAN = "cyan"
    WHITE = "white"

    @property
    def description(self) -> str:
        if self.value in PALETTE:
            return f"{self.value.capitalize()} static"
        return _ACTION_HELP[self.value]


_ACTION_HELP = {
    "status": "Get status of device",
    "on": "Turn on device",
    "off": "Turn off device",
    "chaos": "Red strobe",
    "rainbow": "Fast cycle",
    "ambient": "Slow cycle",
}

_ACTION_COMMANDS: Dict[str, Command] = {
    "status": STATUS,
    "on": POWER_ON,
    "off": POWER_OFF,
    "chaos": CHAOS,
    "rainbow": RAINBOW,
    "ambient": AMBIENT,
}
_ACTION_COMMANDS.update({name: Color(*rgb) for name, rgb in PALETTE.items()})


def command_for(action: Action) -> Command:
    """Look up the command an action sends"""
    return _ACTION_COMMANDS[Action(action).value]


def checksum(data: Iterable[int]) -> int:
    """Calculate frame checksum"""
    return sum(data) & 0xFF


def color_from_rgb(r: int, g: int, b: int) -> Color:
    """Build a Color from user input, checking r, then g, then b"""
    for component, value in (("r", r), ("g", g), ("b", b)):
        if not 0 <= value <= 255:
            raise ValidationError(component, value)
    return Color(r, g, b)


def encode(command: Command) -> bytes:
    """Encode a command into a wire-ready frame"""
    if isinstance(command, Color):
        cmd = [0x31, command.r, command.b, command.g, 0xFF, 0x00, 0x0F]
    elif isinstance(command, Function):
        cmd = [0x61, command.preset, command.speed, 0x0F]
    elif isinstance(command, Control):
        cmd = [command.b1, command.b2, command.b3]
    else:
        raise TypeError(f"Unsupported command: {command!r}")
    cmd.append(checksum(cmd))
    return bytes(cmd)
