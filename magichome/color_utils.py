"""
Hex/RGB color conversion for the command line and HTTP front ends
"""

from typing import Tuple


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex to RGB tuple (accepts RRGGBB, #RRGGBB or 0xRRGGBB)"""
    hex_color = hex_color.strip()
    if hex_color.lower().startswith("0x"):
        hex_color = hex_color[2:]
    hex_color = hex_color.lstrip("#")

    if len(hex_color) != 6:
        raise ValueError("Hex color must be 6 characters (RRGGBB)")

    return (int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB to hex string"""
    return f"#{r:02x}{g:02x}{b:02x}".upper()
