"""
Connection settings, taken from the environment and command line
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .protocol import DEFAULT_PORT

CONNECT_TIMEOUT = 3.0
READ_TIMEOUT = 2.0


@dataclass
class Settings:
    address: Optional[str] = None
    port: int = DEFAULT_PORT
    timeout: float = CONNECT_TIMEOUT
    read_timeout: float = READ_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from MAGICHOME_* variables"""
        env = os.environ if environ is None else environ
        return cls(
            address=env.get("MAGICHOME_ADDRESS") or None,
            port=int(env.get("MAGICHOME_PORT", DEFAULT_PORT)),
            timeout=float(env.get("MAGICHOME_TIMEOUT", CONNECT_TIMEOUT)),
            read_timeout=float(env.get("MAGICHOME_READ_TIMEOUT", READ_TIMEOUT)),
        )
