"""
Session with a single MagicHome LED controller
Owns one TCP connection and sends one command at a time
"""

import asyncio
import logging
from typing import Optional

from .config import CONNECT_TIMEOUT, READ_TIMEOUT
from .exceptions import DeviceConnectionError, DeviceIOError
from .protocol import (
    DEFAULT_PORT,
    POWER_ON,
    STATUS,
    STATUS_RESPONSE_SIZE,
    Action,
    Command,
    Function,
    color_from_rgb,
    command_for,
    encode,
)
from .status import Status, decode_status

logger = logging.getLogger(__name__)


class LEDController:
    """Connected controller session.

    Create one with :meth:`connect`; the constructor expects an already
    open stream pair. After any I/O failure the session is unusable and
    should be discarded.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        ip: str,
        port: int = DEFAULT_PORT,
        read_timeout: float = READ_TIMEOUT,
    ):
        self.ip = ip
        self.port = port
        self.read_timeout = read_timeout
        self._reader = reader
        self._writer = writer
        self._lock = asyncio.Lock()
        self._broken = False
        self._closed = False

    @classmethod
    async def connect(
        cls,
        ip: str,
        port: int = DEFAULT_PORT,
        timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
    ) -> "LEDController":
        """Open a TCP connection to the controller (single attempt)"""
        logger.debug("BULB %s:%s: Connecting", ip, port)
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(ip, port), timeout=timeout
            )
        except asyncio.TimeoutError as e:
            raise DeviceConnectionError(
                f"Timed out connecting to {ip}:{port} after {timeout}s"
            ) from e
        except OSError as e:
            raise DeviceConnectionError(f"Could not connect to {ip}:{port}: {e}") from e
        logger.debug("BULB %s:%s: Connected", ip, port)
        return cls(reader, writer, ip, port, read_timeout=read_timeout)

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """Close the connection"""
        if self._closed:
            return
        self._closed = True
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except OSError as e:
            logger.debug("BULB %s: Error while closing: %s", self.ip, e)
        logger.debug("BULB %s: Disconnected", self.ip)

    async def __aenter__(self) -> "LEDController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def set_color(self, r: int, g: int, b: int) -> None:
        """Set a static color (0-255 each). Nothing is sent if a value is out of range."""
        color = color_from_rgb(r, g, b)
        logger.debug("BULB %s: Set RGB(%d, %d, %d)", self.ip, r, g, b)
        async with self._lock:
            await self._send(color)

    async def perform(self, action: Action) -> Optional[Status]:
        """Run a named action, returning the decoded status for ``status``"""
        action = Action(action)
        logger.debug("BULB %s: Performing %s", self.ip, action.value)
        async with self._lock:
            return await self._send(command_for(action))

    async def status(self) -> Status:
        """Query current device status"""
        return await self.perform(Action.STATUS)

    async def _send(self, command: Command) -> Optional[Status]:
        if isinstance(command, Function):
            # Presets don't switch the device on by themselves
            await self._send(POWER_ON)

        await self._write(encode(command))

        if command == STATUS:
            response = await self._read_exactly(STATUS_RESPONSE_SIZE)
            logger.debug("BULB %s: Status response raw bytes: %s", self.ip, list(response))
            return decode_status(response)
        return None

    def _check_usable(self) -> None:
        if self._closed:
            raise DeviceIOError(f"Connection to {self.ip} is closed")
        if self._broken:
            raise DeviceIOError(
                f"Connection to {self.ip} failed earlier and can't be reused"
            )

    async def _write(self, frame: bytes) -> None:
        self._check_usable()
        logger.debug("BULB %s: Sending command bytes: %s", self.ip, frame.hex(" "))
        try:
            self._writer.write(frame)
            await asyncio.wait_for(self._writer.drain(), timeout=self.read_timeout)
        except asyncio.CancelledError:
            # Frame may be half written
            self._broken = True
            raise
        except asyncio.TimeoutError as e:
            self._broken = True
            raise DeviceIOError(f"Timed out writing to {self.ip}") from e
        except OSError as e:
            self._broken = True
            raise DeviceIOError(f"Write to {self.ip} failed: {e}") from e

    async def _read_exactly(self, size: int) -> bytes:
        self._check_usable()
        try:
            return await asyncio.wait_for(
                self._reader.readexactly(size), timeout=self.read_timeout
            )
        except asyncio.CancelledError:
            # The reply is still on its way and would answer the next query
            self._broken = True
            raise
        except asyncio.IncompleteReadError as e:
            self._broken = True
            raise DeviceIOError(
                f"Short read from {self.ip}: expected {size} bytes, got {len(e.partial)}"
            ) from e
        except asyncio.TimeoutError as e:
            self._broken = True
            raise DeviceIOError(f"Timed out waiting for reply from {self.ip}") from e
        except OSError as e:
            self._broken = True
            raise DeviceIOError(f"Read from {self.ip} failed: {e}") from e
