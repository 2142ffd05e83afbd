#!/usr/bin/env python3
"""
MagicHome HTTP bridge
FastAPI routes in front of a single LED controller
"""

import asyncio
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import Settings
from .exceptions import (
    DeviceConnectionError,
    DeviceIOError,
    ProtocolError,
    ValidationError,
)
from .led_controller import LEDController
from .protocol import Action
from .status import Status

logger = logging.getLogger(__name__)


# Request Models
class ColorCommand(BaseModel):
    # Range checks happen in the session so the r, g, b order is kept
    r: int = Field(..., description="Red 0-255")
    g: int = Field(..., description="Green 0-255")
    b: int = Field(..., description="Blue 0-255")


class DeviceBridge:
    """Opens a session per request and keeps one request on the wire at a time"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._lock = asyncio.Lock()

    async def _connect(self) -> LEDController:
        return await LEDController.connect(
            self.settings.address,
            self.settings.port,
            timeout=self.settings.timeout,
            read_timeout=self.settings.read_timeout,
        )

    async def perform(self, action: Action) -> Optional[Status]:
        async with self._lock:
            async with await self._connect() as led:
                return await led.perform(action)

    async def set_color(self, r: int, g: int, b: int) -> None:
        async with self._lock:
            async with await self._connect() as led:
                await led.set_color(r, g, b)


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, DeviceConnectionError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, (DeviceIOError, ProtocolError)):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    if not settings.address:
        raise ValueError("A controller address is required (MAGICHOME_ADDRESS)")

    bridge = DeviceBridge(settings)

    app = FastAPI(
        title="MagicHome LED Bridge",
        description="Single controller MagicHome control over HTTP",
        version="1.0.0",
    )
    app.state.bridge = bridge

    # CORS middleware for local network access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        return {
            "message": "MagicHome LED Bridge",
            "device": f"{settings.address}:{settings.port}",
        }

    @app.get("/status")
    async def get_status():
        """Get current device status"""
        try:
            status = await bridge.perform(Action.STATUS)
        except Exception as e:
            logger.debug("API: GET /status failed: %s", e)
            raise _to_http_error(e)
        return status.to_dict()

    @app.post("/actions/{action_name}")
    async def perform_action(action_name: str):
        """Run a named action (on, off, presets, palette colors, status)"""
        try:
            action = Action(action_name)
        except ValueError:
            raise HTTPException(status_code=404, detail=f"Unknown action: {action_name}")

        logger.debug("API: POST /actions/%s", action.value)
        try:
            status = await bridge.perform(action)
        except Exception as e:
            logger.debug("API: Action %s failed: %s", action.value, e)
            raise _to_http_error(e)

        return {
            "message": "Command executed",
            "action": action.value,
            "status": status.to_dict() if status else None,
        }

    @app.post("/color")
    async def set_color(command: ColorCommand):
        """Set a static RGB color"""
        logger.debug("API: POST /color - %s", command.model_dump())
        try:
            await bridge.set_color(command.r, command.g, command.b)
        except Exception as e:
            logger.debug("API: Set color failed: %s", e)
            raise _to_http_error(e)

        return {
            "message": "Command executed",
            "action": "color",
            "color": [command.r, command.g, command.b],
        }

    return app
