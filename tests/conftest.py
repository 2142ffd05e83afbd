"""Shared fixtures: an in-process fake MagicHome controller."""

import asyncio
import socket
import threading
import time

import pytest
import pytest_asyncio

STATUS_FRAME = bytes([0x81, 0x8A, 0x8B, 0x96])

# power on, static, r=10 b=20 g=30 on the wire
STATIC_REPLY = bytes([0x81, 0x44, 35, 97, 0x23, 0x10, 10, 20, 30, 0x00, 0x06, 0x00, 0x00, 0x00])
# power on, strobe, raw speed 40
STROBE_REPLY = bytes([0x81, 0x44, 35, 49, 0x23, 40, 255, 0, 0, 0x00, 0x06, 0x00, 0x00, 0x00])


class FakeDevice:
    """Minimal TCP controller: records every byte and answers status queries.

    ``reply`` is sent once per status frame received; ``None`` keeps the
    device silent and a list gives one reply per query, in order (the last
    one repeats). ``reply_delay`` holds each answer back. With
    ``close_after_reply`` the device hangs up right after answering.
    """

    def __init__(self, reply=STATIC_REPLY, close_after_reply=False):
        self.reply = reply
        self.close_after_reply = close_after_reply
        self.reply_delay = 0.0
        self.received = bytearray()
        self.connections = 0
        self.port = None
        self._replies_sent = 0
        self._server = None

    async def start(self):
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def stop(self):
        self._server.close()
        await self._server.wait_closed()

    async def _handle(self, reader, writer):
        self.connections += 1
        try:
            while True:
                data = await reader.read(1024)
                if not data:
                    break
                self.received.extend(data)
                while self.reply is not None and self.received.count(STATUS_FRAME) > self._replies_sent:
                    self._replies_sent += 1
                    if self.reply_delay:
                        await asyncio.sleep(self.reply_delay)
                    writer.write(self._next_reply())
                    await writer.drain()
                    if self.close_after_reply:
                        return
        except ConnectionError:
            pass
        finally:
            writer.close()

    def _next_reply(self):
        if isinstance(self.reply, list):
            return self.reply[min(self._replies_sent, len(self.reply)) - 1]
        return self.reply

    async def wait_for_bytes(self, count, timeout=2.0):
        deadline = time.monotonic() + timeout
        while len(self.received) < count and time.monotonic() < deadline:
            await asyncio.sleep(0.01)
        return bytes(self.received)

    def wait_for_bytes_sync(self, count, timeout=2.0):
        deadline = time.monotonic() + timeout
        while len(self.received) < count and time.monotonic() < deadline:
            time.sleep(0.01)
        return bytes(self.received)


class ThreadedDevice:
    """Runs a FakeDevice on its own event loop for synchronous tests."""

    def __init__(self, fake):
        self.fake = fake
        self.loop = asyncio.new_event_loop()
        self.thread = threading.Thread(target=self.loop.run_forever, daemon=True)

    def __enter__(self):
        self.thread.start()
        asyncio.run_coroutine_threadsafe(self.fake.start(), self.loop).result(5)
        return self.fake

    def __exit__(self, *exc):
        asyncio.run_coroutine_threadsafe(self.fake.stop(), self.loop).result(5)
        self.loop.call_soon_threadsafe(self.loop.stop)
        self.thread.join(5)
        self.loop.close()


@pytest_asyncio.fixture
async def device():
    fake = FakeDevice()
    await fake.start()
    yield fake
    await fake.stop()


@pytest.fixture
def threaded_device():
    with ThreadedDevice(FakeDevice()) as fake:
        yield fake


@pytest.fixture
def closed_port():
    """A local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
