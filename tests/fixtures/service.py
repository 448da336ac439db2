from __future__ import annotations

import asyncio
import socket
import threading
from typing import AsyncIterator, Callable, Awaitable, Iterator, List, Tuple

import pytest
import pytest_asyncio

from highlightd import base
from highlightd.background.highlight import HighlightService


LANGUAGES = ["rust", "python"]


@pytest.fixture
def service_settings(tmp_path) -> base.Settings:
    return base.load_settings(
        str(tmp_path / "settings.yaml"),
        {
            "service.host": "127.0.0.1",
            "service.port": 0,
            "service.languages": LANGUAGES,
            "service.loglevel": "debug",
        },
    )


@pytest_asyncio.fixture
async def highlight_service(
    service_settings: base.Settings,
) -> AsyncIterator[HighlightService]:
    service = HighlightService(service_settings)
    await service.start(install_signal_handlers=False)
    try:
        yield service
    finally:
        await service.shutdown()


class Connection:
    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        self.reader = reader
        self.writer = writer

    async def send(self, data: bytes) -> None:
        self.writer.write(data)
        await self.writer.drain()

    async def send_chunks(self, chunks: List[bytes]) -> None:
        for chunk in chunks:
            await self.send(chunk)
            # Give the service a chance to read each chunk separately.
            await asyncio.sleep(0.001)

    async def receive(self, timeout: float = 10) -> bytes:
        return await asyncio.wait_for(self.reader.read(), timeout)

    async def close(self) -> None:
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except ConnectionError:
            pass


Connect = Callable[[], Awaitable[Connection]]


@pytest_asyncio.fixture
async def connect(highlight_service: HighlightService) -> AsyncIterator[Connect]:
    connections: List[Connection] = []
    host, port = base.asserted(highlight_service.listening_address)

    async def open_connection() -> Connection:
        connection = Connection(*await asyncio.open_connection(host, port))
        connections.append(connection)
        return connection

    yield open_connection

    for connection in connections:
        await connection.close()


@pytest.fixture
def closed_port() -> Tuple[str, int]:
    """An address that nothing listens at"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()


@pytest.fixture
def threaded_service(service_settings: base.Settings) -> Iterator[Tuple[str, int]]:
    """Address of a service running on an event loop in another thread"""
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()

    async def start() -> HighlightService:
        service = HighlightService(service_settings)
        await service.start(install_signal_handlers=False)
        return service

    service = asyncio.run_coroutine_threadsafe(start(), loop).result(10)
    try:
        yield base.asserted(service.listening_address)
    finally:
        asyncio.run_coroutine_threadsafe(service.shutdown(), loop).result(10)
        loop.call_soon_threadsafe(loop.stop)
        thread.join(10)
        loop.close()
