# -*- mode: python; encoding: utf-8 -*-
#
# Copyright 2021 the highlightd contributors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License.  You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.  See the
# License for the specific language governing permissions and limitations under
# the License.

"""Request/response framing: one terminated request, one response, close

The client writes a request followed by a terminator byte and waits. The
server accumulates bytes until a chunk ends with the terminator, hands the
request (without terminator) to the client object, writes the single response
and closes the connection. Connections are never reused."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TypeVar

logger = logging.getLogger(__name__)

from highlightd import protocol

from .protocolbase import ClientBase, ConnectionClosed, ProtocolBase

CHUNK_SIZE = 64 * 1024


async def read_terminated(
    reader: asyncio.StreamReader,
    terminator: bytes = protocol.TERMINATOR,
    chunk_size: int = CHUNK_SIZE,
) -> bytes:
    """Read chunks until one ends with |terminator|

    Only a chunk's final byte is checked; the terminator cannot occur inside
    a valid request. Raises ConnectionClosed on EOF before the terminator."""

    buffer = bytearray()
    while True:
        try:
            chunk = await reader.read(chunk_size)
        except ConnectionError:
            raise ConnectionClosed() from None
        if not chunk:
            raise ConnectionClosed()
        if chunk.endswith(terminator):
            buffer += chunk[: -len(terminator)]
            return bytes(buffer)
        buffer += chunk


class TerminatedProtocolClient(ClientBase, ABC):
    @abstractmethod
    async def handle_request(self, data: bytes) -> bytes:
        ...

    async def write_response(self, data: bytes) -> None:
        self.writer.write(data)
        await self.writer.drain()

    async def close(self) -> None:
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except ConnectionError:
            pass

    async def run(self) -> None:
        try:
            try:
                data = await read_terminated(self.reader)
            except ConnectionClosed:
                logger.debug("%s: connection closed before end of request", self.peer)
                return

            response = await self.handle_request(data)

            try:
                await self.write_response(response)
            except ConnectionError as error:
                logger.debug("%s: failed to write response: %s", self.peer, error)
        finally:
            await self.close()


TerminatedClientType = TypeVar(
    "TerminatedClientType", bound=TerminatedProtocolClient
)


class TerminatedProtocol(ProtocolBase[TerminatedClientType]):
    manage_socket = True

    async def handle_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        client = self.create_client(reader, writer)
        self._add_client(client)
        try:
            await client.ensure_future(client.run())
        except asyncio.CancelledError:
            logger.debug("%s: cancelled", client.peer)
            raise
        except Exception:
            logger.exception("%s: client crashed", client.peer)
        finally:
            self._remove_client(client)
