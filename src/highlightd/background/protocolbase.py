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

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Generic, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConnectionClosed(Exception):
    pass


class ClientBase:
    tasks: Set["asyncio.Future[Any]"]

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ):
        self.reader = reader
        self.writer = writer
        self.tasks = set()

    @property
    def peer(self) -> str:
        peername = self.writer.get_extra_info("peername")
        if isinstance(peername, tuple) and len(peername) >= 2:
            return f"{peername[0]}:{peername[1]}"
        return str(peername)

    def ensure_future(self, coroutine: Awaitable[T]) -> "asyncio.Future[T]":
        future = asyncio.ensure_future(coroutine)
        future.add_done_callback(lambda future: self.tasks.discard(future))
        self.tasks.add(future)
        return future


ClientType = TypeVar("ClientType", bound=ClientBase)


class ProtocolBase(Generic[ClientType], ABC):
    clients: Set[ClientType]

    def __init__(self) -> None:
        self.clients = set()

    def handle_connection(self) -> asyncio.StreamReaderProtocol:
        return asyncio.StreamReaderProtocol(asyncio.StreamReader(), self.handle_client)

    @abstractmethod
    def create_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> ClientType:
        ...

    @abstractmethod
    async def handle_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        ...

    def client_connected(self, client: ClientType) -> None:
        pass

    def client_disconnected(self, client: ClientType) -> None:
        pass

    async def wait_for_clients(self, timeout: float) -> None:
        tasks = {task for client in self.clients for task in client.tasks}
        if not tasks:
            return
        logger.debug("waiting for %d clients", len(self.clients))
        _, pending = await asyncio.wait(tasks, timeout=timeout)
        if pending:
            logger.warning("Cancelling %d unfinished client tasks", len(pending))
            for task in pending:
                task.cancel()

    def _add_client(self, client: ClientType) -> None:
        self.clients.add(client)
        self.client_connected(client)

    def _remove_client(self, client: ClientType) -> None:
        self.clients.discard(client)
        self.client_disconnected(client)
