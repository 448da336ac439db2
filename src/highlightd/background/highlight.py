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

"""The highlight service

Listens on a local TCP port. Each connection carries exactly one request: a
JSON object {"code": ..., "language": ...} followed by a NUL byte. The
service answers with one JSON object, {"success": html} or
{"failure": message}, followed by a newline, and closes the connection.

The grammars are loaded once at startup from the "service.languages" setting
and shared, read-only, by all connections."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

logger = logging.getLogger("highlightd.background.highlight")

from highlightd import base
from highlightd import protocol
from highlightd import syntaxhighlight
from highlightd.protocol import Failure, HighlightResponse, Success

from .service import BackgroundService, call
from .terminatedprotocol import TerminatedProtocol, TerminatedProtocolClient

# How long in-flight connections may run once the service is stopping.
STOP_TIMEOUT = 10.0


class HighlightClient(TerminatedProtocolClient):
    def __init__(
        self,
        service: HighlightService,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ):
        super().__init__(reader, writer)
        self.service = service

    async def handle_request(self, data: bytes) -> bytes:
        return protocol.encode_response(await self.process(data))

    async def process(self, data: bytes) -> HighlightResponse:
        try:
            request = protocol.decode_request(data)
        except protocol.InvalidRequest as error:
            logger.warning("%s: bad request data: %s", self.peer, error)
            return Failure(f"bad request data: {error}")
        except Exception as error:
            logger.exception("%s: failed to decode request", self.peer)
            return Failure(f"bad request data: {str(error) or type(error).__name__}")

        logger.debug(
            "%s: highlighting %d characters of %s",
            self.peer,
            len(request.code),
            request.language,
        )

        try:
            html = await self.service.highlight(request.code, request.language)
        except syntaxhighlight.LanguageNotSupported as error:
            logger.warning("%s: %s: %s", self.peer, error, request.language)
            return Failure(str(error))
        except Exception as error:
            logger.exception(
                "%s: failed to highlight for language %r", self.peer, request.language
            )
            return Failure(str(error) or type(error).__name__)

        return Success(html)


class HighlightService(BackgroundService, TerminatedProtocol[HighlightClient]):
    name = "highlight"

    grammars: syntaxhighlight.GrammarTable

    def __init__(self, settings: Optional[base.Settings] = None) -> None:
        super().__init__(settings)
        self.grammars = syntaxhighlight.load_grammars(
            self.settings["service.languages"]
        )

    def create_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> HighlightClient:
        return HighlightClient(self, reader, writer)

    def client_connected(self, client: HighlightClient) -> None:
        logger.debug("%s: connected", client.peer)

    def client_disconnected(self, client: HighlightClient) -> None:
        logger.debug("%s: disconnected", client.peer)

    def socket_address(self) -> Tuple[str, int]:
        return (self.settings["service.host"], self.settings["service.port"])

    def will_start(self) -> bool:
        return self.settings["service.enabled"]

    async def did_start(self) -> None:
        logger.info("Languages: %s", ", ".join(sorted(self.grammars)))

    async def will_stop(self) -> None:
        await self.wait_for_clients(STOP_TIMEOUT)

    async def highlight(self, code: str, language: str) -> str:
        # CPU bound, so keep it off the event loop.
        return await self.loop.run_in_executor(
            None, syntaxhighlight.generate, code, language, self.grammars
        )


if __name__ == "__main__":
    raise SystemExit(call(HighlightService))
