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

"""Client side of the highlight service, for the page renderer

One connection per code block: the request is written, the response read
until the service closes the connection."""

from __future__ import annotations

import asyncio
import html
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

from highlightd import base
from highlightd import protocol


class ClientError(base.Error):
    pass


class ServiceUnavailable(ClientError):
    pass


class HighlightTimeout(ClientError):
    pass


class BadResponse(ClientError):
    pass


class HighlightFailed(ClientError):
    pass


def service_address() -> Tuple[str, int]:
    settings = base.settings()
    return (settings["service.host"], settings["service.port"])


async def highlight(
    code: str,
    language: str,
    *,
    address: Optional[Tuple[str, int]] = None,
    timeout: Optional[float] = None,
) -> str:
    """Highlight |code| as |language| using the running service

    Returns the HTML markup. Raises HighlightFailed if the service answered
    with a failure, and another ClientError if it could not be asked."""

    if address is None:
        address = service_address()
    host, port = address

    async def communicate() -> bytes:
        try:
            reader, writer = await asyncio.open_connection(host, port)
        except OSError as error:
            raise ServiceUnavailable(
                f"failed to connect to highlighting server at {host}:{port}: {error}"
            ) from None

        try:
            writer.write(
                protocol.encode_request(protocol.HighlightRequest(code, language))
            )
            await writer.drain()
            return await reader.read()
        except ConnectionError as error:
            raise ServiceUnavailable(f"connection failed: {error}") from None
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass

    try:
        data = await asyncio.wait_for(communicate(), timeout)
    except asyncio.TimeoutError:
        raise HighlightTimeout(f"no response within {timeout} seconds") from None

    try:
        response = protocol.decode_response(data)
    except protocol.InvalidResponse as error:
        raise BadResponse(
            f"failed to read response from highlighting server: {error}"
        ) from None

    if isinstance(response, protocol.Failure):
        raise HighlightFailed(f"server failed to highlight code: {response.message}")
    return response.message


def highlight_sync(
    code: str,
    language: str,
    *,
    address: Optional[Tuple[str, int]] = None,
    timeout: Optional[float] = None,
) -> str:
    """Like highlight(), for callers without a running event loop"""

    return asyncio.run(highlight(code, language, address=address, timeout=timeout))


async def code_block_to_html(
    code: str,
    language: Optional[str],
    *,
    address: Optional[Tuple[str, int]] = None,
    timeout: Optional[float] = None,
) -> str:
    """Render a code block as <pre><code class="language-...">

    Without a language, the code is not highlighted. If highlighting fails for
    any reason, the code is output as if no language was selected, but the
    class is kept."""

    if not language:
        return f"<pre><code>\n{html.escape(code, quote=False)}\n</code></pre>"

    try:
        content = await highlight(code, language, address=address, timeout=timeout)
    except ClientError as error:
        logger.warning("Could not highlight code for language %r: %s", language, error)
        content = html.escape(code, quote=False)

    return (
        f'<pre><code class="language-{html.escape(language)}">\n'
        f"{content}\n</code></pre>"
    )
