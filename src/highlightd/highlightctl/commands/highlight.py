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

import argparse
import logging
import sys
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

from highlightd import base
from highlightd import client
from highlightd import syntaxhighlight

name = "highlight"
title = "Highlight a file using the running service"
long_description = """

This command reads source code from a file, or from STDIN, sends it to the
running highlight service and writes the resulting HTML to STDOUT.

If --language is not given, the language is guessed from Emacs and Vim
modelines, a #! line, or the file name.

"""


def setup(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--language", help="Language of the source code.")
    parser.add_argument("--host", help="Address of the highlight service.")
    parser.add_argument("--port", type=int, help="Port of the highlight service.")
    parser.add_argument(
        "--timeout", type=float, default=10.0, help="Seconds to wait for a response."
    )
    parser.add_argument(
        "--block",
        action="store_true",
        help="Wrap the output in <pre><code>, falling back to plain text.",
    )
    parser.add_argument(
        "filename", nargs="?", metavar="FILE", help="File to highlight."
    )


def read_source(filename: Optional[str], stdin: TextIO = sys.stdin) -> str:
    if filename is None or filename == "-":
        return stdin.read()
    with open(filename, "r", encoding="utf-8") as file:
        return file.read()


async def main(settings: base.Settings, arguments: argparse.Namespace) -> int:
    try:
        source = read_source(arguments.filename)
    except (OSError, UnicodeDecodeError) as error:
        logger.error("%s: %s", arguments.filename, error)
        return 1

    language = arguments.language
    if language is None:
        language = syntaxhighlight.identify_language(arguments.filename, source)
        if language is None:
            logger.error("Could not identify language; use --language.")
            return 1
        logger.debug("identified language: %s", language)

    address = (
        arguments.host or settings["service.host"],
        arguments.port or settings["service.port"],
    )

    if arguments.block:
        print(
            await client.code_block_to_html(
                source, language, address=address, timeout=arguments.timeout
            )
        )
        return 0

    try:
        html = await client.highlight(
            source, language, address=address, timeout=arguments.timeout
        )
    except client.ClientError as error:
        logger.error("%s", error)
        return 1

    print(html)
    return 0
