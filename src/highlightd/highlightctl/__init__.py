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

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

logger = logging.getLogger(__name__)

from highlightd import base


class LevelFilter(logging.Filter):
    def __init__(self, predicate):
        super().__init__()
        self.predicate = predicate

    def filter(self, record):
        return self.predicate(record.levelno)


def configure_logging(loglevel: int, color: Optional[bool]) -> None:
    from highlightd.base import coloredlog

    root_logger = logging.getLogger()
    root_logger.setLevel(loglevel)

    log_format = "%(levelname)7s  %(message)s"

    for stream, predicate in (
        (sys.stdout, lambda level: level <= logging.INFO),
        (sys.stderr, lambda level: level > logging.INFO),
    ):
        formatter: logging.Formatter
        if color or (color is None and coloredlog.Formatter.is_supported(stream)):
            formatter = coloredlog.Formatter(log_format)
        else:
            formatter = logging.Formatter(log_format)
        handler = logging.StreamHandler(stream)
        handler.addFilter(LevelFilter(predicate))
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def run(argv: Optional[List[str]] = None) -> int:
    class CustomFormatter(argparse.ArgumentDefaultsHelpFormatter):
        def add_text(self, text: Optional[str]) -> None:
            if text is not None:
                for paragraph in text.split("\n\n"):
                    super().add_text(paragraph)

    title = "highlightd administration interface"

    parser = argparse.ArgumentParser(
        prog="highlightctl", description=title, formatter_class=CustomFormatter
    )

    parser.add_argument(
        "--settings-file",
        metavar="FILE",
        help="Read settings from FILE instead of the default location.",
    )

    output = parser.add_argument_group("Output options")
    output.add_argument(
        "--verbose",
        action="store_const",
        dest="loglevel",
        const=logging.DEBUG,
        help="Enable debug output.",
    )
    output.add_argument(
        "--quiet",
        action="store_const",
        dest="loglevel",
        const=logging.WARNING,
        help="Disable purely informative output.",
    )
    output.add_argument("--color", action="store_const", const=True, dest="color")
    output.add_argument("--no-color", action="store_const", const=False, dest="color")

    parser.set_defaults(loglevel=logging.INFO, color=None)

    subparsers = parser.add_subparsers(metavar="COMMAND", help="Command to perform.")

    from . import commands

    for module in commands.modules:
        long_description = f"highlightd administration interface: {module.title}"
        if hasattr(module, "long_description"):
            long_description += "\n\n" + getattr(module, "long_description").strip()

        subparser = subparsers.add_parser(
            module.name,
            description=long_description,
            help=module.title,
            formatter_class=CustomFormatter,
        )
        subparser.set_defaults(
            command_main=module.main,
            configures_logging=getattr(module, "configures_logging", False),
        )
        module.setup(subparser)

    arguments = parser.parse_args(argv)

    if not hasattr(arguments, "command_main"):
        parser.print_help()
        return 0

    if not arguments.configures_logging:
        configure_logging(arguments.loglevel, arguments.color)

    try:
        settings = base.load_settings(arguments.settings_file)
        returncode = arguments.command_main(settings, arguments)
        if asyncio.iscoroutine(returncode):
            returncode = asyncio.run(returncode)
    except base.Error as error:
        # Logging may not be configured for commands that do it themselves.
        print(f"highlightctl: {error}", file=sys.stderr)
        return 1

    if returncode is None:
        returncode = 0
    return returncode


def main() -> int:
    return run()
