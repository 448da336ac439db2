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
from typing import Any, Dict

from highlightd import base
from highlightd.background import service
from highlightd.background.highlight import HighlightService

name = "run-service"
title = "Run the highlight service"
long_description = """

This command starts the highlight service in the foreground and serves
requests until it is interrupted, e.g. by pressing CTRL-c, or receives
SIGTERM.

The options below override the corresponding settings. The set of languages
is fixed once the service has started; restart it to add a language.

"""

configures_logging = True


def setup(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", help="Address to listen at.")
    parser.add_argument("--port", type=int, help="Port to listen at.")
    parser.add_argument(
        "--language",
        dest="languages",
        action="append",
        metavar="LANGUAGE",
        help="Language to support. Can be used multiple times.",
    )
    parser.add_argument(
        "--log-mode",
        choices=("stderr", "file"),
        default="stderr",
        help="Where to write the service's log.",
    )
    parser.add_argument(
        "--log-level",
        choices=service.LOG_LEVELS,
        help="Log level, overriding the service.loglevel setting.",
    )


def main(settings: base.Settings, arguments: argparse.Namespace) -> int:
    overrides: Dict[str, Any] = {
        "service.host": arguments.host,
        "service.port": arguments.port,
        "service.languages": arguments.languages,
        "service.loglevel": arguments.log_level,
    }

    settings = base.load_settings(arguments.settings_file, overrides)
    base.configure(settings)

    HighlightService.log_mode = arguments.log_mode

    return service.call(HighlightService, settings, argv=[])
