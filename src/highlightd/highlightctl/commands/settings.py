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
import json

from highlightd import base

name = "settings"
title = "Show effective settings"


def setup(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--describe", action="store_true", help="Include each setting's description."
    )
    parser.add_argument("prefix", nargs="*", help="Only show settings with PREFIX.")


def main(settings: base.Settings, arguments: argparse.Namespace) -> int:
    defaults = base.default_settings()

    for key in sorted(settings):
        if arguments.prefix and not any(
            key.startswith(prefix) for prefix in arguments.prefix
        ):
            continue
        if arguments.describe:
            description, _ = defaults[key]
            print(f"# {description}")
        print(f"{key}: {json.dumps(settings[key])}")
    return 0
