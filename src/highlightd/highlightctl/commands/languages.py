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

from highlightd import base
from highlightd import syntaxhighlight

name = "languages"
title = "List supported languages"


def setup(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--all",
        action="store_true",
        help="List every language that could be configured, not just the "
        "configured ones.",
    )


def main(settings: base.Settings, arguments: argparse.Namespace) -> int:
    if arguments.all:
        labels = syntaxhighlight.available_languages()
    else:
        labels = sorted(syntaxhighlight.load_grammars(settings["service.languages"]))

    for label in labels:
        print(label)
    return 0
