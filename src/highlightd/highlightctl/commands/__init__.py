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
from typing import Any, Protocol, Sequence, cast

from highlightd import base

from . import highlight
from . import languages
from . import run_service
from . import settings


class CommandModule(Protocol):
    name: str
    title: str

    def setup(self, parser: argparse.ArgumentParser) -> None:
        ...

    def main(self, settings: base.Settings, arguments: argparse.Namespace) -> Any:
        ...


modules = cast(
    Sequence[CommandModule],
    [
        highlight,
        languages,
        run_service,
        settings,
    ],
)
