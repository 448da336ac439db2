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

import html
from typing import List, Tuple

from .tokentypes import TokenType

Part = Tuple[str, TokenType]


class Outputter:
    """Collects highlighted text and renders it as HTML

    Adjacent text of the same token type is merged into a single part, so
    "()" becomes one punctuation span rather than two."""

    parts: List[Part]

    def __init__(self) -> None:
        self.parts = []

    def write(self, token_type: TokenType, content: str) -> None:
        if not content:
            return
        if self.parts and self.parts[-1][1] == token_type:
            self.parts[-1] = (self.parts[-1][0] + content, token_type)
        else:
            self.parts.append((content, token_type))

    @property
    def result(self) -> str:
        return "".join(
            self._renderPart(content, token_type) for content, token_type in self.parts
        )

    @staticmethod
    def _renderPart(content: str, token_type: TokenType) -> str:
        escaped = html.escape(content, quote=False)
        if token_type is None:
            return escaped
        return f'<span class="token {token_type}">{escaped}</span>'
