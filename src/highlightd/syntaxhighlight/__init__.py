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

"""Syntax highlighting of source code into HTML

Highlighting is done by Pygments lexers, loaded once per process into a
read-only grammar table (see load_grammars()). Tokens are marked up with
Prism-compatible CSS classes, as <span class="token keyword">fn</span>."""

from .generate import LanguageNotSupported, createHighlighter, generate
from .generic import HighlightGeneric, UnknownLexer, available_languages, classify
from .grammars import GrammarTable, load_grammars
from .language import identify_language
from .outputter import Outputter
from .tokentypes import TokenType, TokenTypes

__all__ = [
    "GrammarTable",
    "HighlightGeneric",
    "LanguageNotSupported",
    "Outputter",
    "TokenType",
    "TokenTypes",
    "UnknownLexer",
    "available_languages",
    "classify",
    "createHighlighter",
    "generate",
    "identify_language",
    "load_grammars",
]
