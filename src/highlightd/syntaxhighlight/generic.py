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

import functools
from typing import Any, List, Tuple

import pygments.lexer
import pygments.lexers
import pygments.token
import pygments.util

from highlightd import base

from .outputter import Outputter
from .tokentypes import TokenType, TokenTypes

# Checked in order, so more specific Pygments token types come first.
TOKEN_TYPES: List[Tuple[Any, TokenType]] = [
    (pygments.token.Comment.Preproc, TokenTypes.Macro),
    (pygments.token.Comment, TokenTypes.Comment),
    (pygments.token.Keyword.Constant, TokenTypes.Boolean),
    (pygments.token.Keyword, TokenTypes.Keyword),
    (pygments.token.Operator.Word, TokenTypes.Keyword),
    (pygments.token.Name.Builtin, TokenTypes.Builtin),
    (pygments.token.Name.Function.Magic, TokenTypes.Macro),
    (pygments.token.Name.Function, TokenTypes.Function),
    (pygments.token.Name.Class, TokenTypes.ClassName),
    (pygments.token.Name.Namespace, TokenTypes.Namespace),
    (pygments.token.Name.Constant, TokenTypes.Constant),
    (pygments.token.Name.Attribute, TokenTypes.Attribute),
    (pygments.token.Name.Decorator, TokenTypes.Attribute),
    (pygments.token.String.Char, TokenTypes.Character),
    (pygments.token.String, TokenTypes.String),
    (pygments.token.Number, TokenTypes.Number),
    (pygments.token.Operator, TokenTypes.Operator),
    (pygments.token.Punctuation, TokenTypes.Punctuation),
]


@functools.lru_cache(maxsize=None)
def classify(token: Any) -> TokenType:
    for pygments_type, token_type in TOKEN_TYPES:
        if token in pygments_type:
            return token_type
    return TokenTypes.Plain


class UnknownLexer(base.Error):
    pass


class HighlightGeneric:
    def __init__(self, lexer: pygments.lexer.Lexer):
        self.lexer = lexer

    def __call__(self, source: str, outputter: Outputter) -> None:
        # get_tokens() would normalize line endings and drop a leading BOM.
        for _, token, value in self.lexer.get_tokens_unprocessed(source):
            outputter.write(classify(token), value)

    @staticmethod
    def createLexer(label: str) -> pygments.lexer.Lexer:
        # Neither strip nor add newlines: the output should be the input text
        # with markup added, nothing else.
        try:
            return pygments.lexers.get_lexer_by_name(
                label, stripnl=False, ensurenl=False
            )
        except pygments.util.ClassNotFound:
            raise UnknownLexer(label) from None


def available_languages() -> List[str]:
    return sorted(
        alias
        for _, aliases, _, _ in pygments.lexers.get_all_lexers()
        for alias in aliases
    )
