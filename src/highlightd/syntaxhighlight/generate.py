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

import logging

logger = logging.getLogger(__name__)

from highlightd import base

from .generic import HighlightGeneric
from .grammars import GrammarTable
from .outputter import Outputter


class LanguageNotSupported(base.Error):
    def __init__(self, language: str):
        super().__init__("no such language recognized")
        self.language = language


def createHighlighter(language: str, grammars: GrammarTable) -> HighlightGeneric:
    lexer = grammars.get(language)
    if lexer is None:
        logger.debug("language not supported: %s", language)
        raise LanguageNotSupported(language)
    return HighlightGeneric(lexer)


def generate(source: str, language: str, grammars: GrammarTable) -> str:
    highlighter = createHighlighter(language, grammars)

    outputter = Outputter()
    highlighter(source, outputter)

    return outputter.result
