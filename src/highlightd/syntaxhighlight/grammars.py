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
from types import MappingProxyType
from typing import Iterable, Mapping

import pygments.lexer

logger = logging.getLogger(__name__)

from highlightd import base

from .generic import HighlightGeneric, UnknownLexer

GrammarTable = Mapping[str, pygments.lexer.Lexer]


def load_grammars(labels: Iterable[str]) -> GrammarTable:
    """Load a lexer for each label, once

    The returned table is read-only; changing the set of languages means
    building a new table, which the service only does at startup."""

    grammars = {}
    for label in labels:
        if label in grammars:
            continue
        try:
            grammars[label] = HighlightGeneric.createLexer(label)
        except UnknownLexer:
            raise base.InvalidConfiguration(
                f"service.languages: unknown language: {label}"
            ) from None
        logger.debug("loaded grammar: %s (%s)", label, grammars[label].name)
    return MappingProxyType(grammars)
