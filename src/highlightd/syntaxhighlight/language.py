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

import itertools
import logging
import re
from typing import Mapping, Optional, Sequence

import pygments.lexers
import pygments.util

logger = logging.getLogger(__name__)

RE_INTERPRETER = re.compile(r"#!(?:/[^/]+)+/([^/]+?)(?:\s+(\S+))?(?:\s|$)")


def find_interpreter(lines: Sequence[str]) -> Optional[str]:
    if not lines:
        return None
    match = RE_INTERPRETER.match(lines[0])
    if match:
        interpreter, argument = match.groups()
        if interpreter == "env":
            return argument
        return interpreter
    return None


RE_EMACS_MODELINE = re.compile(
    r"\W*-\*-\s*([-\w]+\s*:\s*[^;]+(?:;\s*[-\w]+\s*:\s*[^;]+)*)\s*-\*-"
)


def parse_emacs_modeline(lines: Sequence[str]) -> Mapping[str, str]:
    for line in lines[:2]:
        if line.startswith("#!"):
            continue
        match = RE_EMACS_MODELINE.match(line)
        if match:
            assignments = match.group(1).split(";")
            return {
                name.strip(): value.strip()
                for name, _, value in [
                    assignment.partition(":") for assignment in assignments
                ]
            }
        break
    return {}


def find_emacs_mode(lines: Sequence[str]) -> Optional[str]:
    return parse_emacs_modeline(lines).get("mode")


RE_VIM_MODELINE_SET = re.compile(
    r"\W*vim:\s+set(?:local)?\s+([^=]+=[^:]+(?::[^=]+=[^:]+)*)"
)
RE_VIM_MODELINE_NOSET = re.compile(r"\W*vim:((?:\s*[^=]+=\S+)+)\s*:")


def parse_vim_modeline(lines: Sequence[str]) -> Mapping[str, str]:
    for line in itertools.chain(lines[:5], reversed(lines[-5:])):
        match = RE_VIM_MODELINE_SET.match(line)
        if match:
            assignments = match.group(1).split(":")
        else:
            match = RE_VIM_MODELINE_NOSET.match(line)
            if match:
                assignments = match.group(1).split()
            else:
                continue
        return {
            name: value
            for name, _, value in (
                assignment.partition("=") for assignment in assignments
            )
        }
    return {}


def find_vim_filetype(lines: Sequence[str]) -> Optional[str]:
    vim_modeline = parse_vim_modeline(lines)
    if "ft" in vim_modeline:
        return vim_modeline["ft"]
    return vim_modeline.get("filetype")


def _known_label(name: str) -> Optional[str]:
    try:
        pygments.lexers.get_lexer_by_name(name)
    except pygments.util.ClassNotFound:
        return None
    return name


def identify_language(path: Optional[str], source: str) -> Optional[str]:
    """Guess the language label of |source|

    Modelines and the #! interpreter take precedence over the file name,
    since they are explicit. Returns None if nothing matches."""

    lines = source.splitlines()

    for candidate in (
        find_emacs_mode(lines),
        find_vim_filetype(lines),
        find_interpreter(lines),
    ):
        if candidate:
            label = _known_label(candidate.lower())
            if label:
                return label

    if path:
        try:
            lexer = pygments.lexers.get_lexer_for_filename(path, source)
        except pygments.util.ClassNotFound:
            pass
        else:
            if lexer.aliases:
                return lexer.aliases[0]

    logger.debug("could not identify language: %s", path)
    return None
