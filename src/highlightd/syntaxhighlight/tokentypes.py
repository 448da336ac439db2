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

from typing import Optional

# CSS class names, compatible with the site's Prism stylesheet. None means the
# text is emitted without markup.
TokenType = Optional[str]


class TokenTypes:
    Plain: TokenType = None
    Keyword: TokenType = "keyword"
    Boolean: TokenType = "boolean"
    Builtin: TokenType = "builtin"
    Function: TokenType = "function"
    Macro: TokenType = "macro"
    ClassName: TokenType = "class-name"
    Namespace: TokenType = "namespace"
    Constant: TokenType = "constant"
    Attribute: TokenType = "attribute"
    String: TokenType = "string"
    Character: TokenType = "char"
    Comment: TokenType = "comment"
    Number: TokenType = "number"
    Operator: TokenType = "operator"
    Punctuation: TokenType = "punctuation"
