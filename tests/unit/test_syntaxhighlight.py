import html
import re

import pygments.token
import pytest

from highlightd import base
from highlightd import syntaxhighlight
from highlightd.syntaxhighlight import Outputter, TokenTypes


def strip_markup(markup: str) -> str:
    return html.unescape(re.sub(r"<[^>]+>", "", markup))


@pytest.fixture(scope="module")
def grammars() -> syntaxhighlight.GrammarTable:
    return syntaxhighlight.load_grammars(["rust", "python"])


def test_outputter_merges_adjacent_parts() -> None:
    outputter = Outputter()
    outputter.write(TokenTypes.Punctuation, "(")
    outputter.write(TokenTypes.Punctuation, ")")
    outputter.write(TokenTypes.Plain, " ")
    outputter.write(TokenTypes.Plain, "")
    outputter.write(TokenTypes.Keyword, "fn")

    assert outputter.result == (
        '<span class="token punctuation">()</span> '
        '<span class="token keyword">fn</span>'
    )


def test_outputter_escapes() -> None:
    outputter = Outputter()
    outputter.write(TokenTypes.Operator, "<")
    outputter.write(TokenTypes.Plain, "a & \"b\"")

    assert outputter.result == (
        '<span class="token operator">&lt;</span>a &amp; "b"'
    )


@pytest.mark.parametrize(
    "token, expected",
    [
        (pygments.token.Keyword, TokenTypes.Keyword),
        (pygments.token.Keyword.Declaration, TokenTypes.Keyword),
        (pygments.token.Keyword.Constant, TokenTypes.Boolean),
        (pygments.token.Name.Function, TokenTypes.Function),
        (pygments.token.Name.Function.Magic, TokenTypes.Macro),
        (pygments.token.Name.Builtin.Pseudo, TokenTypes.Builtin),
        (pygments.token.String.Double, TokenTypes.String),
        (pygments.token.String.Char, TokenTypes.Character),
        (pygments.token.Number.Integer, TokenTypes.Number),
        (pygments.token.Comment.Single, TokenTypes.Comment),
        (pygments.token.Comment.Preproc, TokenTypes.Macro),
        (pygments.token.Punctuation, TokenTypes.Punctuation),
        (pygments.token.Operator, TokenTypes.Operator),
        (pygments.token.Operator.Word, TokenTypes.Keyword),
        (pygments.token.Name, TokenTypes.Plain),
        (pygments.token.Text.Whitespace, TokenTypes.Plain),
    ],
)
def test_classify(token, expected) -> None:
    assert syntaxhighlight.classify(token) == expected


def test_generate_rust(grammars) -> None:
    markup = syntaxhighlight.generate("fn main() {}", "rust", grammars)

    assert markup.startswith('<span class="token keyword">fn</span> ')
    assert '<span class="token function">main</span>' in markup
    assert strip_markup(markup) == "fn main() {}"


def test_generate_preserves_whitespace(grammars) -> None:
    code = "\n\n    let x = 1;  // one\n\n"

    markup = syntaxhighlight.generate(code, "rust", grammars)

    assert strip_markup(markup) == code
    assert '<span class="token comment">// one' in markup


@pytest.mark.parametrize(
    "code",
    [
        "fn a() {}\r\nfn b() {}\r\n",
        "let x = 1;\rlet y = 2;",
        "﻿fn main() {}\n",
    ],
)
def test_generate_keeps_line_endings(grammars, code: str) -> None:
    markup = syntaxhighlight.generate(code, "rust", grammars)

    assert strip_markup(markup) == code


def test_generate_unknown_language(grammars) -> None:
    with pytest.raises(syntaxhighlight.LanguageNotSupported) as excinfo:
        syntaxhighlight.generate("x", "cobol", grammars)

    assert str(excinfo.value) == "no such language recognized"
    assert excinfo.value.language == "cobol"


def test_generate_only_uses_loaded_grammars() -> None:
    grammars = syntaxhighlight.load_grammars(["rust"])

    with pytest.raises(syntaxhighlight.LanguageNotSupported):
        syntaxhighlight.generate("pass", "python", grammars)


def test_load_grammars_unknown_label() -> None:
    with pytest.raises(base.InvalidConfiguration) as excinfo:
        syntaxhighlight.load_grammars(["rust", "no-such-language"])

    assert "no-such-language" in str(excinfo.value)


def test_load_grammars_is_read_only(grammars) -> None:
    with pytest.raises(TypeError):
        grammars["cobol"] = grammars["rust"]


def test_available_languages() -> None:
    languages = syntaxhighlight.available_languages()

    assert "rust" in languages
    assert "python" in languages
    assert languages == sorted(languages)
