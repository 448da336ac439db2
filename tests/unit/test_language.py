from highlightd.syntaxhighlight.language import (
    find_emacs_mode,
    find_interpreter,
    find_vim_filetype,
    identify_language,
    parse_emacs_modeline,
    parse_vim_modeline,
)


def test_find_interpreter() -> None:
    assert find_interpreter(["#!/bin/sh", "A shell script."]) == "sh"
    assert find_interpreter(["#!/usr/bin/python3", "A Python script."]) == "python3"
    assert (
        find_interpreter(["#!/usr/bin/env python2.7", "A Python script."])
        == "python2.7"
    )
    assert find_interpreter(["No interpreter here."]) is None
    assert find_interpreter([]) is None


def test_parse_emacs_modeline() -> None:
    modeline = parse_emacs_modeline(
        ["# -*- foo: 10; bar: fie -*-", "Ignore this line."]
    )
    assert modeline == {"foo": "10", "bar": "fie"}

    modeline = parse_emacs_modeline(
        ["/* -*- foo: 10; bar: fie -*- */", "Ignore this line."]
    )
    assert modeline == {"foo": "10", "bar": "fie"}

    modeline = parse_emacs_modeline(
        ["# This is a modeline:", "# -*- foo: 10; bar: fie -*-", "Ignore this line."]
    )
    assert modeline == {}

    modeline = parse_emacs_modeline(
        ["#!/bin/bash", "# -*- foo: 10; bar: fie -*-", "Ignore this line."]
    )
    assert modeline == {"foo": "10", "bar": "fie"}


def test_find_emacs_mode() -> None:
    assert find_emacs_mode(["# -*- mode: python -*-", "Ignore this line."]) == "python"
    assert find_emacs_mode(["# -*- foo: bar -*-", "Ignore this line."]) is None


def test_parse_vim_modeline() -> None:
    modeline = parse_vim_modeline(["# vim: foo=10 bar=fie:", "Ignore this line."])
    assert modeline == {"foo": "10", "bar": "fie"}

    modeline = parse_vim_modeline(["# vim: set foo=10:bar=fie", "Ignore this line."])
    assert modeline == {"foo": "10", "bar": "fie"}

    modeline = parse_vim_modeline(
        [str(number) for number in range(1, 10)] + ["# vim: foo=10 bar=fie:", "x"]
    )
    assert modeline == {"foo": "10", "bar": "fie"}


def test_find_vim_filetype() -> None:
    assert find_vim_filetype(["# vim: ft=python :"]) == "python"
    assert find_vim_filetype(["# vim: filetype=python :"]) == "python"
    assert find_vim_filetype(["# vim: foo=bar :"]) is None


def test_identify_language_from_modeline() -> None:
    assert identify_language("notes.txt", "// -*- mode: rust -*-\nfn main() {}\n") == (
        "rust"
    )


def test_identify_language_from_interpreter() -> None:
    assert identify_language(None, "#!/usr/bin/env python\nprint(1)\n") == "python"


def test_identify_language_from_filename() -> None:
    assert identify_language("src/main.rs", "fn main() {}\n") == "rust"


def test_identify_language_unknown() -> None:
    assert identify_language(None, "just some words\n") is None
