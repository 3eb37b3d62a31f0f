# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

import pytest

from html5tree import _tokenizer
from html5tree._tokenizer import HTMLTokenizer


def concatenateCharacterTokens(tokens):
    outputTokens = []
    for token in tokens:
        if isinstance(token, (_tokenizer.Characters, _tokenizer.SpaceCharacters)):
            if (outputTokens and isinstance(outputTokens[-1], list) and
                    outputTokens[-1][0] == "Character"):
                outputTokens[-1][1] += token.data
            else:
                outputTokens.append(["Character", token.data])
        else:
            outputTokens.append(token)
    return outputTokens


def convert(token):
    if isinstance(token, list):
        return tuple(token)
    if isinstance(token, _tokenizer.StartTag):
        rv = ("StartTag", token.name, token.attributes)
        if token.self_closing:
            rv += (True,)
        return rv
    if isinstance(token, _tokenizer.EndTag):
        return ("EndTag", token.name)
    if isinstance(token, _tokenizer.Comment):
        return ("Comment", token.data)
    if isinstance(token, _tokenizer.Doctype):
        return ("DOCTYPE", token.name, token.public_id, token.system_id,
                token.correct)
    if isinstance(token, _tokenizer.ParseError):
        return "ParseError"
    return ("EOF",)


def tokenize(data, state=None, lastStartTag=None):
    tokenizer = HTMLTokenizer(data)
    if state is not None:
        tokenizer.state = getattr(tokenizer, state)
    if lastStartTag is not None:
        tokenizer.lastStartTagName = lastStartTag
    tokens = concatenateCharacterTokens(
        t for t in tokenizer if not isinstance(t, _tokenizer.ParseError))
    return [convert(t) for t in tokens]


def errors(data):
    return [t.data for t in HTMLTokenizer(data)
            if isinstance(t, _tokenizer.ParseError)]


def test_ends_with_single_eof():
    tokens = list(HTMLTokenizer("a<b>"))
    assert isinstance(tokens[-1], _tokenizer.EndOfFile)
    assert sum(isinstance(t, _tokenizer.EndOfFile) for t in tokens) == 1


def test_empty_input():
    assert tokenize("") == [("EOF",)]


def test_one_token_per_character():
    tokens = list(HTMLTokenizer("a b"))
    assert [type(t) for t in tokens[:3]] == [_tokenizer.Characters,
                                             _tokenizer.SpaceCharacters,
                                             _tokenizer.Characters]


def test_tags_and_attributes():
    assert tokenize('<DIV Class="a" id=b data-x=\'c\' hidden>x</Div>') == [
        ("StartTag", "div", {"class": "a", "id": "b", "data-x": "c",
                             "hidden": ""}),
        ("Character", "x"),
        ("EndTag", "div"),
        ("EOF",),
    ]


def test_attribute_order_kept():
    start, eof = tokenize("<p Z=1 a=2 M=3>")
    assert list(start[2]) == ["z", "a", "m"]
    assert eof == ("EOF",)


def test_duplicate_attribute_first_wins():
    assert tokenize('<p a=1 A=2>') == [("StartTag", "p", {"a": "1"}),
                                       ("EOF",)]
    assert errors('<p a=1 A=2>') == ["duplicate-attribute"]


def test_self_closing():
    assert tokenize("<br/>") == [("StartTag", "br", {}, True), ("EOF",)]


def test_end_tag_attributes_reported():
    assert "attributes-in-end-tag" in errors('</p a="b">')


def test_comments():
    assert tokenize("<!-- x --><!---->") == [("Comment", " x "),
                                            ("Comment", ""),
                                            ("EOF",)]


@pytest.mark.parametrize("data, comment", [
    ("<!bogus>", "bogus"),
    ("<?xml version?>", "?xml version?"),
    ("</ x>", " x"),
    ("<!>", ""),
])
def test_bogus_comment(data, comment):
    assert tokenize(data) == [("Comment", comment), ("EOF",)]


def test_doctype():
    assert tokenize("<!DOCTYPE html>") == [
        ("DOCTYPE", "html", None, None, True), ("EOF",)]
    assert tokenize("<!doctype HTML>") == [
        ("DOCTYPE", "html", None, None, True), ("EOF",)]


def test_doctype_identifiers():
    data = ('<!DOCTYPE html PUBLIC "-//W3C//DTD HTML 4.01//EN" '
            '"http://www.w3.org/TR/html4/strict.dtd">')
    assert tokenize(data) == [
        ("DOCTYPE", "html", "-//W3C//DTD HTML 4.01//EN",
         "http://www.w3.org/TR/html4/strict.dtd", True),
        ("EOF",)]


def test_doctype_eof():
    assert tokenize("<!DOCTYPE") == [("DOCTYPE", "", None, None, False),
                                     ("EOF",)]


def test_named_entities():
    assert tokenize("&amp; &lt;&gt;") == [("Character", "& <>"), ("EOF",)]


def test_entity_without_semicolon():
    assert tokenize("&ampx") == [("Character", "&x"), ("EOF",)]
    assert errors("&ampx") == ["named-entity-without-semicolon"]


def test_longest_entity_match():
    assert tokenize("&notit;") == [("Character", "¬it;"), ("EOF",)]
    assert tokenize("&notin;") == [("Character", "∉"), ("EOF",)]


def test_unknown_entity():
    assert tokenize("&foo; & &") == [("Character", "&foo; & &"), ("EOF",)]


@pytest.mark.parametrize("data, expected, error", [
    ("&#65;", "A", None),
    ("&#x41;", "A", None),
    ("&#X41", "A", "numeric-entity-without-semicolon"),
    ("&#128;", "€", "illegal-codepoint-for-numeric-entity"),
    ("&#0;", "\ufffd", "illegal-codepoint-for-numeric-entity"),
    ("&#xD800;", "\ufffd", "illegal-codepoint-for-numeric-entity"),
    ("&#x110000;", "\ufffd", "illegal-codepoint-for-numeric-entity"),
    ("&#99999999999;", "\ufffd", "illegal-codepoint-for-numeric-entity"),
    ("&#;", "&#;", "expected-numeric-entity"),
    ("&#x;", "&#x;", "expected-numeric-entity"),
])
def test_numeric_entities(data, expected, error):
    assert tokenize(data) == [("Character", expected), ("EOF",)]
    if error is None:
        assert errors(data) == []
    else:
        assert error in errors(data)


def test_numeric_entity_followed_by_markup():
    assert tokenize("&#65<b>") == [
        ("Character", "A"), ("StartTag", "b", {}), ("EOF",)]
    assert tokenize("<a title=&#66>") == [
        ("StartTag", "a", {"title": "B"}), ("EOF",)]


def test_entity_in_attribute():
    assert tokenize('<a href="?a=1&amp;b=2&lt">') == [
        ("StartTag", "a", {"href": "?a=1&b=2<"}), ("EOF",)]


def test_null_in_data():
    assert tokenize("a\u0000b") == [("Character", "a\u0000b"), ("EOF",)]
    assert errors("a\u0000b") == ["invalid-codepoint"]


def test_null_in_rcdata():
    assert tokenize("a\u0000", state="rcdataState") == [
        ("Character", "a\ufffd"), ("EOF",)]


def test_rawtext_appropriate_end_tag():
    assert tokenize('x = "<p>";</script>', state="rawtextState",
                    lastStartTag="script") == [
        ("Character", 'x = "<p>";'),
        ("EndTag", "script"),
        ("EOF",)]


def test_rawtext_inappropriate_end_tag():
    assert tokenize("</scrip></style>", state="rawtextState",
                    lastStartTag="script") == [
        ("Character", "</scrip></style>"), ("EOF",)]


def test_rawtext_end_tag_case_insensitive():
    assert tokenize("a</SCRIPT>b", state="rawtextState",
                    lastStartTag="script") == [
        ("Character", "a"), ("EndTag", "script"), ("Character", "b"),
        ("EOF",)]


def test_rcdata_keeps_entities():
    assert tokenize("a&amp;<b></title>", state="rcdataState",
                    lastStartTag="title") == [
        ("Character", "a&<b>"), ("EndTag", "title"), ("EOF",)]


def test_plaintext():
    assert tokenize("<b>&amp;</plaintext>", state="plaintextState") == [
        ("Character", "<b>&amp;</plaintext>"), ("EOF",)]


def test_eof_in_tag_drops_tag():
    assert tokenize("a<div class=") == [("Character", "a"), ("EOF",)]


def test_lone_less_than():
    assert tokenize("a < b <>") == [("Character", "a < b <>"), ("EOF",)]


def test_error_positions():
    tokens = [t for t in HTMLTokenizer("ab\n&#0;")
              if isinstance(t, _tokenizer.ParseError)]
    assert tokens[0].data == "illegal-codepoint-for-numeric-entity"
    assert tokens[0].position[0] == 2
