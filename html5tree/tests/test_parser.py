# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

import io
import logging

import pytest

from html5tree import (parse, parseFragment, HTMLParser, ParseError,
                       getTreeBuilder, Document, DocumentFragment, Text)
from html5tree.constants import namespaces


def test_parse_returns_document():
    doc = parse("<!DOCTYPE html><title>t</title><p>x")
    assert isinstance(doc, Document)
    assert doc.doctype.name == "html"
    assert doc.documentElement.localName == "html"
    assert doc.documentElement.namespaceURI == namespaces["html"]
    assert doc.head.firstChild.localName == "title"
    assert doc.body.firstChild.localName == "p"
    assert doc.title == "t"


def test_implied_html_head_body():
    doc = parse("")
    html = doc.documentElement
    assert [child.localName for child in html.childNodes] == ["head", "body"]


def test_adjacent_text_is_merged():
    doc = parse("a&amp;b c")
    children = list(doc.body.childNodes)
    assert len(children) == 1
    assert isinstance(children[0], Text)
    assert children[0].data == "a&b c"


def test_parse_fragment():
    fragment = parseFragment("<b>x</b>y")
    assert isinstance(fragment, DocumentFragment)
    assert [n.nodeName for n in fragment.childNodes] == ["b", "#text"]


def test_parse_is_fragment():
    fragment = parse("<p>x", isFragment=True)
    assert isinstance(fragment, DocumentFragment)
    assert fragment.firstChild.localName == "p"


def test_fragment_rcdata_container():
    fragment = parseFragment("</textarea><b>", container="textarea")
    assert fragment.childNodes.length == 1
    assert fragment.firstChild.data == "</textarea><b>"


def test_no_namespace():
    doc = parse("<p>x", namespaceHTMLElements=False)
    assert doc.documentElement.namespaceURI is None
    assert doc.body.firstChild.namespaceURI is None


def test_errors_recorded():
    parser = HTMLParser()
    parser.parse("<!DOCTYPE html><body></p>")
    assert [error[1:] for error in parser.errors] == [
        ("unexpected-end-tag", {"name": "p"})]
    line, col = parser.errors[0][0]
    assert line == 1
    assert col == 25


def test_errors_reset_between_parses():
    parser = HTMLParser()
    parser.parse("<p>")
    assert parser.errors
    parser.parse("<!DOCTYPE html>")
    assert parser.errors == []


def test_errors_sink():
    sink = []
    parser = HTMLParser(errors=sink)
    parser.parse("<p>")
    assert parser.errors is sink
    assert sink[0][1] == "expected-doctype-but-got-start-tag"
    assert sink[0][2] == {"name": "p"}


def test_strict_raises():
    parser = HTMLParser(strict=True)
    with pytest.raises(ParseError) as excinfo:
        parser.parse("<p>")
    assert "Unexpected start tag (p)" in str(excinfo.value)


def test_strict_clean_document():
    parser = HTMLParser(strict=True)
    doc = parser.parse("<!DOCTYPE html><title>x</title><p>y</p>")
    assert parser.errors == []
    assert doc.body.textContent == "y"


def test_parse_error_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="html5tree.html5parser"):
        parse("<p>")
    messages = [record.getMessage() for record in caplog.records]
    assert any("expected-doctype-but-got-start-tag" in m for m in messages)


def test_debug_log():
    parser = HTMLParser(debug=True)
    parser.parse("<p>x")
    assert parser.log
    assert all(len(entry) == 5 for entry in parser.log)
    assert ("dataState", "InBodyPhase", "InBodyPhase", "processStartTag",
            {"type": "StartTag", "name": "p"}) in parser.log


def test_debug_off_leaves_log_empty():
    parser = HTMLParser()
    parser.parse("<p>x")
    assert parser.log == []


def test_document_encoding():
    parser = HTMLParser()
    assert parser.documentEncoding is None
    parser.parse("<p>x")
    assert parser.documentEncoding is None
    parser.parse(b"<p>x")
    assert parser.documentEncoding == "windows-1252"
    parser.parse(b"<p>x", encoding="utf-8")
    assert parser.documentEncoding == "utf-8"
    parser.parse(b"\xef\xbb\xbf<p>x", encoding="iso-8859-2")
    assert parser.documentEncoding == "utf-8"


def test_bytes_decoded():
    doc = parse(io.BytesIO("<p>é".encode("utf-8")), encoding="utf-8")
    assert doc.body.textContent == "é"


def test_encoding_with_text_input():
    with pytest.raises(TypeError):
        parse("<p>x", encoding="utf-8")


def test_scripting_noscript():
    doc = parse("<body><noscript><p>x</p></noscript>")
    noscript = doc.body.firstChild
    assert noscript.firstChild.data == "<p>x</p>"

    doc = parse("<body><noscript><p>x</p></noscript>", scripting=False)
    noscript = doc.body.firstChild
    assert noscript.firstChild.localName == "p"


def test_quirks_mode():
    assert parse("<p>").mode == "quirks"
    assert parse("<p>").compatMode == "BackCompat"
    assert parse("<!DOCTYPE html><p>").mode == "no quirks"
    doc = parse('<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN">')
    assert doc.mode == "limited quirks"


def test_template_contents():
    doc = parse("<template><p>x</p></template>")
    template = doc.head.firstChild
    assert template.localName == "template"
    assert template.childNodes.length == 0
    assert template.content.firstChild.localName == "p"
    assert template.content.ownerDocument is not doc


def test_html_attributes_merged():
    doc = parse('<html lang="en"><body><html lang="fr" dir="rtl">')
    root = doc.documentElement
    assert root.getAttribute("lang") == "en"
    assert root.getAttribute("dir") == "rtl"


def test_self_closing_non_void():
    parser = HTMLParser()
    doc = parser.parse("<!DOCTYPE html><div/>x")
    div = doc.body.firstChild
    assert div.textContent == "x"
    assert ("non-void-element-with-trailing-solidus" in
            [code for _, code, _ in parser.errors])


def test_unknown_treebuilder():
    with pytest.raises(ValueError):
        getTreeBuilder("etree")


def errorCodes(parser):
    return [error[1:] for error in parser.errors]


def test_frameset_ignored_once_body_has_content():
    parser = HTMLParser()
    doc = parser.parse("<!DOCTYPE html>x<frameset>")
    assert doc.body.localName == "body"
    assert doc.body.textContent == "x"
    assert ("unexpected-start-tag", {"name": "frameset"}) in errorCodes(parser)


def test_frameset_replaces_empty_body():
    doc = parse("<!DOCTYPE html><div><frameset>")
    html = doc.documentElement
    assert [child.localName for child in html.childNodes] == ["head", "frameset"]


def test_frameset_document():
    doc = parse("<!DOCTYPE html><frameset><frame>")
    assert doc.body.localName == "frameset"
    assert doc.body.firstChild.localName == "frame"
    assert doc.getElementsByTagName("body").length == 0


def test_end_tag_stopped_by_special_element():
    parser = HTMLParser()
    doc = parser.parse("<!DOCTYPE html><span><div>a</span>b")
    assert doc.body.innerHTML == "<span><div>ab</div></span>"
    assert ("unexpected-end-tag", {"name": "span"}) in errorCodes(parser)


def test_end_tag_closes_unknown_elements():
    parser = HTMLParser()
    doc = parser.parse("<!DOCTYPE html><x><y>a</x>b")
    assert doc.body.innerHTML == "<x><y>a</y></x>b"
    assert ("unexpected-end-tag", {"name": "x"}) in errorCodes(parser)


def test_script_end_tag_any_case():
    doc = parse("<!DOCTYPE html><script>a</SCRIPT>b")
    script = doc.head.firstChild
    assert script.localName == "script"
    assert script.textContent == "a"
    assert doc.body.textContent == "b"


def test_deeply_nested_elements():
    depth = 2000
    doc = parse("<!DOCTYPE html>" + "<div>" * depth + "x")
    node = doc.body
    for _ in range(depth):
        node = node.firstChild
        assert node.localName == "div"
    assert node.firstChild.data == "x"
