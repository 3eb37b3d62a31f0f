# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

import pytest

from html5tree import parse, parseFragment
from html5tree.dom import (Document, DocumentType, Node, Text,
                           DOMException, IndexSizeError, HierarchyRequestError,
                           InvalidCharacterError, NotFoundError,
                           NotSupportedError, InUseAttributeError,
                           DOMSyntaxError, NamespaceError)
from html5tree.constants import namespaces


@pytest.fixture
def doc():
    document = Document()
    html = document.createElement("html")
    document.appendChild(html)
    body = document.createElement("body")
    html.appendChild(body)
    return document


def names(node):
    return [child.nodeName for child in node.childNodes]


def test_exception_codes():
    assert issubclass(HierarchyRequestError, DOMException)
    assert HierarchyRequestError.code == 3
    assert NotFoundError().name == "NotFoundError"
    assert str(IndexSizeError()) == "The index is not in the allowed range."
    assert DOMSyntaxError.name == "SyntaxError"


def test_second_document_element(doc):
    with pytest.raises(HierarchyRequestError):
        doc.appendChild(doc.createElement("div"))
    assert names(doc) == ["html"]


def test_text_in_document(doc):
    with pytest.raises(HierarchyRequestError):
        doc.appendChild(doc.createTextNode("x"))
    assert names(doc) == ["html"]


def test_doctype_after_element(doc):
    with pytest.raises(HierarchyRequestError):
        doc.appendChild(DocumentType("html", ownerDocument=doc))
    doc.insertBefore(DocumentType("html", ownerDocument=doc), doc.documentElement)
    assert names(doc) == ["html", "html"]
    assert doc.doctype.nodeType == Node.DOCUMENT_TYPE_NODE


def test_insert_ancestor(doc):
    body = doc.documentElement.firstChild
    with pytest.raises(HierarchyRequestError):
        body.appendChild(doc.documentElement)
    with pytest.raises(HierarchyRequestError):
        body.appendChild(body)


def test_child_of_leaf(doc):
    text = doc.createTextNode("x")
    with pytest.raises(HierarchyRequestError):
        text.appendChild(doc.createElement("b"))


def test_not_found(doc):
    body = doc.documentElement.firstChild
    stray = doc.createElement("p")
    with pytest.raises(NotFoundError):
        body.removeChild(stray)
    with pytest.raises(NotFoundError):
        body.insertBefore(doc.createElement("i"), stray)
    with pytest.raises(NotFoundError):
        body.replaceChild(doc.createElement("i"), stray)
    assert body.childNodes.length == 0


def test_append_moves_node(doc):
    body = doc.documentElement.firstChild
    a = body.appendChild(doc.createElement("div"))
    b = body.appendChild(doc.createElement("div"))
    child = a.appendChild(doc.createElement("span"))
    b.appendChild(child)
    assert a.childNodes.length == 0
    assert child.parentNode is b
    assert child.parentElement is b


def test_insert_before_and_siblings(doc):
    body = doc.documentElement.firstChild
    last = body.appendChild(doc.createElement("b"))
    first = body.insertBefore(doc.createElement("a"), last)
    assert names(body) == ["a", "b"]
    assert first.nextSibling is last
    assert last.previousSibling is first
    assert first.previousSibling is None
    assert body.firstChild is first and body.lastChild is last


def test_replace_child(doc):
    body = doc.documentElement.firstChild
    old = body.appendChild(doc.createElement("a"))
    body.appendChild(doc.createElement("c"))
    assert body.replaceChild(doc.createElement("b"), old) is old
    assert names(body) == ["b", "c"]
    assert old.parentNode is None


def test_fragment_insertion(doc):
    body = doc.documentElement.firstChild
    fragment = doc.createDocumentFragment()
    fragment.appendChild(doc.createElement("a"))
    fragment.appendChild(doc.createTextNode("x"))
    body.appendChild(fragment)
    assert names(body) == ["a", "#text"]
    assert fragment.childNodes.length == 0


def test_create_element_validation(doc):
    with pytest.raises(InvalidCharacterError):
        doc.createElement("1a")
    element = doc.createElement("DIV")
    assert element.localName == "div"
    assert element.namespaceURI == namespaces["html"]
    assert element.ownerDocument is doc


def test_create_element_ns(doc):
    svg = doc.createElementNS(namespaces["svg"], "svg:rect")
    assert svg.prefix == "svg"
    assert svg.localName == "rect"
    assert svg.tagName == "svg:rect"
    with pytest.raises(InvalidCharacterError):
        doc.createElementNS(namespaces["svg"], "a:b:c")
    with pytest.raises(NamespaceError):
        doc.createElementNS(None, "x:y")


def test_attributes(doc):
    element = doc.createElement("p")
    element.setAttribute("ID", "x")
    assert element.getAttribute("id") == "x"
    assert element.getAttribute("Id") == "x"
    assert element.id == "x"
    assert element.attributes.length == 1
    assert element.attributes[0].name == "id"
    assert element.attributes["id"].ownerElement is element
    element.setAttribute("id", "y")
    assert element.attributes.length == 1
    element.removeAttribute("id")
    assert not element.hasAttributes()
    assert element.getAttribute("id") is None
    with pytest.raises(InvalidCharacterError):
        element.setAttribute("a b", "c")


def test_attribute_in_use(doc):
    first = doc.createElement("p")
    second = doc.createElement("p")
    first.setAttribute("title", "t")
    attr = first.getAttributeNode("title")
    with pytest.raises(InUseAttributeError):
        second.setAttributeNode(attr)
    first.removeAttributeNode(attr)
    assert second.setAttributeNode(attr) is None
    assert second.getAttribute("title") == "t"
    with pytest.raises(NotFoundError):
        first.removeAttributeNode(attr)


def test_character_data(doc):
    text = doc.createTextNode("abc")
    text.appendData("def")
    assert text.data == "abcdef"
    assert text.length == 6
    assert text.substringData(1, 2) == "bc"
    text.insertData(0, "_")
    text.deleteData(1, 1)
    text.replaceData(0, 1, "x")
    assert text.data == "xbcdef"
    with pytest.raises(IndexSizeError):
        text.substringData(10, 1)
    with pytest.raises(IndexSizeError):
        text.replaceData(7, 0, "x")


def test_split_text(doc):
    p = doc.createElement("p")
    text = p.appendChild(doc.createTextNode("hello"))
    tail = text.splitText(2)
    assert text.data == "he"
    assert tail.data == "llo"
    assert list(p.childNodes) == [text, tail]
    assert text.wholeText == "hello"
    with pytest.raises(IndexSizeError):
        text.splitText(5)


def test_normalize(doc):
    p = doc.createElement("p")
    p.appendChild(doc.createTextNode("a"))
    p.appendChild(doc.createTextNode(""))
    p.appendChild(doc.createTextNode("b"))
    b = p.appendChild(doc.createElement("b"))
    b.appendChild(doc.createTextNode(""))
    p.normalize()
    assert names(p) == ["#text", "b"]
    assert p.firstChild.data == "ab"
    assert b.childNodes.length == 0


def test_text_content(doc):
    p = doc.createElement("p")
    p.appendChild(doc.createTextNode("a"))
    p.appendChild(doc.createElement("b")).appendChild(doc.createTextNode("b"))
    p.appendChild(doc.createComment("c"))
    assert p.textContent == "ab"
    p.textContent = "new"
    assert names(p) == ["#text"]
    assert doc.textContent is None


def test_clone_and_equality():
    fragment = parseFragment('<p class="x">a<b>b</b><!--c--></p>')
    p = fragment.firstChild
    copy = p.cloneNode(deep=True)
    assert copy is not p
    assert copy.parentNode is None
    assert copy.isEqualNode(p)
    shallow = p.cloneNode()
    assert shallow.childNodes.length == 0
    assert not shallow.isEqualNode(p)
    copy.setAttribute("class", "y")
    assert not copy.isEqualNode(p)
    assert not p.isEqualNode(None)


def test_clone_document():
    doc = parse("<!DOCTYPE html><p>x")
    copy = doc.cloneNode(deep=True)
    assert copy.isEqualNode(doc)
    assert copy.body.ownerDocument is copy
    assert copy.mode == doc.mode


def test_clone_template():
    doc = parse("<template><p>x</p></template>")
    template = doc.head.firstChild
    copy = template.cloneNode(deep=True)
    assert copy.content.firstChild.localName == "p"
    assert copy.content.firstChild is not template.content.firstChild


def test_contains(doc):
    body = doc.documentElement.firstChild
    assert doc.contains(body)
    assert body.contains(body)
    assert not body.contains(doc.documentElement)


def test_adopt_and_import(doc):
    other = Document()
    body = doc.documentElement.firstChild
    p = body.appendChild(doc.createElement("p"))
    p.setAttribute("id", "x")

    copy = other.importNode(p, deep=True)
    assert copy.ownerDocument is other
    assert p.parentNode is body

    assert other.adoptNode(p) is p
    assert p.parentNode is None
    assert p.ownerDocument is other
    assert p.getAttributeNode("id").ownerDocument is other

    with pytest.raises(NotSupportedError):
        other.importNode(doc)
    with pytest.raises(NotSupportedError):
        other.adoptNode(doc)


def test_class_list(doc):
    p = doc.createElement("p")
    assert p.classList.length == 0
    p.classList.add("a", "b")
    assert p.className == "a b"
    p.classList.add("a")
    assert list(p.classList) == ["a", "b"]
    p.classList.remove("a")
    assert p.getAttribute("class") == "b"
    assert p.classList.toggle("c") is True
    assert p.classList.toggle("c") is False
    assert p.classList.toggle("b", True) is True
    assert p.classList.replace("b", "d") is True
    assert p.classList.replace("zz", "d") is False
    assert "d" in p.classList
    assert p.classList.item(5) is None
    with pytest.raises(DOMSyntaxError):
        p.classList.add("")
    with pytest.raises(InvalidCharacterError):
        p.classList.add("x y")


def test_inner_and_outer_html():
    fragment = parseFragment('<p class="x">a &amp; <br>b<!--c--></p>')
    p = fragment.firstChild
    assert p.outerHTML == '<p class="x">a &amp; <br>b<!--c--></p>'
    assert p.innerHTML == "a &amp; <br>b<!--c-->"


def test_raw_text_serialisation():
    doc = parse("<script>a < b</script>")
    assert doc.head.innerHTML == "<script>a < b</script>"


def test_template_inner_html():
    doc = parse("<template><b>x</b></template>")
    assert doc.head.firstChild.innerHTML == "<b>x</b>"


def test_document_accessors():
    doc = parse("<!DOCTYPE html><title>  a \n b </title><frameset></frameset>")
    assert doc.title == "a b"
    assert doc.body.localName == "frameset"
    assert doc.compatMode == "CSS1Compat"
    assert repr(doc) == "<Document #document>"
    assert repr(doc.head) == "<Element head>"
    assert isinstance(doc.head.firstChild.firstChild, Text)
