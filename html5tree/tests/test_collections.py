# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

import pytest

from html5tree import parse
from html5tree.dom import Document, HTMLCollection


@pytest.fixture
def doc():
    return parse('<div id="a"><p name="x"><span class="s t"></span></p>'
                 'text<p id="b" class="t"></p></div>')


def localNames(collection):
    return [element.localName for element in collection]


def test_children_skip_non_elements(doc):
    div = doc.body.firstChild
    assert localNames(div.children) == ["p", "p"]
    assert div.childElementCount == 2
    assert div.firstElementChild.getAttribute("name") == "x"
    assert div.lastElementChild.id == "b"


def test_children_is_cached(doc):
    div = doc.body.firstChild
    assert div.children is div.children


def test_children_live(doc):
    div = doc.body.firstChild
    children = div.children
    first = children[0]

    new = doc.createElement("section")
    div.insertBefore(new, first)
    assert children[0] is new
    assert children.length == 3

    div.removeChild(first)
    assert localNames(children) == ["section", "p"]

    div.appendChild(doc.createElement("footer"))
    assert localNames(children) == ["section", "p", "footer"]

    div.insertBefore(doc.createTextNode("x"), new)
    assert children.length == 3


def test_children_partial_scan(doc):
    div = doc.body.firstChild
    children = div.children
    assert children.item(0).localName == "p"
    div.insertBefore(doc.createElement("hr"), div.lastChild)
    assert localNames(children) == ["p", "hr", "p"]


def test_index_access(doc):
    children = doc.body.firstChild.children
    assert children[-1].id == "b"
    assert children.item(-1) is None
    assert children.item(5) is None
    with pytest.raises(IndexError):
        children[5]


def test_named_item(doc):
    children = doc.body.firstChild.children
    assert children.namedItem("b").localName == "p"
    assert children["x"].getAttribute("name") == "x"
    assert children.namedItem("") is None
    assert children.namedItem("missing") is None
    with pytest.raises(KeyError):
        children["missing"]


def test_elements_by_tag_name_tree_order(doc):
    assert localNames(doc.getElementsByTagName("*")) == [
        "html", "head", "body", "div", "p", "span", "p"]
    assert len(doc.getElementsByTagName("P")) == 2
    assert len(doc.body.firstChild.getElementsByTagName("span")) == 1


def test_elements_by_tag_name_live(doc):
    paragraphs = doc.getElementsByTagName("p")
    assert paragraphs.length == 2
    doc.body.appendChild(doc.createElement("p"))
    assert paragraphs.length == 3
    doc.body.removeChild(doc.body.firstChild)
    assert paragraphs.length == 1


def test_elements_by_class_name_sees_attribute_changes(doc):
    matches = doc.getElementsByClassName("t")
    assert matches.length == 2
    doc.getElementsByTagName("span")[0].classList.remove("t")
    assert matches.length == 1


def test_elements_by_class_name(doc):
    assert localNames(doc.getElementsByClassName("s t")) == ["span"]
    assert localNames(doc.getElementsByClassName(" t ")) == ["span", "p"]
    empty = doc.getElementsByClassName("   ")
    assert isinstance(empty, HTMLCollection)
    assert empty.length == 0


def test_detached_subtree():
    document = Document()
    root = document.createElement("div")
    root.appendChild(document.createElement("b"))
    found = root.getElementsByTagName("b")
    assert found.length == 1
    root.appendChild(document.createElement("b"))
    assert found.length == 2


def test_descendants_keep_prefix_before_change(doc):
    everything = doc.getElementsByTagName("*")
    assert everything.length == 7
    span = everything[5]
    span.appendChild(doc.createElement("em"))
    assert len(everything._cache) == 6
    assert localNames(everything) == [
        "html", "head", "body", "div", "p", "span", "em", "p"]


def test_descendants_change_ahead_of_scan(doc):
    paragraphs = doc.getElementsByTagName("p")
    assert paragraphs.item(0).getAttribute("name") == "x"
    div = doc.body.firstChild
    div.appendChild(doc.createElement("p"))
    assert len(paragraphs._cache) == 1
    assert paragraphs.length == 3
    assert paragraphs[2].parentNode is div


def test_descendants_removal_behind_scan(doc):
    everything = doc.getElementsByTagName("*")
    assert everything[4].getAttribute("name") == "x"
    div = doc.body.firstChild
    div.removeChild(div.firstChild)
    assert localNames(everything) == ["html", "head", "body", "div", "p"]
    assert everything[4].id == "b"


def test_descendants_node_moved(doc):
    everything = doc.getElementsByTagName("*")
    assert everything.length == 7
    doc.head.appendChild(doc.getElementsByTagName("span")[0])
    assert localNames(everything) == [
        "html", "head", "span", "body", "div", "p", "p"]


def test_descendants_adopted_root(doc):
    div = doc.body.firstChild
    paragraphs = div.getElementsByTagName("p")
    assert paragraphs.length == 2
    other = Document()
    other.adoptNode(div)
    div.appendChild(other.createElement("p"))
    assert paragraphs.length == 3
