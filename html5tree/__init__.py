# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

"""
HTML parsing library based on the `WHATWG HTML specification
<https://whatwg.org/html>`_. The parser recovers from malformed markup the
way web browsers do and builds a tree of ``html5tree.dom`` nodes.

Example usage::

    import html5tree
    with open("my_document.html", "rb") as f:
        document = html5tree.parse(f)

For convenience, this module re-exports the following names:

* :func:`~.html5parser.parse`
* :func:`~.html5parser.parseFragment`
* :class:`~.html5parser.HTMLParser`
* :func:`~.treebuilders.getTreeBuilder`
* the node classes and exceptions of :mod:`~.dom`
"""

from .html5parser import HTMLParser, ParseError, parse, parseFragment
from .treebuilders import getTreeBuilder
from .dom import (Node, Document, DocumentFragment, DocumentType, Element,
                  TemplateElement, Attr, Text, Comment, ProcessingInstruction,
                  DOMException, IndexSizeError, HierarchyRequestError,
                  InvalidCharacterError, NotFoundError, NotSupportedError,
                  InUseAttributeError, DOMSyntaxError, NamespaceError)

__all__ = ["HTMLParser", "ParseError", "parse", "parseFragment",
           "getTreeBuilder", "Node", "Document", "DocumentFragment",
           "DocumentType", "Element", "TemplateElement", "Attr", "Text",
           "Comment", "ProcessingInstruction", "DOMException",
           "IndexSizeError", "HierarchyRequestError", "InvalidCharacterError",
           "NotFoundError", "NotSupportedError", "InUseAttributeError",
           "DOMSyntaxError", "NamespaceError"]

# this has to be at the top level, see how setup.py parses this
#: Distribution version number.
__version__ = "1.0.0"
