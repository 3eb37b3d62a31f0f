# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

"""A small standalone DOM for parsed documents.

The model follows the DOM standard closely enough for consumers that walk a
parsed tree: nodes with ordered child lists, elements with attributes and
class lists, live ``HTMLCollection`` views and the tree mutation methods with
their pre-insertion validity checks.
"""

import re
import weakref

from .constants import namespaces, spaceCharacters, voidElements

__all__ = ["Node", "Document", "DocumentFragment", "DocumentType", "Element",
           "TemplateElement", "Attr", "CharacterData", "Text", "Comment",
           "ProcessingInstruction", "NodeList", "NamedNodeMap",
           "HTMLCollection", "DOMTokenList", "DOMException", "IndexSizeError",
           "HierarchyRequestError", "InvalidCharacterError", "NotFoundError",
           "NotSupportedError", "InUseAttributeError", "DOMSyntaxError",
           "NamespaceError"]

_nameStartChar = (":A-Z_a-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u02FF\u0370-\u037D"
                  "\u037F-\u1FFF\u200C-\u200D\u2070-\u218F\u2C00-\u2FEF"
                  "\u3001-\uD7FF\uF900-\uFDCF\uFDF0-\uFFFD\U00010000-\U000EFFFF")
_nameChar = _nameStartChar + "\\-.0-9\u00B7\u0300-\u036F\u203F-\u2040"

nameRe = re.compile("[%s][%s]*" % (_nameStartChar, _nameChar))

# Elements whose text children serialise without escaping
rawTextParents = frozenset(["style", "script", "xmp", "iframe", "noembed",
                            "noframes", "plaintext"])


class DOMException(Exception):
    """Base of the DOM error hierarchy.

    Each subclass carries the DOM exception ``name`` and its legacy
    numeric ``code``.
    """
    name = None
    code = 0
    message = None

    def __init__(self, message=None):
        if message is None:
            message = self.message
        Exception.__init__(self, message)


class IndexSizeError(DOMException):
    name = "IndexSizeError"
    code = 1
    message = "The index is not in the allowed range."


class HierarchyRequestError(DOMException):
    name = "HierarchyRequestError"
    code = 3
    message = "The operation would yield an incorrect node tree."


class InvalidCharacterError(DOMException):
    name = "InvalidCharacterError"
    code = 5
    message = "The string contains invalid characters."


class NotFoundError(DOMException):
    name = "NotFoundError"
    code = 8
    message = "The object can not be found here."


class NotSupportedError(DOMException):
    name = "NotSupportedError"
    code = 9
    message = "The operation is not supported."


class InUseAttributeError(DOMException):
    name = "InUseAttributeError"
    code = 10
    message = "The attribute is in use."


class DOMSyntaxError(DOMException):
    name = "SyntaxError"
    code = 12
    message = "The string did not match the expected pattern."


class NamespaceError(DOMException):
    name = "NamespaceError"
    code = 14
    message = "The operation is not allowed by Namespaces in XML."


def _iterDescendants(root):
    """Walks the subtree below ``root`` in tree order, without recursion"""
    stack = [iter(root.childNodes._nodes)]
    while stack:
        for node in stack[-1]:
            yield node
            if node.childNodes._nodes:
                stack.append(iter(node.childNodes._nodes))
                break
        else:
            stack.pop()


class NodeList(object):
    """The ordered children of a node.

    Only the owning node mutates the list. Live collections that filter it
    register as observers and are told about every insertion and removal
    before it happens.
    """

    def __init__(self):
        self._nodes = []
        self._observers = []

    def __len__(self):
        return len(self._nodes)

    def __iter__(self):
        return iter(list(self._nodes))

    def __getitem__(self, index):
        return self._nodes[index]

    def __contains__(self, node):
        return any(n is node for n in self._nodes)

    def __repr__(self):
        return "<NodeList %r>" % (self._nodes,)

    @property
    def length(self):
        return len(self._nodes)

    def item(self, index):
        if 0 <= index < len(self._nodes):
            return self._nodes[index]
        return None

    def index(self, node):
        for i, n in enumerate(self._nodes):
            if n is node:
                return i
        raise ValueError("node is not in the list")

    def _observe(self, collection):
        self._observers.append(weakref.ref(collection))

    def _liveObservers(self):
        live = []
        for ref in self._observers:
            collection = ref()
            if collection is not None:
                live.append(collection)
        if len(live) != len(self._observers):
            self._observers = [weakref.ref(c) for c in live]
        return live

    def _insert(self, index, node):
        for collection in self._liveObservers():
            collection._childInserted(index, node)
        self._nodes.insert(index, node)

    def _remove(self, index):
        node = self._nodes[index]
        for collection in self._liveObservers():
            collection._childRemoved(index, node)
        del self._nodes[index]


class Node(object):
    ELEMENT_NODE = 1
    ATTRIBUTE_NODE = 2
    TEXT_NODE = 3
    PROCESSING_INSTRUCTION_NODE = 7
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10
    DOCUMENT_FRAGMENT_NODE = 11

    nodeType = None

    def __init__(self, ownerDocument=None):
        self._ownerDocument = ownerDocument
        self._parent = None
        self.childNodes = NodeList()

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__, self.nodeName)

    @property
    def nodeName(self):
        raise NotImplementedError

    @property
    def nodeValue(self):
        return None

    @nodeValue.setter
    def nodeValue(self, value):
        pass

    @property
    def textContent(self):
        return None

    @textContent.setter
    def textContent(self, value):
        pass

    @property
    def ownerDocument(self):
        return self._ownerDocument

    @property
    def parentNode(self):
        return self._parent

    @property
    def parentElement(self):
        if isinstance(self._parent, Element):
            return self._parent
        return None

    @property
    def firstChild(self):
        return self.childNodes.item(0)

    @property
    def lastChild(self):
        if self.childNodes._nodes:
            return self.childNodes._nodes[-1]
        return None

    @property
    def previousSibling(self):
        if self._parent is None:
            return None
        index = self._parent.childNodes.index(self)
        return self._parent.childNodes.item(index - 1) if index else None

    @property
    def nextSibling(self):
        if self._parent is None:
            return None
        index = self._parent.childNodes.index(self)
        return self._parent.childNodes.item(index + 1)

    def hasChildNodes(self):
        return bool(self.childNodes._nodes)

    def contains(self, other):
        """True when ``other`` is this node or one of its descendants"""
        while other is not None:
            if other is self:
                return True
            other = other._parent
        return False

    def _document(self):
        return self._ownerDocument

    def _touch(self, index=None):
        # ``index`` is where the child list changed; None for an attribute
        # change on this node.
        document = self._document()
        if document is not None:
            document._version += 1
            for collection in list(document._collections):
                collection._nodeChanged(self, index)

    # Mutation

    def insertBefore(self, node, child):
        self._checkPreInsert(node, child)
        if child is node:
            child = node.nextSibling
        self._adopt(node)
        self._insertNodes(node, child)
        return node

    def appendChild(self, node):
        return self.insertBefore(node, None)

    def replaceChild(self, node, child):
        self._checkPreInsert(node, child, replace=True)
        reference = child.nextSibling
        if reference is node:
            reference = node.nextSibling
        self._adopt(node)
        if child._parent is self:
            self._removeChild(child)
        self._insertNodes(node, reference)
        return child

    def _adopt(self, node):
        document = self._document()
        if document is not None:
            document.adoptNode(node)
        elif node._parent is not None:
            node._parent._removeChild(node)

    def removeChild(self, child):
        if child is None or child._parent is not self:
            raise NotFoundError()
        self._removeChild(child)
        return child

    def _removeChild(self, child):
        index = self.childNodes.index(child)
        self.childNodes._remove(index)
        child._parent = None
        self._touch(index)

    def _insertNodes(self, node, child):
        if isinstance(node, DocumentFragment):
            nodes = list(node.childNodes._nodes)
            for n in nodes:
                node._removeChild(n)
        else:
            nodes = [node]

        if child is None:
            index = len(self.childNodes)
        else:
            index = self.childNodes.index(child)
        start = index
        for n in nodes:
            self.childNodes._insert(index, n)
            n._parent = self
            index += 1
        self._touch(start)

    def _checkPreInsert(self, node, child, replace=False):
        if not isinstance(self, (Document, DocumentFragment, Element)):
            raise HierarchyRequestError()
        # A node with no children can only contain itself.
        if node is self or (node.hasChildNodes() and node.contains(self)):
            raise HierarchyRequestError()
        if replace:
            if child is None or child._parent is not self:
                raise NotFoundError()
        elif child is not None and child._parent is not self:
            raise NotFoundError()
        if not isinstance(node, (DocumentFragment, DocumentType, Element,
                                 CharacterData)):
            raise HierarchyRequestError()
        if ((isinstance(node, Text) and isinstance(self, Document)) or
                (isinstance(node, DocumentType) and
                 not isinstance(self, Document))):
            raise HierarchyRequestError()
        if isinstance(self, Document):
            self._checkDocumentChild(node, child, replace)

    # Copying and comparison

    def cloneNode(self, deep=False):
        return self._clone(self._document(), deep)

    def _clone(self, document, deep):
        copy = self._cloneShallow(document)
        if isinstance(copy, Document):
            document = copy
        if deep:
            stack = [(self, copy)]
            while stack:
                original, parentCopy = stack.pop()
                for child in original.childNodes._nodes:
                    childCopy = child._cloneShallow(document)
                    parentCopy._insertNodes(childCopy, None)
                    child._cloneSteps(childCopy, True)
                    stack.append((child, childCopy))
        self._cloneSteps(copy, deep)
        return copy

    def _cloneShallow(self, document):
        raise NotImplementedError

    def _cloneSteps(self, copy, deep):
        pass

    def isEqualNode(self, other):
        if other is None:
            return False
        stack = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a.nodeType != b.nodeType or not a._equalsShallow(b):
                return False
            if len(a.childNodes) != len(b.childNodes):
                return False
            stack.extend(zip(a.childNodes._nodes, b.childNodes._nodes))
        return True

    def _equalsShallow(self, other):
        return True

    def normalize(self):
        """Drops empty Text nodes and merges adjacent ones"""
        for node in [n for n in _iterDescendants(self) if isinstance(n, Text)]:
            parent = node._parent
            if parent is None:
                continue
            if not node.length:
                parent._removeChild(node)
                continue
            parts = []
            sibling = node.nextSibling
            while isinstance(sibling, Text):
                parts.append(sibling.data)
                following = sibling.nextSibling
                parent._removeChild(sibling)
                sibling = following
            if parts:
                node.appendData("".join(parts))

    def _setOwnerDocument(self, document):
        for node in [self] + list(_iterDescendants(self)):
            node._adoptInto(document)

    def _adoptInto(self, document):
        self._ownerDocument = document


class ParentNode(object):
    """Element-child navigation shared by Document, DocumentFragment and
    Element"""

    @property
    def children(self):
        children = self.__dict__.get("_children")
        if children is None:
            children = self._children = ChildrenCollection(self.childNodes)
        return children

    @property
    def firstElementChild(self):
        for node in self.childNodes._nodes:
            if isinstance(node, Element):
                return node
        return None

    @property
    def lastElementChild(self):
        for node in reversed(self.childNodes._nodes):
            if isinstance(node, Element):
                return node
        return None

    @property
    def childElementCount(self):
        return self.children.length

    def getElementsByTagName(self, qualifiedName):
        if qualifiedName == "*":
            return DescendantCollection(self, lambda element: True)

        document = self._document()
        if document is not None and document.isHTMLDocument:
            lowered = qualifiedName.lower()

            def matcher(element):
                if element.namespaceURI == namespaces["html"]:
                    return element.tagName == lowered
                return element.tagName == qualifiedName
        else:
            def matcher(element):
                return element.tagName == qualifiedName
        return DescendantCollection(self, matcher)

    def getElementsByClassName(self, classNames):
        wanted = set(_splitTokens(classNames))
        if not wanted:
            return HTMLCollection()

        def matcher(element):
            return wanted.issubset(_splitTokens(element.getAttribute("class") or ""))
        return DescendantCollection(self, matcher)

    @property
    def innerHTML(self):
        return serializeChildren(self)


class Document(ParentNode, Node):
    nodeType = Node.DOCUMENT_NODE

    def __init__(self, isHTMLDocument=True):
        Node.__init__(self, None)
        self.isHTMLDocument = isHTMLDocument
        self.contentType = "text/html" if isHTMLDocument else "application/xml"
        self.characterSet = "UTF-8"
        # "no quirks", "limited quirks" or "quirks"
        self.mode = "no quirks"
        self._version = 0
        self._collections = weakref.WeakSet()
        self._templateContentsOwner = None
        self._isTemplateContentsOwner = False

    @property
    def nodeName(self):
        return "#document"

    @property
    def ownerDocument(self):
        return None

    def _document(self):
        return self

    @property
    def compatMode(self):
        return "BackCompat" if self.mode == "quirks" else "CSS1Compat"

    @property
    def doctype(self):
        for node in self.childNodes._nodes:
            if isinstance(node, DocumentType):
                return node
        return None

    @property
    def documentElement(self):
        return self.firstElementChild

    def _htmlChild(self, names):
        root = self.documentElement
        if root is None or root.localName != "html":
            return None
        for node in root.childNodes._nodes:
            if (isinstance(node, Element) and node.localName in names and
                    node.namespaceURI in (namespaces["html"], None)):
                return node
        return None

    @property
    def head(self):
        return self._htmlChild(("head",))

    @property
    def body(self):
        return self._htmlChild(("body", "frameset"))

    @property
    def title(self):
        for node in _iterDescendants(self):
            if isinstance(node, Element) and node.localName == "title":
                return " ".join(_splitTokens(node.textContent))
        return ""

    def createElement(self, localName):
        if not nameRe.fullmatch(localName):
            raise InvalidCharacterError()
        if self.isHTMLDocument:
            localName = localName.lower()
        namespace = None
        if self.isHTMLDocument or self.contentType == "application/xhtml+xml":
            namespace = namespaces["html"]
        return self._createElement(localName, namespace)

    def createElementNS(self, namespace, qualifiedName):
        namespace = namespace or None
        prefix, localName = _validateQualifiedName(qualifiedName)
        if prefix is not None and namespace is None:
            raise NamespaceError()
        if prefix == "xml" and namespace != namespaces["xml"]:
            raise NamespaceError()
        if ((qualifiedName == "xmlns" or prefix == "xmlns") !=
                (namespace == namespaces["xmlns"])):
            raise NamespaceError()
        return self._createElement(localName, namespace, prefix)

    def _createElement(self, localName, namespace=None, prefix=None):
        if localName == "template" and namespace in (namespaces["html"], None):
            return TemplateElement(self, namespace, prefix)
        return Element(localName, namespace, prefix, self)

    def createTextNode(self, data):
        return Text(data, self)

    def createComment(self, data):
        return Comment(data, self)

    def createProcessingInstruction(self, target, data):
        if not nameRe.fullmatch(target) or "?>" in data:
            raise InvalidCharacterError()
        return ProcessingInstruction(target, data, self)

    def createDocumentFragment(self):
        return DocumentFragment(self)

    def importNode(self, node, deep=False):
        if isinstance(node, Document):
            raise NotSupportedError()
        return node._clone(self, deep)

    def adoptNode(self, node):
        """Removes ``node`` from its parent and moves its subtree into this
        document"""
        if isinstance(node, Document):
            raise NotSupportedError()
        if isinstance(node, Attr):
            if node.ownerElement is not None:
                node.ownerElement.removeAttributeNode(node)
        elif node._parent is not None:
            node._parent._removeChild(node)
        if node._document() is not self:
            node._setOwnerDocument(self)
        return node

    def templateContentsOwner(self):
        """The inert document holding template contents for this document"""
        if self._isTemplateContentsOwner:
            return self
        if self._templateContentsOwner is None:
            owner = Document(self.isHTMLDocument)
            owner._isTemplateContentsOwner = True
            self._templateContentsOwner = owner
        return self._templateContentsOwner

    def _checkDocumentChild(self, node, child, replace):
        siblings = self.childNodes._nodes

        def hasOther(cls):
            return any(isinstance(c, cls) and not (replace and c is child)
                       for c in siblings)

        def following(cls):
            if child is None:
                return False
            index = self.childNodes.index(child)
            return any(isinstance(c, cls) for c in siblings[index + 1:])

        def preceding(cls):
            index = self.childNodes.index(child)
            return any(isinstance(c, cls) for c in siblings[:index])

        if isinstance(node, DocumentFragment):
            kinds = node.childNodes._nodes
            elements = [c for c in kinds if isinstance(c, Element)]
            if len(elements) > 1 or any(isinstance(c, Text) for c in kinds):
                raise HierarchyRequestError()
            if elements and (hasOther(Element) or following(DocumentType) or
                             (not replace and isinstance(child, DocumentType))):
                raise HierarchyRequestError()
        elif isinstance(node, Element):
            if (hasOther(Element) or following(DocumentType) or
                    (not replace and isinstance(child, DocumentType))):
                raise HierarchyRequestError()
        elif isinstance(node, DocumentType):
            if hasOther(DocumentType):
                raise HierarchyRequestError()
            if child is None:
                if hasOther(Element):
                    raise HierarchyRequestError()
            elif preceding(Element):
                raise HierarchyRequestError()

    def _cloneShallow(self, document):
        copy = Document(self.isHTMLDocument)
        copy.contentType = self.contentType
        copy.characterSet = self.characterSet
        copy.mode = self.mode
        return copy


class DocumentFragment(ParentNode, Node):
    nodeType = Node.DOCUMENT_FRAGMENT_NODE

    @property
    def nodeName(self):
        return "#document-fragment"

    @property
    def textContent(self):
        return _descendantText(self)

    @textContent.setter
    def textContent(self, value):
        _replaceAllText(self, value)

    def _cloneShallow(self, document):
        return DocumentFragment(document)


class DocumentType(Node):
    nodeType = Node.DOCUMENT_TYPE_NODE

    def __init__(self, name, publicId="", systemId="", ownerDocument=None):
        Node.__init__(self, ownerDocument)
        self.name = name
        self.publicId = publicId
        self.systemId = systemId

    @property
    def nodeName(self):
        return self.name

    def _cloneShallow(self, document):
        return DocumentType(self.name, self.publicId, self.systemId, document)

    def _equalsShallow(self, other):
        return (self.name == other.name and self.publicId == other.publicId and
                self.systemId == other.systemId)


class Element(ParentNode, Node):
    nodeType = Node.ELEMENT_NODE

    def __init__(self, localName, namespaceURI=None, prefix=None,
                 ownerDocument=None):
        Node.__init__(self, ownerDocument)
        self.localName = localName
        self.namespaceURI = namespaceURI
        self.prefix = prefix
        self._attributes = []
        self._classList = None

    def __repr__(self):
        return "<Element %s>" % self.tagName

    @property
    def tagName(self):
        if self.prefix:
            return "%s:%s" % (self.prefix, self.localName)
        return self.localName

    @property
    def nodeName(self):
        return self.tagName

    @property
    def textContent(self):
        return _descendantText(self)

    @textContent.setter
    def textContent(self, value):
        _replaceAllText(self, value)

    # Attributes

    @property
    def attributes(self):
        return NamedNodeMap(self)

    def hasAttributes(self):
        return bool(self._attributes)

    def _normaliseName(self, name):
        document = self._document()
        if (document is not None and document.isHTMLDocument and
                self.namespaceURI in (namespaces["html"], None)):
            return name.lower()
        return name

    def getAttributeNode(self, name):
        name = self._normaliseName(name)
        for attr in self._attributes:
            if attr.name == name:
                return attr
        return None

    def getAttributeNodeNS(self, namespace, localName):
        namespace = namespace or None
        for attr in self._attributes:
            if attr.namespaceURI == namespace and attr.localName == localName:
                return attr
        return None

    def getAttribute(self, name):
        attr = self.getAttributeNode(name)
        return attr.value if attr is not None else None

    def getAttributeNS(self, namespace, localName):
        attr = self.getAttributeNodeNS(namespace, localName)
        return attr.value if attr is not None else None

    def hasAttribute(self, name):
        return self.getAttributeNode(name) is not None

    def setAttribute(self, name, value):
        if not nameRe.fullmatch(name):
            raise InvalidCharacterError()
        name = self._normaliseName(name)
        attr = self.getAttributeNode(name)
        if attr is None:
            self._appendAttribute(name, value)
        else:
            attr.value = value

    def setAttributeNS(self, namespace, qualifiedName, value):
        namespace = namespace or None
        prefix, localName = _validateQualifiedName(qualifiedName)
        if prefix is not None and namespace is None:
            raise NamespaceError()
        attr = self.getAttributeNodeNS(namespace, localName)
        if attr is None:
            self._appendAttribute(localName, value, namespace, prefix)
        else:
            attr.value = value

    def setAttributeNode(self, attr):
        if attr.ownerElement is not None and attr.ownerElement is not self:
            raise InUseAttributeError()
        old = self.getAttributeNodeNS(attr.namespaceURI, attr.localName)
        if old is attr:
            return attr
        if old is not None:
            self.removeAttributeNode(old)
        self._document().adoptNode(attr)
        self._attributes.append(attr)
        attr._ownerElement = self
        self._attributeChanged()
        return old

    def removeAttribute(self, name):
        attr = self.getAttributeNode(name)
        if attr is not None:
            self.removeAttributeNode(attr)

    def removeAttributeNS(self, namespace, localName):
        attr = self.getAttributeNodeNS(namespace, localName)
        if attr is not None:
            self.removeAttributeNode(attr)

    def removeAttributeNode(self, attr):
        for i, a in enumerate(self._attributes):
            if a is attr:
                del self._attributes[i]
                attr._ownerElement = None
                self._attributeChanged()
                return attr
        raise NotFoundError()

    def _appendAttribute(self, name, value, namespace=None, prefix=None):
        """Adds an attribute without any name checks"""
        attr = Attr(name, value, namespace, prefix, self._document())
        attr._ownerElement = self
        self._attributes.append(attr)
        self._attributeChanged()
        return attr

    def _attributeChanged(self):
        self._touch()

    @property
    def id(self):
        return self.getAttribute("id") or ""

    @id.setter
    def id(self, value):
        self.setAttribute("id", value)

    @property
    def className(self):
        return self.getAttribute("class") or ""

    @className.setter
    def className(self, value):
        self.setAttribute("class", value)

    @property
    def classList(self):
        if self._classList is None:
            self._classList = DOMTokenList(self, "class")
        return self._classList

    @property
    def outerHTML(self):
        return serializeNode(self)

    # Copying and comparison

    def _cloneShallow(self, document):
        if document is None:
            copy = Element(self.localName, self.namespaceURI, self.prefix)
        else:
            copy = document._createElement(self.localName, self.namespaceURI,
                                           self.prefix)
        for attr in self._attributes:
            copy._appendAttribute(attr.localName, attr.value,
                                  attr.namespaceURI, attr.prefix)
        return copy

    def _equalsShallow(self, other):
        if (self.namespaceURI != other.namespaceURI or
                self.prefix != other.prefix or
                self.localName != other.localName or
                len(self._attributes) != len(other._attributes)):
            return False
        for attr in self._attributes:
            match = other.getAttributeNodeNS(attr.namespaceURI, attr.localName)
            if match is None or match.value != attr.value:
                return False
        return True

    def _adoptInto(self, document):
        Node._adoptInto(self, document)
        for attr in self._attributes:
            attr._ownerDocument = document


class TemplateElement(Element):
    """A ``<template>``; its children live in the inert ``content``
    fragment, owned by the document's template contents owner"""

    def __init__(self, ownerDocument, namespaceURI=namespaces["html"],
                 prefix=None):
        Element.__init__(self, "template", namespaceURI, prefix, ownerDocument)
        self.content = DocumentFragment(ownerDocument.templateContentsOwner())

    def _cloneSteps(self, copy, deep):
        if deep:
            owner = copy.content._document()
            for child in self.content.childNodes._nodes:
                copy.content._insertNodes(child._clone(owner, True), None)

    def _adoptInto(self, document):
        Element._adoptInto(self, document)
        self.content._setOwnerDocument(document.templateContentsOwner())


class Attr(Node):
    nodeType = Node.ATTRIBUTE_NODE
    specified = True

    def __init__(self, localName, value="", namespaceURI=None, prefix=None,
                 ownerDocument=None):
        Node.__init__(self, ownerDocument)
        self.localName = localName
        self.namespaceURI = namespaceURI
        self.prefix = prefix
        self._value = value
        self._ownerElement = None

    @property
    def name(self):
        if self.prefix:
            return "%s:%s" % (self.prefix, self.localName)
        return self.localName

    @property
    def nodeName(self):
        return self.name

    @property
    def ownerElement(self):
        return self._ownerElement

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        self._value = value
        if self._ownerElement is not None:
            self._ownerElement._attributeChanged()

    nodeValue = value
    textContent = value

    def _cloneShallow(self, document):
        return Attr(self.localName, self.value, self.namespaceURI,
                    self.prefix, document)

    def _equalsShallow(self, other):
        return (self.namespaceURI == other.namespaceURI and
                self.localName == other.localName and
                self.value == other.value)


class CharacterData(Node):
    """Shared behaviour of Text, Comment and ProcessingInstruction.

    Appended chunks are kept separately and only joined when the data is
    read, so that building a long text one character at a time stays
    linear.
    """

    def __init__(self, data="", ownerDocument=None):
        Node.__init__(self, ownerDocument)
        self._chunks = [data]

    @property
    def data(self):
        if len(self._chunks) > 1:
            self._chunks = ["".join(self._chunks)]
        return self._chunks[0]

    @data.setter
    def data(self, value):
        self._chunks = [value if value is not None else ""]

    nodeValue = data
    textContent = data

    @property
    def length(self):
        return len(self.data)

    def substringData(self, offset, count):
        if offset > self.length:
            raise IndexSizeError()
        return self.data[offset:offset + count]

    def appendData(self, data):
        self._chunks.append(data)

    def insertData(self, offset, data):
        self.replaceData(offset, 0, data)

    def deleteData(self, offset, count):
        self.replaceData(offset, count, "")

    def replaceData(self, offset, count, data):
        current = self.data
        if offset < 0 or offset > len(current):
            raise IndexSizeError()
        count = min(count, len(current) - offset)
        self.data = current[:offset] + data + current[offset + count:]

    def _equalsShallow(self, other):
        return self.data == other.data


class Text(CharacterData):
    nodeType = Node.TEXT_NODE

    @property
    def nodeName(self):
        return "#text"

    def __repr__(self):
        return "<Text %r>" % self.data

    def splitText(self, offset):
        """Splits at ``offset``, keeping the head here and returning a new
        Text node with the tail, inserted after this one"""
        if offset < 0 or offset > self.length:
            raise IndexSizeError()
        tail = Text(self.data[offset:], self._ownerDocument)
        if self._parent is not None:
            self._parent._insertNodes(tail, self.nextSibling)
        self.replaceData(offset, self.length - offset, "")
        return tail

    @property
    def wholeText(self):
        if self._parent is None:
            return self.data
        siblings = self._parent.childNodes._nodes
        index = self._parent.childNodes.index(self)
        start = index
        while start > 0 and isinstance(siblings[start - 1], Text):
            start -= 1
        end = index + 1
        while end < len(siblings) and isinstance(siblings[end], Text):
            end += 1
        return "".join(node.data for node in siblings[start:end])

    def _cloneShallow(self, document):
        return Text(self.data, document)


class Comment(CharacterData):
    nodeType = Node.COMMENT_NODE

    @property
    def nodeName(self):
        return "#comment"

    def _cloneShallow(self, document):
        return Comment(self.data, document)


class ProcessingInstruction(CharacterData):
    nodeType = Node.PROCESSING_INSTRUCTION_NODE

    def __init__(self, target, data="", ownerDocument=None):
        CharacterData.__init__(self, data, ownerDocument)
        self.target = target

    @property
    def nodeName(self):
        return self.target

    def _cloneShallow(self, document):
        return ProcessingInstruction(self.target, self.data, document)

    def _equalsShallow(self, other):
        return self.target == other.target and self.data == other.data


class NamedNodeMap(object):
    """Read view over an element's attributes"""

    def __init__(self, element):
        self._element = element

    def __len__(self):
        return len(self._element._attributes)

    def __iter__(self):
        return iter(list(self._element._attributes))

    def __getitem__(self, key):
        if isinstance(key, str):
            attr = self.getNamedItem(key)
            if attr is None:
                raise KeyError(key)
            return attr
        return self._element._attributes[key]

    @property
    def length(self):
        return len(self)

    def item(self, index):
        if 0 <= index < len(self):
            return self._element._attributes[index]
        return None

    def getNamedItem(self, name):
        return self._element.getAttributeNode(name)

    def getNamedItemNS(self, namespace, localName):
        return self._element.getAttributeNodeNS(namespace, localName)


class HTMLCollection(object):
    """An ordered collection of elements.

    The base class is a fixed snapshot; the live subclasses below keep
    ``_cache`` up to date and grow it on demand through ``_scan``.
    """

    def __init__(self, elements=()):
        self._cache = list(elements)

    def _sync(self):
        pass

    def _scan(self):
        """Finds the next matching element past the cached prefix, appends
        it to the cache and returns it, or returns None at the end"""
        return None

    def _fill(self, count=None):
        self._sync()
        while count is None or len(self._cache) < count:
            if self._scan() is None:
                break
        return self._cache

    @property
    def length(self):
        return len(self._fill())

    def __len__(self):
        return self.length

    def item(self, index):
        if index < 0:
            return None
        cache = self._fill(index + 1)
        if index < len(cache):
            return cache[index]
        return None

    def __getitem__(self, index):
        if isinstance(index, str):
            element = self.namedItem(index)
            if element is None:
                raise KeyError(index)
            return element
        if index < 0:
            index += self.length
        element = self.item(index)
        if element is None:
            raise IndexError("collection index out of range")
        return element

    def __iter__(self):
        index = 0
        while True:
            element = self.item(index)
            if element is None:
                return
            yield element
            index += 1

    def namedItem(self, name):
        """The first element whose id is ``name``, or an HTML element whose
        name attribute is"""
        if not name:
            return None
        for element in self:
            if element.getAttribute("id") == name:
                return element
            if (element.namespaceURI == namespaces["html"] and
                    element.getAttribute("name") == name):
                return element
        return None


class ChildrenCollection(HTMLCollection):
    """Live view of the Element children of a NodeList.

    ``_evaluated`` counts how many source nodes have been looked at; the
    cache holds the matching ones among them. Mutation notifications from
    the NodeList splice the cache instead of discarding it.
    """

    def __init__(self, nodes, matcher=None):
        HTMLCollection.__init__(self)
        self._nodes = nodes
        self._matcher = matcher
        self._evaluated = 0
        nodes._observe(self)

    def _matches(self, node):
        return isinstance(node, Element) and (self._matcher is None or
                                              self._matcher(node))

    def _scan(self):
        source = self._nodes._nodes
        while self._evaluated < len(source):
            node = source[self._evaluated]
            self._evaluated += 1
            if self._matches(node):
                self._cache.append(node)
                return node
        return None

    def _childInserted(self, index, node):
        if index >= self._evaluated:
            return
        self._evaluated += 1
        if not self._matches(node):
            return
        position = 0
        source = self._nodes._nodes
        for i in range(index):
            if position < len(self._cache) and source[i] is self._cache[position]:
                position += 1
        self._cache.insert(position, node)

    def _childRemoved(self, index, node):
        if index >= self._evaluated:
            return
        self._evaluated -= 1
        for i, cached in enumerate(self._cache):
            if cached is node:
                del self._cache[i]
                break


class DescendantCollection(HTMLCollection):
    """Live view of the matching descendants of ``root`` in tree order.

    The scan position is an explicit stack of (parent, next child index)
    pairs. The owning document reports every mutation to the collection. A
    change behind the scan position drops the cached elements from that
    point on and moves the scan back there; a change ahead of it needs
    nothing. Tree positions are compared as lists of child indices from
    the root.
    """

    def __init__(self, root, matcher):
        HTMLCollection.__init__(self)
        self._root = root
        self._matcher = matcher
        self._owner = None
        self._version = None
        self._stack = []

    def _sync(self):
        document = self._root._document()
        if (self._version is None or document is not self._owner or
                (document is not None and document._version != self._version)):
            self._reset(document)

    def _reset(self, document):
        self._owner = document
        self._version = document._version if document is not None else 0
        self._cache = []
        self._stack = [(self._root, 0)]
        if document is not None:
            document._collections.add(self)

    def _scan(self):
        stack = self._stack
        while stack:
            parent, index = stack[-1]
            children = parent.childNodes._nodes
            if index < len(children):
                stack[-1] = (parent, index + 1)
                node = children[index]
                stack.append((node, 0))
                if isinstance(node, Element) and self._matcher(node):
                    self._cache.append(node)
                    return node
            else:
                stack.pop()
        return None

    def _path(self, node):
        """Child indices leading from the root to ``node``, or None when
        ``node`` is outside the root's subtree"""
        path = []
        while node is not self._root:
            parent = node._parent
            if parent is None:
                return None
            path.append(parent.childNodes.index(node))
            node = parent
        path.reverse()
        return path

    def _frontier(self):
        """Position of the next node the scan will visit, or None once the
        scan has finished"""
        if not self._stack:
            return None
        return ([index - 1 for _, index in self._stack[:-1]] +
                [self._stack[-1][1]])

    def _nodeChanged(self, node, index):
        document = self._owner
        if document is None or node._document() is not document:
            return
        if self._version != document._version - 1:
            # A change went unreported; the next access starts over.
            return
        self._version = document._version

        position = self._path(node)
        if position is None:
            return
        if index is not None:
            position.append(index)
        elif not position:
            return
        frontier = self._frontier()
        if frontier is not None and position >= frontier:
            return

        while self._cache:
            cached = self._path(self._cache[-1])
            if cached is not None and cached < position:
                break
            self._cache.pop()

        stack = []
        parent = self._root
        for i in position[:-1]:
            stack.append((parent, i + 1))
            parent = parent.childNodes._nodes[i]
        stack.append((parent, position[-1]))
        self._stack = stack


class DOMTokenList(object):
    """The ordered set of tokens in one attribute of an element"""

    def __init__(self, element, attributeName):
        self._element = element
        self._attributeName = attributeName

    def _tokens(self):
        tokens = []
        for token in _splitTokens(self._element.getAttribute(self._attributeName) or ""):
            if token not in tokens:
                tokens.append(token)
        return tokens

    def _update(self, tokens):
        if not tokens and not self._element.hasAttribute(self._attributeName):
            return
        self._element.setAttribute(self._attributeName, " ".join(tokens))

    @staticmethod
    def _validate(token):
        if not token:
            raise DOMSyntaxError()
        if any(c in spaceCharacters for c in token):
            raise InvalidCharacterError()

    @property
    def value(self):
        return self._element.getAttribute(self._attributeName) or ""

    @value.setter
    def value(self, value):
        self._element.setAttribute(self._attributeName, value)

    @property
    def length(self):
        return len(self._tokens())

    def __len__(self):
        return self.length

    def __iter__(self):
        return iter(self._tokens())

    def __getitem__(self, index):
        return self._tokens()[index]

    def __contains__(self, token):
        return self.contains(token)

    def __repr__(self):
        return "<DOMTokenList %r>" % self._tokens()

    def item(self, index):
        tokens = self._tokens()
        if 0 <= index < len(tokens):
            return tokens[index]
        return None

    def contains(self, token):
        return token in self._tokens()

    def add(self, *tokens):
        for token in tokens:
            self._validate(token)
        current = self._tokens()
        for token in tokens:
            if token not in current:
                current.append(token)
        self._update(current)

    def remove(self, *tokens):
        for token in tokens:
            self._validate(token)
        current = [t for t in self._tokens() if t not in tokens]
        self._update(current)

    def toggle(self, token, force=None):
        self._validate(token)
        if token in self._tokens():
            if force is None or not force:
                self.remove(token)
                return False
            return True
        if force is None or force:
            self.add(token)
            return True
        return False

    def replace(self, token, newToken):
        """Replaces ``token`` in place; returns False if it was absent"""
        self._validate(token)
        self._validate(newToken)
        current = self._tokens()
        if token not in current:
            return False
        replaced = []
        for t in current:
            t = newToken if t == token else t
            if t not in replaced:
                replaced.append(t)
        self._update(replaced)
        return True


def _splitTokens(value):
    for char in spaceCharacters:
        value = value.replace(char, " ")
    return value.split()


def _validateQualifiedName(qualifiedName):
    """Returns (prefix, localName) or raises InvalidCharacterError"""
    if not nameRe.fullmatch(qualifiedName):
        raise InvalidCharacterError()
    parts = qualifiedName.split(":")
    if len(parts) == 1:
        return None, qualifiedName
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidCharacterError()
    return parts[0], parts[1]


def _descendantText(node):
    return "".join(n.data for n in _iterDescendants(node) if isinstance(n, Text))


def _replaceAllText(node, value):
    for child in list(node.childNodes._nodes):
        node._removeChild(child)
    if value:
        node._insertNodes(Text(value, node._document()), None)


# Serialisation

def _escape(text, attributeMode=False):
    text = text.replace("&", "&amp;").replace("\u00A0", "&nbsp;")
    if attributeMode:
        text = text.replace('"', "&quot;")
    else:
        text = text.replace("<", "&lt;").replace(">", "&gt;")
    return text


def _childrenOf(node):
    if isinstance(node, TemplateElement):
        node = node.content
    return iter(node.childNodes._nodes)


def _isVoid(element):
    return (element.localName in voidElements and
            element.namespaceURI in (namespaces["html"], None))


def _startTag(element):
    parts = ["<", element.tagName]
    for attr in element._attributes:
        parts.append(' %s="%s"' % (attr.name, _escape(attr.value, True)))
    parts.append(">")
    return "".join(parts)


def _serializeLeaf(node):
    if isinstance(node, Text):
        parent = node._parent
        if (isinstance(parent, Element) and parent.localName in rawTextParents):
            return node.data
        return _escape(node.data)
    elif isinstance(node, Comment):
        return "<!--%s-->" % node.data
    elif isinstance(node, ProcessingInstruction):
        return "<?%s %s>" % (node.target, node.data)
    elif isinstance(node, DocumentType):
        return "<!DOCTYPE %s>" % node.name
    return ""


def serializeChildren(node):
    """Serialises the children of ``node`` as HTML"""
    output = []
    stack = [(node, _childrenOf(node))]
    while stack:
        parent, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            if stack:
                output.append("</%s>" % parent.tagName)
            continue
        if isinstance(child, Element):
            output.append(_startTag(child))
            if not _isVoid(child):
                stack.append((child, _childrenOf(child)))
        else:
            output.append(_serializeLeaf(child))
    return "".join(output)


def serializeNode(node):
    """Serialises ``node`` itself together with its subtree"""
    if not isinstance(node, Element):
        if isinstance(node, (Document, DocumentFragment)):
            return serializeChildren(node)
        return _serializeLeaf(node)
    if _isVoid(node):
        return _startTag(node)
    return "%s%s</%s>" % (_startTag(node), serializeChildren(node), node.tagName)
