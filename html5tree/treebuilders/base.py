# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

from ..constants import scopingElements, impliedEndTagElements, namespaces
from .._tokenizer import StartTag

# The scope markers are inserted when entering applet, object and marquee
# elements and templates, and are used to prevent formatting from "leaking"
# into them.
Marker = None

listElementsMap = {
    None: frozenset(scopingElements),
    "button": frozenset(scopingElements | set(["button"])),
    "list": frozenset(scopingElements | set(["ol", "ul"])),
}


def elementAttributes(element):
    """Returns the attributes of ``element`` as a name -> value dict"""
    return dict((attr.name, attr.value) for attr in element.attributes)


class ActiveFormattingElements(list):
    def append(self, node):
        equalCount = 0
        if node is not Marker:
            for element in self[::-1]:
                if element is Marker:
                    break
                if self.nodesEqual(element, node):
                    equalCount += 1
                if equalCount == 3:
                    self.remove(element)
                    break
        list.append(self, node)

    def nodesEqual(self, node1, node2):
        if (node1.localName != node2.localName or
                node1.namespaceURI != node2.namespaceURI):
            return False

        if not elementAttributes(node1) == elementAttributes(node2):
            return False

        return True


class TreeBuilder(object):
    """Base treebuilder implementation

    * documentClass - the class to use for the bottommost node of a document
    * doctypeClass - the class to use for doctypes
    """

    # Document class
    documentClass = None

    # The class to use for creating doctypes
    doctypeClass = None

    def __init__(self, namespaceHTMLElements):
        if namespaceHTMLElements:
            self.defaultNamespace = namespaces["html"]
        else:
            self.defaultNamespace = None
        self.reset()

    def reset(self):
        self.openElements = []
        self.activeFormattingElements = ActiveFormattingElements()

        self.headPointer = None
        self.formPointer = None

        self.templateModes = []

        self.document = self.documentClass()

    def elementInScope(self, target, variant=None):
        # If we pass a node in we match that. If we pass a string
        # match any node with that name
        exactNode = not isinstance(target, str)

        listElements = listElementsMap[variant]

        for node in reversed(self.openElements):
            if exactNode:
                if node is target:
                    return True
            elif node.localName == target:
                return True
            if node.localName in listElements:
                return False

        return False

    def reconstructActiveFormattingElements(self):
        # Within this algorithm the order of steps described in the
        # HTML standard is not quite the same as the order of steps in the
        # code. It should still do the same though.

        # Step 1: stop the algorithm when there's nothing to do.
        if not self.activeFormattingElements:
            return

        # Step 2 and step 3: we start with the last element. So i is -1.
        i = len(self.activeFormattingElements) - 1
        entry = self.activeFormattingElements[i]
        if entry is Marker or entry in self.openElements:
            return

        # Step 6
        while entry is not Marker and entry not in self.openElements:
            if i == 0:
                # This will be reset to 0 below
                i = -1
                break
            i -= 1
            # Step 5: let entry be one earlier in the list.
            entry = self.activeFormattingElements[i]

        while True:
            # Step 7
            i += 1

            # Step 8
            entry = self.activeFormattingElements[i]

            # Step 9
            element = self.insertElement(StartTag(entry.localName,
                                                  elementAttributes(entry)))

            # Step 10
            self.activeFormattingElements[i] = element

            # Step 11
            if element is self.activeFormattingElements[-1]:
                break

    def clearActiveFormattingElements(self):
        entry = self.activeFormattingElements.pop()
        while self.activeFormattingElements and entry is not Marker:
            entry = self.activeFormattingElements.pop()

    def elementInActiveFormattingElements(self, name):
        """Check if an element exists between the end of the active
        formatting elements and the last marker. If it does, return it, else
        return None"""

        for item in self.activeFormattingElements[::-1]:
            # Check for Marker first because if it's a Marker it doesn't have a
            # name attribute.
            if item is Marker:
                break
            elif item.localName == name:
                return item
        return None

    def insertRoot(self, token):
        element = self.createElement(token)
        self.openElements.append(element)
        self.document.appendChild(element)

    def insertDoctype(self, token):
        doctype = self.doctypeClass(token.name or "", token.public_id or "",
                                    token.system_id or "", self.document)
        self.document.appendChild(doctype)

    def insertComment(self, token, parent=None):
        parent = self.insertionParent(parent)
        parent.appendChild(self.document.createComment(token.data))

    def createElement(self, token):
        """Create an element but don't insert it anywhere"""
        element = self.document._createElement(token.name, self.defaultNamespace)
        for name, value in token.attributes.items():
            element._appendAttribute(name, value)
        return element

    def insertionParent(self, target=None):
        """The node new children go into: ``target``, or the current node,
        with templates redirected to their content"""
        if target is None:
            target = self.openElements[-1]
        if getattr(target, "content", None) is not None:
            return target.content
        return target

    def insertElement(self, token):
        element = self.createElement(token)
        self.insertionParent().appendChild(element)
        self.openElements.append(element)
        return element

    def insertText(self, data, parent=None):
        """Insert text data, merging it into a preceding text node"""
        parent = self.insertionParent(parent)
        if parent is self.document:
            return

        lastChild = parent.lastChild
        if lastChild is not None and lastChild.nodeType == lastChild.TEXT_NODE:
            lastChild.appendData(data)
        else:
            parent.appendChild(self.document.createTextNode(data))

    def reparentChildren(self, node, newParent):
        """Move all the children of node to newParent"""
        for child in list(node.childNodes):
            newParent.appendChild(child)

    def generateImpliedEndTags(self, exclude=None):
        while True:
            name = self.openElements[-1].localName
            if name not in impliedEndTagElements or name == exclude:
                break
            self.openElements.pop()

    def getDocument(self):
        "Return the final tree"
        return self.document

    def getFragment(self):
        "Return the final fragment"
        fragment = self.document.createDocumentFragment()
        self.reparentChildren(self.openElements[0], fragment)
        return fragment

    def testSerializer(self, node):
        """Serialize the subtree of node in the format required by unit tests

        :arg node: the node from which to start serializing
        """
        raise NotImplementedError
