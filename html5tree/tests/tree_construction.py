# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

import pytest

from .support import (TestData, convertExpected, convertTreeDump,
                      namespaceExpected, treeTypes)
from html5tree import html5parser, constants


class TreeConstructionFile(pytest.File):
    def collect(self):
        tests = TestData(str(self.path), "data")
        for i, test in enumerate(tests):
            for treeName, treeClass in sorted(treeTypes.items()):
                for namespaceHTMLElements in (True, False):
                    if namespaceHTMLElements:
                        nodeid = "%d::%s::namespaced" % (i, treeName)
                    else:
                        nodeid = "%d::%s::void-namespace" % (i, treeName)
                    yield ParserTest.from_parent(
                        self, name=nodeid, test=test, treeClass=treeClass,
                        namespaceHTMLElements=namespaceHTMLElements)


class ParserTest(pytest.Item):
    def __init__(self, name, parent, test, treeClass, namespaceHTMLElements):
        super(ParserTest, self).__init__(name, parent)
        self.test = test
        self.treeClass = treeClass
        self.namespaceHTMLElements = namespaceHTMLElements

    def runtest(self):
        scripting = "script-off" not in self.test
        p = html5parser.HTMLParser(tree=self.treeClass,
                                   namespaceHTMLElements=self.namespaceHTMLElements,
                                   scripting=scripting)

        input = self.test['data']
        fragmentContainer = self.test['document-fragment']
        expected = self.test['document']

        if fragmentContainer:
            document = p.parseFragment(input, fragmentContainer)
        else:
            document = p.parse(input)

        output = convertTreeDump(p.tree.testSerializer(document))

        expected = convertExpected(expected)
        if self.namespaceHTMLElements:
            expected = namespaceExpected(r"\1<html \2>", expected)

        errorMsg = "\n".join(["\n\nInput:", input, "\nExpected:", expected,
                              "\nReceived:", output])
        assert expected == output, errorMsg

        # Every reported error must have a message that formats
        for (line, col), errorcode, datavars in p.errors:
            assert isinstance(datavars, dict), "%s, %s" % (errorcode, repr(datavars))
            assert isinstance(constants.E[errorcode] % datavars, str)

    def reportinfo(self):
        return self.path, 0, "tree construction: %s" % self.name
