# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

import logging
import types

from . import _tokenizer
from . import treebuilders
from .treebuilders.base import Marker

from . import utils
from .constants import (
    asciiUpper2Lower,
    specialElements, headingElements,
    rcdataElements, rawtextElements,
    quirkyPublicPrefixes, quirkyPublicIds,
    html4Transitional, xhtml1Transitional,
    E
)

log = logging.getLogger(__name__)

_parserOptions = ("strict", "debug", "scripting", "errors")


def parse(doc, treebuilder="dom", namespaceHTMLElements=True,
          isFragment=False, **kwargs):
    """Parse an HTML document as a string or file-like object into a tree

    :arg doc: the document to parse as a string or file-like object

    :arg treebuilder: the treebuilder to use when parsing

    :arg isFragment: parse ``doc`` as a fragment in a ``div`` context

    :returns: parsed tree

    Example:

    >>> from html5tree.html5parser import parse
    >>> parse('<html><body><p>This is a doc</p></body></html>')
    <Document #document>

    """
    parserKwargs = dict((name, kwargs.pop(name)) for name in list(kwargs)
                        if name in _parserOptions)
    tb = treebuilders.getTreeBuilder(treebuilder)
    p = HTMLParser(tb, namespaceHTMLElements=namespaceHTMLElements,
                   **parserKwargs)
    if isFragment:
        return p.parseFragment(doc, **kwargs)
    return p.parse(doc, **kwargs)


def parseFragment(doc, container="div", treebuilder="dom",
                  namespaceHTMLElements=True, **kwargs):
    """Parse an HTML fragment as a string or file-like object into a tree

    :arg doc: the fragment to parse as a string or file-like object

    :arg container: the container context to parse the fragment in

    :arg treebuilder: the treebuilder to use when parsing

    :returns: parsed tree

    Example:

    >>> from html5tree.html5parser import parseFragment
    >>> parseFragment('<b>this is a fragment</b>')
    <DocumentFragment #document-fragment>

    """
    parserKwargs = dict((name, kwargs.pop(name)) for name in list(kwargs)
                        if name in _parserOptions)
    tb = treebuilders.getTreeBuilder(treebuilder)
    p = HTMLParser(tb, namespaceHTMLElements=namespaceHTMLElements,
                   **parserKwargs)
    return p.parseFragment(doc, container=container, **kwargs)


class HTMLParser(object):
    """HTML parser

    Generates a tree structure from a stream of (possibly malformed) HTML.

    """

    def __init__(self, tree=None, strict=False, namespaceHTMLElements=True,
                 debug=False, scripting=True, errors=None):
        """
        :arg tree: a treebuilder class controlling the type of tree that will be
            returned. Built in treebuilders can be accessed through
            html5tree.treebuilders.getTreeBuilder(treeType)

        :arg strict: raise an exception when a parse error is encountered

        :arg namespaceHTMLElements: whether or not to namespace HTML elements

        :arg debug: whether or not to enable debug mode which logs things

        :arg scripting: whether noscript content is treated as raw text

        :arg errors: a list that parse errors are appended to instead of
            a fresh one per parse

        Example:

        >>> from html5tree.html5parser import HTMLParser
        >>> parser = HTMLParser()                     # generates parser with dom tree
        >>> parser = HTMLParser(strict=True)          # raises ParseError on errors

        """

        # Raise an exception on the first error encountered
        self.strict = strict
        self.scripting = scripting
        self.errorSink = errors

        if tree is None:
            tree = treebuilders.getTreeBuilder("dom")
        self.tree = tree(namespaceHTMLElements)
        self.errors = []

        self.phases = dict([(name, cls(self, self.tree)) for name, cls in
                            getPhases(debug).items()])

    def _parse(self, stream, innerHTML=False, container="div", encoding=None):

        self.innerHTMLMode = innerHTML
        self.container = container
        self.tokenizer = _tokenizer.HTMLTokenizer(stream, encoding=encoding)
        self.reset()

        self.mainLoop()

    def reset(self):
        self.tree.reset()
        self.firstStartTag = False
        self.errors = self.errorSink if self.errorSink is not None else []
        self.log = []  # only used with debug mode
        # "quirks" / "limited quirks" / "no quirks"
        self.compatMode = "no quirks"

        if self.innerHTMLMode:
            self.innerHTML = self.container.lower()

            if self.innerHTML in rcdataElements:
                self.tokenizer.state = self.tokenizer.rcdataState
            elif self.innerHTML in rawtextElements:
                self.tokenizer.state = self.tokenizer.rawtextState
            elif self.innerHTML == "noscript" and self.scripting:
                self.tokenizer.state = self.tokenizer.rawtextState
            elif self.innerHTML == "plaintext":
                self.tokenizer.state = self.tokenizer.plaintextState
            else:
                # state already is data state
                # self.tokenizer.state = self.tokenizer.dataState
                pass
            self.phase = self.phases["beforeHtml"]
            self.phase.insertHtmlElement()
            if self.innerHTML == "template":
                self.tree.templateModes.append("inTemplate")
            self.resetInsertionMode()
        else:
            self.innerHTML = False  # pylint:disable=redefined-variable-type
            self.phase = self.phases["initial"]

        self.originalPhase = None

        self.framesetOK = True

    @property
    def documentEncoding(self):
        """Name of the character encoding that was used to decode the input
        stream, or :obj:`None` if that is not determined yet

        """
        if not hasattr(self, 'tokenizer'):
            return None
        charEncoding = self.tokenizer.stream.charEncoding
        if charEncoding is None:
            return None
        return charEncoding[0].name

    def mainLoop(self):
        Characters = _tokenizer.Characters
        SpaceCharacters = _tokenizer.SpaceCharacters
        StartTag = _tokenizer.StartTag
        EndTag = _tokenizer.EndTag
        Comment = _tokenizer.Comment
        Doctype = _tokenizer.Doctype
        ParseErrorToken = _tokenizer.ParseError
        EndOfFile = _tokenizer.EndOfFile

        for token in self.tokenizer:
            if isinstance(token, ParseErrorToken):
                self.parseError(token.data, token.datavars, token.position)
                continue
            if isinstance(token, EndOfFile):
                break

            new_token = token
            while new_token is not None:
                phase = self.phase
                if isinstance(new_token, Characters):
                    new_token = phase.processCharacters(new_token)
                elif isinstance(new_token, SpaceCharacters):
                    new_token = phase.processSpaceCharacters(new_token)
                elif isinstance(new_token, StartTag):
                    new_token = phase.processStartTag(new_token)
                elif isinstance(new_token, EndTag):
                    new_token = phase.processEndTag(new_token)
                elif isinstance(new_token, Comment):
                    new_token = phase.processComment(new_token)
                elif isinstance(new_token, Doctype):
                    new_token = phase.processDoctype(new_token)

            if (isinstance(token, StartTag) and token.self_closing and
                    not token.self_closing_acknowledged):
                self.parseError("non-void-element-with-trailing-solidus",
                                {"name": token.name})

        # When the loop finishes it's EOF
        reprocess = True
        while reprocess:
            reprocess = self.phase.processEOF()

    def parse(self, stream, encoding=None):
        """Parse a HTML document into a well-formed tree

        :arg stream: a file-like object or string containing the HTML to be parsed

            The optional encoding parameter must be a string that indicates
            the encoding.  If specified, that encoding will be used,
            regardless of any BOM or later declaration (such as in a meta
            element).

        :returns: parsed tree

        Example:

        >>> from html5tree.html5parser import HTMLParser
        >>> parser = HTMLParser()
        >>> parser.parse('<html><body><p>This is a doc</p></body></html>')
        <Document #document>

        """
        self._parse(stream, False, None, encoding=encoding)
        return self.tree.getDocument()

    def parseFragment(self, stream, container="div", encoding=None):
        """Parse a HTML fragment into a well-formed tree fragment

        :arg container: name of the element we're setting the innerHTML
            property if set to None, default to 'div'

        :arg stream: a file-like object or string containing the HTML to be parsed

        :returns: parsed tree

        Example:

        >>> from html5tree.html5parser import HTMLParser
        >>> parser = HTMLParser()
        >>> parser.parseFragment('<b>this is a fragment</b>')
        <DocumentFragment #document-fragment>

        """
        self._parse(stream, True, container=container, encoding=encoding)
        return self.tree.getFragment()

    def parseError(self, errorcode="XXX-undefined-error", datavars=None,
                   position=None):
        if datavars is None:
            datavars = {}
        if position is None:
            position = self.tokenizer.stream.position()
        self.errors.append((position, errorcode, datavars))
        log.debug("parse error %s %r at line %d column %d",
                  errorcode, datavars, position[0], position[1])
        if self.strict:
            raise ParseError(E[errorcode] % datavars)

    def resetInsertionMode(self):
        # The name of this method is mostly historical. (It's also used in the
        # HTML standard.)
        last = False
        newModes = {
            "body": "inBody",
            "frameset": "inFrameset",
        }

        new_phase = None
        for node in self.tree.openElements[::-1]:
            nodeName = node.localName
            if node is self.tree.openElements[0]:
                last = True
                if self.innerHTML:
                    nodeName = self.innerHTML
            # Check for conditions that should only happen in the innerHTML
            # case
            if nodeName == "template":
                new_phase = self.phases[self.tree.templateModes[-1]]
                break
            elif nodeName == "head" and not last:
                new_phase = self.phases["inHead"]
                break
            elif nodeName in newModes:
                new_phase = self.phases[newModes[nodeName]]
                break
            elif nodeName == "html":
                if self.tree.headPointer is None:
                    new_phase = self.phases["beforeHead"]
                else:
                    new_phase = self.phases["afterHead"]
                break
            elif last:
                new_phase = self.phases["inBody"]
                break

        self.phase = new_phase

    def parseRCDataRawtext(self, token, contentType):
        # Generic RCDATA/RAWTEXT Parsing algorithm
        assert contentType in ("RAWTEXT", "RCDATA")

        self.tree.insertElement(token)

        if contentType == "RAWTEXT":
            self.tokenizer.state = self.tokenizer.rawtextState
        else:
            self.tokenizer.state = self.tokenizer.rcdataState

        self.originalPhase = self.phase

        self.phase = self.phases["text"]


def method_decorator_metaclass(function):
    class Decorated(type):
        def __new__(meta, classname, bases, classDict):
            for attributeName, attribute in classDict.items():
                if isinstance(attribute, types.FunctionType):
                    attribute = function(attribute)

                classDict[attributeName] = attribute
            return type.__new__(meta, classname, bases, classDict)
    return Decorated


def log_process(function):
    """Logger that records which phase processes each token"""
    def wrapped(self, *args, **kwargs):
        if function.__name__.startswith("process") and len(args) > 0:
            token = args[0]
            info = {"type": token.__class__.__name__}
            if isinstance(token, _tokenizer.Tag):
                info["name"] = token.name

            self.parser.log.append((self.parser.tokenizer.state.__name__,
                                    self.parser.phase.__class__.__name__,
                                    self.__class__.__name__,
                                    function.__name__,
                                    info))
            return function(self, *args, **kwargs)
        else:
            return function(self, *args, **kwargs)
    return wrapped


def getMetaclass(use_metaclass, metaclass_func):
    if use_metaclass:
        return method_decorator_metaclass(metaclass_func)
    else:
        return type


def getPhases(debug):
    # pylint:disable=unused-argument
    class Phase(metaclass=getMetaclass(debug, log_process)):
        """Base class for helper object that implements each phase of processing
        """

        def __init__(self, parser, tree):
            self.parser = parser
            self.tree = tree

        def processEOF(self):
            raise NotImplementedError

        def processComment(self, token):
            # For most phases the following is correct. Where it's not it will be
            # overridden.
            self.tree.insertComment(token)

        def processDoctype(self, token):
            self.parser.parseError("unexpected-doctype")

        def processCharacters(self, token):
            self.tree.insertText(token.data)

        def processSpaceCharacters(self, token):
            self.tree.insertText(token.data)

        def processStartTag(self, token):
            return self.startTagHandler[token.name](token)

        def startTagHtml(self, token):
            if not self.parser.firstStartTag and token.name == "html":
                self.parser.parseError("non-html-root")
            if self.tree.templateModes and self.templateInScope():
                return
            # XXX Need a check here to see if the first start tag token emitted is
            # this token... If it's not, invoke self.parser.parseError().
            root = self.tree.openElements[0]
            for attr, value in token.attributes.items():
                if not root.hasAttribute(attr):
                    root._appendAttribute(attr, value)
            self.parser.firstStartTag = False

        def processEndTag(self, token):
            return self.endTagHandler[token.name](token)

        def templateInScope(self):
            for node in self.tree.openElements:
                if node.localName == "template":
                    return True
            return False

    class InitialPhase(Phase):
        def processSpaceCharacters(self, token):
            pass

        def processComment(self, token):
            self.tree.insertComment(token, self.tree.document)

        def processDoctype(self, token):
            name = token.name
            publicId = token.public_id
            systemId = token.system_id
            correct = token.correct

            if (name != "html" or publicId is not None or
                    systemId is not None and systemId != "about:legacy-compat"):
                self.parser.parseError("unknown-doctype")

            if publicId is None:
                publicId = ""

            self.tree.insertDoctype(token)

            if publicId != "":
                publicId = publicId.translate(asciiUpper2Lower)

            if (not correct or name != "html" or
                    publicId.startswith(quirkyPublicPrefixes) or
                    publicId in quirkyPublicIds or
                    systemId is None and publicId.startswith(html4Transitional) or
                    systemId and systemId.lower() ==
                    "http://www.ibm.com/data/dtd/v11/ibmxhtml1-transitional.dtd"):
                self.setCompatMode("quirks")
            elif (publicId.startswith(xhtml1Transitional) or
                  systemId is not None and publicId.startswith(html4Transitional)):
                self.setCompatMode("limited quirks")

            self.parser.phase = self.parser.phases["beforeHtml"]

        def setCompatMode(self, mode):
            self.parser.compatMode = mode
            self.tree.document.mode = mode

        def anythingElse(self):
            self.setCompatMode("quirks")
            self.parser.phase = self.parser.phases["beforeHtml"]

        def processCharacters(self, token):
            self.parser.parseError("expected-doctype-but-got-chars")
            self.anythingElse()
            return token

        def processStartTag(self, token):
            self.parser.parseError("expected-doctype-but-got-start-tag",
                                   {"name": token.name})
            self.anythingElse()
            return token

        def processEndTag(self, token):
            self.parser.parseError("expected-doctype-but-got-end-tag",
                                   {"name": token.name})
            self.anythingElse()
            return token

        def processEOF(self):
            self.parser.parseError("expected-doctype-but-got-eof")
            self.anythingElse()
            return True

    class BeforeHtmlPhase(Phase):
        # helper methods
        def insertHtmlElement(self):
            self.tree.insertRoot(impliedTagToken("html", "StartTag"))
            self.parser.phase = self.parser.phases["beforeHead"]

        # other
        def processEOF(self):
            self.insertHtmlElement()
            return True

        def processComment(self, token):
            self.tree.insertComment(token, self.tree.document)

        def processSpaceCharacters(self, token):
            pass

        def processCharacters(self, token):
            self.insertHtmlElement()
            return token

        def processStartTag(self, token):
            if token.name == "html":
                self.parser.firstStartTag = True
            self.insertHtmlElement()
            return token

        def processEndTag(self, token):
            if token.name not in ("head", "body", "html", "br"):
                self.parser.parseError("unexpected-end-tag-before-html",
                                       {"name": token.name})
            else:
                self.insertHtmlElement()
                return token

    class BeforeHeadPhase(Phase):
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml),
                ("head", self.startTagHead)
            ])
            self.startTagHandler.default = self.startTagOther

            self.endTagHandler = utils.MethodDispatcher([
                (("head", "body", "html", "br"), self.endTagImplyHead)
            ])
            self.endTagHandler.default = self.endTagOther

        def processEOF(self):
            self.startTagHead(impliedTagToken("head", "StartTag"))
            return True

        def processSpaceCharacters(self, token):
            pass

        def processCharacters(self, token):
            self.startTagHead(impliedTagToken("head", "StartTag"))
            return token

        def startTagHtml(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagHead(self, token):
            self.tree.insertElement(token)
            self.tree.headPointer = self.tree.openElements[-1]
            self.parser.phase = self.parser.phases["inHead"]

        def startTagOther(self, token):
            self.startTagHead(impliedTagToken("head", "StartTag"))
            return token

        def endTagImplyHead(self, token):
            self.startTagHead(impliedTagToken("head", "StartTag"))
            return token

        def endTagOther(self, token):
            self.parser.parseError("end-tag-after-implied-root",
                                   {"name": token.name})

    class InHeadPhase(Phase):
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml),
                ("title", self.startTagTitle),
                (("noframes", "style"), self.startTagNoFramesStyle),
                ("noscript", self.startTagNoscript),
                ("script", self.startTagScript),
                (("base", "basefont", "bgsound", "command", "link", "meta"),
                 self.startTagBaseLinkCommand),
                ("head", self.startTagHead),
                ("template", self.startTagTemplate)
            ])
            self.startTagHandler.default = self.startTagOther

            self.endTagHandler = utils.MethodDispatcher([
                ("head", self.endTagHead),
                (("br", "html", "body"), self.endTagHtmlBodyBr),
                ("template", self.endTagTemplate)
            ])
            self.endTagHandler.default = self.endTagOther

        # the real thing
        def processEOF(self):
            self.anythingElse()
            return True

        def processCharacters(self, token):
            self.anythingElse()
            return token

        def startTagHtml(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagHead(self, token):
            self.parser.parseError("two-heads-are-not-better-than-one")

        def startTagBaseLinkCommand(self, token):
            self.tree.insertElement(token)
            self.tree.openElements.pop()
            token.self_closing_acknowledged = True

        def startTagTitle(self, token):
            self.parser.parseRCDataRawtext(token, "RCDATA")

        def startTagNoFramesStyle(self, token):
            # Need to decide whether to implement the scripting-disabled case
            self.parser.parseRCDataRawtext(token, "RAWTEXT")

        def startTagNoscript(self, token):
            if self.parser.scripting:
                self.parser.parseRCDataRawtext(token, "RAWTEXT")
            else:
                self.tree.insertElement(token)
                self.parser.phase = self.parser.phases["inHeadNoscript"]

        def startTagScript(self, token):
            # Script content is raw text up to the matching end tag
            self.parser.parseRCDataRawtext(token, "RAWTEXT")

        def startTagTemplate(self, token):
            self.tree.insertElement(token)
            self.tree.activeFormattingElements.append(Marker)
            self.parser.framesetOK = False
            self.parser.phase = self.parser.phases["inTemplate"]
            self.tree.templateModes.append("inTemplate")

        def startTagOther(self, token):
            self.anythingElse()
            return token

        def endTagHead(self, token):
            node = self.parser.tree.openElements.pop()
            assert node.localName == "head", "Expected head got %s" % node.localName
            self.parser.phase = self.parser.phases["afterHead"]

        def endTagHtmlBodyBr(self, token):
            self.anythingElse()
            return token

        def endTagTemplate(self, token):
            if not self.templateInScope():
                self.parser.parseError("unexpected-end-tag", {"name": token.name})
                return
            self.tree.generateImpliedEndTags()
            if self.tree.openElements[-1].localName != "template":
                self.parser.parseError("end-tag-too-early", {"name": token.name})
            node = self.tree.openElements.pop()
            while node.localName != "template":
                node = self.tree.openElements.pop()
            self.tree.clearActiveFormattingElements()
            self.tree.templateModes.pop()
            self.parser.resetInsertionMode()

        def endTagOther(self, token):
            self.parser.parseError("unexpected-end-tag", {"name": token.name})

        def anythingElse(self):
            self.endTagHead(impliedTagToken("head"))

    class InHeadNoscriptPhase(Phase):
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml),
                (("basefont", "bgsound", "link", "meta", "noframes", "style"),
                 self.startTagBaseLinkCommand),
                (("head", "noscript"), self.startTagHeadNoscript),
            ])
            self.startTagHandler.default = self.startTagOther

            self.endTagHandler = utils.MethodDispatcher([
                ("noscript", self.endTagNoscript),
                ("br", self.endTagBr),
            ])
            self.endTagHandler.default = self.endTagOther

        def processEOF(self):
            self.parser.parseError("eof-in-head-noscript")
            self.anythingElse()
            return True

        def processComment(self, token):
            return self.parser.phases["inHead"].processComment(token)

        def processCharacters(self, token):
            self.parser.parseError("char-in-head-noscript")
            self.anythingElse()
            return token

        def processSpaceCharacters(self, token):
            return self.parser.phases["inHead"].processSpaceCharacters(token)

        def startTagHtml(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagBaseLinkCommand(self, token):
            return self.parser.phases["inHead"].processStartTag(token)

        def startTagHeadNoscript(self, token):
            self.parser.parseError("unexpected-start-tag", {"name": token.name})

        def startTagOther(self, token):
            self.parser.parseError("unexpected-inhead-noscript-tag",
                                   {"name": token.name})
            self.anythingElse()
            return token

        def endTagNoscript(self, token):
            node = self.parser.tree.openElements.pop()
            assert node.localName == "noscript", "Expected noscript got %s" % node.localName
            self.parser.phase = self.parser.phases["inHead"]

        def endTagBr(self, token):
            self.parser.parseError("unexpected-inhead-noscript-tag",
                                   {"name": token.name})
            self.anythingElse()
            return token

        def endTagOther(self, token):
            self.parser.parseError("unexpected-end-tag", {"name": token.name})

        def anythingElse(self):
            # Caller must raise parse error first!
            self.endTagNoscript(impliedTagToken("noscript"))

    class AfterHeadPhase(Phase):
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml),
                ("body", self.startTagBody),
                ("frameset", self.startTagFrameset),
                (("base", "basefont", "bgsound", "link", "meta", "noframes",
                  "script", "style", "template", "title"),
                 self.startTagFromHead),
                ("head", self.startTagHead)
            ])
            self.startTagHandler.default = self.startTagOther
            self.endTagHandler = utils.MethodDispatcher([
                ("template", self.endTagTemplate),
                (("body", "html", "br"), self.endTagHtmlBodyBr)
            ])
            self.endTagHandler.default = self.endTagOther

        def processEOF(self):
            self.anythingElse()
            return True

        def processCharacters(self, token):
            self.anythingElse()
            return token

        def startTagHtml(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagBody(self, token):
            self.parser.framesetOK = False
            self.tree.insertElement(token)
            self.parser.phase = self.parser.phases["inBody"]

        def startTagFrameset(self, token):
            self.tree.insertElement(token)
            self.parser.phase = self.parser.phases["inFrameset"]

        def startTagFromHead(self, token):
            self.parser.parseError("unexpected-start-tag-out-of-my-head",
                                   {"name": token.name})
            self.tree.openElements.append(self.tree.headPointer)
            self.parser.phases["inHead"].processStartTag(token)
            for node in self.tree.openElements[::-1]:
                if node is self.tree.headPointer:
                    self.tree.openElements.remove(node)
                    break

        def startTagHead(self, token):
            self.parser.parseError("unexpected-start-tag", {"name": token.name})

        def startTagOther(self, token):
            self.anythingElse()
            return token

        def endTagTemplate(self, token):
            return self.parser.phases["inHead"].processEndTag(token)

        def endTagHtmlBodyBr(self, token):
            self.anythingElse()
            return token

        def endTagOther(self, token):
            self.parser.parseError("unexpected-end-tag", {"name": token.name})

        def anythingElse(self):
            self.tree.insertElement(impliedTagToken("body", "StartTag"))
            self.parser.phase = self.parser.phases["inBody"]
            self.parser.framesetOK = True

    class InBodyPhase(Phase):
        # http://www.whatwg.org/specs/web-apps/current-work/#parsing-main-inbody
        # the really-really-really-very crazy mode
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            # Set this to the default handler
            self.processSpaceCharacters = self.processSpaceCharactersNonPre

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml),
                (("base", "basefont", "bgsound", "command", "link", "meta",
                  "noframes", "script", "style", "template", "title"),
                 self.startTagProcessInHead),
                ("body", self.startTagBody),
                ("frameset", self.startTagFrameset),
                (("address", "article", "aside", "blockquote", "center", "details",
                  "dialog", "dir", "div", "dl", "fieldset", "figcaption", "figure",
                  "footer", "header", "hgroup", "main", "menu", "nav", "ol", "p",
                  "section", "summary", "ul"),
                 self.startTagCloseP),
                (headingElements, self.startTagHeading),
                (("pre", "listing"), self.startTagPreListing),
                ("form", self.startTagForm),
                (("li", "dd", "dt"), self.startTagListItem),
                ("plaintext", self.startTagPlaintext),
                ("a", self.startTagA),
                (("b", "big", "code", "em", "font", "i", "s", "small", "strike",
                  "strong", "tt", "u"), self.startTagFormatting),
                ("nobr", self.startTagNobr),
                ("button", self.startTagButton),
                (("applet", "marquee", "object"), self.startTagAppletMarqueeObject),
                ("xmp", self.startTagXmp),
                ("table", self.startTagTable),
                (("area", "br", "embed", "img", "keygen", "wbr"),
                 self.startTagVoidFormatting),
                (("col", "param", "source", "track"), self.startTagParamSource),
                ("input", self.startTagInput),
                ("hr", self.startTagHr),
                ("image", self.startTagImage),
                ("textarea", self.startTagTextarea),
                ("iframe", self.startTagIFrame),
                ("noscript", self.startTagNoscript),
                ("noembed", self.startTagRawtext),
                ("select", self.startTagSelect),
                (("rb", "rtc"), self.startTagRbRtc),
                (("rp", "rt"), self.startTagRpRt),
                (("optgroup", "option"), self.startTagOpt),
                (("frame", "head"), self.startTagMisplaced)
            ])
            self.startTagHandler.default = self.startTagOther

            self.endTagHandler = utils.MethodDispatcher([
                ("body", self.endTagBody),
                ("html", self.endTagHtml),
                (("address", "article", "aside", "blockquote", "button", "center",
                  "details", "dialog", "dir", "div", "dl", "fieldset", "figcaption", "figure",
                  "footer", "header", "hgroup", "listing", "main", "menu", "nav", "ol", "pre",
                  "section", "summary", "ul"), self.endTagBlock),
                ("form", self.endTagForm),
                ("p", self.endTagP),
                (("dd", "dt", "li"), self.endTagListItem),
                (headingElements, self.endTagHeading),
                (("a", "b", "big", "code", "em", "font", "i", "nobr", "s", "small",
                  "strike", "strong", "tt", "u"), self.endTagFormatting),
                (("applet", "marquee", "object"), self.endTagAppletMarqueeObject),
                ("br", self.endTagBr),
                ("template", self.endTagTemplate),
            ])
            self.endTagHandler.default = self.endTagOther

        # helper
        def addFormattingElement(self, token):
            # The list itself enforces the limit of three matching entries
            # after the last marker
            element = self.tree.insertElement(token)
            self.tree.activeFormattingElements.append(element)

        # the real deal
        def processEOF(self):
            if self.tree.templateModes:
                return self.parser.phases["inTemplate"].processEOF()
            allowed_elements = frozenset(("dd", "dt", "li", "optgroup", "option",
                                          "p", "rb", "rp", "rt", "rtc", "tbody",
                                          "td", "tfoot", "th", "thead", "tr",
                                          "body", "html"))
            for node in self.tree.openElements[::-1]:
                if node.localName not in allowed_elements:
                    self.parser.parseError("expected-closing-tag-but-got-eof")
                    break
            # Stop parsing

        def processSpaceCharactersDropNewline(self, token):
            # Sometimes (start of <pre>, <listing>, and <textarea> blocks) we
            # want to drop leading newlines
            data = token.data
            self.processSpaceCharacters = self.processSpaceCharactersNonPre
            current = self.tree.openElements[-1]
            if (data.startswith("\n") and
                    current.localName in ("pre", "listing", "textarea") and
                    not current.hasChildNodes()):
                data = data[1:]
            if data:
                self.tree.reconstructActiveFormattingElements()
                self.tree.insertText(data)

        def processCharacters(self, token):
            if token.data == "\u0000":
                # The tokenizer should always emit null on its own
                return
            self.tree.reconstructActiveFormattingElements()
            self.tree.insertText(token.data)
            self.parser.framesetOK = False

        def processSpaceCharactersNonPre(self, token):
            self.tree.reconstructActiveFormattingElements()
            self.tree.insertText(token.data)

        def startTagProcessInHead(self, token):
            return self.parser.phases["inHead"].processStartTag(token)

        def startTagBody(self, token):
            self.parser.parseError("unexpected-start-tag", {"name": "body"})
            if (len(self.tree.openElements) == 1 or
                    self.tree.openElements[1].localName != "body" or
                    self.templateInScope()):
                # Fragment case or inside a template; ignore the token
                return
            else:
                self.parser.framesetOK = False
                body = self.tree.openElements[1]
                for attr, value in token.attributes.items():
                    if not body.hasAttribute(attr):
                        body._appendAttribute(attr, value)

        def startTagFrameset(self, token):
            self.parser.parseError("unexpected-start-tag", {"name": "frameset"})
            if (len(self.tree.openElements) == 1 or
                    self.tree.openElements[1].localName != "body" or
                    not self.parser.framesetOK):
                return
            else:
                body = self.tree.openElements[1]
                if body.parentNode is not None:
                    body.parentNode.removeChild(body)
                while self.tree.openElements[-1].localName != "html":
                    self.tree.openElements.pop()
                self.tree.insertElement(token)
                self.parser.phase = self.parser.phases["inFrameset"]

        def startTagCloseP(self, token):
            if self.tree.elementInScope("p", variant="button"):
                self.endTagP(impliedTagToken("p"))
            self.tree.insertElement(token)

        def startTagPreListing(self, token):
            if self.tree.elementInScope("p", variant="button"):
                self.endTagP(impliedTagToken("p"))
            self.tree.insertElement(token)
            self.parser.framesetOK = False
            self.processSpaceCharacters = self.processSpaceCharactersDropNewline

        def startTagForm(self, token):
            if self.tree.formPointer is not None and not self.templateInScope():
                self.parser.parseError("unexpected-start-tag", {"name": "form"})
            else:
                if self.tree.elementInScope("p", variant="button"):
                    self.endTagP(impliedTagToken("p"))
                self.tree.insertElement(token)
                if not self.templateInScope():
                    self.tree.formPointer = self.tree.openElements[-1]

        def startTagListItem(self, token):
            self.parser.framesetOK = False

            stopNamesMap = {"li": ["li"],
                            "dt": ["dt", "dd"],
                            "dd": ["dt", "dd"]}
            stopNames = stopNamesMap[token.name]
            for node in reversed(self.tree.openElements):
                if node.localName in stopNames:
                    self.parser.phase.processEndTag(
                        impliedTagToken(node.localName, "EndTag"))
                    break
                if (node.localName in specialElements and
                        node.localName not in ("address", "div", "p")):
                    break

            if self.tree.elementInScope("p", variant="button"):
                self.parser.phase.processEndTag(
                    impliedTagToken("p", "EndTag"))

            self.tree.insertElement(token)

        def startTagPlaintext(self, token):
            if self.tree.elementInScope("p", variant="button"):
                self.endTagP(impliedTagToken("p"))
            self.tree.insertElement(token)
            self.parser.tokenizer.state = self.parser.tokenizer.plaintextState

        def startTagHeading(self, token):
            if self.tree.elementInScope("p", variant="button"):
                self.endTagP(impliedTagToken("p"))
            if self.tree.openElements[-1].localName in headingElements:
                self.parser.parseError("unexpected-start-tag", {"name": token.name})
                self.tree.openElements.pop()
            self.tree.insertElement(token)

        def startTagA(self, token):
            afeAElement = self.tree.elementInActiveFormattingElements("a")
            if afeAElement:
                self.parser.parseError("unexpected-start-tag-implies-end-tag",
                                       {"startName": "a", "endName": "a"})
                self.endTagFormatting(impliedTagToken("a"))
                if afeAElement in self.tree.openElements:
                    self.tree.openElements.remove(afeAElement)
                if afeAElement in self.tree.activeFormattingElements:
                    self.tree.activeFormattingElements.remove(afeAElement)
            self.tree.reconstructActiveFormattingElements()
            self.addFormattingElement(token)

        def startTagFormatting(self, token):
            self.tree.reconstructActiveFormattingElements()
            self.addFormattingElement(token)

        def startTagNobr(self, token):
            self.tree.reconstructActiveFormattingElements()
            if self.tree.elementInScope("nobr"):
                self.parser.parseError("unexpected-start-tag-implies-end-tag",
                                       {"startName": "nobr", "endName": "nobr"})
                self.processEndTag(impliedTagToken("nobr"))
                # XXX Need tests that trigger the following
                self.tree.reconstructActiveFormattingElements()
            self.addFormattingElement(token)

        def startTagButton(self, token):
            if self.tree.elementInScope("button"):
                self.parser.parseError("unexpected-start-tag-implies-end-tag",
                                       {"startName": "button", "endName": "button"})
                self.processEndTag(impliedTagToken("button"))
                return token
            else:
                self.tree.reconstructActiveFormattingElements()
                self.tree.insertElement(token)
                self.parser.framesetOK = False

        def startTagAppletMarqueeObject(self, token):
            self.tree.reconstructActiveFormattingElements()
            self.tree.insertElement(token)
            self.tree.activeFormattingElements.append(Marker)
            self.parser.framesetOK = False

        def startTagXmp(self, token):
            if self.tree.elementInScope("p", variant="button"):
                self.endTagP(impliedTagToken("p"))
            self.tree.reconstructActiveFormattingElements()
            self.parser.framesetOK = False
            self.parser.parseRCDataRawtext(token, "RAWTEXT")

        def startTagTable(self, token):
            if self.parser.compatMode != "quirks":
                if self.tree.elementInScope("p", variant="button"):
                    self.processEndTag(impliedTagToken("p"))
            self.tree.insertElement(token)
            self.parser.framesetOK = False

        def startTagVoidFormatting(self, token):
            self.tree.reconstructActiveFormattingElements()
            self.tree.insertElement(token)
            self.tree.openElements.pop()
            token.self_closing_acknowledged = True
            self.parser.framesetOK = False

        def startTagInput(self, token):
            framesetOK = self.parser.framesetOK
            self.startTagVoidFormatting(token)
            if ("type" in token.attributes and
                    token.attributes["type"].translate(asciiUpper2Lower) == "hidden"):
                # input type=hidden doesn't change framesetOK
                self.parser.framesetOK = framesetOK

        def startTagParamSource(self, token):
            self.tree.insertElement(token)
            self.tree.openElements.pop()
            token.self_closing_acknowledged = True

        def startTagHr(self, token):
            if self.tree.elementInScope("p", variant="button"):
                self.endTagP(impliedTagToken("p"))
            self.tree.insertElement(token)
            self.tree.openElements.pop()
            token.self_closing_acknowledged = True
            self.parser.framesetOK = False

        def startTagImage(self, token):
            # No really...
            self.parser.parseError("unexpected-start-tag-treated-as",
                                   {"originalName": "image", "newName": "img"})
            token.self_closing_acknowledged = True
            self.processStartTag(impliedTagToken("img", "StartTag",
                                                 attributes=token.attributes,
                                                 selfClosing=token.self_closing))

        def startTagTextarea(self, token):
            self.parser.framesetOK = False
            self.parser.parseRCDataRawtext(token, "RCDATA")
            textPhase = self.parser.phases["text"]
            textPhase.processSpaceCharacters = textPhase.processSpaceCharactersDropNewline

        def startTagIFrame(self, token):
            self.parser.framesetOK = False
            self.startTagRawtext(token)

        def startTagNoscript(self, token):
            if self.parser.scripting:
                self.startTagRawtext(token)
            else:
                self.startTagOther(token)

        def startTagRawtext(self, token):
            """iframe, noembed noframes, noscript(if scripting enabled)"""
            self.parser.parseRCDataRawtext(token, "RAWTEXT")

        def startTagSelect(self, token):
            self.tree.reconstructActiveFormattingElements()
            self.tree.insertElement(token)
            self.parser.framesetOK = False

        def startTagOpt(self, token):
            if self.tree.openElements[-1].localName == "option":
                self.parser.phase.processEndTag(impliedTagToken("option"))
            self.tree.reconstructActiveFormattingElements()
            self.parser.tree.insertElement(token)

        def startTagRbRtc(self, token):
            if self.tree.elementInScope("ruby"):
                self.tree.generateImpliedEndTags()
                if self.tree.openElements[-1].localName != "ruby":
                    self.parser.parseError("unexpected-start-tag",
                                           {"name": token.name})
            self.tree.insertElement(token)

        def startTagRpRt(self, token):
            if self.tree.elementInScope("ruby"):
                self.tree.generateImpliedEndTags("rtc")
                if self.tree.openElements[-1].localName not in ("ruby", "rtc"):
                    self.parser.parseError("unexpected-start-tag",
                                           {"name": token.name})
            self.tree.insertElement(token)

        def startTagMisplaced(self, token):
            """ Elements that should be children of other elements that have a
            different insertion mode; here they are ignored
            "frame", "head"
            """
            self.parser.parseError("unexpected-start-tag-ignored", {"name": token.name})

        def startTagOther(self, token):
            self.tree.reconstructActiveFormattingElements()
            self.tree.insertElement(token)

        def endTagP(self, token):
            if not self.tree.elementInScope("p", variant="button"):
                self.startTagCloseP(impliedTagToken("p", "StartTag"))
                self.parser.parseError("unexpected-end-tag", {"name": "p"})
                self.endTagP(impliedTagToken("p", "EndTag"))
            else:
                self.tree.generateImpliedEndTags("p")
                if self.tree.openElements[-1].localName != "p":
                    self.parser.parseError("unexpected-end-tag", {"name": "p"})
                node = self.tree.openElements.pop()
                while node.localName != "p":
                    node = self.tree.openElements.pop()

        def endTagBody(self, token):
            if not self.tree.elementInScope("body"):
                self.parser.parseError("unexpected-end-tag", {"name": "body"})
                return
            elif self.tree.openElements[-1].localName != "body":
                for node in self.tree.openElements[2:]:
                    if node.localName not in frozenset(("dd", "dt", "li", "optgroup",
                                                        "option", "p", "rb", "rp",
                                                        "rt", "rtc", "tbody", "td",
                                                        "tfoot", "th", "thead",
                                                        "tr", "body", "html")):
                        # Not sure this is the correct name for the parse error
                        self.parser.parseError(
                            "expected-one-end-tag-but-got-another",
                            {"gotName": "body", "expectedName": node.localName})
                        break
            self.parser.phase = self.parser.phases["afterBody"]

        def endTagHtml(self, token):
            # We repeat the test for the body end tag token being ignored here
            if self.tree.elementInScope("body"):
                self.endTagBody(impliedTagToken("body"))
                return token

        def endTagBlock(self, token):
            # Put us back in the right whitespace handling mode
            if token.name == "pre":
                self.processSpaceCharacters = self.processSpaceCharactersNonPre
            inScope = self.tree.elementInScope(token.name)
            if inScope:
                self.tree.generateImpliedEndTags()
            if self.tree.openElements[-1].localName != token.name:
                self.parser.parseError("end-tag-too-early", {"name": token.name})
            if inScope:
                node = self.tree.openElements.pop()
                while node.localName != token.name:
                    node = self.tree.openElements.pop()

        def endTagForm(self, token):
            node = self.tree.formPointer
            self.tree.formPointer = None
            if node is None or not self.tree.elementInScope(node):
                self.parser.parseError("unexpected-end-tag",
                                       {"name": "form"})
            else:
                self.tree.generateImpliedEndTags()
                if self.tree.openElements[-1] is not node:
                    self.parser.parseError("end-tag-too-early-ignored",
                                           {"name": "form"})
                self.tree.openElements.remove(node)

        def endTagListItem(self, token):
            if token.name == "li":
                variant = "list"
            else:
                variant = None
            if not self.tree.elementInScope(token.name, variant=variant):
                self.parser.parseError("unexpected-end-tag", {"name": token.name})
            else:
                self.tree.generateImpliedEndTags(exclude=token.name)
                if self.tree.openElements[-1].localName != token.name:
                    self.parser.parseError(
                        "end-tag-too-early",
                        {"name": token.name})
                node = self.tree.openElements.pop()
                while node.localName != token.name:
                    node = self.tree.openElements.pop()

        def endTagHeading(self, token):
            for item in headingElements:
                if self.tree.elementInScope(item):
                    self.tree.generateImpliedEndTags()
                    break
            if self.tree.openElements[-1].localName != token.name:
                self.parser.parseError("end-tag-too-early", {"name": token.name})

            for item in headingElements:
                if self.tree.elementInScope(item):
                    item = self.tree.openElements.pop()
                    while item.localName not in headingElements:
                        item = self.tree.openElements.pop()
                    break

        def endTagFormatting(self, token):
            """The much-feared adoption agency algorithm"""
            # http://www.whatwg.org/specs/web-apps/current-work/#adoptionAgency
            # The outer loop gives up after eight passes and the inner loop
            # drops nodes from the active formatting list after three.
            subject = token.name
            currentNode = self.tree.openElements[-1]
            if (currentNode.localName == subject and
                    currentNode not in self.tree.activeFormattingElements):
                self.tree.openElements.pop()
                return

            outerLoopCounter = 0
            while outerLoopCounter < 8:
                outerLoopCounter += 1

                # Let the formatting element be the last element in the list
                # of active formatting elements, after the last marker, that
                # has the same tag name as the token.
                formattingElement = self.tree.elementInActiveFormattingElements(subject)
                if formattingElement is None:
                    self.endTagOther(token)
                    return

                if formattingElement not in self.tree.openElements:
                    self.parser.parseError("adoption-agency-1.2", {"name": subject})
                    self.tree.activeFormattingElements.remove(formattingElement)
                    return

                if not self.tree.elementInScope(formattingElement):
                    self.parser.parseError("adoption-agency-4.4", {"name": subject})
                    return

                if formattingElement is not self.tree.openElements[-1]:
                    self.parser.parseError("adoption-agency-1.3", {"name": subject})

                # The furthest block is the topmost special element lower in
                # the stack than the formatting element.
                afeIndex = self.tree.openElements.index(formattingElement)
                furthestBlock = None
                for element in self.tree.openElements[afeIndex:]:
                    if element.localName in specialElements:
                        furthestBlock = element
                        break

                if furthestBlock is None:
                    element = self.tree.openElements.pop()
                    while element is not formattingElement:
                        element = self.tree.openElements.pop()
                    self.tree.activeFormattingElements.remove(element)
                    return

                commonAncestor = self.tree.openElements[afeIndex - 1]

                # The bookmark notes where the formatting element sits in the
                # list of active formatting elements.
                bookmark = self.tree.activeFormattingElements.index(formattingElement)

                lastNode = node = furthestBlock
                innerLoopCounter = 0

                index = self.tree.openElements.index(node)
                while True:
                    innerLoopCounter += 1
                    index -= 1
                    node = self.tree.openElements[index]
                    if node is formattingElement:
                        break

                    if (innerLoopCounter > 3 and
                            node in self.tree.activeFormattingElements):
                        self.tree.activeFormattingElements.remove(node)

                    if node not in self.tree.activeFormattingElements:
                        self.tree.openElements.remove(node)
                        continue

                    # Replace the entry with a clone in both lists and make
                    # the clone the new node.
                    clone = node.cloneNode()
                    self.tree.activeFormattingElements[
                        self.tree.activeFormattingElements.index(node)] = clone
                    self.tree.openElements[
                        self.tree.openElements.index(node)] = clone
                    node = clone

                    # The bookmark follows the last node.
                    if lastNode is furthestBlock:
                        bookmark = self.tree.activeFormattingElements.index(node) + 1

                    node.appendChild(lastNode)
                    lastNode = node

                # Insert the last node into the common ancestor.
                self.tree.insertionParent(commonAncestor).appendChild(lastNode)

                # Move the children of the furthest block into a clone of the
                # formatting element that becomes its only child.
                clone = formattingElement.cloneNode()
                self.tree.reparentChildren(furthestBlock, clone)
                furthestBlock.appendChild(clone)

                # Swap the formatting element for its clone at the bookmark.
                formattingIndex = self.tree.activeFormattingElements.index(formattingElement)
                if formattingIndex < bookmark:
                    bookmark -= 1
                self.tree.activeFormattingElements.remove(formattingElement)
                self.tree.activeFormattingElements.insert(bookmark, clone)

                # And in the stack of open elements, below the furthest block.
                self.tree.openElements.remove(formattingElement)
                self.tree.openElements.insert(
                    self.tree.openElements.index(furthestBlock) + 1, clone)

        def endTagAppletMarqueeObject(self, token):
            if self.tree.elementInScope(token.name):
                self.tree.generateImpliedEndTags()
            if self.tree.openElements[-1].localName != token.name:
                self.parser.parseError("end-tag-too-early", {"name": token.name})

            if self.tree.elementInScope(token.name):
                element = self.tree.openElements.pop()
                while element.localName != token.name:
                    element = self.tree.openElements.pop()
                self.tree.clearActiveFormattingElements()

        def endTagBr(self, token):
            self.parser.parseError("unexpected-end-tag-treated-as",
                                   {"originalName": "br", "newName": "br element"})
            self.tree.reconstructActiveFormattingElements()
            self.tree.insertElement(impliedTagToken("br", "StartTag"))
            self.tree.openElements.pop()

        def endTagTemplate(self, token):
            return self.parser.phases["inHead"].processEndTag(token)

        def endTagOther(self, token):
            for node in self.tree.openElements[::-1]:
                if node.localName == token.name:
                    self.tree.generateImpliedEndTags(exclude=token.name)
                    if self.tree.openElements[-1].localName != token.name:
                        self.parser.parseError("unexpected-end-tag", {"name": token.name})
                    while self.tree.openElements.pop() is not node:
                        pass
                    break
                else:
                    if node.localName in specialElements:
                        self.parser.parseError("unexpected-end-tag", {"name": token.name})
                        break

    class TextPhase(Phase):
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)
            self.processSpaceCharacters = self.processSpaceCharactersNonPre
            self.startTagHandler = utils.MethodDispatcher([])
            self.startTagHandler.default = self.startTagOther
            self.endTagHandler = utils.MethodDispatcher([])
            self.endTagHandler.default = self.endTagOther

        def processCharacters(self, token):
            self.tree.insertText(token.data)

        def processSpaceCharactersNonPre(self, token):
            self.tree.insertText(token.data)

        def processSpaceCharactersDropNewline(self, token):
            # A newline straight after <textarea> is not part of its value
            self.processSpaceCharacters = self.processSpaceCharactersNonPre
            current = self.tree.openElements[-1]
            if (token.data == "\n" and current.localName == "textarea" and
                    not current.hasChildNodes()):
                return
            self.tree.insertText(token.data)

        def processEOF(self):
            self.parser.parseError("expected-named-closing-tag-but-got-eof",
                                   {"name": self.tree.openElements[-1].localName})
            self.tree.openElements.pop()
            self.parser.phase = self.parser.originalPhase
            return True

        def startTagOther(self, token):
            assert False, "Tried to process start tag %s in RCDATA/RAWTEXT mode" % token.name

        def endTagOther(self, token):
            self.processSpaceCharacters = self.processSpaceCharactersNonPre
            self.tree.openElements.pop()
            self.parser.phase = self.parser.originalPhase

    class InTemplatePhase(Phase):
        # http://www.whatwg.org/specs/web-apps/current-work/#in-template
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                (("base", "basefont", "bgsound", "link", "meta", "noframes",
                  "script", "style", "template", "title"),
                 self.startTagProcessInHead),
            ])
            self.startTagHandler.default = self.startTagOther

            self.endTagHandler = utils.MethodDispatcher([
                ("template", self.endTagTemplate),
            ])
            self.endTagHandler.default = self.endTagOther

        def processCharacters(self, token):
            return self.parser.phases["inBody"].processCharacters(token)

        def processSpaceCharacters(self, token):
            return self.parser.phases["inBody"].processSpaceCharacters(token)

        def processEOF(self):
            if not self.templateInScope():
                # Stop parsing; only reachable with a template fragment context
                return
            self.parser.parseError("eof-in-template")
            node = self.tree.openElements.pop()
            while node.localName != "template":
                node = self.tree.openElements.pop()
            self.tree.clearActiveFormattingElements()
            self.tree.templateModes.pop()
            self.parser.resetInsertionMode()
            return True

        def startTagProcessInHead(self, token):
            return self.parser.phases["inHead"].processStartTag(token)

        def startTagOther(self, token):
            self.tree.templateModes[-1] = "inBody"
            self.parser.phase = self.parser.phases["inBody"]
            return token

        def endTagTemplate(self, token):
            return self.parser.phases["inHead"].processEndTag(token)

        def endTagOther(self, token):
            self.parser.parseError("unexpected-end-tag", {"name": token.name})

    class AfterBodyPhase(Phase):
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml)
            ])
            self.startTagHandler.default = self.startTagOther

            self.endTagHandler = utils.MethodDispatcher([("html", self.endTagHtml)])
            self.endTagHandler.default = self.endTagOther

        def processEOF(self):
            # Stop parsing
            pass

        def processComment(self, token):
            # This is needed because data is to be appended to the <html> element
            # here and not to whatever is currently open.
            self.tree.insertComment(token, self.tree.openElements[0])

        def processSpaceCharacters(self, token):
            return self.parser.phases["inBody"].processSpaceCharacters(token)

        def processCharacters(self, token):
            self.parser.parseError("unexpected-char-after-body")
            self.parser.phase = self.parser.phases["inBody"]
            return token

        def startTagHtml(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagOther(self, token):
            self.parser.parseError("unexpected-start-tag-after-body",
                                   {"name": token.name})
            self.parser.phase = self.parser.phases["inBody"]
            return token

        def endTagHtml(self, name):
            if self.parser.innerHTML:
                self.parser.parseError("unexpected-end-tag-after-body-innerhtml")
            else:
                self.parser.phase = self.parser.phases["afterAfterBody"]

        def endTagOther(self, token):
            self.parser.parseError("unexpected-end-tag-after-body",
                                   {"name": token.name})
            self.parser.phase = self.parser.phases["inBody"]
            return token

    class InFramesetPhase(Phase):
        # http://www.whatwg.org/specs/web-apps/current-work/#in-frameset
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml),
                ("frameset", self.startTagFrameset),
                ("frame", self.startTagFrame),
                ("noframes", self.startTagNoframes)
            ])
            self.startTagHandler.default = self.startTagOther

            self.endTagHandler = utils.MethodDispatcher([
                ("frameset", self.endTagFrameset)
            ])
            self.endTagHandler.default = self.endTagOther

        def processEOF(self):
            if self.tree.openElements[-1].localName != "html":
                self.parser.parseError("eof-in-frameset")
            else:
                assert self.parser.innerHTML

        def processCharacters(self, token):
            self.parser.parseError("unexpected-char-in-frameset")

        def startTagHtml(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagFrameset(self, token):
            self.tree.insertElement(token)

        def startTagFrame(self, token):
            self.tree.insertElement(token)
            self.tree.openElements.pop()
            token.self_closing_acknowledged = True

        def startTagNoframes(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagOther(self, token):
            self.parser.parseError("unexpected-start-tag-in-frameset",
                                   {"name": token.name})

        def endTagFrameset(self, token):
            if self.tree.openElements[-1].localName == "html":
                # innerHTML case
                self.parser.parseError("unexpected-frameset-in-frameset-innerhtml")
            else:
                self.tree.openElements.pop()
            if (not self.parser.innerHTML and
                    self.tree.openElements[-1].localName != "frameset"):
                # If we're not in innerHTML mode and the current node is not a
                # "frameset" element (anymore) then switch.
                self.parser.phase = self.parser.phases["afterFrameset"]

        def endTagOther(self, token):
            self.parser.parseError("unexpected-end-tag-in-frameset",
                                   {"name": token.name})

    class AfterFramesetPhase(Phase):
        # http://www.whatwg.org/specs/web-apps/current-work/#after3
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml),
                ("noframes", self.startTagNoframes)
            ])
            self.startTagHandler.default = self.startTagOther

            self.endTagHandler = utils.MethodDispatcher([
                ("html", self.endTagHtml)
            ])
            self.endTagHandler.default = self.endTagOther

        def processEOF(self):
            # Stop parsing
            pass

        def processCharacters(self, token):
            self.parser.parseError("unexpected-char-after-frameset")

        def startTagHtml(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagNoframes(self, token):
            return self.parser.phases["inHead"].processStartTag(token)

        def startTagOther(self, token):
            self.parser.parseError("unexpected-start-tag-after-frameset",
                                   {"name": token.name})

        def endTagHtml(self, token):
            self.parser.phase = self.parser.phases["afterAfterFrameset"]

        def endTagOther(self, token):
            self.parser.parseError("unexpected-end-tag-after-frameset",
                                   {"name": token.name})

    class AfterAfterBodyPhase(Phase):
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml)
            ])
            self.startTagHandler.default = self.startTagOther

        def processEOF(self):
            pass

        def processComment(self, token):
            self.tree.insertComment(token, self.tree.document)

        def processDoctype(self, token):
            return self.parser.phases["inBody"].processDoctype(token)

        def processSpaceCharacters(self, token):
            return self.parser.phases["inBody"].processSpaceCharacters(token)

        def processCharacters(self, token):
            self.parser.parseError("expected-eof-but-got-char")
            self.parser.phase = self.parser.phases["inBody"]
            return token

        def startTagHtml(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagOther(self, token):
            self.parser.parseError("expected-eof-but-got-start-tag",
                                   {"name": token.name})
            self.parser.phase = self.parser.phases["inBody"]
            return token

        def processEndTag(self, token):
            self.parser.parseError("expected-eof-but-got-end-tag",
                                   {"name": token.name})
            self.parser.phase = self.parser.phases["inBody"]
            return token

    class AfterAfterFramesetPhase(Phase):
        def __init__(self, parser, tree):
            Phase.__init__(self, parser, tree)

            self.startTagHandler = utils.MethodDispatcher([
                ("html", self.startTagHtml),
                ("noframes", self.startTagNoFrames)
            ])
            self.startTagHandler.default = self.startTagOther

        def processEOF(self):
            pass

        def processComment(self, token):
            self.tree.insertComment(token, self.tree.document)

        def processDoctype(self, token):
            return self.parser.phases["inBody"].processDoctype(token)

        def processSpaceCharacters(self, token):
            return self.parser.phases["inBody"].processSpaceCharacters(token)

        def processCharacters(self, token):
            self.parser.parseError("expected-eof-but-got-char")

        def startTagHtml(self, token):
            return self.parser.phases["inBody"].processStartTag(token)

        def startTagNoFrames(self, token):
            return self.parser.phases["inHead"].processStartTag(token)

        def startTagOther(self, token):
            self.parser.parseError("expected-eof-but-got-start-tag",
                                   {"name": token.name})

        def processEndTag(self, token):
            self.parser.parseError("expected-eof-but-got-end-tag",
                                   {"name": token.name})

    # pylint:enable=unused-argument

    return {
        "initial": InitialPhase,
        "beforeHtml": BeforeHtmlPhase,
        "beforeHead": BeforeHeadPhase,
        "inHead": InHeadPhase,
        "inHeadNoscript": InHeadNoscriptPhase,
        "afterHead": AfterHeadPhase,
        "inBody": InBodyPhase,
        "text": TextPhase,
        "inTemplate": InTemplatePhase,
        "afterBody": AfterBodyPhase,
        "inFrameset": InFramesetPhase,
        "afterFrameset": AfterFramesetPhase,
        "afterAfterBody": AfterAfterBodyPhase,
        "afterAfterFrameset": AfterAfterFramesetPhase,
    }


def impliedTagToken(name, type="EndTag", attributes=None,
                    selfClosing=False):
    if type == "StartTag":
        token = _tokenizer.StartTag(name, attributes)
    else:
        token = _tokenizer.EndTag(name, attributes)
    token.self_closing = selfClosing
    return token


class ParseError(Exception):
    """Error in parsed document"""
    pass
