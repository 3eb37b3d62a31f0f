# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

from collections import deque

from .constants import spaceCharacters
from .constants import entities
from .constants import asciiLetters, asciiUpper2Lower
from .constants import digits, hexDigits, EOF
from .constants import replacementCharacters

from ._inputstream import HTMLInputStream

from ._trie import Trie

entitiesTrie = Trie(entities)

# Code points that are reported when produced by a numeric reference but
# are still passed through.
disallowedCodepoints = frozenset([0x000B, 0xFFFE, 0xFFFF, 0x1FFFE,
                                  0x1FFFF, 0x2FFFE, 0x2FFFF, 0x3FFFE,
                                  0x3FFFF, 0x4FFFE, 0x4FFFF, 0x5FFFE,
                                  0x5FFFF, 0x6FFFE, 0x6FFFF, 0x7FFFE,
                                  0x7FFFF, 0x8FFFE, 0x8FFFF, 0x9FFFE,
                                  0x9FFFF, 0xAFFFE, 0xAFFFF, 0xBFFFE,
                                  0xBFFFF, 0xCFFFE, 0xCFFFF, 0xDFFFE,
                                  0xDFFFF, 0xEFFFE, 0xEFFFF, 0xFFFFE,
                                  0xFFFFF, 0x10FFFE, 0x10FFFF])


class Token(object):
    def __init__(self, data=None):
        self.data = data

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self.data)


class Doctype(Token):
    def __init__(self, name, public_id, system_id, correct):
        self.name = name
        self.public_id = public_id
        self.system_id = system_id
        self.correct = correct


class Characters(Token):
    pass


class SpaceCharacters(Token):
    pass


class Tag(Token):
    def __init__(self, name, attributes=None):
        self.name = name
        self.attributes = dict(attributes or {})
        self.self_closing = False
        self.attribute_name = ""
        self.attribute_value = ""

    def __repr__(self):
        return "<%s %s %r>" % (self.__class__.__name__, self.name, self.attributes)

    def clearAttribute(self):
        # The first occurrence of a name wins; later duplicates are dropped.
        if self.attribute_name and self.attribute_name not in self.attributes:
            self.attributes[self.attribute_name] = self.attribute_value
        self.attribute_name = ""
        self.attribute_value = ""

    def startAttribute(self, char):
        self.clearAttribute()
        self.accumulateAttributeName(char)

    def accumulateAttributeName(self, text):
        self.attribute_name += text.translate(asciiUpper2Lower)

    def accumulateAttributeValue(self, text):
        self.attribute_value += text


class StartTag(Tag):
    def __init__(self, name, attributes=None):
        super(StartTag, self).__init__(name, attributes)
        self.self_closing_acknowledged = False


class EndTag(Tag):
    pass


class Comment(Token):
    pass


class ParseError(Token):
    def __init__(self, data, datavars=None, position=None):
        self.data = data
        self.datavars = datavars or {}
        self.position = position


class EndOfFile(Token):
    pass


class HTMLTokenizer(object):
    """ This class takes care of tokenizing HTML.

    * self.currentToken
      Holds the token that is currently being processed.

    * self.state
      Holds a reference to the method to be invoked for the next character.
      A state method receives the character and returns True once it has
      consumed it. Returning False asks for the same character to be handed
      to the (new) current state.

    * self.stream
      Points to the Cursor the characters are read from.
    """

    def __init__(self, stream, **kwargs):

        self.stream = HTMLInputStream(stream, **kwargs)

        # Setup the initial tokenizer state
        self.state = self.dataState
        self.finished = False
        self.tokenQueue = deque([])

        # The current token being created
        self.currentToken = None
        self.temporaryBuffer = ""
        self.lastStartTagName = None

    def __iter__(self):
        """ This is where the magic happens.

        We do our usually processing through the states and when we have a token
        to return we yield the token which pauses processing until the next token
        is requested.
        """
        while not self.finished:
            data = self.stream.read()
            while not self.state(data):
                pass
            while self.tokenQueue:
                yield self.tokenQueue.popleft()

    def parseError(self, errorcode, datavars=None):
        self.tokenQueue.append(ParseError(errorcode, datavars,
                                          self.stream.position()))

    def emitCharacters(self, text):
        for char in text:
            if char in spaceCharacters:
                self.tokenQueue.append(SpaceCharacters(char))
            else:
                self.tokenQueue.append(Characters(char))

    def emitEndOfFile(self):
        self.tokenQueue.append(EndOfFile())
        self.finished = True
        return True

    def consumeNumberEntity(self, isHex):
        """This function returns either U+FFFD or the character based on the
        decimal or hexadecimal representation. It also discards ";" if present.
        If not present a numeric-entity-without-semicolon error is queued.
        """

        allowed = digits
        radix = 10
        if isHex:
            allowed = hexDigits
            radix = 16

        # Anything past the last code point is out of range whatever the
        # remaining digits are, so stop growing the value there.
        charAsInt = 0
        c = self.stream.read()
        while c in allowed:
            charAsInt = min(charAsInt * radix + int(c, radix), 0x110000)
            c = self.stream.read()

        # Certain characters get replaced with others
        if charAsInt in replacementCharacters:
            char = replacementCharacters[charAsInt]
            self.parseError("illegal-codepoint-for-numeric-entity",
                            {"charAsInt": charAsInt})
        elif ((0xD800 <= charAsInt <= 0xDFFF) or
              (charAsInt > 0x10FFFF)):
            char = "\uFFFD"
            self.parseError("illegal-codepoint-for-numeric-entity",
                            {"charAsInt": charAsInt})
        else:
            if ((0x0001 <= charAsInt <= 0x0008) or
                (0x000E <= charAsInt <= 0x001F) or
                (0x007F <= charAsInt <= 0x009F) or
                (0xFDD0 <= charAsInt <= 0xFDEF) or
                    charAsInt in disallowedCodepoints):
                self.parseError("illegal-codepoint-for-numeric-entity",
                                {"charAsInt": charAsInt})
            char = chr(charAsInt)

        # Discard the ; if present. Otherwise leave the character for the
        # current state and report the missing semicolon.
        if c != ";":
            self.stream.unget(c)
            self.parseError("numeric-entity-without-semicolon")

        return char

    def consumeEntity(self, fromAttribute=False):
        """Consumes a character reference following a "&" that has already
        been read, and emits (or appends to the attribute value) whatever it
        stands for."""
        # Initialise to the default output for when no entity is matched
        output = "&"

        c = self.stream.peek()
        if c is EOF or c in spaceCharacters or c in ("<", "&"):
            pass

        elif c == "#":
            self.stream.save()
            self.stream.read()
            isHex = False
            if self.stream.peek() in ("x", "X"):
                self.stream.read()
                isHex = True

            if self.stream.peek() in (hexDigits if isHex else digits):
                # At least one digit found, so consume the whole number
                output = self.consumeNumberEntity(isHex)
            else:
                # No digits found
                self.parseError("expected-numeric-entity")
                self.stream.restore()

        else:
            # Consume characters while they still spell the start of some
            # reference name, then settle on the longest complete one.
            self.stream.save()
            charStack = []
            while True:
                c = self.stream.read()
                if c is EOF:
                    break
                charStack.append(c)
                if not entitiesTrie.has_keys_with_prefix("".join(charStack)):
                    break
            self.stream.restore()

            try:
                entityName, entityValue = \
                    entitiesTrie.longest_prefix_item("".join(charStack))
            except KeyError:
                entityName = None

            if entityName is not None:
                for _ in range(len(entityName)):
                    self.stream.read()
                if entityName[-1] != ";":
                    self.parseError("named-entity-without-semicolon")
                output = entityValue
            elif self.stream.peek() in asciiLetters or self.stream.peek() in digits:
                self.parseError("expected-named-entity")

        if fromAttribute:
            self.currentToken.accumulateAttributeValue(output)
        else:
            self.emitCharacters(output)

    def emitCurrentToken(self):
        """This method is a generic handler for emitting the tags. It also sets
        the state to "data" because that's what's needed after a token has been
        emitted.
        """
        token = self.currentToken
        # Add token to the queue to be yielded
        if isinstance(token, Tag):
            token.clearAttribute()
            if isinstance(token, EndTag):
                if token.attributes:
                    self.parseError("attributes-in-end-tag")
                if token.self_closing:
                    self.parseError("self-closing-flag-on-end-tag")
            else:
                self.lastStartTagName = token.name
        self.tokenQueue.append(token)
        self.state = self.dataState

    def emitDoctype(self, correct=True):
        if not correct:
            self.currentToken.correct = False
        self.tokenQueue.append(self.currentToken)
        self.state = self.dataState

    # Below are the various tokenizer states worked out.
    def dataState(self, data):
        if data == "&":
            self.consumeEntity()
        elif data == "<":
            self.state = self.tagOpenState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.tokenQueue.append(Characters("\u0000"))
        elif data is EOF:
            # Tokenization ends.
            return self.emitEndOfFile()
        elif data in spaceCharacters:
            self.tokenQueue.append(SpaceCharacters(data))
        else:
            self.tokenQueue.append(Characters(data))
        return True

    def rcdataState(self, data):
        if data == "&":
            self.consumeEntity()
        elif data == "<":
            self.state = self.rcdataLessThanSignState
        elif data is EOF:
            return self.emitEndOfFile()
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.tokenQueue.append(Characters("\uFFFD"))
        else:
            self.emitCharacters(data)
        return True

    def rawtextState(self, data):
        if data == "<":
            self.state = self.rawtextLessThanSignState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.tokenQueue.append(Characters("\uFFFD"))
        elif data is EOF:
            return self.emitEndOfFile()
        else:
            self.emitCharacters(data)
        return True

    def plaintextState(self, data):
        if data is EOF:
            return self.emitEndOfFile()
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.tokenQueue.append(Characters("\uFFFD"))
        else:
            self.emitCharacters(data)
        return True

    def tagOpenState(self, data):
        if data == "!":
            self.state = self.markupDeclarationOpenState
        elif data == "/":
            self.state = self.closeTagOpenState
        elif data in asciiLetters:
            self.currentToken = StartTag(name=data.translate(asciiUpper2Lower))
            self.state = self.tagNameState
        elif data == ">":
            self.parseError("expected-tag-name-but-got-right-bracket")
            self.emitCharacters("<>")
            self.state = self.dataState
        elif data == "?":
            self.parseError("expected-tag-name-but-got-question-mark")
            self.state = self.bogusCommentState
            return False
        else:
            self.parseError("expected-tag-name")
            self.emitCharacters("<")
            self.state = self.dataState
            return False
        return True

    def closeTagOpenState(self, data):
        if data in asciiLetters:
            self.currentToken = EndTag(name=data.translate(asciiUpper2Lower))
            self.state = self.tagNameState
        elif data == ">":
            self.parseError("expected-closing-tag-but-got-right-bracket")
            self.state = self.dataState
        elif data is EOF:
            self.parseError("expected-closing-tag-but-got-eof")
            self.emitCharacters("</")
            self.state = self.dataState
            return False
        else:
            self.parseError("expected-closing-tag-but-got-char",
                            datavars={"data": data})
            self.state = self.bogusCommentState
            return False
        return True

    def tagNameState(self, data):
        if data in spaceCharacters:
            self.state = self.beforeAttributeNameState
        elif data == ">":
            self.emitCurrentToken()
        elif data is EOF:
            self.parseError("eof-in-tag-name")
            self.state = self.dataState
            return False
        elif data == "/":
            self.state = self.selfClosingStartTagState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.name += "\uFFFD"
        else:
            self.currentToken.name += data.translate(asciiUpper2Lower)
        return True

    # RCDATA and RAWTEXT share the end tag states; only the text state they
    # fall back to differs.
    def lessThanSign(self, data, endTagOpenState, textState):
        if data == "/":
            self.temporaryBuffer = ""
            self.state = endTagOpenState
            return True
        self.emitCharacters("<")
        self.state = textState
        return False

    def endTagOpen(self, data, endTagNameState, textState):
        if data in asciiLetters:
            self.temporaryBuffer += data
            self.state = endTagNameState
            return True
        self.emitCharacters("</")
        self.state = textState
        return False

    def endTagName(self, data, textState):
        name = self.temporaryBuffer.translate(asciiUpper2Lower)
        appropriate = name == self.lastStartTagName
        if data in spaceCharacters and appropriate:
            self.currentToken = EndTag(name=name)
            self.state = self.beforeAttributeNameState
        elif data == "/" and appropriate:
            self.currentToken = EndTag(name=name)
            self.state = self.selfClosingStartTagState
        elif data == ">" and appropriate:
            self.currentToken = EndTag(name=name)
            self.emitCurrentToken()
        elif data in asciiLetters:
            self.temporaryBuffer += data
        else:
            self.emitCharacters("</" + self.temporaryBuffer)
            self.state = textState
            return False
        return True

    def rcdataLessThanSignState(self, data):
        return self.lessThanSign(data, self.rcdataEndTagOpenState,
                                 self.rcdataState)

    def rcdataEndTagOpenState(self, data):
        return self.endTagOpen(data, self.rcdataEndTagNameState,
                               self.rcdataState)

    def rcdataEndTagNameState(self, data):
        return self.endTagName(data, self.rcdataState)

    def rawtextLessThanSignState(self, data):
        return self.lessThanSign(data, self.rawtextEndTagOpenState,
                                 self.rawtextState)

    def rawtextEndTagOpenState(self, data):
        return self.endTagOpen(data, self.rawtextEndTagNameState,
                               self.rawtextState)

    def rawtextEndTagNameState(self, data):
        return self.endTagName(data, self.rawtextState)

    def beforeAttributeNameState(self, data):
        if data in spaceCharacters:
            pass
        elif data == ">":
            self.emitCurrentToken()
        elif data == "/":
            self.state = self.selfClosingStartTagState
        elif data in ("'", '"', "=", "<"):
            self.parseError("invalid-character-in-attribute-name")
            self.currentToken.startAttribute(data)
            self.state = self.attributeNameState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.startAttribute("\uFFFD")
            self.state = self.attributeNameState
        elif data is EOF:
            self.parseError("expected-attribute-name-but-got-eof")
            self.state = self.dataState
            return False
        else:
            self.currentToken.startAttribute(data)
            self.state = self.attributeNameState
        return True

    def attributeNameState(self, data):
        leavingThisState = True
        emitToken = False
        reconsume = False
        if data == "=":
            self.state = self.beforeAttributeValueState
        elif data == ">":
            emitToken = True
        elif data in spaceCharacters:
            self.state = self.afterAttributeNameState
        elif data == "/":
            self.state = self.selfClosingStartTagState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.accumulateAttributeName("\uFFFD")
            leavingThisState = False
        elif data in ("'", '"', "<"):
            self.parseError("invalid-character-in-attribute-name")
            self.currentToken.accumulateAttributeName(data)
            leavingThisState = False
        elif data is EOF:
            self.parseError("eof-in-attribute-name")
            self.state = self.dataState
            reconsume = True
        else:
            self.currentToken.accumulateAttributeName(data)
            leavingThisState = False

        if leavingThisState:
            # Attributes are not dropped at this stage. That happens when the
            # next attribute starts or the tag is emitted, but we do want to
            # report the parse error in time.
            if self.currentToken.attribute_name in self.currentToken.attributes:
                self.parseError("duplicate-attribute")
            if emitToken:
                self.emitCurrentToken()
        return not reconsume

    def afterAttributeNameState(self, data):
        if data in spaceCharacters:
            pass
        elif data == "=":
            self.state = self.beforeAttributeValueState
        elif data == ">":
            self.emitCurrentToken()
        elif data == "/":
            self.state = self.selfClosingStartTagState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.startAttribute("\uFFFD")
            self.state = self.attributeNameState
        elif data in ("'", '"', "<"):
            self.parseError("invalid-character-after-attribute-name")
            self.currentToken.startAttribute(data)
            self.state = self.attributeNameState
        elif data is EOF:
            self.parseError("expected-end-of-tag-name-but-got-eof")
            self.state = self.dataState
            return False
        else:
            self.currentToken.startAttribute(data)
            self.state = self.attributeNameState
        return True

    def beforeAttributeValueState(self, data):
        if data in spaceCharacters:
            pass
        elif data == "\"":
            self.state = self.attributeValueDoubleQuotedState
        elif data == "&":
            self.state = self.attributeValueUnQuotedState
            return False
        elif data == "'":
            self.state = self.attributeValueSingleQuotedState
        elif data == ">":
            self.parseError("expected-attribute-value-but-got-right-bracket")
            self.emitCurrentToken()
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.accumulateAttributeValue("\uFFFD")
            self.state = self.attributeValueUnQuotedState
        elif data in ("=", "<", "`"):
            self.parseError("equals-in-unquoted-attribute-value")
            self.currentToken.accumulateAttributeValue(data)
            self.state = self.attributeValueUnQuotedState
        elif data is EOF:
            self.parseError("expected-attribute-value-but-got-eof")
            self.state = self.dataState
            return False
        else:
            self.currentToken.accumulateAttributeValue(data)
            self.state = self.attributeValueUnQuotedState
        return True

    def attributeValueQuoted(self, data, quote, eofError):
        if data == quote:
            self.state = self.afterAttributeValueState
        elif data == "&":
            self.consumeEntity(fromAttribute=True)
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.accumulateAttributeValue("\uFFFD")
        elif data is EOF:
            self.parseError(eofError)
            self.state = self.dataState
            return False
        else:
            self.currentToken.accumulateAttributeValue(data)
        return True

    def attributeValueDoubleQuotedState(self, data):
        return self.attributeValueQuoted(data, "\"",
                                         "eof-in-attribute-value-double-quote")

    def attributeValueSingleQuotedState(self, data):
        return self.attributeValueQuoted(data, "'",
                                         "eof-in-attribute-value-single-quote")

    def attributeValueUnQuotedState(self, data):
        if data in spaceCharacters:
            self.state = self.beforeAttributeNameState
        elif data == "&":
            self.consumeEntity(fromAttribute=True)
        elif data == ">":
            self.emitCurrentToken()
        elif data in ('"', "'", "=", "<", "`"):
            self.parseError("unexpected-character-in-unquoted-attribute-value")
            self.currentToken.accumulateAttributeValue(data)
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.accumulateAttributeValue("\uFFFD")
        elif data is EOF:
            self.parseError("eof-in-attribute-value-no-quotes")
            self.state = self.dataState
            return False
        else:
            self.currentToken.accumulateAttributeValue(data)
        return True

    def afterAttributeValueState(self, data):
        if data in spaceCharacters:
            self.state = self.beforeAttributeNameState
        elif data == ">":
            self.emitCurrentToken()
        elif data == "/":
            self.state = self.selfClosingStartTagState
        elif data is EOF:
            self.parseError("unexpected-EOF-after-attribute-value")
            self.state = self.dataState
            return False
        else:
            self.parseError("unexpected-character-after-attribute-value")
            self.state = self.beforeAttributeNameState
            return False
        return True

    def selfClosingStartTagState(self, data):
        if data == ">":
            self.currentToken.self_closing = True
            self.emitCurrentToken()
        elif data is EOF:
            self.parseError("unexpected-EOF-after-solidus-in-tag")
            self.state = self.dataState
            return False
        else:
            self.parseError("unexpected-character-after-solidus-in-tag")
            self.state = self.beforeAttributeNameState
            return False
        return True

    def bogusCommentState(self, data):
        # Make a new comment token and give it as value all the characters
        # until the first > or EOF and emit it.
        if data is EOF:
            self.tokenQueue.append(Comment(""))
            self.state = self.dataState
            return False
        if data == ">":
            comment = ""
        else:
            comment = data + self.stream.readUntil(">")
            # Eat the character directly after the bogus comment which is
            # either a ">" or an EOF.
            self.stream.read()
        self.tokenQueue.append(Comment(comment.replace("\u0000", "\uFFFD")))
        self.state = self.dataState
        return True

    def markupDeclarationOpenState(self, data):
        if data == "-" and self.stream.peek() == "-":
            self.stream.read()
            self.currentToken = Comment("")
            self.state = self.commentStartState
            return True
        elif data in ("d", "D") and self.stream.matchesLiteral("octype", caseSensitive=False):
            self.currentToken = Doctype(name="", public_id=None,
                                        system_id=None, correct=True)
            self.state = self.doctypeState
            return True

        self.parseError("expected-dashes-or-doctype")
        self.state = self.bogusCommentState
        return False

    def commentStartState(self, data):
        if data == "-":
            self.state = self.commentStartDashState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.data += "\uFFFD"
            self.state = self.commentState
        elif data == ">":
            self.parseError("incorrect-comment")
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
        elif data is EOF:
            self.parseError("eof-in-comment")
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
            return False
        else:
            self.currentToken.data += data
            self.state = self.commentState
        return True

    def commentStartDashState(self, data):
        if data == "-":
            self.state = self.commentEndState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.data += "-\uFFFD"
            self.state = self.commentState
        elif data == ">":
            self.parseError("incorrect-comment")
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
        elif data is EOF:
            self.parseError("eof-in-comment")
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
            return False
        else:
            self.currentToken.data += "-" + data
            self.state = self.commentState
        return True

    def commentState(self, data):
        if data == "-":
            self.state = self.commentEndDashState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.data += "\uFFFD"
        elif data is EOF:
            self.parseError("eof-in-comment")
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
            return False
        else:
            self.currentToken.data += data
        return True

    def commentEndDashState(self, data):
        if data == "-":
            self.state = self.commentEndState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.data += "-\uFFFD"
            self.state = self.commentState
        elif data is EOF:
            self.parseError("eof-in-comment-end-dash")
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
            return False
        else:
            self.currentToken.data += "-" + data
            self.state = self.commentState
        return True

    def commentEndState(self, data):
        if data == ">":
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.data += "--\uFFFD"
            self.state = self.commentState
        elif data == "!":
            self.parseError("unexpected-bang-after-double-dash-in-comment")
            self.state = self.commentEndBangState
        elif data == "-":
            self.parseError("unexpected-dash-after-double-dash-in-comment")
            self.currentToken.data += data
        elif data is EOF:
            self.parseError("eof-in-comment-double-dash")
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
            return False
        else:
            self.parseError("unexpected-char-in-comment")
            self.currentToken.data += "--" + data
            self.state = self.commentState
        return True

    def commentEndBangState(self, data):
        if data == ">":
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
        elif data == "-":
            self.currentToken.data += "--!"
            self.state = self.commentEndDashState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.data += "--!\uFFFD"
            self.state = self.commentState
        elif data is EOF:
            self.parseError("eof-in-comment-end-bang-state")
            self.tokenQueue.append(self.currentToken)
            self.state = self.dataState
            return False
        else:
            self.currentToken.data += "--!" + data
            self.state = self.commentState
        return True

    def doctypeState(self, data):
        if data in spaceCharacters:
            self.state = self.beforeDoctypeNameState
        elif data is EOF:
            self.parseError("expected-doctype-name-but-got-eof")
            self.emitDoctype(correct=False)
            return False
        else:
            self.parseError("need-space-after-doctype")
            self.state = self.beforeDoctypeNameState
            return False
        return True

    def beforeDoctypeNameState(self, data):
        if data in spaceCharacters:
            pass
        elif data == ">":
            self.parseError("expected-doctype-name-but-got-right-bracket")
            self.emitDoctype(correct=False)
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.name = "\uFFFD"
            self.state = self.doctypeNameState
        elif data is EOF:
            self.parseError("expected-doctype-name-but-got-eof")
            self.emitDoctype(correct=False)
            return False
        else:
            self.currentToken.name = data.translate(asciiUpper2Lower)
            self.state = self.doctypeNameState
        return True

    def doctypeNameState(self, data):
        if data in spaceCharacters:
            self.state = self.afterDoctypeNameState
        elif data == ">":
            self.emitDoctype()
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            self.currentToken.name += "\uFFFD"
        elif data is EOF:
            self.parseError("eof-in-doctype-name")
            self.emitDoctype(correct=False)
            return False
        else:
            self.currentToken.name += data.translate(asciiUpper2Lower)
        return True

    def afterDoctypeNameState(self, data):
        if data in spaceCharacters:
            pass
        elif data == ">":
            self.emitDoctype()
        elif data is EOF:
            self.parseError("eof-in-doctype")
            self.emitDoctype(correct=False)
            return False
        elif data in ("p", "P") and self.stream.matchesLiteral("ublic", caseSensitive=False):
            self.state = self.afterDoctypePublicKeywordState
        elif data in ("s", "S") and self.stream.matchesLiteral("ystem", caseSensitive=False):
            self.state = self.afterDoctypeSystemKeywordState
        else:
            self.parseError("expected-space-or-right-bracket-in-doctype",
                            datavars={"data": data})
            self.currentToken.correct = False
            self.state = self.bogusDoctypeState
        return True

    def afterDoctypeKeyword(self, data, beforeIdentifierState):
        if data in spaceCharacters:
            self.state = beforeIdentifierState
            return True
        if data is EOF:
            self.parseError("eof-in-doctype")
            self.emitDoctype(correct=False)
            return False
        if data in ("'", '"'):
            self.parseError("unexpected-char-in-doctype")
        self.state = beforeIdentifierState
        return False

    def afterDoctypePublicKeywordState(self, data):
        return self.afterDoctypeKeyword(
            data, self.beforeDoctypePublicIdentifierState)

    def afterDoctypeSystemKeywordState(self, data):
        return self.afterDoctypeKeyword(
            data, self.beforeDoctypeSystemIdentifierState)

    def beforeDoctypeIdentifier(self, data, field, doubleQuotedState,
                                singleQuotedState):
        if data in spaceCharacters:
            pass
        elif data == "\"":
            setattr(self.currentToken, field, "")
            self.state = doubleQuotedState
        elif data == "'":
            setattr(self.currentToken, field, "")
            self.state = singleQuotedState
        elif data == ">":
            self.parseError("unexpected-end-of-doctype")
            self.emitDoctype(correct=False)
        elif data is EOF:
            self.parseError("eof-in-doctype")
            self.emitDoctype(correct=False)
            return False
        else:
            self.parseError("unexpected-char-in-doctype")
            self.currentToken.correct = False
            self.state = self.bogusDoctypeState
        return True

    def beforeDoctypePublicIdentifierState(self, data):
        return self.beforeDoctypeIdentifier(
            data, "public_id",
            self.doctypePublicIdentifierDoubleQuotedState,
            self.doctypePublicIdentifierSingleQuotedState)

    def beforeDoctypeSystemIdentifierState(self, data):
        return self.beforeDoctypeIdentifier(
            data, "system_id",
            self.doctypeSystemIdentifierDoubleQuotedState,
            self.doctypeSystemIdentifierSingleQuotedState)

    def doctypeIdentifierQuoted(self, data, field, quote, afterState):
        if data == quote:
            self.state = afterState
        elif data == "\u0000":
            self.parseError("invalid-codepoint")
            setattr(self.currentToken, field,
                    getattr(self.currentToken, field) + "\uFFFD")
        elif data == ">":
            self.parseError("unexpected-end-of-doctype")
            self.emitDoctype(correct=False)
        elif data is EOF:
            self.parseError("eof-in-doctype")
            self.emitDoctype(correct=False)
            return False
        else:
            setattr(self.currentToken, field,
                    getattr(self.currentToken, field) + data)
        return True

    def doctypePublicIdentifierDoubleQuotedState(self, data):
        return self.doctypeIdentifierQuoted(
            data, "public_id", "\"", self.afterDoctypePublicIdentifierState)

    def doctypePublicIdentifierSingleQuotedState(self, data):
        return self.doctypeIdentifierQuoted(
            data, "public_id", "'", self.afterDoctypePublicIdentifierState)

    def doctypeSystemIdentifierDoubleQuotedState(self, data):
        return self.doctypeIdentifierQuoted(
            data, "system_id", "\"", self.afterDoctypeSystemIdentifierState)

    def doctypeSystemIdentifierSingleQuotedState(self, data):
        return self.doctypeIdentifierQuoted(
            data, "system_id", "'", self.afterDoctypeSystemIdentifierState)

    def afterDoctypePublicIdentifierState(self, data):
        if data in spaceCharacters:
            self.state = self.betweenDoctypePublicAndSystemIdentifiersState
        elif data == ">":
            self.emitDoctype()
        elif data == '"':
            self.parseError("unexpected-char-in-doctype")
            self.currentToken.system_id = ""
            self.state = self.doctypeSystemIdentifierDoubleQuotedState
        elif data == "'":
            self.parseError("unexpected-char-in-doctype")
            self.currentToken.system_id = ""
            self.state = self.doctypeSystemIdentifierSingleQuotedState
        elif data is EOF:
            self.parseError("eof-in-doctype")
            self.emitDoctype(correct=False)
            return False
        else:
            self.parseError("unexpected-char-in-doctype")
            self.currentToken.correct = False
            self.state = self.bogusDoctypeState
        return True

    def betweenDoctypePublicAndSystemIdentifiersState(self, data):
        if data in spaceCharacters:
            pass
        elif data == ">":
            self.emitDoctype()
        elif data == '"':
            self.currentToken.system_id = ""
            self.state = self.doctypeSystemIdentifierDoubleQuotedState
        elif data == "'":
            self.currentToken.system_id = ""
            self.state = self.doctypeSystemIdentifierSingleQuotedState
        elif data is EOF:
            self.parseError("eof-in-doctype")
            self.emitDoctype(correct=False)
            return False
        else:
            self.parseError("unexpected-char-in-doctype")
            self.currentToken.correct = False
            self.state = self.bogusDoctypeState
        return True

    def afterDoctypeSystemIdentifierState(self, data):
        if data in spaceCharacters:
            pass
        elif data == ">":
            self.emitDoctype()
        elif data is EOF:
            self.parseError("eof-in-doctype")
            self.emitDoctype(correct=False)
            return False
        else:
            self.parseError("unexpected-char-in-doctype")
            self.state = self.bogusDoctypeState
        return True

    def bogusDoctypeState(self, data):
        if data == ">":
            self.emitDoctype()
        elif data is EOF:
            self.emitDoctype()
            return False
        return True
