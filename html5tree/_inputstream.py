# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

import webencodings

from .constants import EOF, asciiUpper2Lower


def HTMLInputStream(source, **kwargs):
    """Builds a Cursor over ``source``

    ``source`` may be a ``str``, ``bytes`` or a file-like object returning
    either. Byte input is decoded with ``HTMLBinaryInputStream``; giving an
    ``encoding`` for text input is an error.
    """
    # Work around Python bug #20007: read(0) closes the connection.
    # http://bugs.python.org/issue20007
    if (hasattr(source, "read") and
            not hasattr(source, "fp") or
            hasattr(source, "fp") and hasattr(source.fp, "read")):
        isUnicode = isinstance(source.read(0), str)
    else:
        isUnicode = isinstance(source, str)

    if isUnicode:
        encodings = [x for x in kwargs if x.endswith("encoding") and
                     kwargs[x] is not None]
        if encodings:
            raise TypeError("Cannot set an encoding with a unicode input, set %r" % encodings)

        return HTMLUnicodeInputStream(source)
    else:
        return HTMLBinaryInputStream(source, **kwargs)


class Cursor(object):
    """Position-tracking reader over a string of decoded text.

    Every read operation returns ``EOF`` once the text is exhausted, and
    keeps doing so; nothing here raises.
    """

    def __init__(self, data):
        self.data = data
        self.pos = 0
        self.savedPos = 0
        # (offset, line) of the last position() call
        self._lineCache = (0, 1)

    def peek(self):
        """Returns the next character without consuming it"""
        if self.pos < len(self.data):
            return self.data[self.pos]
        return EOF

    def read(self):
        """Consumes and returns the next character"""
        if self.pos < len(self.data):
            char = self.data[self.pos]
            self.pos += 1
            return char
        return EOF

    def readUntil(self, stopChar):
        """Consumes characters up to but not including ``stopChar``, or up
        to the end of the text, and returns them"""
        end = self.data.find(stopChar, self.pos)
        if end == -1:
            end = len(self.data)
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk

    def save(self):
        self.savedPos = self.pos

    def restore(self):
        self.pos = self.savedPos

    def matchesLiteral(self, literal, caseSensitive=True):
        """Consumes ``literal`` if the text continues with it.

        On a mismatch the position is left untouched. The case-insensitive
        form only folds ASCII letters.
        """
        candidate = self.data[self.pos:self.pos + len(literal)]
        if not caseSensitive:
            candidate = candidate.translate(asciiUpper2Lower)
            literal = literal.translate(asciiUpper2Lower)
        if candidate == literal:
            self.pos += len(literal)
            return True
        return False

    def unget(self, char):
        # Only the character returned by the last read can be stepped back
        # over; reading past the end does not move the position.
        if char is not EOF and self.data[self.pos - 1:self.pos] == char:
            self.pos -= 1

    def position(self):
        """Returns (line, col) of the next character"""
        start, line = self._lineCache
        if self.pos < start:
            start, line = 0, 1
        line += self.data.count("\n", start, self.pos)
        self._lineCache = (self.pos, line)
        col = self.pos - (self.data.rfind("\n", 0, self.pos) + 1)
        return (line, col)


class HTMLUnicodeInputStream(Cursor):
    """Provides a unicode stream of characters to the HTMLTokenizer.

    Carriage returns are normalised to line feeds before tokenizing.
    """

    def __init__(self, source):
        if hasattr(source, "read"):
            source = source.read()
        Cursor.__init__(self, self.normaliseNewlines(source))
        self.charEncoding = None

    @staticmethod
    def normaliseNewlines(data):
        return data.replace("\r\n", "\n").replace("\r", "\n")


class HTMLBinaryInputStream(HTMLUnicodeInputStream):
    """Provides a unicode stream of characters to the HTMLTokenizer.

    Bytes are decoded with the encoding named by a byte order mark, else
    the transport ``encoding`` given by the caller, else the
    ``defaultEncoding``. Undecodable bytes become U+FFFD.
    """

    def __init__(self, source, encoding=None, defaultEncoding="windows-1252"):
        if hasattr(source, "read"):
            source = source.read()

        if encoding is not None:
            fallback = lookupEncoding(encoding)
            if fallback is None:
                raise LookupError("Unknown encoding %r" % encoding)
            confidence = "certain"
        else:
            fallback = lookupEncoding(defaultEncoding)
            confidence = "tentative"

        text, usedEncoding = webencodings.decode(source, fallback)
        if usedEncoding is not fallback:
            # A byte order mark overrides everything else
            confidence = "certain"

        HTMLUnicodeInputStream.__init__(self, text)
        self.charEncoding = (usedEncoding, confidence)


def lookupEncoding(encoding):
    """Return the python codec name corresponding to an encoding or None if the
    string doesn't correspond to a valid encoding."""
    if isinstance(encoding, bytes):
        try:
            encoding = encoding.decode("ascii")
        except UnicodeDecodeError:
            return None

    if encoding is not None:
        try:
            return webencodings.lookup(encoding)
        except AttributeError:
            return None
    else:
        return None
