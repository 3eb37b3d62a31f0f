# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

from io import BytesIO, StringIO

import pytest

from html5tree.constants import EOF
from html5tree._inputstream import (Cursor, HTMLInputStream,
                                    HTMLUnicodeInputStream,
                                    HTMLBinaryInputStream, lookupEncoding)


def test_peek_and_read():
    cursor = Cursor("ab")
    assert cursor.peek() == "a"
    assert cursor.read() == "a"
    assert cursor.read() == "b"
    assert cursor.read() is EOF
    assert cursor.read() is EOF
    assert cursor.peek() is EOF


def test_read_until():
    cursor = Cursor("abc>def")
    assert cursor.readUntil(">") == "abc"
    assert cursor.read() == ">"
    assert cursor.readUntil(">") == "def"
    assert cursor.read() is EOF


def test_save_restore():
    cursor = Cursor("abcdef")
    cursor.read()
    cursor.save()
    cursor.read()
    cursor.read()
    cursor.restore()
    assert cursor.read() == "b"


def test_matches_literal():
    cursor = Cursor("DocType html")
    assert not cursor.matchesLiteral("doctype")
    assert cursor.peek() == "D"
    assert cursor.matchesLiteral("doctype", caseSensitive=False)
    assert cursor.read() == " "


def test_matches_literal_past_end():
    cursor = Cursor("PUB")
    assert not cursor.matchesLiteral("PUBLIC")
    assert cursor.read() == "P"


def test_unget():
    cursor = Cursor("xy")
    char = cursor.read()
    cursor.unget(char)
    assert cursor.read() == "x"
    cursor.read()
    char = cursor.read()
    assert char is EOF
    cursor.unget(char)
    assert cursor.read() is EOF


def test_unget_only_steps_back_over_last_read():
    cursor = Cursor("xy")
    assert cursor.unget("x") is None
    assert cursor.read() == "x"
    cursor.unget("y")
    assert cursor.read() == "y"


def test_position():
    cursor = Cursor("a\nbc\nd")
    assert cursor.position() == (1, 0)
    for _ in range(3):
        cursor.read()
    assert cursor.position() == (2, 1)
    for _ in range(3):
        cursor.read()
    assert cursor.position() == (3, 1)


def test_position_after_restore():
    cursor = Cursor("a\nb\nc")
    cursor.save()
    for _ in range(4):
        cursor.read()
    assert cursor.position() == (3, 0)
    cursor.restore()
    assert cursor.position() == (1, 0)


def test_newlines_normalised():
    stream = HTMLUnicodeInputStream("a\r\nb\rc\n")
    assert stream.data == "a\nb\nc\n"


def test_unicode_input_file():
    stream = HTMLInputStream(StringIO("<p>x"))
    assert isinstance(stream, HTMLUnicodeInputStream)
    assert stream.read() == "<"
    assert stream.charEncoding is None


def test_encoding_with_unicode_input():
    with pytest.raises(TypeError):
        HTMLInputStream("<p>", encoding="utf-8")


def test_bytes_default_encoding():
    stream = HTMLInputStream(b"caf\xe9")
    assert isinstance(stream, HTMLBinaryInputStream)
    assert stream.data == "café"
    assert stream.charEncoding[0].name == "windows-1252"
    assert stream.charEncoding[1] == "tentative"


def test_bytes_transport_encoding():
    stream = HTMLInputStream(BytesIO("café".encode("utf-8")),
                             encoding="utf-8")
    assert stream.data == "café"
    assert stream.charEncoding == (lookupEncoding("utf-8"), "certain")


def test_bom_wins():
    stream = HTMLBinaryInputStream(b"\xef\xbb\xbfab", encoding="windows-1252")
    assert stream.data == "ab"
    assert stream.charEncoding[0].name == "utf-8"


def test_unknown_encoding():
    with pytest.raises(LookupError):
        HTMLBinaryInputStream(b"a", encoding="not-an-encoding")


@pytest.mark.parametrize("label, name", [
    ("utf8", "utf-8"),
    (" UTF-8 ", "utf-8"),
    ("latin1", "windows-1252"),
    (b"ascii", "windows-1252"),
])
def test_lookup_encoding(label, name):
    assert lookupEncoding(label).name == name


def test_lookup_unknown_encoding():
    assert lookupEncoding("foo") is None
    assert lookupEncoding(b"\xff") is None
    assert lookupEncoding(None) is None
