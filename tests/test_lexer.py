"""
Tests for the lexical pre-scan of Java sources.
"""

from impsort.lexer import JavaLexer


def scan(text):
    return JavaLexer().scan(text)


def test_valid_source_has_no_error():
    src = 'package a;\n\nimport java.util.List;\n\nclass A { String s = "x/y"; char c = \'/\'; int d = 4 / 2; }\n'
    assert scan(src) is None


def test_nul_byte_reported_at_start():
    error = scan("\0\n\n")
    assert error is not None
    assert (error.line, error.column) == (1, 1)
    assert error.message == 'Lexical error at line 1, column 1.  Encountered: "\\u0000" (0), after : ""'


def test_control_char_location_and_previous_token():
    error = scan("class A {}\r\n\r\n  \x01")
    assert (error.line, error.column) == (3, 3)
    assert error.after == "{}"


def test_control_chars_allowed_in_comments_and_literals():
    assert scan("// \0 in a line comment\nclass A {}\n") is None
    assert scan("/* \x01\x02 */ class A {}") is None
    assert scan('class A { String s = "\0"; }') is None


def test_text_block():
    src = 'class A { String s = """\n  raw " quotes \x07\n  """; }\n'
    assert scan(src) is None


def test_trailing_sub_character_is_accepted():
    assert scan("class A {}\n\x1a") is None
    assert scan("class A {}\x1a\n") is not None
