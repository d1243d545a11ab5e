import pytest

from impsort.line_ending import LineEnding, UnknownLineEndingError, detect_line_ending, resolve_line_ending


@pytest.mark.parametrize(
    "content, expected",
    [
        ("a\nb", "\n"),
        ("a\r\nb\n", "\r\n"),
        ("a\nb\r\n", "\n"),
        ("a\rb\r", "\r"),
        ("\n", "\n"),
        ("no breaks", None),
        ("", None),
    ],
)
def test_detect_line_ending(content, expected):
    assert detect_line_ending(content) == expected


def test_fixed_policy_ignores_content():
    assert resolve_line_ending("a\r\nb", LineEnding.LF) == "\n"
    assert resolve_line_ending("a\nb", LineEnding.CRLF) == "\r\n"
    assert resolve_line_ending("single line", LineEnding.CR) == "\r"


def test_keep_uses_detected_ending():
    assert resolve_line_ending("a\r\nb", LineEnding.KEEP) == "\r\n"


def test_keep_without_line_break_fails():
    with pytest.raises(UnknownLineEndingError):
        resolve_line_ending("import a.B;class X{}", LineEnding.KEEP)


def test_auto_falls_back_to_default():
    assert resolve_line_ending("import a.B;class X{}", LineEnding.AUTO, default="\r\n") == "\r\n"
    assert resolve_line_ending("x\ny", LineEnding.AUTO, default="\r\n") == "\n"


def test_parse_policy_names():
    assert LineEnding.parse("CRLF") is LineEnding.CRLF
    assert LineEnding.parse(" keep ") is LineEnding.KEEP
    with pytest.raises(ValueError, match="Unknown line ending"):
        LineEnding.parse("windows")


def test_chars():
    assert LineEnding.LF.chars == "\n"
    assert LineEnding.AUTO.chars is None
    assert not LineEnding.KEEP.is_fixed
