"""
Lexical pre-scan of Java sources.

Tree-sitter recovers from almost anything, so characters the Java lexer
rejects outright are detected here, before the structural parse:
control characters outside comments and literals (NUL being the usual one).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LexicalError:
    """
    First character that cannot start or continue a Java token.

    Attributes:
        line: 1-based line number
        column: 1-based column number
        char: The offending character
        after: Text of the last token read before it
    """
    line: int
    column: int
    char: str
    after: str = ""

    @property
    def message(self) -> str:
        code = ord(self.char)
        return (
            f"Lexical error at line {self.line}, column {self.column}.  "
            f"Encountered: \"\\u{code:04x}\" ({code}), after : \"{self.after}\""
        )


class JavaLexer:
    """
    Skips over the parts of a Java source that may hold arbitrary characters
    and reports the first illegal character found anywhere else.
    """

    # (regex_pattern, token_type); first match wins
    TOKEN_SPECS = [
        (r'[ \t\f\r\n]+', 'WHITESPACE'),
        (r'//[^\r\n]*', 'COMMENT'),
        (r'/\*.*?(?:\*/|\Z)', 'COMMENT'),
        (r'"""[ \t\f]*\r?\n(?:\\.|[^\\])*?(?:"""|\Z)', 'TEXT_BLOCK'),
        (r'"(?:\\.|[^"\\\r\n])*"?', 'STRING'),
        (r"'(?:\\.|[^'\\\r\n])*'?", 'CHAR'),
        (r'[^\x00-\x08\x0b\x0e-\x1f\x7f \t\f\r\n"\'/]+', 'CODE'),
        (r'/', 'CODE'),
        (r'\x1a\Z', 'EOF_MARKER'),
        (r'.', 'ILLEGAL'),
    ]

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern, re.DOTALL), token_type)
            for pattern, token_type in self.TOKEN_SPECS
        ]

    def scan(self, text: str) -> Optional[LexicalError]:
        """
        Scan the whole text.

        Returns:
            The first lexical error, or None when the text is lexically valid
        """
        position = 0
        last_token = ""
        while position < len(text):
            for pattern, token_type in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue
                if token_type == 'ILLEGAL':
                    return self._error_at(text, position, last_token)
                if token_type not in ('WHITESPACE', 'COMMENT'):
                    last_token = match.group(0)
                position = match.end()
                break
        return None

    @staticmethod
    def _error_at(text: str, position: int, after: str) -> LexicalError:
        line_start = max(text.rfind("\n", 0, position), text.rfind("\r", 0, position)) + 1
        line = len(re.findall(r"\r\n|\r|\n", text[:line_start])) + 1
        return LexicalError(
            line=line,
            column=position - line_start + 1,
            char=text[position],
            after=after,
        )


__all__ = ["JavaLexer", "LexicalError"]
