"""
Line ending policies and their resolution against file content.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Optional


class UnknownLineEndingError(ValueError):
    """KEEP was requested but the content contains no line break."""
    pass


class LineEnding(Enum):
    AUTO = "auto"
    KEEP = "keep"
    LF = "lf"
    CRLF = "crlf"
    CR = "cr"

    @classmethod
    def parse(cls, name: str) -> LineEnding:
        """Look up a policy by its case-insensitive name."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown line ending '{name}'. Expected one of: {choices}") from None

    @property
    def chars(self) -> Optional[str]:
        """The fixed ending string, or None for the content-dependent policies."""
        return _FIXED_CHARS.get(self)

    @property
    def is_fixed(self) -> bool:
        return self in _FIXED_CHARS


_FIXED_CHARS = {
    LineEnding.LF: "\n",
    LineEnding.CRLF: "\r\n",
    LineEnding.CR: "\r",
}


def detect_line_ending(content: str) -> Optional[str]:
    """
    Detect the line ending used by the content.

    The first "\\n" decides: "\\r\\n" when it is preceded by "\\r", "\\n" otherwise.
    Content with only bare "\\r" breaks uses "\\r". None when there is no break at all.
    """
    lf = content.find("\n")
    if lf >= 0:
        return "\r\n" if lf > 0 and content[lf - 1] == "\r" else "\n"
    if "\r" in content:
        return "\r"
    return None


def resolve_line_ending(content: str, policy: LineEnding, default: str = os.linesep) -> str:
    """
    Decide the line ending to emit for the given content.

    Raises:
        UnknownLineEndingError: policy is KEEP and the content has no line break
    """
    if policy.is_fixed:
        return policy.chars  # type: ignore[return-value]

    detected = detect_line_ending(content)
    if detected is not None:
        return detected
    if policy is LineEnding.KEEP:
        raise UnknownLineEndingError("no line ending found in content")
    return default


__all__ = ["LineEnding", "UnknownLineEndingError", "detect_line_ending", "resolve_line_ending"]
