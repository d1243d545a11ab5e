"""
Data model: extracted import declarations and per-file results.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Optional, Tuple

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class ImportRecord:
    """A single import declaration together with its source provenance."""
    path: str                      # dotted name, ".*" suffix for on-demand imports
    is_static: bool = False
    prefix: str = ""               # comments directly above the declaration, verbatim
    suffix: str = ""               # same-line trailing comments, verbatim
    original_order: int = 0        # position among the imports of the file

    @property
    def declaration(self) -> str:
        """Declaration text rebuilt from path and static flag."""
        if self.is_static:
            return f"import static {self.path};"
        return f"import {self.path};"

    def render(self, line_ending: str) -> str:
        """Render prefix, declaration and suffix using the given line ending."""
        text = self.declaration + _LINE_BREAK.sub(line_ending, self.suffix)
        if self.prefix:
            return _LINE_BREAK.sub(line_ending, self.prefix) + line_ending + text
        return text

    def get_import(self) -> str:
        return self.path

    def get_prefix(self) -> str:
        return self.prefix

    def get_suffix(self) -> str:
        return self.suffix


@dataclass(frozen=True)
class Result:
    """
    Outcome of processing one file.

    imports keep the order of the file, not the canonical order.
    is_sorted holds when the canonical rendering of the file is identical to its content.
    """
    path: Optional[Path]
    imports: Tuple[ImportRecord, ...] = ()
    is_sorted: bool = True
    content: str = ""
    sorted_content: str = ""
    line_ending: Optional[str] = None
    # debugging aid: the import region as found and as it should be
    original_section: str = field(default="", repr=False)
    sorted_section: str = field(default="", repr=False)

    EMPTY_FILE: ClassVar[Result]

    def get_imports(self) -> Tuple[ImportRecord, ...]:
        return self.imports

    @property
    def is_empty_file(self) -> bool:
        return self is Result.EMPTY_FILE


Result.EMPTY_FILE = Result(path=None)


__all__ = ["ImportRecord", "Result"]
