"""
Rendering of the canonical import block.
"""

from __future__ import annotations

from typing import List, Sequence

from .model import ImportRecord


class CanonicalAssembler:
    """Joins canonically ordered import blocks into the text of the import region."""

    def __init__(self, separate_groups: bool = True):
        self.separate_groups = separate_groups

    def assemble(self, blocks: Sequence[Sequence[ImportRecord]], line_ending: str) -> str:
        """
        Render blocks of imports.

        Records are separated by a line ending, blocks by a blank line
        (or by a single line ending when group separation is off).
        A non-empty result always ends with a line ending.
        """
        rendered: List[str] = []
        for block in blocks:
            if block:
                rendered.append(line_ending.join(record.render(line_ending) for record in block))
        if not rendered:
            return ""
        separator = line_ending * 2 if self.separate_groups else line_ending
        return separator.join(rendered) + line_ending


__all__ = ["CanonicalAssembler"]
