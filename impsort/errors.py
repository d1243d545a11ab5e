"""
Exceptions raised while sorting the imports of a single file.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from ImpSortUserError.

A missing input file is not one of them: it propagates as the native
FileNotFoundError, unchanged.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .model import ImportRecord


class ImpSortUserError(Exception):
    """
    Base class for all user-facing errors in impsort.

    These errors indicate problems that the user can fix:
    configuration issues, unparseable sources, unsupported line endings.
    """
    pass


class Reason(Enum):
    """Classified cause of a failure to process a file."""
    UNKNOWN_LINE_ENDING = "unknown line ending"
    PARTIAL_PARSE = "the file contained parse errors"
    UNABLE_TO_PARSE = "unable to successfully parse the file"

    @property
    def text(self) -> str:
        return self.value


class ImpSortException(ImpSortUserError):
    """
    A file could not be processed.

    The rendered message always names the file and the reason; parser-derived
    reasons append the parser diagnostic on a separate line.
    """

    def __init__(
        self,
        path: Path | str,
        reason: Reason,
        error_message: Optional[str] = None,
        imports: Sequence["ImportRecord"] = (),
    ):
        self.path = path
        self.reason = reason
        self.error_message = error_message
        # imports recovered before the error point (partial parses only)
        self.imports: Tuple["ImportRecord", ...] = tuple(imports)
        super().__init__(self._render())

    def _render(self) -> str:
        msg = f"file: {self.path}; reason: {self.reason.text}"
        if self.error_message:
            msg += f"{os.linesep}errorMessage: {self.error_message}"
        return msg

    def get_reason(self) -> Reason:
        return self.reason

    def get_message(self) -> str:
        return str(self)


class ConfigError(ImpSortUserError):
    """Invalid impsort configuration."""
    pass


__all__ = ["ImpSortUserError", "Reason", "ImpSortException", "ConfigError"]
