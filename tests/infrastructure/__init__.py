"""
Shared test infrastructure.

Modules:
- file_utils: Utilities for writing source files
- engine_utils: Engine construction and Tree-sitter availability checks
"""

from .file_utils import write, write_bytes, java_source
from .engine_utils import ECLIPSE_DEFAULTS, is_tree_sitter_available, make_engine

__all__ = [
    "write",
    "write_bytes",
    "java_source",
    "ECLIPSE_DEFAULTS",
    "is_tree_sitter_available",
    "make_engine",
]
