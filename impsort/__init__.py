"""impsort checks that the import block of Java sources is in canonical order."""

from .config import ImpSortConfig, load_config
from .engine import ImpSort
from .errors import ImpSortException, ImpSortUserError, Reason
from .grouping import GroupingConfig, Grouper
from .line_ending import LineEnding
from .model import ImportRecord, Result

__all__ = [
    "ImpSort",
    "ImpSortConfig",
    "ImpSortException",
    "ImpSortUserError",
    "ImportRecord",
    "GroupingConfig",
    "Grouper",
    "LineEnding",
    "Reason",
    "Result",
    "load_config",
]
