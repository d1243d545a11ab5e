"""
Grouping and ordering of import declarations.

Every import is assigned to a block (a configured package-prefix group,
possibly split into static and non-static blocks) and ordered within it.
The resulting order is total, so the canonical form of a file is unique.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from .model import ImportRecord

CATCH_ALL = "*"

DEFAULT_GROUPS: Tuple[str, ...] = ("java.", "javax.", "org.", "com.")


def parse_groups(spec: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """Parse "java.,javax.,org." (or a list) into a tuple of prefixes, dropping blanks and duplicates."""
    if spec is None:
        return ()
    items = spec.split(",") if isinstance(spec, str) else list(spec)
    result: List[str] = []
    for raw in items:
        item = str(raw).strip()
        if item and item not in result:
            result.append(item)
    return tuple(result)


@dataclass(frozen=True)
class GroupingConfig:
    """
    Immutable grouping rules, shared by all files of a run.

    Attributes:
        groups: Package prefixes of the regular import groups, in output order.
            "*" places the catch-all group explicitly.
        static_groups: Package prefixes of the static import groups.
            Empty means a single group holding every static import.
        static_after: Emit static imports after non-static ones.
        join_static_with_non_static: Put static imports into the regular groups.
        breadth_first: Types of a package sort before its subpackages.
        separate_groups: Separate consecutive blocks with a blank line.
        unmatched_first: Without an explicit "*", unmatched imports form the first group
            rather than the last one.
        longest_prefix: Match the longest prefix; otherwise the first listed one that matches.
        ignore_case: Compare path segments case-insensitively.
    """
    groups: Tuple[str, ...] = DEFAULT_GROUPS
    static_groups: Tuple[str, ...] = ()
    static_after: bool = False
    join_static_with_non_static: bool = False
    breadth_first: bool = True
    separate_groups: bool = True
    unmatched_first: bool = False
    longest_prefix: bool = True
    ignore_case: bool = False

    @classmethod
    def from_strings(
        cls,
        groups: str,
        static_groups: str = "",
        static_after: bool = False,
        join_static_with_non_static: bool = False,
        breadth_first: bool = True,
        **options,
    ) -> GroupingConfig:
        return cls(
            groups=parse_groups(groups),
            static_groups=parse_groups(static_groups),
            static_after=static_after,
            join_static_with_non_static=join_static_with_non_static,
            breadth_first=breadth_first,
            **options,
        )


class Grouper:
    """Assigns group indices and sort keys to imports according to a GroupingConfig."""

    def __init__(self, config: GroupingConfig | None = None):
        self.config = config or GroupingConfig()
        self._regular = self._with_catch_all(self.config.groups)
        self._static = self._with_catch_all(self.config.static_groups)

    def _with_catch_all(self, groups: Sequence[str]) -> Tuple[str, ...]:
        if CATCH_ALL in groups:
            return tuple(groups)
        if self.config.unmatched_first:
            return (CATCH_ALL, *groups)
        return (*groups, CATCH_ALL)

    def _match(self, path: str, groups: Tuple[str, ...]) -> int:
        best = groups.index(CATCH_ALL)
        best_len = -1
        for idx, prefix in enumerate(groups):
            if prefix == CATCH_ALL or not path.startswith(prefix):
                continue
            if not self.config.longest_prefix:
                return idx
            if len(prefix) > best_len:
                best, best_len = idx, len(prefix)
        return best

    def group_index(self, record: ImportRecord) -> int:
        """Index of the block the import belongs to, counting blocks in output order."""
        cfg = self.config
        if cfg.join_static_with_non_static:
            return self._match(record.path, self._regular)

        if record.is_static:
            idx = self._match(record.path, self._static)
            return idx + len(self._regular) if cfg.static_after else idx

        idx = self._match(record.path, self._regular)
        return idx if cfg.static_after else idx + len(self._static)

    def sort_key(self, record: ImportRecord) -> Tuple:
        """Order within a group: dictionary order over dotted segments."""
        segments = record.path.split(".")
        if self.config.ignore_case:
            segments = [segment.casefold() for segment in segments]
        if not self.config.breadth_first:
            return tuple(segments)
        last = len(segments) - 1
        return tuple((0 if i == last else 1, segment) for i, segment in enumerate(segments))

    def key(self, record: ImportRecord) -> Tuple:
        """Total canonical order: block, static placement, path, then tie-breakers."""
        static_rank = 0
        if self.config.join_static_with_non_static:
            static_rank = int(record.is_static == self.config.static_after)
        return (
            self.group_index(record),
            static_rank,
            self.sort_key(record),
            record.path,
            record.is_static,
        )

    def group(self, records: Iterable[ImportRecord]) -> List[List[ImportRecord]]:
        """Canonically ordered blocks; empty blocks are omitted."""
        blocks: Dict[int, List[ImportRecord]] = {}
        for record in sorted(records, key=self.key):
            blocks.setdefault(self.group_index(record), []).append(record)
        return [blocks[idx] for idx in sorted(blocks)]


__all__ = ["CATCH_ALL", "DEFAULT_GROUPS", "GroupingConfig", "Grouper", "parse_groups"]
