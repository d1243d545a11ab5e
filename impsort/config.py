"""
impsort configuration: defaults, YAML loading and validation.

Example impsort.yaml:

    charset: utf-8
    line_ending: auto
    remove_unused: false
    treat_same_package_as_unused: true
    grouping:
      groups: "java.,javax.,org.,com."
      static_groups: ""
      static_after: false
      breadth_first: true
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .engine import ImpSort
from .errors import ConfigError
from .grouping import GroupingConfig, Grouper, parse_groups
from .line_ending import LineEnding

CONFIG_FILE_NAME = "impsort.yaml"

_yaml = YAML(typ="safe")

_GROUPING_FLAGS = (
    "static_after",
    "join_static_with_non_static",
    "breadth_first",
    "separate_groups",
    "unmatched_first",
    "longest_prefix",
    "ignore_case",
)

logger = logging.getLogger(__name__)


def _read_yaml_map(path: Path) -> dict:
    """Read a YAML file and return its top-level mapping."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def _as_bool(d: Dict[str, Any], key: str, default: bool) -> bool:
    value = d.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean, got {value!r}")
    return value


def grouping_from_dict(d: Optional[Dict[str, Any]]) -> GroupingConfig:
    """Load grouping rules from a YAML dictionary."""
    if not d:
        return GroupingConfig()
    if not isinstance(d, dict):
        raise ConfigError("'grouping' must be a mapping")

    unknown = set(d) - {"groups", "static_groups", *_GROUPING_FLAGS}
    if unknown:
        raise ConfigError(f"Unknown grouping option(s): {', '.join(sorted(unknown))}")

    defaults = GroupingConfig()
    options = {flag: _as_bool(d, flag, getattr(defaults, flag)) for flag in _GROUPING_FLAGS}
    groups = parse_groups(d["groups"]) if "groups" in d else defaults.groups
    return GroupingConfig(
        groups=groups,
        static_groups=parse_groups(d.get("static_groups")),
        **options,
    )


@dataclass
class ImpSortConfig:
    """Settings of one impsort run."""
    charset: str = "utf-8"
    line_ending: LineEnding = LineEnding.AUTO
    remove_unused: bool = False
    treat_same_package_as_unused: bool = True
    grouping: GroupingConfig = field(default_factory=GroupingConfig)

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> ImpSortConfig:
        """Load configuration from a YAML dictionary."""
        if not d:
            return ImpSortConfig()

        cfg = ImpSortConfig()

        charset = str(d.get("charset", cfg.charset))
        try:
            codecs.lookup(charset)
        except LookupError:
            raise ConfigError(f"Unknown charset '{charset}'") from None
        cfg.charset = charset

        if "line_ending" in d:
            try:
                cfg.line_ending = LineEnding.parse(str(d["line_ending"]))
            except ValueError as e:
                raise ConfigError(str(e)) from None

        cfg.remove_unused = _as_bool(d, "remove_unused", cfg.remove_unused)
        cfg.treat_same_package_as_unused = _as_bool(
            d, "treat_same_package_as_unused", cfg.treat_same_package_as_unused
        )
        cfg.grouping = grouping_from_dict(d.get("grouping"))
        return cfg

    def create_engine(self, log: Optional[logging.Logger] = None) -> ImpSort:
        return ImpSort(
            charset=self.charset,
            grouper=Grouper(self.grouping),
            remove_unused=self.remove_unused,
            treat_same_package_as_unused=self.treat_same_package_as_unused,
            line_ending=self.line_ending,
            log=log,
        )


def find_config(start: Path) -> Optional[Path]:
    """Look for impsort.yaml in start and its parents."""
    current = start if start.is_dir() else start.parent
    for ancestor in [current, *current.parents]:
        candidate = ancestor / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Optional[Path]) -> ImpSortConfig:
    """Load configuration from a YAML file; defaults when the path is None or missing."""
    if path is None:
        return ImpSortConfig()
    logger.debug("Loading configuration from %s", path)
    return ImpSortConfig.from_dict(_read_yaml_map(path))


__all__ = ["CONFIG_FILE_NAME", "ImpSortConfig", "find_config", "grouping_from_dict", "load_config"]
