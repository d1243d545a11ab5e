from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

from .config import ImpSortConfig, find_config, load_config
from .engine import ImpSort
from .errors import ImpSortUserError
from .grouping import parse_groups
from .line_ending import LineEnding
from .model import Result
from .version import tool_version

_LOG = logging.getLogger("impsort")

EXIT_OK = 0
EXIT_UNSORTED = 1
EXIT_ERROR = 2


def _setup_logging(verbose: bool) -> None:
    _LOG.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="impsort",
        description="Check that the imports of Java source files are grouped and sorted",
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("files", nargs="+", type=Path, help="Java source files to check")
    p.add_argument(
        "-c", "--config",
        type=Path,
        help="configuration file (default: nearest impsort.yaml)",
    )
    p.add_argument(
        "--line-ending",
        choices=[member.value for member in LineEnding],
        help="line ending policy (overrides the configuration)",
    )
    p.add_argument("--groups", help="comma-separated package prefixes, e.g. 'java.,javax.,org.,com.'")
    p.add_argument("--static-groups", help="comma-separated package prefixes for static imports")
    p.add_argument(
        "--static-after",
        action="store_true",
        default=None,
        help="place static imports after the regular ones",
    )
    p.add_argument("-j", "--jobs", type=int, default=1, help="number of files processed in parallel")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def _resolve_config(ns: argparse.Namespace) -> ImpSortConfig:
    path = ns.config
    if path is None:
        path = find_config(Path.cwd())
    elif not path.is_file():
        raise ImpSortUserError(f"Config file not found: {path}")
    cfg = load_config(path)

    if ns.line_ending:
        cfg.line_ending = LineEnding.parse(ns.line_ending)
    grouping = cfg.grouping
    if ns.groups is not None:
        grouping = replace(grouping, groups=parse_groups(ns.groups))
    if ns.static_groups is not None:
        grouping = replace(grouping, static_groups=parse_groups(ns.static_groups))
    if ns.static_after is not None:
        grouping = replace(grouping, static_after=ns.static_after)
    cfg.grouping = grouping
    return cfg


def _check(engine: ImpSort, path: Path) -> Tuple[str, str]:
    """Process one file and return (status, detail)."""
    try:
        result = engine.parse_file(path)
    except FileNotFoundError:
        return "ERROR", f"file not found: {path}"
    except ImpSortUserError as e:
        return "ERROR", str(e)
    return _status(result), str(path)


def _status(result: Result) -> str:
    if result.is_empty_file:
        return "EMPTY"
    return "SORTED" if result.is_sorted else "UNSORTED"


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        cfg = _resolve_config(ns)
    except ImpSortUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return EXIT_ERROR

    engine = cfg.create_engine(_LOG)
    jobs = max(1, ns.jobs)
    if jobs == 1:
        outcomes = [_check(engine, path) for path in ns.files]
    else:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            outcomes = list(pool.map(lambda path: _check(engine, path), ns.files))

    rc = EXIT_OK
    for status, detail in outcomes:
        if status == "ERROR":
            sys.stderr.write(f"[ERROR] {detail}\n")
            rc = EXIT_ERROR
            continue
        sys.stdout.write(f"[{status}] {detail}\n")
        if status == "UNSORTED" and rc == EXIT_OK:
            rc = EXIT_UNSORTED
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
