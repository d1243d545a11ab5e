"""
Per-file import sorting engine.

Pipeline: read bytes -> resolve line ending -> parse -> extract ->
group/sort -> assemble -> compare. Every failure is final for the file;
callers decide whether to go on with other files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .assembler import CanonicalAssembler
from .errors import ImpSortException, Reason
from .extractor import DeclarationExtractor, ImportSection
from .grouping import Grouper
from .line_ending import LineEnding, UnknownLineEndingError, resolve_line_ending
from .model import ImportRecord, Result
from .parsing import FailedParse, FullParse, PartialParse, SourceParser, TreeSitterJavaParser


class ImpSort:
    """
    Checks whether the import block of a file is in canonical form.

    An engine holds only immutable configuration, so a single instance
    (or several) may process different files concurrently.
    """

    def __init__(
        self,
        charset: str = "utf-8",
        grouper: Optional[Grouper] = None,
        remove_unused: bool = False,
        treat_same_package_as_unused: bool = True,
        line_ending: LineEnding = LineEnding.AUTO,
        log: Optional[logging.Logger] = None,
        parser: Optional[SourceParser] = None,
    ):
        self.charset = charset
        self.grouper = grouper or Grouper()
        self.remove_unused = remove_unused
        self.treat_same_package_as_unused = treat_same_package_as_unused
        self.line_ending = line_ending
        self.log = log or logging.getLogger(__name__)
        self.parser = parser or TreeSitterJavaParser()
        self.extractor = DeclarationExtractor()
        self.assembler = CanonicalAssembler(self.grouper.config.separate_groups)

    def parse_file(self, path: Path | str) -> Result:
        """
        Process one file.

        Raises:
            FileNotFoundError: The file does not exist (not classified)
            ImpSortException: The file cannot be processed safely
        """
        path = Path(path)
        buf = path.read_bytes()
        if not buf:
            self.log.debug("Empty file: %s", path)
            return Result.EMPTY_FILE
        return self._parse(path, buf)

    def _parse(self, path: Path, buf: bytes) -> Result:
        try:
            text = buf.decode(self.charset)
        except UnicodeDecodeError as e:
            raise ImpSortException(
                path, Reason.UNABLE_TO_PARSE,
                f"Malformed {self.charset} input at byte {e.start}: {e.reason}",
            ) from e

        try:
            line_ending = resolve_line_ending(text, self.line_ending)
        except UnknownLineEndingError as e:
            raise ImpSortException(path, Reason.UNKNOWN_LINE_ENDING) from e

        outcome = self.parser.parse(text)
        if isinstance(outcome, FailedParse):
            raise ImpSortException(path, Reason.UNABLE_TO_PARSE, outcome.problem.message)
        if isinstance(outcome, PartialParse):
            recovered = self.extractor.extract(outcome.document, stop_byte=outcome.problem.start_byte)
            self.log.debug("Recovered %d import(s) before the parse error in %s", len(recovered.records), path)
            raise ImpSortException(
                path, Reason.PARTIAL_PARSE, outcome.problem.message, imports=recovered.records,
            )
        if not isinstance(outcome, FullParse):
            raise TypeError(f"Unsupported parse outcome: {type(outcome).__name__}")

        section = self.extractor.extract(outcome.document)
        if not section.records:
            return Result(path=path, content=text, sorted_content=text, line_ending=line_ending)

        sorted_section = self.assembler.assemble(self.grouper.group(self._retained(section)), line_ending)
        sorted_content = section.before + sorted_section + section.after
        is_sorted = sorted_content == text
        self.log.debug("%s: %d import(s), sorted=%s", path, len(section.records), is_sorted)

        return Result(
            path=path,
            imports=section.records,
            is_sorted=is_sorted,
            content=text,
            sorted_content=sorted_content,
            line_ending=line_ending,
            original_section=section.region,
            sorted_section=sorted_section,
        )

    def _retained(self, section: ImportSection) -> Sequence[ImportRecord]:
        """Imports that survive into the canonical block."""
        if not self.remove_unused:
            return section.records

        kept: List[ImportRecord] = []
        seen = set()
        for record in section.records:
            key = (record.path, record.is_static)
            if key in seen:
                continue
            if self._is_same_package(record, section.package):
                self.log.debug("Dropping same-package import %s", record.path)
                continue
            seen.add(key)
            kept.append(record)
        return kept

    def _is_same_package(self, record: ImportRecord, package: Optional[str]) -> bool:
        if not self.treat_same_package_as_unused or not package or record.is_static:
            return False
        return record.path.rpartition(".")[0] == package


__all__ = ["ImpSort"]
