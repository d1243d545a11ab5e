"""
Extraction of import declarations with exact source provenance.

The extractor walks the top-level constructs of a parsed compilation unit and
splits the text into three parts: what comes before the import block, the
import block itself (the region that canonical rendering replaces) and what
comes after it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from tree_sitter import Node

from .model import ImportRecord
from .parsing import COMMENT_TYPES, JavaDocument

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_NAME_TYPES = ("scoped_identifier", "identifier")


def _comment_end(doc: JavaDocument, node: Node) -> int:
    """End offset of a comment; a line comment never owns the CR of a CRLF break."""
    end = node.end_byte
    if node.type == "line_comment" and doc.byte_at(end - 1) == b"\r":
        end -= 1
    return end


@dataclass(frozen=True)
class ImportSection:
    """
    Import declarations of a file and the text around them.

    Invariant: before + region + after == the document text.
    """
    records: Tuple[ImportRecord, ...]
    package: Optional[str]
    before: str
    region: str
    after: str


class DeclarationExtractor:
    """Reads import declarations, their leading comments and trailing comments."""

    def extract(self, doc: JavaDocument, stop_byte: Optional[int] = None) -> ImportSection:
        """
        Extract the import block of a document.

        Args:
            doc: Parsed document
            stop_byte: Ignore every top-level construct ending after this offset
                (used to recover imports preceding a syntax error)
        """
        records: List[ImportRecord] = []
        package: Optional[str] = None
        pending: List[Node] = []
        prev_is_import = False
        trail_row: Optional[int] = None
        region_start = 0
        import_end = suffix_end = 0

        for child in doc.root_node.children:
            if stop_byte is not None and (child.end_byte > stop_byte or child.has_error):
                break

            if child.type in COMMENT_TYPES:
                if trail_row is not None and child.start_point[0] == trail_row:
                    # same-line comment trailing the previous construct
                    if prev_is_import:
                        suffix_end = _comment_end(doc, child)
                        records[-1] = replace(records[-1], suffix=doc.slice(import_end, suffix_end))
                    trail_row = child.end_point[0]
                    continue
                trail_row = None
                pending.append(child)
                continue

            if records and doc.get_node_text(child) == ";":
                # empty declaration inside the block; the canonical form drops it
                if prev_is_import and suffix_end == import_end and child.start_point[0] == trail_row:
                    import_end = suffix_end = child.end_byte
                continue

            if child.type != "import_declaration":
                if records:
                    break
                if child.type == "package_declaration":
                    package = self._dotted_name(doc, child)
                pending = []
                prev_is_import = False
                trail_row = child.end_point[0]
                continue

            claimed = pending if records else self._attached_comments(doc, pending, child)
            if not records:
                region_start = claimed[0].start_byte if claimed else child.start_byte
            records.append(self._build_record(doc, child, claimed, len(records)))
            import_end = suffix_end = child.end_byte
            pending = []
            prev_is_import = True
            trail_row = child.end_point[0]

        if not records:
            text = doc.text
            return ImportSection(records=(), package=package, before=text, region="", after="")

        region_end = self._consume_line_end(doc, suffix_end)
        logger.debug("Extracted %d import(s), region bytes %d..%d", len(records), region_start, region_end)
        return ImportSection(
            records=tuple(records),
            package=package,
            before=doc.slice(0, region_start),
            region=doc.slice(region_start, region_end),
            after=doc.slice(region_end),
        )

    def _build_record(self, doc: JavaDocument, node: Node, claimed: List[Node], order: int) -> ImportRecord:
        is_static = any(child.type == "static" for child in node.children)
        wildcard = any(child.type == "asterisk" for child in node.children)
        path = self._dotted_name(doc, node)
        if not path:
            raise ValueError(f"Import declaration without a name: {doc.get_node_text(node)!r}")
        if wildcard:
            path += ".*"

        prefix = doc.slice(claimed[0].start_byte, _comment_end(doc, claimed[-1])) if claimed else ""
        return ImportRecord(
            path=path,
            is_static=is_static,
            prefix=prefix,
            suffix="",
            original_order=order,
        )

    @staticmethod
    def _dotted_name(doc: JavaDocument, node: Node) -> Optional[str]:
        """Dotted name of a package or import declaration, comments and whitespace dropped."""
        name_node = next((child for child in node.children if child.type in _NAME_TYPES), None)
        if name_node is None:
            return None
        segments = [
            doc.get_node_text(n) for n in doc.walk_tree(name_node) if n.type == "identifier"
        ]
        return ".".join(segments)

    @staticmethod
    def _attached_comments(doc: JavaDocument, pending: List[Node], node: Node) -> List[Node]:
        """Trailing run of comments with no blank line between them and the node."""
        attached: List[Node] = []
        next_start = node.start_byte
        for comment in reversed(pending):
            gap = doc.slice(_comment_end(doc, comment), next_start)
            if len(_LINE_BREAK.findall(gap)) > 1:
                break
            attached.insert(0, comment)
            next_start = comment.start_byte
        return attached

    @staticmethod
    def _consume_line_end(doc: JavaDocument, offset: int) -> int:
        """Extend an offset over trailing blanks and one line break, when a break follows."""
        end = offset
        while doc.byte_at(end) in (b" ", b"\t"):
            end += 1
        if doc.byte_at(end) == b"\r":
            return end + 2 if doc.byte_at(end + 1) == b"\n" else end + 1
        if doc.byte_at(end) == b"\n":
            return end + 1
        if end >= doc.byte_length:
            return end
        return offset


__all__ = ["DeclarationExtractor", "ImportSection"]
