"""
Parser collaborator: Tree-sitter document wrapper and parse outcomes.

A parser never raises on bad input. It reports one of three outcomes:
a full parse, a partial parse (something structural was recognized, but the
tree holds errors) or a failed parse (nothing usable).
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional

from tree_sitter import Language, Node, Parser, Tree

from .lexer import JavaLexer

COMMENT_TYPES = frozenset({"line_comment", "block_comment"})

# bare CR breaks, which tree-sitter-java does not end line comments at
_BARE_CR = re.compile(rb"\r(?!\n)")


class JavaDocument:
    """
    Wrapper for a Tree-sitter parsed Java document.
    All offsets handed out by Tree-sitter are byte offsets into the UTF-8 encoding of text.
    """

    def __init__(self, text: str):
        self.text = text
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode("utf-8")
        self._parse()

    @staticmethod
    def get_language() -> Language:
        import tree_sitter_java as tsjava
        return Language(tsjava.language())

    def _parse(self):
        parser = Parser(self.get_language())
        # same length as the text, so node offsets index _text_bytes unchanged
        self.tree = parser.parse(_BARE_CR.sub(b"\n", self._text_bytes))

    @property
    def root_node(self) -> Node:
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    @property
    def byte_length(self) -> int:
        return len(self._text_bytes)

    def get_node_text(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def slice(self, start_byte: int, end_byte: Optional[int] = None) -> str:
        """Decode a byte range of the document."""
        return self._text_bytes[start_byte:end_byte].decode("utf-8")

    def byte_at(self, offset: int) -> bytes:
        return self._text_bytes[offset:offset + 1]

    def char_column(self, node: Node) -> int:
        """1-based character column of the node start (Tree-sitter columns count bytes)."""
        row_start = node.start_byte - node.start_point[1]
        return len(self.slice(row_start, node.start_byte)) + 1

    def walk_tree(self, start_node: Optional[Node] = None) -> Iterator[Node]:
        """Yield nodes in depth-first document order."""
        if start_node is None:
            start_node = self.root_node

        cursor = start_node.walk()
        visited_children = False

        while True:
            if not visited_children:
                yield cursor.node

                if not cursor.goto_first_child():
                    visited_children = True
            elif cursor.goto_next_sibling():
                visited_children = False
            elif not cursor.goto_parent():
                break
            else:
                visited_children = True

    def has_error(self) -> bool:
        if not self.tree:
            return True
        return self.root_node.has_error

    def first_problem_node(self) -> Optional[Node]:
        """First ERROR or MISSING node in document order."""
        for node in self.walk_tree():
            if node.is_error or node.is_missing:
                return node
        return None


@dataclass(frozen=True)
class ParseProblem:
    """Parser diagnostic with a 1-based location."""
    line: int
    column: int
    message: str
    start_byte: int = 0


@dataclass(frozen=True)
class ParseOutcome:
    """Base of the three parse outcomes."""
    pass


@dataclass(frozen=True)
class FullParse(ParseOutcome):
    document: JavaDocument


@dataclass(frozen=True)
class PartialParse(ParseOutcome):
    document: JavaDocument
    problem: ParseProblem


@dataclass(frozen=True)
class FailedParse(ParseOutcome):
    problem: ParseProblem


class SourceParser(ABC):
    """Black-box parser of a single compilation unit."""

    @abstractmethod
    def parse(self, text: str) -> ParseOutcome:
        pass


class TreeSitterJavaParser(SourceParser):
    """Java parser backed by tree-sitter-java, with a lexical pre-scan."""

    def __init__(self):
        self._lexer = JavaLexer()

    def parse(self, text: str) -> ParseOutcome:
        lexical_error = self._lexer.scan(text)
        if lexical_error is not None:
            return FailedParse(ParseProblem(
                line=lexical_error.line,
                column=lexical_error.column,
                message=lexical_error.message,
            ))

        doc = JavaDocument(text)
        if not doc.has_error():
            return FullParse(doc)

        problem = self._describe(doc)
        if not self._has_structure(doc.root_node):
            return FailedParse(problem)
        return PartialParse(doc, problem)

    @staticmethod
    def _has_structure(root: Node) -> bool:
        """True when at least one top-level construct was recognized."""
        if root.is_error:
            return False
        return any(
            child.is_named and not child.is_error and child.type not in COMMENT_TYPES
            for child in root.children
        )

    @staticmethod
    def _describe(doc: JavaDocument) -> ParseProblem:
        node = doc.first_problem_node() or doc.root_node
        line = node.start_point[0] + 1
        column = doc.char_column(node)
        if node.is_missing:
            detail = f"Expected \"{node.type}\""
        else:
            leaf = node
            while leaf.children:
                leaf = leaf.children[0]
            found = doc.get_node_text(leaf) or doc.get_node_text(node)
            detail = f"Found \"{found}\"" if found else "Unexpected end of input"
        return ParseProblem(
            line=line,
            column=column,
            message=f"(line {line},col {column}) Parse error. {detail}",
            start_byte=node.start_byte,
        )


__all__ = [
    "COMMENT_TYPES",
    "JavaDocument",
    "ParseProblem",
    "ParseOutcome",
    "FullParse",
    "PartialParse",
    "FailedParse",
    "SourceParser",
    "TreeSitterJavaParser",
]
