"""Line-oriented lexer turning prose (no component tags) into block nodes."""

from __future__ import annotations

import re
from typing import Optional

from .inline import convert_inline
from .nodes import Blockquote, CodeBlock, Heading, ListBlock, Node, Paragraph


HEADING_PATTERN = re.compile(r"^(#{1,3})\s+(.*)$")
_LIST_ORDERED_PATTERN = re.compile(r"^\d+\.\s+(.*)$")
_LIST_UNORDERED_PATTERN = re.compile(r"^[-*+]\s+(.*)$")
_BLOCKQUOTE_PATTERN = re.compile(r"^>\s?(.*)$")
_THEMATIC_BREAK_PATTERN = re.compile(r"^(?:\*{3,}|-{3,}|_{3,})$")
_FENCE_PATTERN = re.compile(r"^```\s*([^`\s]*)")

ORDERED = "ordered"
UNORDERED = "unordered"


class _BlockLexer:
    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self.current_list_items: list[str] = []
        self.current_list_kind: Optional[str] = None
        self.code_language: Optional[str] = None
        self.code_lines: list[str] = []

    def feed(self, raw_line: str) -> None:
        if self.code_language is not None:
            if raw_line.strip().startswith("```"):
                self._flush_code()
            else:
                self.code_lines.append(raw_line)
            return

        line = raw_line.strip()
        if not line:
            self.flush_list()
            return

        fence = _FENCE_PATTERN.match(line)
        if fence:
            self.flush_list()
            self.code_language = fence.group(1)
            self.code_lines = []
            return

        ordered = _LIST_ORDERED_PATTERN.match(line)
        if ordered:
            self._append_item(ORDERED, ordered.group(1))
            return

        unordered = _LIST_UNORDERED_PATTERN.match(line)
        if unordered:
            self._append_item(UNORDERED, unordered.group(1))
            return

        self.flush_list()

        heading = HEADING_PATTERN.match(line)
        if heading:
            self.nodes.append(Heading(level=len(heading.group(1)), text=heading.group(2).strip()))
            return

        quote = _BLOCKQUOTE_PATTERN.match(line)
        if quote:
            self.nodes.append(Blockquote(inline=convert_inline(quote.group(1).strip())))
            return

        if _THEMATIC_BREAK_PATTERN.match(line):
            return

        self.nodes.append(Paragraph(inline=convert_inline(line)))

    def finish(self) -> list[Node]:
        if self.code_language is not None:
            # unterminated fence runs to the end of the chunk
            self._flush_code()
        self.flush_list()
        return self.nodes

    def flush_list(self) -> None:
        if not self.current_list_items:
            self.current_list_kind = None
            return
        self.nodes.append(
            ListBlock(
                ordered=self.current_list_kind == ORDERED,
                items=tuple(convert_inline(item) for item in self.current_list_items),
            )
        )
        self.current_list_items = []
        self.current_list_kind = None

    def _append_item(self, kind: str, text: str) -> None:
        if self.current_list_kind != kind:
            self.flush_list()
            self.current_list_kind = kind
        self.current_list_items.append(text.strip())

    def _flush_code(self) -> None:
        self.nodes.append(CodeBlock(language=self.code_language or "", text="\n".join(self.code_lines)))
        self.code_language = None
        self.code_lines = []


def lex_markdown(text: str) -> list[Node]:
    """Lex a prose chunk into headings, lists, blockquotes, code and paragraphs."""
    lexer = _BlockLexer()
    if not text:
        return []
    for raw_line in text.split("\n"):
        lexer.feed(raw_line.rstrip("\r"))
    return lexer.finish()
