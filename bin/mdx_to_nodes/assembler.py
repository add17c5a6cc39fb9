"""Document assembly: split, classify and resolve every section into nodes."""

from __future__ import annotations

import logging
from typing import Optional

from .block_lexer import lex_markdown
from .components import extract_nodes
from .config import ParserConfig
from .nodes import Node
from .parser import find_occurrences
from .resolver import resolve_mixed
from .sections import FRONTMATTER, MARKDOWN, MIXED, Document, Section, split_document
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def parse_document(text: Optional[str], config: Optional[ParserConfig] = None) -> Document:
    """Split ``text`` into classified sections. ``None`` is empty text."""
    return split_document(text or "", config)


def compile_section(section: Section, config: Optional[ParserConfig] = None) -> list[Node]:
    """Resolve one section into nodes according to its kind."""
    if config is None:
        config = ParserConfig()

    if section.kind == FRONTMATTER:
        return []
    if section.kind == MARKDOWN:
        return lex_markdown(section.raw_text)
    if section.kind == MIXED:
        return resolve_mixed(section.raw_text, config.delimiter, max_depth=config.max_depth)

    # single component kind: every occurrence of it, prose at or below threshold dropped
    nodes: list[Node] = []
    occurrences = find_occurrences(section.raw_text, tokenize(section.raw_text, config.delimiter))
    for occurrence in occurrences:
        if occurrence.kind == section.kind:
            nodes.extend(extract_nodes(occurrence, max_depth=config.max_depth))
    return nodes


def compile_sections(document: Document, config: Optional[ParserConfig] = None) -> tuple[Node, ...]:
    if config is None:
        config = ParserConfig()

    nodes: list[Node] = []
    for section in document.sections:
        section_nodes = compile_section(section, config)
        logger.debug(
            "Section %d (%s): %d node(s)", section.source_index, section.kind, len(section_nodes)
        )
        nodes.extend(section_nodes)
    return tuple(nodes)


def compile_document(text: Optional[str], config: Optional[ParserConfig] = None) -> tuple[Node, ...]:
    """Compile a hybrid document into its ordered node sequence.

    Section boundaries are not kept in the result. The function is total:
    malformed markup degrades to text or defaults, it never raises.
    """
    if config is None:
        config = ParserConfig()
    return compile_sections(parse_document(text, config), config)
