"""Hybrid Markdown/component document -> node tree conversion package."""

from .assembler import compile_document, compile_section, compile_sections, parse_document
from .block_lexer import lex_markdown
from .components import extract_component
from .config import ParserConfig
from .inline import convert_inline
from .interaction import InteractionState, iter_interactive
from .nodes import Node, node_to_dict, nodes_to_list
from .resolver import resolve_mixed
from .sections import Document, Section, classify_section, split_sections
from .slug_index import SlugIndex, load_navigation_yaml, path_to_slug

__all__ = [
    "Document",
    "InteractionState",
    "Node",
    "ParserConfig",
    "Section",
    "SlugIndex",
    "classify_section",
    "compile_document",
    "compile_section",
    "compile_sections",
    "convert_inline",
    "extract_component",
    "iter_interactive",
    "lex_markdown",
    "load_navigation_yaml",
    "node_to_dict",
    "nodes_to_list",
    "parse_document",
    "path_to_slug",
    "resolve_mixed",
    "split_sections",
]
