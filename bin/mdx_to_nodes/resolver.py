"""Mixed-content resolution: interleave prose blocks with component nodes."""

from __future__ import annotations

from .block_lexer import lex_markdown
from .components import extract_nodes
from .config import DEFAULT_MAX_DEPTH
from .nodes import Node
from .parser import find_occurrences
from .tokenizer import tokenize


def resolve_mixed(
    text: str, delimiter: str = "***", depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[Node]:
    """Resolve text holding prose and any number of components.

    Components come out in source order; the prose before, between and after
    them goes through the block lexer. Blank prose yields nothing. ``depth``
    is the nesting level of ``text`` inside enclosing containers.
    """
    if not text:
        return []

    occurrences = find_occurrences(text, tokenize(text, delimiter))
    nodes: list[Node] = []
    cursor = 0
    for occurrence in occurrences:
        _lex_prose(text[cursor:occurrence.start], nodes)
        nodes.extend(extract_nodes(occurrence, depth, max_depth))
        cursor = occurrence.end
    _lex_prose(text[cursor:], nodes)
    return nodes


def resolve_content(text: str, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Node]:
    """Parse the body of a container component (tab, step, accordion)."""
    return resolve_mixed(text, depth=depth, max_depth=max_depth)


def _lex_prose(chunk: str, nodes: list[Node]) -> None:
    if chunk.strip():
        nodes.extend(lex_markdown(chunk))
