"""Recursive-descent parser locating component occurrences in a token stream."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional

from .attributes import Attributes, scan_attributes
from .tokenizer import EMBED_URL, TAG_CLOSE, TAG_OPEN, TEXT, Token, tokenize

logger = logging.getLogger(__name__)


# Tag name -> section/component kind, for tags that may appear at top level.
TOP_LEVEL_TAGS = {
    "Image": "image",
    "Callout": "callout",
    "Card": "card",
    "CardGroup": "cardgroup",
    "Accordion": "accordion",
    "AccordionGroup": "accordiongroup",
    "Tabs": "tabs",
    "Button": "button",
    "Steps": "steps",
    "Youtube": "youtube",
}
# Container tag -> the only tag scanned as its immediate children.
CHILD_TAGS = {
    "CardGroup": "Card",
    "AccordionGroup": "Accordion",
    "Tabs": "TabItem",
    "Steps": "Step",
}
# Tags whose opening tag is the whole element.
VOID_TAGS = frozenset(("Image", "Button", "Youtube"))
# Every tag name the parser understands; anything else stays literal text.
KNOWN_TAGS = frozenset(TOP_LEVEL_TAGS) | frozenset(CHILD_TAGS.values())


@dataclass(frozen=True)
class Occurrence:
    """One matched component span in the source text."""

    tag: str
    start: int
    end: int
    attrs: Attributes
    inner: str = ""
    children: tuple["Occurrence", ...] = field(default_factory=tuple)
    terminated: bool = True

    @property
    def kind(self) -> str:
        return TOP_LEVEL_TAGS.get(self.tag, self.tag.lower())


def find_occurrences(text: str, tokens: Optional[list[Token]] = None) -> list[Occurrence]:
    """Return the top-level component occurrences of ``text`` in source order.

    A component nested inside another matched component (a Card inside a
    CardGroup, a Callout inside a Tab) is consumed by its parent and never
    appears at this level.
    """
    if tokens is None:
        tokens = tokenize(text)
    return _parse_sequence(tokens, 0, len(tokens), text, set(TOP_LEVEL_TAGS), len(text))


def iter_prose(text: str, occurrences: list[Occurrence]):
    """Yield the slices of ``text`` lying between occurrences, in order."""
    cursor = 0
    for occurrence in occurrences:
        yield text[cursor:occurrence.start]
        cursor = occurrence.end
    yield text[cursor:]


def _parse_sequence(
    tokens: list[Token],
    lo: int,
    hi: int,
    text: str,
    names: set[str],
    limit: int,
) -> list[Occurrence]:
    occurrences: list[Occurrence] = []
    i = lo
    while i < hi:
        token = tokens[i]

        if token.kind == EMBED_URL and "Youtube" in names:
            occurrences.append(
                Occurrence(
                    tag="Youtube",
                    start=token.start,
                    end=token.end,
                    attrs=Attributes({"url": token.attrs}),
                )
            )
            i += 1
            continue

        if token.kind == TAG_OPEN and token.name in names:
            occurrence, i = _parse_element(tokens, i, hi, text, limit)
            occurrences.append(occurrence)
            continue

        if token.kind == TAG_CLOSE and token.name in names:
            logger.debug("Stray closing tag </%s> at offset %d kept as text", token.name, token.start)
        elif token.kind == TAG_OPEN and token.name not in KNOWN_TAGS:
            logger.debug("Unknown component <%s> at offset %d kept as text", token.name, token.start)
        i += 1

    return occurrences


def _parse_element(
    tokens: list[Token],
    index: int,
    hi: int,
    text: str,
    limit: int,
) -> tuple[Occurrence, int]:
    opening = tokens[index]
    attrs = scan_attributes(opening.attrs)

    if opening.self_closing:
        return Occurrence(tag=opening.name, start=opening.start, end=opening.end, attrs=attrs), index + 1

    if opening.name in VOID_TAGS:
        # <Button ...>Label</Button> is accepted when only text sits between the tags
        close_index = _skip_text(tokens, index + 1, hi)
        if close_index < hi and tokens[close_index].is_close(opening.name):
            occurrence = Occurrence(
                tag=opening.name,
                start=opening.start,
                end=tokens[close_index].end,
                attrs=attrs,
                inner=text[opening.end:tokens[close_index].start],
            )
            return occurrence, close_index + 1
        return Occurrence(tag=opening.name, start=opening.start, end=opening.end, attrs=attrs), index + 1

    close_index = _find_matching_close(tokens, index, hi)
    if close_index is None:
        logger.warning(
            "Unterminated <%s> at offset %d; treating the rest of the text as its content",
            opening.name,
            opening.start,
        )
        inner_end = limit
        end = limit
        next_index = hi
        terminated = False
    else:
        inner_end = tokens[close_index].start
        end = tokens[close_index].end
        next_index = close_index + 1
        terminated = True

    children: tuple[Occurrence, ...] = ()
    child_tag = CHILD_TAGS.get(opening.name)
    if child_tag:
        children = tuple(
            _parse_sequence(tokens, index + 1, close_index if close_index is not None else hi, text, {child_tag}, inner_end)
        )

    occurrence = Occurrence(
        tag=opening.name,
        start=opening.start,
        end=end,
        attrs=attrs,
        inner=text[opening.end:inner_end],
        children=children,
        terminated=terminated,
    )
    return occurrence, next_index


def _find_matching_close(tokens: list[Token], index: int, hi: int) -> Optional[int]:
    name = tokens[index].name
    depth = 1
    for j in range(index + 1, hi):
        token = tokens[j]
        if token.is_open(name) and not token.self_closing:
            depth += 1
        elif token.is_close(name):
            depth -= 1
            if depth == 0:
                return j
    return None


def _skip_text(tokens: list[Token], index: int, hi: int) -> int:
    while index < hi and tokens[index].kind == TEXT:
        index += 1
    return index
