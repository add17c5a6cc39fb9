"""Section splitting and classification for hybrid documents."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Any, Optional

import yaml

from .config import DEFAULT_TRACKED_TAGS, ParserConfig
from .parser import KNOWN_TAGS, find_occurrences, iter_prose
from .tokenizer import DELIMITER, is_markup_line, tokenize

logger = logging.getLogger(__name__)


FRONTMATTER = "frontmatter"
MARKDOWN = "markdown"
MIXED = "mixed"

_TITLE_KEY_PATTERN = re.compile(r"^\s*title\s*:", flags=re.MULTILINE)


@dataclass(frozen=True)
class Section:
    """Top-level slice of a document, labeled with its kind."""

    kind: str
    raw_text: str
    source_index: int


@dataclass(frozen=True)
class Document:
    """Ordered, immutable sequence of sections."""

    sections: tuple[Section, ...]
    frontmatter_marker: str = "---"

    @property
    def frontmatter(self) -> dict[str, Any]:
        for section in self.sections:
            if section.kind == FRONTMATTER:
                return parse_frontmatter(section.raw_text, self.frontmatter_marker)
        return {}

    @property
    def title(self) -> str:
        value = self.frontmatter.get("title")
        return "" if value is None else str(value)


def split_sections(
    text: str,
    delimiter: str = "***",
    tracked_tags: tuple[str, ...] = DEFAULT_TRACKED_TAGS,
) -> list[str]:
    """Split text on delimiter lines that are not inside a tracked tag.

    Depth is tracked per tag name: while inside ``<Steps>``, only further
    ``<Steps>``/``</Steps>`` change the depth. If the text ends inside a tag,
    the remaining buffer still becomes the last section.
    """
    if not text:
        return []

    tracked = set(tracked_tags)
    raw_sections: list[str] = []
    buffer_start = 0
    inside: Optional[str] = None
    depth = 0

    for token in tokenize(text, delimiter):
        if inside is None:
            if token.kind == DELIMITER:
                raw_sections.append(text[buffer_start:token.start])
                buffer_start = token.end
            elif token.is_open() and not token.self_closing and token.name in tracked:
                inside = token.name
                depth = 1
            continue

        if token.is_open(inside) and not token.self_closing:
            depth += 1
        elif token.is_close(inside):
            depth -= 1
            if depth == 0:
                inside = None

    if inside is not None:
        logger.warning("Document ends inside <%s>; keeping the rest as one section", inside)
    raw_sections.append(text[buffer_start:])

    return [section.strip() for section in raw_sections if section.strip()]


def classify_section(raw_text: str, config: Optional[ParserConfig] = None) -> str:
    """Label a section: frontmatter, a single component kind, markdown or mixed."""
    if config is None:
        config = ParserConfig()

    text = raw_text.strip()
    if text.startswith(config.frontmatter_marker) and _TITLE_KEY_PATTERN.search(text):
        return FRONTMATTER

    occurrences = find_occurrences(text, tokenize(text, config.delimiter))
    kinds = {occurrence.kind for occurrence in occurrences}
    if not kinds:
        return MARKDOWN

    prose_lines = count_prose_lines(text, occurrences, config.delimiter)
    if len(kinds) > 1 or prose_lines > config.mixed_prose_threshold:
        return MIXED
    return kinds.pop()


def count_prose_lines(text: str, occurrences: list, delimiter: str = "***") -> int:
    """Count non-empty lines outside components that are not bare known markup.

    A line holding only an unknown tag such as ``<Badge />`` is prose.
    """
    count = 0
    for chunk in iter_prose(text, occurrences):
        for line in chunk.split("\n"):
            if line.strip() and not is_markup_line(line, delimiter, KNOWN_TAGS):
                count += 1
    return count


def split_document(text: Optional[str], config: Optional[ParserConfig] = None) -> Document:
    """Split and classify a whole document."""
    if config is None:
        config = ParserConfig()

    frontmatter, body = _split_leading_frontmatter(text or "", config.frontmatter_marker)
    raw_sections = split_sections(body, config.delimiter, config.tracked_tags)
    if frontmatter:
        raw_sections.insert(0, frontmatter)
    sections = tuple(
        Section(kind=classify_section(raw, config), raw_text=raw, source_index=index)
        for index, raw in enumerate(raw_sections)
    )
    return Document(sections=sections, frontmatter_marker=config.frontmatter_marker)


def _split_leading_frontmatter(text: str, marker: str) -> tuple[str, str]:
    """Cut a closed, titled frontmatter block off the start of ``text``.

    The body after it does not need a delimiter line to start a new section.
    """
    m = re.escape(marker)
    match = re.match(rf"\s*{m}[ \t]*\n(?:.*?\n)?{m}[ \t]*(?:\n|\Z)", text, flags=re.DOTALL)
    if not match or not _TITLE_KEY_PATTERN.search(match.group(0)):
        return "", text
    return match.group(0).strip(), text[match.end():]


def parse_frontmatter(raw_text: str, marker: str = "---") -> dict[str, Any]:
    """Parse the YAML mapping between frontmatter markers; ``{}`` if unusable."""
    lines = raw_text.strip().split("\n")
    if not lines or lines[0].strip() != marker:
        return {}

    body: list[str] = []
    for line in lines[1:]:
        if line.strip() == marker:
            break
        body.append(line)

    try:
        loaded: Any = yaml.safe_load("\n".join(body))
    except yaml.YAMLError as e:
        logger.warning(f"Invalid frontmatter YAML: {e}")
        return {}
    if not isinstance(loaded, dict):
        return {}
    return loaded
