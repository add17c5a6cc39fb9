"""Flat tokenizer for hybrid Markdown/component documents.

The token stream has five kinds:

- ``text``: a run of prose (tags inside code spans and fenced code blocks
  stay prose)
- ``tag_open``: ``<Name attr="v">`` or self-closing ``<Name ... />``
- ``tag_close``: ``</Name>``
- ``delimiter``: a line holding only the section delimiter
- ``embed_url``: a line holding only a YouTube URL

Every offset is into the tokenized text, and the tokens tile it exactly:
``"".join(t.raw for t in tokens) == text``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import re
from typing import Collection, Optional


TEXT = "text"
TAG_OPEN = "tag_open"
TAG_CLOSE = "tag_close"
DELIMITER = "delimiter"
EMBED_URL = "embed_url"

_FENCE = r"(?P<fence>^[ \t]*```[^\n]*(?:\n(?:.*?\n)?[ \t]*```[^\n]*$|.*\Z))"
_CODE_SPAN = r"(?P<code>`[^`\n]+`)"
_EMBED = (
    r"(?P<embed>^[ \t]*(?P<url>https?://(?:www\.|m\.)?"
    r"(?:youtube\.com|youtu\.be|youtube-nocookie\.com)/\S*)[ \t]*$)"
)
_TAG = (
    r"(?P<tag><(?P<slash>/)?(?P<name>[A-Z][A-Za-z0-9]*)"
    r"(?P<attrs>(?:\"[^\"]*\"|'[^']*'|\{[^{}]*\}|[^<>\"'{}])*?)"
    r"(?P<self>/)?>)"
)
_TAG_PATTERN = re.compile(_TAG)
_TAG_ONLY_LINE_PATTERN = re.compile(
    r"^(?:\s*<(?:/)?[A-Z][A-Za-z0-9]*(?:\"[^\"]*\"|'[^']*'|\{[^{}]*\}|[^<>\"'{}])*?/?>)+\s*$"
)


@dataclass(frozen=True)
class Token:
    """Single lexical unit of a document."""

    kind: str
    start: int
    end: int
    raw: str
    name: str = ""
    attrs: str = ""
    self_closing: bool = False

    def is_open(self, name: str | None = None) -> bool:
        return self.kind == TAG_OPEN and (name is None or self.name == name)

    def is_close(self, name: str | None = None) -> bool:
        return self.kind == TAG_CLOSE and (name is None or self.name == name)


@lru_cache(maxsize=16)
def _master_pattern(delimiter: str) -> re.Pattern[str]:
    delim = rf"(?P<delim>^[ \t]*{re.escape(delimiter)}[ \t]*$)"
    return re.compile(
        "|".join((_FENCE, delim, _EMBED, _CODE_SPAN, _TAG)), flags=re.MULTILINE | re.DOTALL
    )


def tokenize(text: str, delimiter: str = "***") -> list[Token]:
    """Split text into a flat token stream."""
    tokens: list[Token] = []
    cursor = 0

    for match in _master_pattern(delimiter).finditer(text):
        start, end = match.span()
        if start == end:
            continue
        if match.group("fence") is not None or match.group("code") is not None:
            # code is prose; merged into the surrounding text run below
            continue
        if start > cursor:
            tokens.append(Token(TEXT, cursor, start, text[cursor:start]))

        if match.group("delim") is not None:
            tokens.append(Token(DELIMITER, start, end, match.group(0)))
        elif match.group("embed") is not None:
            tokens.append(
                Token(EMBED_URL, start, end, match.group(0), name="Youtube", attrs=match.group("url"))
            )
        elif match.group("slash"):
            tokens.append(Token(TAG_CLOSE, start, end, match.group(0), name=match.group("name")))
        else:
            tokens.append(
                Token(
                    TAG_OPEN,
                    start,
                    end,
                    match.group(0),
                    name=match.group("name"),
                    attrs=match.group("attrs").strip(),
                    self_closing=bool(match.group("self")),
                )
            )
        cursor = end

    if cursor < len(text):
        tokens.append(Token(TEXT, cursor, len(text), text[cursor:]))
    return tokens


def is_markup_line(line: str, delimiter: str = "***", names: Optional[Collection[str]] = None) -> bool:
    """True when a line holds nothing but tags or the delimiter.

    With ``names``, every tag on the line must be one of them.
    """
    stripped = line.strip()
    if not stripped:
        return False
    if stripped == delimiter:
        return True
    if not _TAG_ONLY_LINE_PATTERN.match(stripped):
        return False
    if names is None:
        return True
    return all(match.group("name") in names for match in _TAG_PATTERN.finditer(stripped))
