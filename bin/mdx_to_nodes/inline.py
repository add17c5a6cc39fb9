"""Inline Markdown -> inline span conversion."""

from __future__ import annotations

import re
from typing import Callable, Optional, Union

from .nodes import Bold, Code, Highlight, Inline, InlineSeq, Italic, Link, Text

_CODE_SPAN_RE = re.compile(r"`([^`]+)`")
_BOLD_RE = re.compile(r"\*\*(?!\s)(.+?)(?<!\s)\*\*")
_ITALIC_RE = re.compile(r"(?<!\*)\*(?![\s*])(.+?)(?<![\s*])\*(?!\*)")
_HIGHLIGHT_RE = re.compile(r"==(?![\s=])(.+?)(?<![\s=])==|<mark>(.*?)</mark>", flags=re.IGNORECASE)
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")
_SAFE_SCHEMES = frozenset(("http", "https", "mailto", "tel"))

_Segment = Union[str, Inline]


def convert_inline(text: str) -> InlineSeq:
    """Convert one run of inline Markdown into inline spans.

    Supported syntax, applied in this order:
    - `code`
    - **bold**
    - *italic*
    - ==highlight== and <mark>highlight</mark>
    - [text](url)

    Each stage only splits the plain text left over by the previous stages,
    so a span produced earlier is never reinterpreted.
    """
    if not text:
        return ()

    segments: list[_Segment] = [text]
    segments = _apply(segments, _CODE_SPAN_RE, lambda m: Code(m.group(1)))
    segments = _apply(segments, _BOLD_RE, lambda m: Bold(m.group(1)))
    segments = _apply(segments, _ITALIC_RE, lambda m: Italic(m.group(1)))
    segments = _apply(segments, _HIGHLIGHT_RE, _make_highlight)
    segments = _apply(segments, _LINK_RE, _make_link)
    return _merge_text(segments)


def is_safe_url(url: str) -> bool:
    """Reject script-capable schemes; relative targets are always allowed."""
    raw = url.strip()
    if not raw:
        return False
    scheme = _SCHEME_RE.match(raw)
    if scheme is None:
        return True
    return scheme.group(1).lower() in _SAFE_SCHEMES


def _apply(
    segments: list[_Segment],
    pattern: re.Pattern[str],
    make: Callable[[re.Match[str]], Optional[Inline]],
) -> list[_Segment]:
    result: list[_Segment] = []
    for segment in segments:
        if not isinstance(segment, str):
            result.append(segment)
            continue

        pos = 0
        for match in pattern.finditer(segment):
            span = make(match)
            if span is None:
                continue
            if match.start() > pos:
                result.append(segment[pos:match.start()])
            result.append(span)
            pos = match.end()
        if pos < len(segment):
            result.append(segment[pos:])
    return result


def _make_highlight(match: re.Match[str]) -> Optional[Inline]:
    body = match.group(1) if match.group(1) is not None else match.group(2)
    if not body or not body.strip():
        return None
    return Highlight(body)


def _make_link(match: re.Match[str]) -> Optional[Inline]:
    link_text = match.group(1).strip()
    href = match.group(2).strip()
    if not link_text or not is_safe_url(href):
        return None
    return Link(href=href, text=link_text)


def _merge_text(segments: list[_Segment]) -> InlineSeq:
    merged: list[Inline] = []
    for segment in segments:
        if isinstance(segment, str):
            if not segment:
                continue
            if merged and isinstance(merged[-1], Text):
                merged[-1] = Text(merged[-1].text + segment)
            else:
                merged.append(Text(segment))
            continue
        merged.append(segment)
    return tuple(merged)
