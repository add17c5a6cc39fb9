#!/usr/bin/env python3
"""
Text Utility Functions

Text helpers shared by the document pipeline, the slug index and the CLI.
"""

import re
import unicodedata
from typing import Optional


# Hidden characters for text cleaning
HIDDEN_CHARACTERS = {
    '\u00A0': ' ',  # Non-Breaking Space
    '\u202f': ' ',  # Narrow No-Break Space
    '\u200b': '',   # Zero Width Space
    '\u200e': '',   # Left-to-Right Mark
    '\ufeff': '',   # Byte Order Mark
}

_VERSION_PATTERN = re.compile(r'^\d+\.\d+\.\d+(\s*[~\-]\s*\d+\.\d+\.\d+)?$')
_MARKDOWN_EXTENSIONS = ('.mdx', '.md')


def clean_text(text: Optional[str]) -> Optional[str]:
    """
    Clean text by removing hidden characters.

    Args:
        text: The text to clean

    Returns:
        NFC-normalized text with hidden characters removed/replaced, or None if input is None
    """
    if text is None:
        return None

    cleaned_text = unicodedata.normalize('NFC', text)
    for hidden_char, replacement in HIDDEN_CHARACTERS.items():
        cleaned_text = cleaned_text.replace(hidden_char, replacement)
    return cleaned_text


def slugify(text: str) -> str:
    """
    Convert one path segment or title to a URL-friendly slug.

    Version numbers keep their dots:
    - "11.5.0" → "11.5.0"
    - "11.1.0 ~ 11.1.2" → "11.1.0-11.1.2"

    Underscores become hyphens; other characters outside [a-z0-9-] are dropped.
    """
    text = (clean_text(text) or '').strip()

    if _VERSION_PATTERN.match(text):
        return re.sub(r'\s*[~\-]\s*', '-', text)

    text = text.lower()
    text = re.sub(r'[\s_]+', '-', text)
    text = re.sub(r'[^a-z0-9-]', '', text)
    text = re.sub(r'-+', '-', text)
    return text.strip('-')


def strip_markdown_extension(path: str) -> str:
    """Drop a trailing .md/.mdx extension, if any."""
    for extension in _MARKDOWN_EXTENSIONS:
        if path.lower().endswith(extension):
            return path[:-len(extension)]
    return path


def is_markdown_path(path: str) -> bool:
    return path.lower().endswith(_MARKDOWN_EXTENSIONS)


def first_line(text: str, limit: int = 60) -> str:
    """First non-blank line, collapsed and cut to ``limit`` characters."""
    for line in text.split('\n'):
        collapsed = collapse_ws(line)
        if collapsed:
            if len(collapsed) > limit:
                return collapsed[:limit - 3] + '...'
            return collapsed
    return ''


def collapse_ws(text: str) -> str:
    """Collapse runs of whitespace to a single space."""
    return ' '.join(text.split())
