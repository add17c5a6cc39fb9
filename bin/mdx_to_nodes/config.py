"""Parser configuration."""

import os
from dataclasses import dataclass, field
from typing import Optional


DEFAULT_TRACKED_TAGS = (
    "CardGroup",
    "Card",
    "Steps",
    "Callout",
    "Accordion",
    "AccordionGroup",
    "Tabs",
)

DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True)
class ParserConfig:
    """Knobs for section splitting and classification"""
    delimiter: str = "***"
    frontmatter_marker: str = "---"
    tracked_tags: tuple[str, ...] = field(default=DEFAULT_TRACKED_TAGS)
    # Prose lines allowed beside a single component before the section is mixed.
    # None = read DOCS_MIXED_PROSE_THRESHOLD, fallback 0.
    mixed_prose_threshold: Optional[int] = None
    # Container nesting levels parsed into nodes; deeper bodies stay literal text.
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self):
        if self.mixed_prose_threshold is None:
            raw = os.environ.get("DOCS_MIXED_PROSE_THRESHOLD", "0")
            try:
                threshold = int(raw)
            except ValueError:
                threshold = 0
        else:
            threshold = self.mixed_prose_threshold
        # frozen dataclass: bypass __setattr__
        object.__setattr__(self, "mixed_prose_threshold", max(0, threshold))
        object.__setattr__(self, "max_depth", max(0, self.max_depth))
