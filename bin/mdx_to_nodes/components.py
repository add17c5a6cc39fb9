"""Component extractors: one pure function per component tag."""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from .config import DEFAULT_MAX_DEPTH
from .inline import convert_inline
from .nodes import (
    AccordionGroupNode,
    AccordionNode,
    ButtonColors,
    ButtonNode,
    CalloutNode,
    CardGroupNode,
    CardNode,
    ImageNode,
    InvalidEmbedNode,
    Node,
    Paragraph,
    Step,
    StepsNode,
    TabItem,
    TabsNode,
    Text,
    YoutubeNode,
)
from .parser import Occurrence, find_occurrences

logger = logging.getLogger(__name__)


CALLOUT_TYPES = ("info", "warning", "error", "success", "tip", "alert")
DEFAULT_CALLOUT_TYPE = "info"
DEFAULT_CARD_COLS = 2
MIN_CARD_COLS = 1
MAX_CARD_COLS = 4

_YOUTUBE_ID_PATTERN = re.compile(
    r"(?:youtube(?:-nocookie)?\.com/(?:watch\?(?:[^#\s]*&)?v=|embed/|shorts/|live/|v/)"
    r"|youtu\.be/)"
    r"([^&\s?#/]+)"
)


def extract_image(occurrence: Occurrence) -> Optional[ImageNode]:
    attrs = occurrence.attrs
    src = attrs.get_str("src").strip()
    if not src:
        logger.debug("Dropping <Image> without src at offset %d", occurrence.start)
        return None
    return ImageNode(
        src=src,
        alt=attrs.get_str("alt"),
        align=attrs.get_str("align").strip() or "center",
        fullwidth=attrs.get_bool("fullwidth"),
    )


def extract_callout(occurrence: Occurrence) -> CalloutNode:
    raw_type = occurrence.attrs.get_str("type").strip().lower()
    if raw_type not in CALLOUT_TYPES:
        if raw_type:
            logger.debug("Unknown callout type %r; using %r", raw_type, DEFAULT_CALLOUT_TYPE)
        raw_type = DEFAULT_CALLOUT_TYPE
    return CalloutNode(type=raw_type, content=convert_inline(occurrence.inner.strip()))


def extract_card(occurrence: Occurrence) -> CardNode:
    attrs = occurrence.attrs
    return CardNode(
        title=attrs.get_str("title"),
        content=convert_inline(occurrence.inner.strip()),
        image=attrs.get_optional("image"),
        href=attrs.get_optional("href"),
    )


def extract_card_group(occurrence: Occurrence) -> CardGroupNode:
    cols = occurrence.attrs.get_int("cols", DEFAULT_CARD_COLS)
    clamped = max(MIN_CARD_COLS, min(MAX_CARD_COLS, cols))
    if clamped != cols:
        logger.debug("CardGroup cols=%d clamped to %d", cols, clamped)
    cards = tuple(extract_card(child) for child in occurrence.children if child.tag == "Card")
    return CardGroupNode(cols=clamped, cards=cards)


def extract_accordion(
    occurrence: Occurrence, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH
) -> AccordionNode:
    return AccordionNode(
        title=occurrence.attrs.get_str("title"),
        content=_parse_nested(occurrence.inner, depth, max_depth),
    )


def extract_accordion_group(
    occurrence: Occurrence, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH
) -> AccordionGroupNode:
    items = tuple(
        extract_accordion(child, depth, max_depth) for child in occurrence.children if child.tag == "Accordion"
    )
    return AccordionGroupNode(items=items)


def extract_tabs(occurrence: Occurrence, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH) -> TabsNode:
    tabs = tuple(
        TabItem(title=child.attrs.get_str("title"), content=_parse_nested(child.inner, depth, max_depth))
        for child in occurrence.children
        if child.tag == "TabItem"
    )
    return TabsNode(tabs=tabs)


def extract_button(occurrence: Occurrence) -> ButtonNode:
    attrs = occurrence.attrs
    label = attrs.get_str("label") or occurrence.inner.strip()
    new_tab_key = "newTab" if "newTab" in attrs else "openLinkInNewTab"

    colors = None
    light = attrs.get_optional("lightColor")
    dark = attrs.get_optional("darkColor")
    if light or dark:
        colors = ButtonColors(light=light, dark=dark)

    return ButtonNode(
        label=label,
        href=attrs.get_optional("href", "linkHref") or "#",
        new_tab=attrs.get_bool(new_tab_key),
        align=attrs.get_str("align").strip() or "left",
        colors=colors,
    )


def extract_steps(occurrence: Occurrence, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH) -> StepsNode:
    steps = tuple(
        Step(title=child.attrs.get_str("title"), content=_parse_nested(child.inner, depth, max_depth))
        for child in occurrence.children
        if child.tag == "Step"
    )
    return StepsNode(steps=steps)


def extract_youtube(occurrence: Occurrence) -> Node:
    attrs = occurrence.attrs
    url = (attrs.get_optional("url", "src") or "").strip()
    video_id = extract_video_id(url)
    if video_id is None:
        logger.warning("Unrecognized video URL %r", url)
        return InvalidEmbedNode(url=url)
    return YoutubeNode(video_id=video_id, title=attrs.get_optional("title"))


def extract_video_id(url: str) -> Optional[str]:
    """Return the YouTube video id of a long, short, embed or shorts URL."""
    match = _YOUTUBE_ID_PATTERN.search(url or "")
    if not match:
        return None
    return match.group(1)


EXTRACTORS: dict[str, Callable[..., Optional[Node]]] = {
    "image": extract_image,
    "callout": extract_callout,
    "card": extract_card,
    "cardgroup": extract_card_group,
    "accordion": extract_accordion,
    "accordiongroup": extract_accordion_group,
    "tabs": extract_tabs,
    "button": extract_button,
    "steps": extract_steps,
    "youtube": extract_youtube,
}
# Extractors whose bodies hold further nodes and take the nesting depth.
_NESTING_KINDS = frozenset(("accordion", "accordiongroup", "tabs", "steps"))


def extract_nodes(
    occurrence: Occurrence, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[Node]:
    """Extract the node for one occurrence; empty when the component is dropped.

    ``depth`` is the nesting level of the occurrence. Container bodies at
    ``max_depth`` are kept as one literal paragraph instead of being parsed.
    """
    extractor = EXTRACTORS.get(occurrence.kind)
    if extractor is None:
        return []
    if occurrence.kind in _NESTING_KINDS:
        node = extractor(occurrence, depth, max_depth)
    else:
        node = extractor(occurrence)
    return [node] if node is not None else []


def extract_component(text: str) -> list[Node]:
    """Extract the first top-level component found in a tag slice."""
    occurrences = find_occurrences(text)
    if not occurrences:
        return []
    return extract_nodes(occurrences[0])


def _parse_nested(inner: str, depth: int, max_depth: int) -> tuple[Node, ...]:
    body = inner.strip()
    if depth >= max_depth:
        if not body:
            return ()
        logger.warning("Components nested deeper than %d levels; keeping the body as text", max_depth)
        return (Paragraph(inline=(Text(body),)),)
    from .resolver import resolve_content
    return tuple(resolve_content(body, depth + 1, max_depth))
