"""Node types produced by the hybrid document pipeline."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional, Union


# ---------------------------------------------------------------------------
# Inline spans
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Bold:
    text: str


@dataclass(frozen=True)
class Italic:
    text: str


@dataclass(frozen=True)
class Code:
    text: str


@dataclass(frozen=True)
class Highlight:
    text: str


@dataclass(frozen=True)
class Link:
    href: str
    text: str


Inline = Union[Text, Bold, Italic, Code, Highlight, Link]
InlineSeq = tuple[Inline, ...]


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class ListBlock:
    ordered: bool
    items: tuple[InlineSeq, ...]


@dataclass(frozen=True)
class Blockquote:
    inline: InlineSeq


@dataclass(frozen=True)
class CodeBlock:
    language: str
    text: str


@dataclass(frozen=True)
class Paragraph:
    inline: InlineSeq


# ---------------------------------------------------------------------------
# Component nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImageNode:
    src: str
    alt: str = ""
    align: str = "center"
    fullwidth: bool = False


@dataclass(frozen=True)
class CalloutNode:
    type: str
    content: InlineSeq


@dataclass(frozen=True)
class CardNode:
    title: str
    content: InlineSeq
    image: Optional[str] = None
    href: Optional[str] = None


@dataclass(frozen=True)
class CardGroupNode:
    cols: int
    cards: tuple[CardNode, ...]


@dataclass(frozen=True)
class AccordionNode:
    title: str
    content: tuple["Node", ...]


@dataclass(frozen=True)
class AccordionGroupNode:
    items: tuple[AccordionNode, ...]


@dataclass(frozen=True)
class TabItem:
    title: str
    content: tuple["Node", ...]


@dataclass(frozen=True)
class TabsNode:
    tabs: tuple[TabItem, ...]


@dataclass(frozen=True)
class ButtonColors:
    light: Optional[str] = None
    dark: Optional[str] = None


@dataclass(frozen=True)
class ButtonNode:
    label: str
    href: str = "#"
    new_tab: bool = False
    align: str = "left"
    colors: Optional[ButtonColors] = None


@dataclass(frozen=True)
class Step:
    title: str
    content: tuple["Node", ...]


@dataclass(frozen=True)
class StepsNode:
    steps: tuple[Step, ...]


@dataclass(frozen=True)
class YoutubeNode:
    video_id: str
    title: Optional[str] = None


@dataclass(frozen=True)
class InvalidEmbedNode:
    """Placeholder emitted for a video URL that no known host pattern matches."""

    url: str


Node = Union[
    Heading,
    ListBlock,
    Blockquote,
    CodeBlock,
    Paragraph,
    ImageNode,
    CalloutNode,
    CardNode,
    CardGroupNode,
    AccordionNode,
    AccordionGroupNode,
    TabsNode,
    ButtonNode,
    StepsNode,
    YoutubeNode,
    InvalidEmbedNode,
]


_TYPE_NAMES = {
    Text: "text",
    Bold: "bold",
    Italic: "italic",
    Code: "code",
    Highlight: "highlight",
    Link: "link",
    Heading: "heading",
    ListBlock: "list",
    Blockquote: "blockquote",
    CodeBlock: "code_block",
    Paragraph: "paragraph",
    ImageNode: "image",
    CalloutNode: "callout",
    CardNode: "card",
    CardGroupNode: "card_group",
    AccordionNode: "accordion",
    AccordionGroupNode: "accordion_group",
    TabItem: "tab_item",
    TabsNode: "tabs",
    ButtonColors: "button_colors",
    ButtonNode: "button",
    Step: "step",
    StepsNode: "steps",
    YoutubeNode: "youtube",
    InvalidEmbedNode: "invalid_embed",
}


def node_type(node: object) -> str:
    """Return the serialized type name of a node or inline span."""
    return _TYPE_NAMES[type(node)]


def node_to_dict(node: object) -> dict:
    """Convert a node (or inline span) into plain JSON-compatible data.

    Every dataclass becomes a dict with a ``"type"`` key; tuples become lists.
    """
    data: dict = {"type": node_type(node)}
    for f in fields(node):
        data[f.name] = _to_plain(getattr(node, f.name))
    return data


def nodes_to_list(nodes: tuple) -> list[dict]:
    return [node_to_dict(node) for node in nodes]


def inline_to_plain(inline: InlineSeq) -> str:
    """Flatten an inline sequence into its visible text."""
    return "".join(span.text for span in inline)


def _to_plain(value: object) -> object:
    if isinstance(value, tuple):
        return [_to_plain(item) for item in value]
    if type(value) in _TYPE_NAMES:
        return node_to_dict(value)
    return value
