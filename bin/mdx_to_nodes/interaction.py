"""Per-view interaction state for accordions, tabs and steps.

Node trees are immutable and shared; which panel is open or which tab is
active belongs to one rendered view, so it lives here and is passed to the
renderer next to the nodes.
"""

from __future__ import annotations

from typing import Iterator, Optional

from .nodes import AccordionGroupNode, AccordionNode, Node, StepsNode, TabsNode


_INTERACTIVE_TYPES = (AccordionNode, TabsNode, StepsNode)


class InteractionState:
    def __init__(self) -> None:
        self._open: set[str] = set()
        self._active_tabs: dict[str, int] = {}

    def is_open(self, key: str) -> bool:
        return key in self._open

    def open(self, key: str) -> None:
        self._open.add(key)

    def close(self, key: str) -> None:
        self._open.discard(key)

    def toggle(self, key: str) -> bool:
        """Flip a panel and return whether it is now open."""
        if key in self._open:
            self._open.discard(key)
            return False
        self._open.add(key)
        return True

    def active_tab(self, key: str, tab_count: Optional[int] = None) -> int:
        """Selected tab index; the first tab until another is selected."""
        index = self._active_tabs.get(key, 0)
        if tab_count is not None and not 0 <= index < tab_count:
            return 0
        return index

    def select_tab(self, key: str, index: int) -> None:
        if index < 0:
            raise ValueError(f"tab index must be >= 0, got {index}")
        self._active_tabs[key] = index

    def reset(self) -> None:
        self._open.clear()
        self._active_tabs.clear()


def iter_interactive(nodes: tuple[Node, ...], prefix: str = "") -> Iterator[tuple[str, Node]]:
    """Yield ``(key, node)`` for every accordion, tabs and steps node.

    Keys are dotted positions (``"2"``, ``"2.0.1"``) and stay stable for a
    given node tree, so they can be used as :class:`InteractionState` keys.
    """
    for index, node in enumerate(nodes):
        key = f"{prefix}{index}"
        if isinstance(node, AccordionGroupNode):
            yield from iter_interactive(node.items, f"{key}.")
            continue
        if isinstance(node, _INTERACTIVE_TYPES):
            yield key, node
        if isinstance(node, AccordionNode):
            yield from iter_interactive(node.content, f"{key}.")
        elif isinstance(node, TabsNode):
            for tab_index, tab in enumerate(node.tabs):
                yield from iter_interactive(tab.content, f"{key}.{tab_index}.")
        elif isinstance(node, StepsNode):
            for step_index, step in enumerate(node.steps):
                yield from iter_interactive(step.content, f"{key}.{step_index}.")
