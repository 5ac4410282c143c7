"""Rebuild a document tree from a flat stream of XML parse events."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from .internal.internal import StructuralError


class EventKind(str, Enum):
    """Kind of a parse event."""

    OPEN = "open"
    CLOSE = "close"
    TEXT = "text"


@dataclass(frozen=True)
class ParseEvent:
    """One event of a linear XML parse.

    ``level`` is the nesting depth of the element the event belongs to; the
    document element sits at level 1.
    """

    kind: EventKind
    tag: str
    level: int
    text: str | None = None
    attributes: Mapping[str, str] = field(default_factory=dict)


@dataclass
class Node:
    """A generic XML element.

    Children are grouped by tag, each group keeping document order. ``value``
    and ``children`` stay ``None`` when the element has no text or no child
    elements.
    """

    tag: str
    level: int
    value: str | None = None
    attributes: dict[str, str] | None = None
    children: dict[str, list[Node]] | None = None

    def add_child(self, child: Node) -> None:
        """Append a child under its tag."""
        if self.children is None:
            self.children = {}
        self.children.setdefault(child.tag, []).append(child)

    def get(self, tag: str) -> list[Node]:
        """Get the children carrying a tag (empty list if there are none)."""
        if self.children is None:
            return []
        return self.children.get(tag, [])

    def first(self, tag: str) -> Node | None:
        """Get the first child carrying a tag."""
        nodes = self.get(tag)
        return nodes[0] if nodes else None


def build_tree(events: Iterable[ParseEvent]) -> Node:
    """Build a tree from parse events in document order.

    The parent of an element opened at level L is the most recently opened
    element at level L - 1. ``close`` events carry no structural information
    and are ignored.

    Args:
        events: Parse events, in document order

    Returns:
        Synthetic document root (level 0) holding the document element

    Raises:
        StructuralError: If an event references a level with no open parent
    """
    root = Node(tag="", level=0)
    # last_at_level[i] is the most recent node opened at level i
    last_at_level: list[Node] = [root]

    for event in events:
        if event.kind == EventKind.CLOSE:
            continue

        level = event.level
        if level < 1:
            raise StructuralError(
                f"webdav: event {event.kind.value} <{event.tag}> has invalid level {level}"
            )

        if event.kind == EventKind.TEXT:
            if level >= len(last_at_level):
                raise StructuralError(
                    f"webdav: text for <{event.tag}> at level {level} has no open element"
                )
            last_at_level[level].value = event.text
            continue

        if level > len(last_at_level):
            raise StructuralError(
                f"webdav: <{event.tag}> at level {level} has no parent at level {level - 1}"
            )

        parent = last_at_level[level - 1]
        node = Node(tag=event.tag, level=level)
        if event.attributes:
            node.attributes = dict(event.attributes)
        parent.add_child(node)

        # Deeper entries belong to a finished subtree
        del last_at_level[level:]
        last_at_level.append(node)

    return root
