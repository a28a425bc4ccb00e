from __future__ import annotations

from typing import Iterator, Optional

from .tree import DocumentTree


class TreeCursor:
    """Depth-first, pre-order cursor with skip-subtree support.

    Moving on either enters the first child (unless the subtree is skipped),
    or the next sibling, or climbs until some ancestor has a next sibling.
    """

    def __init__(self, tree: DocumentTree, start: Optional[int] = None):
        self.tree = tree
        self.node: Optional[int] = tree.root if start is None else start

    def next_node(self, node: int, skip_children: bool = False) -> Optional[int]:
        tree = self.tree
        if not skip_children:
            child = tree.first_child(node)
            if child is not None:
                return child
        current: Optional[int] = node
        while current is not None:
            sibling = tree.next_sibling(current)
            if sibling is not None:
                return sibling
            current = tree.parent(current)
        return None

    def advance(self, skip_children: bool = False) -> Optional[int]:
        if self.node is not None:
            self.node = self.next_node(self.node, skip_children)
        return self.node

    def skip_from(self, node: int) -> Optional[int]:
        """Move past ``node`` and everything below it."""
        self.node = self.next_node(node, skip_children=True)
        return self.node

    def __iter__(self) -> Iterator[int]:
        while self.node is not None:
            yield self.node
            self.advance()
