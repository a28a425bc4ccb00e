from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from lxml import html


class DocumentTree:
    """Read-only, index-addressed view over an lxml element tree.

    One pre-order walk assigns every element a dense integer index (the root
    is 0). Structure lives in parallel lists, so per-pass state such as scores
    can be kept in plain lists keyed by the same index. Because indices follow
    pre-order, the subtree of node ``i`` is exactly ``range(i, end(i))``.
    """

    def __init__(self, root: html.HtmlElement, title: Optional[str] = None):
        self._elements: List[html.HtmlElement] = []
        self._tags: List[str] = []
        self._parents: List[Optional[int]] = []
        self._children: List[Tuple[int, ...]] = []
        self._positions: List[int] = []
        self._ends: List[int] = []
        self._texts: List[Optional[str]] = []
        self._index: Dict[html.HtmlElement, int] = {}
        self._build(root)
        self.root = 0
        self.body = self._find_body()
        self.title = _normalize(title) if title is not None else self._find_title()

    def _build(self, root: html.HtmlElement) -> None:
        children: List[List[int]] = []
        # (element, parent index, position among element siblings)
        stack: List[Tuple[html.HtmlElement, Optional[int], int]] = [(root, None, 0)]
        pending_ends: List[int] = []
        while stack:
            el, parent, position = stack.pop()
            if el is None:
                # marker: close the subtree opened at pending_ends[-1]
                self._ends[pending_ends.pop()] = len(self._elements)
                continue
            i = len(self._elements)
            self._elements.append(el)
            self._tags.append(el.tag.lower())
            self._parents.append(parent)
            self._positions.append(position)
            self._ends.append(i + 1)
            self._texts.append(None)
            self._index[el] = i
            children.append([])
            if parent is not None:
                children[parent].append(i)
            kids = [k for k in el if isinstance(k.tag, str)]
            pending_ends.append(i)
            stack.append((None, None, 0))
            for pos in range(len(kids) - 1, -1, -1):
                stack.append((kids[pos], i, pos))
        self._children = [tuple(c) for c in children]

    def _find_body(self) -> Optional[int]:
        for child in self._children[self.root]:
            if self._tags[child] == "body":
                return child
        return None

    def _find_title(self) -> str:
        for i, tag in enumerate(self._tags):
            if tag == "title":
                return _normalize(self.text(i))
        return ""

    def __len__(self) -> int:
        return len(self._elements)

    # -- per-node accessors -------------------------------------------------

    def element(self, node: int) -> html.HtmlElement:
        return self._elements[node]

    def index_of(self, element: html.HtmlElement) -> int:
        try:
            return self._index[element]
        except KeyError:
            raise ValueError("element does not belong to this document") from None

    def tag(self, node: int) -> str:
        return self._tags[node]

    def class_name(self, node: int) -> str:
        return self._elements[node].get("class") or ""

    def id(self, node: int) -> str:
        return self._elements[node].get("id") or ""

    def get(self, node: int, name: str) -> Optional[str]:
        return self._elements[node].get(name)

    def has(self, node: int, name: str) -> bool:
        return self._elements[node].get(name) is not None

    def text(self, node: int) -> str:
        cached = self._texts[node]
        if cached is None:
            cached = self._elements[node].text_content()
            self._texts[node] = cached
        return cached

    def direct_texts(self, node: int) -> List[str]:
        """Text nodes that are immediate children of ``node``."""
        el = self._elements[node]
        out = [el.text] if el.text else []
        out.extend(child.tail for child in el if child.tail)
        return out

    def parent(self, node: int) -> Optional[int]:
        return self._parents[node]

    def children(self, node: int) -> Tuple[int, ...]:
        return self._children[node]

    def first_child(self, node: int) -> Optional[int]:
        kids = self._children[node]
        return kids[0] if kids else None

    def next_sibling(self, node: int) -> Optional[int]:
        parent = self._parents[node]
        if parent is None:
            return None
        siblings = self._children[parent]
        pos = self._positions[node] + 1
        return siblings[pos] if pos < len(siblings) else None

    def end(self, node: int) -> int:
        return self._ends[node]

    def descendants(self, node: int, tag: Optional[str] = None) -> List[int]:
        span = range(node + 1, self._ends[node])
        if tag is None:
            return list(span)
        return [i for i in span if self._tags[i] == tag]

    def ancestors(self, node: int, max_depth: int = 0) -> List[int]:
        """Ancestors closest first; ``max_depth`` of 0 means all of them."""
        out: List[int] = []
        current = self._parents[node]
        while current is not None:
            out.append(current)
            if max_depth and len(out) == max_depth:
                break
            current = self._parents[current]
        return out

    def has_ancestor_tag(self, node: int, tag: str, max_depth: int = 3) -> bool:
        depth = 0
        current = self._parents[node]
        while current is not None:
            if max_depth > 0 and depth > max_depth:
                return False
            if self._tags[current] == tag:
                return True
            current = self._parents[current]
            depth += 1
        return False

    @classmethod
    def from_element(cls, element: html.HtmlElement, title: Optional[str] = None) -> "DocumentTree":
        return cls(element.getroottree().getroot(), title=title)


def _normalize(text: str) -> str:
    return " ".join(text.split())
