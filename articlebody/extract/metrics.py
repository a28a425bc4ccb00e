from __future__ import annotations

from typing import List

from ..document.tree import DocumentTree
from .patterns import HASH_URL, NORMALIZE, TOKENIZE


# In-page fragment links count for less than links that leave the page.
FRAGMENT_LINK_COEFFICIENT = 0.3


def normalize_spaces(text: str) -> str:
    return NORMALIZE.sub(" ", text.strip())


def inner_text(tree: DocumentTree, node: int, normalize: bool = True) -> str:
    text = tree.text(node)
    return normalize_spaces(text) if normalize else text.strip()


def link_density(tree: DocumentTree, node: int) -> float:
    """Share of the node's text that sits inside links, 0.0 for empty nodes."""
    text_length = len(inner_text(tree, node))
    if text_length == 0:
        return 0.0
    link_length = 0.0
    for anchor in tree.descendants(node, "a"):
        href = tree.get(anchor, "href")
        coefficient = FRAGMENT_LINK_COEFFICIENT if href and HASH_URL.match(href) else 1.0
        link_length += len(inner_text(tree, anchor)) * coefficient
    return link_length / text_length


def _tokens(text: str) -> List[str]:
    return [t for t in TOKENIZE.split(text.lower()) if t]


def text_similarity(text_a: str, text_b: str) -> float:
    """How much of ``text_b`` already appears in ``text_a``.

    1.0 means every word of ``text_b`` occurs in ``text_a``; 0.0 means none
    does. Words are weighted by length, and the comparison is not symmetric.
    """
    tokens_a = _tokens(text_a)
    tokens_b = _tokens(text_b)
    if not tokens_a or not tokens_b:
        return 0.0
    known = set(tokens_a)
    unique_b = [t for t in tokens_b if t not in known]
    distance_b = len(" ".join(unique_b)) / len(" ".join(tokens_b))
    return 1 - distance_b
