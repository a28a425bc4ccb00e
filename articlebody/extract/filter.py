"""Visibility and relevance filtering.

Walks the whole document once per pass and decides, node by node, whether it
can seed content scoring. Nothing is removed from the tree: pruning a node
means the cursor simply steps over it.
"""

from __future__ import annotations

import enum
from typing import List, NamedTuple, Optional

from ..document.cursor import TreeCursor
from ..document.tree import DocumentTree
from .context import ExtractionFlags, PassContext
from .metrics import inner_text, link_density, text_similarity
from .patterns import (
    BYLINE,
    DIV_TO_P_ELEMS,
    EMPTY_WHEN_TEXTLESS,
    HAS_CONTENT,
    OK_MAYBE_ITS_A_CANDIDATE,
    TAGS_TO_SCORE,
    TITLE_HEADINGS,
    UNLIKELY_CANDIDATES,
    UNLIKELY_ROLES,
)


BYLINE_MAX_LENGTH = 100
TITLE_SIMILARITY = 0.75
WRAPPER_DIV_MAX_LINK_DENSITY = 0.25


class Action(enum.Enum):
    DESCEND = "descend"
    SKIP_NODE = "skip-node"  # ignore the node itself, still visit its children
    SKIP_SUBTREE = "skip-subtree"
    SCORE = "score"  # record ``target`` as scorable, do not visit the subtree


class Decision(NamedTuple):
    action: Action
    target: Optional[int] = None


DESCEND = Decision(Action.DESCEND)
SKIP_NODE = Decision(Action.SKIP_NODE)
SKIP_SUBTREE = Decision(Action.SKIP_SUBTREE)


def _display_is_none(style: Optional[str]) -> bool:
    if not style:
        return False
    display = None
    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if sep and name.strip().lower() == "display":
            display = value.replace("!important", "").strip().lower()
    return display == "none"


def is_probably_visible(tree: DocumentTree, node: int) -> bool:
    if _display_is_none(tree.get(node, "style")):
        return False
    if tree.has(node, "hidden"):
        return False
    # wikimedia math images are aria-hidden but carry the rendered formula
    if tree.get(node, "aria-hidden") == "true" and "fallback-image" not in tree.class_name(node):
        return False
    return True


def is_inert_dialog(tree: DocumentTree, node: int) -> bool:
    return tree.get(node, "aria-modal") == "true" and tree.get(node, "role") == "dialog"


def is_valid_byline(text: str) -> bool:
    text = text.strip()
    return 0 < len(text) < BYLINE_MAX_LENGTH


def is_byline(tree: DocumentTree, node: int, match_string: str) -> bool:
    rel = tree.get(node, "rel")
    itemprop = tree.get(node, "itemprop") or ""
    marked = rel == "author" or "author" in itemprop or BYLINE.search(match_string) is not None
    return marked and is_valid_byline(tree.text(node))


def heading_duplicates_title(tree: DocumentTree, node: int) -> bool:
    if tree.tag(node) not in TITLE_HEADINGS:
        return False
    heading = inner_text(tree, node, normalize=False)
    return text_similarity(tree.title, heading) > TITLE_SIMILARITY


def is_unlikely_candidate(tree: DocumentTree, node: int, match_string: str) -> bool:
    return (
        UNLIKELY_CANDIDATES.search(match_string) is not None
        and OK_MAYBE_ITS_A_CANDIDATE.search(match_string) is None
        and not tree.has_ancestor_tag(node, "table")
        and not tree.has_ancestor_tag(node, "code")
        and tree.tag(node) not in ("body", "a")
    )


def is_element_without_content(tree: DocumentTree, node: int) -> bool:
    if tree.text(node).strip():
        return False
    children = tree.children(node)
    if not children:
        return True
    return len(children) == len(tree.descendants(node, "br")) + len(tree.descendants(node, "hr"))


def has_single_tag_inside(tree: DocumentTree, node: int, tag: str) -> bool:
    children = tree.children(node)
    if len(children) != 1 or tree.tag(children[0]) != tag:
        return False
    return not any(HAS_CONTENT.search(text) for text in tree.direct_texts(node))


def has_child_block_element(tree: DocumentTree, node: int) -> bool:
    return any(tree.tag(i) in DIV_TO_P_ELEMS for i in tree.descendants(node))


class RelevanceFilter:
    """Per-pass filter state; ``decide`` is the single-node rule set."""

    def __init__(self, ctx: PassContext):
        self.ctx = ctx
        self.tree = ctx.tree
        self.strip_unlikelys = ctx.is_active(ExtractionFlags.STRIP_UNLIKELYS)
        self.title_heading_pending = True

    def decide(self, node: int) -> Decision:
        tree = self.tree
        tag = tree.tag(node)
        match_string = tree.class_name(node) + " " + tree.id(node)

        if not is_probably_visible(tree, node) or is_inert_dialog(tree, node):
            return SKIP_SUBTREE

        if is_byline(tree, node, match_string):
            return SKIP_NODE

        if self.title_heading_pending and heading_duplicates_title(tree, node):
            self.title_heading_pending = False
            return SKIP_NODE

        if self.strip_unlikelys:
            if is_unlikely_candidate(tree, node, match_string):
                return SKIP_SUBTREE
            if tree.get(node, "role") in UNLIKELY_ROLES:
                return SKIP_SUBTREE

        if tag in EMPTY_WHEN_TEXTLESS and is_element_without_content(tree, node):
            return SKIP_NODE

        if tag in TAGS_TO_SCORE:
            return Decision(Action.SCORE, node)

        if tag == "div":
            # Some sites wrap every paragraph in its own div; score the
            # paragraph rather than a div that is a paragraph in practice.
            if has_single_tag_inside(tree, node, "p") and link_density(tree, node) < WRAPPER_DIV_MAX_LINK_DENSITY:
                return Decision(Action.SCORE, tree.children(node)[0])
            if not has_child_block_element(tree, node):
                return Decision(Action.SCORE, node)

        return DESCEND

    def collect(self) -> List[int]:
        scorable: List[int] = []
        cursor = TreeCursor(self.tree)
        while cursor.node is not None:
            node = cursor.node
            decision = self.decide(node)
            if decision.action is Action.SCORE:
                scorable.append(decision.target)
                cursor.skip_from(decision.target)
            elif decision.action is Action.SKIP_SUBTREE:
                cursor.skip_from(node)
            else:
                cursor.advance()
        return scorable


def collect_scorable(ctx: PassContext) -> List[int]:
    return RelevanceFilter(ctx).collect()
