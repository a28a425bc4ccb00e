from __future__ import annotations

from typing import Dict, Iterable, List

from .context import ExtractionFlags, PassContext
from .metrics import inner_text
from .patterns import NEGATIVE, POSITIVE


CLASS_WEIGHT = 25

TAG_SCORES: Dict[str, int] = {
    "div": 5,
    "pre": 3,
    "td": 3,
    "blockquote": 3,
    "address": -3,
    "ol": -3,
    "ul": -3,
    "dl": -3,
    "dd": -3,
    "dt": -3,
    "li": -3,
    "form": -3,
    "h1": -5,
    "h2": -5,
    "h3": -5,
    "h4": -5,
    "h5": -5,
    "h6": -5,
    "th": -5,
}


def _pattern_weight(value: str) -> int:
    weight = 0
    if value:
        if NEGATIVE.search(value):
            weight -= CLASS_WEIGHT
        if POSITIVE.search(value):
            weight += CLASS_WEIGHT
    return weight


def class_weight(ctx: PassContext, node: int) -> int:
    if not ctx.is_active(ExtractionFlags.WEIGHT_CLASSES):
        return 0
    return _pattern_weight(ctx.tree.class_name(node)) + _pattern_weight(ctx.tree.id(node))


def base_score(ctx: PassContext, node: int) -> int:
    return TAG_SCORES.get(ctx.tree.tag(node), 0) + class_weight(ctx, node)


def initialize(ctx: PassContext, node: int) -> None:
    ctx.scores[node] = base_score(ctx, node)


def score_divider(level: int) -> int:
    # parent: 1, grandparent: 2, further up: 3 per level
    if level == 0:
        return 1
    if level == 1:
        return 2
    return level * 3


def contribution(text: str) -> int:
    """Points a paragraph-like element hands to its ancestors."""
    return 1 + len(text.split(",")) + min(len(text) // 100, 3)


def score_elements(ctx: PassContext, scorable: Iterable[int]) -> List[int]:
    """Propagate contributions to ancestors and return the candidate nodes.

    Candidates are the ancestors that received a score, in the order they
    were first reached.
    """
    tree = ctx.tree
    for node in scorable:
        if tree.parent(node) is None:
            continue
        text = inner_text(tree, node)
        if len(text) < ctx.config.min_text_length:
            continue
        ancestors = tree.ancestors(node, ctx.config.ancestor_depth)
        if not ancestors:
            continue
        points = contribution(text)
        for level, ancestor in enumerate(ancestors):
            if tree.parent(ancestor) is None:
                continue
            if ancestor not in ctx.scores:
                initialize(ctx, ancestor)
                ctx.candidates.append(ancestor)
            ctx.scores[ancestor] = ctx.scores[ancestor] + points / score_divider(level)
    return ctx.candidates
