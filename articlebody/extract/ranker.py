from __future__ import annotations

from typing import Iterable, List, Optional

from .context import PassContext
from .metrics import link_density
from .scorer import initialize


def rank_candidates(ctx: PassContext, candidates: Iterable[int]) -> List[int]:
    """Scale candidate scores by link density and keep the best few.

    The returned list is ordered by descending adjusted score. A candidate
    only displaces an entry it strictly beats, so the earlier of two equal
    candidates ranks first.
    """
    limit = ctx.config.top_candidates
    scores = ctx.scores
    top: List[int] = []
    for candidate in candidates:
        adjusted = scores.get(candidate) * (1 - link_density(ctx.tree, candidate))
        scores[candidate] = adjusted
        for position in range(limit):
            if position >= len(top) or adjusted > scores.get(top[position]):
                top.insert(position, candidate)
                if len(top) > limit:
                    top.pop()
                break
    return top


def _is_body(ctx: PassContext, node: Optional[int]) -> bool:
    return node is not None and ctx.tree.tag(node) == "body"


def promote_shared_ancestor(ctx: PassContext, top: List[int]) -> int:
    """Widen to the ancestor shared by several near-tied candidates."""
    tree = ctx.tree
    scores = ctx.scores
    config = ctx.config
    top_candidate = top[0]
    top_score = scores.get(top_candidate) or 1
    alternative_ancestors = [
        tree.ancestors(candidate)
        for candidate in top[1:]
        if scores.get(candidate) / top_score >= config.cluster_score_ratio
    ]
    if len(alternative_ancestors) < config.cluster_min_count:
        return top_candidate

    parent = tree.parent(top_candidate)
    while parent is not None and not _is_body(ctx, parent):
        containing = 0
        for ancestors in alternative_ancestors:
            if parent in ancestors:
                containing += 1
                if containing >= config.cluster_min_count:
                    return parent
        parent = tree.parent(parent)
    return top_candidate


def climb_to_better_parent(ctx: PassContext, top_candidate: int) -> int:
    """Move up while ancestors keep a comparable score.

    Only a strictly higher-scoring ancestor is taken; ancestors that score
    lower but above the floor are climbed past without being selected.
    """
    tree = ctx.tree
    scores = ctx.scores
    last_score = scores[top_candidate]
    score_floor = last_score * ctx.config.rescan_floor_ratio
    parent = tree.parent(top_candidate)
    while parent is not None and not _is_body(ctx, parent):
        if parent not in scores:
            parent = tree.parent(parent)
            continue
        parent_score = scores[parent]
        if parent_score < score_floor:
            break
        if parent_score > last_score:
            return parent
        last_score = parent_score
        parent = tree.parent(parent)
    return top_candidate


def collapse_single_child(ctx: PassContext, top_candidate: int) -> int:
    tree = ctx.tree
    parent = tree.parent(top_candidate)
    while parent is not None and not _is_body(ctx, parent) and len(tree.children(parent)) == 1:
        top_candidate = parent
        parent = tree.parent(top_candidate)
    return top_candidate


def select_top_candidate(ctx: PassContext, top: List[int]) -> Optional[int]:
    body = ctx.tree.body
    if not top or _is_body(ctx, top[0]):
        if body is not None:
            initialize(ctx, body)
        return body

    top_candidate = promote_shared_ancestor(ctx, top)
    if top_candidate not in ctx.scores:
        initialize(ctx, top_candidate)
    top_candidate = climb_to_better_parent(ctx, top_candidate)
    top_candidate = collapse_single_child(ctx, top_candidate)
    if top_candidate not in ctx.scores:
        initialize(ctx, top_candidate)
    return top_candidate
