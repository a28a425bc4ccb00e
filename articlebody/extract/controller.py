"""Runs scoring passes, relaxing heuristics until one yields enough text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from lxml import html

from ..config import DEFAULT_CONFIG, ExtractionConfig
from ..document.tree import DocumentTree
from ..utils.logging import get_logger
from .context import RELAX_ORDER, ExtractionFlags, PassContext
from .filter import collect_scorable
from .metrics import inner_text
from .ranker import rank_candidates, select_top_candidate
from .scorer import score_elements


logger = get_logger(__name__)


@dataclass(frozen=True)
class Attempt:
    node: Optional[int]
    text_length: int
    flags: ExtractionFlags


@dataclass
class ExtractionResult:
    tree: DocumentTree
    node: Optional[int] = None
    text_length: int = 0
    succeeded: bool = False
    fallback: bool = False
    attempts: List[Attempt] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.node is not None

    @property
    def element(self) -> Optional[html.HtmlElement]:
        return None if self.node is None else self.tree.element(self.node)

    @property
    def passes(self) -> int:
        return len(self.attempts)


def run_pass(tree: DocumentTree, flags: ExtractionFlags, config: ExtractionConfig = DEFAULT_CONFIG) -> Attempt:
    """One filter, score and rank cycle under a fixed flag set."""
    ctx = PassContext(tree=tree, flags=flags, config=config)
    scorable = collect_scorable(ctx)
    candidates = score_elements(ctx, scorable)
    top = rank_candidates(ctx, candidates)
    node = select_top_candidate(ctx, top)
    text_length = 0 if node is None else len(inner_text(tree, node))
    logger.debug(
        "pass flags=%s scorable=%d candidates=%d top=%s length=%d",
        flags, len(scorable), len(candidates), tree.tag(node) if node is not None else None, text_length,
    )
    return Attempt(node=node, text_length=text_length, flags=flags)


def _as_tree(source: Union[DocumentTree, html.HtmlElement]) -> DocumentTree:
    if isinstance(source, DocumentTree):
        return source
    return DocumentTree.from_element(source)


def extract(
    source: Union[DocumentTree, html.HtmlElement],
    config: Optional[ExtractionConfig] = None,
) -> ExtractionResult:
    tree = _as_tree(source)
    cfg = (config or DEFAULT_CONFIG).validate()
    result = ExtractionResult(tree=tree)
    if tree.body is None:
        logger.debug("document has no body")
        return result

    flags = ExtractionFlags.ALL
    while True:
        attempt = run_pass(tree, flags, cfg)
        result.attempts.append(attempt)
        if attempt.text_length >= cfg.char_threshold:
            result.node = attempt.node
            result.text_length = attempt.text_length
            result.succeeded = True
            return result
        relaxed = next((flag for flag in RELAX_ORDER if flags & flag), None)
        if relaxed is None:
            break
        flags = flags & ~relaxed

    # sorted() is stable, so the earliest of equally long attempts wins
    best = sorted(result.attempts, key=lambda a: a.text_length, reverse=True)[0]
    result.fallback = True
    if best.text_length:
        result.node = best.node
        result.text_length = best.text_length
    logger.debug("no pass reached %d characters, best attempt has %d", cfg.char_threshold, best.text_length)
    return result


def extract_article_body(
    source: Union[DocumentTree, html.HtmlElement],
    config: Optional[ExtractionConfig] = None,
) -> Optional[html.HtmlElement]:
    """Return the element most likely holding the article body, or None."""
    return extract(source, config).element
