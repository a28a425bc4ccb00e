from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import ExtractionConfig
from ..document.tree import DocumentTree


class ExtractionFlags(enum.IntFlag):
    NONE = 0
    STRIP_UNLIKELYS = 0x1
    WEIGHT_CLASSES = 0x2
    # Only gates the retry loop; no cleaning happens in this package.
    CLEAN_CONDITIONALLY = 0x4
    ALL = STRIP_UNLIKELYS | WEIGHT_CLASSES | CLEAN_CONDITIONALLY


# Order in which failing passes relax the heuristics.
RELAX_ORDER = (
    ExtractionFlags.STRIP_UNLIKELYS,
    ExtractionFlags.WEIGHT_CLASSES,
    ExtractionFlags.CLEAN_CONDITIONALLY,
)


class ScoreTable:
    """Content scores for one pass, stored in a list parallel to the tree."""

    def __init__(self, size: int):
        self._scores: List[Optional[float]] = [None] * size

    def __contains__(self, node: int) -> bool:
        return self._scores[node] is not None

    def __getitem__(self, node: int) -> float:
        score = self._scores[node]
        if score is None:
            raise KeyError(node)
        return score

    def __setitem__(self, node: int, score: float) -> None:
        self._scores[node] = float(score)

    def get(self, node: int, default: float = 0.0) -> float:
        score = self._scores[node]
        return default if score is None else score


@dataclass
class PassContext:
    tree: DocumentTree
    flags: ExtractionFlags
    config: ExtractionConfig
    scores: ScoreTable = field(init=False)
    candidates: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.scores = ScoreTable(len(self.tree))

    def is_active(self, flag: ExtractionFlags) -> bool:
        return bool(self.flags & flag)
