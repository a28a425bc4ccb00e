from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError


ENV_PREFIX = "ARTICLEBODY_"


@dataclass(frozen=True)
class ExtractionConfig:
    """Tunables for the scoring passes.

    The defaults are the values the heuristics were calibrated with; changing
    them is mostly useful for experiments and tests.
    """

    # Scorable elements with less normalized text than this contribute nothing.
    min_text_length: int = 25
    # How many ancestors receive a share of each element's contribution.
    ancestor_depth: int = 5
    top_candidates: int = 5
    # Normalized characters a pass must produce to be accepted outright.
    char_threshold: int = 500
    cluster_min_count: int = 3
    cluster_score_ratio: float = 0.75
    rescan_floor_ratio: float = 1 / 3

    def validate(self) -> "ExtractionConfig":
        for name in ("ancestor_depth", "top_candidates", "cluster_min_count"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be at least 1, got {getattr(self, name)}")
        for name in ("min_text_length", "char_threshold"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative, got {getattr(self, name)}")
        for name in ("cluster_score_ratio", "rescan_floor_ratio"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ConfigError(f"{name} must be in (0, 1], got {value}")
        return self

    def with_overrides(self, **overrides: Any) -> "ExtractionConfig":
        clean = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **clean).validate()

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None) -> "ExtractionConfig":
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(prefix + f.name.upper())
            if raw is None or not raw.strip():
                continue
            caster = int if f.type in ("int", int) else float
            try:
                values[f.name] = caster(raw.strip())
            except ValueError as e:
                raise ConfigError(f"{prefix + f.name.upper()}={raw!r} is not a valid {caster.__name__}") from e
        return cls(**values).validate()


DEFAULT_CONFIG = ExtractionConfig()
