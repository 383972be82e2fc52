from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Sequence

from random_media.domain.models import MediaRecord, ScoredCandidate, Selection
from random_media.domain.scoring import rank_candidates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionPolicy:
    """Score weights plus the bounds of the pool the random draw is made from.

    The pool fraction moves linearly from ``min_pool_pct`` (randomness 0,
    quality only) to ``max_pool_pct`` (randomness 100, uniform over the pool).
    """

    w_engagement: float = 0.7
    w_download: float = 0.3
    min_pool_pct: float = 0.05
    max_pool_pct: float = 1.0

    def __post_init__(self) -> None:
        if self.w_engagement < 0 or self.w_download < 0:
            raise ValueError("weights must be non-negative")
        if not math.isclose(self.w_engagement + self.w_download, 1.0, abs_tol=1e-9):
            raise ValueError("w_engagement + w_download must equal 1.0")
        if not 0.0 < self.min_pool_pct <= self.max_pool_pct <= 1.0:
            raise ValueError("pool bounds must satisfy 0 < min_pool_pct <= max_pool_pct <= 1")

    def rank(self, records: Sequence[MediaRecord]) -> list[ScoredCandidate]:
        return rank_candidates(records, self.w_engagement, self.w_download)


DEFAULT_POLICY = SelectionPolicy()

# Older download-weighted variant with a fixed top-10% pool.
LEGACY_POLICY = SelectionPolicy(w_engagement=0.3, w_download=0.7,
                                min_pool_pct=0.10, max_pool_pct=0.10)

POLICIES = {"default": DEFAULT_POLICY, "legacy": LEGACY_POLICY}


def policy_from_settings(s) -> SelectionPolicy:
    name = (s.policy or "default").lower().strip()
    if name not in POLICIES:
        raise ValueError(f"unknown policy {s.policy!r}, expected one of {sorted(POLICIES)}")
    if name == "legacy":
        return LEGACY_POLICY
    return SelectionPolicy(
        w_engagement=s.w_engagement,
        w_download=s.w_download,
        min_pool_pct=s.min_pool_pct,
        max_pool_pct=s.max_pool_pct,
    )


def clamp_randomness(value: float | None) -> float:
    if value is None or math.isnan(value):
        return 0.0
    return float(min(100.0, max(0.0, value)))


def pool_size(n: int, randomness: float, policy: SelectionPolicy = DEFAULT_POLICY) -> int:
    if n <= 0:
        return 0
    r = clamp_randomness(randomness)
    pct = policy.min_pool_pct + (r / 100.0) * (policy.max_pool_pct - policy.min_pool_pct)
    # round off float noise so that e.g. 20 * 0.05 does not ceil to 2
    size = math.ceil(round(n * pct, 9))
    return max(1, min(n, size))


def pick(candidates: Sequence[MediaRecord], randomness: float = 50,
         rng: random.Random | None = None,
         policy: SelectionPolicy = DEFAULT_POLICY) -> Selection | None:
    if not candidates:
        return None

    r = clamp_randomness(randomness)
    ranked = policy.rank(candidates)
    k = pool_size(len(ranked), r, policy)

    rng = rng or random.Random()
    idx = rng.randrange(k)
    chosen = ranked[idx]
    logger.debug("picked id=%s rank=%d pool=%d/%d score=%.4f",
                 chosen.record.id, idx, k, len(ranked), chosen.score)
    return Selection(
        record=chosen.record,
        score=chosen.score,
        rank=idx,
        pool_size=k,
        total=len(ranked),
        randomness=r,
    )


def select(candidates: Sequence[MediaRecord], randomness: float = 50,
           rng: random.Random | None = None,
           policy: SelectionPolicy = DEFAULT_POLICY) -> MediaRecord | None:
    sel = pick(candidates, randomness, rng=rng, policy=policy)
    return sel.record if sel else None
