from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _count(hit: Mapping[str, Any], key: str) -> int:
    try:
        return max(0, int(hit.get(key) or 0))
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class MediaRecord:
    id: int
    views: int = 0
    downloads: int = 0
    likes: int = 0
    comments: int = 0
    # full provider hit (tags, user, urls, dimensions), passed through untouched
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_hit(cls, hit: Mapping[str, Any]) -> "MediaRecord":
        return cls(
            id=int(hit.get("id") or 0),
            views=_count(hit, "views"),
            downloads=_count(hit, "downloads"),
            likes=_count(hit, "likes"),
            comments=_count(hit, "comments"),
            payload=hit,
        )


@dataclass(frozen=True)
class ScoredCandidate:
    record: MediaRecord
    engagement_rate: float
    download_rate: float
    score: float


@dataclass(frozen=True)
class Selection:
    record: MediaRecord
    score: float
    rank: int
    pool_size: int
    total: int
    randomness: float

    def explain(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "rank": self.rank,
            "pool_size": self.pool_size,
            "total": self.total,
            "randomness": self.randomness,
        }
