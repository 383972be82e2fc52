from __future__ import annotations

from typing import Iterable

from random_media.domain.models import MediaRecord, ScoredCandidate


def rate(count: int, views: int) -> float:
    # views floored at 1: an unseen item's rate is its raw count
    return count / max(views, 1)


def engagement_rate(record: MediaRecord) -> float:
    return rate(record.likes, record.views)


def download_rate(record: MediaRecord) -> float:
    return rate(record.downloads, record.views)


def combined_score(engagement: float, download: float,
                   w_engagement: float, w_download: float) -> float:
    return engagement * w_engagement + download * w_download


def score_candidates(records: Iterable[MediaRecord], w_engagement: float,
                     w_download: float) -> list[ScoredCandidate]:
    out: list[ScoredCandidate] = []
    for r in records:
        er = engagement_rate(r)
        dr = download_rate(r)
        out.append(ScoredCandidate(
            record=r,
            engagement_rate=er,
            download_rate=dr,
            score=combined_score(er, dr, w_engagement, w_download),
        ))
    return out


def rank_candidates(records: Iterable[MediaRecord], w_engagement: float,
                    w_download: float) -> list[ScoredCandidate]:
    # sorted() is stable, so equal scores keep the provider's order
    scored = score_candidates(records, w_engagement, w_download)
    return sorted(scored, key=lambda c: c.score, reverse=True)
