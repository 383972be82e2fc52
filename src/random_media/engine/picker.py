from __future__ import annotations

import logging
import random
from typing import Any

from random_media.config import settings
from random_media.domain.policy import SelectionPolicy, pick, policy_from_settings
from random_media.engine.media_urls import download_link, preview_url
from random_media.errors import NoMediaFound
from random_media.provider.pixabay import Fetcher, MediaQuery, fetch_hits

logger = logging.getLogger(__name__)


class MediaPicker:
    """Runs one provider query and draws a single quality-weighted hit from it."""

    def __init__(self, fetcher: Fetcher | None = None, rng: random.Random | None = None,
                 policy: SelectionPolicy | None = None):
        self.fetcher = fetcher or fetch_hits
        self.rng = rng
        self.policy = policy or policy_from_settings(settings)

    def pick(self, query: MediaQuery) -> dict[str, Any]:
        resp = self.fetcher(query)
        if not resp.hits:
            logger.info("no hits for type=%s q=%r", query.type.value, query.q)
            raise NoMediaFound("provider returned no hits")

        sel = pick(resp.hits, query.randomness, rng=self.rng, policy=self.policy)
        if sel is None:
            raise NoMediaFound("no suitable media found")

        media = dict(sel.record.payload)
        media_type = query.type.value
        link = download_link(media, media_type)
        logger.info("selected id=%s rank=%d/%d pool=%d randomness=%.0f",
                    sel.record.id, sel.rank, sel.total, sel.pool_size, sel.randomness)
        return {
            "media": media,
            "type": media_type,
            "totalHits": resp.total_hits,
            "preview_url": preview_url(media, media_type),
            "download": {"url": link[0], "filename": link[1]} if link else None,
            "explain": sel.explain(),
        }
