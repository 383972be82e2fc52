from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from http.client import HTTPException
from typing import Any, Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from pydantic import BaseModel, Field, field_validator

from random_media.config import Settings, settings as default_settings
from random_media.domain.models import MediaRecord
from random_media.domain.policy import clamp_randomness
from random_media.errors import ProviderError, ProviderNotConfigured

logger = logging.getLogger(__name__)


class MediaType(str, Enum):
    image = "image"
    video = "video"


class Category(str, Enum):
    backgrounds = "backgrounds"
    fashion = "fashion"
    nature = "nature"
    science = "science"
    education = "education"
    feelings = "feelings"
    health = "health"
    people = "people"
    religion = "religion"
    places = "places"
    animals = "animals"
    industry = "industry"
    computer = "computer"
    food = "food"
    sports = "sports"
    transportation = "transportation"
    travel = "travel"
    buildings = "buildings"
    business = "business"
    music = "music"


class Orientation(str, Enum):
    horizontal = "horizontal"
    vertical = "vertical"


class MediaQuery(BaseModel):
    type: MediaType = MediaType.image
    q: Optional[str] = Field(default=None, max_length=100)
    category: Optional[Category] = None
    orientation: Optional[Orientation] = None  # images only
    randomness: float = Field(default_factory=lambda: default_settings.default_randomness)

    @field_validator("q", mode="before")
    @classmethod
    def _strip_q(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("category", "orientation", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        # the UI sends "" for "all categories" / "all orientations"
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("randomness")
    @classmethod
    def _clamp(cls, v: float) -> float:
        return clamp_randomness(v)


@dataclass
class ProviderResponse:
    hits: list[MediaRecord] = field(default_factory=list)
    total_hits: int = 0


def build_params(query: MediaQuery, api_key: str, per_page: int = 200,
                 editors_choice: bool = True) -> dict[str, str]:
    params = {
        "key": api_key,
        "image_type": "photo",
        "video_type": "film",
        "editors_choice": "true" if editors_choice else "false",
        "per_page": str(per_page),
    }
    if query.q:
        params["q"] = query.q
    if query.category:
        params["category"] = query.category.value
    if query.orientation and query.type == MediaType.image:
        params["orientation"] = query.orientation.value
    return params


def endpoint_for(media_type: MediaType, s: Settings) -> str:
    return s.video_api_url if media_type == MediaType.video else s.image_api_url


def parse_response(data: Any) -> ProviderResponse:
    if not isinstance(data, dict):
        raise ProviderError("provider returned a non-object payload")
    hits = data.get("hits") or []
    if not isinstance(hits, list):
        raise ProviderError("provider 'hits' is not a list")
    try:
        records = [MediaRecord.from_hit(h) for h in hits if isinstance(h, dict)]
        total_hits = int(data.get("totalHits") or 0)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ProviderError("provider returned malformed hit data") from exc
    return ProviderResponse(hits=records, total_hits=total_hits)


def fetch_hits(query: MediaQuery, s: Settings | None = None) -> ProviderResponse:
    s = s or default_settings
    if not s.pixabay_api_key:
        raise ProviderNotConfigured("RM_PIXABAY_API_KEY is not set")

    params = build_params(query, s.pixabay_api_key, s.per_page, s.editors_choice)
    url = f"{endpoint_for(query.type, s)}?{urlencode(params)}"
    logger.info("querying pixabay type=%s q=%r category=%s",
                query.type.value, query.q, query.category.value if query.category else None)

    try:
        req = Request(url, headers={"User-Agent": "random-media/0.1", "Accept": "application/json"})
        with urlopen(req, timeout=s.request_timeout_s) as resp:
            raw = resp.read()
    except HTTPError as exc:
        logger.warning("pixabay responded with HTTP %s", exc.code)
        exc.close()
        raise ProviderError(f"provider responded with HTTP {exc.code}") from exc
    except (URLError, TimeoutError, OSError, HTTPException) as exc:
        logger.warning("pixabay request failed: %s", getattr(exc, "reason", exc))
        raise ProviderError("provider request failed") from exc

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise ProviderError("provider returned malformed JSON") from exc

    out = parse_response(data)
    logger.debug("pixabay returned %d hits (totalHits=%d)", len(out.hits), out.total_hits)
    return out


Fetcher = Callable[[MediaQuery], ProviderResponse]
