from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from random_media.config import settings
from random_media.engine.messages import DEFAULT_LANG, translate
from random_media.engine.picker import MediaPicker
from random_media.errors import RandomMediaError
from random_media.log import setup_logging
from random_media.provider.pixabay import Category, MediaQuery, MediaType, Orientation

logger = logging.getLogger(__name__)

setup_logging(settings.log_level)
app = FastAPI(title="random-media")


def get_picker() -> MediaPicker:
    return MediaPicker()


@app.exception_handler(RandomMediaError)
async def _random_media_error(request: Request, exc: RandomMediaError):
    lang = request.query_params.get("lang") or DEFAULT_LANG
    if exc.status_code >= 500:
        logger.error("random-media request failed: %s", exc)
    return JSONResponse(status_code=exc.status_code, content={"error": translate(exc.message_key, lang)})


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/api/random-media")
def random_media(
    type: MediaType = MediaType.image,
    q: Optional[str] = Query(default=None, max_length=100),
    category: Optional[Category] = None,
    orientation: Optional[Orientation] = None,
    randomness: float = settings.default_randomness,
    lang: str = DEFAULT_LANG,
    picker: MediaPicker = Depends(get_picker),
):
    query = MediaQuery(
        type=type,
        q=q,
        category=category,
        orientation=orientation,
        randomness=randomness,
    )
    return picker.pick(query)
