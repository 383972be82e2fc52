from __future__ import annotations

from typing import Any, Mapping

VIDEO_RENDITIONS = ("large", "medium", "small")


def _video_url(media: Mapping[str, Any]) -> str | None:
    videos = media.get("videos") or {}
    for name in VIDEO_RENDITIONS:
        url = (videos.get(name) or {}).get("url")
        if url:
            return url
    return None


def download_link(media: Mapping[str, Any], media_type: str) -> tuple[str, str] | None:
    """
    Returns (url, filename) for the best available rendition of a hit.
    Images prefer the large rendition over the web-format one; videos walk
    large -> medium -> small. None when the hit carries no usable URL.
    """
    media_id = media.get("id")
    if media_type == "video":
        url = _video_url(media)
        filename = f"pixabay-video-{media_id}.mp4"
    else:
        url = media.get("largeImageURL") or media.get("webformatURL")
        filename = f"pixabay-image-{media_id}.jpg"

    if not url:
        return None
    return url, filename


def preview_url(media: Mapping[str, Any], media_type: str) -> str | None:
    # smallest rendition suitable for a thumbnail; falls back to the page URL
    if media_type == "video":
        tiny = ((media.get("videos") or {}).get("tiny") or {}).get("url")
        return tiny or _video_url(media) or media.get("pageURL")
    return media.get("webformatURL") or media.get("previewURL") or media.get("pageURL")
