from __future__ import annotations

DEFAULT_LANG = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "no_media": "No media found",
        "fetch_failed": "Failed to fetch media",
        "not_configured": "API key not configured",
        "download_unavailable": "Download URL not available",
    },
    "ja": {
        "no_media": "メディアが見つかりませんでした",
        "fetch_failed": "メディアの取得に失敗しました",
        "not_configured": "APIキーが設定されていません",
        "download_unavailable": "ダウンロードURLが利用できません",
    },
}

LANGUAGES = tuple(MESSAGES)


def translate(key: str, lang: str = DEFAULT_LANG) -> str:
    table = MESSAGES.get((lang or DEFAULT_LANG).lower(), MESSAGES[DEFAULT_LANG])
    return table.get(key) or MESSAGES[DEFAULT_LANG].get(key, key)
