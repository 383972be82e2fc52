from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RM_", env_file=".env", extra="ignore")

    # Pixabay
    pixabay_api_key: str = ""
    image_api_url: str = "https://pixabay.com/api/"
    video_api_url: str = "https://pixabay.com/api/videos/"
    per_page: int = 200  # provider maximum
    editors_choice: bool = True
    request_timeout_s: float = 15.0

    # Selection knobs
    policy: str = "default"  # "default" | "legacy"
    w_engagement: float = 0.7
    w_download: float = 0.3
    min_pool_pct: float = 0.05
    max_pool_pct: float = 1.0
    default_randomness: int = 50

    log_level: str = "INFO"


settings = Settings()
