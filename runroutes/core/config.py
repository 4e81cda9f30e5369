# runroutes/core/config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    APP_NAME: str = "Run Route Recommender API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # TrailRouter candidate source, e.g. "https://trailrouter.com/ors/experimentalroutes".
    # Used exactly as given; only a query string is appended.
    TRAILROUTER_API_BASE: Optional[str] = None
    TRAILROUTER_API_KEY: Optional[str] = None
    TRAILROUTER_TIMEOUT_S: float = 10.0
    TRAILROUTER_NUM_CANDIDATES: int = 6

    # Bounds applied by the HTTP layer; the engine itself does not clamp.
    DEFAULT_RECOMMENDATION_LIMIT: int = 3
    MAX_RECOMMENDATION_LIMIT: int = 50


settings = Settings()
