from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILES = [PROJECT_ROOT / ".env", ".env"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILES, extra="ignore")

    # DB
    DATABASE_URL: str = "sqlite:///./data/pantry.db"

    # App
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # API
    API_KEY: str | None = None
    API_KEY_SECRET: str | None = None

    # Matching
    CAN_MAKE_THRESHOLD: int = 80
    ALMOST_MAX_MISSING: int = 2
    PANTRY_MIN_MATCH: int = 50
    QUICK_MAX_MINUTES: int = 30
    EXPIRING_SOON_DAYS: int = 3

    # Recommendations / search
    RECOMMEND_DEFAULT_LIMIT: int = 10
    RECOMMEND_MAX_LIMIT: int = 50
    SEARCH_MIN_QUERY_LENGTH: int = 2


settings = Settings()
