# app/core/config.py
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # database
    DATABASE_URL: str = "sqlite:///./aigc.db"
    DEBUG_SQL: bool = False

    # inference server, e.g. http://127.0.0.1:8000 (no trailing slash)
    INFERENCE_SERVER_HOST: Optional[str] = None

    # chat
    PAGE_SIZE: int = 10
    AIGC_REQUIRE_LOGIN: bool = True

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
