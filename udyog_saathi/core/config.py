"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "udyog_saathi"
    mongodb_max_pool_size: int = 10
    mongodb_min_pool_size: int = 2
    mongodb_server_selection_timeout_ms: int = 5000
    mongodb_socket_timeout_ms: int = 45000

    # Query caps
    feed_limit: int = 10
    notification_limit: int = 50
    chat_history_limit: int = 100

    # Server-side query time limits (maxTimeMS)
    feed_query_timeout_ms: int = 10000
    query_timeout_ms: int = 5000
    diagnostic_query_timeout_ms: int = 2000

    # Career guidance LLM (OpenAI-compatible)
    ai_api_key: str = ""
    ai_base_url: str = "https://api.deepseek.com/v1"
    ai_model: str = "deepseek-chat"

    # Cloudinary
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_folder: str = "udyog_saathi"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Polling client
    api_base_url: str = "http://localhost:8000/api"
    feed_sync_interval: float = 20.0
    chat_sync_interval: float = 3.0

    # App
    debug: bool = True
    log_level: str = "INFO"
    log_file: str = "logs/app.log"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
