# core/config.py
"""
Process‑wide settings, read from the environment (or a ``.env`` file).

Only the HTTP service, the CLI and the scripts read ``settings`` directly.
The extraction pipeline itself receives an explicit ``PipelineConfig``
(see ``services/extraction/pipeline.py``) built from these values.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Safe defaults; override via environment or .env file
    PROJECT_NAME: str = "Job Posting Extractor"
    PORT: int = 3001
    DEBUG: bool = False
    WORKERS: int = 1
    LOG_LEVEL: str = "INFO"
    ALLOWED_HOSTS: List[str] = ["*"]

    # Sent upstream by the /proxy endpoint – some job boards block bare clients
    DEFAULT_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/124.0.0.0 Safari/537.36"
    )
    UPSTREAM_TIMEOUT: float = 20.0

    # Where the pipeline finds the fetch proxy (usually this very service)
    PROXY_BASE_URL: str = "http://localhost:3001"
    # Outlasts UPSTREAM_TIMEOUT so a slow page surfaces as the proxy's 500
    PROXY_TIMEOUT: float = 25.0

    # Structured extraction (Gemini generateContent)
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_ENDPOINT: str = "https://generativelanguage.googleapis.com/v1beta"
    EXTRACTION_TIMEOUT: float = 30.0

    MAX_TEXT_CHARS: int = 28_000
    EXTRACTION_PROFILE: str = "default"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
