"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Keeps the GitHub endpoint, timeouts and host/port tunable without code changes.
"""

from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Pydantic v2 config (env file + ignore unexpected env vars)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",          # <-- prevents crashes if extra env vars exist
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for FastAPI/Uvicorn")
    port: int = Field(default=50051, description="Port for FastAPI/Uvicorn")
    debug: bool = Field(default=False, description="Pretty console logs instead of JSON")

    # CORS
    cors_allow_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed origins for browser apps"
    )

    # --- GitHub search config ---
    # GITHUB_BASE_URL points this at GitHub Enterprise or a local stub.
    github_base_url: str = Field(default="https://api.github.com", description="Base URL of the GitHub REST API")
    github_web_url: str = Field(default="https://github.com", description="Base URL used to build repository links")
    github_api_version: str = Field(default="2022-11-28")
    github_accept: str = Field(default="application/vnd.github+json")
    github_timeout_seconds: float = Field(default=5.0, gt=0, description="Upper bound for one outbound search call")

    # Call metadata key carrying the caller's GitHub token
    token_header: str = Field(default="github-token")

settings = Settings()

def get_settings() -> Settings:
    """Settings as a FastAPI dependency (overridable in tests)."""
    return settings
