"""
Centralized configuration for the Quad backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SMTP_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Quad API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:8080", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Storage
    storage_backend: Literal["memory", "supabase"] = "memory"

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # direct Postgres URL, used by run_migrations.py

    # Frontend URLs (for verification links)
    frontend_url: str = "http://localhost:8080"

    # Signup / verification
    password_min_length: int = 6
    verification_token_ttl_hours: int = 24
    verification_fallback: Literal["auto_verify", "keep_pending"] = "auto_verify"
    bcrypt_rounds: int = 12

    # Sessions
    session_jwt_secret: str = "change-me-in-production"
    session_jwt_algorithm: str = "HS256"
    session_ttl_minutes: int = 60 * 24 * 7

    # Email (SMTP)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    email_from: str = "noreply@quad.local"
    email_from_name: str = "Quad"

    # Feed
    post_max_length: int = 5000
    feed_default_page_size: int = 10


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
