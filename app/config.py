"""Coach Portal — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Supabase
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""

    # Security (Supabase access tokens are HS256 JWTs)
    SUPABASE_JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"

    # Storage
    INVOICE_BUCKET: str = "invoices"

    # Timezone
    TIMEZONE: str = "Europe/Paris"

    # Profile resolution after signup (row may lag behind the credential)
    PROFILE_RETRY_DELAY_SECONDS: float = 1.0
    PROFILE_MAX_ATTEMPTS: int = 5

    # UI
    UI_THEME: str = "light"  # "light" or "dark"
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
