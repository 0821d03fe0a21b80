from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # "production" hides error details from API responses
    environment: str = "development"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Contact form behaviour
    strict_validation: bool = True
    processing_delay_seconds: float = 1.0
    max_field_length: int = 1000
    max_body_bytes: int = 10 * 1024 * 1024

    # Rate limiting (fixed windows keyed by client address)
    rate_limiting: bool = True
    general_rate_limit: str = "100 per 15 minutes"
    contact_rate_limit: str = "5 per hour"

    # Optional CRM webhook; submissions are only logged when unset
    crm_webhook_url: Optional[str] = None
    crm_webhook_timeout_seconds: float = 10.0

    # CORS settings
    allowed_origins: list[str] = ["https://mnl-ai.com", "https://www.mnl-ai.com"]

    static_dir: Path = BASE_DIR / "static"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Allow every origin outside production"""
        return self.allowed_origins if self.is_production else ["*"]


@lru_cache
def get_settings():
    return Settings()
