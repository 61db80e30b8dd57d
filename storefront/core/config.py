"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file="config/.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Darna Storefront"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8001
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Durable session storage
    storage_dir: str = ".storefront-data"
    cart_storage_key: str = "darna-cart"
    order_storage_key: str = "darna-orders"
    default_session_id: str = "default"

    # Payment
    payment_delay_seconds: float = 1.5
    payment_timeout_seconds: float = 30.0
    payment_gateway_url: Optional[str] = None

    @property
    def payment_gateway_configured(self) -> bool:
        """Check if a real payment gateway is configured"""
        return bool(self.payment_gateway_url)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
