"""Storefront Configuration"""

from decimal import Decimal
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Chauffage Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Pricing
    currency: str = "DZD"

    # Shipping
    default_shipping_cost: Decimal = Decimal("500")
    free_shipping_threshold: Optional[Decimal] = Decimal("50000")

    # Cart
    max_line_quantity: int = 99

    # Orders
    order_number_prefix: str = "MJ"

    # Seed the in-memory store with the demo heating catalog
    seed_demo_catalog: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "STOREFRONT_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
