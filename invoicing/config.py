from pydantic_settings import BaseSettings
from pydantic import field_validator
from decimal import Decimal
from functools import lru_cache
from typing import Optional
import json
import logging


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # App Settings
    APP_NAME: str = "Invoice Computation Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Currency
    CURRENCY_CODE: str = "INR"  # Prefix of the amount-in-words line
    CURRENCY_SYMBOL: str = "₹"
    MONEY_DECIMAL_PLACES: int = 2

    # GST slabs accepted on products - accepts JSON string, comma-separated, or list
    ALLOWED_TAX_RATES: list[Decimal] = [
        Decimal("0"),
        Decimal("5"),
        Decimal("12"),
        Decimal("18"),
        Decimal("28"),
        Decimal("40"),
    ]

    # Amount in words: append "and <N> Paisa" (False truncates the fraction)
    AMOUNT_WORDS_INCLUDE_PAISA: bool = True

    @field_validator('ALLOWED_TAX_RATES', mode='before')
    @classmethod
    def parse_tax_rates(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [rate.strip() for rate in v.split(',') if rate.strip()]
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts embedding the engine."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
