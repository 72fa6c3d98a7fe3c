"""
Environment configuration for the hotel booking core.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application configuration
    APP_NAME: str = Field(default="Hotel Booking Core", alias="PROJECT_NAME")
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Database configuration
    DATABASE_URL: str = "sqlite:///./hotel_booking.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"
    LOG_DIR: Optional[str] = None

    # Inventory ledger defaults for dates without a stored row
    INVENTORY_DEFAULT_MAX_ROOMS: int = 100
    INVENTORY_DEFAULT_SURGE_MULTIPLIER: Decimal = Decimal("1.0")

    # Group bookings
    GROUP_MIN_SIZE: int = 5
    GROUP_QUOTE_VALIDITY_DAYS: int = 7

    # Reference codes
    BOOKING_REFERENCE_PREFIX: str = "BK"
    REFUND_REFERENCE_PREFIX: str = "REF"
    REFUND_SETTLEMENT_PREFIX: str = "REFUND"

    # Money
    CURRENCY: str = "INR"
    MONEY_QUANTUM: Decimal = Decimal("0.01")

    # Business rules
    ENFORCE_REFUND_AMOUNT_BOUND: bool = True

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case"""
        return str(v).upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("LOG_FORMAT must be 'text' or 'json'")
        return v

    @field_validator("INVENTORY_DEFAULT_MAX_ROOMS")
    @classmethod
    def validate_default_capacity(cls, v: int) -> int:
        if v < 0:
            raise ValueError("INVENTORY_DEFAULT_MAX_ROOMS cannot be negative")
        return v

    def get_database_url(self) -> str:
        """Get database URL"""
        return self.DATABASE_URL

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
