"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Quantity input at the API boundary. One mode per deployment, never mixed.
    quantity_input_mode: Literal["fraction", "decimal"] = "fraction"

    # Display
    display_format: Literal["fraction", "decimal", "auto"] = "auto"
    display_decimal_places: int = Field(2, ge=0, le=6)

    # Unit conversion
    conversion_fraction_resolution: int = Field(16, ge=1)  # round to nearest 1/N

    # Shopping list
    default_category: str = "Other"
    unranked_category_order: int = 999

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
