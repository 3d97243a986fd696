"""Configuration settings for booking Playwright tests."""

import json
from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from booking_tests.pricing import PriceCalculator


class Settings(BaseSettings):
    """Configuration settings loaded from environment variables or JSON file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BOOKING_",
        extra="ignore",
    )

    # Site URLs
    base_url: str = Field(
        default="https://automationintesting.online",
        description="Base URL of the hotel booking site",
    )
    admin_path: str = Field(
        default="/admin",
        description="Path to the admin login page",
    )
    admin_username: str = Field(
        default="admin",
        description="Admin panel username",
    )
    admin_password: str = Field(
        default="password",
        description="Admin panel password",
    )

    # Browser settings
    headless: bool = Field(
        default=True,
        description="Run browser in headless mode",
    )
    browser: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser to use for testing",
    )
    timeout: int = Field(
        default=30000,
        description="Default timeout for operations (ms)",
    )
    expect_timeout: int = Field(
        default=10000,
        description="Default timeout for expect operations (ms)",
    )
    viewport_width: int = Field(default=1920)
    viewport_height: int = Field(default=1080)

    # Pricing rules
    cleaning_fee: Decimal = Field(
        default=Decimal("25.00"),
        description="Fixed cleaning fee added once per booking",
    )
    service_fee: Decimal = Field(
        default=Decimal("15.00"),
        description="Fixed service fee added once per booking",
    )
    currency_symbol: str = Field(
        default="£",
        description="Currency symbol the site renders prices with",
    )
    price_tolerance: Decimal = Field(
        default=Decimal("0.01"),
        description="Allowed difference between computed and displayed totals",
    )

    # Report settings
    reports_dir: str = Field(
        default="./reports",
        description="Directory for test reports",
    )

    # Fixtures settings
    fixtures_dir: Optional[str] = Field(
        default=None,
        description="Directory containing test fixtures (defaults to ./fixtures relative to package)",
    )

    @model_validator(mode='after')
    def validate_pricing(self):
        """Fees must be non-negative and the tolerance positive."""
        if self.cleaning_fee < 0:
            raise ValueError("CLEANING_FEE cannot be negative")
        if self.service_fee < 0:
            raise ValueError("SERVICE_FEE cannot be negative")
        if self.price_tolerance <= 0:
            raise ValueError("PRICE_TOLERANCE must be greater than zero")
        return self

    @property
    def admin_url(self) -> str:
        """Full URL to the admin login page."""
        return f"{self.base_url.rstrip('/')}{self.admin_path}"

    @property
    def viewport(self) -> dict:
        return {"width": self.viewport_width, "height": self.viewport_height}

    @property
    def reports_path(self) -> Path:
        """Path object for reports directory."""
        return Path(self.reports_dir)

    @property
    def fixtures_path(self) -> Path:
        """Get the path to the fixtures directory."""
        if self.fixtures_dir:
            return Path(self.fixtures_dir)
        return Path(__file__).parent / "fixtures"

    def price_calculator(self) -> PriceCalculator:
        """Calculator configured with this site's fee schedule."""
        return PriceCalculator(
            cleaning_fee=self.cleaning_fee,
            service_fee=self.service_fee,
            tolerance=self.price_tolerance,
        )

    @classmethod
    def from_json(cls, json_path: Path) -> "Settings":
        """Load settings from a JSON config file.

        JSON keys use snake_case matching the field names. Keys present in
        the file win over environment variables; the rest fall back to env.
        """
        with open(json_path) as f:
            config_data = json.load(f)
        return cls(**config_data)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Set the global settings instance (None resets to defaults on next get)."""
    global _settings
    _settings = settings


def load_settings_from_json(json_path: Path) -> Settings:
    """Load settings from JSON file and set as global instance."""
    global _settings
    _settings = Settings.from_json(json_path)
    return _settings
