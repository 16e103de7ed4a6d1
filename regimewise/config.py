"""
config.py — RegimeWise application settings.

Usage:
    from regimewise.config import settings
    print(settings.financial_year)

Never use FastAPI Depends() for settings — import directly as a module-level singleton.
"""
from decimal import Decimal
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="REGIMEWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore any extra env vars
    )

    # --- CORS ---
    # Comma-separated list of allowed frontend origins
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # --- Tax year shown on reports ---
    financial_year: str = "FY 2025-26"

    # --- Break-even search ---
    # Old/new tax difference (₹) below which a deduction counts as break-even.
    break_even_tolerance: Decimal = Decimal("1")

    # --- Application ---
    debug: bool = False
    app_version: str = "0.1.0"

    @property
    def cors_origins_list(self) -> List[str]:
        """Split comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Module-level singleton — import this throughout the codebase
settings = Settings()
