"""
Engine configuration using Pydantic Settings.

Values come from TALLY_* environment variables or a .env file and are
used by the engine builder for anything the caller does not set.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from tally.money import MAX_SCALE


class Settings(BaseSettings):
    """Pricing defaults loaded from environment variables."""

    # ── Currency ─────────────────────────────────────────
    currency: str = "USD"
    minor_units: int = Field(default=2, ge=0, le=MAX_SCALE)

    # ── Settlement ───────────────────────────────────────
    rounding: Literal["half_up", "half_even"] = "half_up"

    # ── Default tax context ──────────────────────────────
    tax_class: str = "standard"
    jurisdiction: str = ""

    model_config = {
        "env_prefix": "TALLY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings (singleton)."""
    return Settings()
