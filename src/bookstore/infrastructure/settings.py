"""Runtime settings, read from ``BOOKSTORE_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bookstore.application.config import OrderingConfig

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class BookstoreSettings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="BOOKSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = _DEFAULT_DATA_DIR
    currency: str = "USD"
    check_stock_on_cart_update: bool = True
    rating_recompute_attempts: int = Field(default=3, ge=1)
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    log_level: str = "INFO"
    log_json: bool = False

    def ordering_config(self) -> OrderingConfig:
        return OrderingConfig(
            currency=self.currency,
            check_stock_on_cart_update=self.check_stock_on_cart_update,
            rating_recompute_attempts=self.rating_recompute_attempts,
            default_page_size=self.default_page_size,
            max_page_size=self.max_page_size,
        )


@lru_cache()
def get_settings() -> BookstoreSettings:
    """Get cached settings instance"""
    return BookstoreSettings()
