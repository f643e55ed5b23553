# File: /pagedb/core/config.py | Version: 1.0 | Title: Central App Settings (Pydantic v2)
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Database ---
    DATABASE_URL: str = "sqlite:///./pagedb.db"

    # --- API behavior toggles ---
    ENABLE_STD_ERRORS: bool = (
        False  # set True in .env to wrap every error as {"error": {...}}
    )

    # --- View projection ---
    LIST_SUMMARY_COLUMNS: int = 3
    GALLERY_SUMMARY_COLUMNS: int = 3
    BOARD_CARD_COLUMNS: int = 2

    # --- Option registry ---
    OPTION_COLOR_POLICY: Literal["random", "round_robin"] = "random"

    # --- Observability ---
    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    def projection_limits(self) -> dict:
        return {
            "list_limit": self.LIST_SUMMARY_COLUMNS,
            "gallery_limit": self.GALLERY_SUMMARY_COLUMNS,
            "board_card_limit": self.BOARD_CARD_COLUMNS,
        }


settings = Settings()
