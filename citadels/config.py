import logging
import sys
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CITADELS_",
        extra="ignore",
    )

    # App config
    DEBUG: bool = False

    # Table size accepted by initialize_game
    MIN_PLAYERS: int = 2
    MAX_PLAYERS: int = 8

    @field_validator("MIN_PLAYERS")
    @classmethod
    def validate_min_players(cls, v: int) -> int:
        if v < 2:
            raise ValueError("MIN_PLAYERS must be at least 2")
        return v

    @field_validator("MAX_PLAYERS")
    @classmethod
    def validate_max_players(cls, v: int) -> int:
        if v > 8:
            raise ValueError("MAX_PLAYERS cannot exceed 8")
        return v

    @model_validator(mode="after")
    def validate_player_range(self) -> "Settings":
        if self.MAX_PLAYERS < self.MIN_PLAYERS:
            raise ValueError("MAX_PLAYERS cannot be lower than MIN_PLAYERS")
        return self


def configure_logging(debug: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    configure_logging(settings.DEBUG)
    logger.info("Settings loaded successfully")
    logger.debug(
        "Player range: %d-%d", settings.MIN_PLAYERS, settings.MAX_PLAYERS
    )
    return settings
