"""Runtime settings, read from ``RINGVOTE_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import MIN_RING_SIZE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RINGVOTE_", env_file=".env", extra="ignore")

    key_image_store: str = "key_images.json"
    default_case_id: str = "default-case"
    log_level: str = "INFO"
    max_ring_size: int = 1000

    @property
    def min_ring_size(self) -> int:
        return MIN_RING_SIZE


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
