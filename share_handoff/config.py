"""Configuration management for the share→host handoff."""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so BaseSettings can pick values up seamlessly.
load_dotenv()


class Settings(BaseSettings):
    """App configuration derived from environment variables."""

    extension_bundle_id: str = Field(..., alias="SHARE_EXTENSION_BUNDLE_ID")
    container_root: Path = Field(Path("data/containers"), alias="SHARE_CONTAINER_ROOT")
    shared_store_db: Path = Field(Path("data/shared_defaults.db"), alias="SHARED_STORE_DB")
    shared_items_key: str = Field("sharedItems", alias="SHARED_ITEMS_KEY")
    classify_text: bool = Field(False, alias="SHARE_CLASSIFY_TEXT")

    thumbnail_seek_seconds: float = Field(1.0, alias="THUMBNAIL_SEEK_SECONDS")
    thumbnail_max_dimension: int = Field(360, alias="THUMBNAIL_MAX_DIMENSION")

    wake_relay_url: HttpUrl | None = Field(None, alias="WAKE_RELAY_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("wake_relay_url", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("extension_bundle_id", mode="before")
    @classmethod
    def _validate_bundle_id(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if "." not in value or value.startswith("."):
                raise ValueError(
                    "SHARE_EXTENSION_BUNDLE_ID must be a dotted identifier, e.g. com.example.app.ShareExtension."
                )
        return value

    @field_validator("thumbnail_seek_seconds")
    @classmethod
    def _positive_seek(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("THUMBNAIL_SEEK_SECONDS must be positive.")
        return value

    @field_validator("thumbnail_max_dimension")
    @classmethod
    def _positive_dimension(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("THUMBNAIL_MAX_DIMENSION must be positive.")
        return value
