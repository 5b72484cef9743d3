"""Configuration management for the attachment policy."""

from __future__ import annotations

import re
from typing import Sequence

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import models
from .models import PolicyConfiguration

# Load .env early so BaseSettings can pick values up seamlessly.
load_dotenv()

DEFAULT_UNACCEPTABLE_EXTENSIONS = ";".join(sorted(models.DEFAULT_UNACCEPTABLE_EXTENSIONS))


def _split_list(value: str | Sequence[str] | None, coerce_lower: bool = True) -> list[str]:
    """Turn delimiter-separated env strings into cleaned lists."""
    if value is None:
        return []
    if isinstance(value, str):
        items = re.split(r"[;,]", value)
    else:
        items = list(value)
    cleaned: list[str] = []
    for item in items:
        trimmed = item.strip()
        if not trimmed:
            continue
        cleaned.append(trimmed.lower() if coerce_lower else trimmed)
    return cleaned


def _split_extensions(value: str) -> frozenset[str]:
    return frozenset(item.lstrip(".") for item in _split_list(value) if item.lstrip("."))


class Settings(BaseSettings):
    """Policy configuration derived from environment variables."""

    acceptable_view_types_raw: str = Field("*/*", alias="ATTACHMENT_ACCEPTABLE_VIEW_TYPES")
    unacceptable_view_types_raw: str = Field("", alias="ATTACHMENT_UNACCEPTABLE_VIEW_TYPES")
    unacceptable_extensions_raw: str = Field(
        DEFAULT_UNACCEPTABLE_EXTENSIONS, alias="ATTACHMENT_UNACCEPTABLE_EXTENSIONS"
    )
    installable_extensions_raw: str = Field("apk", alias="ATTACHMENT_INSTALLABLE_EXTENSIONS")
    max_download_size: int = Field(5 * 1024 * 1024, alias="ATTACHMENT_MAX_DOWNLOAD_SIZE")
    content_authority: str = Field(
        "mail.attachmentprovider", alias="ATTACHMENT_CONTENT_AUTHORITY"
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "acceptable_view_types_raw",
        "unacceptable_view_types_raw",
        "unacceptable_extensions_raw",
        "installable_extensions_raw",
        mode="before",
    )
    @classmethod
    def _none_to_empty_str(cls, value):
        if value is None:
            return ""
        return value

    @field_validator("max_download_size")
    @classmethod
    def _non_negative_size(cls, value: int) -> int:
        if value < 0:
            raise ValueError("ATTACHMENT_MAX_DOWNLOAD_SIZE must not be negative.")
        return value

    @field_validator("content_authority", mode="before")
    @classmethod
    def _normalize_authority(cls, value):
        if isinstance(value, str):
            stripped = value.strip().strip("/")
            if not stripped:
                raise ValueError("ATTACHMENT_CONTENT_AUTHORITY must not be empty.")
            return stripped
        return value

    @property
    def acceptable_view_types(self) -> list[str]:
        return _split_list(self.acceptable_view_types_raw, coerce_lower=True)

    @property
    def unacceptable_view_types(self) -> list[str]:
        return _split_list(self.unacceptable_view_types_raw, coerce_lower=True)

    @property
    def unacceptable_extensions(self) -> frozenset[str]:
        return _split_extensions(self.unacceptable_extensions_raw)

    @property
    def installable_extensions(self) -> frozenset[str]:
        return _split_extensions(self.installable_extensions_raw)

    def policy_configuration(self) -> PolicyConfiguration:
        """Freeze the current settings into the evaluator's configuration."""
        return PolicyConfiguration(
            acceptable_view_types=frozenset(self.acceptable_view_types),
            unacceptable_view_types=frozenset(self.unacceptable_view_types),
            unacceptable_extensions=self.unacceptable_extensions,
            installable_extensions=self.installable_extensions,
            max_download_size=self.max_download_size,
            content_authority=self.content_authority,
        )
