"""Configuration management for the GroupMe API client.

This module provides configuration models and loading functionality using Pydantic
for validation and type safety. Values can come from keyword arguments, YAML/JSON
files, ``GROUPME_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DOTENV_LOADED = False

API_BASE_URL = "https://api.groupme.com/v3"
IMAGE_BASE_URL = "https://image.groupme.com"


def _load_env_once() -> None:
    """Load environment variables from a .env file exactly once."""

    global _DOTENV_LOADED
    if not _DOTENV_LOADED:
        load_dotenv()
        _DOTENV_LOADED = True


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in configuration data."""

    if isinstance(data, str):
        return os.path.expandvars(data)
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    return data


class CacheConfig(BaseModel):
    """Configuration for the in-memory response cache."""

    enabled: bool = Field(default=False, description="Cache raw response bodies")
    ttl_seconds: int = Field(
        default=300, ge=0, description="Seconds a cached response stays fresh"
    )
    methods: list[str] = Field(
        default_factory=lambda: ["GET"],
        description="HTTP methods whose responses are written to the cache",
    )

    @field_validator("methods")
    @classmethod
    def normalise_methods(cls, value: list[str]) -> list[str]:
        return [method.strip().upper() for method in value if method and method.strip()]


class MessageLimitsConfig(BaseModel):
    """Length limits applied by truncation or splitting before sending."""

    max_message_length: int = Field(default=1000, ge=1, description="Soft split threshold")
    max_group_name: int = Field(default=140, ge=1, description="Primary group name length")
    max_group_description: int = Field(default=255, ge=1, description="Group description length")
    max_nickname: int = Field(default=50, ge=1, description="Membership nickname length")
    max_groups_per_request: int = Field(
        default=499, ge=1, description="Page size used when listing all groups"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    log_file: str | None = Field(default=None, description="Log file path")
    max_bytes: int = Field(default=10485760, description="Max log file size (10MB)")
    backup_count: int = Field(default=5, description="Number of backup files")

    @field_validator("level")
    @classmethod
    def normalise_level(cls, value: str) -> str:
        level = (value or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level


class ClientConfig(BaseSettings):
    """Main configuration for the GroupMe API client."""

    model_config = SettingsConfigDict(
        env_prefix="GROUPME_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    access_token: str = Field(default="", description="GroupMe API access token")
    api_base_url: str = Field(default=API_BASE_URL, description="JSON API root")
    image_base_url: str = Field(default=IMAGE_BASE_URL, description="Image service root")
    timeout: float = Field(default=4.0, gt=0.0, description="Request timeout in seconds")
    verify_tls: bool = Field(
        default=True,
        description="Verify TLS certificates (disable only for legacy deployments)",
    )
    user_agent: str = Field(default="GroupMe API Client", description="User-Agent header")
    cache: CacheConfig = Field(default_factory=CacheConfig, description="Response cache")
    limits: MessageLimitsConfig = Field(
        default_factory=MessageLimitsConfig, description="Message and group limits"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    emoji: dict[str, tuple[int, int]] = Field(
        default_factory=dict,
        description="Emoji names mapped to (pack_id, pack_index)",
    )

    @field_validator("api_base_url", "image_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("Base URL must start with http:// or https://")
        return value.rstrip("/")

    @classmethod
    def from_yaml(cls, path: str | Path) -> ClientConfig:
        """Load configuration from a YAML file."""

        _load_env_once()
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, encoding="utf-8") as handle:
            try:
                config_data = yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in config file: {exc}") from exc

        if not config_data:
            config_data = {}

        config_data = _expand_env_vars(config_data)
        return cls(**config_data)

    @classmethod
    def from_json(cls, path: str | Path) -> ClientConfig:
        """Load configuration from a JSON file."""

        _load_env_once()
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, encoding="utf-8") as handle:
            try:
                config_data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in config file: {exc}") from exc

        config_data = _expand_env_vars(config_data)
        return cls(**config_data)

    @classmethod
    def from_file(cls, path: str | Path) -> ClientConfig:
        """Load configuration choosing the parser from the file extension."""

        if Path(path).suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    def to_yaml(self, path: str | Path) -> None:
        """Write the configuration to a YAML file."""

        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as handle:
            yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
