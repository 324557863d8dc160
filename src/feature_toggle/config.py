"""Configuration loading and validation."""

import os
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from feature_toggle.providers.provider import FlagProvider
from feature_toggle.providers.static import StaticFlagProvider
from feature_toggle.providers.unleash import UnleashFlagProvider


class CacheConfig(BaseModel):
    """Flag cache configuration."""

    ttl_seconds: float = 60.0


class UnleashConfig(BaseModel):
    """Unleash SDK configuration."""

    url: str = "http://localhost:4242/api/"
    app_name: str = "default"
    instance_id: str = "feature-toggle"
    api_token_env: str = "UNLEASH_API_TOKEN"
    refresh_interval: int = 5


class BackendConfig(BaseModel):
    """Remote feature-check endpoint used by backend checks."""

    url: str = "http://localhost:8080/api/feature-check"
    timeout: float | None = None


class ServerConfig(BaseModel):
    """Bind address and CORS settings for the feature-check server."""

    host: str = "127.0.0.1"
    port: int = 8080
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])


class MonitoringConfig(BaseModel):
    """Logging configuration."""

    structured_logging: bool = False
    log_file: str | None = None
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class AppConfig(BaseModel):
    """Top-level application configuration."""

    flag_name: str = "frontend-example-hello-world"
    provider: Literal["unleash", "static"] = "static"
    static_flags: dict[str, bool] = Field(default_factory=dict)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    unleash: UnleashConfig = Field(default_factory=UnleashConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)


def load_config(path: Path) -> AppConfig:
    """Load config from a YAML file."""
    load_dotenv(path.parent / ".env", override=False)
    return AppConfig(**(yaml.safe_load(path.read_text()) or {}))


def build_provider(cfg: AppConfig) -> FlagProvider:
    """Create the flag provider selected by ``cfg.provider``."""
    if cfg.provider == "unleash":
        return UnleashFlagProvider(
            cfg.unleash.url,
            app_name=cfg.unleash.app_name,
            instance_id=cfg.unleash.instance_id,
            api_token=os.environ.get(cfg.unleash.api_token_env),
            refresh_interval=cfg.unleash.refresh_interval,
        )
    return StaticFlagProvider(cfg.static_flags)
