"""Configuration for the loan calculator CLI and web app."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer; got {raw!r}") from exc


@dataclass
class AppConfig:
    """Runtime settings, read from the environment."""

    log_level: str = "INFO"
    log_format: str = "standard"
    secret_key: str = "dev-secret-key"
    asset_version: str = "1"
    preview_rows: int = 120
    host: str = "0.0.0.0"
    port: int = 8710

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Create config from environment variables."""
        env = os.environ if env is None else env

        log_format = env.get("LOG_FORMAT", "standard").lower()
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(f"LOG_FORMAT must be one of {LOG_FORMATS}; got {log_format!r}")
        preview_rows = _int_setting(env, "PREVIEW_ROWS", 120)
        if preview_rows < 0:
            raise ConfigurationError(f"PREVIEW_ROWS must not be negative; got {preview_rows}")

        return cls(
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_format=log_format,
            secret_key=env.get("FLASK_SECRET_KEY", "dev-secret-key"),
            asset_version=env.get("ASSET_VERSION", "1"),
            preview_rows=preview_rows,
            host=env.get("HOST", "0.0.0.0"),
            port=_int_setting(env, "PORT", 8710),
        )
