"""Configuration loading from YAML and environment.

Values in the YAML file may reference environment variables as ${VAR} or
$VAR. STORE_ISSUES_FILE overrides store.issues_file from the file.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Injected by load_config so substitution reads a snapshot of the environment
_current_env: dict[str, str] = {}


class StoreConfig(BaseSettings):
    """Issues file location."""

    model_config = SettingsConfigDict(env_prefix="STORE_", extra="ignore")

    issues_file: Path = Field(default=Path("issues.txt"), description="Record file holding all issues")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default=DEFAULT_LOG_FORMAT, description="Log format")


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with environment values."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file yields defaults (still overridable by STORE_* and LOGGING_* env).
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    raw = _substitute_env(raw)

    # Env overrides for nested values
    store_raw = raw.get("store") or {}
    if _current_env.get("STORE_ISSUES_FILE"):
        store_raw = {**store_raw, "issues_file": _current_env.get("STORE_ISSUES_FILE")}

    store = StoreConfig(**store_raw)
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(store=store, logging=logging)
