import os
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote_plus

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

load_dotenv()

DEFAULT_CONFIG_NAME = "default.yaml"
LOCAL_CONFIG_NAME = "local.yaml"

# env var -> (section, key)
ENV_OVERRIDES = {
    "SERVER_HOST": ("server", "host"),
    "SERVER_PORT": ("server", "port"),
    "DB_HOST": ("database", "host"),
    "DB_PORT": ("database", "port"),
    "DB_USER": ("database", "user"),
    "DB_PASSWORD": ("database", "password"),
    "DB_NAME": ("database", "db_name"),
    "DB_MAX_CONNECTIONS": ("database", "max_connections"),
}


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded or validated."""


class ServerConfig(BaseModel):
    host: str
    port: int = Field(..., ge=0, le=65535)
    cors_origins: List[str] = Field(default_factory=list)


class DatabaseConfig(BaseModel):
    host: str
    port: int = Field(..., ge=0, le=65535)
    user: str
    password: str
    db_name: str
    max_connections: int = Field(..., gt=0)
    pool_timeout_seconds: float = Field(30, gt=0)
    ssl: bool = False

    @property
    def url(self) -> str:
        base_url = f"postgresql+asyncpg://{self.user}:{quote_plus(self.password)}@{self.host}:{self.port}/{self.db_name}"
        if self.ssl:
            return f"{base_url}?ssl=require"
        return base_url


class StoreConfig(BaseModel):
    fetch_timeout_seconds: float = Field(10, gt=0)


class IngestConfig(BaseModel):
    max_attempts: int = Field(4, ge=1)
    backoff_base_seconds: float = Field(0.5, ge=0)
    backoff_max_seconds: float = Field(30, ge=0)


class Settings(BaseModel):
    environment: str = "development"
    server: ServerConfig
    database: DatabaseConfig
    store: StoreConfig = Field(default_factory=StoreConfig)
    ingest: IngestConfig = Field(default_factory=IngestConfig)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")
    return data


def _apply_env_overrides(data: Dict[str, Any], environ) -> Dict[str, Any]:
    data = dict(data)
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        data[section] = {**(data.get(section) or {}), key: value}
    if environ.get("ENVIRONMENT"):
        data["environment"] = environ["ENVIRONMENT"]
    return data


def load_settings(config_dir: Optional[Path] = None, environ=None) -> Settings:
    """
    Build settings from config/default.yaml, an optional config/local.yaml
    merged over it, then environment overrides.
    """
    environ = os.environ if environ is None else environ
    config_dir = Path(config_dir or environ.get("HEALTHHUB_CONFIG_DIR", "config")).expanduser()

    default_path = config_dir / DEFAULT_CONFIG_NAME
    if not default_path.is_file():
        raise ConfigError(f"Default configuration not found: {default_path}")

    data = _read_yaml(default_path)
    local_path = config_dir / LOCAL_CONFIG_NAME
    if local_path.is_file():
        data = _deep_merge(data, _read_yaml(local_path))

    data = _apply_env_overrides(data, environ)

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


settings = load_settings()
