"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
CacheBackend = Literal["diskcache", "diskcache-namespaced", "memory"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class CacheConfig(BaseModel):
    """Cache configuration (YAML section: cache.*)."""

    model_config = ConfigDict(populate_by_name=True)

    backend: CacheBackend = Field(
        default="diskcache",
        description=(
            "Store: 'diskcache' (batch-capable SQLite store), "
            "'diskcache-namespaced' or 'memory' (namespaced, single-key only)"
        ),
    )
    directory: Path = Field(
        default=Path("./.cache/cachebridge"),
        alias="dir",
        description="Diskcache SQLite DB path",
    )
    namespace: str = Field(
        default="cachebridge",
        description="Key prefix for namespaced stores",
    )
    default_lifetime: int = Field(
        default=0,
        description="TTL (seconds) for entries saved without expiry. 0 = no expiry.",
    )

    @field_validator("directory", mode="before")
    @classmethod
    def _validate_directory(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("namespace")
    @classmethod
    def _validate_namespace(cls, v: str) -> str:
        if "/" in v:
            raise ValueError("namespace must not contain '/'")
        return v

    @field_validator("default_lifetime")
    @classmethod
    def _validate_default_lifetime(cls, v: int) -> int:
        if v < 0:
            raise ValueError("default_lifetime must be >= 0")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (logging/cache).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < overrides) in load.py.
    """

    app_name: str = Field(default="cachebridge", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    cache: CacheConfig = Field(default_factory=CacheConfig)

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "logging": {"level": self.log_level, "format": self.log_format},
            "cache": {
                "backend": self.cache.backend,
                "dir": str(self.cache.directory),
                "namespace": self.cache.namespace,
                "default_lifetime": self.cache.default_lifetime,
            },
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read CACHEBRIDGE_* variables, keeps the
    values that were set and merges them over YAML/defaults.

    Supported env vars:
    - CACHEBRIDGE_ENVIRONMENT, CACHEBRIDGE_LOG_LEVEL, CACHEBRIDGE_LOG_FORMAT
    - CACHEBRIDGE_CACHE_BACKEND, CACHEBRIDGE_CACHE_DIR
    - CACHEBRIDGE_CACHE_NAMESPACE, CACHEBRIDGE_CACHE_DEFAULT_LIFETIME
    """

    model_config = SettingsConfigDict(
        env_prefix="CACHEBRIDGE_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    cache_backend: Optional[CacheBackend] = None
    cache_dir: Optional[Path] = None
    cache_namespace: Optional[str] = None
    cache_default_lifetime: Optional[int] = None

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
