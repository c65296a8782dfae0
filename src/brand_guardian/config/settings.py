"""Process-level settings read from the environment.

Everything that varies per deployment (file locations, log output, plugin
loading) lives here; evaluation behaviour lives in :mod:`.manager`.
"""

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .. import SYSTEM_VERSION


class LogLevel(str, Enum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ServiceSettings(BaseSettings):
    """Deployment settings for the evaluation service and CLI."""

    model_config = SettingsConfigDict(
        env_prefix="BRAND_GUARDIAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(default="development")
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="console", pattern="^(json|console)$")
    log_file: Optional[str] = Field(default=None)

    config_path: Optional[str] = Field(
        default=None, description="YAML file with evaluation configuration"
    )
    brand_schema_path: Optional[str] = Field(
        default=None, description="JSON/YAML brand profile; bundled default when unset"
    )

    enable_plugins: bool = Field(default=True)
    plugins_dir: Optional[str] = Field(
        default=None, description="Directory scanned for plugin manifests"
    )
    load_builtin_plugins: bool = Field(default=True)
    system_version: str = Field(default=SYSTEM_VERSION)


def get_settings() -> ServiceSettings:
    return ServiceSettings()


__all__ = ["LogLevel", "ServiceSettings", "get_settings"]
