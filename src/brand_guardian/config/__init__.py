"""Configuration management."""

from .manager import (
    AppConfig,
    CacheConfig,
    ComplianceWeights,
    ConfigManager,
    SafetyConfig,
    SecurityConfig,
)
from .settings import ServiceSettings, get_settings

__all__ = [
    "AppConfig",
    "CacheConfig",
    "ComplianceWeights",
    "ConfigManager",
    "SafetyConfig",
    "SecurityConfig",
    "ServiceSettings",
    "get_settings",
]
