"""
Configuration Manager for Brand Guardian.

Handles YAML-configurable settings: safety categories and tolerances,
compliance weights, cache TTLs and security limits. Readers always receive
an immutable snapshot; updates are validated in full before they replace the
active configuration.
"""

import copy
import logging
import math
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..domain.evaluations import RiskLevel, SafetyCategory
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "BRAND_GUARDIAN_"

DEFAULT_RISK_TOLERANCES: Dict[SafetyCategory, RiskLevel] = {
    SafetyCategory.SEXUAL_CONTENT: RiskLevel.LOW,
    SafetyCategory.VIOLENCE: RiskLevel.LOW,
    SafetyCategory.HATE_SPEECH: RiskLevel.NONE,
    SafetyCategory.HARASSMENT: RiskLevel.NONE,
    SafetyCategory.SELF_HARM: RiskLevel.NONE,
    SafetyCategory.ILLEGAL_ACTIVITIES: RiskLevel.NONE,
    SafetyCategory.PROFANITY: RiskLevel.MEDIUM,
    SafetyCategory.ALCOHOL_TOBACCO: RiskLevel.MEDIUM,
    SafetyCategory.POLITICAL: RiskLevel.MEDIUM,
    SafetyCategory.RELIGION: RiskLevel.MEDIUM,
    SafetyCategory.SENTIMENT_ANALYSIS: RiskLevel.MEDIUM,
    SafetyCategory.CONTEXTUAL_ANALYSIS: RiskLevel.MEDIUM,
}


def _string_list(value: Any, field_name: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        raise ValueError(f"{field_name} must be a list of strings")
    cleaned = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must contain only strings")
        if item.strip():
            cleaned.append(item.strip())
    return cleaned


class SafetyConfig(BaseModel):
    """Brand safety evaluation settings."""

    model_config = ConfigDict(frozen=True)

    categories: List[SafetyCategory] = Field(
        default_factory=lambda: list(SafetyCategory),
        description="Categories to evaluate; empty means all",
    )
    risk_tolerances: Dict[SafetyCategory, RiskLevel] = Field(
        default_factory=lambda: dict(DEFAULT_RISK_TOLERANCES),
        description="Highest acceptable risk per category",
    )
    sensitive_keywords: List[str] = Field(default_factory=list)
    allowed_topics: List[str] = Field(default_factory=list)
    blocked_topics: List[str] = Field(default_factory=list)

    @field_validator("categories", mode="before")
    @classmethod
    def validate_categories(cls, v: Any) -> List[SafetyCategory]:
        if v is None or v == []:
            return list(SafetyCategory)
        if not isinstance(v, (list, tuple, set)):
            raise ValueError("categories must be a list")
        known = []
        for item in v:
            category = SafetyCategory.lookup(item)
            if category is None:
                logger.warning("Ignoring unknown safety category: %s", item)
                continue
            if category not in known:
                known.append(category)
        return known

    @field_validator("risk_tolerances", mode="before")
    @classmethod
    def validate_risk_tolerances(cls, v: Any) -> Dict[SafetyCategory, RiskLevel]:
        tolerances = dict(DEFAULT_RISK_TOLERANCES)
        if v is None:
            return tolerances
        if not isinstance(v, dict):
            raise ValueError("risk_tolerances must be a mapping")
        for key, level in v.items():
            category = SafetyCategory.lookup(key)
            if category is None:
                logger.warning("Ignoring tolerance for unknown safety category: %s", key)
                continue
            tolerances[category] = RiskLevel.parse(level)
        return tolerances

    @field_validator("sensitive_keywords", "allowed_topics", "blocked_topics", mode="before")
    @classmethod
    def validate_string_lists(cls, v: Any, info: Any) -> List[str]:
        return _string_list(v, info.field_name)

    def tolerance_for(self, category: SafetyCategory) -> RiskLevel:
        return self.risk_tolerances.get(category, RiskLevel.NONE)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": [c.value for c in self.categories],
            "risk_tolerances": {
                c.value: level.value for c, level in self.risk_tolerances.items()
            },
            "sensitive_keywords": list(self.sensitive_keywords),
            "allowed_topics": list(self.allowed_topics),
            "blocked_topics": list(self.blocked_topics),
        }


class ComplianceWeights(BaseModel):
    """Relative weight of each analyzer in the compliance score.

    Weights are always stored normalized so that they sum to 1.
    """

    model_config = ConfigDict(frozen=True)

    tone: float = Field(default=0.35, description="Tone analyzer weight")
    voice: float = Field(default=0.30, description="Voice analyzer weight")
    terminology: float = Field(default=0.35, description="Terminology analyzer weight")

    @field_validator("tone", "voice", "terminology", mode="before")
    @classmethod
    def validate_weight(cls, v: Any) -> float:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("weight must be a number")
        if not math.isfinite(v) or v < 0:
            raise ValueError("weight must be a finite, non-negative number")
        return float(v)

    @model_validator(mode="after")
    def normalize(self) -> "ComplianceWeights":
        total = self.tone + self.voice + self.terminology
        if total <= 0:
            raise ValueError("weights must have a positive sum")
        if not math.isclose(total, 1.0):
            # scale by the largest weight first so the sum cannot overflow
            largest = max(self.tone, self.voice, self.terminology)
            scaled = [w / largest for w in (self.tone, self.voice, self.terminology)]
            scaled_total = math.fsum(scaled)
            object.__setattr__(self, "tone", scaled[0] / scaled_total)
            object.__setattr__(self, "voice", scaled[1] / scaled_total)
            object.__setattr__(self, "terminology", scaled[2] / scaled_total)
        return self

    def updated(
        self,
        tone: Optional[float] = None,
        voice: Optional[float] = None,
        terminology: Optional[float] = None,
    ) -> "ComplianceWeights":
        """Return a validated, renormalized copy with the given weights replaced."""
        values = {
            "tone": self.tone if tone is None else tone,
            "voice": self.voice if voice is None else voice,
            "terminology": self.terminology if terminology is None else terminology,
        }
        try:
            return ComplianceWeights(**values)
        except PydanticValidationError as exc:
            raise ConfigurationError(
                f"Invalid compliance weights: {_first_error(exc)}",
                config_key="compliance.weights",
            ) from exc


class CacheConfig(BaseModel):
    """Result cache settings."""

    enabled: bool = Field(default=True, description="Cache evaluation results")
    safety_ttl_seconds: float = Field(default=3600, gt=0, description="Safety result TTL")
    compliance_ttl_seconds: float = Field(
        default=1800, gt=0, description="Compliance result TTL"
    )
    max_size: int = Field(default=1000, ge=1, le=1_000_000, description="Max entries")
    cleanup_interval_seconds: float = Field(
        default=300, gt=0, description="Minimum interval between expiry sweeps"
    )


class SecurityConfig(BaseModel):
    """Input limits."""

    max_content_length: int = Field(
        default=100_000, ge=1, description="Maximum characters per content item"
    )
    max_batch_size: int = Field(default=100, ge=1, le=1000, description="Max batch items")
    batch_concurrency: int = Field(
        default=10, ge=1, le=100, description="Batch items evaluated concurrently"
    )


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default="json", pattern="^(json|console)$")
    file: Optional[str] = Field(default=None, description="Optional log file path")
    privacy_filter: bool = Field(default=True, description="Redact content fields")

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class AppConfig(BaseModel):
    """Complete configuration snapshot."""

    model_config = ConfigDict(frozen=True)

    environment: str = "development"
    safety: SafetyConfig = Field(default_factory=SafetyConfig)
    compliance: ComplianceWeights = Field(default_factory=ComplianceWeights)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "environment": self.environment,
            "safety": self.safety.to_dict(),
            "compliance": self.compliance.model_dump(),
            "cache": self.cache.model_dump(),
            "security": self.security.model_dump(),
            "logging": self.logging.model_dump(),
        }


def _first_error(exc: PydanticValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    error = errors[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


class ConfigManager:
    """
    Manages the engine configuration.

    Precedence: defaults -> YAML file -> environment variables -> runtime
    updates. ``get_config`` returns a deep copy so callers can never mutate
    the active configuration.
    """

    ENV_MAPPINGS = {
        f"{ENV_PREFIX}ENVIRONMENT": (None, "environment"),
        f"{ENV_PREFIX}SAFETY_SENSITIVE_KEYWORDS": ("safety", "sensitive_keywords"),
        f"{ENV_PREFIX}SAFETY_ALLOWED_TOPICS": ("safety", "allowed_topics"),
        f"{ENV_PREFIX}SAFETY_BLOCKED_TOPICS": ("safety", "blocked_topics"),
        f"{ENV_PREFIX}CACHE_ENABLED": ("cache", "enabled"),
        f"{ENV_PREFIX}CACHE_SAFETY_TTL_SECONDS": ("cache", "safety_ttl_seconds"),
        f"{ENV_PREFIX}CACHE_COMPLIANCE_TTL_SECONDS": ("cache", "compliance_ttl_seconds"),
        f"{ENV_PREFIX}CACHE_MAX_SIZE": ("cache", "max_size"),
        f"{ENV_PREFIX}MAX_CONTENT_LENGTH": ("security", "max_content_length"),
        f"{ENV_PREFIX}MAX_BATCH_SIZE": ("security", "max_batch_size"),
        f"{ENV_PREFIX}LOG_LEVEL": ("logging", "level"),
        f"{ENV_PREFIX}LOG_FORMAT": ("logging", "format"),
    }

    LIST_KEYS = {"sensitive_keywords", "allowed_topics", "blocked_topics"}

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        apply_env_overrides: bool = True,
    ):
        """
        Initialize ConfigManager.

        Args:
            config_path: Optional path to a YAML configuration file. When it is
                None or the file does not exist, defaults are used.
            apply_env_overrides: Whether ``BRAND_GUARDIAN_*`` variables apply.
        """
        self.config_path = Path(config_path) if config_path else None
        self.apply_env_overrides = apply_env_overrides
        self._lock = threading.Lock()
        self._config = self._load_config()

    def _load_config(self) -> AppConfig:
        data = self._read_file()
        if self.apply_env_overrides:
            self._apply_env_overrides(data)
        return self._build(data)

    def _read_file(self) -> Dict[str, Any]:
        if self.config_path is None or not self.config_path.exists():
            return {}
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Invalid YAML configuration: {exc}", config_key=str(self.config_path)
            ) from exc
        except OSError as exc:
            raise ConfigurationError(
                f"Failed to read configuration from {self.config_path}: {exc}",
                config_key=str(self.config_path),
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                config_key=str(self.config_path),
            )
        return data

    @staticmethod
    def _build(data: Dict[str, Any]) -> AppConfig:
        try:
            return AppConfig(**data)
        except PydanticValidationError as exc:
            raise ConfigurationError(
                f"Invalid configuration: {_first_error(exc)}"
            ) from exc

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to raw configuration data."""
        for env_var, (section, key) in self.ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            converted: Any = value
            if key in self.LIST_KEYS:
                converted = [item.strip() for item in value.split(",") if item.strip()]
            elif key == "enabled":
                converted = value.lower() in ("true", "1", "yes", "on")
            if section is None:
                data[key] = converted
            else:
                section_data = data.setdefault(section, {})
                if not isinstance(section_data, dict):
                    raise ConfigurationError(
                        f"Configuration section '{section}' must be a mapping",
                        config_key=section,
                    )
                section_data[key] = converted

    def get_config(self) -> AppConfig:
        """Return a snapshot of the active configuration."""
        with self._lock:
            return copy.deepcopy(self._config)

    def get_config_dict(self) -> Dict[str, Any]:
        return self.get_config().to_dict()

    @property
    def safety(self) -> SafetyConfig:
        return self.get_config().safety

    @property
    def compliance_weights(self) -> ComplianceWeights:
        return self.get_config().compliance

    def update_safety_config(self, updates: Dict[str, Any]) -> SafetyConfig:
        """Validate and apply a partial safety configuration update.

        Provided fields replace the current ones (lists are replaced, not
        appended). Nothing changes when validation fails.
        """
        if not isinstance(updates, dict):
            raise ConfigurationError("Safety update must be a mapping", config_key="safety")
        unknown = set(updates) - set(SafetyConfig.model_fields)
        if unknown:
            raise ConfigurationError(
                f"Unknown safety configuration fields: {', '.join(sorted(unknown))}",
                config_key="safety",
            )
        with self._lock:
            current = self._config.safety.to_dict()
            if "risk_tolerances" in updates and isinstance(updates["risk_tolerances"], dict):
                merged_tolerances = dict(current["risk_tolerances"])
                merged_tolerances.update(updates["risk_tolerances"])
                updates = {**updates, "risk_tolerances": merged_tolerances}
            current.update(updates)
            try:
                safety = SafetyConfig(**current)
            except PydanticValidationError as exc:
                raise ConfigurationError(
                    f"Invalid safety configuration: {_first_error(exc)}",
                    config_key="safety",
                ) from exc
            self._config = self._config.model_copy(update={"safety": safety})
            logger.info("Safety configuration updated: %s", ", ".join(sorted(updates)))
            return safety

    def update_compliance_weights(
        self,
        tone: Optional[float] = None,
        voice: Optional[float] = None,
        terminology: Optional[float] = None,
    ) -> ComplianceWeights:
        with self._lock:
            weights = self._config.compliance.updated(
                tone=tone, voice=voice, terminology=terminology
            )
            self._config = self._config.model_copy(update={"compliance": weights})
            logger.info(
                "Compliance weights updated: tone=%.3f voice=%.3f terminology=%.3f",
                weights.tone,
                weights.voice,
                weights.terminology,
            )
            return weights

    def reload(self) -> AppConfig:
        """Re-read the file and environment, discarding runtime updates."""
        config = self._load_config()
        with self._lock:
            self._config = config
        logger.info("Configuration reloaded")
        return self.get_config()

    def save_config(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Save current configuration to a YAML file."""
        save_path = Path(path) if path else self.config_path
        if save_path is None:
            raise ConfigurationError("No configuration path to save to")
        save_path.parent.mkdir(parents=True, exist_ok=True)
        with open(save_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.get_config_dict(), f, default_flow_style=False, indent=2)
        return save_path

    def __repr__(self) -> str:
        return f"ConfigManager(config_path={self.config_path})"


__all__ = [
    "AppConfig",
    "CacheConfig",
    "ComplianceWeights",
    "ConfigManager",
    "DEFAULT_RISK_TOLERANCES",
    "LoggingConfig",
    "SafetyConfig",
    "SecurityConfig",
]
