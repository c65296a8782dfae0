"""Tests for ConfigManager implementation."""

from pathlib import Path

import pytest
import yaml

from brand_guardian.config import ConfigManager, ServiceSettings
from brand_guardian.config.settings import LogLevel
from brand_guardian.domain.evaluations import RiskLevel, SafetyCategory
from brand_guardian.exceptions import ConfigurationError


def _write_config(path: Path, data) -> Path:
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """Test that defaults are used when the config file does not exist."""
        manager = ConfigManager(config_path=tmp_path / "missing.yaml", apply_env_overrides=False)
        config = manager.get_config()

        assert config.safety.categories == list(SafetyCategory)
        assert config.safety.tolerance_for(SafetyCategory.PROFANITY) == RiskLevel.MEDIUM
        assert config.compliance.tone == 0.35
        assert config.cache.safety_ttl_seconds == 3600
        assert config.cache.compliance_ttl_seconds == 1800
        assert config.security.max_batch_size == 100

    def test_config_loading_from_file(self, tmp_path: Path) -> None:
        """Test loading configuration from an existing YAML file."""
        config_path = _write_config(
            tmp_path / "config.yaml",
            {
                "safety": {
                    "categories": ["PROFANITY", "VIOLENCE"],
                    "risk_tolerances": {"VIOLENCE": "none"},
                    "blocked_topics": ["gambling"],
                },
                "compliance": {"tone": 2, "voice": 1, "terminology": 1},
                "cache": {"safety_ttl_seconds": 60},
            },
        )
        config = ConfigManager(config_path=config_path, apply_env_overrides=False).get_config()

        assert config.safety.categories == [SafetyCategory.PROFANITY, SafetyCategory.VIOLENCE]
        assert config.safety.tolerance_for(SafetyCategory.VIOLENCE) == RiskLevel.NONE
        assert config.safety.tolerance_for(SafetyCategory.PROFANITY) == RiskLevel.MEDIUM
        assert config.safety.blocked_topics == ["gambling"]
        assert config.compliance.tone == 0.5
        assert config.cache.safety_ttl_seconds == 60

    def test_environment_variable_overrides(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that environment variables override file values."""
        config_path = _write_config(tmp_path / "config.yaml", {"cache": {"enabled": True}})
        monkeypatch.setenv("BRAND_GUARDIAN_CACHE_ENABLED", "false")
        monkeypatch.setenv("BRAND_GUARDIAN_SAFETY_BLOCKED_TOPICS", "gambling, crypto ,")
        monkeypatch.setenv("BRAND_GUARDIAN_MAX_BATCH_SIZE", "25")

        config = ConfigManager(config_path=config_path).get_config()

        assert config.cache.enabled is False
        assert config.safety.blocked_topics == ["gambling", "crypto"]
        assert config.security.max_batch_size == 25

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("safety: [unclosed")
        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=config_path, apply_env_overrides=False)

    def test_non_mapping_file_raises(self, tmp_path: Path) -> None:
        config_path = _write_config(tmp_path / "config.yaml", ["not", "a", "mapping"])
        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=config_path, apply_env_overrides=False)

    def test_unknown_risk_level_raises(self, tmp_path: Path) -> None:
        config_path = _write_config(
            tmp_path / "config.yaml", {"safety": {"risk_tolerances": {"VIOLENCE": "EXTREME"}}}
        )
        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=config_path, apply_env_overrides=False)

    def test_unknown_categories_ignored(self, config_manager: ConfigManager) -> None:
        safety = config_manager.update_safety_config({"categories": ["PROFANITY", "ASTROLOGY"]})
        assert safety.categories == [SafetyCategory.PROFANITY]

    def test_snapshot_is_isolated(self, config_manager: ConfigManager) -> None:
        """Mutating a returned snapshot never changes the active configuration."""
        snapshot = config_manager.get_config()
        snapshot.safety.blocked_topics.append("gambling")
        assert config_manager.get_config().safety.blocked_topics == []


class TestRuntimeUpdates:
    """Runtime updates are validated in full before they apply."""

    def test_partial_safety_update(self, config_manager: ConfigManager) -> None:
        config_manager.update_safety_config(
            {"blocked_topics": ["gambling"], "risk_tolerances": {"PROFANITY": "LOW"}}
        )
        safety = config_manager.safety
        assert safety.blocked_topics == ["gambling"]
        assert safety.tolerance_for(SafetyCategory.PROFANITY) == RiskLevel.LOW
        assert safety.tolerance_for(SafetyCategory.ALCOHOL_TOBACCO) == RiskLevel.MEDIUM

    def test_lists_are_replaced(self, config_manager: ConfigManager) -> None:
        config_manager.update_safety_config({"allowed_topics": ["history"]})
        config_manager.update_safety_config({"allowed_topics": ["education"]})
        assert config_manager.safety.allowed_topics == ["education"]

    def test_failed_update_changes_nothing(self, config_manager: ConfigManager) -> None:
        before = config_manager.get_config_dict()
        with pytest.raises(ConfigurationError):
            config_manager.update_safety_config(
                {"blocked_topics": ["gambling"], "risk_tolerances": {"VIOLENCE": "EXTREME"}}
            )
        assert config_manager.get_config_dict() == before

    def test_unknown_field_rejected(self, config_manager: ConfigManager) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            config_manager.update_safety_config({"colour": "red"})
        assert "colour" in str(exc_info.value)

    def test_weights_update(self, config_manager: ConfigManager) -> None:
        weights = config_manager.update_compliance_weights(tone=1, voice=1, terminology=2)
        assert (weights.tone, weights.voice, weights.terminology) == (0.25, 0.25, 0.5)
        assert config_manager.compliance_weights == weights

    def test_invalid_weights_leave_config_unchanged(self, config_manager: ConfigManager) -> None:
        before = config_manager.compliance_weights
        with pytest.raises(ConfigurationError):
            config_manager.update_compliance_weights(voice=float("nan"))
        assert config_manager.compliance_weights == before

    def test_reload_discards_runtime_updates(self, tmp_path: Path) -> None:
        config_path = _write_config(
            tmp_path / "config.yaml", {"safety": {"blocked_topics": ["gambling"]}}
        )
        manager = ConfigManager(config_path=config_path, apply_env_overrides=False)
        manager.update_safety_config({"blocked_topics": ["crypto"]})
        manager.reload()
        assert manager.safety.blocked_topics == ["gambling"]

    def test_save_and_load_roundtrip(self, tmp_path: Path, config_manager: ConfigManager) -> None:
        config_manager.update_safety_config({"sensitive_keywords": ["layoffs"]})
        saved = config_manager.save_config(tmp_path / "nested" / "saved.yaml")

        reloaded = ConfigManager(config_path=saved, apply_env_overrides=False)
        assert reloaded.safety.sensitive_keywords == ["layoffs"]
        assert reloaded.get_config_dict() == config_manager.get_config_dict()

    def test_save_without_path_raises(self, config_manager: ConfigManager) -> None:
        with pytest.raises(ConfigurationError):
            config_manager.save_config()


class TestServiceSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BRAND_GUARDIAN_LOG_LEVEL", raising=False)
        settings = ServiceSettings(_env_file=None)
        assert settings.log_level == LogLevel.INFO
        assert settings.enable_plugins is True
        assert settings.brand_schema_path is None

    def test_environment_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BRAND_GUARDIAN_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("BRAND_GUARDIAN_ENABLE_PLUGINS", "false")
        settings = ServiceSettings(_env_file=None)
        assert settings.log_level == LogLevel.DEBUG
        assert settings.enable_plugins is False
