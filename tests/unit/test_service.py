"""Tests for the service composition root."""

import json
from pathlib import Path

import pytest
import yaml

from brand_guardian.cache.result_cache import ResultCache
from brand_guardian.config.settings import ServiceSettings
from brand_guardian.repository.brand_repository import (
    FileBrandSchemaRepository,
    InMemoryBrandSchemaRepository,
)
from brand_guardian.service import create_service


def _settings(**overrides) -> ServiceSettings:
    return ServiceSettings(_env_file=None, **overrides)


class TestCreateService:
    """Test cases for building the default component graph."""

    def test_defaults(self) -> None:
        service = create_service(_settings())
        assert isinstance(service.brand_repository, InMemoryBrandSchemaRepository)
        assert isinstance(service.cache, ResultCache)
        assert service.plugin_manager is not None

    def test_brand_file_and_disabled_plugins(self, tmp_path: Path) -> None:
        brand_file = tmp_path / "brand.json"
        brand_file.write_text(json.dumps({"name": "Acme", "toneGuidelines": {"primaryTone": "calm"}}))

        service = create_service(
            _settings(brand_schema_path=str(brand_file), enable_plugins=False)
        )

        assert isinstance(service.brand_repository, FileBrandSchemaRepository)
        assert service.plugin_manager is None

    def test_cache_can_be_disabled(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"cache": {"enabled": False}}))

        service = create_service(_settings(config_path=str(config_file)))

        assert service.cache is None
        assert service.get_status()["cache"] is None


class TestServiceLifecycle:
    @pytest.mark.asyncio
    async def test_start_registers_builtins(self) -> None:
        service = create_service(_settings())
        registered = await service.start()
        assert registered == ["profanity-filter", "sentiment-enricher", "json-formatter"]

        status = service.get_status()
        assert set(status) == {"config", "cache", "plugins"}
        assert status["plugins"]["total_plugins"] == 3

        await service.shutdown()
        assert service.get_status()["plugins"]["total_plugins"] == 0

    @pytest.mark.asyncio
    async def test_start_without_plugin_manager(self) -> None:
        service = create_service(_settings(enable_plugins=False))
        assert await service.start() == []

    @pytest.mark.asyncio
    async def test_start_without_builtins(self) -> None:
        service = create_service(_settings())
        assert await service.start(load_builtins=False) == []

    @pytest.mark.asyncio
    async def test_reload_clears_cache_and_rereads_brand(self, tmp_path: Path) -> None:
        brand_file = tmp_path / "brand.json"
        brand_file.write_text(json.dumps({"name": "Acme", "toneGuidelines": {"primaryTone": "calm"}}))
        service = create_service(_settings(brand_schema_path=str(brand_file)))

        await service.safety.execute("A calm announcement.")
        assert len(service.cache) == 1

        brand_file.write_text(json.dumps({"name": "Acme 2", "toneGuidelines": {"primaryTone": "calm"}}))
        await service.reload()

        assert len(service.cache) == 0
        assert (await service.brand_repository.load()).name == "Acme 2"
