"""Shared fixtures for the Brand Guardian test suite."""

from typing import Any, Dict

import pytest

from brand_guardian.cache.result_cache import ResultCache
from brand_guardian.config.manager import ConfigManager, SafetyConfig
from brand_guardian.domain.brand import Brand
from brand_guardian.domain.content import Content
from brand_guardian.repository.brand_repository import (
    InMemoryBrandSchemaRepository,
    load_default_schema,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def brand_schema() -> Dict[str, Any]:
    """The bundled TechFuture profile as a raw document."""
    return load_default_schema()


@pytest.fixture
def brand(brand_schema: Dict[str, Any]) -> Brand:
    return Brand.from_dict(brand_schema)


@pytest.fixture
def minimal_brand() -> Brand:
    """A brand with only the required fields and no terminology rules."""
    return Brand.from_dict({"name": "Plain", "toneGuidelines": {"primaryTone": "confident"}})


@pytest.fixture
def safety_config() -> SafetyConfig:
    return SafetyConfig()


@pytest.fixture
def make_content():
    def _make(text: str, context: str = None) -> Content:
        return Content(text=text, context=context)

    return _make


@pytest.fixture
def config_manager() -> ConfigManager:
    """Config manager with defaults only, isolated from the environment."""
    return ConfigManager(config_path=None, apply_env_overrides=False)


@pytest.fixture
def brand_repository(brand_schema: Dict[str, Any]) -> InMemoryBrandSchemaRepository:
    return InMemoryBrandSchemaRepository(brand_schema)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def result_cache(clock: FakeClock) -> ResultCache:
    return ResultCache(default_ttl_seconds=60, max_size=10, cleanup_interval_seconds=30, clock=clock)
