"""Composition root wiring configuration, repositories, cache, plugins and use cases."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .application import (
    BatchEvaluationUseCase,
    CheckComplianceUseCase,
    CheckSafetyUseCase,
    CombinedEvaluationUseCase,
    UpdateConfigUseCase,
)
from .cache.result_cache import ResultCache
from .config.manager import ConfigManager
from .config.settings import ServiceSettings
from .domain.repositories import BrandSchemaRepository
from .engines.compliance_aggregator import ComplianceEngine
from .engines.safety_categorizer import SafetyCategorizer
from .plugins.builtin import builtin_plugins
from .plugins.discovery import load_plugins
from .plugins.plugin_manager import PluginManager
from .repository.brand_repository import (
    FileBrandSchemaRepository,
    InMemoryBrandSchemaRepository,
)

logger = logging.getLogger(__name__)


class BrandGuardianService:
    """Holds every component of a running engine.

    Components are passed in explicitly; :func:`create_service` builds the
    default graph from :class:`ServiceSettings`.
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        brand_repository: BrandSchemaRepository,
        cache: Optional[ResultCache] = None,
        plugin_manager: Optional[PluginManager] = None,
        compliance_engine: Optional[ComplianceEngine] = None,
    ):
        self.config_manager = config_manager
        self.brand_repository = brand_repository
        self.cache = cache
        self.plugin_manager = plugin_manager

        self.safety = CheckSafetyUseCase(config_manager, SafetyCategorizer(), cache)
        self.compliance = CheckComplianceUseCase(
            config_manager, brand_repository, compliance_engine, cache
        )
        self.combined = CombinedEvaluationUseCase(
            self.safety, self.compliance, plugin_manager, brand_repository
        )
        self.batch = BatchEvaluationUseCase(
            config_manager, self.safety, self.compliance, self.combined
        )
        self.update_config = UpdateConfigUseCase(config_manager)

    async def start(
        self,
        load_builtins: bool = True,
        plugins_dir: Optional[str] = None,
        plugin_configs: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> List[str]:
        """Register built-in and discovered plugins; returns registered ids."""
        if self.plugin_manager is None:
            return []
        plugin_configs = plugin_configs or {}
        registered = []
        if load_builtins:
            for plugin in builtin_plugins():
                if await self.plugin_manager.register(
                    plugin, plugin_configs.get(plugin.plugin_id)
                ):
                    registered.append(plugin.plugin_id)
        registered.extend(await load_plugins(self.plugin_manager, plugins_dir))
        logger.info("Service started with %d plugin(s)", len(registered))
        return registered

    async def shutdown(self) -> None:
        if self.plugin_manager is not None:
            await self.plugin_manager.shutdown()
        if self.cache is not None:
            await self.cache.clear()

    async def reload(self) -> None:
        """Re-read configuration and brand schema and drop cached results."""
        self.config_manager.reload()
        await self.brand_repository.reload()
        if self.cache is not None:
            await self.cache.clear()

    def get_status(self) -> Dict[str, Any]:
        return {
            "config": self.config_manager.get_config_dict(),
            "cache": self.cache.get_stats() if self.cache is not None else None,
            "plugins": (
                self.plugin_manager.get_plugin_statistics()
                if self.plugin_manager is not None
                else None
            ),
        }


def create_service(settings: Optional[ServiceSettings] = None) -> BrandGuardianService:
    """Build a service from deployment settings.

    Call :meth:`BrandGuardianService.start` afterwards to register plugins.
    """
    settings = settings or ServiceSettings()
    config_manager = ConfigManager(settings.config_path)
    config = config_manager.get_config()

    if settings.brand_schema_path:
        brand_repository: BrandSchemaRepository = FileBrandSchemaRepository(
            settings.brand_schema_path
        )
    else:
        brand_repository = InMemoryBrandSchemaRepository()

    cache = None
    if config.cache.enabled:
        cache = ResultCache(
            default_ttl_seconds=config.cache.safety_ttl_seconds,
            max_size=config.cache.max_size,
            cleanup_interval_seconds=config.cache.cleanup_interval_seconds,
        )

    plugin_manager = PluginManager(settings.system_version) if settings.enable_plugins else None
    return BrandGuardianService(
        config_manager=config_manager,
        brand_repository=brand_repository,
        cache=cache,
        plugin_manager=plugin_manager,
    )


__all__ = ["BrandGuardianService", "create_service"]
