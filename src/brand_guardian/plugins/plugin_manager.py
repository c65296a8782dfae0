"""Plugin manager following SRP.

This module provides ONLY plugin registration and pipeline execution.
Single Responsibility: Manage plugin lifecycle and run plugins by role.
Does NOT handle: plugin discovery on disk, built-in evaluation.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from .. import SYSTEM_VERSION
from ..exceptions import PluginError
from .base import EnricherPlugin, EvaluationPlugin, FormatterPlugin, PluginBase
from .models import EnrichedContent, PluginContext, PluginEvaluationResult

logger = logging.getLogger(__name__)


class PluginManager:
    """Plugin registry and execution pipeline.

    A plugin is added to every registry whose role it implements. Enrichers
    run sequentially in descending priority, evaluation plugins run
    concurrently and in isolation, formatters are chosen by output format.
    """

    def __init__(self, system_version: str = SYSTEM_VERSION):
        """Initialize plugin manager."""
        self.system_version = system_version
        self._plugins: Dict[str, PluginBase] = {}
        self._evaluators: Dict[str, EvaluationPlugin] = {}
        self._enrichers: List[EnricherPlugin] = []
        self._formatters: Dict[str, FormatterPlugin] = {}
        self._plugin_configs: Dict[str, Dict[str, Any]] = {}
        self._failures: Dict[str, int] = {}

    async def register(
        self, plugin: PluginBase, config: Optional[Dict[str, Any]] = None
    ) -> bool:
        """Register a plugin.

        Args:
            plugin: Plugin instance
            config: Optional plugin configuration

        Returns:
            True if registration successful; incompatible plugins are rejected
        """
        plugin_id = plugin.plugin_id
        try:
            compatible = plugin.is_compatible(self.system_version)
        except Exception as exc:
            logger.error("Compatibility check failed for plugin %s: %s", plugin_id, exc)
            return False
        if not compatible:
            logger.warning(
                "Plugin %s v%s is not compatible with system version %s",
                plugin_id,
                plugin.plugin_version,
                self.system_version,
            )
            return False

        if plugin_id in self._plugins:
            logger.warning("Plugin %s already registered, replacing", plugin_id)
            await self.unregister(plugin_id)

        plugin_config = dict(config or {})
        if not await plugin.initialize(plugin_config):
            logger.error("Failed to initialize plugin: %s", plugin_id)
            return False

        self._plugins[plugin_id] = plugin
        self._plugin_configs[plugin_id] = plugin_config
        if isinstance(plugin, EvaluationPlugin):
            self._evaluators[plugin_id] = plugin
        if isinstance(plugin, EnricherPlugin):
            self._enrichers.append(plugin)
            # sort is stable: equal priorities keep registration order
            self._enrichers.sort(key=lambda p: p.priority, reverse=True)
        if isinstance(plugin, FormatterPlugin):
            self._formatters[plugin_id] = plugin

        logger.info(
            "Registered plugin: %s v%s (%s)",
            plugin_id,
            plugin.plugin_version,
            ", ".join(self.roles_of(plugin)),
        )
        return True

    async def unregister(self, plugin_id: str) -> bool:
        """Run the plugin's cleanup hook and remove it from every registry."""
        plugin = self._plugins.get(plugin_id)
        if plugin is None:
            logger.warning("Plugin %s not found", plugin_id)
            return False

        try:
            await plugin.cleanup()
        except Exception as exc:
            logger.error("Failed to cleanup plugin %s: %s", plugin_id, exc)

        del self._plugins[plugin_id]
        self._plugin_configs.pop(plugin_id, None)
        self._evaluators.pop(plugin_id, None)
        self._formatters.pop(plugin_id, None)
        self._enrichers = [p for p in self._enrichers if p.plugin_id != plugin_id]
        logger.info("Unregistered plugin: %s", plugin_id)
        return True

    async def enrich_content(
        self, content: str, metadata: Optional[Dict[str, Any]] = None
    ) -> EnrichedContent:
        """Run every enricher in priority order.

        Each enricher receives the previous enricher's output text and the
        metadata accumulated so far. A failing enricher is skipped.
        """
        current = content
        accumulated: Dict[str, Any] = dict(metadata or {})
        for enricher in list(self._enrichers):
            try:
                result = EnrichedContent.model_validate(
                    await enricher.enrich(current, dict(accumulated))
                )
            except Exception as exc:
                self._record_failure(enricher.plugin_id, "enrich", exc)
                continue
            current = result.enriched
            accumulated.update(result.metadata)
        return EnrichedContent(original=content, enriched=current, metadata=accumulated)

    async def run_evaluations(
        self,
        content: str,
        context: Optional[PluginContext] = None,
        plugin_ids: Optional[Sequence[str]] = None,
    ) -> List[PluginEvaluationResult]:
        """Run evaluation plugins; failures are logged and omitted from results."""
        if plugin_ids is None:
            evaluators = list(self._evaluators.values())
        else:
            evaluators = [self._evaluators[pid] for pid in plugin_ids if pid in self._evaluators]
        if not evaluators:
            return []

        context = context or PluginContext()
        outcomes = await asyncio.gather(
            *(plugin.evaluate(content, context) for plugin in evaluators),
            return_exceptions=True,
        )

        results = []
        for plugin, outcome in zip(evaluators, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                self._record_failure(plugin.plugin_id, "evaluate", outcome)
                continue
            try:
                results.append(PluginEvaluationResult.model_validate(outcome))
            except ValueError as exc:
                self._record_failure(plugin.plugin_id, "evaluate", exc)
        return results

    async def format_result(
        self, result: Dict[str, Any], output_format: str, plugin_id: Optional[str] = None
    ) -> str:
        """Render a result with the first formatter that supports the format.

        Raises:
            PluginError: when no registered formatter can produce the format
        """
        if plugin_id is not None:
            formatter = self._formatters.get(plugin_id)
            candidates = [formatter] if formatter and formatter.supports(output_format) else []
        else:
            candidates = [f for f in self._formatters.values() if f.supports(output_format)]

        for formatter in candidates:
            try:
                return await formatter.format(result, output_format)
            except Exception as exc:
                self._record_failure(formatter.plugin_id, "format", exc)

        raise PluginError(
            f"No formatter available for format: {output_format}",
            details={"format": output_format},
            plugin_id=plugin_id,
        )

    def _record_failure(self, plugin_id: str, operation: str, exc: Exception) -> None:
        self._failures[plugin_id] = self._failures.get(plugin_id, 0) + 1
        logger.error("Plugin %s failed during %s: %s", plugin_id, operation, exc)

    @staticmethod
    def roles_of(plugin: PluginBase) -> List[str]:
        roles = []
        if isinstance(plugin, EvaluationPlugin):
            roles.append("evaluation")
        if isinstance(plugin, EnricherPlugin):
            roles.append("enricher")
        if isinstance(plugin, FormatterPlugin):
            roles.append("formatter")
        return roles

    def get_plugin(self, plugin_id: str) -> Optional[PluginBase]:
        return self._plugins.get(plugin_id)

    def list_plugins(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": plugin.plugin_id,
                "name": plugin.plugin_name,
                "version": plugin.plugin_version,
                "description": plugin.description,
                "roles": self.roles_of(plugin),
            }
            for plugin in self._plugins.values()
        ]

    def list_formats(self) -> List[str]:
        formats: List[str] = []
        for formatter in self._formatters.values():
            for output_format in formatter.supported_formats:
                if output_format not in formats:
                    formats.append(output_format)
        return formats

    @property
    def has_enrichers(self) -> bool:
        return bool(self._enrichers)

    @property
    def has_evaluators(self) -> bool:
        return bool(self._evaluators)

    def get_plugin_config(self, plugin_id: str) -> Optional[Dict[str, Any]]:
        config = self._plugin_configs.get(plugin_id)
        return dict(config) if config is not None else None

    def update_plugin_config(self, plugin_id: str, config: Dict[str, Any]) -> bool:
        plugin = self._plugins.get(plugin_id)
        if plugin is None:
            logger.warning("Plugin %s not found", plugin_id)
            return False
        self._plugin_configs[plugin_id] = {**self._plugin_configs.get(plugin_id, {}), **config}
        plugin.update_config(config)
        return True

    async def shutdown(self) -> None:
        """Unregister every plugin."""
        for plugin_id in list(self._plugins):
            await self.unregister(plugin_id)
        logger.info("Plugin manager shut down")

    def get_plugin_statistics(self) -> Dict[str, Any]:
        """Get plugin statistics."""
        return {
            "total_plugins": len(self._plugins),
            "evaluation_plugins": list(self._evaluators),
            "enricher_plugins": [p.plugin_id for p in self._enrichers],
            "formatter_plugins": list(self._formatters),
            "failures": dict(self._failures),
            "system_version": self.system_version,
        }


__all__ = ["PluginManager"]
