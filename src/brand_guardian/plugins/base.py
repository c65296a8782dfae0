"""Plugin base classes enforcing a consistent lifecycle."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .models import EnrichedContent, PluginContext, PluginEvaluationResult


class PluginInterface(ABC):
    """Common interface for all plugins."""

    @property
    @abstractmethod
    def plugin_id(self) -> str:
        """Return the unique plugin identifier."""

    @property
    @abstractmethod
    def plugin_name(self) -> str:
        """Return the display name."""

    @property
    @abstractmethod
    def plugin_version(self) -> str:
        """Return the plugin version string."""

    @abstractmethod
    def is_compatible(self, system_version: str) -> bool:
        """Return True when the plugin can run on the given system version."""

    @abstractmethod
    async def initialize(self, config: Dict[str, Any]) -> bool:
        """Perform plugin initialization using the provided configuration."""

    @abstractmethod
    async def cleanup(self) -> None:
        """Release any resources acquired by the plugin."""


class PluginBase(PluginInterface):
    """Base implementation that handles repeated lifecycle plumbing."""

    def __init__(
        self, plugin_id: str, name: str, version: str, description: str = ""
    ) -> None:
        self._id = plugin_id
        self._name = name
        self._version = version
        self.description = description
        self._config: Dict[str, Any] = {}
        self._initialized = False
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # --- interface implementation -------------------------------------------------
    @property
    def plugin_id(self) -> str:
        return self._id

    @property
    def plugin_name(self) -> str:
        return self._name

    @property
    def plugin_version(self) -> str:
        return self._version

    @property
    def initialized(self) -> bool:
        return self._initialized

    def is_compatible(self, system_version: str) -> bool:
        """Compatible with every release sharing this plugin's major version."""
        return system_version.split(".")[0] == self._version.split(".")[0]

    async def initialize(self, config: Dict[str, Any]) -> bool:
        try:
            self._config = dict(config)
            await self._initialize_plugin()
            self._initialized = True
            self._logger.info("Plugin initialized: %s", self._id)
            return True
        except Exception as exc:
            self._logger.error("Failed to initialize plugin %s: %s", self._id, exc)
            return False

    async def cleanup(self) -> None:
        try:
            if self._initialized:
                await self._cleanup_plugin()
                self._initialized = False
                self._logger.info("Plugin cleaned up: %s", self._id)
        except Exception as exc:
            self._logger.error("Failed to cleanup plugin %s: %s", self._id, exc)

    # --- helpers for subclasses ---------------------------------------------------
    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError(f"Plugin {self._id} not initialized")

    def get_config(self) -> Dict[str, Any]:
        return dict(self._config)

    def update_config(self, config: Dict[str, Any]) -> None:
        self._config.update(config)

    async def _initialize_plugin(self) -> None:
        """Hook for plugin specific initialization."""

    async def _cleanup_plugin(self) -> None:
        """Hook for plugin specific cleanup."""


class EvaluationPlugin(PluginBase):
    """Plugin that evaluates content with its own rules."""

    evaluation_type: str = "custom"

    @abstractmethod
    async def evaluate(
        self, content: str, context: Optional[PluginContext] = None
    ) -> PluginEvaluationResult:
        """Evaluate content and return a result."""


class EnricherPlugin(PluginBase):
    """Plugin that transforms or annotates content before evaluation.

    Enrichers with a higher ``priority`` run first.
    """

    priority: int = 0

    @abstractmethod
    async def enrich(
        self, content: str, metadata: Optional[Dict[str, Any]] = None
    ) -> EnrichedContent:
        """Return the enriched content and the metadata it adds."""


class FormatterPlugin(PluginBase):
    """Plugin that renders evaluation results."""

    supported_formats: List[str] = []

    def supports(self, output_format: str) -> bool:
        return output_format in self.supported_formats

    @abstractmethod
    async def format(self, result: Dict[str, Any], output_format: str) -> str:
        """Render a serialized evaluation result."""


__all__ = [
    "PluginInterface",
    "PluginBase",
    "EvaluationPlugin",
    "EnricherPlugin",
    "FormatterPlugin",
]
