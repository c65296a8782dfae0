"""Plugin pipeline: base classes, manager and discovery."""

from .base import EnricherPlugin, EvaluationPlugin, FormatterPlugin, PluginBase, PluginInterface
from .discovery import discover_manifests, load_plugins
from .models import (
    EnrichedContent,
    PluginContext,
    PluginEvaluationResult,
    PluginIssue,
    PluginManifest,
)
from .plugin_manager import PluginManager

__all__ = [
    "EnricherPlugin",
    "EvaluationPlugin",
    "FormatterPlugin",
    "PluginBase",
    "PluginInterface",
    "PluginManager",
    "EnrichedContent",
    "PluginContext",
    "PluginEvaluationResult",
    "PluginIssue",
    "PluginManifest",
    "discover_manifests",
    "load_plugins",
]
