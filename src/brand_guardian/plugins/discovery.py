"""Plugin discovery from manifest directories.

Each subdirectory of a plugins directory may hold a ``manifest.json`` (or
``manifest.yaml``). Manifests are parsed as data and validated; the entry
point class is then imported and registered with a :class:`PluginManager`.
"""

import importlib
import importlib.util
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple, Type, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import PluginError
from .base import EnricherPlugin, EvaluationPlugin, FormatterPlugin, PluginBase
from .models import PluginManifest
from .plugin_manager import PluginManager

logger = logging.getLogger(__name__)

MANIFEST_FILES = ("manifest.json", "manifest.yaml", "manifest.yml")

_ROLE_CLASSES = {
    "evaluation": EvaluationPlugin,
    "enricher": EnricherPlugin,
    "formatter": FormatterPlugin,
}


def read_manifest(path: Path) -> PluginManifest:
    """Parse and validate one manifest file."""
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw) if path.suffix == ".json" else yaml.safe_load(raw)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise PluginError(f"Unreadable plugin manifest {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise PluginError(f"Plugin manifest {path} must contain an object")
    try:
        return PluginManifest.model_validate(data)
    except PydanticValidationError as exc:
        raise PluginError(
            f"Invalid plugin manifest {path}",
            details={"errors": [e["msg"] for e in exc.errors()]},
            plugin_id=data.get("id") if isinstance(data.get("id"), str) else None,
        ) from exc


def discover_manifests(plugins_dir: Union[str, Path]) -> List[Tuple[PluginManifest, Path]]:
    """Return (manifest, plugin directory) pairs; unreadable manifests are skipped."""
    root = Path(plugins_dir)
    if not root.is_dir():
        logger.warning("Plugins directory not found: %s", root)
        return []

    found = []
    for directory in sorted(p for p in root.iterdir() if p.is_dir()):
        manifest_path = next(
            (directory / name for name in MANIFEST_FILES if (directory / name).is_file()),
            None,
        )
        if manifest_path is None:
            continue
        try:
            found.append((read_manifest(manifest_path), directory))
        except PluginError as exc:
            logger.error("Skipping plugin in %s: %s", directory, exc.message)
    return found


def load_plugin_class(manifest: PluginManifest, directory: Path) -> Type[PluginBase]:
    """Import the manifest's entry point and return its plugin class."""
    if manifest.main:
        entry = (directory / manifest.main).resolve()
        if directory.resolve() not in entry.parents:
            raise PluginError("Plugin entry point escapes its directory", plugin_id=manifest.id)
        if not entry.is_file():
            raise PluginError(f"Plugin entry point not found: {manifest.main}", plugin_id=manifest.id)
        module_name = f"brand_guardian_plugin_{manifest.id.replace('-', '_')}"
        spec = importlib.util.spec_from_file_location(module_name, entry)
        if spec is None or spec.loader is None:
            raise PluginError(f"Cannot import {entry}", plugin_id=manifest.id)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    elif manifest.module:
        module = importlib.import_module(manifest.module)
    else:
        raise PluginError("Manifest declares neither main nor module", plugin_id=manifest.id)

    plugin_class = getattr(module, manifest.class_name, None)
    if plugin_class is None:
        raise PluginError(
            f"Class {manifest.class_name} not found in plugin module", plugin_id=manifest.id
        )
    expected = _ROLE_CLASSES[manifest.type]
    if not isinstance(plugin_class, type) or not issubclass(plugin_class, expected):
        raise PluginError(
            f"Plugin class {manifest.class_name} does not implement {expected.__name__}",
            plugin_id=manifest.id,
        )
    return plugin_class


async def load_plugins(
    manager: PluginManager, plugins_dir: Optional[Union[str, Path]]
) -> List[str]:
    """Discover, import and register every plugin under ``plugins_dir``.

    Returns the ids of plugins that were registered.
    """
    if not plugins_dir:
        return []
    loaded = []
    for manifest, directory in discover_manifests(plugins_dir):
        try:
            plugin_class = load_plugin_class(manifest, directory)
            plugin = plugin_class()
        except Exception as exc:
            logger.error("Failed to load plugin %s: %s", manifest.id, exc)
            continue
        if await manager.register(plugin, manifest.config.defaults):
            loaded.append(plugin.plugin_id)
    logger.info("Loaded %d plugin(s) from %s", len(loaded), plugins_dir)
    return loaded


__all__ = ["discover_manifests", "load_plugin_class", "load_plugins", "read_manifest"]
