"""Tests for manifest-based plugin discovery."""

import json
from pathlib import Path

import pytest

from brand_guardian.exceptions import PluginError
from brand_guardian.plugins.discovery import (
    discover_manifests,
    load_plugin_class,
    load_plugins,
    read_manifest,
)
from brand_guardian.plugins.models import PluginManifest
from brand_guardian.plugins.plugin_manager import PluginManager

PLUGIN_SOURCE = '''
from brand_guardian.plugins.base import EvaluationPlugin
from brand_guardian.plugins.models import PluginEvaluationResult


class LengthPlugin(EvaluationPlugin):
    def __init__(self):
        super().__init__("length-check", "Length Check", "1.0.0", "Flags long copy")

    async def evaluate(self, content, context=None):
        limit = self.get_config().get("max_words", 5)
        score = 100 if len(content.split()) <= limit else 50
        return PluginEvaluationResult(
            plugin_id=self.plugin_id, score=score, is_compliant=score >= 70
        )
'''


def _manifest(**overrides):
    data = {
        "id": "length-check",
        "name": "Length Check",
        "version": "1.0.0",
        "type": "evaluation",
        "main": "plugin.py",
        "class": "LengthPlugin",
        "config": {"defaults": {"max_words": 3}},
    }
    data.update(overrides)
    return data


def _write_plugin(root: Path, name: str = "length", manifest=None) -> Path:
    directory = root / name
    directory.mkdir(parents=True)
    (directory / "manifest.json").write_text(json.dumps(manifest or _manifest()))
    (directory / "plugin.py").write_text(PLUGIN_SOURCE)
    return directory


class TestManifest:
    def test_read_valid_manifest(self, tmp_path: Path) -> None:
        directory = _write_plugin(tmp_path)
        manifest = read_manifest(directory / "manifest.json")
        assert manifest.class_name == "LengthPlugin"
        assert manifest.config.defaults == {"max_words": 3}

    def test_yaml_manifest(self, tmp_path: Path) -> None:
        path = tmp_path / "manifest.yaml"
        path.write_text(
            "id: yaml-plugin\nname: YAML\nversion: 1.0.0\ntype: formatter\n"
            "module: brand_guardian.plugins.builtin\nclass: JsonFormatterPlugin\n"
        )
        assert read_manifest(path).module == "brand_guardian.plugins.builtin"

    @pytest.mark.parametrize("main", ["../escape.py", "/etc/plugin.py", "plugin.sh"])
    def test_unsafe_entry_point_rejected(self, tmp_path: Path, main: str) -> None:
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps(_manifest(main=main)))
        with pytest.raises(PluginError) as exc_info:
            read_manifest(path)
        assert exc_info.value.plugin_id == "length-check"

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "manifest.json"
        path.write_text("{not json")
        with pytest.raises(PluginError):
            read_manifest(path)

    def test_unknown_type_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps(_manifest(type="renderer")))
        with pytest.raises(PluginError):
            read_manifest(path)


class TestDiscovery:
    """Test cases for discovering and loading plugins from disk."""

    def test_invalid_manifests_skipped(self, tmp_path: Path) -> None:
        _write_plugin(tmp_path, "good")
        _write_plugin(tmp_path, "bad", manifest=_manifest(id=""))
        (tmp_path / "empty").mkdir()

        found = discover_manifests(tmp_path)

        assert [directory.name for _, directory in found] == ["good"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert discover_manifests(tmp_path / "nope") == []

    def test_class_must_match_declared_role(self, tmp_path: Path) -> None:
        directory = _write_plugin(tmp_path, manifest=_manifest(type="formatter"))
        manifest = read_manifest(directory / "manifest.json")
        with pytest.raises(PluginError):
            load_plugin_class(manifest, directory)

    def test_missing_class(self, tmp_path: Path) -> None:
        directory = _write_plugin(tmp_path, manifest=_manifest(**{"class": "Nope"}))
        manifest = read_manifest(directory / "manifest.json")
        with pytest.raises(PluginError):
            load_plugin_class(manifest, directory)

    def test_manifest_needs_entry_point(self, tmp_path: Path) -> None:
        manifest = PluginManifest.model_validate(_manifest(main=None))
        with pytest.raises(PluginError):
            load_plugin_class(manifest, tmp_path)

    @pytest.mark.asyncio
    async def test_load_and_register(self, tmp_path: Path) -> None:
        _write_plugin(tmp_path)
        manager = PluginManager(system_version="1.2.0")

        loaded = await load_plugins(manager, tmp_path)

        assert loaded == ["length-check"]
        results = await manager.run_evaluations("one two three four")
        assert results[0].score == 50
        assert manager.get_plugin_config("length-check") == {"max_words": 3}

    @pytest.mark.asyncio
    async def test_load_by_module_path(self, tmp_path: Path) -> None:
        directory = tmp_path / "formatter"
        directory.mkdir()
        (directory / "manifest.json").write_text(
            json.dumps(
                {
                    "id": "json-formatter",
                    "name": "JSON",
                    "version": "1.0.0",
                    "type": "formatter",
                    "module": "brand_guardian.plugins.builtin",
                    "class": "JsonFormatterPlugin",
                }
            )
        )
        manager = PluginManager()

        assert await load_plugins(manager, tmp_path) == ["json-formatter"]
        assert "json-summary" in manager.list_formats()

    @pytest.mark.asyncio
    async def test_no_directory_configured(self) -> None:
        assert await load_plugins(PluginManager(), None) == []
