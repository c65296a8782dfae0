"""Tests for brand schema repositories."""

import json
from pathlib import Path

import pytest
import yaml

from brand_guardian.exceptions import ConfigurationError, ValidationError
from brand_guardian.repository import (
    FileBrandSchemaRepository,
    InMemoryBrandSchemaRepository,
    parse_schema_document,
)

ACME = {
    "name": "Acme",
    "toneGuidelines": {"primaryTone": "friendly", "avoidedTones": ["condescending"]},
    "voiceGuidelines": {"usesContractions": True},
    "terminologyGuidelines": {"avoidedGlobalTerms": ["synergy"]},
}


class TestParseSchemaDocument:
    def test_json_and_yaml(self) -> None:
        assert parse_schema_document(json.dumps(ACME), ".json") == ACME
        assert parse_schema_document(yaml.safe_dump(ACME), ".yml") == ACME

    def test_unsupported_suffix(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_schema_document("module.exports = {}", ".js")
        assert exc_info.value.config_key == "brand_schema_path"

    def test_yaml_tags_are_not_executed(self) -> None:
        with pytest.raises(ValidationError):
            parse_schema_document("name: !!python/object/apply:os.system ['true']", ".yaml")

    def test_non_mapping(self) -> None:
        with pytest.raises(ValidationError):
            parse_schema_document("[1, 2]", ".json")


class TestFileBrandSchemaRepository:
    """Test cases for file-backed brand profiles."""

    @pytest.mark.asyncio
    async def test_load_json(self, tmp_path: Path) -> None:
        path = tmp_path / "brand.json"
        path.write_text(json.dumps(ACME))
        repository = FileBrandSchemaRepository(path)

        brand = await repository.load()

        assert brand.name == "Acme"
        assert brand.tone_guidelines.avoided_tones == ["condescending"]
        assert await repository.exists()

    @pytest.mark.asyncio
    async def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "brand.yaml"
        path.write_text(yaml.safe_dump(ACME))
        brand = await FileBrandSchemaRepository(path).load()
        assert brand.terminology_guidelines.avoided_global_terms == ["synergy"]

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        repository = FileBrandSchemaRepository(tmp_path / "missing.json")
        assert not await repository.exists()
        with pytest.raises(ConfigurationError):
            await repository.load()

    @pytest.mark.asyncio
    async def test_invalid_schema(self, tmp_path: Path) -> None:
        path = tmp_path / "brand.json"
        path.write_text(json.dumps({"name": "Acme"}))
        with pytest.raises(ValidationError) as exc_info:
            await FileBrandSchemaRepository(path).load()
        assert "toneGuidelines" in exc_info.value.field_errors

    @pytest.mark.asyncio
    async def test_partial_update_merges(self, tmp_path: Path) -> None:
        path = tmp_path / "brand.json"
        path.write_text(json.dumps(ACME))
        repository = FileBrandSchemaRepository(path)

        brand = await repository.update({"toneGuidelines": {"primaryTone": "confident"}})

        assert brand.tone_guidelines.primary_tone == "confident"
        assert brand.tone_guidelines.avoided_tones == ["condescending"]
        assert (await repository.load()) is brand
        assert json.loads(path.read_text()) == ACME

    @pytest.mark.asyncio
    async def test_invalid_update_leaves_brand_unchanged(self, tmp_path: Path) -> None:
        path = tmp_path / "brand.json"
        path.write_text(json.dumps(ACME))
        repository = FileBrandSchemaRepository(path)
        before = await repository.load()

        with pytest.raises(ValidationError):
            await repository.update({"toneGuidelines": {"primaryTone": "  "}})
        with pytest.raises(ValidationError):
            await repository.update({})

        assert (await repository.load()) is before

    @pytest.mark.asyncio
    async def test_full_schema_replaces(self, tmp_path: Path) -> None:
        path = tmp_path / "brand.json"
        path.write_text(json.dumps(ACME))
        repository = FileBrandSchemaRepository(path)

        brand = await repository.update(
            {
                "name": "Globex",
                "toneGuidelines": {"primaryTone": "professional"},
                "voiceGuidelines": {"usesContractions": False},
            }
        )

        assert brand.name == "Globex"
        assert brand.terminology_guidelines.avoided_global_terms == []

    @pytest.mark.asyncio
    async def test_name_and_tone_without_voice_merges(self, tmp_path: Path) -> None:
        path = tmp_path / "brand.json"
        path.write_text(json.dumps(ACME))
        repository = FileBrandSchemaRepository(path)

        brand = await repository.update(
            {"name": "Globex", "toneGuidelines": {"primaryTone": "professional"}}
        )

        assert brand.name == "Globex"
        assert brand.tone_guidelines.primary_tone == "professional"
        assert brand.terminology_guidelines.avoided_global_terms == ["synergy"]

    @pytest.mark.asyncio
    async def test_reload_rereads_and_drops_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "brand.json"
        path.write_text(json.dumps(ACME))
        repository = FileBrandSchemaRepository(path)
        await repository.update({"toneGuidelines": {"primaryTone": "confident"}})

        path.write_text(json.dumps({**ACME, "name": "Acme Corp"}))
        brand = await repository.reload()

        assert brand.name == "Acme Corp"
        assert brand.tone_guidelines.primary_tone == "friendly"


class TestInMemoryBrandSchemaRepository:
    @pytest.mark.asyncio
    async def test_defaults_to_bundled_profile(self) -> None:
        brand = await InMemoryBrandSchemaRepository().load()
        assert brand.name == "TechFuture"

    @pytest.mark.asyncio
    async def test_update_and_reload(self) -> None:
        repository = InMemoryBrandSchemaRepository(ACME)
        updated = await repository.update({"terminologyGuidelines": {"avoidedGlobalTerms": []}})
        assert updated.terminology_guidelines.avoided_global_terms == []

        restored = await repository.reload()
        assert restored.terminology_guidelines.avoided_global_terms == ["synergy"]
        assert await repository.exists()

    @pytest.mark.asyncio
    async def test_fingerprint_changes_with_update(self, brand) -> None:
        repository = InMemoryBrandSchemaRepository(brand)
        before = (await repository.load()).fingerprint()
        after = (await repository.update({"description": "Updated"})).fingerprint()
        assert before != after
