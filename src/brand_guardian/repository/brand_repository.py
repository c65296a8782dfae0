"""Brand schema repositories.

Brand profiles are read from JSON or YAML documents with safe loaders only;
schema files are data and are never executed. Runtime updates are validated
against the full merged document before they replace the active brand.
"""

import asyncio
import copy
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..domain.brand import Brand
from ..exceptions import ConfigurationError, ValidationError
from ..utils.merge import deep_merge

logger = logging.getLogger(__name__)

# A document carrying all of these keys replaces the brand instead of patching it
FULL_SCHEMA_KEYS = ("name", "toneGuidelines", "voiceGuidelines")
DEFAULT_BRAND_RESOURCE = "default_brand.yaml"


def parse_schema_document(raw: str, suffix: str) -> Dict[str, Any]:
    """Parse a brand schema document by file suffix."""
    try:
        if suffix == ".json":
            data = json.loads(raw)
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(raw)
        else:
            raise ConfigurationError(
                f"Unsupported brand schema format: {suffix or '(none)'}",
                config_key="brand_schema_path",
            )
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ValidationError(
            "Brand schema is not valid JSON/YAML", field_errors={"schema": str(exc)}
        ) from exc
    if not isinstance(data, dict):
        raise ValidationError(
            "Brand schema must be a mapping", field_errors={"schema": type(data).__name__}
        )
    return data


def load_default_schema() -> Dict[str, Any]:
    raw = resources.files("brand_guardian.data").joinpath(DEFAULT_BRAND_RESOURCE).read_text(
        encoding="utf-8"
    )
    return parse_schema_document(raw, ".yaml")


def is_full_schema(schema: Dict[str, Any]) -> bool:
    return all(key in schema for key in FULL_SCHEMA_KEYS)


class InMemoryBrandSchemaRepository:
    """Repository over an in-memory schema document."""

    def __init__(self, schema: Optional[Union[Brand, Dict[str, Any]]] = None):
        if schema is None:
            schema = load_default_schema()
        if isinstance(schema, Brand):
            schema = schema.to_dict()
        self._base = copy.deepcopy(schema)
        self._overrides: Dict[str, Any] = {}
        self._brand = Brand.from_dict(self._base)

    async def load(self) -> Brand:
        return self._brand

    async def update(self, schema: Dict[str, Any]) -> Brand:
        brand, base, overrides = _apply_update(self._base, self._overrides, schema)
        self._brand, self._base, self._overrides = brand, base, overrides
        logger.info("Brand schema updated: %s", brand.name)
        return brand

    async def reload(self) -> Brand:
        self._overrides = {}
        self._brand = Brand.from_dict(self._base)
        return self._brand

    async def exists(self) -> bool:
        return True


class FileBrandSchemaRepository:
    """Repository backed by a JSON or YAML file.

    The file is read once and cached; ``reload`` re-reads it and discards
    runtime overrides. Updates never write back to the file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._base: Optional[Dict[str, Any]] = None
        self._overrides: Dict[str, Any] = {}
        self._brand: Optional[Brand] = None
        self._lock = asyncio.Lock()

    async def load(self) -> Brand:
        async with self._lock:
            if self._brand is None:
                self._base = self._read_file()
                self._brand = Brand.from_dict(deep_merge(self._base, self._overrides))
                logger.info("Brand schema loaded from %s: %s", self.path, self._brand.name)
            return self._brand

    async def update(self, schema: Dict[str, Any]) -> Brand:
        async with self._lock:
            if self._base is None:
                self._base = self._read_file()
            brand, base, overrides = _apply_update(self._base, self._overrides, schema)
            self._brand, self._base, self._overrides = brand, base, overrides
            logger.info("Brand schema updated at runtime: %s", brand.name)
            return brand

    async def reload(self) -> Brand:
        async with self._lock:
            self._base = self._read_file()
            self._overrides = {}
            self._brand = Brand.from_dict(self._base)
            logger.info("Brand schema reloaded from %s", self.path)
            return self._brand

    async def exists(self) -> bool:
        return self.path.is_file()

    def _read_file(self) -> Dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read brand schema {self.path}: {exc.strerror or exc}",
                config_key="brand_schema_path",
            ) from exc
        return parse_schema_document(raw, self.path.suffix.lower())


def _apply_update(
    base: Dict[str, Any], overrides: Dict[str, Any], schema: Dict[str, Any]
):
    """Compute the next (brand, base, overrides) triple, validating first."""
    if not isinstance(schema, dict) or not schema:
        raise ValidationError(
            "Brand schema update must be a non-empty mapping",
            field_errors={"schema": "empty or not a mapping"},
        )
    if is_full_schema(schema):
        new_base, new_overrides = copy.deepcopy(schema), {}
        brand = Brand.from_dict(new_base)
    else:
        new_base = base
        new_overrides = deep_merge(overrides, schema)
        brand = Brand.from_dict(deep_merge(base, new_overrides))
    return brand, new_base, new_overrides


__all__ = [
    "FileBrandSchemaRepository",
    "InMemoryBrandSchemaRepository",
    "load_default_schema",
    "parse_schema_document",
]
