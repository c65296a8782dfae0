from .brand_repository import (
    FileBrandSchemaRepository,
    InMemoryBrandSchemaRepository,
    load_default_schema,
    parse_schema_document,
)

__all__ = [
    "FileBrandSchemaRepository",
    "InMemoryBrandSchemaRepository",
    "load_default_schema",
    "parse_schema_document",
]
