"""Storage interfaces the application layer depends on."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

from .brand import Brand


@runtime_checkable
class CacheRepository(Protocol):
    """Async key/value store with per-entry time-to-live."""

    async def get(self, key: str) -> Optional[Any]:
        ...

    async def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        ...

    async def delete(self, key: str) -> bool:
        ...

    async def clear(self) -> None:
        ...

    async def has(self, key: str) -> bool:
        ...


@runtime_checkable
class BrandSchemaRepository(Protocol):
    """Source of the active brand profile."""

    async def load(self) -> Brand:
        ...

    async def update(self, schema: Dict[str, Any]) -> Brand:
        ...

    async def reload(self) -> Brand:
        ...

    async def exists(self) -> bool:
        ...


__all__ = ["CacheRepository", "BrandSchemaRepository"]
