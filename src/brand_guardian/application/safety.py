"""Brand safety use case following SRP.

Single Responsibility: Turn a raw evaluation request into a cached
:class:`SafetyEvaluation` under the current safety configuration.
Does NOT handle: category detection (engines), configuration storage.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..cache.result_cache import build_cache_key
from ..config.manager import ConfigManager
from ..domain.content import Content, ContentMetadata, sanitize_input
from ..domain.evaluations import SafetyEvaluation
from ..domain.repositories import CacheRepository
from ..engines.safety_categorizer import SafetyCategorizer
from ..logging import get_logger

logger = get_logger(__name__)


async def cache_lookup(cache: Optional[CacheRepository], key: str) -> Optional[Any]:
    """Read from the cache; a failing cache counts as a miss."""
    if cache is None:
        return None
    try:
        return await cache.get(key)
    except Exception as exc:
        logger.warning("cache_read_failed", key=key, error=str(exc))
        return None


async def cache_store(
    cache: Optional[CacheRepository], key: str, value: Any, ttl_seconds: float
) -> None:
    if cache is None:
        return
    try:
        await cache.set(key, value, ttl_seconds)
    except Exception as exc:
        logger.warning("cache_write_failed", key=key, error=str(exc))


def build_content(
    text: str,
    context: Optional[str],
    metadata: Optional[Dict[str, Any]],
    max_length: int,
) -> Content:
    return Content(
        text=sanitize_input(text),
        context=context,
        metadata=ContentMetadata.from_dict(metadata),
        max_length=max_length,
    )


class CheckSafetyUseCase:
    """Evaluate content against the brand safety categories."""

    def __init__(
        self,
        config_manager: ConfigManager,
        categorizer: Optional[SafetyCategorizer] = None,
        cache: Optional[CacheRepository] = None,
    ):
        self.config_manager = config_manager
        self.categorizer = categorizer or SafetyCategorizer()
        self.cache = cache

    async def execute(
        self,
        text: str,
        context: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SafetyEvaluation:
        config = self.config_manager.get_config()
        content = build_content(text, context, metadata, config.security.max_content_length)

        use_cache = self.cache is not None and config.cache.enabled
        key = build_cache_key(
            "safety",
            content.text,
            content.context,
            content.metadata.to_dict(),
            config.safety.to_dict(),
        )
        if use_cache:
            cached = await cache_lookup(self.cache, key)
            if cached is not None:
                logger.debug("safety_cache_hit", key=key)
                return cached

        evaluation = self.categorizer.evaluate(content, config.safety)
        logger.info(
            "safety_evaluated",
            overall_risk=evaluation.overall_risk.value,
            length=content.length,
            context=content.context,
        )

        if use_cache:
            await cache_store(self.cache, key, evaluation, config.cache.safety_ttl_seconds)
        return evaluation


__all__ = ["CheckSafetyUseCase", "build_content", "cache_lookup", "cache_store"]
