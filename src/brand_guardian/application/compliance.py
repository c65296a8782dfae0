"""Brand compliance use case following SRP.

Single Responsibility: Load the active brand, evaluate content against it
with the current analyzer weights and cache the result.
Does NOT handle: the analysis itself, brand storage.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..cache.result_cache import build_cache_key
from ..config.manager import ConfigManager
from ..domain.evaluations import ComplianceEvaluation
from ..domain.repositories import BrandSchemaRepository, CacheRepository
from ..engines.compliance_aggregator import ComplianceAggregator, ComplianceEngine
from ..logging import get_logger
from .safety import build_content, cache_lookup, cache_store

logger = get_logger(__name__)


class CheckComplianceUseCase:
    """Evaluate content against the brand profile from the repository."""

    def __init__(
        self,
        config_manager: ConfigManager,
        brand_repository: BrandSchemaRepository,
        engine: Optional[ComplianceEngine] = None,
        cache: Optional[CacheRepository] = None,
    ):
        self.config_manager = config_manager
        self.brand_repository = brand_repository
        self.engine = engine or ComplianceEngine()
        self.cache = cache

    async def execute(
        self,
        text: str,
        context: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ComplianceEvaluation:
        config = self.config_manager.get_config()
        content = build_content(text, context, metadata, config.security.max_content_length)
        brand = await self.brand_repository.load()
        weights = config.compliance

        use_cache = self.cache is not None and config.cache.enabled
        key = build_cache_key(
            "compliance",
            content.text,
            content.context,
            content.metadata.to_dict(),
            brand.fingerprint(),
            weights.model_dump(),
        )
        if use_cache:
            cached = await cache_lookup(self.cache, key)
            if cached is not None:
                logger.debug("compliance_cache_hit", key=key, brand=brand.name)
                return cached

        engine = ComplianceEngine(
            aggregator=ComplianceAggregator(weights),
            technical_terms=self.engine.technical_terms,
            domain_exemptions=self.engine.domain_exemptions,
        )
        evaluation = engine.evaluate(content, brand, content.context)
        logger.info(
            "compliance_evaluated",
            brand=brand.name,
            score=evaluation.score,
            issues=len(evaluation.issues),
            context=content.context,
        )

        if use_cache:
            await cache_store(self.cache, key, evaluation, config.cache.compliance_ttl_seconds)
        return evaluation


__all__ = ["CheckComplianceUseCase"]
