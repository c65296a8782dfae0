"""Combined evaluation use case following SRP.

Single Responsibility: Run the enrichment pipeline, the safety and
compliance use cases and the evaluation plugins for one request, then merge
everything into a :class:`CombinedEvaluationResult`.
Does NOT handle: scoring rules (engines), plugin lifecycle (plugin manager).
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from ..domain.brand import Brand
from ..domain.evaluations import CombinedEvaluationResult
from ..domain.repositories import BrandSchemaRepository
from ..engines.combined_evaluator import CombinedEvaluator
from ..logging import get_logger
from ..plugins.models import PluginContext
from ..plugins.plugin_manager import PluginManager
from .compliance import CheckComplianceUseCase
from .models import CombinedOptions
from .safety import CheckSafetyUseCase

logger = get_logger(__name__)


async def _skip() -> None:
    return None


class CombinedEvaluationUseCase:
    """Safety plus brand compliance for one piece of content."""

    def __init__(
        self,
        safety_use_case: CheckSafetyUseCase,
        compliance_use_case: CheckComplianceUseCase,
        plugin_manager: Optional[PluginManager] = None,
        brand_repository: Optional[BrandSchemaRepository] = None,
        evaluator: Optional[CombinedEvaluator] = None,
    ):
        self.safety_use_case = safety_use_case
        self.compliance_use_case = compliance_use_case
        self.plugin_manager = plugin_manager
        self.brand_repository = brand_repository or compliance_use_case.brand_repository
        self.evaluator = evaluator or CombinedEvaluator()

    async def execute(
        self,
        text: str,
        context: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        options: Optional[CombinedOptions] = None,
    ) -> CombinedEvaluationResult:
        options = options or CombinedOptions()
        weights = options.weights()

        enrichment: Dict[str, Any] = {}
        if self.plugin_manager is not None and options.enrich and self.plugin_manager.has_enrichers:
            enriched = await self.plugin_manager.enrich_content(text, dict(metadata or {}))
            text = enriched.enriched
            enrichment = enriched.metadata

        safety, compliance = await asyncio.gather(
            self.safety_use_case.execute(text, context, metadata)
            if options.include_safety
            else _skip(),
            self.compliance_use_case.execute(text, context, metadata)
            if options.include_brand
            else _skip(),
        )

        plugin_results = []
        if (
            self.plugin_manager is not None
            and options.run_plugins
            and self.plugin_manager.has_evaluators
        ):
            brand: Optional[Brand] = compliance.brand if compliance is not None else None
            if brand is None:
                brand = await self.brand_repository.load()
            plugin_context = PluginContext(
                brand_config=brand.to_dict(),
                user_context=context,
                metadata=enrichment,
            )
            plugin_results = await self.plugin_manager.run_evaluations(
                text, plugin_context, options.plugin_ids
            )

        result = self.evaluator.combine(
            safety=safety,
            compliance=compliance,
            weights=weights,
            plugin_results=plugin_results,
            enrichment=enrichment,
        )
        logger.info(
            "combined_evaluated",
            combined_score=result.combined_score,
            is_compliant=result.is_compliant,
            plugins=len(plugin_results),
        )
        return result


__all__ = ["CombinedEvaluationUseCase"]
