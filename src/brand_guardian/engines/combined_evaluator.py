"""Combined evaluator: merges safety risk and brand compliance into one score."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from ..domain.evaluations import (
    CombinedEvaluationResult,
    ComplianceEvaluation,
    EvaluationWeights,
    RiskLevel,
    SafetyEvaluation,
    round_half_up,
)

logger = logging.getLogger(__name__)

RISK_SCORES: Dict[RiskLevel, int] = {
    RiskLevel.NONE: 100,
    RiskLevel.LOW: 80,
    RiskLevel.MEDIUM: 60,
    RiskLevel.HIGH: 30,
    RiskLevel.VERY_HIGH: 0,
}


def risk_to_score(level: RiskLevel) -> int:
    return RISK_SCORES[level]


class CombinedEvaluator:
    """Produces a :class:`CombinedEvaluationResult` from sub-evaluations.

    A combined score is computed only when weights are supplied and both a
    safety and a compliance evaluation are present.
    """

    def combine(
        self,
        safety: Optional[SafetyEvaluation] = None,
        compliance: Optional[ComplianceEvaluation] = None,
        weights: Optional[EvaluationWeights] = None,
        plugin_results: Sequence[Any] = (),
        enrichment: Optional[Dict[str, Any]] = None,
    ) -> CombinedEvaluationResult:
        combined_score = None
        if weights is not None and safety is not None and compliance is not None:
            safety_score = risk_to_score(safety.overall_risk)
            total = weights.safety + weights.brand
            weighted = (safety_score * weights.safety + compliance.score * weights.brand) / total
            combined_score = max(0, min(100, round_half_up(weighted)))
            logger.debug(
                "Combined score: safety=%d brand=%d combined=%d",
                safety_score,
                compliance.score,
                combined_score,
            )
        return CombinedEvaluationResult(
            safety_evaluation=safety,
            compliance_evaluation=compliance,
            combined_score=combined_score,
            weights=weights,
            plugin_results=plugin_results,
            enrichment=dict(enrichment or {}),
        )


__all__ = ["CombinedEvaluator", "RISK_SCORES", "risk_to_score"]
