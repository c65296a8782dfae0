"""Batch evaluation use case following SRP.

Single Responsibility: Evaluate many requests with bounded concurrency,
isolate per-item failures and summarize the outcome.
Does NOT handle: the evaluations themselves (delegated to the single-item
use cases).
"""

from __future__ import annotations

import asyncio
import time
import uuid
from collections import Counter
from typing import Any, List, Optional, Sequence, Tuple

from ..config.manager import ConfigManager
from ..domain.evaluations import (
    CombinedEvaluationResult,
    ComplianceEvaluation,
    Issue,
    RiskLevel,
    SafetyEvaluation,
)
from ..exceptions import ValidationError, safe_error_response
from ..logging import get_logger
from .combined import CombinedEvaluationUseCase
from .compliance import CheckComplianceUseCase
from .models import (
    BatchEvaluationResult,
    BatchItemOutcome,
    BatchSummary,
    CombinedOptions,
    CommonIssue,
    EvaluationMode,
    EvaluationRequest,
)
from .safety import CheckSafetyUseCase

logger = get_logger(__name__)

COMMON_ISSUE_LIMIT = 5


def _issues_of(result: Any) -> List[Issue]:
    if isinstance(result, SafetyEvaluation):
        return result.issues
    if isinstance(result, ComplianceEvaluation):
        return list(result.issues)
    if isinstance(result, CombinedEvaluationResult):
        issues: List[Issue] = []
        if result.safety_evaluation is not None:
            issues.extend(result.safety_evaluation.issues)
        if result.compliance_evaluation is not None:
            issues.extend(result.compliance_evaluation.issues)
        return issues
    return []


def _score_of(result: Any) -> Optional[int]:
    if isinstance(result, ComplianceEvaluation):
        return result.score
    if isinstance(result, CombinedEvaluationResult):
        if result.combined_score is not None:
            return result.combined_score
        if result.compliance_evaluation is not None:
            return result.compliance_evaluation.score
    return None


def _overall_risk_of(result: Any) -> Optional[RiskLevel]:
    if isinstance(result, SafetyEvaluation):
        return result.overall_risk
    if isinstance(result, CombinedEvaluationResult) and result.safety_evaluation is not None:
        return result.safety_evaluation.overall_risk
    return None


def summarize(results: Sequence[Any], error_count: int, elapsed_ms: float) -> BatchSummary:
    """Aggregate statistics over successful results."""
    total = len(results) + error_count
    scores = [score for score in map(_score_of, results) if score is not None]
    high_risk = sum(
        1
        for level in map(_overall_risk_of, results)
        if level is not None and level >= RiskLevel.HIGH
    )
    compliant = sum(
        1
        for result in results
        if isinstance(result, (ComplianceEvaluation, CombinedEvaluationResult))
        and result.is_compliant
    )

    frequency: Counter = Counter()
    for result in results:
        for issue in _issues_of(result):
            frequency[(issue.type.value, issue.description)] += 1

    return BatchSummary(
        success_rate=(len(results) / total * 100) if total else 0.0,
        average_processing_time_ms=(elapsed_ms / total) if total else 0.0,
        average_score=(sum(scores) / len(scores)) if scores else 0.0,
        high_risk_count=high_risk,
        compliant_count=compliant,
        common_issues=[
            CommonIssue(type=issue_type, description=description, frequency=count)
            for (issue_type, description), count in frequency.most_common(COMMON_ISSUE_LIMIT)
        ],
    )


class BatchEvaluationUseCase:
    """Evaluate a list of requests in one mode."""

    def __init__(
        self,
        config_manager: ConfigManager,
        safety_use_case: CheckSafetyUseCase,
        compliance_use_case: CheckComplianceUseCase,
        combined_use_case: CombinedEvaluationUseCase,
    ):
        self.config_manager = config_manager
        self.safety_use_case = safety_use_case
        self.compliance_use_case = compliance_use_case
        self.combined_use_case = combined_use_case

    async def execute(
        self,
        items: Sequence[EvaluationRequest],
        mode: EvaluationMode = EvaluationMode.COMBINED,
        options: Optional[CombinedOptions] = None,
    ) -> BatchEvaluationResult:
        """Evaluate every item; a failing item never aborts the batch.

        Raises:
            ValidationError: when the batch is empty or larger than the
                configured maximum
        """
        security = self.config_manager.get_config().security
        if not items:
            raise ValidationError(
                "Batch cannot be empty", field_errors={"items": "at least one item required"}
            )
        if len(items) > security.max_batch_size:
            raise ValidationError(
                f"Batch size exceeds maximum of {security.max_batch_size} items",
                field_errors={"items": f"{len(items)} > {security.max_batch_size}"},
            )

        batch_id = f"batch_{uuid.uuid4().hex[:12]}"
        semaphore = asyncio.Semaphore(security.batch_concurrency)
        started = time.perf_counter()

        async def run(index: int, item: EvaluationRequest) -> Tuple[str, Any, Optional[BaseException]]:
            item_id = item.id or f"item_{index}"
            async with semaphore:
                try:
                    return item_id, await self._evaluate(item, mode, options), None
                except Exception as exc:
                    logger.warning(
                        "batch_item_failed",
                        batch_id=batch_id,
                        item_id=item_id,
                        error=str(exc),
                    )
                    return item_id, None, exc

        outcomes = await asyncio.gather(*(run(i, item) for i, item in enumerate(items)))
        elapsed_ms = (time.perf_counter() - started) * 1000

        successes = []
        entries = []
        for item_id, result, error in outcomes:
            if error is None:
                successes.append(result)
                entries.append(
                    BatchItemOutcome(id=item_id, status="success", result=result.to_dict())
                )
            else:
                entries.append(
                    BatchItemOutcome(id=item_id, status="error", error=safe_error_response(error))
                )

        error_count = len(entries) - len(successes)
        logger.info(
            "batch_evaluated",
            batch_id=batch_id,
            mode=mode.value,
            total=len(items),
            errors=error_count,
        )
        return BatchEvaluationResult(
            batch_id=batch_id,
            mode=mode,
            total_items=len(items),
            success_count=len(successes),
            error_count=error_count,
            processing_time_ms=elapsed_ms,
            items=entries,
            summary=summarize(successes, error_count, elapsed_ms),
        )

    async def _evaluate(
        self,
        item: EvaluationRequest,
        mode: EvaluationMode,
        options: Optional[CombinedOptions],
    ) -> Any:
        if mode is EvaluationMode.SAFETY:
            return await self.safety_use_case.execute(item.text, item.context, item.metadata)
        if mode is EvaluationMode.COMPLIANCE:
            return await self.compliance_use_case.execute(item.text, item.context, item.metadata)
        return await self.combined_use_case.execute(
            item.text, item.context, item.metadata, options
        )


__all__ = ["BatchEvaluationUseCase", "summarize"]
