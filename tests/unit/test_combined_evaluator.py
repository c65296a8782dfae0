"""Tests for the combined evaluator."""

import pytest

from brand_guardian.domain.content import Content
from brand_guardian.domain.evaluations import (
    ComplianceEvaluation,
    EvaluationWeights,
    RiskLevel,
    SafetyEvaluation,
)
from brand_guardian.engines.combined_evaluator import CombinedEvaluator, risk_to_score


def _safety(risk: RiskLevel) -> SafetyEvaluation:
    return SafetyEvaluation(
        content=Content(text="Sample text"),
        overall_risk=risk,
        category_evaluations=(),
        summary="",
    )


def _compliance(brand, score: int) -> ComplianceEvaluation:
    return ComplianceEvaluation(
        content=Content(text="Sample text"), brand=brand, score=score, issues=(), summary=""
    )


class TestCombinedEvaluator:
    """Test cases for weighted combination of safety and compliance."""

    @pytest.mark.parametrize(
        "risk, score",
        [
            (RiskLevel.NONE, 100),
            (RiskLevel.LOW, 80),
            (RiskLevel.MEDIUM, 60),
            (RiskLevel.HIGH, 30),
            (RiskLevel.VERY_HIGH, 0),
        ],
    )
    def test_risk_to_score(self, risk: RiskLevel, score: int) -> None:
        assert risk_to_score(risk) == score

    def test_equal_weights(self, brand) -> None:
        result = CombinedEvaluator().combine(
            _safety(RiskLevel.NONE), _compliance(brand, 60), EvaluationWeights()
        )
        assert result.combined_score == 80
        assert result.is_compliant

    def test_weights_are_relative(self, brand) -> None:
        result = CombinedEvaluator().combine(
            _safety(RiskLevel.MEDIUM),
            _compliance(brand, 80),
            EvaluationWeights(safety=1.0, brand=3.0),
        )
        assert result.combined_score == 75

    def test_below_threshold_not_compliant(self, brand) -> None:
        result = CombinedEvaluator().combine(
            _safety(RiskLevel.HIGH), _compliance(brand, 90), EvaluationWeights()
        )
        assert result.combined_score == 60
        assert not result.is_compliant

    def test_no_weights_no_combined_score(self, brand) -> None:
        result = CombinedEvaluator().combine(_safety(RiskLevel.NONE), _compliance(brand, 90))
        assert result.combined_score is None
        assert result.is_compliant

    def test_single_part_has_no_combined_score(self) -> None:
        result = CombinedEvaluator().combine(
            safety=_safety(RiskLevel.LOW), weights=EvaluationWeights()
        )
        assert result.combined_score is None
        assert result.compliance_evaluation is None
        assert result.is_compliant

    def test_enrichment_carried(self, brand) -> None:
        result = CombinedEvaluator().combine(
            _safety(RiskLevel.NONE),
            _compliance(brand, 90),
            enrichment={"sentiment": {"label": "positive"}},
        )
        assert result.to_dict()["enrichment"] == {"sentiment": {"label": "positive"}}
