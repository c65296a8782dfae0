"""Tests for compliance aggregation and the compliance engine."""

import math
import sys

import pytest
from hypothesis import given, settings
import hypothesis.strategies as st

from brand_guardian.config.manager import ComplianceWeights
from brand_guardian.domain.brand import Brand
from brand_guardian.domain.content import Content
from brand_guardian.domain.evaluations import IssueSeverity, IssueType
from brand_guardian.engines.analyzers.base import AnalysisResult, Finding
from brand_guardian.engines.compliance_aggregator import (
    ComplianceAggregator,
    ComplianceEngine,
    classify_severity,
    suggest_fix,
)
from brand_guardian.exceptions import ConfigurationError

SCENARIO_TEXT = "We believe our solution delivers excellent results."

sub_scores = st.integers(min_value=0, max_value=100)
weights = st.floats(min_value=0.01, max_value=100, allow_nan=False, allow_infinity=False)
extreme_weights = st.floats(
    min_value=0.0, max_value=sys.float_info.max, exclude_min=True, allow_nan=False
)


class TestSeverityClassification:
    @pytest.mark.parametrize(
        "description, severity",
        [
            ('Found avoided term: "synergy"', IssueSeverity.HIGH),
            ("Detected avoided tone: pessimistic", IssueSeverity.HIGH),
            ('Use the preferred term "purchase" instead of "buy"', IssueSeverity.MEDIUM),
            ('Product name "Future Core" should be written without spaces', IssueSeverity.MEDIUM),
            ("Sentence lengths lack variation", IssueSeverity.LOW),
            ("Content doesn't strongly reflect the confident tone", IssueSeverity.LOW),
        ],
    )
    def test_keyword_grading(self, description: str, severity: IssueSeverity) -> None:
        assert classify_severity(description) == severity

    def test_suggestions(self) -> None:
        assert suggest_fix("Brand voice avoids contractions but found: we're", IssueType.VOICE) == (
            "Review contraction usage according to brand voice"
        )
        assert suggest_fix("Something odd", IssueType.TONE) == (
            "Adjust the tone to better match brand guidelines"
        )


class TestComplianceAggregator:
    """Test cases for weighted scoring and issue ordering."""

    def test_weighted_score(self, brand: Brand) -> None:
        evaluation = ComplianceAggregator().aggregate(
            Content(text="Sample text"),
            brand,
            AnalysisResult(score=100),
            AnalysisResult(score=80),
            AnalysisResult(score=60),
        )
        assert evaluation.score == 80
        assert evaluation.is_compliant

    def test_issues_sorted_by_severity(self, brand: Brand) -> None:
        evaluation = ComplianceAggregator().aggregate(
            Content(text="Sample text"),
            brand,
            AnalysisResult(score=75, findings=(Finding("Sentence lengths lack variation"),)),
            AnalysisResult(score=90, findings=(Finding('Use the preferred term "x"'),)),
            AnalysisResult(score=85, findings=(Finding('Found avoided term: "synergy"'),)),
        )
        assert [issue.severity for issue in evaluation.issues] == [
            IssueSeverity.HIGH,
            IssueSeverity.MEDIUM,
            IssueSeverity.LOW,
        ]
        assert evaluation.issues[0].type == IssueType.TERMINOLOGY
        assert evaluation.details["weights"]["tone"] == pytest.approx(0.35)

    def test_update_weights_normalizes(self) -> None:
        aggregator = ComplianceAggregator()
        updated = aggregator.update_weights(tone=2, voice=1, terminology=1)
        assert (updated.tone, updated.voice, updated.terminology) == (0.5, 0.25, 0.25)
        assert aggregator.weights is updated

    def test_invalid_weights_leave_aggregator_unchanged(self) -> None:
        aggregator = ComplianceAggregator()
        before = aggregator.weights
        with pytest.raises(ConfigurationError):
            aggregator.update_weights(tone=-1)
        with pytest.raises(ConfigurationError):
            aggregator.update_weights(tone=0, voice=0, terminology=0)
        assert aggregator.weights == before

    def test_summary_bands(self) -> None:
        summary = ComplianceAggregator.generate_summary
        assert summary(95, []) == (
            "Excellent brand compliance. Content strongly aligns with brand guidelines."
        )
        assert summary(80, [], "blog") == (
            "Good brand compliance. Minor adjustments recommended. (Evaluated for blog context)"
        )
        assert summary(59, []).startswith("Very poor brand compliance.")

    def test_summary_counts_issues(self, brand: Brand) -> None:
        evaluation = ComplianceAggregator().aggregate(
            Content(text="Sample text"),
            brand,
            AnalysisResult(score=50, findings=(Finding("Detected avoided tone: pessimistic"),)),
            AnalysisResult(score=70, findings=(Finding("a"), Finding("b"))),
            AnalysisResult(score=100),
        )
        assert evaluation.summary.endswith(
            " Found 1 high-severity issue. Found 2 low-severity issues."
        )


class TestComplianceEngine:
    def test_confident_content_is_compliant(self, brand: Brand) -> None:
        evaluation = ComplianceEngine().evaluate(Content(text=SCENARIO_TEXT), brand)
        assert evaluation.score >= 80
        assert evaluation.is_compliant
        assert not evaluation.has_high_severity_issues
        assert set(evaluation.details) == {"tone", "voice", "terminology", "weights"}

    def test_context_falls_back_to_content_context(self, brand: Brand) -> None:
        content = Content(text="We leverage synergy to deliver.", context="technical")
        evaluation = ComplianceEngine().evaluate(content, brand)
        assert evaluation.context == "technical"
        assert evaluation.details["terminology"]["score"] == 100

    def test_configured_exemptions_reach_terminology(self, brand: Brand) -> None:
        engine = ComplianceEngine(domain_exemptions={"investor-update": ["disruptive"]})
        evaluation = engine.evaluate(
            Content(text="A disruptive quarter for us."), brand, "investor-update"
        )
        assert evaluation.details["terminology"]["score"] == 100


@given(tone=weights, voice=weights, terminology=weights)
@settings(max_examples=100, deadline=None)
def test_weights_always_sum_to_one(tone: float, voice: float, terminology: float) -> None:
    normalized = ComplianceWeights(tone=tone, voice=voice, terminology=terminology)
    assert math.isclose(normalized.tone + normalized.voice + normalized.terminology, 1.0)


@given(tone=extreme_weights, voice=extreme_weights, terminology=extreme_weights)
@settings(max_examples=100, deadline=None)
def test_extreme_weights_still_sum_to_one(tone: float, voice: float, terminology: float) -> None:
    normalized = ComplianceWeights(tone=tone, voice=voice, terminology=terminology)
    assert math.isclose(normalized.tone + normalized.voice + normalized.terminology, 1.0)


def test_huge_weights_do_not_overflow() -> None:
    normalized = ComplianceWeights(tone=1e308, voice=1e308, terminology=1e308)
    assert normalized.tone == pytest.approx(1 / 3)
    assert normalized.voice == pytest.approx(1 / 3)
    assert normalized.terminology == pytest.approx(1 / 3)


@given(tone=sub_scores, voice=sub_scores, terminology=sub_scores)
@settings(max_examples=100, deadline=None)
def test_score_stays_in_range(tone: int, voice: int, terminology: int) -> None:
    brand = Brand.from_dict({"name": "Acme", "toneGuidelines": {"primaryTone": "friendly"}})
    evaluation = ComplianceAggregator().aggregate(
        Content(text="Sample text"),
        brand,
        AnalysisResult(score=tone),
        AnalysisResult(score=voice),
        AnalysisResult(score=terminology),
    )
    assert 0 <= evaluation.score <= 100
    assert min(tone, voice, terminology) <= evaluation.score <= max(tone, voice, terminology) + 1
