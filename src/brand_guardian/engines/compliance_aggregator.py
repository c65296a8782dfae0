"""Compliance aggregator following SRP.

Single Responsibility: Combine tone, voice and terminology analysis into a
weighted compliance score with graded, sorted issues and a summary.
Does NOT handle: analysis itself, caching, brand loading.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..config.manager import ComplianceWeights
from ..domain.brand import Brand
from ..domain.content import Content
from ..domain.evaluations import (
    SEVERITY_ORDER,
    ComplianceEvaluation,
    Issue,
    IssueSeverity,
    IssueType,
    round_half_up,
)
from .analyzers.base import AnalysisResult
from .analyzers.terminology import TerminologyAnalyzer
from .analyzers.tone import ToneAnalyzer
from .analyzers.voice import VoiceAnalyzer

logger = logging.getLogger(__name__)

HIGH_SEVERITY_KEYWORDS = ("avoided", "forbidden", "never", "critical")
MEDIUM_SEVERITY_KEYWORDS = ("should", "prefer", "recommended")

_DEFAULT_SUGGESTIONS = {
    IssueType.TONE: "Adjust the tone to better match brand guidelines",
    IssueType.VOICE: "Modify voice characteristics to align with brand standards",
    IssueType.TERMINOLOGY: "Use approved terminology and avoid restricted terms",
}

_SUMMARY_BANDS = (
    (90, "Excellent brand compliance. Content strongly aligns with brand guidelines."),
    (80, "Good brand compliance. Minor adjustments recommended."),
    (70, "Moderate brand compliance. Several issues need attention."),
    (60, "Poor brand compliance. Significant revisions required."),
    (0, "Very poor brand compliance. Content needs major rework."),
)


def classify_severity(description: str) -> IssueSeverity:
    lowered = description.lower()
    if any(keyword in lowered for keyword in HIGH_SEVERITY_KEYWORDS):
        return IssueSeverity.HIGH
    if any(keyword in lowered for keyword in MEDIUM_SEVERITY_KEYWORDS):
        return IssueSeverity.MEDIUM
    return IssueSeverity.LOW


def suggest_fix(description: str, issue_type: IssueType) -> str:
    lowered = description.lower()
    if "contraction" in lowered:
        return "Review contraction usage according to brand voice"
    if "avoided term" in lowered:
        return "Replace with approved alternative terminology"
    if "preferred term" in lowered:
        return "Replace the alternative with the brand's preferred term"
    if "pronoun" in lowered:
        return "Adjust pronoun usage to match brand voice guidelines"
    return _DEFAULT_SUGGESTIONS.get(
        issue_type, "Review and adjust according to brand guidelines"
    )


class ComplianceAggregator:
    """Weighted combination of analyzer sub-scores."""

    def __init__(self, weights: Optional[ComplianceWeights] = None):
        self.weights = weights or ComplianceWeights()

    def update_weights(
        self,
        tone: Optional[float] = None,
        voice: Optional[float] = None,
        terminology: Optional[float] = None,
    ) -> ComplianceWeights:
        """Replace and renormalize weights; invalid values leave them unchanged."""
        self.weights = self.weights.updated(tone=tone, voice=voice, terminology=terminology)
        return self.weights

    def aggregate(
        self,
        content: Content,
        brand: Brand,
        tone: AnalysisResult,
        voice: AnalysisResult,
        terminology: AnalysisResult,
        context: Optional[str] = None,
    ) -> ComplianceEvaluation:
        weighted = (
            tone.score * self.weights.tone
            + voice.score * self.weights.voice
            + terminology.score * self.weights.terminology
        )
        score = max(0, min(100, round_half_up(weighted)))

        issues: List[Issue] = []
        for issue_type, result in (
            (IssueType.TONE, tone),
            (IssueType.VOICE, voice),
            (IssueType.TERMINOLOGY, terminology),
        ):
            for finding in result.findings:
                issues.append(
                    Issue(
                        type=issue_type,
                        severity=classify_severity(finding.description),
                        description=finding.description,
                        suggestion=suggest_fix(finding.description, issue_type),
                        position=finding.position,
                    )
                )
        issues.sort(key=lambda issue: SEVERITY_ORDER.get(issue.severity, len(SEVERITY_ORDER)))

        return ComplianceEvaluation(
            content=content,
            brand=brand,
            score=score,
            issues=tuple(issues),
            summary=self.generate_summary(score, issues, context),
            context=context,
            details={
                "tone": {"score": tone.score, **tone.details},
                "voice": {"score": voice.score, **voice.details},
                "terminology": {"score": terminology.score, **terminology.details},
                "weights": self.weights.model_dump(),
            },
        )

    @staticmethod
    def generate_summary(score: int, issues: List[Issue], context: Optional[str] = None) -> str:
        summary = next(text for floor, text in _SUMMARY_BANDS if score >= floor)
        if context:
            summary += f" (Evaluated for {context} context)"

        counts: Dict[IssueSeverity, int] = {}
        for issue in issues:
            counts[issue.severity] = counts.get(issue.severity, 0) + 1
        for severity in (IssueSeverity.HIGH, IssueSeverity.MEDIUM, IssueSeverity.LOW):
            count = counts.get(severity, 0)
            if count:
                plural = "s" if count > 1 else ""
                summary += f" Found {count} {severity.value}-severity issue{plural}."
        return summary


class ComplianceEngine:
    """Runs the three analyzers for a brand and aggregates their results."""

    def __init__(
        self,
        aggregator: Optional[ComplianceAggregator] = None,
        technical_terms: Optional[List[str]] = None,
        domain_exemptions: Optional[Dict[str, List[str]]] = None,
    ):
        self.aggregator = aggregator or ComplianceAggregator()
        self.technical_terms = list(technical_terms or [])
        self.domain_exemptions = dict(domain_exemptions or {})

    def terminology_analyzer(self, brand: Brand) -> TerminologyAnalyzer:
        analyzer = TerminologyAnalyzer(brand)
        if self.technical_terms:
            analyzer.add_technical_terms(self.technical_terms)
        for domain, terms in self.domain_exemptions.items():
            analyzer.add_domain_exemptions(domain, terms)
        return analyzer

    def evaluate(
        self, content: Content, brand: Brand, context: Optional[str] = None
    ) -> ComplianceEvaluation:
        context = context or content.context
        tone = ToneAnalyzer(brand).analyze(content, context)
        voice = VoiceAnalyzer(brand).analyze(content, context)
        terminology = self.terminology_analyzer(brand).analyze(content, context)
        evaluation = self.aggregator.aggregate(content, brand, tone, voice, terminology, context)
        logger.debug(
            "Compliance evaluation complete: brand=%s score=%d issues=%d",
            brand.name,
            evaluation.score,
            len(evaluation.issues),
        )
        return evaluation


__all__ = [
    "ComplianceAggregator",
    "ComplianceEngine",
    "classify_severity",
    "suggest_fix",
    "HIGH_SEVERITY_KEYWORDS",
    "MEDIUM_SEVERITY_KEYWORDS",
]
