"""Evaluation result models shared by the engines and the application layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..exceptions import ConfigurationError, ValidationError
from .brand import Brand
from .content import Content

COMPLIANCE_THRESHOLD = 80
COMBINED_COMPLIANCE_THRESHOLD = 70


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounding away from zero for scores."""
    return int(math.floor(value + 0.5))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RiskLevel(str, Enum):
    """Totally ordered risk scale."""

    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"

    @property
    def rank(self) -> int:
        return _RISK_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: Any) -> "RiskLevel":
        """Parse a risk level name case-insensitively."""
        if isinstance(value, RiskLevel):
            return value
        if isinstance(value, str):
            normalized = value.strip().upper().replace(" ", "_").replace("-", "_")
            for level in cls:
                if level.value == normalized:
                    return level
        raise ConfigurationError(
            f"Unknown risk level: {value!r}", config_key="risk_level"
        )

    @classmethod
    def highest(cls, levels: Iterable["RiskLevel"]) -> "RiskLevel":
        return max(levels, default=cls.NONE)


_RISK_ORDER = list(RiskLevel)


class SafetyCategory(str, Enum):
    """Brand safety risk categories."""

    SEXUAL_CONTENT = "SEXUAL_CONTENT"
    VIOLENCE = "VIOLENCE"
    HATE_SPEECH = "HATE_SPEECH"
    HARASSMENT = "HARASSMENT"
    SELF_HARM = "SELF_HARM"
    ILLEGAL_ACTIVITIES = "ILLEGAL_ACTIVITIES"
    PROFANITY = "PROFANITY"
    ALCOHOL_TOBACCO = "ALCOHOL_TOBACCO"
    POLITICAL = "POLITICAL"
    RELIGION = "RELIGION"
    SENTIMENT_ANALYSIS = "SENTIMENT_ANALYSIS"
    CONTEXTUAL_ANALYSIS = "CONTEXTUAL_ANALYSIS"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @classmethod
    def lookup(cls, value: Any) -> Optional["SafetyCategory"]:
        """Return the category for a name, or None when it is unknown."""
        if isinstance(value, SafetyCategory):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                return None
        return None


_CATEGORY_LABELS = {
    SafetyCategory.SEXUAL_CONTENT: "sexual content",
    SafetyCategory.VIOLENCE: "violence",
    SafetyCategory.HATE_SPEECH: "hate speech",
    SafetyCategory.HARASSMENT: "harassment",
    SafetyCategory.SELF_HARM: "self-harm",
    SafetyCategory.ILLEGAL_ACTIVITIES: "illegal activities",
    SafetyCategory.PROFANITY: "profanity",
    SafetyCategory.ALCOHOL_TOBACCO: "alcohol and tobacco",
    SafetyCategory.POLITICAL: "political content",
    SafetyCategory.RELIGION: "religious content",
    SafetyCategory.SENTIMENT_ANALYSIS: "negative sentiment",
    SafetyCategory.CONTEXTUAL_ANALYSIS: "sensitive topics",
}


class IssueType(str, Enum):
    TONE = "tone"
    VOICE = "voice"
    TERMINOLOGY = "terminology"
    SAFETY_CATEGORY = "safety-category"


class IssueSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    # Plugin issues report on this scale
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


SEVERITY_ORDER = {
    IssueSeverity.HIGH: 0,
    IssueSeverity.MEDIUM: 1,
    IssueSeverity.LOW: 2,
}


@dataclass(frozen=True, slots=True)
class Issue:
    """A single guideline or safety finding."""

    type: IssueType
    severity: IssueSeverity
    description: str
    suggestion: Optional[str] = None
    position: Optional[Tuple[int, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type.value,
            "severity": self.severity.value,
            "description": self.description,
        }
        if self.suggestion:
            data["suggestion"] = self.suggestion
        if self.position is not None:
            data["position"] = {"start": self.position[0], "end": self.position[1]}
        return data


@dataclass(frozen=True, slots=True)
class CategoryEvaluation:
    """Risk assessment for one safety category."""

    category: SafetyCategory
    risk_level: RiskLevel
    explanation: str
    matches: Tuple[str, ...] = ()
    tolerance: Optional[RiskLevel] = None
    position: Optional[Tuple[int, int]] = None

    @property
    def exceeds_tolerance(self) -> bool:
        return self.tolerance is not None and self.risk_level > self.tolerance

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "risk_level": self.risk_level.value,
            "explanation": self.explanation,
            "matches": list(self.matches),
            "tolerance": self.tolerance.value if self.tolerance else None,
            "exceeds_tolerance": self.exceeds_tolerance,
        }


@dataclass(frozen=True, slots=True)
class SafetyEvaluation:
    """Brand safety result for one piece of content."""

    content: Content
    overall_risk: RiskLevel
    category_evaluations: Tuple[CategoryEvaluation, ...]
    summary: str
    timestamp: datetime = field(default_factory=_utcnow)

    @property
    def is_safe(self) -> bool:
        return self.overall_risk <= RiskLevel.LOW

    @property
    def significant_risks(self) -> List[CategoryEvaluation]:
        return [c for c in self.category_evaluations if c.risk_level >= RiskLevel.MEDIUM]

    @property
    def tolerance_violations(self) -> List[CategoryEvaluation]:
        return [c for c in self.category_evaluations if c.exceeds_tolerance]

    @property
    def issues(self) -> List[Issue]:
        issues = []
        for evaluation in self.category_evaluations:
            if evaluation.risk_level == RiskLevel.NONE:
                continue
            issues.append(
                Issue(
                    type=IssueType.SAFETY_CATEGORY,
                    severity=_severity_for_risk(evaluation.risk_level),
                    description=evaluation.explanation,
                    suggestion=(
                        f"Review or remove {evaluation.category.label} "
                        "before publishing."
                    ),
                    position=evaluation.position,
                )
            )
        return issues

    def get_category_evaluation(
        self, category: SafetyCategory
    ) -> Optional[CategoryEvaluation]:
        for evaluation in self.category_evaluations:
            if evaluation.category == category:
                return evaluation
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content.to_dict(),
            "overall_risk": self.overall_risk.value,
            "is_safe": self.is_safe,
            "summary": self.summary,
            "categories": [c.to_dict() for c in self.category_evaluations],
            "issues": [i.to_dict() for i in self.issues],
            "tolerance_violations": [c.category.value for c in self.tolerance_violations],
            "timestamp": self.timestamp.isoformat(),
        }


def _severity_for_risk(level: RiskLevel) -> IssueSeverity:
    if level >= RiskLevel.HIGH:
        return IssueSeverity.HIGH
    if level == RiskLevel.MEDIUM:
        return IssueSeverity.MEDIUM
    return IssueSeverity.LOW


@dataclass(frozen=True, slots=True)
class ComplianceEvaluation:
    """Brand guideline compliance result for one piece of content."""

    content: Content
    brand: Brand
    score: int
    issues: Tuple[Issue, ...]
    summary: str
    context: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise ValidationError(
                "Compliance score must be an integer",
                field_errors={"score": repr(self.score)},
            )
        if not 0 <= self.score <= 100:
            raise ValidationError(
                "Compliance score must be between 0 and 100",
                field_errors={"score": str(self.score)},
            )
        object.__setattr__(self, "issues", tuple(self.issues))

    @property
    def is_compliant(self) -> bool:
        return self.score >= COMPLIANCE_THRESHOLD

    @property
    def has_high_severity_issues(self) -> bool:
        return any(i.severity == IssueSeverity.HIGH for i in self.issues)

    def issues_by_severity(self, severity: IssueSeverity) -> List[Issue]:
        return [i for i in self.issues if i.severity == severity]

    def issues_by_type(self, issue_type: IssueType) -> List[Issue]:
        return [i for i in self.issues if i.type == issue_type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content.to_dict(),
            "brand": self.brand.name,
            "score": self.score,
            "is_compliant": self.is_compliant,
            "context": self.context,
            "summary": self.summary,
            "issues": [i.to_dict() for i in self.issues],
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class EvaluationWeights:
    """Relative weight of safety and brand compliance in the combined score."""

    safety: float = 0.5
    brand: float = 0.5

    def __post_init__(self) -> None:
        for name in ("safety", "brand"):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
                or value < 0
            ):
                raise ConfigurationError(
                    f"Weight '{name}' must be a non-negative number",
                    config_key=f"weights.{name}",
                )
        if self.safety + self.brand <= 0:
            raise ConfigurationError(
                "Weights must have a positive sum", config_key="weights"
            )

    def to_dict(self) -> Dict[str, float]:
        return {"safety": self.safety, "brand": self.brand}


@dataclass(frozen=True, slots=True)
class CombinedEvaluationResult:
    """Safety and/or compliance result with an optional combined score."""

    safety_evaluation: Optional[SafetyEvaluation] = None
    compliance_evaluation: Optional[ComplianceEvaluation] = None
    combined_score: Optional[int] = None
    weights: Optional[EvaluationWeights] = None
    plugin_results: Sequence[Any] = ()
    enrichment: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if self.combined_score is not None and not 0 <= self.combined_score <= 100:
            raise ValidationError(
                "Combined score must be between 0 and 100",
                field_errors={"combined_score": str(self.combined_score)},
            )
        object.__setattr__(self, "plugin_results", tuple(self.plugin_results))

    @property
    def is_compliant(self) -> bool:
        if self.combined_score is not None:
            return self.combined_score >= COMBINED_COMPLIANCE_THRESHOLD
        if self.safety_evaluation is not None and not self.safety_evaluation.is_safe:
            return False
        if (
            self.compliance_evaluation is not None
            and not self.compliance_evaluation.is_compliant
        ):
            return False
        return True

    @property
    def summary(self) -> str:
        parts = []
        if self.safety_evaluation is not None:
            parts.append(
                f"Safety: {self.safety_evaluation.overall_risk.value} risk"
            )
        if self.compliance_evaluation is not None:
            parts.append(
                f"Brand compliance: {self.compliance_evaluation.score}/100"
            )
        if self.combined_score is not None:
            parts.append(f"Combined score: {self.combined_score}/100")
        if not parts:
            return "No evaluation performed."
        verdict = "compliant" if self.is_compliant else "not compliant"
        return f"{'. '.join(parts)}. Overall: {verdict}."

    def to_dict(self) -> Dict[str, Any]:
        return {
            "safety": self.safety_evaluation.to_dict() if self.safety_evaluation else None,
            "compliance": (
                self.compliance_evaluation.to_dict()
                if self.compliance_evaluation
                else None
            ),
            "combined_score": self.combined_score,
            "weights": self.weights.to_dict() if self.weights else None,
            "is_compliant": self.is_compliant,
            "summary": self.summary,
            "plugin_results": [r.to_dict() for r in self.plugin_results],
            "enrichment": self.enrichment or None,
            "timestamp": self.timestamp.isoformat(),
        }


__all__ = [
    "RiskLevel",
    "SafetyCategory",
    "IssueType",
    "IssueSeverity",
    "SEVERITY_ORDER",
    "Issue",
    "CategoryEvaluation",
    "SafetyEvaluation",
    "ComplianceEvaluation",
    "EvaluationWeights",
    "CombinedEvaluationResult",
    "COMPLIANCE_THRESHOLD",
    "COMBINED_COMPLIANCE_THRESHOLD",
    "round_half_up",
]
