"""Domain models: content, brand guidelines and evaluation results."""

from .brand import Brand, ContextualRules, TerminologyRule
from .content import Content, ContentMetadata, sanitize_input
from .evaluations import (
    CategoryEvaluation,
    CombinedEvaluationResult,
    ComplianceEvaluation,
    EvaluationWeights,
    Issue,
    IssueSeverity,
    IssueType,
    RiskLevel,
    SafetyCategory,
    SafetyEvaluation,
)

__all__ = [
    "Brand",
    "ContextualRules",
    "TerminologyRule",
    "Content",
    "ContentMetadata",
    "sanitize_input",
    "CategoryEvaluation",
    "CombinedEvaluationResult",
    "ComplianceEvaluation",
    "EvaluationWeights",
    "Issue",
    "IssueSeverity",
    "IssueType",
    "RiskLevel",
    "SafetyCategory",
    "SafetyEvaluation",
]
