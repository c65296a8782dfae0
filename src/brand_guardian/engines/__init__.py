"""Evaluation engines."""

from .combined_evaluator import CombinedEvaluator
from .compliance_aggregator import ComplianceAggregator, ComplianceEngine
from .safety_categorizer import SafetyCategorizer

__all__ = [
    "CombinedEvaluator",
    "ComplianceAggregator",
    "ComplianceEngine",
    "SafetyCategorizer",
]
