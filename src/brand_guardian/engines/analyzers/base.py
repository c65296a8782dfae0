"""Shared result types for the guideline analyzers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

MAX_SCORE = 100


@dataclass(frozen=True, slots=True)
class Finding:
    """A guideline violation reported by an analyzer, before severity grading."""

    description: str
    position: Optional[Tuple[int, int]] = None


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Sub-score (0-100) and findings for one analyzer dimension."""

    score: int
    findings: Tuple[Finding, ...] = ()
    details: Dict[str, Any] = field(default_factory=dict)


def clamp_score(score: float) -> int:
    return int(max(0, min(MAX_SCORE, score)))


__all__ = ["AnalysisResult", "Finding", "MAX_SCORE", "clamp_score"]
