"""Request and result models for the application use cases."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.evaluations import EvaluationWeights


class EvaluationMode(str, Enum):
    SAFETY = "safety"
    COMPLIANCE = "compliance"
    COMBINED = "combined"


class EvaluationRequest(BaseModel):
    """A single piece of content to evaluate.

    ``content`` is accepted as an alias of ``text`` so batch files written
    for either spelling load unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    text: str = Field(alias="content")
    context: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("text", mode="before")
    @classmethod
    def validate_text(cls, v: Any) -> Any:
        if not isinstance(v, str):
            raise ValueError("content must be a string")
        return v


class CombinedOptions(BaseModel):
    """Flags and weights for a combined evaluation."""

    model_config = ConfigDict(extra="forbid")

    include_safety: bool = True
    include_brand: bool = True
    safety_weight: Optional[float] = None
    brand_weight: Optional[float] = None
    run_plugins: bool = True
    plugin_ids: Optional[List[str]] = None
    enrich: bool = True

    def weights(self) -> Optional[EvaluationWeights]:
        """Weights to combine with; None unless at least one was given."""
        if self.safety_weight is None and self.brand_weight is None:
            return None
        defaults = EvaluationWeights()
        return EvaluationWeights(
            safety=defaults.safety if self.safety_weight is None else self.safety_weight,
            brand=defaults.brand if self.brand_weight is None else self.brand_weight,
        )


class ConfigUpdateRequest(BaseModel):
    """Partial update of the safety configuration and compliance weights."""

    model_config = ConfigDict(extra="forbid")

    categories: Optional[List[str]] = None
    sensitive_keywords: Optional[List[str]] = None
    allowed_topics: Optional[List[str]] = None
    blocked_topics: Optional[List[str]] = None
    risk_tolerances: Optional[Dict[str, str]] = None
    tone_weight: Optional[float] = None
    voice_weight: Optional[float] = None
    terminology_weight: Optional[float] = None

    def safety_updates(self) -> Dict[str, Any]:
        fields = (
            "categories",
            "sensitive_keywords",
            "allowed_topics",
            "blocked_topics",
            "risk_tolerances",
        )
        return {name: getattr(self, name) for name in fields if getattr(self, name) is not None}

    def weight_updates(self) -> Dict[str, float]:
        values = {
            "tone": self.tone_weight,
            "voice": self.voice_weight,
            "terminology": self.terminology_weight,
        }
        return {name: value for name, value in values.items() if value is not None}


class ConfigUpdateResult(BaseModel):
    success: bool
    message: str
    updated_fields: List[str] = Field(default_factory=list)


class CommonIssue(BaseModel):
    type: str
    description: str
    frequency: int


class BatchSummary(BaseModel):
    success_rate: float
    average_processing_time_ms: float
    average_score: float
    high_risk_count: int
    compliant_count: int
    common_issues: List[CommonIssue] = Field(default_factory=list)


class BatchItemOutcome(BaseModel):
    """Result or error for one batch item; exactly one of the two is set."""

    id: str
    status: str
    result: Optional[Dict[str, Any]] = None
    error: Optional[Dict[str, Any]] = None


class BatchEvaluationResult(BaseModel):
    batch_id: str
    mode: EvaluationMode
    total_items: int
    success_count: int
    error_count: int
    processing_time_ms: float
    items: List[BatchItemOutcome]
    summary: BatchSummary

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


__all__ = [
    "BatchEvaluationResult",
    "BatchItemOutcome",
    "BatchSummary",
    "CombinedOptions",
    "CommonIssue",
    "ConfigUpdateRequest",
    "ConfigUpdateResult",
    "EvaluationMode",
    "EvaluationRequest",
]
