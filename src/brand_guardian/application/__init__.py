"""Use cases orchestrating the evaluation engines."""

from .batch import BatchEvaluationUseCase
from .combined import CombinedEvaluationUseCase
from .compliance import CheckComplianceUseCase
from .config_update import UpdateConfigUseCase
from .models import (
    BatchEvaluationResult,
    CombinedOptions,
    ConfigUpdateRequest,
    ConfigUpdateResult,
    EvaluationMode,
    EvaluationRequest,
)
from .safety import CheckSafetyUseCase

__all__ = [
    "BatchEvaluationResult",
    "BatchEvaluationUseCase",
    "CheckComplianceUseCase",
    "CheckSafetyUseCase",
    "CombinedEvaluationUseCase",
    "CombinedOptions",
    "ConfigUpdateRequest",
    "ConfigUpdateResult",
    "EvaluationMode",
    "EvaluationRequest",
    "UpdateConfigUseCase",
]
