"""Exception taxonomy for the evaluation engine.

Every error carries a machine readable ``error_code`` and optional structured
``details``. Callers at the boundary should render errors through
:func:`safe_error_response` so that internal detail never reaches end users.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class BrandGuardianError(Exception):
    """Base exception for all engine errors."""

    user_message = "The request could not be processed."

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        timestamp: Optional[datetime] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}
        self.timestamp = timestamp or datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}'"
            f")"
        )


class ValidationError(BrandGuardianError):
    """Raised when content, brand schemas or evaluation values are invalid."""

    user_message = "The submitted input is invalid."

    def __init__(
        self,
        message: str,
        error_code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
        field_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message, error_code, details)
        self.field_errors = field_errors or {}
        if self.field_errors:
            self.details["field_errors"] = self.field_errors


class ConfigurationError(BrandGuardianError):
    """Raised for invalid weights, unknown risk levels or unreadable config."""

    user_message = "The configuration is invalid."

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIGURATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
        config_key: Optional[str] = None,
    ):
        super().__init__(message, error_code, details)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key


class PluginError(BrandGuardianError):
    """Raised when a plugin cannot be loaded or no plugin can serve a request."""

    user_message = "A plugin operation failed."

    def __init__(
        self,
        message: str,
        error_code: str = "PLUGIN_ERROR",
        details: Optional[Dict[str, Any]] = None,
        plugin_id: Optional[str] = None,
    ):
        super().__init__(message, error_code, details)
        self.plugin_id = plugin_id
        if plugin_id:
            self.details["plugin_id"] = plugin_id


class EvaluationError(BrandGuardianError):
    """Raised when an evaluation cannot be completed."""

    user_message = "The content could not be evaluated."

    def __init__(
        self,
        message: str,
        error_code: str = "EVALUATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


def safe_error_response(exc: BaseException) -> Dict[str, Any]:
    """Build a user-facing error payload that carries no internal detail.

    Validation errors keep their field names so callers can fix their input;
    everything else collapses to a generic message for its category.
    """
    if isinstance(exc, BrandGuardianError):
        response: Dict[str, Any] = {
            "error_code": exc.error_code,
            "message": exc.user_message,
        }
        if isinstance(exc, ValidationError) and exc.field_errors:
            response["fields"] = sorted(exc.field_errors)
        return response
    return {
        "error_code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred.",
    }


__all__ = [
    "BrandGuardianError",
    "ValidationError",
    "ConfigurationError",
    "PluginError",
    "EvaluationError",
    "safe_error_response",
]
