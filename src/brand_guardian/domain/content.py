"""Content value object submitted for evaluation."""

from __future__ import annotations

import re
from dataclasses import InitVar, dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..exceptions import ValidationError

MAX_CONTENT_LENGTH = 100_000
LONG_FORM_THRESHOLD = 500

_WHITESPACE_RUN = re.compile(r"\s+")
# Control characters other than tab, newline and carriage return
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def sanitize_input(text: str) -> str:
    """Strip NUL and non-printing control characters from untrusted text."""
    return _CONTROL_CHARS.sub("", text)


@dataclass(frozen=True, slots=True)
class ContentMetadata:
    """Optional descriptive metadata attached to submitted content."""

    source: Optional[str] = None
    content_type: Optional[str] = None
    language: Optional[str] = None
    created_at: Optional[datetime] = None
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ContentMetadata":
        data = data or {}
        created_at = data.get("created_at") or data.get("createdAt")
        if isinstance(created_at, str):
            try:
                created_at = datetime.fromisoformat(created_at)
            except ValueError as exc:
                raise ValidationError(
                    "Invalid metadata timestamp",
                    field_errors={"created_at": str(exc)},
                ) from exc
        return cls(
            source=data.get("source"),
            content_type=data.get("content_type") or data.get("contentType"),
            language=data.get("language"),
            created_at=created_at,
            tags=tuple(data.get("tags") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "content_type": self.content_type,
            "language": self.language,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "tags": list(self.tags),
        }


@dataclass(frozen=True, slots=True)
class Content:
    """Immutable piece of text to evaluate.

    Construction fails with :class:`ValidationError` for empty text or text
    longer than ``max_length``, so no analyzer ever sees invalid content.
    """

    text: str
    context: Optional[str] = None
    metadata: ContentMetadata = field(default_factory=ContentMetadata)
    max_length: InitVar[int] = MAX_CONTENT_LENGTH

    def __post_init__(self, max_length: int) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValidationError(
                "Content text cannot be empty",
                field_errors={"text": "must be a non-empty string"},
            )
        if len(self.text) > max_length:
            raise ValidationError(
                f"Content exceeds maximum length of {max_length} characters",
                field_errors={"text": f"length {len(self.text)} > {max_length}"},
            )
        if self.context is not None and not self.context.strip():
            object.__setattr__(self, "context", None)

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def normalized_text(self) -> str:
        """Trimmed text with internal whitespace runs collapsed to one space."""
        return _WHITESPACE_RUN.sub(" ", self.text.strip())

    @property
    def is_long_form(self) -> bool:
        return self.length > LONG_FORM_THRESHOLD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "context": self.context,
            "length": self.length,
            "is_long_form": self.is_long_form,
            "metadata": self.metadata.to_dict(),
        }


__all__ = [
    "Content",
    "ContentMetadata",
    "MAX_CONTENT_LENGTH",
    "LONG_FORM_THRESHOLD",
    "sanitize_input",
]
