"""Brand guideline models.

Brand profiles are authored as camelCase JSON/YAML documents (``toneGuidelines``,
``voiceGuidelines`` ...). The models accept both that form and snake_case
field names, and are immutable once validated.
"""

from __future__ import annotations

import hashlib
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import ValidationError


class _GuidelineModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ToneGuidelines(_GuidelineModel):
    """Tone the brand should project and tones it must avoid."""

    primary_tone: str = Field(..., description="Tone every piece of content should carry")
    secondary_tones: List[str] = Field(default_factory=list)
    avoided_tones: List[str] = Field(default_factory=list)
    tonal_shift: Dict[str, str] = Field(
        default_factory=dict, description="Informational per-context tone notes"
    )
    examples: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("primary_tone")
    @classmethod
    def validate_primary_tone(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("primaryTone cannot be empty")
        return v.strip()


class SentenceGuidelines(_GuidelineModel):
    length: str = ""
    structure: str = ""


class PronounUsage(_GuidelineModel):
    first_person: bool = True
    second_person: bool = True


class VoiceGuidelines(_GuidelineModel):
    """Writing-style preferences."""

    personality: str = ""
    sentence: SentenceGuidelines = Field(default_factory=SentenceGuidelines)
    uses_contractions: bool = True
    uses_pronoun: PronounUsage = Field(default_factory=PronounUsage)
    examples: Dict[str, Any] = Field(default_factory=dict)


class TerminologyRule(_GuidelineModel):
    """A preferred term with disallowed alternatives, or a context-avoided term."""

    preferred: Optional[str] = None
    alternatives: List[str] = Field(default_factory=list)
    term: Optional[str] = None
    contexts: Optional[List[str]] = None
    avoid_in_contexts: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class TerminologyGuidelines(_GuidelineModel):
    avoided_global_terms: List[str] = Field(default_factory=list)
    proper_nouns: Dict[str, str] = Field(default_factory=dict)
    terms: List[TerminologyRule] = Field(default_factory=list)


class VoiceAdjustment(_GuidelineModel):
    personality: Optional[str] = None
    sentence_length: Optional[str] = None
    sentence_structure: Optional[str] = None
    uses_contractions: Optional[bool] = None


class ContextualRules(_GuidelineModel):
    tone: Optional[str] = None
    voice: Optional[VoiceAdjustment] = None


class ContextualAdjustment(_GuidelineModel):
    """Guideline overrides that apply when content is evaluated in a context."""

    contexts: List[str] = Field(default_factory=list)
    apply_rules: ContextualRules = Field(default_factory=ContextualRules)


class Brand(_GuidelineModel):
    """A brand identity with its tone, voice and terminology guidelines."""

    name: str
    description: str = ""
    tone_guidelines: ToneGuidelines
    voice_guidelines: VoiceGuidelines = Field(default_factory=VoiceGuidelines)
    terminology_guidelines: TerminologyGuidelines = Field(
        default_factory=TerminologyGuidelines
    )
    visual_identity: Optional[Dict[str, Any]] = None
    contextual_adjustments: List[ContextualAdjustment] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Brand name cannot be empty")
        return v.strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Brand":
        """Validate a schema document, raising the engine's ValidationError."""
        if not isinstance(data, dict):
            raise ValidationError(
                "Brand schema must be a mapping",
                field_errors={"schema": type(data).__name__},
            )
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            field_errors = {
                ".".join(str(part) for part in error["loc"]): error["msg"]
                for error in exc.errors()
            }
            raise ValidationError(
                "Invalid brand schema", field_errors=field_errors
            ) from exc

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def fingerprint(self) -> str:
        """Stable hash of the guidelines, used to key cached evaluations."""
        canonical = self.model_dump_json(by_alias=True)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

    def adjustment_for(self, context: Optional[str]) -> Optional[ContextualRules]:
        """Return the first rule set whose contexts list the label exactly."""
        if not context:
            return None
        for adjustment in self.contextual_adjustments:
            if context in adjustment.contexts:
                return adjustment.apply_rules
        return None


__all__ = [
    "Brand",
    "ToneGuidelines",
    "SentenceGuidelines",
    "PronounUsage",
    "VoiceGuidelines",
    "TerminologyRule",
    "TerminologyGuidelines",
    "VoiceAdjustment",
    "ContextualRules",
    "ContextualAdjustment",
]
