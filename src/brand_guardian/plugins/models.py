"""Data exchanged between the plugin manager and plugins."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.evaluations import RiskLevel

PluginType = Literal["evaluation", "enricher", "formatter"]


class IssuePosition(BaseModel):
    start: int = Field(ge=0)
    end: int = Field(ge=0)


class PluginIssue(BaseModel):
    """Issue reported by an evaluation plugin."""

    type: str
    severity: Literal["info", "warning", "error", "critical"] = "warning"
    description: str
    position: Optional[IssuePosition] = None
    suggestion: Optional[str] = None


class PluginEvaluationResult(BaseModel):
    """Outcome of one evaluation plugin for one piece of content."""

    plugin_id: str
    score: int = Field(ge=0, le=100)
    is_compliant: bool
    risk_level: RiskLevel = RiskLevel.NONE
    issues: List[PluginIssue] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class EnrichedContent(BaseModel):
    """Content after an enricher ran, with the metadata it contributed."""

    original: str
    enriched: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SystemMetadata(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    client_id: Optional[str] = None


class PluginContext(BaseModel):
    """Context handed to evaluation plugins."""

    brand_config: Optional[Dict[str, Any]] = None
    user_context: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    system_metadata: SystemMetadata = Field(default_factory=SystemMetadata)


class PluginConfigSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    json_schema: Dict[str, Any] = Field(default_factory=dict, alias="schema")
    defaults: Dict[str, Any] = Field(default_factory=dict)


class PluginManifest(BaseModel):
    """Manifest describing a plugin found on disk.

    The entry point is either ``main`` (a python file relative to the plugin
    directory) or ``module`` (a dotted import path), plus the class name.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    version: str
    description: str = ""
    author: Optional[str] = None
    license: Optional[str] = None
    type: PluginType
    main: Optional[str] = None
    module: Optional[str] = None
    class_name: str = Field(alias="class")
    config: PluginConfigSchema = Field(default_factory=PluginConfigSchema)

    @field_validator("id", "name", "version", "class_name")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("main")
    @classmethod
    def validate_main(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.endswith(".py"):
            raise ValueError("main must reference a python file")
        if v.startswith(("/", "\\")) or ".." in v.replace("\\", "/").split("/"):
            raise ValueError("main must stay inside the plugin directory")
        return v


__all__ = [
    "EnrichedContent",
    "IssuePosition",
    "PluginConfigSchema",
    "PluginContext",
    "PluginEvaluationResult",
    "PluginIssue",
    "PluginManifest",
    "PluginType",
    "SystemMetadata",
]
