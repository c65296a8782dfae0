"""JSON formatter plugin."""

import json
from typing import Any, Dict, List

from ..base import FormatterPlugin


def _count_by(issues: List[Dict[str, Any]], key: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for issue in issues:
        value = issue.get(key) or "unknown"
        counts[value] = counts.get(value, 0) + 1
    return counts


def _collect_issues(result: Dict[str, Any]) -> List[Dict[str, Any]]:
    issues = list(result.get("issues") or [])
    for section in ("safety", "compliance"):
        nested = result.get(section)
        if isinstance(nested, dict):
            issues.extend(nested.get("issues") or [])
    return issues


class JsonFormatterPlugin(FormatterPlugin):
    supported_formats = ["json", "json-compact", "json-summary"]

    def __init__(self) -> None:
        super().__init__(
            "json-formatter",
            "JSON Formatter Plugin",
            "1.0.0",
            "Formats evaluation results as JSON",
        )

    def is_compatible(self, system_version: str) -> bool:
        return True

    async def format(self, result: Dict[str, Any], output_format: str) -> str:
        if output_format == "json":
            return json.dumps(result, indent=2, default=str)
        if output_format == "json-compact":
            return json.dumps(result, separators=(",", ":"), default=str)
        if output_format == "json-summary":
            return json.dumps(self.summarize(result), indent=2, default=str)
        raise ValueError(f"Unsupported format: {output_format}")

    @staticmethod
    def summarize(result: Dict[str, Any]) -> Dict[str, Any]:
        safety = result.get("safety") if isinstance(result.get("safety"), dict) else {}
        compliance = result.get("compliance") if isinstance(result.get("compliance"), dict) else {}
        score = result.get("combined_score")
        if score is None:
            score = result.get("score", compliance.get("score"))
        issues = _collect_issues(result)

        summary: Dict[str, Any] = {
            "evaluation": {
                "score": score,
                "is_compliant": result.get("is_compliant", False),
                "risk_level": result.get("overall_risk", safety.get("overall_risk", "UNKNOWN")),
            },
            "issues": {
                "total": len(issues),
                "by_type": _count_by(issues, "type"),
                "by_severity": _count_by(issues, "severity"),
            },
        }
        if result.get("plugin_results"):
            summary["plugins"] = [
                {
                    "plugin_id": pr.get("plugin_id"),
                    "score": pr.get("score"),
                    "is_compliant": pr.get("is_compliant"),
                }
                for pr in result["plugin_results"]
            ]
        return summary


__all__ = ["JsonFormatterPlugin"]
