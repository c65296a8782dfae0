"""Profanity filter evaluation plugin."""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Pattern

from ...domain.evaluations import RiskLevel
from ..base import EvaluationPlugin
from ..models import IssuePosition, PluginContext, PluginEvaluationResult, PluginIssue

DEFAULT_WORDS = ("damn", "hell", "crap", "stupid", "idiot", "idiots", "dumb")
PENALTY_PER_MATCH = 10
STRICT_PENALTY_PER_MATCH = 20


def score_to_risk(score: int) -> RiskLevel:
    if score >= 90:
        return RiskLevel.NONE
    if score >= 70:
        return RiskLevel.LOW
    if score >= 50:
        return RiskLevel.MEDIUM
    if score >= 30:
        return RiskLevel.HIGH
    return RiskLevel.VERY_HIGH


class ProfanityFilterPlugin(EvaluationPlugin):
    """Flags inappropriate language, ten points per occurrence.

    Config: ``strict_mode`` doubles the penalty, ``custom_words`` extends the
    word list.
    """

    evaluation_type = "safety"

    def __init__(self) -> None:
        super().__init__(
            "profanity-filter",
            "Profanity Filter Plugin",
            "1.0.0",
            "Detects inappropriate language in content",
        )
        self._pattern: Optional[Pattern[str]] = None

    async def _initialize_plugin(self) -> None:
        self._pattern = None

    def _compiled(self) -> Pattern[str]:
        if self._pattern is None:
            words: List[str] = list(DEFAULT_WORDS)
            words.extend(w for w in self._config.get("custom_words", []) if isinstance(w, str))
            alternation = "|".join(re.escape(w) for w in sorted(set(words), key=len, reverse=True))
            self._pattern = re.compile(rf"\b({alternation})\b", re.IGNORECASE)
        return self._pattern

    def update_config(self, config: Dict[str, Any]) -> None:
        super().update_config(config)
        self._pattern = None

    async def evaluate(
        self, content: str, context: Optional[PluginContext] = None
    ) -> PluginEvaluationResult:
        self._ensure_initialized()
        penalty = STRICT_PENALTY_PER_MATCH if self._config.get("strict_mode") else PENALTY_PER_MATCH

        issues = []
        for match in self._compiled().finditer(content):
            issues.append(
                PluginIssue(
                    type="profanity",
                    severity="warning",
                    description=f'Potentially inappropriate language detected: "{match.group(0)}"',
                    position=IssuePosition(start=match.start(), end=match.end()),
                    suggestion="Consider using more professional language",
                )
            )

        score = max(0, 100 - penalty * len(issues))
        return PluginEvaluationResult(
            plugin_id=self.plugin_id,
            score=score,
            is_compliant=score >= 70,
            risk_level=score_to_risk(score),
            issues=issues,
            metadata={
                "profanity_count": len(issues),
                "checked_at": datetime.now(timezone.utc).isoformat(),
            },
        )


__all__ = ["ProfanityFilterPlugin", "score_to_risk"]
