"""Brand safety categorizer following SRP.

Single Responsibility: Map content to a risk level per safety category and an
overall risk level. Does NOT handle: caching, configuration storage.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Tuple

from ..config.manager import SafetyConfig
from ..domain.content import Content
from ..domain.evaluations import (
    CategoryEvaluation,
    RiskLevel,
    SafetyCategory,
    SafetyEvaluation,
)
from .pattern_matcher import PatternMatch, find_pattern, first_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategorySignals:
    """Keyword stems and phrase patterns that indicate a category."""

    keywords: Tuple[str, ...] = ()
    phrases: Tuple[Pattern[str], ...] = ()


def _phrases(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p.replace(" ", r"\s+"), re.IGNORECASE) for p in patterns)


CATEGORY_SIGNALS: Dict[SafetyCategory, CategorySignals] = {
    SafetyCategory.SEXUAL_CONTENT: CategorySignals(
        keywords=("sexual", "explicit", "adult", "nsfw", "pornographic", "erotic"),
        phrases=_phrases(r"sexual content", r"adult material", r"explicit material"),
    ),
    SafetyCategory.VIOLENCE: CategorySignals(
        keywords=(
            "violence", "violent", "kill", "murder", "assault",
            "attack", "weapon", "gun", "knife",
        ),
        phrases=_phrases(r"physical harm", r"violent action", r"deadly force"),
    ),
    SafetyCategory.HATE_SPEECH: CategorySignals(
        keywords=("hate", "racist", "discrimination", "prejudice", "bigot"),
        phrases=_phrases(r"hate speech", r"discriminatory language", r"racial slurs?"),
    ),
    SafetyCategory.HARASSMENT: CategorySignals(
        keywords=("harass", "bully", "intimidate", "threaten", "stalk"),
        phrases=_phrases(r"personal attack", r"threatening behavior", r"cyberbullying"),
    ),
    SafetyCategory.SELF_HARM: CategorySignals(
        keywords=("suicide", "self-harm", "cutting", "overdose", "self-injury"),
        phrases=_phrases(r"suicidal thoughts", r"self-destructive", r"harm yourself"),
    ),
    SafetyCategory.ILLEGAL_ACTIVITIES: CategorySignals(
        keywords=("illegal", "crime", "criminal", "drugs", "trafficking", "fraud"),
        phrases=_phrases(r"illegal activity", r"criminal behavior", r"drug dealing"),
    ),
    SafetyCategory.PROFANITY: CategorySignals(
        keywords=("damn", "hell", "crap", "shit", "fuck", "bitch", "asshole"),
        phrases=_phrases(r"inappropriate language", r"offensive terms"),
    ),
    SafetyCategory.ALCOHOL_TOBACCO: CategorySignals(
        keywords=("alcohol", "beer", "wine", "tobacco", "cigarette", "smoking"),
        phrases=_phrases(r"alcoholic beverage", r"tobacco product", r"drinking alcohol"),
    ),
    SafetyCategory.POLITICAL: CategorySignals(
        keywords=("political", "election", "candidate", "government", "policy", "politician"),
        phrases=_phrases(r"political opinion", r"government policy", r"election campaign"),
    ),
    SafetyCategory.RELIGION: CategorySignals(
        keywords=("religious", "religion", "god", "church", "faith", "prayer", "bible"),
        phrases=_phrases(r"religious belief", r"spiritual practice", r"religious doctrine"),
    ),
}

_SUMMARIES = {
    RiskLevel.NONE: "Content appears safe with no significant risks detected.",
    RiskLevel.LOW: "Content has minimal risks and is generally acceptable for most brands.",
    RiskLevel.MEDIUM: "Content has moderate risks in: {categories}. Review recommended.",
    RiskLevel.HIGH: (
        "Content has high risks in: {categories}. "
        "Not recommended for brand association."
    ),
    RiskLevel.VERY_HIGH: (
        "Content has extreme risks in: {categories}. Incompatible with brand safety."
    ),
}


class SafetyCategorizer:
    """Keyword and phrase based brand safety categorizer.

    The categorizer holds no configuration of its own: every call receives the
    :class:`SafetyConfig` snapshot to apply, so configuration updates take
    effect on the next evaluation.
    """

    def __init__(self, signals: Optional[Dict[SafetyCategory, CategorySignals]] = None):
        self._signals = dict(CATEGORY_SIGNALS if signals is None else signals)

    def evaluate(self, content: Content, config: SafetyConfig) -> SafetyEvaluation:
        text = content.text
        evaluations = []
        for category in config.categories:
            evaluations.append(self.evaluate_category(category, text, config))

        overall_risk = RiskLevel.highest(e.risk_level for e in evaluations)
        summary = self._generate_summary(overall_risk, evaluations)

        logger.debug(
            "Safety evaluation complete: overall=%s categories=%d length=%d",
            overall_risk.value,
            len(evaluations),
            content.length,
        )
        return SafetyEvaluation(
            content=content,
            overall_risk=overall_risk,
            category_evaluations=tuple(evaluations),
            summary=summary,
        )

    def evaluate_category(
        self, category: SafetyCategory, text: str, config: SafetyConfig
    ) -> CategoryEvaluation:
        """Assess one category; match positions are offsets into ``text``."""
        tolerance = config.tolerance_for(category)
        matches = self._find_signals(category, text, config)

        if not matches:
            return CategoryEvaluation(
                category=category,
                risk_level=RiskLevel.NONE,
                explanation=f"No {category.label} detected.",
                tolerance=tolerance,
            )

        cited = ", ".join(f'"{m.text}"' for m in matches)
        normalized = " ".join(text.split()).lower()
        blocked = [t for t in config.blocked_topics if " ".join(t.split()).lower() in normalized]
        allowed = [t for t in config.allowed_topics if " ".join(t.split()).lower() in normalized]

        if blocked:
            risk_level = RiskLevel.HIGH
            explanation = (
                f"High risk {category.label} detected in blocked topic area "
                f"({', '.join(blocked)}); matched {cited}."
            )
        elif allowed:
            risk_level = RiskLevel.LOW
            explanation = (
                f"{category.label.capitalize()} detected but within allowed topic "
                f"context ({', '.join(allowed)}); matched {cited}."
            )
        else:
            risk_level = RiskLevel.MEDIUM
            explanation = f"Moderate {category.label} detected; matched {cited}."

        return CategoryEvaluation(
            category=category,
            risk_level=risk_level,
            explanation=explanation,
            matches=tuple(m.text for m in matches),
            tolerance=tolerance,
            position=(matches[0].start, matches[0].end),
        )

    def _find_signals(
        self, category: SafetyCategory, text: str, config: SafetyConfig
    ) -> List[PatternMatch]:
        if category == SafetyCategory.CONTEXTUAL_ANALYSIS:
            keywords: Tuple[str, ...] = tuple(config.sensitive_keywords)
            phrases: Tuple[Pattern[str], ...] = ()
        else:
            signals = self._signals.get(category)
            if signals is None:
                return []
            keywords, phrases = signals.keywords, signals.phrases

        matches = []
        for keyword in keywords:
            match = first_match(text, keyword, allow_suffixes=True)
            if match is not None:
                matches.append(match)
        for phrase in phrases:
            found = find_pattern(text, phrase)
            if found:
                matches.append(found[0])
        matches.sort(key=lambda m: m.start)
        return matches

    @staticmethod
    def _generate_summary(
        overall_risk: RiskLevel, evaluations: List[CategoryEvaluation]
    ) -> str:
        risky = [e.category.label for e in evaluations if e.risk_level >= RiskLevel.MEDIUM]
        template = _SUMMARIES[overall_risk]
        return template.format(categories=", ".join(risky))


__all__ = ["CATEGORY_SIGNALS", "CategorySignals", "SafetyCategorizer"]
