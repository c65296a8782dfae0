"""Tone analyzer.

Scores how well content carries the brand's primary tone and penalizes tones
the brand avoids. Detection is lexical: keyword hits add 0.2 and phrase
pattern hits add 0.3 to a confidence capped at 1.0.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Tuple

from ...domain.brand import Brand
from ...domain.content import Content
from ..pattern_matcher import contains_term
from .base import MAX_SCORE, AnalysisResult, Finding, clamp_score

logger = logging.getLogger(__name__)

KEYWORD_WEIGHT = 0.2
PATTERN_WEIGHT = 0.3
DETECTION_THRESHOLD = 0.5
WEAK_PRIMARY_THRESHOLD = 0.3
WEAK_PRIMARY_PENALTY = 20
AVOIDED_TONE_PENALTY = 25

TONE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "confident": ("we believe", "certainly", "definitely", "proven", "guaranteed", "assured"),
    "optimistic": (
        "excited", "opportunity", "growth", "positive", "bright future", "looking forward",
    ),
    "innovative": ("breakthrough", "revolutionary", "cutting-edge", "pioneering", "transform"),
    "approachable": ("we're here", "let us help", "feel free", "happy to", "glad to"),
    "pessimistic": ("unfortunately", "impossible", "cannot", "won't work", "failed"),
    "condescending": ("obviously", "clearly you don't", "as you should know", "simple enough"),
    "overly technical": (
        "algorithm", "infrastructure", "deployment", "implementation", "architecture",
    ),
    "friendly": ("welcome", "glad", "happy", "pleased", "enjoy", "wonderful"),
    "professional": ("professional", "expertise", "experience", "qualified", "standards"),
    "casual": ("hey", "cool", "awesome", "great", "nice", "fun"),
    "authoritative": ("must", "should", "required", "essential", "critical", "important"),
    "conversational": ("you know", "let's", "you'll", "we'll", "here's", "so,"),
    "instructive": ("step", "first", "next", "then", "follow", "how to"),
    "inspiring": ("imagine", "dream", "inspire", "possible", "future", "together"),
    "aspirational": ("imagine", "dream", "aspire", "achieve", "future", "vision"),
}


def _patterns(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


TONE_PATTERNS: Dict[str, Tuple[Pattern[str], ...]] = {
    "confident": _patterns(
        r"we (believe|know|understand)",
        r"(proven|guaranteed) (results|solution)",
        r"with (confidence|certainty)",
    ),
    "optimistic": _patterns(r"looking forward to", r"excited (about|to)", r"bright future"),
    "innovative": _patterns(r"cutting[- ]edge", r"break(ing)?through", r"transform(ing|ative)"),
    "pessimistic": _patterns(r"(unfortunately|sadly)", r"won'?t (work|be possible)", r"impossible to"),
    "instructive": _patterns(r"\bstep \d+", r"\bhow to\b", r"\bfirst,? .+\bthen\b"),
}


@dataclass(frozen=True)
class ToneDetection:
    tone: str
    confidence: float
    matches: Tuple[str, ...] = ()

    @property
    def detected(self) -> bool:
        return self.confidence > DETECTION_THRESHOLD


def known_tones() -> List[str]:
    return sorted(set(TONE_KEYWORDS) | set(TONE_PATTERNS))


def resolve_tone(descriptor: str) -> List[str]:
    """Map a tone descriptor to the known tone names it refers to.

    "confident" resolves to itself; a free-form descriptor such as
    "more casual and conversational" resolves to every known tone it names.
    """
    key = descriptor.strip().lower()
    if key in TONE_KEYWORDS or key in TONE_PATTERNS:
        return [key]
    return [tone for tone in known_tones() if re.search(rf"\b{re.escape(tone)}\b", key)]


def detect_tone(text: str, descriptor: str) -> ToneDetection:
    """Detect a tone in lower-cased text; unresolvable tones have zero confidence."""
    best = ToneDetection(tone=descriptor, confidence=0.0)
    for tone in resolve_tone(descriptor):
        confidence = 0.0
        matches = []
        for keyword in TONE_KEYWORDS.get(tone, ()):
            if contains_term(text, keyword, allow_suffixes=True):
                matches.append(keyword)
                confidence += KEYWORD_WEIGHT
        for pattern in TONE_PATTERNS.get(tone, ()):
            match = pattern.search(text)
            if match:
                matches.append(match.group(0))
                confidence += PATTERN_WEIGHT
        confidence = min(1.0, round(confidence, 4))
        if confidence > best.confidence:
            best = ToneDetection(tone=descriptor, confidence=confidence, matches=tuple(matches))
    return best


class ToneAnalyzer:
    """Scores tone against a fixed brand."""

    def __init__(self, brand: Brand):
        self.brand = brand

    def analyze(self, content: Content, context: Optional[str] = None) -> AnalysisResult:
        text = content.normalized_text.lower()
        guidelines = self.brand.tone_guidelines

        expected_tone = guidelines.primary_tone
        adjustment = self.brand.adjustment_for(context)
        if adjustment is not None and adjustment.tone:
            expected_tone = adjustment.tone

        primary = detect_tone(text, expected_tone)
        avoided = [detect_tone(text, tone) for tone in guidelines.avoided_tones]
        avoided_detected = [d for d in avoided if d.detected]

        score = MAX_SCORE
        findings = []
        if primary.confidence < WEAK_PRIMARY_THRESHOLD:
            score -= WEAK_PRIMARY_PENALTY
            findings.append(
                Finding(f"Content doesn't strongly reflect the {expected_tone} tone")
            )
        for detection in avoided_detected:
            score -= AVOIDED_TONE_PENALTY
            findings.append(Finding(f"Detected avoided tone: {detection.tone}"))

        logger.debug(
            "Tone analysis: expected=%s confidence=%.2f avoided=%d",
            expected_tone,
            primary.confidence,
            len(avoided_detected),
        )
        return AnalysisResult(
            score=clamp_score(score),
            findings=tuple(findings),
            details={
                "expected_tone": expected_tone,
                "primary_tone_confidence": primary.confidence,
                "primary_tone_detected": primary.detected,
                "avoided_tones_detected": [d.tone for d in avoided_detected],
                "context_adjusted": expected_tone != guidelines.primary_tone,
            },
        )


__all__ = [
    "ToneAnalyzer",
    "ToneDetection",
    "TONE_KEYWORDS",
    "TONE_PATTERNS",
    "detect_tone",
    "resolve_tone",
    "known_tones",
]
