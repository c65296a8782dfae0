"""Voice analyzer: contractions, pronoun usage and sentence structure."""

from __future__ import annotations

import logging
import re
import statistics
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...domain.brand import Brand, VoiceGuidelines
from ...domain.content import Content
from ..pattern_matcher import count_matches, find_pattern, split_sentences, word_count
from .base import MAX_SCORE, AnalysisResult, Finding, clamp_score

logger = logging.getLogger(__name__)

CONTRACTION_PENALTY = 15
PRONOUN_PENALTY = 15
STRUCTURE_PENALTY = 20

# Gates that keep short snippets from being judged on absent features
CONTRACTION_MIN_SENTENCES = 3
CONTRACTION_SENTENCE_CHARS = 10
PRONOUN_MIN_SENTENCES = 2
PRONOUN_SENTENCE_CHARS = 20
PRONOUN_AVOID_LIMIT = 2
VARIATION_MIN_SENTENCES = 3

CONCISE_MAX_AVG_WORDS = 20
MIN_WORD_COUNT_STDDEV = 10
PASSIVE_SENTENCE_RATIO = 0.3

CONTRACTION_PATTERN = re.compile(
    r"\b(won't|can't|don't|doesn't|haven't|hasn't|hadn't|wouldn't|couldn't|shouldn't"
    r"|we're|we've|we'd|we'll|you're|you've|you'd|you'll|they're|they've|they'd|they'll"
    r"|it's|it'd|it'll|that's|that'd|that'll|what's|what'd|what'll|who's|who'd|who'll"
    r"|where's|where'd|where'll|when's|when'd|when'll|why's|why'd|why'll"
    r"|how's|how'd|how'll)\b",
    re.IGNORECASE,
)
FIRST_PERSON_PATTERN = re.compile(r"\b(we|our|ours|us)\b", re.IGNORECASE)
SECOND_PERSON_PATTERN = re.compile(r"\b(you|your|yours)\b", re.IGNORECASE)
PASSIVE_PATTERNS = (
    re.compile(r"\b(is|are|was|were|been|being)\s+\w+ed\b", re.IGNORECASE),
    re.compile(r"\b(is|are|was|were|been|being)\s+\w+en\b", re.IGNORECASE),
    re.compile(r"\bby\s+the\s+\w+", re.IGNORECASE),
)


@dataclass
class _Check:
    appropriate: bool = True
    findings: List[Finding] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)

    def fail(self, description: str, position: Optional[tuple] = None) -> None:
        self.appropriate = False
        self.findings.append(Finding(description, position))


def check_contractions(text: str, uses_contractions: bool) -> _Check:
    check = _Check()
    contractions = find_pattern(text, CONTRACTION_PATTERN)
    check.details["count"] = len(contractions)

    if uses_contractions and not contractions:
        sentences = split_sentences(text, min_length=CONTRACTION_SENTENCE_CHARS)
        if len(sentences) > CONTRACTION_MIN_SENTENCES:
            check.fail("Brand voice uses contractions but none were found")
    elif not uses_contractions and contractions:
        found = ", ".join(m.text for m in contractions[:3])
        check.fail(
            f"Brand voice avoids contractions but found: {found}",
            (contractions[0].start, contractions[0].end),
        )
    return check


def check_pronouns(text: str, guidelines: VoiceGuidelines) -> _Check:
    check = _Check()
    usage = guidelines.uses_pronoun
    first_person = count_matches(text, FIRST_PERSON_PATTERN)
    second_person = count_matches(text, SECOND_PERSON_PATTERN)
    check.details.update(first_person_count=first_person, second_person_count=second_person)

    long_sentences = len(split_sentences(text, min_length=PRONOUN_SENTENCE_CHARS))
    if usage.first_person and first_person == 0 and long_sentences > PRONOUN_MIN_SENTENCES:
        check.fail("Brand voice uses first-person pronouns but none were found")
    if usage.second_person and second_person == 0 and long_sentences > PRONOUN_MIN_SENTENCES:
        check.fail("Brand voice uses second-person pronouns but none were found")
    if not usage.first_person and first_person > PRONOUN_AVOID_LIMIT:
        check.fail("Brand voice avoids first-person pronouns but several were found")
    if not usage.second_person and second_person > PRONOUN_AVOID_LIMIT:
        check.fail("Brand voice avoids second-person pronouns but several were found")
    return check


def check_sentence_structure(text: str, guidelines: VoiceGuidelines) -> _Check:
    check = _Check()
    sentences = split_sentences(text)
    word_counts = [word_count(s) for s in sentences]
    average = statistics.fmean(word_counts) if word_counts else 0.0
    check.details["average_sentence_words"] = round(average, 1)

    length_rule = guidelines.sentence.length.lower()
    structure_rule = guidelines.sentence.structure.lower()

    if "concise" in length_rule and average > CONCISE_MAX_AVG_WORDS:
        check.fail(f"Sentences are too long (avg: {average:.1f} words) for concise voice")
    elif "varied" in length_rule and len(word_counts) > VARIATION_MIN_SENTENCES:
        spread = statistics.pstdev(word_counts)
        check.details["sentence_length_stddev"] = round(spread, 2)
        if spread < MIN_WORD_COUNT_STDDEV:
            check.fail("Sentence lengths lack variation")

    if "direct" in structure_rule:
        passive = sum(count_matches(text, pattern) for pattern in PASSIVE_PATTERNS)
        check.details["passive_constructions"] = passive
        if passive > len(sentences) * PASSIVE_SENTENCE_RATIO:
            check.fail("Too much passive voice for direct communication style")
    return check


class VoiceAnalyzer:
    """Scores writing style against a fixed brand."""

    def __init__(self, brand: Brand):
        self.brand = brand

    def analyze(self, content: Content, context: Optional[str] = None) -> AnalysisResult:
        text = content.text
        guidelines = self.brand.voice_guidelines

        contractions = check_contractions(text, guidelines.uses_contractions)
        pronouns = check_pronouns(text, guidelines)
        structure = check_sentence_structure(text, guidelines)

        score = MAX_SCORE
        findings: List[Finding] = []
        if not contractions.appropriate:
            score -= CONTRACTION_PENALTY
            findings.extend(contractions.findings)
        if not pronouns.appropriate:
            score -= PRONOUN_PENALTY
            findings.extend(pronouns.findings)
        if not structure.appropriate:
            score -= STRUCTURE_PENALTY
            findings.extend(structure.findings)

        context_override = None
        adjustment = self.brand.adjustment_for(context)
        if adjustment is not None and adjustment.voice is not None:
            context_override = adjustment.voice.uses_contractions
        if context_override is not None and not contractions.appropriate:
            contextual = check_contractions(text, context_override)
            if contextual.appropriate:
                score += CONTRACTION_PENALTY
                findings = [f for f in findings if f not in contractions.findings]

        logger.debug(
            "Voice analysis: contractions=%s pronouns=%s structure=%s",
            contractions.appropriate,
            pronouns.appropriate,
            structure.appropriate,
        )
        return AnalysisResult(
            score=clamp_score(score),
            findings=tuple(findings),
            details={
                "contractions": {"appropriate": contractions.appropriate, **contractions.details},
                "pronouns": {"appropriate": pronouns.appropriate, **pronouns.details},
                "sentence_structure": {"appropriate": structure.appropriate, **structure.details},
                "context_uses_contractions": context_override,
            },
        )


__all__ = [
    "VoiceAnalyzer",
    "CONTRACTION_PATTERN",
    "check_contractions",
    "check_pronouns",
    "check_sentence_structure",
]
