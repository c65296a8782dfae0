"""Terminology analyzer: avoided terms, preferred terms and proper nouns."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Set

from ...domain.brand import Brand, TerminologyGuidelines
from ...domain.content import Content
from ..pattern_matcher import PatternMatch, contains_term, find_term
from .base import MAX_SCORE, AnalysisResult, Finding, clamp_score

logger = logging.getLogger(__name__)

AVOIDED_TERM_PENALTY = 15
PREFERRED_TERM_PENALTY = 10
PROPER_NOUN_PENALTY = 5

DEFAULT_TECHNICAL_TERMS = frozenset(
    {
        "api", "sdk", "authentication", "authorization", "deployment",
        "infrastructure", "algorithm", "database", "server", "client",
        "frontend", "backend", "framework", "library", "module",
        "function", "method", "variable", "constant", "parameter",
    }
)

DEFAULT_DOMAIN_EXEMPTIONS: Dict[str, frozenset] = {
    "technical": frozenset({"leverage", "synergy", "algorithm", "infrastructure"}),
    "marketing": frozenset({"revolutionary", "disruptive", "transform"}),
    "legal": frozenset({"whereas", "heretofore", "pursuant"}),
}

CAMEL_CASE_WORD = re.compile(r"\b[A-Za-z][a-z]+(?:[A-Z][a-z]+)+\b")
_CAMEL_PARTS = re.compile(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])|\d+")


def split_name(name: str) -> List[str]:
    """Split "Acme Corp" on whitespace, or a single "TechFuture" on case changes."""
    parts = name.split()
    if len(parts) == 1:
        camel = _CAMEL_PARTS.findall(parts[0])
        if len(camel) > 1 and "".join(camel) == parts[0]:
            return camel
    return parts


def canonical_name(description: str) -> str:
    """Extract the name from a note such as "TechFuture (one word, capital T and F)"."""
    return description.split("(", 1)[0].strip()


class TerminologyAnalyzer:
    """Scores word choice against a fixed brand.

    Avoided terms can be exempted by context: technical vocabulary is allowed
    in any context whose label contains "technical", and each exact context
    label may carry its own exemption set.
    """

    def __init__(self, brand: Brand):
        self.brand = brand
        self._technical_terms: Set[str] = set(DEFAULT_TECHNICAL_TERMS)
        self._domain_exemptions: Dict[str, Set[str]] = {
            domain: set(terms) for domain, terms in DEFAULT_DOMAIN_EXEMPTIONS.items()
        }

    def add_technical_terms(self, terms: Iterable[str]) -> None:
        self._technical_terms.update(term.lower() for term in terms)

    def add_domain_exemptions(self, domain: str, terms: Iterable[str]) -> None:
        self._domain_exemptions.setdefault(domain, set()).update(t.lower() for t in terms)

    def is_exempt(self, term: str, context: Optional[str]) -> bool:
        if not context:
            return False
        term = term.lower()
        if "technical" in context and term in self._technical_terms:
            return True
        return term in self._domain_exemptions.get(context, set())

    def analyze(self, content: Content, context: Optional[str] = None) -> AnalysisResult:
        text = content.text
        guidelines = self.brand.terminology_guidelines

        avoided = self._check_avoided_terms(text, guidelines, context)
        preferred = self._check_preferred_terms(text, guidelines, context)
        proper_nouns = self._check_proper_nouns(text, guidelines)

        score = (
            MAX_SCORE
            - AVOIDED_TERM_PENALTY * len(avoided)
            - PREFERRED_TERM_PENALTY * len(preferred)
            - PROPER_NOUN_PENALTY * len(proper_nouns)
        )
        logger.debug(
            "Terminology analysis: avoided=%d preferred=%d proper_nouns=%d",
            len(avoided),
            len(preferred),
            len(proper_nouns),
        )
        return AnalysisResult(
            score=clamp_score(score),
            findings=tuple(avoided + preferred + proper_nouns),
            details={
                "avoided_terms_found": len(avoided),
                "preferred_terms_missed": len(preferred),
                "proper_noun_issues": len(proper_nouns),
            },
        )

    def _check_avoided_terms(
        self, text: str, guidelines: TerminologyGuidelines, context: Optional[str]
    ) -> List[Finding]:
        findings = []
        for term in guidelines.avoided_global_terms:
            if self.is_exempt(term, context):
                continue
            matches = find_term(text, term)
            if matches:
                findings.append(_avoided_finding(matches))

        if context:
            for rule in guidelines.terms:
                if rule.term and context in rule.avoid_in_contexts:
                    matches = find_term(text, rule.term)
                    if matches:
                        findings.append(_avoided_finding(matches, context))
        findings.sort(key=lambda f: f.position[0])
        return findings

    @staticmethod
    def _check_preferred_terms(
        text: str, guidelines: TerminologyGuidelines, context: Optional[str]
    ) -> List[Finding]:
        findings = []
        for rule in guidelines.terms:
            if not rule.preferred or not rule.alternatives:
                continue
            if rule.contexts and context and context not in rule.contexts:
                continue
            if contains_term(text, rule.preferred):
                continue
            for alternative in rule.alternatives:
                matches = find_term(text, alternative)
                if matches:
                    findings.append(
                        Finding(
                            f'Use the preferred term "{rule.preferred}" '
                            f'instead of "{alternative}"',
                            (matches[0].start, matches[0].end),
                        )
                    )
        return findings

    @staticmethod
    def _check_proper_nouns(text: str, guidelines: TerminologyGuidelines) -> List[Finding]:
        findings = []
        product_format = guidelines.proper_nouns.get("productNames") or guidelines.proper_nouns.get(
            "product_names"
        )
        if product_format:
            findings.extend(_check_product_names(text, product_format.lower()))

        company = guidelines.proper_nouns.get("companyName") or guidelines.proper_nouns.get(
            "company_name"
        )
        if company:
            name = canonical_name(company)
            if name:
                for match in _find_name_variations(text, name):
                    findings.append(
                        Finding(
                            f'Found incorrect company name variation: "{match.text}" '
                            f'(should be "{name}")',
                            (match.start, match.end),
                        )
                    )
        return findings


def _avoided_finding(matches: List[PatternMatch], context: Optional[str] = None) -> Finding:
    first = matches[0]
    description = f'Found avoided term: "{first.text}"'
    if context:
        description += f" (avoided in {context} context)"
    if len(matches) > 1:
        description += f" ({len(matches)} occurrences)"
    return Finding(description, (first.start, first.end))


def _check_product_names(text: str, expected_format: str) -> List[Finding]:
    findings = []
    seen = set()
    for match in CAMEL_CASE_WORD.finditer(text):
        word = match.group(0)
        if word in seen:
            continue
        seen.add(word)
        if "capitalized" in expected_format and not word[0].isupper():
            findings.append(
                Finding(
                    f'Product name "{word}" may not follow the expected format: '
                    "should be capitalized",
                    (match.start(), match.end()),
                )
            )
        if "no spaces" in expected_format:
            spaced = r"\b" + r"\s+".join(re.escape(p) for p in split_name(word)) + r"\b"
            for variant in re.finditer(spaced, text, re.IGNORECASE):
                findings.append(
                    Finding(
                        f'Product name "{variant.group(0)}" should be written '
                        f'without spaces as "{word}"',
                        (variant.start(), variant.end()),
                    )
                )
    return findings


def _find_name_variations(text: str, name: str) -> List[PatternMatch]:
    parts = [re.escape(part) for part in split_name(name)]
    pattern = re.compile(r"\b" + r"[\s_-]*".join(parts) + r"\b", re.IGNORECASE)
    return [
        PatternMatch(m.group(0), m.start(), m.end())
        for m in pattern.finditer(text)
        if m.group(0) != name
    ]


__all__ = [
    "TerminologyAnalyzer",
    "DEFAULT_TECHNICAL_TERMS",
    "DEFAULT_DOMAIN_EXEMPTIONS",
    "canonical_name",
    "split_name",
]
