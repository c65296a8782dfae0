"""Text matching helpers shared by the safety categorizer and the analyzers.

All matching is case-insensitive. Terms are regex-escaped before use, so
user-configured terms such as ``c++`` or ``a.i.`` match literally.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List, NamedTuple, Optional, Pattern, Union

# Common inflections accepted after a keyword stem ("attack" -> "attacks")
INFLECTION_SUFFIXES = ("s", "es", "d", "ed", "ing", "ment", "er", "ers")

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


class PatternMatch(NamedTuple):
    text: str
    start: int
    end: int


@lru_cache(maxsize=2048)
def compile_term(term: str, whole_word: bool = True, allow_suffixes: bool = False) -> Pattern[str]:
    """Compile a literal term into a case-insensitive pattern."""
    # words of a multi-word term may be separated by any run of whitespace
    escaped = r"\s+".join(re.escape(part) for part in term.split())
    if not whole_word:
        return re.compile(escaped, re.IGNORECASE)
    suffix = ""
    if allow_suffixes:
        suffix = "(?:" + "|".join(INFLECTION_SUFFIXES) + ")?"
    # \b only works next to word characters; fall back to lookarounds
    # for terms that start or end with punctuation.
    prefix = r"\b" if re.match(r"\w", term.strip()) else r"(?<!\w)"
    ending = r"\b" if re.search(r"\w$", term.strip()) else r"(?!\w)"
    return re.compile(f"{prefix}{escaped}{suffix}{ending}", re.IGNORECASE)


def _as_pattern(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern, re.IGNORECASE)
    return pattern


def find_term(
    text: str, term: str, *, whole_word: bool = True, allow_suffixes: bool = False
) -> List[PatternMatch]:
    """Return every occurrence of ``term`` in ``text``."""
    if not term or not term.strip():
        return []
    pattern = compile_term(term, whole_word, allow_suffixes)
    return [PatternMatch(m.group(0), m.start(), m.end()) for m in pattern.finditer(text)]


def first_match(
    text: str, term: str, *, whole_word: bool = True, allow_suffixes: bool = False
) -> Optional[PatternMatch]:
    if not term or not term.strip():
        return None
    match = compile_term(term, whole_word, allow_suffixes).search(text)
    if match is None:
        return None
    return PatternMatch(match.group(0), match.start(), match.end())


def contains_term(
    text: str, term: str, *, whole_word: bool = True, allow_suffixes: bool = False
) -> bool:
    return first_match(text, term, whole_word=whole_word, allow_suffixes=allow_suffixes) is not None


def contains_substring(text: str, needle: str) -> bool:
    """Plain case-insensitive substring test."""
    return bool(needle) and needle.lower() in text.lower()


def contains_any(text: str, terms: Iterable[str], *, whole_word: bool = True) -> bool:
    return any(contains_term(text, term, whole_word=whole_word) for term in terms)


def find_pattern(text: str, pattern: Union[str, Pattern[str]]) -> List[PatternMatch]:
    """Return all matches of a regular expression."""
    compiled = _as_pattern(pattern)
    return [PatternMatch(m.group(0), m.start(), m.end()) for m in compiled.finditer(text)]


def count_matches(text: str, pattern: Union[str, Pattern[str]]) -> int:
    return sum(1 for _ in _as_pattern(pattern).finditer(text))


def split_sentences(text: str, min_length: int = 0) -> List[str]:
    """Split on terminal punctuation, keeping stripped sentences longer than ``min_length``."""
    sentences = (s.strip() for s in _SENTENCE_SPLIT.split(text))
    return [s for s in sentences if s and len(s) > min_length]


def word_count(sentence: str) -> int:
    return len(sentence.split())


__all__ = [
    "INFLECTION_SUFFIXES",
    "PatternMatch",
    "compile_term",
    "find_term",
    "first_match",
    "contains_term",
    "contains_substring",
    "contains_any",
    "find_pattern",
    "count_matches",
    "split_sentences",
    "word_count",
]
