"""Tests for the shared text matching helpers."""

from brand_guardian.engines.pattern_matcher import (
    contains_any,
    contains_substring,
    contains_term,
    count_matches,
    find_term,
    first_match,
    split_sentences,
    word_count,
)


class TestTermMatching:
    """Term matching is case-insensitive and respects word boundaries."""

    def test_case_insensitive_whole_word(self) -> None:
        assert contains_term("We LEVERAGE data", "leverage")
        assert not contains_term("Hello there", "hell")

    def test_inflections_only_when_allowed(self) -> None:
        assert not contains_term("Two attacks were reported", "attack")
        assert contains_term("Two attacks were reported", "attack", allow_suffixes=True)
        assert contains_term("She was killed", "kill", allow_suffixes=True)
        assert not contains_term("Hello there", "hell", allow_suffixes=True)

    def test_regex_metacharacters_match_literally(self) -> None:
        assert contains_term("We love C++ and a.i. tools", "c++")
        assert contains_term("We love C++ and a.i. tools", "a.i.")
        assert not contains_term("We love aXiX tools", "a.i.")

    def test_substring_mode(self) -> None:
        assert contains_term("Hello there", "hell", whole_word=False)
        assert contains_substring("Cutting-Edge", "edge")
        assert not contains_substring("anything", "")

    def test_multi_word_term_spans_whitespace_runs(self) -> None:
        match = first_match("Our  bleeding\n\tedge stack", "bleeding edge")
        assert (match.start, match.end) == (5, 19)
        assert not contains_term("bleedingedge", "bleeding edge")

    def test_find_term_positions(self) -> None:
        matches = find_term("buy now, BUY later", "buy")
        assert [(m.text, m.start, m.end) for m in matches] == [("buy", 0, 3), ("BUY", 9, 12)]

    def test_blank_term_never_matches(self) -> None:
        assert find_term("text", "  ") == []
        assert first_match("text", "") is None

    def test_contains_any(self) -> None:
        assert contains_any("Our synergy matters", ["leverage", "synergy"])
        assert not contains_any("Nothing here", ["leverage", "synergy"])

    def test_count_matches(self) -> None:
        assert count_matches("We and we and WE", r"\bwe\b") == 3


class TestSentences:
    def test_split_on_terminal_punctuation(self) -> None:
        assert split_sentences("One. Two!  Three?? ") == ["One", "Two", "Three"]

    def test_min_length_filter(self) -> None:
        assert split_sentences("Hi. This sentence is long enough.", min_length=10) == [
            "This sentence is long enough"
        ]

    def test_word_count(self) -> None:
        assert word_count("  three  little words ") == 3
