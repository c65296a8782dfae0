"""Tests for privacy-first logging."""

import logging

from brand_guardian.logging import (
    REDACTED,
    SENSITIVE_KEYS,
    ContentRedactionProcessor,
    PrivacyFilter,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="Evaluation finished",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestPrivacyFilter:
    """Test cases for PrivacyFilter."""

    def test_blocks_sensitive_keys(self) -> None:
        assert PrivacyFilter().filter(_record(content="customer copy")) is False
        assert PrivacyFilter().filter(_record(user_input="customer copy")) is False

    def test_allows_metadata(self) -> None:
        record = _record(content_length=120, overall_risk="LOW")
        assert PrivacyFilter().filter(record) is True


class TestContentRedactionProcessor:
    def test_redacts_sensitive_values(self) -> None:
        event = {"event": "evaluated", "text": "customer copy", "Content": "more copy", "score": 90}

        processed = ContentRedactionProcessor()(None, "info", event)

        assert processed == {
            "event": "evaluated",
            "text": REDACTED,
            "Content": REDACTED,
            "score": 90,
        }

    def test_sensitive_keys_cover_enriched_text(self) -> None:
        assert {"enriched_text", "original_text"} <= SENSITIVE_KEYS
