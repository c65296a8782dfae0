"""Tests for the plugins shipped with the engine."""

import json

import pytest

from brand_guardian.domain.evaluations import RiskLevel
from brand_guardian.plugins.builtin import (
    JsonFormatterPlugin,
    ProfanityFilterPlugin,
    SentimentEnricherPlugin,
    builtin_plugins,
)
from brand_guardian.plugins.builtin.profanity_filter import score_to_risk


async def _profanity_filter(config=None) -> ProfanityFilterPlugin:
    plugin = ProfanityFilterPlugin()
    assert await plugin.initialize(config or {})
    return plugin


class TestProfanityFilter:
    """Test cases for the profanity filter plugin."""

    @pytest.mark.asyncio
    async def test_clean_content(self) -> None:
        plugin = await _profanity_filter()
        result = await plugin.evaluate("A perfectly polite sentence.")
        assert result.score == 100
        assert result.is_compliant
        assert result.risk_level == RiskLevel.NONE
        assert result.issues == []

    @pytest.mark.asyncio
    async def test_each_match_costs_ten_points(self) -> None:
        plugin = await _profanity_filter()
        result = await plugin.evaluate("Damn, this is hell. What crap!")
        assert result.score == 70
        assert result.is_compliant
        assert result.metadata["profanity_count"] == 3
        assert result.issues[0].position.start == 0
        assert result.issues[0].position.end == 4

    @pytest.mark.asyncio
    async def test_strict_mode_doubles_penalty(self) -> None:
        plugin = await _profanity_filter({"strict_mode": True})
        result = await plugin.evaluate("Damn, this is hell.")
        assert result.score == 60
        assert not result.is_compliant
        assert result.risk_level == RiskLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_custom_words(self) -> None:
        plugin = await _profanity_filter({"custom_words": ["heck"]})
        result = await plugin.evaluate("What the heck")
        assert result.score == 90

    @pytest.mark.asyncio
    async def test_word_boundaries(self) -> None:
        plugin = await _profanity_filter()
        result = await plugin.evaluate("Hello from Shell Scrapbook")
        assert result.score == 100

    @pytest.mark.asyncio
    async def test_requires_initialization(self) -> None:
        with pytest.raises(RuntimeError):
            await ProfanityFilterPlugin().evaluate("text")

    def test_score_to_risk_bands(self) -> None:
        assert score_to_risk(90) == RiskLevel.NONE
        assert score_to_risk(70) == RiskLevel.LOW
        assert score_to_risk(50) == RiskLevel.MEDIUM
        assert score_to_risk(30) == RiskLevel.HIGH
        assert score_to_risk(0) == RiskLevel.VERY_HIGH


class TestSentimentEnricher:
    @pytest.mark.asyncio
    async def test_positive_content(self) -> None:
        enriched = await SentimentEnricherPlugin().enrich("What a great and wonderful day!")
        assert enriched.enriched == "What a great and wonderful day!"
        sentiment = enriched.metadata["sentiment"]
        assert sentiment["overall"] == "positive"
        assert sentiment["score"] == 100.0
        assert enriched.metadata["style_markers"] == ["emphatic", "brief"]
        assert enriched.metadata["enriched_by"] == ["sentiment-enricher"]

    @pytest.mark.asyncio
    async def test_mixed_content_is_neutral(self) -> None:
        enriched = await SentimentEnricherPlugin().enrich("Great food, terrible service.")
        assert enriched.metadata["sentiment"]["overall"] == "neutral"

    @pytest.mark.asyncio
    async def test_negative_content_and_enrichment_chain(self) -> None:
        enriched = await SentimentEnricherPlugin().enrich(
            "This was the worst, most awful experience. Sorry?",
            {"enriched_by": ["spell-check"]},
        )
        assert enriched.metadata["sentiment"]["overall"] == "negative"
        assert "questioning" in enriched.metadata["style_markers"]
        assert "polite" in enriched.metadata["style_markers"]
        assert enriched.metadata["enriched_by"] == ["spell-check", "sentiment-enricher"]


class TestJsonFormatter:
    """Test cases for the JSON formatter plugin."""

    RESULT = {
        "combined_score": 72,
        "is_compliant": True,
        "safety": {
            "overall_risk": "LOW",
            "issues": [{"type": "safety_category", "severity": "low"}],
        },
        "compliance": {
            "score": 80,
            "issues": [
                {"type": "terminology", "severity": "high"},
                {"type": "voice", "severity": "low"},
            ],
        },
        "plugin_results": [{"plugin_id": "profanity-filter", "score": 90, "is_compliant": True}],
    }

    @pytest.mark.asyncio
    async def test_compact(self) -> None:
        rendered = await JsonFormatterPlugin().format({"a": 1, "b": [2]}, "json-compact")
        assert rendered == '{"a":1,"b":[2]}'

    @pytest.mark.asyncio
    async def test_summary(self) -> None:
        summary = json.loads(await JsonFormatterPlugin().format(self.RESULT, "json-summary"))
        assert summary["evaluation"] == {"score": 72, "is_compliant": True, "risk_level": "LOW"}
        assert summary["issues"]["total"] == 3
        assert summary["issues"]["by_severity"] == {"low": 2, "high": 1}
        assert summary["plugins"] == [
            {"plugin_id": "profanity-filter", "score": 90, "is_compliant": True}
        ]

    @pytest.mark.asyncio
    async def test_unsupported_format(self) -> None:
        with pytest.raises(ValueError):
            await JsonFormatterPlugin().format({}, "xml")

    def test_compatible_with_any_version(self) -> None:
        assert JsonFormatterPlugin().is_compatible("9.0.0")


def test_builtin_plugins_have_unique_ids() -> None:
    ids = [plugin.plugin_id for plugin in builtin_plugins()]
    assert ids == ["profanity-filter", "sentiment-enricher", "json-formatter"]
