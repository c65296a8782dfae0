"""Sentiment enricher plugin: annotates content with lexical sentiment metadata."""

import re
from typing import Any, Dict, Optional

from ..base import EnricherPlugin
from ..models import EnrichedContent

POSITIVE_WORDS = ("great", "excellent", "amazing", "wonderful", "fantastic", "love", "best", "happy")
NEGATIVE_WORDS = ("bad", "terrible", "awful", "horrible", "worst", "hate", "angry", "sad")
NEUTRAL_WORDS = ("okay", "fine", "average", "normal", "regular")

SENTIMENT_THRESHOLD = 30
_POLITE = re.compile(r"\b(please|thank you|sorry)\b", re.IGNORECASE)


def _count(text: str, words) -> int:
    return sum(len(re.findall(rf"\b{re.escape(w)}\b", text, re.IGNORECASE)) for w in words)


class SentimentEnricherPlugin(EnricherPlugin):
    priority = 100

    def __init__(self) -> None:
        super().__init__(
            "sentiment-enricher",
            "Sentiment Analysis Enricher",
            "1.0.0",
            "Enriches content with sentiment analysis metadata",
        )

    async def enrich(
        self, content: str, metadata: Optional[Dict[str, Any]] = None
    ) -> EnrichedContent:
        positive = _count(content, POSITIVE_WORDS)
        negative = _count(content, NEGATIVE_WORDS)
        neutral = _count(content, NEUTRAL_WORDS)

        total = positive + negative + neutral
        score = ((positive - negative) / total) * 100 if total else 0.0
        if score > SENTIMENT_THRESHOLD:
            overall = "positive"
        elif score < -SENTIMENT_THRESHOLD:
            overall = "negative"
        else:
            overall = "neutral"

        markers = []
        if "!" in content:
            markers.append("emphatic")
        if "?" in content:
            markers.append("questioning")
        if len(content) > 500:
            markers.append("detailed")
        if len(content) < 50:
            markers.append("brief")
        if _POLITE.search(content):
            markers.append("polite")

        return EnrichedContent(
            original=content,
            enriched=content,
            metadata={
                "sentiment": {
                    "overall": overall,
                    "score": round(score, 2),
                    "positive_indicators": positive,
                    "negative_indicators": negative,
                    "neutral_indicators": neutral,
                },
                "style_markers": markers,
                "word_count": len(content.split()),
                "character_count": len(content),
                "enriched_by": [*(metadata or {}).get("enriched_by", []), self.plugin_id],
            },
        )


__all__ = ["SentimentEnricherPlugin"]
