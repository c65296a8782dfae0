"""Plugins shipped with the engine."""

from .json_formatter import JsonFormatterPlugin
from .profanity_filter import ProfanityFilterPlugin
from .sentiment_enricher import SentimentEnricherPlugin


def builtin_plugins():
    return [ProfanityFilterPlugin(), SentimentEnricherPlugin(), JsonFormatterPlugin()]


__all__ = [
    "JsonFormatterPlugin",
    "ProfanityFilterPlugin",
    "SentimentEnricherPlugin",
    "builtin_plugins",
]
