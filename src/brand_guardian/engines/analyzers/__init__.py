"""Tone, voice and terminology analyzers."""

from .base import AnalysisResult, Finding
from .terminology import TerminologyAnalyzer
from .tone import ToneAnalyzer
from .voice import VoiceAnalyzer

__all__ = [
    "AnalysisResult",
    "Finding",
    "TerminologyAnalyzer",
    "ToneAnalyzer",
    "VoiceAnalyzer",
]
