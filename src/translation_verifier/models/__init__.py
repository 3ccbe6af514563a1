"""Data models for the translation verifier."""

from translation_verifier.models.phrase import PhraseCandidate
from translation_verifier.models.report import (
    PhraseJudgment,
    ProviderTranslation,
    SentenceReport,
    Suggestion,
    TranslationReport,
)
from translation_verifier.models.search import SearchHit, Segmentation

__all__ = [
    "PhraseCandidate",
    "PhraseJudgment",
    "ProviderTranslation",
    "SearchHit",
    "Segmentation",
    "SentenceReport",
    "Suggestion",
    "TranslationReport",
]
