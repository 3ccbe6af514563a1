"""Pydantic models for the translation meaningfulness report."""

from __future__ import annotations

from pydantic import BaseModel


class Suggestion(BaseModel):
    text: str
    relative_score: float


class PhraseJudgment(BaseModel):
    phrase: str
    penn: str = ""
    word_count: int = 0
    meaningful: bool = False
    suggestions: list[Suggestion] = []  # highest score first
    error: str | None = None


class SentenceReport(BaseModel):
    text: str
    penn: str = ""
    phrases: list[PhraseJudgment] = []
    error: str | None = None


class ProviderTranslation(BaseModel):
    engine: str
    translated_text: str = ""
    sentences: list[SentenceReport] = []
    error: str | None = None

    @property
    def meaningful_count(self) -> int:
        return sum(
            1 for sentence in self.sentences for phrase in sentence.phrases if phrase.meaningful
        )

    @property
    def phrase_count(self) -> int:
        return sum(len(sentence.phrases) for sentence in self.sentences)


class TranslationReport(BaseModel):
    """Meaningfulness results for one source text across all providers."""

    original_text: str
    translations: list[ProviderTranslation] = []
