"""Report builder - runs the judge over every phrase of every translation."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence

from translation_verifier.config import AppConfig
from translation_verifier.errors import ParseError, TranslationError, VerifierError
from translation_verifier.models.phrase import PhraseCandidate
from translation_verifier.models.report import (
    PhraseJudgment,
    ProviderTranslation,
    SentenceReport,
    Suggestion,
    TranslationReport,
)
from translation_verifier.nlp.parser import ChunkParser, tree_text
from translation_verifier.pipeline.judge import MeaningfulnessJudge, SuggestionSet, is_meaningful
from translation_verifier.pipeline.phrase_extractor import extract_phrases
from translation_verifier.translators.base import Translator

logger = logging.getLogger(__name__)


def to_judgment(
    candidate: PhraseCandidate, suggestions: SuggestionSet, threshold: float
) -> PhraseJudgment:
    ranked = sorted(suggestions.items(), key=lambda item: (-item[1], item[0]))
    return PhraseJudgment(
        phrase=candidate.text,
        penn=candidate.penn,
        word_count=candidate.word_count,
        meaningful=is_meaningful(suggestions, threshold),
        suggestions=[Suggestion(text=text, relative_score=score) for text, score in ranked],
    )


class ReportBuilder:
    """Translate, parse, extract phrases and judge them, per provider."""

    def __init__(
        self,
        translators: Sequence[Translator],
        parser: ChunkParser,
        judge: MeaningfulnessJudge,
        config: AppConfig | None = None,
        *,
        on_phase: Callable[[str, str], None] | None = None,
    ):
        self.translators = list(translators)
        self.parser = parser
        self.judge = judge
        self.config = config or AppConfig()
        self.on_phase = on_phase

    def _notify(self, phase: str, detail: str = "") -> None:
        if self.on_phase:
            self.on_phase(phase, detail)

    async def build(self, text: str) -> TranslationReport:
        """Build the meaningfulness report for one source text."""
        start = time.monotonic()
        report = TranslationReport(original_text=text)
        for translator in self.translators:
            report.translations.append(await self._build_translation(translator, text))
        logger.info(
            "Report for %d provider(s) built in %.1fs",
            len(report.translations),
            time.monotonic() - start,
        )
        return report

    async def build_many(self, texts: Sequence[str]) -> list[TranslationReport]:
        return [await self.build(text) for text in texts]

    async def _build_translation(self, translator: Translator, text: str) -> ProviderTranslation:
        engine = translator.engine_name
        self._notify("translate", f"{engine}: translating")
        settings = self.config.translation
        try:
            translated = await translator.translate(
                text, settings.source_language, settings.target_language
            )
        except TranslationError as exc:
            logger.error("%s translation failed: %s", engine, exc)
            return ProviderTranslation(engine=engine, error=str(exc))

        entry = ProviderTranslation(engine=engine, translated_text=translated)
        try:
            sentences = self.parser.split_sentences(translated)
        except ParseError as exc:
            logger.error("%s: cannot split translation into sentences: %s", engine, exc)
            entry.error = str(exc)
            return entry

        for index, sentence in enumerate(sentences, 1):
            self._notify("sentence", f"{engine}: sentence {index}/{len(sentences)}")
            entry.sentences.append(await self._build_sentence(sentence))
        return entry

    async def _build_sentence(self, sentence: str) -> SentenceReport:
        try:
            tree = self.parser.parse(sentence)
        except ParseError as exc:
            logger.error("Cannot parse %r: %s", sentence, exc)
            return SentenceReport(text=sentence, error=str(exc))

        candidates = list(extract_phrases(tree, self.config.phrases))
        limit = asyncio.Semaphore(self.config.judge.concurrency)

        async def judge_one(candidate: PhraseCandidate) -> PhraseJudgment:
            async with limit:
                return await self._judge_phrase(candidate)

        judgments = await asyncio.gather(*(judge_one(c) for c in candidates))
        return SentenceReport(text=tree_text(tree), penn=tree.pformat(), phrases=list(judgments))

    async def _judge_phrase(self, candidate: PhraseCandidate) -> PhraseJudgment:
        self._notify("judge", candidate.text)
        try:
            suggestions = await self.judge.judge(candidate.text)
        except VerifierError as exc:
            logger.warning("Judging %r failed: %s", candidate.text, exc)
            return PhraseJudgment(
                phrase=candidate.text,
                penn=candidate.penn,
                word_count=candidate.word_count,
                error=str(exc),
            )
        return to_judgment(candidate, suggestions, self.config.judge.meaningfulness_threshold)
