"""Meaningfulness judge - decides whether a translated phrase reads naturally.

A phrase is meaningful when the web already contains it verbatim, or when
some sentence found for it is structurally close enough relative to the
phrase's own self-similarity. Otherwise the closer sentences are returned as
suggestions for an improved translation.

Similarity scoring is CPU-bound and runs in worker threads, so a timeout
can interrupt a judgment and other judgments keep running meanwhile.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Protocol

from translation_verifier.config import JudgeConfig
from translation_verifier.errors import DegenerateSelfScoreError, ScoringError
from translation_verifier.models.search import SearchHit
from translation_verifier.pipeline.evidence import EvidenceGatherer

logger = logging.getLogger(__name__)

SuggestionSet = Mapping[str, float]
Scorer = Callable[[str, str], float]

EMPTY_SUGGESTIONS: SuggestionSet = MappingProxyType({})


class Searcher(Protocol):
    async def search(self, query: str, max_results: int = 5) -> list[SearchHit]: ...


def representative_score(suggestions: SuggestionSet) -> float | None:
    """Highest relative score in the set, None when there is no evidence."""
    if not suggestions:
        return None
    return max(suggestions.values())


def is_meaningful(suggestions: SuggestionSet, threshold: float) -> bool:
    score = representative_score(suggestions)
    return score is not None and score > threshold


class MeaningfulnessJudge:
    def __init__(
        self,
        search: Searcher,
        gatherer: EvidenceGatherer,
        scorer: Scorer,
        config: JudgeConfig | None = None,
    ):
        self.search = search
        self.gatherer = gatherer
        self.scorer = scorer
        self.config = config or JudgeConfig()

    def score(self, text_a: str, text_b: str) -> float:
        score = self.scorer(text_a, text_b)
        if score < 0:
            raise ScoringError(f"Similarity must be non-negative, got {score}")
        return score

    async def judge(self, phrase: str) -> SuggestionSet:
        """Return proof of meaningfulness or suggestions for ``phrase``.

        A meaningful phrase yields exactly one entry scoring above the
        meaningfulness threshold. An empty result means no evidence was
        found, including when the judgment timed out.
        """
        if not phrase or not phrase.strip():
            raise ScoringError("Cannot judge an empty phrase")
        try:
            suggestions = await asyncio.wait_for(self._judge(phrase), timeout=self.config.timeout)
        except asyncio.TimeoutError:
            logger.warning("Judging %r timed out after %.0fs", phrase, self.config.timeout)
            return EMPTY_SUGGESTIONS
        return MappingProxyType(suggestions)

    async def _judge(self, phrase: str) -> dict[str, float]:
        quoted = await self.search.search(f'"{phrase}"', max_results=1)
        if quoted:
            logger.info("Exact match found for %r", phrase)
            return {quoted[0].abstract_text: 1.0}

        self_score = await asyncio.to_thread(self.score, phrase, phrase)
        if self_score <= 0:
            raise DegenerateSelfScoreError(f"Self-similarity of {phrase!r} is {self_score}")

        limit = self.config.considerable_search_results_count
        hits = (await self.search.search(phrase, max_results=limit))[:limit]

        suggestions: dict[str, float] = {}
        for hit in hits:
            for sentence in await self.gatherer.sentences_for(hit):
                relative = await asyncio.to_thread(self.score, phrase, sentence) / self_score
                if relative > self.config.meaningfulness_threshold:
                    logger.info("%r is meaningful (%.3f): %s", phrase, relative, sentence)
                    return {sentence: relative}
                if relative > self.config.suggestion_threshold:
                    suggestions[sentence] = relative
        logger.info("%r not confirmed, %d suggestion(s)", phrase, len(suggestions))
        return suggestions
