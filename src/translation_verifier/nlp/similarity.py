"""Structural similarity between two text spans via phrase-chunk generalization.

Both texts are chunked; each phrase chunk of the first text is generalized
against every chunk of the same label in the second, and the best
generalization score per chunk is summed. A generalization is the weighted
longest common subsequence of POS-compatible tokens: identical words score
by part of speech, tokens agreeing only on part of speech score
``POS_ONLY_WEIGHT``. ``similarity(x, x)`` is therefore the upper bound for
``similarity(x, y)``, which makes it usable as a normalizing denominator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nltk import Tree

from translation_verifier.nlp.parser import PHRASE_LABELS, ChunkParser, is_word_tag, tagged_yield

logger = logging.getLogger(__name__)

POS_ONLY_WEIGHT = 0.1
DEFAULT_WORD_WEIGHT = 0.2

# Tag prefix -> weight of an exact word match
WORD_WEIGHTS = {
    "NN": 1.0,
    "VB": 1.0,
    "JJ": 0.5,
    "RB": 0.5,
    "CD": 0.5,
    "PR": 0.3,
}


@dataclass(frozen=True)
class Chunk:
    label: str
    tokens: tuple[tuple[str, str], ...]  # (lowercased word, tag)


def word_weight(tag: str) -> float:
    return WORD_WEIGHTS.get(tag[:2], DEFAULT_WORD_WEIGHT)


def _compatible(tag_a: str, tag_b: str) -> bool:
    return tag_a[:2] == tag_b[:2]


def phrase_chunks(tree: Tree) -> list[Chunk]:
    """Collect the phrase chunks of a parsed sentence.

    Sentences the chunker leaves flat fall back to one ``S`` chunk holding
    every word, so a bare word sequence still has a self-similarity.
    """
    chunks = []
    for node in tree.subtrees(lambda t: t.label() in PHRASE_LABELS):
        tokens = tuple(
            (word.lower(), tag) for word, tag in tagged_yield(node) if is_word_tag(tag)
        )
        if tokens:
            chunks.append(Chunk(node.label(), tokens))
    if not chunks:
        tokens = tuple(
            (word.lower(), tag) for word, tag in tagged_yield(tree) if is_word_tag(tag)
        )
        if tokens:
            chunks.append(Chunk("S", tokens))
    return chunks


def generalize(a: Chunk, b: Chunk) -> float:
    """Score of the best weighted alignment of ``a``'s tokens onto ``b``'s."""
    rows, cols = len(a.tokens), len(b.tokens)
    table = [[0.0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(1, rows + 1):
        word_a, tag_a = a.tokens[i - 1]
        for j in range(1, cols + 1):
            word_b, tag_b = b.tokens[j - 1]
            best = max(table[i - 1][j], table[i][j - 1])
            if _compatible(tag_a, tag_b):
                gain = word_weight(tag_a) if word_a == word_b else POS_ONLY_WEIGHT
                best = max(best, table[i - 1][j - 1] + gain)
            table[i][j] = best
    return table[rows][cols]


def chunk_list_score(chunks_a: list[Chunk], chunks_b: list[Chunk]) -> float:
    total = 0.0
    for chunk in chunks_a:
        candidates = [other for other in chunks_b if other.label == chunk.label]
        if candidates:
            total += max(generalize(chunk, other) for other in candidates)
    return total


class StructuralSimilarity:
    """Callable scorer: ``similarity(text_a, text_b) -> float >= 0``."""

    def __init__(self, parser: ChunkParser):
        self.parser = parser

    def chunks(self, text: str) -> list[Chunk]:
        chunks: list[Chunk] = []
        for tree in self.parser.parse_text(text):
            chunks.extend(phrase_chunks(tree))
        return chunks

    def __call__(self, text_a: str, text_b: str) -> float:
        logger.debug('Assess similarity between: "%s" and "%s"', text_a, text_b)
        score = chunk_list_score(self.chunks(text_a), self.chunks(text_b))
        logger.debug("Score: %f", score)
        return score
