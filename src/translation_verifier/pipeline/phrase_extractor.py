"""Phrase extraction: sub-phrases of a sentence worth testing for meaningfulness."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from nltk import Tree

from translation_verifier.config import PhraseConfig
from translation_verifier.models.phrase import PhraseCandidate
from translation_verifier.nlp.parser import enumerate_phrasal_nodes, tree_text, word_count

NodeEnumerator = Callable[[Tree], Iterable[Tree]]


@dataclass(frozen=True)
class WordBounds:
    minimum: int
    maximum: int

    def __contains__(self, count: int) -> bool:
        return self.minimum <= count <= self.maximum


def compute_word_bounds(sentence_word_count: int, config: PhraseConfig) -> WordBounds | None:
    """Closed word-count interval for phrases of a sentence, or None if empty.

    The lower bound is the larger of the absolute and sentence-relative
    minimums, the upper bound the smaller of the two maximums.
    """
    minimum = max(
        math.ceil(sentence_word_count * config.min_relative_words),
        config.min_words,
    )
    maximum = math.floor(sentence_word_count * config.max_relative_words)
    if config.max_words is not None:
        maximum = min(maximum, config.max_words)
    if minimum > maximum:
        return None
    return WordBounds(minimum, maximum)


def make_candidate(node: Tree) -> PhraseCandidate:
    return PhraseCandidate(tree=node, text=tree_text(node), word_count=word_count(node))


class PhraseCandidates:
    """Lazy, restartable sequence of candidates, deepest phrases first.

    Enumeration is top-down, so a descendant is always found after its
    ancestor; reversing puts specific phrases ahead of their enclosing ones.
    """

    def __init__(
        self,
        tree: Tree,
        config: PhraseConfig,
        enumerate_nodes: NodeEnumerator = enumerate_phrasal_nodes,
    ):
        self.tree = tree
        self.config = config
        self.enumerate_nodes = enumerate_nodes
        self.bounds = compute_word_bounds(word_count(tree), config)

    def _qualifying_nodes(self) -> list[Tree]:
        if self.bounds is None:
            return []
        return [node for node in self.enumerate_nodes(self.tree) if word_count(node) in self.bounds]

    def __iter__(self) -> Iterator[PhraseCandidate]:
        for node in reversed(self._qualifying_nodes()):
            yield make_candidate(node)


def extract_phrases(
    tree: Tree,
    config: PhraseConfig | None = None,
    *,
    enumerate_nodes: NodeEnumerator = enumerate_phrasal_nodes,
) -> PhraseCandidates:
    return PhraseCandidates(tree, config or PhraseConfig(), enumerate_nodes)
