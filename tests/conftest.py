"""Shared test fixtures."""

from __future__ import annotations

import asyncio
import re

import pytest
from nltk import Tree

from translation_verifier.errors import ParseError
from translation_verifier.models.search import SearchHit, Segmentation
from translation_verifier.nlp.parser import ChunkParser

FOX_PENN = (
    "(ROOT (S (NP (DT The) (JJ quick) (JJ brown) (NN fox))"
    " (VP (VBZ jumps) (PP (IN over) (NP (DT the) (JJ lazy) (NN dog))))"
    " (. .)))"
)

TAGS = {
    "the": "DT", "a": "DT", "quick": "JJ", "brown": "JJ", "lazy": "JJ", "big": "JJ",
    "fox": "NN", "dog": "NN", "cat": "NN", "mat": "NN", "park": "NN",
    "jumps": "VBZ", "runs": "VBZ", "sleeps": "VBZ", "over": "IN", "on": "IN", "in": "IN",
    ".": ".", ",": ",", "!": ".",
}


def simple_tokenizer(sentence: str) -> list[str]:
    return re.findall(r"\w+|[^\w\s]", sentence)


def simple_tagger(tokens: list[str]) -> list[tuple[str, str]]:
    return [(token, TAGS.get(token.lower(), "NN")) for token in tokens]


def simple_splitter(text: str) -> list[str]:
    return [s for s in re.split(r"(?<=[.!?])\s+", text) if s]


class FakeSearch:
    """Returns ``quoted`` for exact-phrase queries and ``hits`` otherwise."""

    def __init__(self, hits=None, quoted=None, error=None):
        self.hits = list(hits or [])
        self.quoted = list(quoted or [])
        self.error = error
        self.calls: list[tuple[str, int]] = []

    async def search(self, query: str, max_results: int = 5) -> list[SearchHit]:
        self.calls.append((query, max_results))
        if self.error is not None:
            raise self.error
        if query.startswith('"'):
            return self.quoted[:max_results]
        return list(self.hits)


class FakeSegmenter:
    """Maps hit URLs to a Segmentation, an exception, or an awaitable delay."""

    def __init__(self, pages=None, delay: float = 0.0):
        self.pages = dict(pages or {})
        self.delay = delay
        self.expanded: list[str] = []

    async def expand(self, hit: SearchHit) -> Segmentation:
        self.expanded.append(hit.url)
        if self.delay:
            await asyncio.sleep(self.delay)
        page = self.pages.get(hit.url, Segmentation.of([]))
        if isinstance(page, Exception):
            raise page
        return page


class TableScorer:
    """Self-similarity is ``self_score``; other pairs come from ``scores``."""

    def __init__(self, self_score: float = 10.0, scores=None):
        self.self_score = self_score
        self.scores = dict(scores or {})
        self.calls: list[tuple[str, str]] = []

    def __call__(self, text_a: str, text_b: str) -> float:
        self.calls.append((text_a, text_b))
        if text_a == text_b:
            return self.self_score
        return self.scores.get(text_b, 0.0)


class FakeTreeParser:
    """Parser stand-in returning prepared Penn trees per sentence."""

    def __init__(self, trees: dict[str, str], sentences=None):
        self.trees = trees
        self.sentences = sentences

    def split_sentences(self, text: str) -> list[str]:
        if self.sentences is not None:
            return list(self.sentences)
        return simple_splitter(text)

    def parse(self, sentence: str) -> Tree:
        if sentence not in self.trees:
            raise ParseError(f"Cannot parse {sentence!r}")
        return Tree.fromstring(self.trees[sentence])


def hit(n: int, title: str | None = None, abstract: str | None = None) -> SearchHit:
    return SearchHit(
        url=f"https://example.com/{n}",
        title=title if title is not None else f"title {n}",
        abstract_text=abstract if abstract is not None else f"abstract {n}",
    )


@pytest.fixture
def fox_tree() -> Tree:
    return Tree.fromstring(FOX_PENN)


@pytest.fixture
def chunk_parser() -> ChunkParser:
    return ChunkParser(
        tokenizer=simple_tokenizer,
        tagger=simple_tagger,
        sentence_splitter=simple_splitter,
    )
