"""Shallow syntactic parsing built on nltk's cascaded regexp chunker.

The meaningfulness pipeline only needs a tree whose phrasal nodes can be
enumerated and whose leaves carry part-of-speech tags, so any parser that
returns an ``nltk.Tree`` fits. Two leaf shapes are understood:

  - chunk trees, where each leaf is a ``(word, tag)`` tuple
  - Penn-style trees, where each word sits under a single-child preterminal
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

import nltk
from nltk import RegexpParser, Tree

from translation_verifier.errors import ParseError

logger = logging.getLogger(__name__)

GRAMMAR = r"""
    NP: {<DT|PDT|PRP\$|CD>*<JJ.*|VBN|VBG>*<NN.*|PRP>+}
    PP: {<IN|TO><NP>}
    VP: {<MD>?<RB.*>*<VB.*>+<RP|RB.*>*<NP|PP|CLAUSE>*}
    CLAUSE: {<NP><VP>}
"""

PHRASE_LABELS = frozenset({"NP", "PP", "VP", "CLAUSE"})

Tokenizer = Callable[[str], list[str]]
Tagger = Callable[[list[str]], list[tuple[str, str]]]
SentenceSplitter = Callable[[str], list[str]]


def tagged_yield(tree: Tree) -> list[tuple[str, str]]:
    """Return the ``(word, tag)`` pairs dominated by ``tree``."""
    leaves = tree.leaves()
    if leaves and all(isinstance(leaf, tuple) for leaf in leaves):
        return [(word, tag) for word, tag in leaves]
    return tree.pos()


def is_word_tag(tag: str) -> bool:
    """Punctuation tags (``.``, ``,``, ``:``, ``$`` ...) don't start with a letter."""
    return tag[:1].isalpha()


def word_count(tree: Tree) -> int:
    return sum(1 for _, tag in tagged_yield(tree) if is_word_tag(tag))


def tree_text(tree: Tree) -> str:
    return " ".join(word for word, _ in tagged_yield(tree))


def enumerate_phrasal_nodes(tree: Tree) -> Iterator[Tree]:
    """Yield every node without exactly one child, top-down in pre-order."""
    for node in tree.subtrees():
        if len(node) != 1:
            yield node


class ChunkParser:
    """Tokenize, POS-tag and chunk sentences into ``nltk.Tree`` objects."""

    def __init__(
        self,
        grammar: str = GRAMMAR,
        *,
        tokenizer: Tokenizer | None = None,
        tagger: Tagger | None = None,
        sentence_splitter: SentenceSplitter | None = None,
        loop: int = 2,
    ):
        self.chunker = RegexpParser(grammar, root_label="S", loop=loop)
        self.tokenizer = tokenizer or nltk.word_tokenize
        self.tagger = tagger or nltk.pos_tag
        self.sentence_splitter = sentence_splitter or nltk.sent_tokenize

    def split_sentences(self, text: str) -> list[str]:
        try:
            sentences = self.sentence_splitter(text)
        except LookupError as exc:
            raise ParseError(
                f"nltk sentence model unavailable, run nltk.download('punkt_tab'): {exc}"
            ) from exc
        return [s.strip() for s in sentences if s.strip()]

    def tag(self, sentence: str) -> list[tuple[str, str]]:
        try:
            tokens = self.tokenizer(sentence)
            if not tokens:
                raise ParseError(f"Nothing to parse in {sentence!r}")
            return list(self.tagger(tokens))
        except LookupError as exc:
            raise ParseError(f"nltk tagger data unavailable: {exc}") from exc

    def parse(self, sentence: str) -> Tree:
        """Parse one sentence into a chunk tree rooted at ``S``."""
        tagged = self.tag(sentence)
        try:
            tree = self.chunker.parse(tagged)
        except ValueError as exc:
            raise ParseError(f"Cannot chunk {sentence!r}: {exc}") from exc
        logger.debug("Parsed %r -> %s", sentence, tree.pformat(margin=10_000))
        return tree

    def parse_text(self, text: str) -> list[Tree]:
        return [self.parse(sentence) for sentence in self.split_sentences(text)]
