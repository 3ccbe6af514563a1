"""Phrase candidates derived from syntax trees."""

from __future__ import annotations

from dataclasses import dataclass, field

from nltk import Tree


@dataclass(frozen=True)
class PhraseCandidate:
    """A phrasal subtree of a translated sentence, considered for testing."""

    tree: Tree = field(repr=False, compare=False)
    text: str
    word_count: int

    @property
    def penn(self) -> str:
        """Bracketed rendering of the phrase subtree."""
        return self.tree.pformat()
