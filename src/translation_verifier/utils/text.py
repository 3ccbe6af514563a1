"""Small text normalization helpers shared by search and page handling."""

from __future__ import annotations

import re

_SPACE_RUN = re.compile(r" {2,}")
_WHITESPACE = re.compile(r"\s+")
_ELLIPSIS = re.compile(r"\.\.\.|…")


def clean_markup(text: str) -> str:
    """Drop search-engine bold markup and collapse the spaces it leaves."""
    text = text.replace("<b>", " ").replace("</b>", " ")
    return _SPACE_RUN.sub(" ", text).strip()


def normalize_space(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def snippet_fragments(snippet: str, min_length: int = 20) -> list[str]:
    """Split a search snippet on ellipses into lowercased, searchable pieces."""
    pieces = (normalize_space(p).lower() for p in _ELLIPSIS.split(clean_markup(snippet)))
    return [p for p in pieces if len(p) >= min_length]
