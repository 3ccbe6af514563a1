"""Exception hierarchy for the translation verifier."""

from __future__ import annotations


class VerifierError(Exception):
    """Base exception for all verifier errors."""


class TranslationError(VerifierError):
    """Raised when a translation provider call fails."""


class TextTooLargeError(TranslationError):
    """Raised before any network call when text exceeds a provider's limit."""


class TranslatorConfigurationError(TranslationError):
    """Raised when a translation provider is unknown or misconfigured."""


class SearchError(VerifierError):
    """Raised when the web search service fails."""


class PageFetchError(VerifierError):
    """Raised when a search hit's page cannot be retrieved."""


class ParseError(VerifierError):
    """Raised when a sentence cannot be tokenized, tagged or chunked."""


class ScoringError(VerifierError):
    """Raised when a phrase cannot be scored."""


class DegenerateSelfScoreError(ScoringError):
    """Raised when a phrase's self-similarity is zero and cannot normalize."""


class UnsafeURLError(ValueError):
    """Raised when a URL resolves to a blocked (private/internal) address."""
