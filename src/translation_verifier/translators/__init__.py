"""Translation provider variants and the factory that builds them by name."""

from __future__ import annotations

import httpx

from translation_verifier.config import TranslationConfig
from translation_verifier.errors import TranslatorConfigurationError
from translation_verifier.translators.base import HttpTranslator, Translator
from translation_verifier.translators.claude import ClaudeTranslator
from translation_verifier.translators.google import GoogleTranslator
from translation_verifier.translators.microsoft import MicrosoftTranslator
from translation_verifier.translators.yandex import YandexTranslator

PROVIDER_ALIASES: dict[str, str] = {
    "google": "google",
    "gtranslate": "google",
    "microsoft": "microsoft",
    "bing": "microsoft",
    "azure": "microsoft",
    "yandex": "yandex",
    "claude": "claude",
    "anthropic": "claude",
}

PROVIDER_NAMES = ("google", "microsoft", "yandex", "claude")


def build_translator(
    name: str,
    client: httpx.AsyncClient,
    config: TranslationConfig | None = None,
) -> Translator:
    """Create one provider by name (case-insensitive, aliases allowed)."""
    config = config or TranslationConfig()
    normalized = PROVIDER_ALIASES.get(name.strip().lower())
    if normalized == "google":
        return GoogleTranslator(client, timeout=config.timeout)
    if normalized == "microsoft":
        return MicrosoftTranslator(client, timeout=config.timeout)
    if normalized == "yandex":
        return YandexTranslator(client, timeout=config.timeout)
    if normalized == "claude":
        return ClaudeTranslator(model=config.claude_model, timeout=config.timeout)
    raise TranslatorConfigurationError(f"Unknown translation provider '{name}'.")


def build_translators(
    config: TranslationConfig,
    client: httpx.AsyncClient,
    names: list[str] | None = None,
) -> list[Translator]:
    """Build every configured provider once, in configuration order."""
    return [build_translator(name, client, config) for name in (names or config.providers)]


__all__ = [
    "ClaudeTranslator",
    "GoogleTranslator",
    "HttpTranslator",
    "MicrosoftTranslator",
    "PROVIDER_NAMES",
    "Translator",
    "YandexTranslator",
    "build_translator",
    "build_translators",
]
