"""Yandex Translate (v1.5 JSON API) adapter."""

from __future__ import annotations

import os

import httpx

from translation_verifier.errors import TranslationError, TranslatorConfigurationError
from translation_verifier.translators.base import HttpTranslator

SERVICE_URL = "https://translate.yandex.net/api/v1.5/tr.json/translate"


class YandexTranslator(HttpTranslator):
    engine_name = "Yandex"
    max_text_bytes = 10000

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_key: str | None = None,
        timeout: float = 30.0,
    ):
        super().__init__(client, timeout=timeout)
        self.api_key = api_key or os.environ.get("YANDEX_TRANSLATE_KEY")
        if not self.api_key:
            raise TranslatorConfigurationError(
                "Yandex Translate key required. Set YANDEX_TRANSLATE_KEY or pass api_key."
            )

    async def _translate(
        self, text: str, source_language: str | None, target_language: str
    ) -> str:
        # A bare target language lets Yandex detect the source
        lang = f"{source_language}-{target_language}" if source_language else target_language
        data = await self.request_json(
            "POST", SERVICE_URL, data={"key": self.api_key, "lang": lang, "text": text}
        )
        if not isinstance(data, dict) or data.get("code") != 200:
            message = data.get("message") if isinstance(data, dict) else data
            raise TranslationError(f"Error from Yandex API: {message}")
        return "".join(data.get("text", []))
