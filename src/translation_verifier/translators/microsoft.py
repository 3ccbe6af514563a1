"""Microsoft Translator Text API (v3) adapter."""

from __future__ import annotations

import os

import httpx

from translation_verifier.errors import TranslationError, TranslatorConfigurationError
from translation_verifier.translators.base import HttpTranslator

SERVICE_URL = "https://api.cognitive.microsofttranslator.com/translate"
API_VERSION = "3.0"


class MicrosoftTranslator(HttpTranslator):
    engine_name = "Microsoft"
    max_text_bytes = 10240

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_key: str | None = None,
        region: str | None = None,
        timeout: float = 30.0,
    ):
        super().__init__(client, timeout=timeout)
        self.api_key = api_key or os.environ.get("MICROSOFT_TRANSLATOR_KEY")
        if not self.api_key:
            raise TranslatorConfigurationError(
                "Microsoft Translator key required. Set MICROSOFT_TRANSLATOR_KEY or pass api_key."
            )
        self.region = region or os.environ.get("MICROSOFT_TRANSLATOR_REGION")

    async def _translate(
        self, text: str, source_language: str | None, target_language: str
    ) -> str:
        params = {"api-version": API_VERSION, "to": target_language}
        if source_language:
            params["from"] = source_language
        headers = {"Ocp-Apim-Subscription-Key": self.api_key}
        if self.region:
            headers["Ocp-Apim-Subscription-Region"] = self.region

        data = await self.request_json(
            "POST", SERVICE_URL, params=params, headers=headers, json=[{"Text": text}]
        )
        try:
            return data[0]["translations"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise TranslationError(f"Microsoft response malformed: {data!r}") from exc
