"""Google machine translation over the public translate_a endpoint."""

from __future__ import annotations

from translation_verifier.errors import TranslationError
from translation_verifier.translators.base import HttpTranslator

SERVICE_URL = "https://translate.googleapis.com/translate_a/single"


class GoogleTranslator(HttpTranslator):
    engine_name = "Google"
    max_text_bytes = 10240

    async def _translate(
        self, text: str, source_language: str | None, target_language: str
    ) -> str:
        params = {
            "client": "gtx",
            "dt": "t",
            "dj": "1",
            "sl": source_language or "auto",
            "tl": target_language,
            "q": text,
        }
        data = await self.request_json("GET", SERVICE_URL, params=params)
        sentences = data.get("sentences") if isinstance(data, dict) else None
        if not isinstance(sentences, list):
            raise TranslationError("Google response malformed: missing 'sentences'.")
        return "".join(s.get("trans", "") for s in sentences if isinstance(s, dict))
