"""Claude-backed translator with async support and retry logic."""

from __future__ import annotations

import logging

import anthropic
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from translation_verifier.errors import TranslationError
from translation_verifier.translators.base import Translator

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a machine translation engine. Translate the user's text into the
requested language. Reply with the translation only: no quotes, no notes,
no transliteration. Keep sentence boundaries as in the source."""


class ClaudeTranslator(Translator):
    """Translate through the Anthropic Messages API."""

    engine_name = "Claude"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = "claude-haiku-4-5-20251001",
        timeout: float | None = None,
    ):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.model = model

    @retry(
        retry=retry_if_exception_type(anthropic.APIConnectionError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True,
    )
    async def _call_api(self, prompt: str) -> anthropic.types.Message:
        return await self.client.messages.create(
            model=self.model,
            max_tokens=4096,
            temperature=0.0,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )

    async def _translate(
        self, text: str, source_language: str | None, target_language: str
    ) -> str:
        source = f" from {source_language}" if source_language else ""
        prompt = f"Translate{source} into {target_language}:\n\n{text}"
        logger.debug("Claude translation call: model=%s", self.model)
        try:
            message = await self._call_api(prompt)
        except anthropic.APIError as exc:
            logger.error("Claude translation failed", exc_info=True)
            raise TranslationError(f"Claude request failed: {exc}") from exc
        return message.content[0].text
