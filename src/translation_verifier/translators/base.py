"""Common translate capability shared by every provider."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from translation_verifier.errors import TextTooLargeError, TranslationError

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


class Translator(ABC):
    """Adapter for a machine translation service."""

    engine_name: str = ""
    # Provider request size limit in encoded bytes; None = unlimited
    max_text_bytes: int | None = None

    async def translate(
        self,
        text: str,
        source_language: str | None = None,
        target_language: str = "en",
    ) -> str:
        """Translate ``text``; ``source_language=None`` asks for auto-detection."""
        self.validate_text(text)
        logger.info("Translating %d chars with %s", len(text), self.engine_name)
        translated = await self._translate(text, source_language, target_language)
        return translated.strip()

    def validate_text(self, text: str) -> None:
        if self.max_text_bytes is None:
            return
        size = len(text.encode(ENCODING))
        if size > self.max_text_bytes:
            raise TextTooLargeError(
                f"{self.engine_name}: text is {size} bytes, limit is {self.max_text_bytes}"
            )

    @abstractmethod
    async def _translate(
        self, text: str, source_language: str | None, target_language: str
    ) -> str:
        """Provider-specific request/response handling."""


class HttpTranslator(Translator):
    """Translator backed by a plain HTTP endpoint."""

    def __init__(self, client: httpx.AsyncClient, *, timeout: float = 30.0):
        self.client = client
        self.timeout = timeout

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True,
    )
    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        return await self.client.request(method, url, timeout=self.timeout, **kwargs)

    async def request_json(self, method: str, url: str, **kwargs):
        try:
            response = await self._send(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise TranslationError(f"{self.engine_name} request failed: {exc}") from exc
        if response.status_code != 200:
            raise TranslationError(
                f"Error from {self.engine_name} API ({response.status_code}): {response.text}"
            )
        # Some endpoints prepend a byte order mark
        body = response.text.replace("\ufeff", "")
        try:
            return json.loads(body)
        except ValueError as exc:
            raise TranslationError(f"{self.engine_name} returned invalid JSON: {exc}") from exc
