"""Tests for the HTTP translation providers."""

from __future__ import annotations

import json

import httpx
import pytest
from tenacity import wait_none

from translation_verifier.errors import (
    TextTooLargeError,
    TranslationError,
    TranslatorConfigurationError,
)
from translation_verifier.translators.base import HttpTranslator
from translation_verifier.translators.google import GoogleTranslator
from translation_verifier.translators.microsoft import MicrosoftTranslator
from translation_verifier.translators.yandex import YandexTranslator


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status: int = 200, payload=None, text: str | None = None):
        self.status = status
        self.payload = payload
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status, text=self.text)
        return httpx.Response(self.status, json=self.payload)


class TestGoogleTranslator:
    async def test_sentences_are_joined(self):
        handler = Recorder(payload={"sentences": [{"trans": "The dog sleeps. "}, {"trans": "It is late."}]})
        translator = GoogleTranslator(_client(handler))

        assert await translator.translate("Der Hund schläft. Es ist spät.") == "The dog sleeps. It is late."

    async def test_query_parameters(self):
        handler = Recorder(payload={"sentences": []})
        await GoogleTranslator(_client(handler)).translate("Hallo", "de", "en")

        params = handler.requests[0].url.params
        assert params["sl"] == "de"
        assert params["tl"] == "en"
        assert params["q"] == "Hallo"
        assert params["client"] == "gtx"

    async def test_source_language_defaults_to_auto(self):
        handler = Recorder(payload={"sentences": []})
        await GoogleTranslator(_client(handler)).translate("Hallo")

        assert handler.requests[0].url.params["sl"] == "auto"

    async def test_byte_order_mark_is_ignored(self):
        body = "\ufeff" + json.dumps({"sentences": [{"trans": "hello"}]})
        translator = GoogleTranslator(_client(Recorder(text=body)))

        assert await translator.translate("hallo") == "hello"

    async def test_malformed_response(self):
        translator = GoogleTranslator(_client(Recorder(payload={"unexpected": True})))

        with pytest.raises(TranslationError, match="malformed"):
            await translator.translate("hallo")

    async def test_invalid_json(self):
        translator = GoogleTranslator(_client(Recorder(text="<html>captcha</html>")))

        with pytest.raises(TranslationError, match="invalid JSON"):
            await translator.translate("hallo")

    async def test_error_status(self):
        translator = GoogleTranslator(_client(Recorder(status=429, text="Too Many Requests")))

        with pytest.raises(TranslationError, match=r"Error from Google API \(429\)"):
            await translator.translate("hallo")

    async def test_oversized_text_is_rejected_before_sending(self):
        handler = Recorder(payload={"sentences": []})
        translator = GoogleTranslator(_client(handler))

        with pytest.raises(TextTooLargeError):
            await translator.translate("ä" * 6000)  # 12000 bytes in UTF-8
        assert handler.requests == []

    async def test_transport_errors_are_retried(self, monkeypatch):
        monkeypatch.setattr(HttpTranslator._send.retry, "wait", wait_none())
        attempts = []

        def handler(request):
            attempts.append(request)
            if len(attempts) < 3:
                raise httpx.ConnectError("connection reset", request=request)
            return httpx.Response(200, json={"sentences": [{"trans": "ok"}]})

        assert await GoogleTranslator(_client(handler)).translate("gut") == "ok"
        assert len(attempts) == 3

    async def test_persistent_transport_error(self, monkeypatch):
        monkeypatch.setattr(HttpTranslator._send.retry, "wait", wait_none())

        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(TranslationError, match="request failed"):
            await GoogleTranslator(_client(handler)).translate("gut")


class TestMicrosoftTranslator:
    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("MICROSOFT_TRANSLATOR_KEY", raising=False)
        with pytest.raises(TranslatorConfigurationError, match="MICROSOFT_TRANSLATOR_KEY"):
            MicrosoftTranslator(_client(Recorder()))

    async def test_translation_request(self):
        handler = Recorder(payload=[{"translations": [{"text": "Good morning", "to": "en"}]}])
        translator = MicrosoftTranslator(_client(handler), api_key="secret", region="westeurope")

        assert await translator.translate("Guten Morgen", "de", "en") == "Good morning"
        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.params["api-version"] == "3.0"
        assert request.url.params["from"] == "de"
        assert request.url.params["to"] == "en"
        assert request.headers["Ocp-Apim-Subscription-Key"] == "secret"
        assert request.headers["Ocp-Apim-Subscription-Region"] == "westeurope"
        assert json.loads(request.content) == [{"Text": "Guten Morgen"}]

    async def test_auto_detect_omits_source(self, monkeypatch):
        monkeypatch.delenv("MICROSOFT_TRANSLATOR_REGION", raising=False)
        handler = Recorder(payload=[{"translations": [{"text": "Hi"}]}])
        await MicrosoftTranslator(_client(handler), api_key="secret").translate("Hallo")

        request = handler.requests[0]
        assert "from" not in request.url.params
        assert "Ocp-Apim-Subscription-Region" not in request.headers

    async def test_error_status(self):
        handler = Recorder(status=401, payload={"error": {"code": 401000, "message": "invalid key"}})
        translator = MicrosoftTranslator(_client(handler), api_key="wrong")

        with pytest.raises(TranslationError, match=r"\(401\)"):
            await translator.translate("Hallo")

    async def test_malformed_response(self):
        translator = MicrosoftTranslator(_client(Recorder(payload=[])), api_key="secret")

        with pytest.raises(TranslationError, match="malformed"):
            await translator.translate("Hallo")


class TestYandexTranslator:
    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("YANDEX_TRANSLATE_KEY", raising=False)
        with pytest.raises(TranslatorConfigurationError):
            YandexTranslator(_client(Recorder()))

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("YANDEX_TRANSLATE_KEY", "env-key")
        assert YandexTranslator(_client(Recorder())).api_key == "env-key"

    async def test_translation_request(self):
        handler = Recorder(payload={"code": 200, "lang": "ru-en", "text": ["Hello, world"]})
        translator = YandexTranslator(_client(handler), api_key="secret")

        assert await translator.translate("Привет, мир", "ru", "en") == "Hello, world"
        form = httpx.QueryParams(handler.requests[0].content.decode())
        assert form["key"] == "secret"
        assert form["lang"] == "ru-en"
        assert form["text"] == "Привет, мир"

    async def test_target_only_lang_for_auto_detect(self):
        handler = Recorder(payload={"code": 200, "text": ["Hello"]})
        await YandexTranslator(_client(handler), api_key="secret").translate("Привет")

        form = httpx.QueryParams(handler.requests[0].content.decode())
        assert form["lang"] == "en"

    async def test_error_code_in_body(self):
        handler = Recorder(payload={"code": 413, "message": "Text size exceeds the maximum"})
        translator = YandexTranslator(_client(handler), api_key="secret")

        with pytest.raises(TranslationError, match="Text size exceeds the maximum"):
            await translator.translate("Привет")

    async def test_limit_is_ten_thousand_bytes(self):
        translator = YandexTranslator(_client(Recorder()), api_key="secret")

        translator.validate_text("a" * 10000)
        with pytest.raises(TextTooLargeError):
            translator.validate_text("a" * 10001)
