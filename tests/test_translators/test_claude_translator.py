"""Tests for the Claude-backed translator."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest

from translation_verifier.errors import TranslationError
from translation_verifier.translators.claude import SYSTEM_PROMPT, ClaudeTranslator

ANTHROPIC = "translation_verifier.translators.claude.anthropic.AsyncAnthropic"


def _make_api_message(text: str) -> MagicMock:
    message = MagicMock()
    message.content = [MagicMock(text=text)]
    return message


class TestClaudeTranslatorInit:
    def test_default_creates_client_with_no_kwargs(self):
        with patch(ANTHROPIC) as mock_cls:
            ClaudeTranslator()
            mock_cls.assert_called_once_with()

    def test_api_key_and_timeout_are_passed(self):
        with patch(ANTHROPIC) as mock_cls:
            ClaudeTranslator(api_key="test-key", timeout=30.0)
            mock_cls.assert_called_once_with(api_key="test-key", timeout=30.0)


class TestClaudeTranslatorTranslate:
    async def test_returns_stripped_text(self):
        with patch(ANTHROPIC) as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=_make_api_message("  Good night.\n"))
            mock_cls.return_value = mock_client

            result = await ClaudeTranslator(model="test-model").translate("Gute Nacht.", "de", "en")

        assert result == "Good night."
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["temperature"] == 0.0
        prompt = kwargs["messages"][0]["content"]
        assert "from de into en" in prompt
        assert prompt.endswith("Gute Nacht.")

    async def test_auto_detect_prompt(self):
        with patch(ANTHROPIC) as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=_make_api_message("Hi"))
            mock_cls.return_value = mock_client

            await ClaudeTranslator().translate("Hallo")

        prompt = mock_client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert prompt.startswith("Translate into en:")

    async def test_api_error_becomes_translation_error(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        error = anthropic.APIStatusError(
            "overloaded", response=httpx.Response(529, request=request), body=None
        )
        with patch(ANTHROPIC) as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(side_effect=error)
            mock_cls.return_value = mock_client

            with pytest.raises(TranslationError, match="Claude request failed"):
                await ClaudeTranslator().translate("Hallo")
