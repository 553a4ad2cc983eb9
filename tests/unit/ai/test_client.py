"""Unit tests for text-generation backends"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError

from branchpoint.ai.client import (
    OpenAITextGenerator,
    UnavailableTextGenerator,
    build_text_generator,
)
from branchpoint.core.config import settings
from branchpoint.exceptions import GenerationError


def _completion(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


def _openai_client(create):
    client = MagicMock()
    client.chat.completions.create = create
    return client


class TestOpenAITextGenerator:
    """Tests for the chat-completions backend"""

    @pytest.mark.asyncio
    async def test_returns_message_content(self):
        create = AsyncMock(return_value=_completion('{"ok": true}'))
        generator = OpenAITextGenerator(_openai_client(create), default_model="gpt-test")

        text = await generator.generate("Hello")

        assert text == '{"ok": true}'
        kwargs = create.await_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["messages"] == [{"role": "user", "content": "Hello"}]
        assert kwargs["max_tokens"] == settings.openai_max_tokens

    @pytest.mark.asyncio
    async def test_model_override(self):
        create = AsyncMock(return_value=_completion("text"))
        generator = OpenAITextGenerator(_openai_client(create), default_model="gpt-test")

        await generator.generate("Hello", model="gpt-fast")

        assert create.await_args.kwargs["model"] == "gpt-fast"

    @pytest.mark.asyncio
    async def test_backend_error_becomes_generation_error(self):
        create = AsyncMock(side_effect=OpenAIError("rate limited"))
        generator = OpenAITextGenerator(_openai_client(create), default_model="gpt-test")

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate("Hello")

        assert exc_info.value.error_code.code == "GENERATION_007"
        assert exc_info.value.context["model"] == "gpt-test"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "   "])
    async def test_empty_content_raises(self, content):
        create = AsyncMock(return_value=_completion(content))
        generator = OpenAITextGenerator(_openai_client(create), default_model="gpt-test")

        with pytest.raises(GenerationError):
            await generator.generate("Hello")


class TestUnavailableTextGenerator:
    """Tests for the unconfigured backend"""

    @pytest.mark.asyncio
    async def test_always_raises(self):
        with pytest.raises(GenerationError):
            await UnavailableTextGenerator().generate("Hello")

    def test_selected_without_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "openai_api_key", None)

        assert isinstance(build_text_generator(), UnavailableTextGenerator)
