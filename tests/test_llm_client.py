"""LLMClient -- request shape, content extraction, failure mapping."""

from types import SimpleNamespace

import httpx
import openai
import pytest
from unittest.mock import AsyncMock

from pdf_rule_checker.config import Settings
from pdf_rule_checker.errors import ConfigurationError, LLMCallError
from pdf_rule_checker.llm import LLMClient, create_client


def completion(content, prompt_tokens=12, completion_tokens=8):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


def fake_sdk(result=None, error=None):
    sdk = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=AsyncMock())))
    if error is not None:
        sdk.chat.completions.create.side_effect = error
    else:
        sdk.chat.completions.create.return_value = result
    return sdk


def make_client(sdk, json_mode=True):
    return LLMClient(
        api_key="test-key",
        model="openai/gpt-4o",
        base_url="https://openrouter.ai/api/v1",
        json_mode=json_mode,
        sdk_client=sdk,
    )


class TestCall:
    @pytest.mark.asyncio
    async def test_request_shape(self):
        sdk = fake_sdk(completion('{"status": "pass"}'))
        await make_client(sdk).call("check this", temperature=0.2, max_tokens=1000)
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "openai/gpt-4o"
        assert kwargs["messages"] == [{"role": "user", "content": "check this"}]
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 1000
        assert kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_json_mode_can_be_disabled(self):
        sdk = fake_sdk(completion("{}"))
        await make_client(sdk, json_mode=False).call("x")
        assert "response_format" not in sdk.chat.completions.create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_returns_first_choice_content_and_usage(self):
        client = make_client(fake_sdk(completion('{"status": "fail"}')))
        response = await client.call("x")
        assert response.content == '{"status": "fail"}'
        assert response.usage.total_tokens == 20
        assert response.usage.input_tokens == 12

    @pytest.mark.asyncio
    async def test_no_choices_gives_empty_content(self):
        sdk = fake_sdk(SimpleNamespace(choices=[], usage=None))
        response = await make_client(sdk).call("x")
        assert response.content == ""

    @pytest.mark.asyncio
    async def test_provider_error_raises_llm_call_error(self):
        request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
        sdk = fake_sdk(error=openai.APIConnectionError(request=request))
        with pytest.raises(LLMCallError):
            await make_client(sdk).call("x")


class TestFactory:
    def test_missing_key_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="API key is required"):
            create_client(Settings(api_key=""))

    def test_builds_client_from_settings(self):
        client = create_client(Settings(api_key="k", model="some/model"))
        assert client.model == "some/model"

    def test_empty_key_rejected_by_constructor(self):
        with pytest.raises(ValueError):
            LLMClient(api_key="", model="m", base_url="https://example.invalid/v1")
