"""Tests for services/llm_service.py — LiteLLM wrapper and response parsing."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from config.llm_config import LLMConfig
from services.llm_service import LLMService


def _response(content=None, tool_calls=None, function_call=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls, function_call=function_call)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message, finish_reason="stop")],
        usage=SimpleNamespace(prompt_tokens=11, completion_tokens=7),
    )


def test_model_override():
    llm = LLMService(config=LLMConfig(temperature=0.2), model="openai/gpt-4-0613")
    assert llm.model == "openai/gpt-4-0613"


@pytest.mark.asyncio
async def test_chat_passes_tools_and_overrides():
    tools = [{"type": "function", "function": {"name": "savePage"}}]
    with patch(
        "services.llm_service.litellm.acompletion",
        new=AsyncMock(return_value=_response("hi")),
    ) as completion:
        llm = LLMService(config=LLMConfig(temperature=0.7, max_tokens=1000), model="openai/gpt-4-0613")
        result = await llm.chat([{"role": "user", "content": "hello"}], tools=tools, tool_choice="auto")

    kwargs = completion.await_args.kwargs
    assert kwargs["model"] == "openai/gpt-4-0613"
    assert kwargs["tools"] == tools
    assert kwargs["tool_choice"] == "auto"
    assert kwargs["temperature"] == 0.7
    assert kwargs["max_tokens"] == 1000
    assert result["content"] == "hi"
    assert result["tool_calls"] is None
    assert result["usage"] == {"input_tokens": 11, "output_tokens": 7}


@pytest.mark.asyncio
async def test_chat_prepends_system():
    with patch(
        "services.llm_service.litellm.acompletion",
        new=AsyncMock(return_value=_response("ok")),
    ) as completion:
        await LLMService().chat([{"role": "user", "content": "x"}], system="be brief")
    messages = completion.await_args.kwargs["messages"]
    assert messages[0] == {"role": "system", "content": "be brief"}


@pytest.mark.asyncio
async def test_parse_tool_calls():
    tool_call = SimpleNamespace(
        id="call_1",
        function=SimpleNamespace(name="deleteBlock", arguments='{"index": 0}'),
    )
    with patch(
        "services.llm_service.litellm.acompletion",
        new=AsyncMock(return_value=_response(tool_calls=[tool_call])),
    ):
        result = await LLMService().chat([{"role": "user", "content": "remove it"}])

    assert result["tool_calls"] == [
        {"id": "call_1", "function": {"name": "deleteBlock", "arguments": '{"index": 0}'}}
    ]


@pytest.mark.asyncio
async def test_parse_legacy_function_call():
    legacy = SimpleNamespace(name="savePage", arguments="{}")
    with patch(
        "services.llm_service.litellm.acompletion",
        new=AsyncMock(return_value=_response(function_call=legacy)),
    ):
        result = await LLMService().chat([{"role": "user", "content": "save"}])

    assert result["function_call"] == {"name": "savePage", "arguments": "{}"}
