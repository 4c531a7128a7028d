"""Unified LLM service powered by LiteLLM.

Supports any provider LiteLLM supports via model name prefix:
    - openai/gpt-4o
    - openai/gpt-4-0613
    - anthropic/claude-sonnet-4-20250514
"""

from __future__ import annotations

import logging
import time

import litellm

from config.llm_config import LLMConfig
from config.settings import get_settings
from services.concurrency import rate_limited_llm_call

logger = logging.getLogger(__name__)


class LLMService:
    """Thin wrapper around litellm.acompletion() for multi-provider LLM access.

    Accepts an optional :class:`LLMConfig` that is merged on top of the
    global defaults from Settings.  Individual calls can still override
    any parameter via ``**overrides``.

    Priority chain (low → high):
        .env global defaults  →  agent-level LLMConfig  →  per-call overrides
    """

    def __init__(self, config: LLMConfig | None = None, model: str | None = None):
        settings = get_settings()
        self._config = settings.get_default_llm_config()
        self._timeout = settings.llm_request_timeout

        # Agent-level overrides
        if config:
            self._config = self._config.merge(config)

        if model:
            self._config = self._config.merge(LLMConfig(model=model))

    @property
    def model(self) -> str | None:
        return self._config.model

    async def chat(
        self,
        messages: list,
        tools: list | None = None,
        system: str = "",
        **overrides,
    ) -> dict:
        """Send a conversation turn to the LLM via LiteLLM.

        Args:
            messages: Conversation in OpenAI message format.
            tools:    Tool definitions in OpenAI function-calling format.
            system:   Optional system prompt (prepended as system message).
            **overrides: Per-call parameter overrides (e.g. ``tool_choice="auto"``).

        Returns:
            Parsed response dict with keys:
                content, tool_calls, function_call, finish_reason, usage.
        """
        all_messages = []
        if system:
            all_messages.append({"role": "system", "content": system})
        all_messages.extend(messages)

        kwargs: dict = {
            "model": self._config.model,
            "messages": all_messages,
            "timeout": self._timeout,
            **self._config.to_litellm_kwargs(),
        }
        if tools:
            kwargs["tools"] = tools

        # Per-call overrides win
        kwargs.update(overrides)

        t0 = time.monotonic()
        response = await rate_limited_llm_call(litellm.acompletion, **kwargs)
        logger.info(
            "LLM call %s finished in %.0fms",
            kwargs["model"], (time.monotonic() - t0) * 1000,
        )
        return self._parse_response(response)

    def _parse_response(self, response) -> dict:
        """Parse LiteLLM ModelResponse into a simple dict."""
        choice = response.choices[0]
        message = choice.message

        tool_calls = None
        if getattr(message, "tool_calls", None):
            tool_calls = [
                {
                    "id": tc.id,
                    "function": {
                        "name": tc.function.name,
                        "arguments": tc.function.arguments,
                    },
                }
                for tc in message.tool_calls
            ]

        # Legacy single function_call field (pre-tools OpenAI models)
        function_call = None
        legacy = getattr(message, "function_call", None)
        if legacy is not None and getattr(legacy, "name", None):
            function_call = {"name": legacy.name, "arguments": legacy.arguments}

        usage = getattr(response, "usage", None)
        return {
            "content": message.content,
            "tool_calls": tool_calls,
            "function_call": function_call,
            "finish_reason": choice.finish_reason,
            "usage": {
                "input_tokens": usage.prompt_tokens if usage else 0,
                "output_tokens": usage.completion_tokens if usage else 0,
            },
        }
