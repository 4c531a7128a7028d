"""Shared pytest fixtures for the Indy block service tests.

Provides:
- ``hero_data`` / ``grid_data``: fresh copies of the registry defaults
- ``store``: a BlockStore holding one hero and one grid block
- ``make_reply``: builder for parsed ``LLMService.chat`` results
- ``mock_llm``: an LLMService stand-in whose ``chat`` is an AsyncMock
- ``mock_cms``: a CMSClient stand-in whose ``put_entry_blocks`` is an AsyncMock
"""

from __future__ import annotations

import os

# Model clients read the key at construction time; tests never reach the network.
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test")

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from blocks.registry import resolve_block  # noqa: E402
from services.block_store import BlockStore  # noqa: E402


def llm_reply(content: str | None = None, name: str | None = None, arguments: str = "{}") -> dict:
    """A parsed LLMService.chat() result with optional tool call."""
    tool_calls = None
    if name is not None:
        tool_calls = [{"id": "call_1", "function": {"name": name, "arguments": arguments}}]
    return {
        "content": content,
        "tool_calls": tool_calls,
        "function_call": None,
        "finish_reason": "tool_calls" if tool_calls else "stop",
        "usage": {"input_tokens": 10, "output_tokens": 5},
    }


@pytest.fixture
def make_reply():
    return llm_reply


@pytest.fixture
def hero_data() -> dict:
    return resolve_block("hero").defaults()


@pytest.fixture
def grid_data() -> dict:
    return resolve_block("grid").defaults()


@pytest.fixture
def store(hero_data, grid_data) -> BlockStore:
    s = BlockStore()
    s.add_block("hero", hero_data, block_id="hero-1")
    s.add_block("grid", grid_data, block_id="grid-1")
    return s


@pytest.fixture
def mock_llm():
    llm = MagicMock()
    llm.model = "openai/gpt-4-0613"
    llm.chat = AsyncMock(return_value=llm_reply("Hello!"))
    return llm


@pytest.fixture
def mock_cms():
    cms = MagicMock()
    cms.put_entry_blocks = AsyncMock(return_value={"ok": True})
    return cms
