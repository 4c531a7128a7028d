"""Tests for agents/indy_agent.py — the function-calling dispatcher.

The LLM and the CMS client are mocked; every test drives one full
``handle_indy_request`` turn against a real BlockStore.
"""

import asyncio
import json

import httpx
import pytest

from agents.indy_agent import (
    SAVE_CONTEXT_MESSAGE,
    SAVE_SUCCESS_MESSAGE,
    build_indy_messages,
    extract_function_call,
    handle_indy_request,
    parse_function_call,
    parse_page_path,
)
from errors.exceptions import CMSClientError, FunctionCallParseError
from models.errors import GENERIC_FAILURE_MESSAGE, NO_REPLY_MESSAGE, RATE_LIMIT_MESSAGE
from models.indy import AddBlockCall, SavePageCall, UpdateBlockCall
from services.cms_client import CMSClient
from tools.indy_functions import to_tool_definitions


def _call(make_reply, name, **args):
    return make_reply(name=name, arguments=json.dumps(args))


async def _turn(store, mock_llm, mock_cms, text="do it", **kwargs):
    return await handle_indy_request(text, store, llm=mock_llm, cms=mock_cms, **kwargs)


# ── Message assembly ─────────────────────────────────────────


class TestBuildMessages:
    def test_no_selection(self, store):
        messages = build_indy_messages("hi", store, None)
        assert [m["role"] for m in messages] == ["system", "user"]
        assert "No block selected. Available blocks: 0: hero, 1: grid" in messages[0]["content"]
        assert "Block types available to addBlock:\n- hero: Hero Section" in messages[0]["content"]
        assert messages[1]["content"] == "hi"

    def test_selected_block_context_first(self, store):
        messages = build_indy_messages("hi", store, 0)
        assert [m["role"] for m in messages] == ["system", "system", "user"]
        selected = messages[0]["content"]
        assert selected.startswith('Current block is of type "hero".')
        assert "**AI Hints:**" in selected
        assert '"colorIntensity": "medium"' in selected
        assert "Currently selected block: hero at index 0" in messages[1]["content"]

    def test_out_of_range_selection_ignored(self, store):
        messages = build_indy_messages("hi", store, 9)
        assert len(messages) == 2
        assert "No block selected" in messages[0]["content"]


# ── Function-call parsing ────────────────────────────────────


class TestParsing:
    def test_extract_tool_call(self, make_reply):
        assert extract_function_call(make_reply(name="savePage")) == ("savePage", "{}")

    def test_extract_legacy_function_call(self):
        response = {"function_call": {"name": "deleteBlock", "arguments": '{"index": 0}'}}
        assert extract_function_call(response) == ("deleteBlock", '{"index": 0}')

    def test_extract_none(self, make_reply):
        assert extract_function_call(make_reply("just text")) is None

    def test_parse_known_calls(self):
        assert isinstance(parse_function_call("savePage", ""), SavePageCall)
        call = parse_function_call("addBlock", '{"type": "hero", "props": {}}')
        assert isinstance(call, AddBlockCall)
        assert call.position is None
        update = parse_function_call("updateBlock", '{"index": 1, "updates": {"a": 1}}')
        assert isinstance(update, UpdateBlockCall)
        assert update.updates == {"a": 1}

    def test_parse_errors(self):
        with pytest.raises(FunctionCallParseError):
            parse_function_call("updateBlock", "{not json")
        with pytest.raises(FunctionCallParseError):
            parse_function_call("updateBlock", "[1, 2]")
        with pytest.raises(FunctionCallParseError):
            parse_function_call("deleteBlock", '{"index": "first"}')

    def test_parse_page_path(self):
        assert parse_page_path("/edit/acme/home") == ("acme", "home")
        assert parse_page_path("/edit/acme/home/extra") == ("acme", "home")
        assert parse_page_path("/view/acme/home") is None
        assert parse_page_path("/edit/acme") is None
        assert parse_page_path(None) is None


# ── Dispatcher turns ─────────────────────────────────────────


class TestHandleIndyRequest:
    async def test_update_block(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = _call(
            make_reply, "updateBlock", index=0, updates={"background": {"color": "red"}}
        )
        reply = await _turn(store, mock_llm, mock_cms, "make the hero red")

        assert reply == "✅ Updated block 0 (hero)."
        assert store.blocks[0].block_data == {"background": {"color": "red"}}

    async def test_update_invalid_index(self, store, mock_llm, mock_cms, make_reply):
        before = store.to_payload()
        mock_llm.chat.return_value = _call(make_reply, "updateBlock", index=5, updates={})
        reply = await _turn(store, mock_llm, mock_cms)

        assert reply == "❌ Invalid block index 5. Available blocks: 0-1"
        assert store.to_payload() == before

    async def test_add_block_appends(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = _call(
            make_reply, "addBlock", type="hero", props={"elements": {}}, position=0
        )
        reply = await _turn(store, mock_llm, mock_cms)

        assert reply == "✅ Added new hero block at position 2."
        assert len(store) == 3
        assert store.blocks[2].block_type == "hero"
        assert store.blocks[2].position == 3

    async def test_add_block_unregistered_type(self, store, mock_llm, mock_cms, make_reply):
        before = store.to_payload()
        mock_llm.chat.return_value = _call(make_reply, "addBlock", type="carousel", props={})
        reply = await _turn(store, mock_llm, mock_cms)

        assert reply == "❌ Unknown block type 'carousel'. Available types: hero, grid"
        assert store.to_payload() == before

    async def test_delete_block(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = _call(make_reply, "deleteBlock", index=1)
        reply = await _turn(store, mock_llm, mock_cms)

        assert reply == "🗑️ Deleted grid block at index 1."
        assert [b.id for b in store.blocks] == ["hero-1"]

    async def test_delete_invalid_index(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = _call(make_reply, "deleteBlock", index=-1)
        reply = await _turn(store, mock_llm, mock_cms)
        assert reply == "❌ Invalid block index -1. Available blocks: 0-1"
        assert len(store) == 2

    async def test_save_page(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = _call(make_reply, "savePage")
        reply = await _turn(store, mock_llm, mock_cms, page_path="/edit/acme/home")

        assert reply == SAVE_SUCCESS_MESSAGE
        mock_cms.put_entry_blocks.assert_awaited_once_with("acme", "home", store.to_payload())

    async def test_save_page_plain_text_ok(self, store, mock_llm, make_reply):
        cms = CMSClient(
            base_url="https://cms.example.com/api/cms",
            timeout=5,
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="OK")),
        )
        await cms.start()
        mock_llm.chat.return_value = _call(make_reply, "savePage")
        reply = await _turn(store, mock_llm, cms, page_path="/edit/acme/home")
        await cms.close()

        assert reply == SAVE_SUCCESS_MESSAGE

    async def test_save_page_without_path(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = _call(make_reply, "savePage")
        reply = await _turn(store, mock_llm, mock_cms, page_path="/dashboard")

        assert reply == SAVE_CONTEXT_MESSAGE
        mock_cms.put_entry_blocks.assert_not_awaited()

    async def test_save_page_backend_error(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = _call(make_reply, "savePage")
        mock_cms.put_entry_blocks.side_effect = CMSClientError(500, "database offline")
        reply = await _turn(store, mock_llm, mock_cms, page_path="/edit/acme/home")

        assert reply == "❌ Failed to save page: database offline"

    async def test_unknown_function(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = _call(make_reply, "reorderBlocks", order=[1, 0])
        reply = await _turn(store, mock_llm, mock_cms)
        assert reply == "⚠️ Unknown function: reorderBlocks"

    async def test_plain_text_reply(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = make_reply("Hello! How can I help?")
        assert await _turn(store, mock_llm, mock_cms) == "Hello! How can I help?"

    async def test_empty_reply(self, store, mock_llm, mock_cms, make_reply):
        mock_llm.chat.return_value = make_reply(None)
        assert await _turn(store, mock_llm, mock_cms) == NO_REPLY_MESSAGE

    async def test_rate_limit_error(self, store, mock_llm, mock_cms):
        mock_llm.chat.side_effect = Exception("RateLimitError: Rate limit reached for gpt-4")
        assert await _turn(store, mock_llm, mock_cms) == RATE_LIMIT_MESSAGE

    async def test_malformed_arguments(self, store, mock_llm, mock_cms, make_reply):
        before = store.to_payload()
        mock_llm.chat.return_value = make_reply(name="updateBlock", arguments="{not json")
        reply = await _turn(store, mock_llm, mock_cms)

        assert reply == GENERIC_FAILURE_MESSAGE
        assert store.to_payload() == before

    async def test_model_timeout(self, store, mock_llm, mock_cms):
        mock_llm.chat.side_effect = asyncio.TimeoutError()
        assert await _turn(store, mock_llm, mock_cms) == GENERIC_FAILURE_MESSAGE

    async def test_tools_and_selection_sent(self, store, mock_llm, mock_cms):
        store.set_selected_index(1)
        await _turn(store, mock_llm, mock_cms, "tweak it")

        call = mock_llm.chat.await_args
        assert call.kwargs["tools"] == to_tool_definitions()
        assert call.kwargs["tool_choice"] == "auto"
        messages = call.args[0]
        assert messages[0]["content"].startswith('Current block is of type "grid".')
        assert messages[-1] == {"role": "user", "content": "tweak it"}

    async def test_explicit_selection_wins(self, store, mock_llm, mock_cms):
        store.set_selected_index(1)
        await _turn(store, mock_llm, mock_cms, selected_index=0)
        messages = mock_llm.chat.await_args.args[0]
        assert messages[0]["content"].startswith('Current block is of type "hero".')
