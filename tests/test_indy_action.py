"""Tests for agents/indy_action.py — run_indy_action and apply_indy_action."""

import json

import httpx
import pytest

from agents.indy_action import BLOCK_TYPE_REQUIRED_MESSAGE, apply_indy_action, run_indy_action
from models.indy import IndyAction, IndyActionType


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url="http://indy.test", transport=httpx.MockTransport(handler))


def _generate_ok(block_data, agent="updateAgent"):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "success": True,
            "blockData": block_data,
            "agentUsed": agent,
            "userInput": captured["body"]["userInput"],
            "timing": {"totalMs": 12},
        })

    return handler, captured


# ── run_indy_action ──────────────────────────────────────────


class TestRunIndyAction:
    async def test_requires_block_type(self):
        result = await run_indy_action("make a hero", context={"blocks": []})
        assert not result.success
        assert result.error == BLOCK_TYPE_REQUIRED_MESSAGE

    async def test_property_fast_path(self, hero_data):
        context = {"blocks": [{"blockType": "hero", "props": hero_data, "id": "hero-1"}]}
        result = await run_indy_action("make this full width", "hero", context)

        assert result.success
        assert result.agent_used == "propertyAgent"
        assert result.action.type is IndyActionType.PROPERTY_UPDATE
        assert result.action.block_id == "hero-1"
        assert result.block_data["layout"]["blockSettings"]["blockWidth"] is True
        assert result.message == "✅ Updated block width to true"

    async def test_update_existing_block(self, hero_data):
        new_data = {"elements": {"title": {"content": "Hi"}}}
        handler, captured = _generate_ok(new_data)
        context = {"blocks": [{"blockType": "hero", "props": hero_data, "id": "hero-1"}],
                   "tokens": {"colors": ["blue"]}}
        async with _client(handler) as http:
            result = await run_indy_action("change the title to Hi", context=context, http=http)

        assert captured["path"] == "/api/indy/generate"
        assert captured["body"] == {
            "userInput": "change the title to Hi",
            "blockType": "hero",
            "currentData": hero_data,
            "tokens": {"colors": ["blue"]},
        }
        assert result.success
        assert result.action.type is IndyActionType.UPDATE_BLOCK
        assert result.action.block_id == "hero-1"
        assert result.action.data == new_data
        assert result.agent_used == "updateAgent"
        assert result.execution_time is not None

    async def test_declined_property_intent_falls_through(self, hero_data):
        # text alignment is already "center", so the local agent declines
        handler, captured = _generate_ok(hero_data)
        context = {"blocks": [{"blockType": "hero", "props": hero_data, "id": "hero-1"}]}
        async with _client(handler) as http:
            result = await run_indy_action("center align", "hero", context, http=http)

        assert captured["body"]["userInput"] == "center align"
        assert result.action.type is IndyActionType.UPDATE_BLOCK

    async def test_add_when_block_not_on_page(self):
        handler, captured = _generate_ok({"elements": {}}, agent="createAgent")
        async with _client(handler) as http:
            result = await run_indy_action("create a hero", "hero", {"blocks": []}, http=http)

        assert captured["body"]["currentData"] is None
        assert result.action.type is IndyActionType.ADD_BLOCK
        assert result.action.block_id.startswith("block-")
        assert result.agent_used == "createAgent"

    async def test_http_error_detail(self):
        def handler(request):
            return httpx.Response(400, json={"error": "userInput and blockType are required"})

        async with _client(handler) as http:
            result = await run_indy_action("x", "hero", http=http)
        assert not result.success
        assert result.error == "userInput and blockType are required"

    async def test_http_error_without_body(self):
        async with _client(lambda request: httpx.Response(502, text="bad gateway")) as http:
            result = await run_indy_action("x", "hero", http=http)
        assert result.error == "Request failed: 502"

    async def test_unsuccessful_reply(self):
        handler = lambda request: httpx.Response(200, json={"success": False})  # noqa: E731
        async with _client(handler) as http:
            result = await run_indy_action("x", "hero", http=http)
        assert not result.success
        assert result.error == "Failed to generate content"

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        async with _client(handler) as http:
            result = await run_indy_action("x", "hero", http=http)
        assert not result.success
        assert "connection refused" in result.error


# ── apply_indy_action ────────────────────────────────────────


class TestApplyIndyAction:
    def test_add(self, store):
        action = IndyAction(type=IndyActionType.ADD_BLOCK, block_type="hero", data={}, block_id="new-1")
        assert apply_indy_action(action, store)
        assert store.blocks[-1].id == "new-1"
        assert action.consumed

    def test_applied_only_once(self, store):
        action = IndyAction(type=IndyActionType.ADD_BLOCK, block_type="hero", data={})
        assert apply_indy_action(action, store)
        assert not apply_indy_action(action, store)
        assert len(store) == 3

    def test_update(self, store):
        action = IndyAction(type=IndyActionType.UPDATE_BLOCK, block_id="grid-1", data={"columns": 2})
        assert apply_indy_action(action, store)
        assert store.blocks[1].block_data == {"columns": 2}

    def test_property_update_unknown_block(self, store):
        action = IndyAction(type=IndyActionType.PROPERTY_UPDATE, block_id="missing", data={})
        assert not apply_indy_action(action, store)
        assert not action.consumed

    def test_remove(self, store):
        action = IndyAction(type=IndyActionType.REMOVE_BLOCK, block_id="hero-1")
        assert apply_indy_action(action, store)
        assert [b.id for b in store.blocks] == ["grid-1"]

    @pytest.mark.parametrize(
        "action",
        [
            IndyAction(type=IndyActionType.ADD_BLOCK, data={}),
            IndyAction(type=IndyActionType.UPDATE_BLOCK, data={}),
            IndyAction(type=IndyActionType.REPLACE_BLOCK, block_id="hero-1"),
            IndyAction(type=IndyActionType.REMOVE_BLOCK),
        ],
    )
    def test_incomplete_actions_rejected(self, store, action):
        before = store.to_payload()
        assert not apply_indy_action(action, store)
        assert store.to_payload() == before
