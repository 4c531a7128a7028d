"""Tests for services/concurrency.py and services/middleware.py."""

import asyncio
import logging
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from main import app
from services.concurrency import HEAVY_PATHS, rate_limited_llm_call
from services.middleware import RequestIdFilter, request_id_var


@pytest.mark.asyncio
async def test_rate_limited_call_passes_through():
    func = AsyncMock(return_value="ok")
    assert await rate_limited_llm_call(func, 1, model="m") == "ok"
    func.assert_awaited_once_with(1, model="m")


@pytest.mark.asyncio
async def test_heavy_endpoint_rejected_when_saturated():
    with patch("services.concurrency._get_heavy_semaphore", return_value=asyncio.Semaphore(0)):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post(
                "/api/indy/generate", json={"userInput": "x", "blockType": "hero"}
            )
            health = await client.get("/api/health")

    assert resp.status_code == 503
    assert resp.headers["retry-after"] == "5"
    assert "Server busy" in resp.json()["detail"]
    assert health.status_code == 200


def test_heavy_paths():
    assert HEAVY_PATHS == {"/api/indy/generate", "/api/indy/chat"}


def test_request_id_filter():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    token = request_id_var.set("req-42")
    try:
        assert RequestIdFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == "req-42"


def test_request_id_filter_default():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    RequestIdFilter().filter(record)
    assert record.request_id == "-"
