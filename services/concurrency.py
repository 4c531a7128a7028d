"""Concurrency limits for outbound model calls and model-backed endpoints.

``rate_limited_llm_call`` caps concurrent model requests per worker;
``ConcurrencyLimitMiddleware`` answers 503 on the Indy endpoints once the
worker is at capacity instead of queueing.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable, Coroutine

from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

# ── Model call semaphore ─────────────────────────────────────

_MAX_CONCURRENT_LLM = 10
_llm_semaphore: asyncio.Semaphore | None = None


def _get_semaphore() -> asyncio.Semaphore:
    global _llm_semaphore
    if _llm_semaphore is None:
        _llm_semaphore = asyncio.Semaphore(_MAX_CONCURRENT_LLM)
        logger.info("LLM concurrency semaphore initialized (max=%d)", _MAX_CONCURRENT_LLM)
    return _llm_semaphore


async def rate_limited_llm_call(
    func: Callable[..., Coroutine[Any, Any, Any]],
    *args: Any,
    **kwargs: Any,
) -> Any:
    """Await ``func(*args, **kwargs)`` holding a model-call slot."""
    async with _get_semaphore():
        return await func(*args, **kwargs)


# ── Endpoint limit (pure ASGI) ───────────────────────────────

_MAX_CONCURRENT_HEAVY = 15  # per worker
_heavy_semaphore: asyncio.Semaphore | None = None

HEAVY_PATHS = frozenset({
    "/api/indy/generate",
    "/api/indy/chat",
})


def _get_heavy_semaphore() -> asyncio.Semaphore:
    global _heavy_semaphore
    if _heavy_semaphore is None:
        _heavy_semaphore = asyncio.Semaphore(_MAX_CONCURRENT_HEAVY)
        logger.info("Heavy endpoint semaphore initialized (max=%d)", _MAX_CONCURRENT_HEAVY)
    return _heavy_semaphore


class ConcurrencyLimitMiddleware:
    """Reject model-backed requests with 503 + ``Retry-After`` when saturated."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") not in HEAVY_PATHS:
            await self.app(scope, receive, send)
            return

        sem = _get_heavy_semaphore()
        if sem.locked():
            logger.warning("Concurrency limit reached for %s, returning 503", scope["path"])
            body = json.dumps(
                {"detail": "Server busy, too many concurrent requests. Please retry."}
            ).encode()
            await send({
                "type": "http.response.start",
                "status": 503,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"retry-after", b"5"),
                ],
            })
            await send({"type": "http.response.body", "body": body})
            return

        async with sem:
            await self.app(scope, receive, send)
