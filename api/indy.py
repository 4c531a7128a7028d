"""Indy API — block generation, function-calling chat and page context."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from agents.block_agent import run_block_operation
from agents.indy_agent import handle_indy_request
from models.errors import ErrorCode, error_body
from models.request import (
    GenerateTiming,
    IndyChatRequest,
    IndyChatResponse,
    IndyGenerateRequest,
    IndyGenerateResponse,
    PageUpdateContextRequest,
)
from services.block_context import prepare_page_update_context
from services.block_store import get_block_store_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/indy", tags=["indy"])


@router.post("/generate")
async def indy_generate(req: IndyGenerateRequest):
    """Generate or update one block's data.

    The handler (context, create, update, block, page) is picked from the
    wording of ``userInput``; exactly one model call is made at most.
    """
    t0 = time.monotonic()
    if not req.user_input or not req.block_type:
        return JSONResponse(
            status_code=400,
            content=error_body(ErrorCode.INVALID_REQUEST, "userInput and blockType are required"),
        )

    try:
        agent, result = await run_block_operation(
            req.user_input, req.block_type, req.current_data, req.tokens or {}
        )
    except Exception as e:
        logger.exception("Indy generate failed for %s", req.block_type)
        return JSONResponse(
            status_code=500,
            content=error_body(
                ErrorCode.LLM_PROVIDER_ERROR, "Failed to generate block content", str(e)
            ),
        )

    total_ms = round((time.monotonic() - t0) * 1000)
    logger.info("Indy generate via %s finished in %dms", agent.value, total_ms)
    response = IndyGenerateResponse(
        success=result.success,
        block_data=result.block_data,
        agent_used=agent.value,
        user_input=req.user_input,
        error=result.error,
        timing=GenerateTiming(total_ms=total_ms),
    )
    return response.model_dump(by_alias=True)


@router.post("/chat", response_model=IndyChatResponse)
async def indy_chat(req: IndyChatRequest):
    """One function-calling turn against the session's block store.

    The session lock is held for the whole read → model → apply sequence.
    """
    session = get_block_store_registry().get_or_create(req.session_id)
    async with session.lock:
        reply = await handle_indy_request(
            req.message,
            session.store,
            selected_index=req.selected_index,
            page_path=req.page_path,
        )
        session.touch()
        return IndyChatResponse(
            reply=reply,
            blocks=session.store.snapshot(),
            selected_index=session.store.selected_index,
        )


@router.post("/context/page-update")
async def page_update_context(req: PageUpdateContextRequest):
    """Update contexts for every registered block; unknown types are skipped."""
    context = prepare_page_update_context(req.blocks, req.tokens, req.page_meta)
    return context.model_dump(by_alias=True)
