"""Canvas API — per-session block store state."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from blocks.registry import validate_block_type
from models.errors import ErrorCode, format_error
from models.request import CanvasBlocksRequest, CanvasBlocksResponse, SelectBlockRequest
from services.block_store import BlockSession, get_block_store_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/canvas", tags=["canvas"])


def _response(session: BlockSession) -> CanvasBlocksResponse:
    store = session.store
    return CanvasBlocksResponse(
        session_id=session.session_id,
        blocks=store.snapshot(),
        selected_block_id=store.selected_block_id,
        selected_index=store.selected_index,
    )


@router.get("/{session_id}/blocks", response_model=CanvasBlocksResponse)
async def get_blocks(session_id: str):
    session = get_block_store_registry().get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return _response(session)


@router.put("/{session_id}/blocks", response_model=CanvasBlocksResponse)
async def put_blocks(session_id: str, req: CanvasBlocksRequest):
    """Replace the session's blocks, e.g. after loading a saved entry.

    Every ``blockType`` must be registered; otherwise nothing is replaced.
    """
    unknown = sorted(
        {b.block_type for b in req.blocks if validate_block_type(b.block_type) is None}
    )
    if unknown:
        raise HTTPException(
            status_code=422,
            detail=format_error(
                ErrorCode.BLOCK_NOT_FOUND, f"Unknown block type(s): {', '.join(unknown)}"
            ),
        )

    session = get_block_store_registry().get_or_create(session_id)
    async with session.lock:
        session.store.set_blocks(req.blocks)
        logger.info("Session %s loaded %d blocks", session_id, len(req.blocks))
        return _response(session)


@router.post("/{session_id}/select", response_model=CanvasBlocksResponse)
async def select_block(session_id: str, req: SelectBlockRequest):
    session = get_block_store_registry().get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

    async with session.lock:
        store = session.store
        if req.block_id is not None:
            if store.get_block_index(req.block_id) == -1:
                raise HTTPException(
                    status_code=404,
                    detail=format_error(ErrorCode.BLOCK_NOT_FOUND, f"Block {req.block_id} not found"),
                )
            store.set_selected_block(req.block_id)
        else:
            store.set_selected_index(req.index)
        session.touch()
        return _response(session)
