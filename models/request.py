"""API request / response models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from models.base import CamelModel
from models.blocks import BlockInstance
from models.context import PageMeta, PageUpdateBlock


class IndyGenerateRequest(CamelModel):
    """POST /api/indy/generate — request body.

    ``user_input`` and ``block_type`` are checked by the route so a missing
    field yields the 400 body the editor expects rather than a 422.
    """

    user_input: str | None = None
    block_type: str | None = None
    current_data: Any = None
    tokens: dict[str, Any] | None = None


class GenerateTiming(CamelModel):
    total_ms: int


class IndyGenerateResponse(CamelModel):
    """POST /api/indy/generate — response body."""

    success: bool
    block_data: Any = None
    agent_used: str
    user_input: str
    error: str | None = None
    timing: GenerateTiming


class IndyChatRequest(CamelModel):
    """POST /api/indy/chat — one function-calling turn against a session."""

    session_id: str
    message: str
    selected_index: int | None = None
    page_path: str | None = None


class IndyChatResponse(CamelModel):
    reply: str
    blocks: list[BlockInstance] = Field(default_factory=list)
    selected_index: int | None = None


class PageUpdateContextRequest(CamelModel):
    """POST /api/indy/context/page-update — request body."""

    blocks: list[PageUpdateBlock]
    tokens: dict[str, Any] | None = None
    page_meta: PageMeta | None = None


class CanvasBlocksRequest(CamelModel):
    """PUT /api/canvas/{session_id}/blocks — replace the session's blocks."""

    blocks: list[BlockInstance]


class SelectBlockRequest(CamelModel):
    """POST /api/canvas/{session_id}/select — ``block_id`` wins over ``index``."""

    block_id: str | None = None
    index: int | None = None


class CanvasBlocksResponse(CamelModel):
    session_id: str
    blocks: list[BlockInstance] = Field(default_factory=list)
    selected_block_id: str | None = None
    selected_index: int | None = None
