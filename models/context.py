"""AI context models — the request-scoped payloads assembled for the LLM.

None of these objects outlives a request: they are built by
``services.block_context``, serialized into a prompt and discarded.

``block_schema`` is exposed as ``schema`` on the wire (``BaseModel.schema``
is reserved on the Python side).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from models.base import CamelModel

BlockIntent = Literal["create", "update", "replace"]


class BlockIntentResult(CamelModel):
    """Outcome of create / update / replace classification."""

    intent: BlockIntent
    reason: str


# ── Single block ─────────────────────────────────────────────


class BlockAIContext(CamelModel):
    """Context for generating a block from its registry definition."""

    block_type: str
    intent: Literal["create", "update"] = "create"
    block_schema: Any = Field(default_factory=dict, alias="schema")
    tokens: dict[str, Any] = Field(default_factory=dict)
    defaults: Any = None
    ai_hints: dict[str, Any] = Field(default_factory=dict)


class BlockUpdateContext(CamelModel):
    """Context for modifying an existing block's data."""

    block_type: str
    intent: Literal["update"] = "update"
    current: Any = None
    block_schema: Any = Field(default_factory=dict, alias="schema")
    tokens: dict[str, Any] = Field(default_factory=dict)
    ai_hints: dict[str, Any] = Field(default_factory=dict)


class CompressedUpdateContext(CamelModel):
    """Update context narrowed to a single dot-path target."""

    block_type: str = "unknown"
    intent: Literal["update"] = "update"
    target: str
    current: Any = Field(default_factory=dict)
    block_schema: Any = Field(default_factory=dict, alias="schema")
    tokens: Any = Field(default_factory=dict)


# ── Page level ───────────────────────────────────────────────


class PageBlockInput(CamelModel):
    block_type: str
    current_data: Any = None


class PageMeta(CamelModel):
    route: str | None = None
    title: str | None = None
    intent: str | None = None
    layout_style: str | None = None


class EnrichedBlockContext(CamelModel):
    block_type: str
    intent: Literal["create", "update"]
    current: Any = None
    block_schema: Any = Field(default_factory=dict, alias="schema")
    defaults: Any = None
    tokens: dict[str, Any] = Field(default_factory=dict)
    ai_hints: dict[str, Any] = Field(default_factory=dict)


class PageAIContext(CamelModel):
    page_intent: str = "create"
    route: str | None = None
    layout_style: str | None = None
    blocks: list[EnrichedBlockContext] = Field(default_factory=list)


class PageUpdateBlock(CamelModel):
    """One block of a page update request; ``target`` narrows the context."""

    block_type: str
    current_data: Any = None
    target: str | None = None


class PageUpdateBlockContext(CamelModel):
    block_type: str
    intent: Literal["update"] = "update"
    target: str | None = None
    current: Any = None
    block_schema: Any = Field(default=None, alias="schema")
    tokens: Any = Field(default_factory=dict)
    ai_hints: Any = None


class PageUpdateContext(CamelModel):
    page_intent: str = "update"
    route: str | None = None
    title: str | None = None
    tokens: Any = Field(default_factory=dict)
    blocks: list[PageUpdateBlockContext] = Field(default_factory=list)


# ── Explanations ─────────────────────────────────────────────


class CanvasContext(CamelModel):
    """Where a block sits on the canvas, for plain-language explanations."""

    total_blocks: int = 0
    block_types: list[str] = Field(default_factory=list)
    current_block_index: int | None = None
    page_title: str | None = None
    page_description: str | None = None
